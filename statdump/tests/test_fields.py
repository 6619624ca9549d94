#!/usr/bin/env python3
"""
Tests for the per-domain field registries.
"""

import unittest

from statdump.core.aggregates import GROUPS
from statdump.core.errors import UnknownField
from statdump.core.fields import (
    DOMAIN_FIELDS,
    REGISTRIES,
    CgroupField,
    Domain,
    FieldKind,
    ProcField,
    SysField,
    all_fields,
    field_domain,
    parse_domain,
    resolve,
)


class TestRegistry(unittest.TestCase):
    """Token -> field lookups"""

    def test_every_token_resolves_in_any_case(self):
        for domain, registry in REGISTRIES.items():
            for token, tag in registry.items():
                with self.subTest(domain=domain, token=token):
                    self.assertIs(resolve(domain, token), tag)
                    self.assertIs(resolve(domain, token.upper()), tag)
                    self.assertIs(resolve(domain, token.title()), tag)

    def test_every_field_is_reachable_from_a_token(self):
        for domain, cls in DOMAIN_FIELDS.items():
            reachable = set(REGISTRIES[domain].values())
            self.assertEqual(reachable, set(cls))

    def test_known_tokens(self):
        self.assertIs(resolve(Domain.PROCESS, 'comm'), ProcField.COMM)
        self.assertIs(resolve(Domain.PROCESS, 'mem_rss'), ProcField.MEM_RSS_BYTES)
        self.assertIs(resolve(Domain.PROCESS, 'cpu_total'), ProcField.CPU_TOTAL_PCT)
        self.assertIs(resolve(Domain.CGROUP, 'CPU_USAGE'), CgroupField.CPU_USAGE)
        self.assertIs(resolve(Domain.SYSTEM, 'huge_page_free'), SysField.HP_FREE)

    def test_unknown_token_names_token_and_domain(self):
        with self.assertRaises(UnknownField) as ctx:
            resolve(Domain.SYSTEM, 'Bogus_Field')
        self.assertEqual(ctx.exception.token, 'Bogus_Field')
        self.assertIs(ctx.exception.domain, Domain.SYSTEM)
        self.assertIn('Bogus_Field', str(ctx.exception))
        self.assertIn('system', str(ctx.exception))

    def test_no_partial_or_padded_matches(self):
        for token in ('cpu_tot', 'pid ', ' pid', 'pidx'):
            with self.subTest(token=token):
                with self.assertRaises(UnknownField):
                    resolve(Domain.PROCESS, token)

    def test_registries_are_per_domain(self):
        # valid for process and cgroup, not for system
        with self.assertRaises(UnknownField):
            resolve(Domain.SYSTEM, 'pid')
        with self.assertRaises(UnknownField):
            resolve(Domain.CGROUP, 'comm')
        with self.assertRaises(UnknownField):
            resolve(Domain.PROCESS, 'pressure_io_full')

    def test_same_token_gives_distinct_tags_per_domain(self):
        sys_tag = resolve(Domain.SYSTEM, 'io_read')
        proc_tag = resolve(Domain.PROCESS, 'io_read')
        self.assertNotEqual(sys_tag, proc_tag)
        self.assertEqual(len({sys_tag, proc_tag}), 2)

    def test_group_names_are_not_field_tokens(self):
        for domain, group_table in GROUPS.items():
            for name in group_table:
                with self.subTest(domain=domain, group=name):
                    self.assertNotIn(name, REGISTRIES[domain])


class TestFieldMetadata(unittest.TestCase):

    def test_all_fields_canonical_order(self):
        fields = all_fields(Domain.SYSTEM)
        self.assertEqual(fields[:3], [SysField.TIMESTAMP, SysField.DATETIME, SysField.HOSTNAME])
        self.assertEqual(fields[-1], SysField.IO_WRITE)
        self.assertEqual(len(fields), 14)
        self.assertEqual(len(all_fields(Domain.PROCESS)), 18)
        self.assertEqual(len(all_fields(Domain.CGROUP)), 55)

    def test_field_domain(self):
        self.assertIs(field_domain(SysField.MEM_FREE), Domain.SYSTEM)
        self.assertIs(ProcField.PID.domain, Domain.PROCESS)
        self.assertIs(CgroupField.NAME.domain, Domain.CGROUP)

    def test_field_kind(self):
        self.assertIs(ProcField.COMM.kind, FieldKind.TEXT)
        self.assertIs(CgroupField.FULL_PATH.kind, FieldKind.TEXT)
        self.assertIs(ProcField.CPU_TOTAL_PCT.kind, FieldKind.NUMERIC)
        self.assertIs(SysField.TIMESTAMP.kind, FieldKind.NUMERIC)

    def test_token_and_str(self):
        self.assertEqual(ProcField.IO_TOTAL.token, 'io_total')
        self.assertEqual(str(CgroupField.MEM_SHMEM), 'mem_shmem')

    def test_parse_domain(self):
        self.assertIs(parse_domain('Process'), Domain.PROCESS)
        with self.assertRaises(ValueError):
            parse_domain('network')


if __name__ == '__main__':
    unittest.main()
