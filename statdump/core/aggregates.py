#!/usr/bin/env python3
"""
Aggregate field groups ("cpu", "mem", "io", "pressure") per domain.

A group expands to a hand-picked, ordered list of fields. The detailed expansion
is always the base list followed by extra fields, so --detail only ever appends
columns.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

from .errors import UnknownGroup
from .fields import CgroupField, Domain, FieldTag, ProcField, SysField


@dataclass(frozen=True)
class GroupExpansion:
    """Base fields of a group plus the fields --detail adds"""
    base: Tuple[FieldTag, ...]
    extra: Tuple[FieldTag, ...] = ()

    def fields(self, detail: bool = False) -> List[FieldTag]:
        if detail:
            return list(self.base + self.extra)
        return list(self.base)


GROUPS: Dict[Domain, Dict[str, GroupExpansion]] = {
    Domain.SYSTEM: {
        'cpu': GroupExpansion(
            base=(SysField.CPU_USAGE_PCT, SysField.CPU_USER_PCT, SysField.CPU_SYSTEM_PCT),
        ),
        'mem': GroupExpansion(
            base=(SysField.MEM_TOTAL, SysField.MEM_FREE),
            extra=(SysField.MEM_ANON, SysField.MEM_FILE, SysField.HP_TOTAL, SysField.HP_FREE),
        ),
        'io': GroupExpansion(
            base=(SysField.IO_READ, SysField.IO_WRITE),
        ),
    },
    Domain.PROCESS: {
        'cpu': GroupExpansion(
            base=(ProcField.CPU_TOTAL_PCT,),
            extra=(ProcField.CPU_USER_PCT, ProcField.CPU_SYS_PCT, ProcField.CPU_NUM_THREADS),
        ),
        'mem': GroupExpansion(
            base=(ProcField.MEM_RSS_BYTES,),
            extra=(ProcField.MEM_MINOR, ProcField.MEM_MAJOR),
        ),
        'io': GroupExpansion(
            base=(ProcField.IO_READ, ProcField.IO_WRITE),
            extra=(ProcField.IO_TOTAL,),
        ),
    },
    Domain.CGROUP: {
        'cpu': GroupExpansion(
            base=(CgroupField.CPU_USAGE,),
            extra=(
                CgroupField.CPU_USER,
                CgroupField.CPU_SYSTEM,
                CgroupField.CPU_NR_PERIODS,
                CgroupField.CPU_NR_THROTTLED,
                CgroupField.CPU_THROTTLED,
            ),
        ),
        'mem': GroupExpansion(
            base=(CgroupField.MEM_TOTAL,),
            extra=(
                CgroupField.MEM_SWAP,
                CgroupField.MEM_ANON,
                CgroupField.MEM_FILE,
                CgroupField.MEM_KERNEL,
                CgroupField.MEM_SLAB,
                CgroupField.MEM_SOCK,
                CgroupField.MEM_SHMEM,
                CgroupField.MEM_FILE_MAPPED,
                CgroupField.MEM_FILE_DIRTY,
                CgroupField.MEM_FILE_WRITEBACK,
                CgroupField.MEM_ANON_THP,
                CgroupField.MEM_INACTIVE_ANON,
                CgroupField.MEM_ACTIVE_ANON,
                CgroupField.MEM_INACTIVE_FILE,
                CgroupField.MEM_ACTIVE_FILE,
                CgroupField.MEM_UNEVICTABLE,
                CgroupField.MEM_SLAB_RECLAIMABLE,
                CgroupField.MEM_SLAB_UNRECLAIMABLE,
                CgroupField.MEM_PGFAULT,
                CgroupField.MEM_PGMAJFAULT,
                CgroupField.MEM_WORKINGSET_REFAULT,
                CgroupField.MEM_WORKINGSET_ACTIVATE,
                CgroupField.MEM_WORKINGSET_NODERECLAIM,
                CgroupField.MEM_PGREFILL,
                CgroupField.MEM_PGSCAN,
                CgroupField.MEM_PGSTEAL,
                CgroupField.MEM_PGACTIVATE,
                CgroupField.MEM_PGDEACTIVATE,
                CgroupField.MEM_PGLAZYFREE,
                CgroupField.MEM_PGLAZYFREED,
                CgroupField.MEM_THP_FAULT_ALLOC,
                CgroupField.MEM_THP_COLLAPSE_ALLOC,
            ),
        ),
        'io': GroupExpansion(
            base=(CgroupField.IO_READ, CgroupField.IO_WRITE),
            extra=(
                CgroupField.IO_RIOPS,
                CgroupField.IO_WIOPS,
                CgroupField.IO_DBPS,
                CgroupField.IO_DIOPS,
                CgroupField.IO_TOTAL,
            ),
        ),
        'pressure': GroupExpansion(
            base=(
                CgroupField.PRESSURE_CPU_SOME,
                CgroupField.PRESSURE_MEM_FULL,
                CgroupField.PRESSURE_IO_FULL,
            ),
            extra=(CgroupField.PRESSURE_IO_SOME, CgroupField.PRESSURE_MEM_SOME),
        ),
    },
}

# --default layout: plain fields and group names, expanded in this order
DEFAULT_LAYOUT: Dict[Domain, Tuple[Union[FieldTag, str], ...]] = {
    Domain.SYSTEM: (
        SysField.TIMESTAMP, SysField.DATETIME, SysField.HOSTNAME,
        'cpu', 'mem', 'io',
    ),
    Domain.PROCESS: (
        ProcField.TIMESTAMP, ProcField.DATETIME, ProcField.PID, ProcField.COMM,
        'cpu', 'mem', 'io',
    ),
    Domain.CGROUP: (
        CgroupField.TIMESTAMP, CgroupField.DATETIME, CgroupField.NAME,
        'cpu', 'mem', 'io', 'pressure',
    ),
}


def is_group(domain: Domain, token: str) -> bool:
    return token.lower() in GROUPS[domain]


def groups(domain: Domain) -> List[str]:
    """Group names recognized for the domain, in declaration order"""
    return list(GROUPS[domain])


def expand(domain: Domain, group_name: str, detail: bool = False) -> List[FieldTag]:
    """
    Expand an aggregate group into its fields.

    Args:
        domain: Domain the group belongs to
        group_name: Group token, any case
        detail: Include the detail-only fields after the base ones

    Returns:
        Ordered list of field tags

    Raises:
        UnknownGroup: group_name is not a group of this domain
    """
    expansion = GROUPS[domain].get(group_name.lower())
    if expansion is None:
        raise UnknownGroup(group_name, domain)
    return expansion.fields(detail)


def default_fields(domain: Domain, detail: bool = False) -> List[FieldTag]:
    """Field list used by --default"""
    fields: List[FieldTag] = []
    for entry in DEFAULT_LAYOUT[domain]:
        if isinstance(entry, str):
            fields.extend(expand(domain, entry, detail))
        else:
            fields.append(entry)
    return fields


def group_membership(domain: Domain) -> Dict[FieldTag, List[Tuple[str, bool]]]:
    """
    Map each field to the groups that include it.

    Returns:
        {field: [(group_name, detail_only), ...]} for fields in at least one group
    """
    membership: Dict[FieldTag, List[Tuple[str, bool]]] = {}
    for name, expansion in GROUPS[domain].items():
        for tag in expansion.base:
            membership.setdefault(tag, []).append((name, False))
        for tag in expansion.extra:
            membership.setdefault(tag, []).append((name, True))
    return membership
