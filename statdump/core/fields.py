#!/usr/bin/env python3
"""
Field registries for the three dump domains.

Each domain owns a closed enumeration of reportable fields. The enumeration value
is the token users type on the command line; lookups are case-insensitive and
never fuzzy. A token valid for one domain says nothing about another domain.
"""

from enum import Enum, unique
from typing import Dict, FrozenSet, List, Type

from .errors import UnknownField


class Domain(Enum):
    """Entity kind a dump reports on"""
    SYSTEM = 'system'
    PROCESS = 'process'
    CGROUP = 'cgroup'


class FieldKind(Enum):
    """How a field's values compare when rows are sorted"""
    TEXT = 'text'
    NUMERIC = 'numeric'


class FieldTag(Enum):
    """Base for the per-domain field enumerations"""

    @property
    def token(self) -> str:
        return self.value

    @property
    def domain(self) -> Domain:
        return field_domain(self)

    @property
    def kind(self) -> FieldKind:
        return field_kind(self)

    def __str__(self) -> str:
        return self.value


@unique
class SysField(FieldTag):
    TIMESTAMP = 'timestamp'
    DATETIME = 'datetime'
    HOSTNAME = 'hostname'
    CPU_USAGE_PCT = 'cpu_usage'
    CPU_USER_PCT = 'cpu_user'
    CPU_SYSTEM_PCT = 'cpu_system'
    MEM_TOTAL = 'mem_total'
    MEM_FREE = 'mem_free'
    MEM_ANON = 'mem_anon'
    MEM_FILE = 'mem_file'
    HP_TOTAL = 'huge_page_total'
    HP_FREE = 'huge_page_free'
    IO_READ = 'io_read'
    IO_WRITE = 'io_write'


@unique
class ProcField(FieldTag):
    TIMESTAMP = 'timestamp'
    DATETIME = 'datetime'
    PID = 'pid'
    PPID = 'ppid'
    COMM = 'comm'
    STATE = 'state'
    UPTIME = 'uptime'
    CGROUP = 'cgroup'
    CPU_USER_PCT = 'cpu_user'
    CPU_SYS_PCT = 'cpu_sys'
    CPU_NUM_THREADS = 'cpu_threads'
    CPU_TOTAL_PCT = 'cpu_total'
    MEM_RSS_BYTES = 'mem_rss'
    MEM_MINOR = 'mem_minorfaults'
    MEM_MAJOR = 'mem_majorfaults'
    IO_READ = 'io_read'
    IO_WRITE = 'io_write'
    IO_TOTAL = 'io_total'


@unique
class CgroupField(FieldTag):
    TIMESTAMP = 'timestamp'
    DATETIME = 'datetime'
    NAME = 'name'
    FULL_PATH = 'full_path'
    # cpu
    CPU_USAGE = 'cpu_usage'
    CPU_USER = 'cpu_user'
    CPU_SYSTEM = 'cpu_system'
    CPU_NR_PERIODS = 'cpu_nr_periods'
    CPU_NR_THROTTLED = 'cpu_nr_throttled'
    CPU_THROTTLED = 'cpu_throttled'
    # memory
    MEM_TOTAL = 'mem_total'
    MEM_SWAP = 'mem_swap'
    MEM_ANON = 'mem_anon'
    MEM_FILE = 'mem_file'
    MEM_KERNEL = 'mem_kernel'
    MEM_SLAB = 'mem_slab'
    MEM_SOCK = 'mem_sock'
    MEM_SHMEM = 'mem_shmem'
    MEM_FILE_MAPPED = 'mem_file_mapped'
    MEM_FILE_DIRTY = 'mem_file_dirty'
    MEM_FILE_WRITEBACK = 'mem_file_writeback'
    MEM_ANON_THP = 'mem_anon_thp'
    MEM_INACTIVE_ANON = 'mem_inactive_anon'
    MEM_ACTIVE_ANON = 'mem_active_anon'
    MEM_INACTIVE_FILE = 'mem_inactive_file'
    MEM_ACTIVE_FILE = 'mem_active_file'
    MEM_UNEVICTABLE = 'mem_unevictable'
    MEM_SLAB_RECLAIMABLE = 'mem_slab_reclaimable'
    MEM_SLAB_UNRECLAIMABLE = 'mem_slab_unreclaimable'
    MEM_PGFAULT = 'mem_pgfault'
    MEM_PGMAJFAULT = 'mem_pgmajfault'
    MEM_WORKINGSET_REFAULT = 'mem_workingset_refault'
    MEM_WORKINGSET_ACTIVATE = 'mem_workingset_activate'
    MEM_WORKINGSET_NODERECLAIM = 'mem_workingset_nodereclaim'
    MEM_PGREFILL = 'mem_pgrefill'
    MEM_PGSCAN = 'mem_pgscan'
    MEM_PGSTEAL = 'mem_pgsteal'
    MEM_PGACTIVATE = 'mem_pgactivate'
    MEM_PGDEACTIVATE = 'mem_pgdeactivate'
    MEM_PGLAZYFREE = 'mem_pglazyfree'
    MEM_PGLAZYFREED = 'mem_pglazyfreed'
    MEM_THP_FAULT_ALLOC = 'mem_thp_fault_alloc'
    MEM_THP_COLLAPSE_ALLOC = 'mem_thp_collapse_alloc'
    # io
    IO_READ = 'io_read'
    IO_WRITE = 'io_write'
    IO_RIOPS = 'io_rios'
    IO_WIOPS = 'io_wios'
    IO_DBPS = 'io_dbps'
    IO_DIOPS = 'io_diops'
    IO_TOTAL = 'io_total'
    # pressure
    PRESSURE_CPU_SOME = 'pressure_cpu_some'
    PRESSURE_IO_SOME = 'pressure_io_some'
    PRESSURE_IO_FULL = 'pressure_io_full'
    PRESSURE_MEM_SOME = 'pressure_mem_some'
    PRESSURE_MEM_FULL = 'pressure_mem_full'


DOMAIN_FIELDS: Dict[Domain, Type[FieldTag]] = {
    Domain.SYSTEM: SysField,
    Domain.PROCESS: ProcField,
    Domain.CGROUP: CgroupField,
}

_FIELD_DOMAINS: Dict[Type[FieldTag], Domain] = {
    cls: domain for domain, cls in DOMAIN_FIELDS.items()
}

# Everything not listed here is numeric
TEXT_FIELDS: FrozenSet[FieldTag] = frozenset({
    SysField.DATETIME,
    SysField.HOSTNAME,
    ProcField.DATETIME,
    ProcField.COMM,
    ProcField.STATE,
    ProcField.CGROUP,
    CgroupField.DATETIME,
    CgroupField.NAME,
    CgroupField.FULL_PATH,
})

# token (lowercase) -> tag, built once per domain
REGISTRIES: Dict[Domain, Dict[str, FieldTag]] = {
    domain: {tag.value: tag for tag in cls}
    for domain, cls in DOMAIN_FIELDS.items()
}


def resolve(domain: Domain, token: str) -> FieldTag:
    """
    Resolve a user token to a field of the given domain.

    Args:
        domain: Domain whose registry is consulted
        token: Field name as typed by the user, any case

    Returns:
        The matching field tag

    Raises:
        UnknownField: token is not in the domain's registry
    """
    tag = REGISTRIES[domain].get(token.lower())
    if tag is None:
        raise UnknownField(token, domain)
    return tag


def all_fields(domain: Domain) -> List[FieldTag]:
    """Every field of the domain in canonical (declaration) order"""
    return list(DOMAIN_FIELDS[domain])


def field_domain(tag: FieldTag) -> Domain:
    return _FIELD_DOMAINS[type(tag)]


def field_kind(tag: FieldTag) -> FieldKind:
    return FieldKind.TEXT if tag in TEXT_FIELDS else FieldKind.NUMERIC


def parse_domain(name: str) -> Domain:
    """Map a subcommand name like 'process' to its Domain"""
    try:
        return Domain(name.lower())
    except ValueError:
        raise ValueError(f"Unknown domain: {name}") from None
