#!/usr/bin/env python3
"""
Core module for statdump - field registries, field list resolution, query option
validation and the command specification handed to downstream stages.
"""

from .errors import (
    DumpSpecError,
    UnknownField,
    UnknownGroup,
    ConflictingSortDirection,
    NotApplicableForDomain,
    MissingSelectField,
    FieldDomainMismatch,
    InvalidOptionValue,
    SinkUnavailable,
)
from .fields import (
    Domain,
    FieldKind,
    FieldTag,
    SysField,
    ProcField,
    CgroupField,
    resolve,
    all_fields,
    field_domain,
    parse_domain,
)
from .aggregates import expand, groups, default_fields
from .field_resolver import FieldFlags, resolve_fields
from .query_options import OutputFormat, SortOrder, RawQueryOptions, QueryOptions, validate_options
from .command_spec import CommandSpec, DumpCollector, build_command_spec, compile_command
from .row_selector import RowSelector
from .sink import open_sink
from .formatters import CatalogFormatter

__all__ = [
    'DumpSpecError',
    'UnknownField',
    'UnknownGroup',
    'ConflictingSortDirection',
    'NotApplicableForDomain',
    'MissingSelectField',
    'FieldDomainMismatch',
    'InvalidOptionValue',
    'SinkUnavailable',
    'Domain',
    'FieldKind',
    'FieldTag',
    'SysField',
    'ProcField',
    'CgroupField',
    'resolve',
    'all_fields',
    'field_domain',
    'parse_domain',
    'expand',
    'groups',
    'default_fields',
    'FieldFlags',
    'resolve_fields',
    'OutputFormat',
    'SortOrder',
    'RawQueryOptions',
    'QueryOptions',
    'validate_options',
    'CommandSpec',
    'DumpCollector',
    'build_command_spec',
    'compile_command',
    'RowSelector',
    'open_sink',
    'CatalogFormatter',
]
