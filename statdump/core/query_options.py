#!/usr/bin/env python3
"""
Validation of the dump query options: time window, filter, sort, top, output.

validate_options() turns the raw user values into an immutable QueryOptions, or
raises the DumpSpecError naming the first offending option.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Pattern
import logging
import os
import re

from .errors import (
    ConflictingSortDirection,
    InvalidOptionValue,
    MissingSelectField,
    NotApplicableForDomain,
)
from .fields import Domain, FieldTag
from .time_utils import TimeWindow, parse_time_spec

logger = logging.getLogger('statdump.options')

# Environment fallbacks used when the flag is not given
ENV_OUTPUT_FORMAT = 'STATDUMP_OUTPUT_FORMAT'
ENV_OUTPUT = 'STATDUMP_OUTPUT'


class OutputFormat(Enum):
    RAW = 'raw'
    CSV = 'csv'
    JSON = 'json'
    KEY_VALUE = 'kv'

    @classmethod
    def parse(cls, token: str) -> 'OutputFormat':
        """Case-insensitive lookup of an -O value"""
        try:
            return cls(token.lower())
        except ValueError:
            choices = ', '.join(fmt.value for fmt in cls)
            raise InvalidOptionValue('output-format', token, f"choose from {choices}") from None


class SortOrder(Enum):
    NONE = 'none'
    ASCENDING = 'asc'
    DESCENDING = 'desc'


@dataclass
class RawQueryOptions:
    """Option values as the user supplied them, before validation"""
    begin: Optional[str] = None
    end: Optional[str] = None
    filter: Optional[str] = None
    sort: bool = False
    rsort: bool = False
    top: int = 0
    repeat_title: Optional[int] = None
    output_format: Optional[str] = None
    output: Optional[str] = None
    detail: bool = False
    default: bool = False
    everything: bool = False


@dataclass(frozen=True)
class QueryOptions:
    """Validated, normalized dump options"""
    begin: str
    window: TimeWindow
    end: Optional[str] = None
    filter: Optional[Pattern] = None
    sort_order: SortOrder = SortOrder.NONE
    top: int = 0
    repeat_title: Optional[int] = None
    output_format: OutputFormat = OutputFormat.RAW
    output: Optional[str] = None
    detail: bool = False
    default: bool = False
    everything: bool = False

    @property
    def begin_time(self) -> datetime:
        return self.window.begin

    @property
    def end_time(self) -> Optional[datetime]:
        return self.window.end

    @property
    def effective_repeat_title(self) -> Optional[int]:
        """Title repeat interval; only raw output repeats titles"""
        if self.output_format is OutputFormat.RAW:
            return self.repeat_title
        return None

    @property
    def selects_rows(self) -> bool:
        """True when filter, sort or top narrows or reorders rows"""
        return (self.filter is not None
                or self.sort_order is not SortOrder.NONE
                or self.top > 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'begin': self.begin,
            'end': self.end,
            'begin_time': self.begin_time.isoformat(),
            'end_time': self.end_time.isoformat() if self.end_time else None,
            'filter': self.filter.pattern if self.filter is not None else None,
            'sort': self.sort_order.value,
            'top': self.top,
            'repeat_title': self.effective_repeat_title,
            'output_format': self.output_format.value,
            'output': self.output or '-',
            'detail': self.detail,
            'default': self.default,
            'everything': self.everything,
        }


def _parse_time(option: str, value: str, reference: datetime) -> datetime:
    try:
        return parse_time_spec(value, now=reference).timestamp
    except ValueError as e:
        raise InvalidOptionValue(option, value, str(e)) from e


def _row_options_in_use(raw: RawQueryOptions):
    """Yield the names of row-scoped options that are set"""
    if raw.filter is not None:
        yield 'filter'
    if raw.sort:
        yield 'sort'
    if raw.rsort:
        yield 'rsort'
    if raw.top is not None and raw.top > 0:
        yield 'top'


def validate_options(raw: RawQueryOptions,
                     domain: Domain,
                     select: Optional[FieldTag] = None,
                     now: Optional[datetime] = None) -> QueryOptions:
    """
    Validate raw options for a dump of the given domain.

    Args:
        raw: User-supplied option values
        domain: Domain being dumped
        select: Field chosen with --select, if any
        now: Reference time for relative --begin/--end values

    Returns:
        Immutable QueryOptions

    Raises:
        InvalidOptionValue: missing begin, unparseable time, bad regex, bad numbers
            or unknown output format
        ConflictingSortDirection: both sort and rsort were set
        NotApplicableForDomain: filter/sort/rsort/top on a system dump
        MissingSelectField: filter/sort/rsort/top without --select
    """
    if not raw.begin:
        raise InvalidOptionValue('begin', raw.begin, "a begin time is required")

    if raw.sort and raw.rsort:
        raise ConflictingSortDirection()

    if raw.top is None or raw.top < 0:
        raise InvalidOptionValue('top', raw.top, "must be 0 (unlimited) or a positive count")

    for option in _row_options_in_use(raw):
        if domain is Domain.SYSTEM:
            raise NotApplicableForDomain(option, domain)
        if select is None:
            raise MissingSelectField(option, domain)

    # begin and end share one reference so relative values line up
    reference = (now or datetime.now()).replace(microsecond=0)
    begin_time = _parse_time('begin', raw.begin, reference)
    end_time = _parse_time('end', raw.end, reference) if raw.end else None
    if end_time is not None and end_time < begin_time:
        raise InvalidOptionValue('end', raw.end, f"earlier than begin time {begin_time}")
    window = TimeWindow(begin_time, end_time)

    pattern = None
    if raw.filter is not None:
        try:
            pattern = re.compile(raw.filter)
        except re.error as e:
            raise InvalidOptionValue('filter', raw.filter, str(e)) from e

    if raw.repeat_title is not None and raw.repeat_title < 1:
        raise InvalidOptionValue('repeat-title', raw.repeat_title, "must be a positive line count")

    format_token = raw.output_format or os.environ.get(ENV_OUTPUT_FORMAT)
    output_format = OutputFormat.parse(format_token) if format_token else OutputFormat.RAW
    output = raw.output or os.environ.get(ENV_OUTPUT) or None

    if raw.rsort:
        sort_order = SortOrder.DESCENDING
    elif raw.sort:
        sort_order = SortOrder.ASCENDING
    else:
        sort_order = SortOrder.NONE

    options = QueryOptions(
        begin=raw.begin,
        window=window,
        end=raw.end,
        filter=pattern,
        sort_order=sort_order,
        top=raw.top,
        repeat_title=raw.repeat_title,
        output_format=output_format,
        output=output,
        detail=raw.detail,
        default=raw.default,
        everything=raw.everything,
    )
    logger.debug(f"{domain.value} options: {options.to_dict()}")
    return options
