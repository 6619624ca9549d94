#!/usr/bin/env python3
"""
Time handling for dump time windows.
Parses --begin/--end values into datetimes and formats windows for display.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Tuple
import re


@dataclass(frozen=True)
class TimeParseResult:
    """Result of parsing a time specification."""
    timestamp: datetime
    is_relative: bool
    has_explicit_sign: bool


@dataclass(frozen=True)
class TimeWindow:
    """Resolved begin/end of a dump; end is None for 'up to the newest sample'"""
    begin: datetime
    end: Optional[datetime] = None

    def describe(self) -> str:
        return format_time_range(self.begin, self.end)


_OFFSET_RE = re.compile(r'([+\-]?\d+(?:\.\d*)?)([a-z]+)')

_UNIT_SECONDS = {}
for _names, _seconds in (
    (('ms', 'msec', 'millisecond', 'milliseconds'), 0.001),
    (('s', 'sec', 'secs', 'second', 'seconds'), 1.0),
    (('m', 'min', 'mins', 'minute', 'minutes'), 60.0),
    (('h', 'hr', 'hrs', 'hour', 'hours'), 3600.0),
    (('d', 'day', 'days'), 86400.0),
):
    for _name in _names:
        _UNIT_SECONDS[_name] = _seconds

# Absolute formats tried after ISO-8601
_DATE_FORMATS = ('%Y-%m-%d %H:%M:%S', '%Y-%m-%d %H:%M', '%Y-%m-%d')
_TIME_OF_DAY_FORMATS = ('%H:%M:%S', '%H:%M')


def _parse_offset(spec: str) -> Optional[Tuple[timedelta, bool]]:
    """Parse offsets like '5min', '-2h30m' or '10 min ago'; None if not an offset."""
    text = spec.strip().lower()
    ago = text.endswith('ago')
    if ago:
        text = text[:-3]
    text = text.replace(' ', '')
    if not text:
        return None

    total = 0.0
    signed = ago
    position = 0
    for match in _OFFSET_RE.finditer(text):
        if match.start() != position:
            return None
        position = match.end()

        number, unit = match.groups()
        if unit not in _UNIT_SECONDS:
            return None
        total += float(number) * _UNIT_SECONDS[unit]
        signed = signed or number[0] in '+-'

    if position == 0 or position != len(text):
        return None

    delta = timedelta(seconds=total)
    return (-delta if ago else delta), signed


def parse_time_spec(time_str: str, now: Optional[datetime] = None) -> TimeParseResult:
    """
    Parse a --begin/--end value into an absolute timestamp.

    Accepts keywords (now, today, yesterday), relative offsets (5min, -30s, +1h,
    10min ago), ISO-8601 and 'YYYY-MM-DD HH:MM[:SS]' dates, and bare times of day
    (08:30:00) which are taken as today. Unsigned offsets count back from now.

    Raises:
        ValueError: the value matches none of the accepted forms
    """
    if time_str is None:
        raise ValueError("Time string cannot be None")

    spec = time_str.strip()
    if not spec:
        raise ValueError("Time string cannot be empty")

    reference = now or datetime.now()
    midnight = reference.replace(hour=0, minute=0, second=0, microsecond=0)
    keyword = spec.lower()

    if keyword in ('now', 'current'):
        return TimeParseResult(reference, True, True)
    if keyword == 'today':
        return TimeParseResult(midnight, True, True)
    if keyword == 'yesterday':
        return TimeParseResult(midnight - timedelta(days=1), True, True)

    offset = _parse_offset(spec)
    if offset is not None:
        delta, signed = offset
        timestamp = reference + delta if signed else reference - delta
        return TimeParseResult(timestamp, True, signed)

    absolute = spec.rstrip('zZ')
    try:
        return TimeParseResult(datetime.fromisoformat(absolute), False, False)
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return TimeParseResult(datetime.strptime(absolute, fmt), False, False)
        except ValueError:
            continue

    for fmt in _TIME_OF_DAY_FORMATS:
        try:
            parsed = datetime.strptime(absolute, fmt)
        except ValueError:
            continue
        timestamp = midnight.replace(hour=parsed.hour, minute=parsed.minute, second=parsed.second)
        return TimeParseResult(timestamp, False, False)

    raise ValueError(f"Cannot parse time: {time_str}")


def format_time_range(low_time: Optional[datetime], high_time: Optional[datetime]) -> str:
    """Format a time range for display."""
    if low_time and high_time:
        return f"{low_time} to {high_time}"
    elif low_time:
        return f"from {low_time}"
    elif high_time:
        return f"until {high_time}"
    else:
        return "all time"
