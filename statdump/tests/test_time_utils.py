#!/usr/bin/env python3
"""
Tests for time_utils module.
"""

import unittest
from datetime import datetime, timedelta

from statdump.core.time_utils import TimeWindow, format_time_range, parse_time_spec


class TestParseTimeSpec(unittest.TestCase):
    """Test cases for --begin/--end parsing"""

    def setUp(self):
        self.reference = datetime(2025, 1, 2, 12, 0, 0)

    def test_relative(self):
        """Unsigned offsets count back from the reference time"""
        result = parse_time_spec('5min', now=self.reference)
        self.assertEqual(result.timestamp, self.reference - timedelta(minutes=5))
        self.assertTrue(result.is_relative)
        self.assertFalse(result.has_explicit_sign)

        result = parse_time_spec('-30s', now=self.reference)
        self.assertEqual(result.timestamp, self.reference - timedelta(seconds=30))
        self.assertTrue(result.has_explicit_sign)

        result = parse_time_spec('10 min ago', now=self.reference)
        self.assertEqual(result.timestamp, self.reference - timedelta(minutes=10))

        result = parse_time_spec('1h30m', now=self.reference)
        self.assertEqual(result.timestamp, self.reference - timedelta(hours=1, minutes=30))

    def test_explicit_positive_and_keywords(self):
        result = parse_time_spec('+5min', now=self.reference)
        self.assertEqual(result.timestamp, self.reference + timedelta(minutes=5))

        self.assertEqual(parse_time_spec('now', now=self.reference).timestamp, self.reference)
        self.assertEqual(parse_time_spec('today', now=self.reference).timestamp,
                         datetime(2025, 1, 2, 0, 0, 0))
        self.assertEqual(parse_time_spec('Yesterday', now=self.reference).timestamp,
                         datetime(2025, 1, 1, 0, 0, 0))

    def test_absolute(self):
        absolute = parse_time_spec('2024-12-31 23:59:00', now=self.reference)
        self.assertEqual(absolute.timestamp, datetime(2024, 12, 31, 23, 59, 0))
        self.assertFalse(absolute.is_relative)

        iso = parse_time_spec('2024-12-31T08:00:00Z', now=self.reference)
        self.assertEqual(iso.timestamp, datetime(2024, 12, 31, 8, 0, 0))

        day = parse_time_spec('2024-12-31', now=self.reference)
        self.assertEqual(day.timestamp, datetime(2024, 12, 31, 0, 0, 0))

    def test_time_of_day_is_today(self):
        result = parse_time_spec('08:30:00', now=self.reference)
        self.assertEqual(result.timestamp, datetime(2025, 1, 2, 8, 30, 0))
        self.assertFalse(result.is_relative)

        result = parse_time_spec('08:15', now=self.reference)
        self.assertEqual(result.timestamp, datetime(2025, 1, 2, 8, 15, 0))

    def test_invalid(self):
        for spec in ('notatime', '5parsecs', '', '   ', '25:00:00'):
            with self.subTest(spec=spec):
                with self.assertRaises(ValueError):
                    parse_time_spec(spec, now=self.reference)
        with self.assertRaises(ValueError):
            parse_time_spec(None, now=self.reference)


class TestFormatTimeRange(unittest.TestCase):

    def test_format_time_range(self):
        low = datetime(2025, 1, 1, 8, 30)
        high = datetime(2025, 1, 1, 9, 0)
        self.assertEqual(format_time_range(low, high), f"{low} to {high}")
        self.assertEqual(format_time_range(low, None), f"from {low}")
        self.assertEqual(format_time_range(None, high), f"until {high}")
        self.assertEqual(format_time_range(None, None), "all time")

    def test_window_describe(self):
        window = TimeWindow(datetime(2025, 1, 1, 8, 30))
        self.assertEqual(window.describe(), "from 2025-01-01 08:30:00")


if __name__ == '__main__':
    unittest.main()
