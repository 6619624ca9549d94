#!/usr/bin/env python3
"""
Per-time-slice row selection: --filter, --sort/--rsort and --top.

Every time slice is selected on its own, so "--top 5" means the first five rows
of each slice. Rows are mappings keyed by FieldTag; the selector returns the
original row objects in their new order.
"""

from typing import Any, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple
import logging
import math

import duckdb

from .command_spec import CommandSpec
from .fields import FieldKind, FieldTag
from .query_options import SortOrder

Row = Mapping[FieldTag, Any]


class RowSelector:
    """Applies a CommandSpec's select field options to time slices"""

    def __init__(self, spec: CommandSpec, duckdb_threads: Optional[int] = None):
        """
        Args:
            spec: Validated dump command
            duckdb_threads: Number of DuckDB threads (None for default)
        """
        self.spec = spec
        self.conn = None
        self.duckdb_threads = duckdb_threads
        self.logger = logging.getLogger('statdump.row_selector')

    def __enter__(self) -> 'RowSelector':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def connect(self):
        """Get or create the DuckDB connection used for ordering"""
        if self.conn is None:
            self.conn = duckdb.connect(':memory:')
            if self.duckdb_threads is not None:
                self.conn.execute(f"SET threads TO {self.duckdb_threads}")
        return self.conn

    def close(self):
        if self.conn:
            self.conn.close()
            self.conn = None

    @property
    def is_passthrough(self) -> bool:
        return self.spec.select is None or not self.spec.options.selects_rows

    def select(self, rows: Iterable[Row]) -> List[Row]:
        """
        Select rows of a single time slice.

        Filtering runs first, then sorting, then truncation to --top. Rows
        without a value for the select field never match a filter and sort last
        in both directions.
        """
        rows = list(rows)
        if self.is_passthrough or not rows:
            return rows

        options = self.spec.options
        field = self.spec.select

        candidates: List[Tuple[int, Any]] = []
        for seq, row in enumerate(rows):
            value = row.get(field)
            if options.filter is not None:
                if value is None or not options.filter.search(str(value)):
                    continue
            candidates.append((seq, self._sort_key(field, value)))

        if options.sort_order is SortOrder.NONE:
            chosen = [seq for seq, _ in candidates]
            if options.top:
                chosen = chosen[:options.top]
        else:
            chosen = self._ordered(field, candidates)

        self.logger.debug(f"slice: {len(rows)} rows in, {len(chosen)} rows out")
        return [rows[seq] for seq in chosen]

    def select_slices(self, slices: Iterable[Tuple[Any, Sequence[Row]]]) -> Iterator[Tuple[Any, List[Row]]]:
        """Select each (timestamp, rows) slice independently"""
        for timestamp, rows in slices:
            yield timestamp, self.select(rows)

    def _sort_key(self, field: FieldTag, value: Any) -> Any:
        if value is None:
            return None
        if field.kind is FieldKind.TEXT:
            return str(value)
        try:
            key = float(value)
        except (TypeError, ValueError, OverflowError):
            self.logger.debug(f"non-numeric {field.value} value {value!r} sorts as missing")
            return None
        if math.isnan(key):
            return None
        return key

    def _ordered(self, field: FieldTag, candidates: List[Tuple[int, Any]]) -> List[int]:
        """Order candidate rows by sort key with DuckDB, ties in collection order"""
        if not candidates:
            return []

        conn = self.connect()
        key_type = 'VARCHAR' if field.kind is FieldKind.TEXT else 'DOUBLE'
        conn.execute(f"CREATE OR REPLACE TEMP TABLE slice_rows (seq INTEGER, sort_key {key_type})")
        conn.executemany("INSERT INTO slice_rows VALUES (?, ?)", candidates)

        direction = 'DESC' if self.spec.options.sort_order is SortOrder.DESCENDING else 'ASC'
        query = f"SELECT seq FROM slice_rows ORDER BY sort_key {direction} NULLS LAST, seq"
        if self.spec.options.top:
            query += f" LIMIT {int(self.spec.options.top)}"

        return [row[0] for row in conn.execute(query).fetchall()]
