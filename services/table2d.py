"""Two-dimensional table with grouping, summing and joining.

Rows are plain lists aligned with ``columns``. Query results and posted list
parameters are both turned into a Table2d (see services.query).
"""

import json
import math
import re
from collections.abc import Callable, Iterable, Iterator

_LEADING_NUMBER_RE = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


class Table2d:
    def __init__(self, columns: list[str], rows: list[list] | None = None):
        self.columns = list(columns)
        self.rows = [list(r) for r in rows or []]
        self._column_indices: dict[str, int] = {}

    def __repr__(self) -> str:
        return f"Table2d(columns={self.columns!r}, rows={len(self.rows)})"

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[list]:
        return iter(self.rows)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Table2d):
            return NotImplemented
        return self.columns == other.columns and self.rows == other.rows

    def column_index(self, label: str) -> int | None:
        """Position of *label* in ``columns``, or None. Lookups are cached."""
        index = self._column_indices.get(label)
        if index is None:
            if label not in self.columns:
                return None
            index = self.columns.index(label)
            self._column_indices[label] = index
        return index

    def get(self, row: int, label: str):
        col = self.column_index(label)
        if col is None:
            return None
        return self.rows[row][col]

    def at(self, index: int) -> list | None:
        try:
            return self.rows[index]
        except IndexError:
            return None

    def objects(self) -> list[dict]:
        """Rows as ``{column: value}`` dicts."""
        return [dict(zip(self.columns, row, strict=False)) for row in self.rows]

    @classmethod
    def from_objects(cls, objects: list[dict]) -> "Table2d":
        """Build a table from dicts; the first dict's keys become the columns."""
        if not objects:
            return cls([], [])
        columns = list(objects[0].keys())
        return cls(columns, [[obj.get(col) for col in columns] for obj in objects])

    # ── Set operations ──────────────────────────────────────────────────────

    def join(self, other: "Table2d") -> "Table2dJoin":
        return Table2dJoin(self, other)

    def union(self, other: "Table2d") -> "Table2d | None":
        """Stack both tables' rows, keeping only the columns they share."""
        shared = [col for col in self.columns if col in other.columns]
        if not shared:
            return None

        rows = []
        for table in (self, other):
            indices = [table.column_index(col) for col in shared]
            rows.extend([row[i] for i in indices] for row in table.rows)
        return Table2d(shared, rows)

    def summarize(
        self,
        group_columns: list[str],
        sum_columns: list[str] = (),
        count_columns: list[str] = (),
    ) -> "Table2d":
        """Group rows by *group_columns*, summing and counting per group.

        Groups keep first-seen order. Sum cells are parsed as floats; cells that
        don't parse add nothing. Columns not present in the table are ignored.
        """
        group = [(c, self.column_index(c)) for c in group_columns if self.column_index(c) is not None]
        sums = [(c, self.column_index(c)) for c in sum_columns if self.column_index(c) is not None]
        counts = [(c, self.column_index(c)) for c in count_columns if self.column_index(c) is not None]

        groups: dict[str, list] = {}
        for row in self.rows:
            key = json.dumps([row[i] for _, i in group], default=str)
            summary = groups.get(key)
            if summary is None:
                summary = [row[i] for _, i in group] + [0.0] * len(sums) + [0] * len(counts)
                groups[key] = summary

            for n, (_, i) in enumerate(sums, start=len(group)):
                summary[n] += _parse_number(row[i])
            for n in range(len(group) + len(sums), len(summary)):
                summary[n] += 1

        labels = [c for c, _ in group] + [c for c, _ in sums] + [c for c, _ in counts]
        return Table2d(labels, list(groups.values()))

    # ── List-style helpers ──────────────────────────────────────────────────

    def concat(self, *row_lists: Iterable[list]) -> "Table2d":
        rows = list(self.rows)
        for extra in row_lists:
            rows.extend(extra)
        return Table2d(self.columns, rows)

    def filter(self, predicate: Callable[[list], bool]) -> "Table2d":
        return Table2d(self.columns, [row for row in self.rows if predicate(row)])

    def map(self, callback: Callable[[list], list]) -> "Table2d":
        return Table2d(self.columns, [callback(row) for row in self.rows])

    def find(self, predicate: Callable[[list], bool]) -> list | None:
        return next((row for row in self.rows if predicate(row)), None)

    def sort(self, key: Callable[[list], object], reverse: bool = False) -> None:
        self.rows.sort(key=key, reverse=reverse)

    def reverse(self) -> None:
        self.rows.reverse()


class Table2dJoin:
    """Pending join of two tables; call on() with the columns to match."""

    def __init__(self, left: Table2d, right: Table2d):
        self.left = left
        self.right = right

    def on(self, left_column: str, right_column: str) -> Table2d:
        """Inner join on equal, non-null values. Clashing right columns get a ``right - `` prefix."""
        columns = list(self.left.columns)
        for col in self.right.columns:
            columns.append(f"right - {col}" if col in columns else col)

        rows = []
        for i in range(len(self.left)):
            left_value = self.left.get(i, left_column)
            if left_value is None:
                continue
            for j in range(len(self.right)):
                if self.right.get(j, right_column) == left_value:
                    rows.append(self.left.rows[i] + self.right.rows[j])

        return Table2d(columns, rows)


def _parse_number(value) -> float:
    """Leading decimal number of *value*, like JavaScript's parseFloat. 0 when there is none."""
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, int | float):
        number = float(value)
    else:
        match = _LEADING_NUMBER_RE.match(str(value))
        if not match:
            return 0.0
        number = float(match.group(0))
    return number if math.isfinite(number) else 0.0
