"""Mapping between grid text coordinates and logical table positions.

Grid coordinates are a 0-based line number and a visible column within that
line.  A ``TablePosition`` names a row, a display column and an offset into
that column's slot.  Both directions are pure functions of the row count and
the column model.

Each display column owns the half-open range from its start offset up to the
start of the next column, so an offset sitting exactly on a column's start
belongs to that column, and the margin spacer after a cell belongs to the
cell on its left.  The last column also owns the position just past its end.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass

from pi.table.columns import ColumnModel
from pi.table.errors import MappingError


@dataclass(frozen=True)
class TablePosition:
    """Logical cursor location: row, display column, offset into the cell."""

    row: int
    col: int
    offset: int = 0

    def __post_init__(self) -> None:
        if self.row < 0 or self.col < 0 or self.offset < 0:
            msg = f"TablePosition fields must be >= 0, got {self}"
            raise ValueError(msg)


class CoordinateMapper:
    """Converts grid ``(line, column)`` pairs to ``TablePosition`` and back.

    ``TablePosition.offset`` counts visible columns from the left edge of
    the cell, not from where the padded value starts, so a right-aligned
    value does not shift it.  Forward mapping clamps the offset to
    ``[0, width]``; reverse mapping returns
    ``column_positions[col] + min(width, offset)``.
    """

    def __init__(self, columns: ColumnModel, row_count: int) -> None:
        self._columns = columns
        self._row_count = row_count

    @property
    def row_count(self) -> int:
        return self._row_count

    @property
    def column_model(self) -> ColumnModel:
        return self._columns

    def _require_cells(self) -> None:
        if self._row_count <= 0 or self._columns.column_count() == 0:
            msg = (
                f"Grid has no cells ({self._row_count} rows, "
                f"{self._columns.column_count()} columns)"
            )
            raise MappingError(msg)

    def forward(self, line: int, column: int) -> TablePosition:
        """Map a grid line and visible column to a table position.

        Lines outside the grid are clamped to the first or last row.
        Columns before the first cell or past the last one raise
        ``MappingError``.
        """
        self._require_cells()

        total = self._columns.total_width()
        if column < 0 or column > total:
            msg = f"Column {column} is outside the grid (0..{total})"
            raise MappingError(msg)

        row = min(max(line, 0), self._row_count - 1)
        positions = self._columns.column_positions()
        col = bisect.bisect_right(positions, column) - 1
        offset = min(column - positions[col], self._columns.column_width(col))
        return TablePosition(row=row, col=col, offset=offset)

    def reverse(self, position: TablePosition) -> tuple[int, int]:
        """Map a table position to a grid ``(line, column)``.

        Offsets wider than the cell (e.g. captured before the column was
        narrowed) are clamped to the cell's right edge.
        """
        self._require_cells()

        if position.row >= self._row_count:
            msg = f"Row {position.row} is outside the grid (0..{self._row_count - 1})"
            raise MappingError(msg)
        if position.col >= self._columns.column_count():
            msg = (
                f"Column {position.col} is outside the grid "
                f"(0..{self._columns.column_count() - 1})"
            )
            raise MappingError(msg)

        start = self._columns.column_positions()[position.col]
        width = self._columns.column_width(position.col)
        return position.row, start + min(width, position.offset)

    def clamp(self, position: TablePosition) -> TablePosition:
        """Snap *position* to the nearest cell that exists in this grid."""
        self._require_cells()

        row = min(position.row, self._row_count - 1)
        col = min(position.col, self._columns.column_count() - 1)
        offset = min(position.offset, self._columns.column_width(col))
        return TablePosition(row=row, col=col, offset=offset)

    def cell_bounds(self, row: int, col: int) -> tuple[int, int, int]:
        """Return ``(line, start, end)`` of a cell's slot in the grid."""
        self._require_cells()

        if not 0 <= row < self._row_count:
            msg = f"Row {row} is outside the grid (0..{self._row_count - 1})"
            raise MappingError(msg)
        if not 0 <= col < self._columns.column_count():
            msg = (
                f"Column {col} is outside the grid "
                f"(0..{self._columns.column_count() - 1})"
            )
            raise MappingError(msg)

        start = self._columns.column_positions()[col]
        return row, start, start + self._columns.column_width(col)
