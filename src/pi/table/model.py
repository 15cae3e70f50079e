"""Table data model.

A table model is anything exposing ``row_count``, ``column_count`` and
``value_at``.  ``ListTableModel`` is the stock implementation backed by a
list of rows.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from pi.table.errors import LayoutError, TableIndexError


@runtime_checkable
class TableModel(Protocol):
    """Read-only access to a rectangular grid of values."""

    def row_count(self) -> int: ...

    def column_count(self) -> int: ...

    def value_at(self, row: int, col: int) -> Any: ...


class ListTableModel:
    """Table model over a list of equally long rows.

    The rows are copied on construction, so later changes to the caller's
    lists are not seen by the model.  Optional *headers* name the model
    columns.
    """

    def __init__(
        self,
        rows: Sequence[Sequence[Any]] = (),
        headers: Sequence[str] | None = None,
    ) -> None:
        self._rows: list[tuple[Any, ...]] = [tuple(row) for row in rows]

        if self._rows:
            columns = len(self._rows[0])
        elif headers is not None:
            columns = len(headers)
        else:
            columns = 0

        for index, row in enumerate(self._rows):
            if len(row) != columns:
                msg = f"Row {index} has {len(row)} columns, expected {columns}"
                raise LayoutError(msg)

        if headers is not None and len(headers) != columns:
            msg = f"Got {len(headers)} headers for {columns} columns"
            raise LayoutError(msg)

        self._columns = columns
        self._headers = list(headers) if headers is not None else None

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[Any]],
        headers: Sequence[str] | None = None,
    ) -> ListTableModel:
        return cls(rows, headers)

    def row_count(self) -> int:
        return len(self._rows)

    def column_count(self) -> int:
        return self._columns

    def value_at(self, row: int, col: int) -> Any:
        if not 0 <= row < len(self._rows):
            msg = f"Row {row} out of range (0..{len(self._rows) - 1})"
            raise TableIndexError(msg)
        if not 0 <= col < self._columns:
            msg = f"Column {col} out of range (0..{self._columns - 1})"
            raise TableIndexError(msg)
        return self._rows[row][col]

    def column_name(self, col: int) -> str | None:
        """Return the header of model column *col*, or ``None`` without headers."""
        if not 0 <= col < self._columns:
            msg = f"Column {col} out of range (0..{self._columns - 1})"
            raise TableIndexError(msg)
        if self._headers is None:
            return None
        return self._headers[col]

    def __repr__(self) -> str:
        return f"ListTableModel(rows={len(self._rows)}, columns={self._columns})"


def as_table_model(data: TableModel | Sequence[Sequence[Any]]) -> TableModel:
    """Return *data* unchanged if it is a table model, else wrap raw rows."""
    if isinstance(data, TableModel):
        return data
    return ListTableModel(data)
