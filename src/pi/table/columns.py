"""Column descriptors and the column model.

A ``ColumnModel`` is the ordered list of display columns plus the margin
between them.  Each ``ColumnDescriptor`` points at a model column through
``model_index``, so columns can be reordered or hidden without touching the
table model.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from pi.table.config import TableOptions
from pi.table.errors import LayoutError, TableIndexError
from pi.table.model import TableModel
from pi.table.renderers import DEFAULT_RENDERER, CellContext, CellRenderer
from pi.table.utils import ALIGNMENTS, Alignment, single_line, visible_width


@dataclass(frozen=True)
class ColumnDescriptor:
    """Display metadata for one column."""

    model_index: int
    width: int
    alignment: Alignment = "left"
    renderer: CellRenderer = DEFAULT_RENDERER
    title: str | None = None

    def __post_init__(self) -> None:
        if self.width <= 0:
            msg = f"Column width must be > 0, got {self.width}"
            raise LayoutError(msg)
        if self.model_index < 0:
            msg = f"Model index must be >= 0, got {self.model_index}"
            raise LayoutError(msg)
        if self.alignment not in ALIGNMENTS:
            msg = f"Unknown alignment {self.alignment!r}"
            raise LayoutError(msg)


class ColumnModel:
    """Ordered display columns and the spacer width between them."""

    def __init__(
        self, columns: Sequence[ColumnDescriptor] = (), margin: int = 1
    ) -> None:
        if margin < 0:
            msg = f"Column margin must be >= 0, got {margin}"
            raise LayoutError(msg)
        self._columns = tuple(columns)
        self._margin = margin

        # Start offset of each display column
        positions: list[int] = []
        offset = 0
        for column in self._columns:
            positions.append(offset)
            offset += column.width + margin
        self._positions = tuple(positions)

    def columns(self) -> tuple[ColumnDescriptor, ...]:
        return self._columns

    def column_margin(self) -> int:
        return self._margin

    def column_count(self) -> int:
        return len(self._columns)

    def column(self, i: int) -> ColumnDescriptor:
        if not 0 <= i < len(self._columns):
            msg = f"Display column {i} out of range (0..{len(self._columns) - 1})"
            raise TableIndexError(msg)
        return self._columns[i]

    def column_width(self, i: int) -> int:
        return self.column(i).width

    def column_positions(self) -> tuple[int, ...]:
        """Text offset at which each display column begins."""
        return self._positions

    def column_bounds(self) -> list[tuple[int, int]]:
        """``(start, end)`` offsets of each column, end exclusive."""
        return [
            (start, start + column.width)
            for start, column in zip(self._positions, self._columns)
        ]

    def total_width(self) -> int:
        """Width of one rendered row, margins included."""
        if not self._columns:
            return 0
        return self._positions[-1] + self._columns[-1].width

    def with_column(self, i: int, **changes: Any) -> ColumnModel:
        """Return a copy with display column *i* replaced by an edited descriptor."""
        updated = dataclasses.replace(self.column(i), **changes)
        columns = list(self._columns)
        columns[i] = updated
        return ColumnModel(columns, self._margin)

    def check_model(self, model: TableModel) -> None:
        """Raise ``TableIndexError`` if a column points outside *model*."""
        count = model.column_count()
        for i, column in enumerate(self._columns):
            if column.model_index >= count:
                msg = (
                    f"Display column {i} maps to model column "
                    f"{column.model_index}, but the model has {count} columns"
                )
                raise TableIndexError(msg)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColumnModel):
            return NotImplemented
        return self._columns == other._columns and self._margin == other._margin

    def __repr__(self) -> str:
        return f"ColumnModel(columns={len(self._columns)}, margin={self._margin})"


def default_column_model(
    model: TableModel, options: TableOptions | None = None
) -> ColumnModel:
    """Synthesize one left-aligned text column per model column, in model order.

    Widths come from ``options.default_width`` when set, otherwise from the
    widest rendered value (and header) in each column, capped by
    ``options.max_width``.
    """
    options = options or TableOptions()
    options.validate()

    column_name = getattr(model, "column_name", None)
    columns: list[ColumnDescriptor] = []
    for col in range(model.column_count()):
        title = column_name(col) if column_name is not None else None

        if options.default_width is not None:
            width = options.default_width
        else:
            width = _content_width(model, col, title) or options.fallback_width
            if options.max_width is not None:
                width = min(width, options.max_width)

        columns.append(
            ColumnDescriptor(
                model_index=col,
                width=width,
                alignment=options.alignment,
                renderer=DEFAULT_RENDERER,
                title=title,
            )
        )

    return ColumnModel(columns, options.margin)


def _content_width(model: TableModel, col: int, title: str | None) -> int:
    widest = visible_width(title) if title else 0
    for row in range(model.row_count()):
        text = DEFAULT_RENDERER.render(
            model.value_at(row, col), CellContext(row=row, col=col)
        )
        widest = max(widest, visible_width(single_line(text)))
    return widest
