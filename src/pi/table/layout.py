"""Layout engine: build the fixed-width grid text for a table.

Each cell is rendered, flattened to one line, truncated with an ellipsis if
it is wider than its column, and padded to the column width using the
column's alignment.  Cells in a row are joined by ``column_margin`` spaces.
"""

from __future__ import annotations

from dataclasses import dataclass

from pi.table.columns import ColumnDescriptor, ColumnModel
from pi.table.model import TableModel
from pi.table.renderers import CellContext
from pi.table.utils import pad_to_width, single_line, truncate_to_width

ELLIPSIS = "..."


@dataclass(frozen=True)
class RenderedGrid:
    """Immutable grid text, one line per table row."""

    lines: tuple[str, ...] = ()
    width: int = 0

    @property
    def text(self) -> str:
        """Rows joined by line breaks, without a trailing break."""
        return "\n".join(self.lines)

    @property
    def row_count(self) -> int:
        return len(self.lines)

    def line(self, row: int) -> str:
        return self.lines[row]

    def __str__(self) -> str:
        return self.text


def layout_cell(
    text: str,
    column: ColumnDescriptor,
    ellipsis: str = ELLIPSIS,
) -> str:
    """Fit already-rendered *text* into *column*'s width and alignment."""
    text = truncate_to_width(single_line(text), column.width, ellipsis)
    return pad_to_width(text, column.width, column.alignment)


def render_row(
    model: TableModel,
    columns: ColumnModel,
    row: int,
    ellipsis: str = ELLIPSIS,
) -> str:
    cells: list[str] = []
    for j, column in enumerate(columns.columns()):
        value = model.value_at(row, column.model_index)
        text = column.renderer.render(value, CellContext(row=row, col=j))
        cells.append(layout_cell(text, column, ellipsis))
    return (" " * columns.column_margin()).join(cells)


def render_grid(
    model: TableModel,
    columns: ColumnModel,
    ellipsis: str = ELLIPSIS,
) -> RenderedGrid:
    """Render every row of *model* through *columns*.

    A model without rows, or a column model without columns, yields an
    empty grid.
    """
    if columns.column_count() == 0:
        return RenderedGrid()

    columns.check_model(model)
    lines = tuple(
        render_row(model, columns, row, ellipsis)
        for row in range(model.row_count())
    )
    return RenderedGrid(lines=lines, width=columns.total_width())


def render_header(columns: ColumnModel, ellipsis: str = ELLIPSIS) -> str:
    """Lay out the column titles as a single line (untitled columns are blank)."""
    cells = [
        layout_cell(column.title or "", column, ellipsis)
        for column in columns.columns()
    ]
    return (" " * columns.column_margin()).join(cells)
