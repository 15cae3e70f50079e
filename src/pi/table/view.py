"""Table view: draws a table into a host and keeps the cursor on its cell.

A view is either unbound (nothing drawn) or bound to one region of host
text.  ``update`` regenerates the grid and, when the host focus is inside
the region, puts the focus back on the same logical cell even if column
widths or cell contents changed.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from pi.table.columns import ColumnModel, default_column_model
from pi.table.config import TableOptions
from pi.table.errors import MappingError, ViewStateError
from pi.table.host import Host, HostPosition, RegionHandle
from pi.table.layout import RenderedGrid, render_grid
from pi.table.mapper import CoordinateMapper, TablePosition
from pi.table.model import TableModel, as_table_model

logger = logging.getLogger(__name__)


class TableView:
    """Owns a column model, shares a table model, and manages one host region."""

    def __init__(
        self,
        host: Host,
        data: TableModel | Sequence[Sequence[Any]] = (),
        columns: ColumnModel | None = None,
        options: TableOptions | None = None,
    ) -> None:
        self._host = host
        self._options = options or TableOptions()
        self._options.validate()
        self._model = as_table_model(data)
        self._synthesized = columns is None
        self._columns = (
            columns
            if columns is not None
            else default_column_model(self._model, self._options)
        )

        self._handle: RegionHandle | None = None
        self._grid: RenderedGrid | None = None
        # Layout that produced the text currently in the region
        self._drawn_mapper: CoordinateMapper | None = None

    # -- Properties ----------------------------------------------------------

    @property
    def host(self) -> Host:
        return self._host

    @property
    def model(self) -> TableModel:
        return self._model

    @property
    def column_model(self) -> ColumnModel:
        return self._columns

    @property
    def options(self) -> TableOptions:
        return self._options

    @property
    def handle(self) -> RegionHandle | None:
        return self._handle

    @property
    def is_bound(self) -> bool:
        return self._handle is not None

    @property
    def grid(self) -> RenderedGrid | None:
        """The grid currently shown in the host, or ``None`` when unbound."""
        return self._grid

    def set_model(self, data: TableModel | Sequence[Sequence[Any]]) -> None:
        """Swap the table model; call :meth:`update` to show it."""
        self._model = as_table_model(data)
        if self._synthesized:
            self._columns = default_column_model(self._model, self._options)

    def set_column_model(self, columns: ColumnModel) -> None:
        """Replace the column layout; call :meth:`update` to show it."""
        self._columns = columns
        self._synthesized = False

    def mapper(self) -> CoordinateMapper:
        """Mapper for the current model and column layout."""
        return CoordinateMapper(self._columns, self._model.row_count())

    # -- Drawing -------------------------------------------------------------

    def render(self) -> RenderedGrid:
        """Build the grid for the current model without touching the host."""
        return render_grid(self._model, self._columns, self._options.ellipsis)

    def draw(self, position: HostPosition) -> RegionHandle:
        """Draw the table at *position*, replacing any region drawn before."""
        grid = self.render()

        if self._handle is not None:
            old = self._handle
            with self._host.exclusive(old):
                self._host.delete_region(old)
            self._handle = None
            self._grid = None
            self._drawn_mapper = None

        handle = RegionHandle(self)
        self._host.bind_region(handle, position, grid.text)
        self._handle = handle
        self._commit(grid)
        logger.debug(
            "Drew %d x %d table at %s as %r",
            grid.row_count,
            self._columns.column_count(),
            position,
            handle,
        )
        return handle

    def update(self, focus: HostPosition | None = None) -> RenderedGrid:
        """Regenerate the grid in place.

        *focus* defaults to the host's current focus.  When it lies inside the
        region, the logical cell under it is captured before the redraw and
        the host focus is moved back onto the same cell afterwards.
        """
        handle = self._require_bound("update")

        if focus is None:
            focus = self._host.focus_position()
        captured = self._capture(handle, focus)
        grid = self.render()

        with self._host.exclusive(handle):
            self._host.replace_region(handle, grid.text)
        self._commit(grid)

        if captured is not None and grid.row_count > 0:
            self.goto(self.mapper().clamp(captured))
        logger.debug("Updated %r (%d rows), restored=%s", handle, grid.row_count, captured)
        return grid

    def remove(self) -> None:
        """Delete the drawn table from the host."""
        handle = self._require_bound("remove")
        with self._host.exclusive(handle):
            self._host.delete_region(handle)
        self._handle = None
        self._grid = None
        self._drawn_mapper = None
        logger.debug("Removed %r", handle)

    # -- Navigation ----------------------------------------------------------

    def position_at(self, focus: HostPosition) -> TablePosition:
        """Return the table position under the host position *focus*."""
        handle = self._require_bound("position_at")
        offset = self._host.region_offset(handle, focus)
        if offset is None:
            msg = f"{focus} is outside the table region"
            raise MappingError(msg)
        return self._require_mapper().forward(*offset)

    def goto(self, position: TablePosition) -> HostPosition:
        """Move the host focus onto *position* and return the host position."""
        handle = self._require_bound("goto")
        line, column = self._require_mapper().reverse(position)
        target = self._host.region_position(handle, line, column)
        self._host.set_focus(target)
        return target

    def move(self, focus: HostPosition, rows: int = 0, cols: int = 0) -> HostPosition:
        """Move from the cell under *focus* by whole rows and columns.

        Moving across columns lands at the start of the target cell; moving
        only across rows keeps the offset.  Moves stop at the table edges.
        """
        current = self.position_at(focus)
        target = TablePosition(
            row=max(current.row + rows, 0),
            col=max(current.col + cols, 0),
            offset=0 if cols else current.offset,
        )
        return self.goto(self._require_mapper().clamp(target))

    def value_at(self, position: TablePosition) -> Any:
        """Return the model value shown in *position*'s cell."""
        column = self._columns.column(position.col)
        return self._model.value_at(position.row, column.model_index)

    # -- Internals -----------------------------------------------------------

    def _require_bound(self, operation: str) -> RegionHandle:
        if self._handle is None:
            msg = f"Cannot {operation}: table view is not drawn"
            raise ViewStateError(msg)
        return self._handle

    def _require_mapper(self) -> CoordinateMapper:
        if self._drawn_mapper is None:
            msg = "Table view is not drawn"
            raise ViewStateError(msg)
        return self._drawn_mapper

    def _commit(self, grid: RenderedGrid) -> None:
        self._grid = grid
        self._drawn_mapper = CoordinateMapper(self._columns, grid.row_count)

    def _capture(self, handle: RegionHandle, focus: HostPosition) -> TablePosition | None:
        offset = self._host.region_offset(handle, focus)
        if offset is None:
            return None
        try:
            return self._require_mapper().forward(*offset)
        except MappingError as exc:
            logger.debug("Not restoring cursor for %r: %s", handle, exc)
            return None


def table_view_at(host: Host, position: HostPosition) -> TableView | None:
    """Return the table view drawn at *position* in *host*, if any."""
    handle = host.region_at(position)
    if handle is None or not isinstance(handle.owner, TableView):
        return None
    return handle.owner
