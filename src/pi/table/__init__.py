"""pi-table: fixed-width table grids with cell-aware cursor mapping."""

# Table data
from pi.table.model import ListTableModel, TableModel, as_table_model

# Columns and rendering
from pi.table.columns import ColumnDescriptor, ColumnModel, default_column_model
from pi.table.config import TableOptions
from pi.table.renderers import (
    CellContext,
    CellRenderer,
    FunctionRenderer,
    NumberRenderer,
    TextRenderer,
)

# Layout and coordinate mapping
from pi.table.layout import RenderedGrid, layout_cell, render_grid, render_header
from pi.table.mapper import CoordinateMapper, TablePosition

# Host integration
from pi.table.buffer import TextBuffer
from pi.table.host import Host, HostPosition, RegionHandle
from pi.table.view import TableView, table_view_at

# Errors
from pi.table.errors import (
    LayoutError,
    MappingError,
    RegionBusyError,
    TableError,
    TableIndexError,
    ViewStateError,
)

# Utilities
from pi.table.utils import Alignment, pad_to_width, truncate_to_width, visible_width

__all__ = [
    # Table data
    "ListTableModel",
    "TableModel",
    "as_table_model",
    # Columns and rendering
    "Alignment",
    "CellContext",
    "CellRenderer",
    "ColumnDescriptor",
    "ColumnModel",
    "FunctionRenderer",
    "NumberRenderer",
    "TableOptions",
    "TextRenderer",
    "default_column_model",
    # Layout and mapping
    "CoordinateMapper",
    "RenderedGrid",
    "TablePosition",
    "layout_cell",
    "render_grid",
    "render_header",
    # Host integration
    "Host",
    "HostPosition",
    "RegionHandle",
    "TableView",
    "TextBuffer",
    "table_view_at",
    # Errors
    "LayoutError",
    "MappingError",
    "RegionBusyError",
    "TableError",
    "TableIndexError",
    "ViewStateError",
    # Utilities
    "pad_to_width",
    "truncate_to_width",
    "visible_width",
]
