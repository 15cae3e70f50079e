"""Exceptions raised by pi-table."""

from __future__ import annotations


class TableError(Exception):
    """Base class for every error raised by this package."""


class TableIndexError(TableError, IndexError):
    """A row or column index is outside the table or column model."""


class LayoutError(TableError, ValueError):
    """Degenerate layout input: bad width, margin, alignment or ragged data."""


class MappingError(TableError):
    """A grid coordinate could not be mapped to or from a table cell."""


class ViewStateError(TableError):
    """A table view operation was attempted in the wrong state."""


class RegionBusyError(TableError):
    """A bound region is already held for exclusive access."""
