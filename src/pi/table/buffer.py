"""In-memory text buffer implementing the ``Host`` interface.

Holds lines of text, a cursor, and the regions bound by table views.  Edits
keep the cursor and every other region anchored to the text they point at.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from pi.table.errors import RegionBusyError
from pi.table.host import HostPosition, RegionHandle
from pi.table.utils import column_to_index, visible_width


@dataclass
class _Region:
    start: HostPosition
    end: HostPosition


def _shift_after_insert(
    point: HostPosition,
    at: HostPosition,
    end: HostPosition,
    inclusive: bool,
) -> HostPosition:
    # Points before the insertion point stay; an exact hit moves only if inclusive
    if point < at or (point == at and not inclusive):
        return point
    if point.line == at.line:
        return HostPosition(end.line, end.column + point.column - at.column)
    return HostPosition(point.line + end.line - at.line, point.column)


def _shift_after_delete(
    point: HostPosition, start: HostPosition, end: HostPosition
) -> HostPosition:
    if point <= start:
        return point
    if point <= end:
        return start
    if point.line == end.line:
        return HostPosition(start.line, start.column + point.column - end.column)
    return HostPosition(point.line - (end.line - start.line), point.column)


class TextBuffer:
    """Editable lines of text with a cursor and bound regions."""

    def __init__(self, text: str = "") -> None:
        self._lines: list[str] = text.split("\n")
        self._cursor = HostPosition(0, 0)
        self._regions: dict[RegionHandle, _Region] = {}
        self._busy: set[int] = set()

    # -- Text access ---------------------------------------------------------

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    def clamp(self, position: HostPosition) -> HostPosition:
        """Return the nearest valid position to *position*."""
        line = min(max(position.line, 0), len(self._lines) - 1)
        column = min(max(position.column, 0), len(self._lines[line]))
        return HostPosition(line, column)

    # -- Editing -------------------------------------------------------------

    def insert(
        self,
        position: HostPosition,
        text: str,
        _skip: RegionHandle | None = None,
    ) -> HostPosition:
        """Insert *text* at *position*; return the position just after it."""
        at = self.clamp(position)
        current = self._lines[at.line]
        before, after = current[: at.column], current[at.column :]

        pieces = text.split("\n")
        pieces[0] = before + pieces[0]
        end = HostPosition(at.line + len(pieces) - 1, len(pieces[-1]))
        pieces[-1] = pieces[-1] + after
        self._lines[at.line : at.line + 1] = pieces

        self._cursor = _shift_after_insert(self._cursor, at, end, inclusive=True)
        for handle, region in self._regions.items():
            if handle is _skip:
                continue
            region.start = _shift_after_insert(region.start, at, end, inclusive=True)
            region.end = _shift_after_insert(region.end, at, end, inclusive=False)
        return end

    def delete(
        self,
        start: HostPosition,
        end: HostPosition,
        _skip: RegionHandle | None = None,
    ) -> None:
        """Delete the text between *start* and *end* (end exclusive)."""
        start, end = self.clamp(start), self.clamp(end)
        if end < start:
            start, end = end, start

        head = self._lines[start.line][: start.column]
        tail = self._lines[end.line][end.column :]
        self._lines[start.line : end.line + 1] = [head + tail]

        self._cursor = _shift_after_delete(self._cursor, start, end)
        for handle, region in self._regions.items():
            if handle is _skip:
                continue
            region.start = _shift_after_delete(region.start, start, end)
            region.end = _shift_after_delete(region.end, start, end)

    # -- Host: focus ---------------------------------------------------------

    def focus_position(self) -> HostPosition:
        return self._cursor

    def set_focus(self, position: HostPosition) -> None:
        self._cursor = self.clamp(position)

    # -- Host: regions -------------------------------------------------------

    def _region(self, handle: RegionHandle) -> _Region:
        region = self._regions.get(handle)
        if region is None:
            msg = f"{handle!r} is not bound in this buffer"
            raise KeyError(msg)
        return region

    def bind_region(
        self, handle: RegionHandle, position: HostPosition, text: str
    ) -> None:
        if handle in self._regions:
            msg = f"{handle!r} is already bound"
            raise ValueError(msg)
        start = self.clamp(position)
        end = self.insert(start, text)
        self._regions[handle] = _Region(start=start, end=end)

    def replace_region(self, handle: RegionHandle, text: str) -> None:
        region = self._region(handle)
        self.delete(region.start, region.end, _skip=handle)
        region.end = self.insert(region.start, text, _skip=handle)

    def delete_region(self, handle: RegionHandle) -> None:
        region = self._region(handle)
        self.delete(region.start, region.end, _skip=handle)
        del self._regions[handle]

    def region_bounds(self, handle: RegionHandle) -> tuple[HostPosition, HostPosition]:
        region = self._region(handle)
        return region.start, region.end

    def region_text(self, handle: RegionHandle) -> str:
        start, end = self.region_bounds(handle)
        if start.line == end.line:
            return self._lines[start.line][start.column : end.column]
        parts = [self._lines[start.line][start.column :]]
        parts.extend(self._lines[start.line + 1 : end.line])
        parts.append(self._lines[end.line][: end.column])
        return "\n".join(parts)

    def region_at(self, position: HostPosition) -> RegionHandle | None:
        for handle, region in self._regions.items():
            if region.start <= position <= region.end:
                return handle
        return None

    def region_offset(
        self, handle: RegionHandle, position: HostPosition
    ) -> tuple[int, int] | None:
        region = self._region(handle)
        if not region.start <= position <= region.end:
            return None
        line = position.line - region.start.line
        base = region.start.column if line == 0 else 0
        text = self._lines[position.line][base : position.column]
        return line, visible_width(text)

    def region_position(
        self, handle: RegionHandle, line: int, column: int
    ) -> HostPosition:
        region = self._region(handle)
        line = min(max(line, 0), region.end.line - region.start.line)
        absolute = region.start.line + line
        base = region.start.column if line == 0 else 0
        stop = region.end.column if absolute == region.end.line else None
        segment = self._lines[absolute][base:stop]
        return HostPosition(absolute, base + column_to_index(segment, column))

    @contextmanager
    def exclusive(self, handle: RegionHandle) -> Iterator[None]:
        self._region(handle)
        if handle.id in self._busy:
            msg = f"{handle!r} is already held by another writer"
            raise RegionBusyError(msg)
        self._busy.add(handle.id)
        try:
            yield
        finally:
            self._busy.discard(handle.id)
