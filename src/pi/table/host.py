"""Host text surface interface.

The host owns the actual text (an editor buffer, a terminal pane, ...).  A
table view asks it to insert, replace and delete the grid text through an
opaque ``RegionHandle`` that the view creates and that resolves back to the
view via ``RegionHandle.owner``.
"""

from __future__ import annotations

import itertools
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Protocol

_handle_ids = itertools.count(1)


@dataclass(frozen=True, order=True)
class HostPosition:
    """A position in host text: 0-based line and character index in that line."""

    line: int
    column: int


class RegionHandle:
    """Opaque token identifying one bound region of host text."""

    def __init__(self, owner: object) -> None:
        self.id = next(_handle_ids)
        self.owner = owner

    def __repr__(self) -> str:
        return f"RegionHandle(id={self.id})"


class Host(Protocol):
    """Interface for the text surface a table is drawn into."""

    def focus_position(self) -> HostPosition:
        """Return the position the user currently occupies."""
        ...

    def set_focus(self, position: HostPosition) -> None:
        """Move the user's position."""
        ...

    def bind_region(
        self, handle: RegionHandle, position: HostPosition, text: str
    ) -> None:
        """Insert *text* at *position* and remember it as *handle*'s region."""
        ...

    def replace_region(self, handle: RegionHandle, text: str) -> None:
        """Replace the whole contents of a bound region with *text*."""
        ...

    def delete_region(self, handle: RegionHandle) -> None:
        """Delete a bound region's text and forget the handle."""
        ...

    def region_at(self, position: HostPosition) -> RegionHandle | None:
        """Return the handle whose region contains *position*, if any."""
        ...

    def region_offset(
        self, handle: RegionHandle, position: HostPosition
    ) -> tuple[int, int] | None:
        """Translate *position* to ``(line, visible column)`` inside the region.

        Returns ``None`` when *position* is outside the region.
        """
        ...

    def region_position(
        self, handle: RegionHandle, line: int, column: int
    ) -> HostPosition:
        """Translate a region-relative line and visible column to a host position."""
        ...

    def exclusive(self, handle: RegionHandle) -> AbstractContextManager[None]:
        """Hold *handle*'s region for a single writer until the block exits."""
        ...
