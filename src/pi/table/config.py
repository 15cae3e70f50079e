"""Defaults used when a table view synthesizes its own column model."""

from __future__ import annotations

from dataclasses import dataclass

from pi.table.errors import LayoutError
from pi.table.utils import ALIGNMENTS, Alignment


@dataclass
class TableOptions:
    """Column synthesis and truncation settings."""

    margin: int = 1
    # None derives each column's width from its widest rendered value
    default_width: int | None = None
    fallback_width: int = 10
    max_width: int | None = None
    alignment: Alignment = "left"
    ellipsis: str = "..."

    def validate(self) -> None:
        if self.margin < 0:
            msg = f"Column margin must be >= 0, got {self.margin}"
            raise LayoutError(msg)
        for name in ("default_width", "fallback_width", "max_width"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                msg = f"{name} must be > 0, got {value}"
                raise LayoutError(msg)
        if self.alignment not in ALIGNMENTS:
            msg = f"Unknown alignment {self.alignment!r}"
            raise LayoutError(msg)
