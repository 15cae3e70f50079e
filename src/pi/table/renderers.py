"""Cell renderers: turn a raw model value into display text.

A renderer is anything with ``render(value, context) -> str``.  Renderers
must be pure; the layout engine calls them once per cell on every redraw.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol


@dataclass(frozen=True)
class CellContext:
    """Where the value being rendered sits in the grid."""

    row: int
    col: int


class CellRenderer(Protocol):
    def render(self, value: Any, context: CellContext) -> str: ...


class TextRenderer:
    """Renders values with ``str()``; ``None`` becomes *none_text*."""

    def __init__(self, none_text: str = "") -> None:
        self._none_text = none_text

    def render(self, value: Any, context: CellContext) -> str:
        if value is None:
            return self._none_text
        return str(value)

    def __repr__(self) -> str:
        return f"TextRenderer(none_text={self._none_text!r})"


class NumberRenderer:
    """Formats numbers with a ``format()`` spec such as ``",.2f"``.

    Values that are not numbers (including numeric strings that fail to
    parse) fall back to ``str()``.
    """

    def __init__(self, spec: str = "", none_text: str = "") -> None:
        self._spec = spec
        self._none_text = none_text

    def render(self, value: Any, context: CellContext) -> str:
        if value is None:
            return self._none_text
        if isinstance(value, bool):
            return str(value)
        if isinstance(value, str):
            try:
                value = float(value) if any(c in value for c in ".eE") else int(value)
            except ValueError:
                return value
        if isinstance(value, (int, float)):
            return format(value, self._spec)
        return str(value)

    def __repr__(self) -> str:
        return f"NumberRenderer(spec={self._spec!r})"


class FunctionRenderer:
    """Adapts a plain ``fn(value, context) -> str`` callable."""

    def __init__(self, fn: Callable[[Any, CellContext], str]) -> None:
        self._fn = fn

    def render(self, value: Any, context: CellContext) -> str:
        return self._fn(value, context)


DEFAULT_RENDERER = TextRenderer()
