"""Text width utilities for fixed-width grid layout.

Measures visible terminal widths (ANSI escapes are zero-width, wide
characters count as two columns), truncates text with an ellipsis, and pads
text to an exact width using a column alignment.
"""

from __future__ import annotations

import math
import re
import unicodedata
from typing import Literal

import grapheme
import wcwidth as _wcwidth


# ---------------------------------------------------------------------------
# Regex patterns for ANSI / OSC / APC sequences
# ---------------------------------------------------------------------------

_STRIP_RE = re.compile(
    r"\x1b\[[0-9;]*[mGKHJ]"        # CSI
    r"|\x1b\]8;;[^\x07]*\x07"       # OSC 8
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"  # APC
)

_ANSI_AT_RE = re.compile(
    r"\x1b\[[0-9;]*[mGKHJ]"
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"
)

_NEWLINES_RE = re.compile(r"[\r\n]+")

# Escape sequences (kept) or a lone control character (dropped)
_CONTROL_RE = re.compile(
    r"(" + _STRIP_RE.pattern + r")"
    r"|[\x00-\x1f\x7f-\x9f]"
)

Alignment = Literal["left", "right", "center"]

ALIGNMENTS: tuple[str, ...] = ("left", "right", "center")

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster."""
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        # Control characters
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):  # VS16, ZWJ
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first_cp = ord(g[0])
    if first_cp >= 0x1F000 or 0x2600 <= first_cp <= 0x27BF:
        return 2

    cat = unicodedata.category(g[0])
    if cat.startswith("M") or cat == "Cf":
        return 0

    return max(_wcwidth.wcwidth(g[0]), 0)


def _is_plain_ascii(text: str) -> bool:
    return all(0x20 <= ord(ch) <= 0x7E for ch in text)


# ---------------------------------------------------------------------------
# Measurement
# ---------------------------------------------------------------------------


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*.

    * Strips ANSI escape sequences.
    * Uses a fast ASCII path when possible.
    * Caches results for non-ASCII strings.
    """
    if not text:
        return 0

    stripped = _STRIP_RE.sub("", text)
    if not stripped:
        return 0

    if _is_plain_ascii(stripped):
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = sum(_grapheme_width(g) for g in grapheme.graphemes(stripped))
    return _cache_width(stripped, total)


def single_line(text: str) -> str:
    """Flatten *text* to one printable line.

    Runs of line breaks become a single space, tabs become 3 spaces, and other
    control characters are removed.  ANSI escape sequences are kept.
    """
    text = _NEWLINES_RE.sub(" ", text).replace("\t", "   ")
    return _CONTROL_RE.sub(lambda m: m.group(1) or "", text)


# ---------------------------------------------------------------------------
# Truncation
# ---------------------------------------------------------------------------


def truncate_to_width(text: str, max_width: int, ellipsis: str = "...") -> str:
    """Truncate *text* to fit within *max_width* visible columns.

    If the text is wider than *max_width*, it is cut and *ellipsis* is
    appended (the ellipsis counts towards the width).  When the ellipsis
    alone does not fit, a prefix of the ellipsis is returned instead.
    """
    if max_width <= 0:
        return ""

    if visible_width(text) <= max_width:
        return text

    target_width = max_width - visible_width(ellipsis)
    if target_width <= 0:
        return _take_columns(ellipsis, max_width)

    return _take_columns(text, target_width) + ellipsis


def _take_columns(text: str, max_cols: int) -> str:
    """Return a prefix of *text* that fits within *max_cols* visible columns.

    ANSI codes are preserved; the text is cut at grapheme boundaries.
    """
    result: list[str] = []
    cols = 0
    i = 0

    while i < len(text):
        match = _ANSI_AT_RE.match(text, i)
        if match is not None:
            result.append(match.group())
            i = match.end()
            continue

        g = next(grapheme.graphemes(text[i:]))
        w = _grapheme_width(g)
        if cols + w > max_cols:
            break
        result.append(g)
        cols += w
        i += len(g)

    return "".join(result)


# ---------------------------------------------------------------------------
# Padding
# ---------------------------------------------------------------------------


def pad_to_width(text: str, width: int, align: Alignment = "left") -> str:
    """Pad *text* with spaces to exactly *width* visible columns.

    ``"left"`` pads on the right, ``"right"`` on the left, and ``"center"``
    puts the larger half of an odd remainder on the left.  Text wider than
    *width* is cut (not ellipsized); callers truncate first.
    """
    if width <= 0:
        return ""

    text_width = visible_width(text)
    if text_width > width:
        text = _take_columns(text, width)
        text_width = visible_width(text)

    extra = width - text_width
    if align == "right":
        return " " * extra + text
    if align == "center":
        left = math.ceil(extra / 2)
        return " " * left + text + " " * (extra - left)
    return text + " " * extra


# ---------------------------------------------------------------------------
# Column <-> index conversion
# ---------------------------------------------------------------------------


def column_to_index(text: str, column: int) -> int:
    """Return the string index in *text* where visible *column* starts.

    Columns past the end of the text map to ``len(text)``; a column that
    lands inside a wide character maps to the start of that character.
    """
    if column <= 0:
        return 0

    cols = 0
    i = 0
    while i < len(text):
        match = _ANSI_AT_RE.match(text, i)
        if match is not None:
            i = match.end()
            continue

        g = next(grapheme.graphemes(text[i:]))
        w = _grapheme_width(g)
        if cols + w > column:
            return i
        cols += w
        i += len(g)
        if cols == column:
            return i

    return len(text)
