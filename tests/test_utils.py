"""Tests for pi.table.utils -- width measurement, truncation and padding."""

from __future__ import annotations

from pi.table.utils import (
    column_to_index,
    pad_to_width,
    single_line,
    truncate_to_width,
    visible_width,
)


class TestVisibleWidth:
    """Measure the visible terminal width of text."""

    def test_plain_ascii(self) -> None:
        assert visible_width("hello") == 5

    def test_empty_string(self) -> None:
        assert visible_width("") == 0

    def test_ansi_codes_do_not_count(self) -> None:
        assert visible_width("\x1b[1mhi\x1b[0m") == 2

    def test_wide_cjk_characters_count_as_two(self) -> None:
        assert visible_width("世") == 2

    def test_mixed_ascii_and_wide(self) -> None:
        assert visible_width("A世B") == 4


class TestTruncateToWidth:
    """Cut text that is too wide and append an ellipsis."""

    def test_short_text_unchanged(self) -> None:
        assert truncate_to_width("abc", 5) == "abc"

    def test_exact_width_unchanged(self) -> None:
        assert truncate_to_width("abcde", 5) == "abcde"

    def test_long_text_keeps_prefix_and_ellipsis(self) -> None:
        assert truncate_to_width("abcdefghij", 6) == "abc..."

    def test_width_below_ellipsis_returns_partial_ellipsis(self) -> None:
        assert truncate_to_width("abcdef", 2) == ".."
        assert truncate_to_width("abcdef", 1) == "."

    def test_width_equal_to_ellipsis(self) -> None:
        assert truncate_to_width("abcdef", 3) == "..."

    def test_zero_width_is_empty(self) -> None:
        assert truncate_to_width("abc", 0) == ""

    def test_custom_ellipsis(self) -> None:
        assert truncate_to_width("abcdefgh", 5, "~") == "abcd~"

    def test_wide_characters_never_overflow(self) -> None:
        result = truncate_to_width("世世世世", 6)
        assert visible_width(result) <= 6
        assert result.endswith("...")


class TestPadToWidth:
    """Pad text to an exact width with left, right or center alignment."""

    def test_left(self) -> None:
        assert pad_to_width("ab", 10, "left") == "ab        "

    def test_right(self) -> None:
        assert pad_to_width("ab", 10, "right") == "        ab"

    def test_center_even_remainder(self) -> None:
        assert pad_to_width("ab", 10, "center") == "    ab    "

    def test_center_odd_remainder_is_left_biased(self) -> None:
        assert pad_to_width("ab", 5, "center") == "  ab "

    def test_exact_fit_has_no_padding(self) -> None:
        assert pad_to_width("abc", 3, "right") == "abc"

    def test_too_wide_text_is_cut(self) -> None:
        assert pad_to_width("abcdef", 4) == "abcd"

    def test_wide_character_at_edge_is_replaced_by_space(self) -> None:
        result = pad_to_width("a世", 2)
        assert result == "a "
        assert visible_width(result) == 2


class TestSingleLine:
    """Line breaks inside a value collapse into one space."""

    def test_newlines_collapse(self) -> None:
        assert single_line("a\nb\r\n\nc") == "a b c"

    def test_plain_text_unchanged(self) -> None:
        assert single_line("abc") == "abc"

    def test_tab_becomes_three_spaces(self) -> None:
        assert single_line("a\tb") == "a   b"

    def test_control_characters_removed(self) -> None:
        assert single_line("a\x00b\x1bc\x9fd") == "abcd"

    def test_escape_sequences_kept(self) -> None:
        text = "\x1b[31mred\x1b[0m \x1b]8;;https://example.com\x07link\x1b]8;;\x07"
        assert single_line(text) == text

    def test_result_width_matches_length_for_ascii(self) -> None:
        flattened = single_line("x\ty\x01z")
        assert visible_width(flattened) == len(flattened)


class TestColumnToIndex:
    """Convert a visible column into a string index."""

    def test_ascii_is_identity(self) -> None:
        assert column_to_index("abcdef", 3) == 3

    def test_zero_column(self) -> None:
        assert column_to_index("abc", 0) == 0

    def test_past_end_clamps_to_length(self) -> None:
        assert column_to_index("abc", 10) == 3

    def test_after_wide_character(self) -> None:
        # "世" occupies columns 0-1, "b" starts at column 2
        assert column_to_index("世b", 2) == 1

    def test_inside_wide_character_maps_to_its_start(self) -> None:
        assert column_to_index("a世b", 2) == 1
