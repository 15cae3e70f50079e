"""Tests for pi.table.columns -- descriptors, column model and synthesis."""

from __future__ import annotations

import pytest

from pi.table.columns import ColumnDescriptor, ColumnModel, default_column_model
from pi.table.config import TableOptions
from pi.table.errors import LayoutError, TableIndexError
from pi.table.model import ListTableModel
from pi.table.renderers import TextRenderer


def _columns(*widths: int, margin: int = 1) -> ColumnModel:
    return ColumnModel(
        [ColumnDescriptor(model_index=i, width=w) for i, w in enumerate(widths)],
        margin=margin,
    )


class TestColumnDescriptor:
    """Descriptors validate their layout at construction time."""

    def test_defaults(self) -> None:
        column = ColumnDescriptor(model_index=0, width=5)
        assert column.alignment == "left"
        assert isinstance(column.renderer, TextRenderer)
        assert column.title is None

    @pytest.mark.parametrize("width", [0, -1])
    def test_non_positive_width_rejected(self, width: int) -> None:
        with pytest.raises(LayoutError):
            ColumnDescriptor(model_index=0, width=width)

    def test_negative_model_index_rejected(self) -> None:
        with pytest.raises(LayoutError):
            ColumnDescriptor(model_index=-1, width=3)

    def test_unknown_alignment_rejected(self) -> None:
        with pytest.raises(LayoutError):
            ColumnDescriptor(model_index=0, width=3, alignment="justify")  # type: ignore[arg-type]

    def test_layout_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            ColumnDescriptor(model_index=0, width=0)


class TestColumnModelPositions:
    """Cumulative start offsets of display columns."""

    def test_positions_include_margin(self) -> None:
        assert _columns(3, 3).column_positions() == (0, 4)

    def test_positions_without_margin(self) -> None:
        assert _columns(2, 5, 1, margin=0).column_positions() == (0, 2, 7)

    def test_wide_margin(self) -> None:
        assert _columns(4, 2, 6, margin=3).column_positions() == (0, 7, 12)

    @pytest.mark.parametrize(
        "widths,margin",
        [((1,), 0), ((3, 3), 1), ((5, 1, 8, 2), 2), ((1, 1, 1, 1, 1), 0)],
    )
    def test_positions_advance_by_at_least_width(
        self, widths: tuple[int, ...], margin: int
    ) -> None:
        columns = _columns(*widths, margin=margin)
        positions = columns.column_positions()
        for i in range(len(positions) - 1):
            assert positions[i + 1] >= positions[i]
            assert positions[i + 1] - positions[i] >= columns.column_width(i)

    def test_bounds(self) -> None:
        assert _columns(3, 2, margin=1).column_bounds() == [(0, 3), (4, 6)]

    def test_total_width(self) -> None:
        assert _columns(3, 2, margin=1).total_width() == 6

    def test_empty_model(self) -> None:
        columns = ColumnModel()
        assert columns.column_count() == 0
        assert columns.column_positions() == ()
        assert columns.total_width() == 0


class TestColumnModelAccess:
    """Indexed access and edits."""

    def test_column_width(self) -> None:
        assert _columns(3, 7).column_width(1) == 7

    def test_column_width_out_of_range(self) -> None:
        with pytest.raises(TableIndexError):
            _columns(3).column_width(1)

    def test_negative_margin_rejected(self) -> None:
        with pytest.raises(LayoutError):
            _columns(3, margin=-1)

    def test_with_column_returns_new_model(self) -> None:
        columns = _columns(3, 3)
        wider = columns.with_column(0, width=6)
        assert wider.column_positions() == (0, 7)
        assert columns.column_positions() == (0, 4)

    def test_with_column_validates(self) -> None:
        with pytest.raises(LayoutError):
            _columns(3).with_column(0, width=0)

    def test_equality(self) -> None:
        assert _columns(3, 4) == _columns(3, 4)
        assert _columns(3, 4) != _columns(3, 4, margin=2)

    def test_check_model_rejects_dangling_model_index(self) -> None:
        columns = ColumnModel([ColumnDescriptor(model_index=2, width=3)])
        with pytest.raises(TableIndexError):
            columns.check_model(ListTableModel([["a", "b"]]))

    def test_reordered_columns(self) -> None:
        columns = ColumnModel(
            [ColumnDescriptor(model_index=1, width=2), ColumnDescriptor(model_index=0, width=4)]
        )
        assert [c.model_index for c in columns.columns()] == [1, 0]


class TestDefaultColumnModel:
    """Columns synthesized 1:1 from the table model."""

    def test_one_column_per_model_column_in_order(self) -> None:
        model = ListTableModel([["a", "bb", "c"]])
        columns = default_column_model(model)
        assert [c.model_index for c in columns.columns()] == [0, 1, 2]
        assert all(c.alignment == "left" for c in columns.columns())
        assert columns.column_margin() == 1

    def test_widths_fit_content(self) -> None:
        model = ListTableModel([["a", "bb"], ["ccc", "d"]])
        columns = default_column_model(model)
        assert [c.width for c in columns.columns()] == [3, 2]

    def test_headers_count_towards_width(self) -> None:
        model = ListTableModel([["a", "b"]], headers=["name", "x"])
        columns = default_column_model(model)
        assert [c.width for c in columns.columns()] == [4, 1]
        assert [c.title for c in columns.columns()] == ["name", "x"]

    def test_fixed_default_width(self) -> None:
        model = ListTableModel([["a", "something long"]])
        columns = default_column_model(model, TableOptions(default_width=6))
        assert [c.width for c in columns.columns()] == [6, 6]

    def test_max_width_caps_content_width(self) -> None:
        model = ListTableModel([["a", "something long"]])
        columns = default_column_model(model, TableOptions(max_width=5))
        assert [c.width for c in columns.columns()] == [1, 5]

    def test_empty_column_uses_fallback_width(self) -> None:
        model = ListTableModel([], headers=["", ""])
        columns = default_column_model(model, TableOptions(fallback_width=4))
        assert [c.width for c in columns.columns()] == [4, 4]

    def test_options_margin_and_alignment(self) -> None:
        model = ListTableModel([["a"]])
        columns = default_column_model(model, TableOptions(margin=3, alignment="right"))
        assert columns.column_margin() == 3
        assert columns.column(0).alignment == "right"

    def test_invalid_options_rejected(self) -> None:
        with pytest.raises(LayoutError):
            default_column_model(ListTableModel([["a"]]), TableOptions(margin=-2))

    def test_zero_column_model(self) -> None:
        assert default_column_model(ListTableModel()).column_count() == 0
