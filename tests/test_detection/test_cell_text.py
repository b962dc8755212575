"""Tests for binding text runs to cells."""
from __future__ import annotations

from lattice_tables.detection.cell_text import bind_cell, bind_grid, cell_text, texts_in_box
from lattice_tables.models import Box, StyledText, TextRun


def _text(x: float, y: float, raw: str) -> TextRun:
    return TextRun(x=x, y=y, runs=(StyledText(text=raw),))


BOX = Box(x=10, y=10, w=20, h=10)


class TestContainment:
    def test_inside(self) -> None:
        t = _text(15, 15, "a")
        assert texts_in_box(BOX, [t]) == [t]

    def test_left_and_top_edges_inclusive(self) -> None:
        t = _text(10, 10, "a")
        assert texts_in_box(BOX, [t]) == [t]

    def test_right_and_bottom_edges_exclusive(self) -> None:
        assert texts_in_box(BOX, [_text(30, 15, "a")]) == []
        assert texts_in_box(BOX, [_text(15, 20, "a")]) == []

    def test_shared_border_belongs_to_one_cell(self) -> None:
        left, right = Box(0, 0, 10, 10), Box(10, 0, 10, 10)
        t = _text(10, 5, "edge")
        assert texts_in_box(left, [t]) == []
        assert texts_in_box(right, [t]) == [t]

    def test_reading_order(self) -> None:
        """Top-to-bottom first, then left-to-right."""
        a = _text(20, 12, "a")
        b = _text(12, 12, "b")
        c = _text(11, 16, "c")
        assert texts_in_box(BOX, [c, a, b]) == [b, a, c]


class TestCellText:
    def test_percent_decoded_and_trimmed(self) -> None:
        runs = [_text(0, 0, "%20Total%3A%20"), _text(1, 0, "1%2C000")]
        assert cell_text(runs) == "Total: 1,000"

    def test_empty_fragments_skipped(self) -> None:
        assert cell_text([_text(0, 0, "a"), _text(1, 0, "%20"), _text(2, 0, "b")]) == "a b"

    def test_multiple_sub_runs(self) -> None:
        run = TextRun(x=0, y=0, runs=(StyledText("Net"), StyledText("%20Pay")))
        assert cell_text([run]) == "Net Pay"

    def test_no_runs(self) -> None:
        assert cell_text([]) == ""


class TestBind:
    def test_bind_cell(self) -> None:
        inside = _text(12, 12, "Hello")
        outside = _text(50, 50, "World")
        cell = bind_cell(BOX, [inside, outside])
        assert cell.box == BOX
        assert cell.texts == (inside,)
        assert cell.text == "Hello"

    def test_bind_grid_shape(self) -> None:
        rows = ((Box(0, 0, 10, 10), Box(10, 0, 10, 10)), (Box(0, 10, 10, 10), Box(10, 10, 10, 10)))
        grid = bind_grid(rows, [_text(15, 15, "x")])
        assert [[c.text for c in row] for row in grid] == [["", ""], ["", "x"]]
