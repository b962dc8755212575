"""Tests for overlay rendering."""
from __future__ import annotations

from pathlib import Path

import pymupdf
import pytest

from lattice_tables.config import PageLayout
from lattice_tables.detection import LatticeTableDetector
from lattice_tables.models import Fill, Page, RulingLine, StyledText, TextRun
from lattice_tables.render import PymupdfSurface, render_overlay, render_page_image


class RecordingSurface:
    """Collects drawing calls instead of rasterizing."""

    def __init__(self, width: float = 800, height: float = 1200) -> None:
        self.width = width
        self.height = height
        self.rects: list[tuple] = []
        self.lines: list[tuple] = []
        self.fills: list[tuple] = []
        self.texts: list[tuple] = []

    def draw_rect(self, x, y, w, h, color, opacity=1.0):
        self.rects.append((x, y, w, h, color))

    def draw_line(self, x0, y0, x1, y1, color, opacity=1.0):
        self.lines.append((x0, y0, x1, y1, color))

    def fill_rect(self, x, y, w, h, color, opacity=1.0):
        self.fills.append((x, y, w, h))

    def draw_text(self, x, y, text, *, size, font, color, align="left", max_width=None):
        self.texts.append((x, y, text, size, font))

    def save_png(self, path):
        return path


def _line(x: float, y: float, length: float) -> RulingLine:
    return RulingLine(x=x, y=y, w=0.0, l=length)


def _page() -> Page:
    """400x600 page: 1 row x 2 columns plus a stray rule."""
    return Page(
        width=400,
        height=600,
        hlines=(_line(10, 10, 50), _line(60, 10, 50), _line(10, 30, 50), _line(60, 30, 50)),
        vlines=(_line(10, 10, 20), _line(60, 10, 20), _line(110, 10, 20)),
        texts=(
            TextRun(x=15, y=12, w=20, runs=(StyledText("Net%20Pay", face_id=3, size=9),)),
            TextRun(x=300, y=500, runs=(StyledText("footer"),)),
        ),
        fills=(Fill(0, 0, 400, 5),),
    )


@pytest.fixture
def layout() -> PageLayout:
    """Doubles every coordinate of a 400x600 page."""
    return PageLayout(width=8, height=12, resolution=100)


class TestRenderOverlay:
    def test_cells_transformed(self, layout: PageLayout) -> None:
        page = _page()
        grid = LatticeTableDetector(layout).detect(page)
        surface = RecordingSurface()
        render_overlay(page, grid, layout, surface, layers=("cells",))
        assert [r[:4] for r in surface.rects] == [(20, 20, 100, 40), (120, 20, 100, 40)]
        assert surface.texts == []

    def test_texts_only_bound_runs(self, layout: PageLayout) -> None:
        page = _page()
        grid = LatticeTableDetector(layout).detect(page)
        surface = RecordingSurface()
        render_overlay(page, grid, layout, surface, layers=("texts",))
        assert surface.texts == [(30, 24, "Net Pay", 9, "cour")]

    def test_debug_layers(self, layout: PageLayout) -> None:
        page = _page()
        grid = LatticeTableDetector(layout).detect(page)
        surface = RecordingSurface()
        render_overlay(page, grid, layout, surface, layers=("fills", "ruling_lines", "selected_lines"))
        assert surface.fills == [(0, 0, 800, 10)]
        # every line on the page, then the two selected border groups
        assert len(surface.lines) == 7 + 2 + 1
        assert (20, 20, 120, 20, (0.0, 0.0, 0.0)) in surface.lines

    def test_empty_grid_draws_nothing(self, layout: PageLayout) -> None:
        page = Page(width=400, height=600)
        grid = LatticeTableDetector(layout).detect(page)
        surface = RecordingSurface()
        render_overlay(page, grid, layout, surface)
        assert surface.rects == surface.texts == []


class TestRenderPageImage:
    def test_png_written_at_layout_size(self, tmp_path: Path) -> None:
        layout = PageLayout(width=2, height=3, resolution=50)
        page = Page(
            width=200,
            height=300,
            hlines=(_line(10, 10, 50),),
            vlines=(_line(10, 10, 20),),
            texts=(TextRun(x=12, y=12, runs=(StyledText("x"),)),),
        )
        grid = LatticeTableDetector(layout).detect(page)
        out = render_page_image(page, grid, layout, tmp_path / "sub" / "page.png")
        assert out.exists()
        with open(out, "rb") as f:
            assert f.read(4) == b"\x89PNG"
        pix = pymupdf.Pixmap(str(out))
        assert (pix.width, pix.height) == (100, 150)


class TestPymupdfSurface:
    def test_text_alignment_and_fit(self, tmp_path: Path) -> None:
        surface = PymupdfSurface(200, 100)
        try:
            surface.draw_text(100, 10, "centered", size=12, font="helv", color=(0, 0, 0), align="center")
            surface.draw_text(190, 40, "right", size=12, font="tiro", color=(0, 0, 0), align="right")
            surface.draw_text(10, 70, "squeezed into a narrow box", size=12, font="cour",
                              color=(0, 0, 0), max_width=30)
            surface.draw_text(10, 90, "", size=12, font="helv", color=(0, 0, 0))
            out = surface.save_png(tmp_path / "text.png")
        finally:
            surface.close()
        assert out.stat().st_size > 0
