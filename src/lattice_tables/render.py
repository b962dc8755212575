"""Overlay rendering -- draw a detected table over a blank output page as PNG.

The drawing surface is a PyMuPDF page sized in output pixels (one point per
pixel), rasterized at 72 dpi so the PNG matches ``layout.pixel_width`` x
``layout.pixel_height``.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import pymupdf

from .config import PageLayout
from .interfaces import Color, DrawingSurfaceProtocol
from .models import Page, RulingLine, TableGrid, TextRun
from .transform import CoordinateTransformer

logger = logging.getLogger(__name__)

# pdf2json face id -> PyMuPDF base-14 font
FACE_FONTS = {0: "helv", 1: "helv", 2: "tiro", 3: "cour", 4: "cour", 5: "cour"}

DEFAULT_LAYERS = ("cells", "texts")
_LINE_COLOR: Color = (0.0, 0.0, 0.0)
_SELECTED_H_COLOR: Color = (1.0, 0.0, 0.0)
_SELECTED_V_COLOR: Color = (0.0, 1.0, 0.0)
_FILL_COLOR: Color = (0.85, 0.85, 0.85)


class PymupdfSurface:
    """DrawingSurfaceProtocol backed by an in-memory PyMuPDF page."""

    def __init__(self, width: float, height: float, background: Color = (1.0, 1.0, 1.0)) -> None:
        self._doc = pymupdf.open()
        self._page = self._doc.new_page(width=width, height=height)
        self._page.draw_rect(self._page.rect, color=None, fill=background, width=0)

    @property
    def width(self) -> float:
        return self._page.rect.width

    @property
    def height(self) -> float:
        return self._page.rect.height

    def draw_rect(self, x: float, y: float, w: float, h: float, color: Color, opacity: float = 1.0) -> None:
        self._page.draw_rect(
            pymupdf.Rect(x, y, x + w, y + h), color=color, width=1, stroke_opacity=opacity,
        )

    def draw_line(self, x0: float, y0: float, x1: float, y1: float, color: Color, opacity: float = 1.0) -> None:
        self._page.draw_line(
            pymupdf.Point(x0, y0), pymupdf.Point(x1, y1),
            color=color, width=1, stroke_opacity=opacity,
        )

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color, opacity: float = 1.0) -> None:
        self._page.draw_rect(
            pymupdf.Rect(x, y, x + w, y + h), color=None, fill=color, fill_opacity=opacity, width=0,
        )

    def draw_text(
        self,
        x: float,
        y: float,
        text: str,
        *,
        size: float,
        font: str,
        color: Color,
        align: str = "left",
        max_width: float | None = None,
    ) -> None:
        if not text or size <= 0:
            return
        face = pymupdf.Font(font)
        length = face.text_length(text, fontsize=size)
        if max_width and 0 < max_width < length:
            size *= max_width / length
            length = max_width
        if align == "center":
            x -= length / 2
        elif align == "right":
            x -= length
        baseline = y + face.ascender * size
        self._page.insert_text(
            pymupdf.Point(x, baseline), text, fontsize=size, fontname=font, color=color,
        )

    def save_png(self, path: Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        pix = self._page.get_pixmap(dpi=72)
        pix.save(str(path))
        return path

    def close(self) -> None:
        self._doc.close()


def _draw_hline(surface: DrawingSurfaceProtocol, t: CoordinateTransformer, line: RulingLine,
                color: Color, opacity: float) -> None:
    x0, y0 = t.point(line.x_start, line.y)
    length, _ = t.extent(line.l, 0.0)
    surface.draw_line(x0, y0, x0 + length, y0, color, opacity)


def _draw_vline(surface: DrawingSurfaceProtocol, t: CoordinateTransformer, line: RulingLine,
                color: Color, opacity: float) -> None:
    x0, y0 = t.point(line.x, line.y_start)
    _, length = t.extent(0.0, line.l)
    surface.draw_line(x0, y0, x0, y0 + length, color, opacity)


def _draw_texts(surface: DrawingSurfaceProtocol, t: CoordinateTransformer,
                texts: Iterable[TextRun], color: Color) -> None:
    for run in texts:
        x, y = t.point(run.x, run.y)
        max_width, _ = t.extent(run.w, run.sw)
        surface.draw_text(
            x, y, run.decoded_text(),
            size=run.font_size,
            font=FACE_FONTS.get(run.face_id, "helv"),
            color=color,
            align=run.align,
            max_width=max_width or None,
        )


def render_overlay(
    page: Page,
    grid: TableGrid,
    layout: PageLayout,
    surface: DrawingSurfaceProtocol,
    *,
    layers: Iterable[str] = DEFAULT_LAYERS,
    color: Color = (0.0, 0.0, 1.0),
) -> None:
    """Draw the requested layers of a page and its detected grid onto ``surface``.

    Layers, drawn bottom-up: ``fills``, ``ruling_lines`` (every line on the
    page), ``selected_lines`` (the chosen borders), ``cells`` (cell outlines)
    and ``texts`` (the runs bound to cells).
    """
    layers = set(layers)
    t = CoordinateTransformer.for_page(layout, page)

    if "fills" in layers:
        for fill in page.fills:
            x, y = t.point(fill.x, fill.y)
            w, h = t.extent(fill.w, fill.h)
            surface.fill_rect(x, y, w, h, _FILL_COLOR, 0.5)

    if "ruling_lines" in layers:
        for line in page.hlines:
            _draw_hline(surface, t, line, _LINE_COLOR, 0.5)
        for line in page.vlines:
            _draw_vline(surface, t, line, _LINE_COLOR, 0.5)

    if "selected_lines" in layers:
        for line in grid.hlines:
            _draw_hline(surface, t, line, _SELECTED_H_COLOR, 1.0)
        for line in grid.vlines:
            _draw_vline(surface, t, line, _SELECTED_V_COLOR, 1.0)

    for row in grid.rows:
        for cell in row:
            if "cells" in layers:
                box = t.box(cell.box)
                surface.draw_rect(box.x, box.y, box.w, box.h, color)
            if "texts" in layers:
                _draw_texts(surface, t, cell.texts, color)


def render_page_image(
    page: Page,
    grid: TableGrid,
    layout: PageLayout,
    output_path: Path | str,
    *,
    layers: Iterable[str] = DEFAULT_LAYERS,
    color: Color = (0.0, 0.0, 1.0),
) -> Path:
    """Render the overlay for one page to a PNG and return its path."""
    surface = PymupdfSurface(layout.pixel_width, layout.pixel_height)
    try:
        render_overlay(page, grid, layout, surface, layers=layers, color=color)
        return surface.save_png(Path(output_path))
    finally:
        surface.close()
