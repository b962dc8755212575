"""Lattice table detector: ruling lines + text runs of one page -> TableGrid."""
from __future__ import annotations

import logging

from ..config import PageLayout
from ..models import AxisSelection, Box, Page, TableGrid
from ..transform import CoordinateTransformer
from .boxes import build_boxes, transform_boxes
from .cell_text import bind_grid
from .grid_selection import select_horizontal, select_vertical

logger = logging.getLogger(__name__)


class LatticeTableDetector:
    """Detects the single lattice table on a page.

    Holds only immutable configuration, so one instance can serve pages
    from any number of threads.
    """

    def __init__(self, layout: PageLayout | None = None, span_tolerance: float = 1e-6) -> None:
        self.layout = layout or PageLayout()
        self.span_tolerance = span_tolerance

    def select_axes(self, page: Page) -> tuple[AxisSelection, AxisSelection]:
        """Return ``(columns, rows)``: the selected horizontal and vertical groups."""
        transformer = CoordinateTransformer.for_page(self.layout, page)
        cols = select_horizontal(page, transformer, tolerance=self.span_tolerance)
        rows = select_vertical(page, transformer, tolerance=self.span_tolerance)
        return cols, rows

    def detect_boxes(self, page: Page) -> tuple[tuple[Box, ...], ...]:
        cols, rows = self.select_axes(page)
        return build_boxes(cols.lines, rows.lines)

    def detect_boxes_transformed(self, page: Page) -> tuple[tuple[Box, ...], ...]:
        """Cell rectangles in output space, for overlays."""
        transformer = CoordinateTransformer.for_page(self.layout, page)
        return transform_boxes(self.detect_boxes(page), transformer)

    def detect(self, page: Page) -> TableGrid:
        cols, rows = self.select_axes(page)
        boxes = build_boxes(cols.lines, rows.lines)
        grid = TableGrid(
            rows=bind_grid(boxes, page.texts),
            row_status=rows.status,
            col_status=cols.status,
            hlines=cols.lines,
            vlines=rows.lines,
        )
        logger.debug(
            "Detected %dx%d grid (rows: %s of %d groups, cols: %s of %d groups)",
            grid.n_rows, grid.n_cols,
            rows.status.value, rows.candidates,
            cols.status.value, cols.candidates,
        )
        return grid
