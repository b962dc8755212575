"""Native page units -> output page space.

``output = native * (layout_dimension * resolution / page_dimension)``,
applied independently per axis.
"""
from __future__ import annotations

from .config import PageLayout
from .models import Box, Page


class CoordinateTransformer:
    """Scales points and extents of one page into the configured output space."""

    def __init__(self, layout: PageLayout, page_width: float, page_height: float) -> None:
        if page_width <= 0 or page_height <= 0:
            raise ValueError(
                f"Page dimensions must be positive, got {page_width}x{page_height}"
            )
        self.layout = layout
        self.scale_x = layout.width * layout.resolution / page_width
        self.scale_y = layout.height * layout.resolution / page_height

    @classmethod
    def for_page(cls, layout: PageLayout, page: Page) -> CoordinateTransformer:
        return cls(layout, page.width, page.height)

    def point(self, x: float, y: float) -> tuple[float, float]:
        return x * self.scale_x, y * self.scale_y

    def extent(self, w: float, h: float) -> tuple[float, float]:
        return w * self.scale_x, h * self.scale_y

    def box(self, box: Box) -> Box:
        x, y = self.point(box.x, box.y)
        w, h = self.extent(box.w, box.h)
        return Box(x=x, y=y, w=w, h=h)

    def inverse_point(self, x: float, y: float) -> tuple[float, float]:
        """Map an output-space point back to native page units."""
        return x / self.scale_x, y / self.scale_y
