"""
Protocol definitions for the collaborators around the detector.
"""
from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .models import Document

Color = tuple[float, float, float]


class PageModelReaderProtocol(Protocol):
    """Interface for turning an input file into a page model."""

    def __call__(self, path: Path | str) -> Document:
        """Read the file. Raises PageModelError when the input is unusable."""
        ...


class DrawingSurfaceProtocol(Protocol):
    """Interface for the overlay drawing surface.

    Coordinates are in output space (pixels); the origin is top-left.
    """

    @property
    def width(self) -> float:
        ...

    @property
    def height(self) -> float:
        ...

    def draw_rect(self, x: float, y: float, w: float, h: float, color: Color, opacity: float = 1.0) -> None:
        """Stroke a rectangle outline."""
        ...

    def draw_line(self, x0: float, y0: float, x1: float, y1: float, color: Color, opacity: float = 1.0) -> None:
        """Stroke a straight segment."""
        ...

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color, opacity: float = 1.0) -> None:
        """Fill a rectangle."""
        ...

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
        """Draw text with its top-left corner (or top-center/right per align) at x, y."""
        ...

    def save_png(self, path: Path) -> Path:
        """Write the surface as a PNG image."""
        ...
