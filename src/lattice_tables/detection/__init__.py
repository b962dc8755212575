"""Lattice detection: line clustering, grid selection, box building, text binding."""

from .boxes import build_boxes, transform_boxes
from .cell_text import bind_cell, bind_grid, cell_text, texts_in_box
from .clustering import group_horizontal, group_vertical
from .detector import LatticeTableDetector
from .grid_selection import (
    horizontal_span,
    select_group,
    select_horizontal,
    select_vertical,
    vertical_span,
)

__all__ = [
    "LatticeTableDetector",
    "bind_cell",
    "bind_grid",
    "build_boxes",
    "cell_text",
    "group_horizontal",
    "group_vertical",
    "horizontal_span",
    "select_group",
    "select_horizontal",
    "select_vertical",
    "texts_in_box",
    "transform_boxes",
    "vertical_span",
]
