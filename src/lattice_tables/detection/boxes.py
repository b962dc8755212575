"""Box building -- cross the selected border lines into a cell grid.

Each segment of the top border (horizontal) spans one column; each segment of
the left border (vertical) spans one row.  A cell takes its x/width from its
column segment and its y/height from its row segment.
"""
from __future__ import annotations

from typing import Sequence

from ..models import Box, RulingLine
from ..transform import CoordinateTransformer


def build_boxes(
    hlines: Sequence[RulingLine],
    vlines: Sequence[RulingLine],
) -> tuple[tuple[Box, ...], ...]:
    """Return ``len(vlines)`` rows of ``len(hlines)`` boxes.

    Rows are ordered top-to-bottom by their vertical segment, boxes within a
    row left-to-right.
    """
    rows: list[tuple[float, tuple[Box, ...]]] = []
    for vline in vlines:
        row = [
            Box(x=hline.x_start, y=vline.y_start, w=hline.l, h=vline.l)
            for hline in hlines
        ]
        row.sort(key=lambda b: b.x)
        rows.append((vline.y_start, tuple(row)))
    rows.sort(key=lambda r: r[0])
    return tuple(row for _, row in rows)


def transform_boxes(
    rows: Sequence[Sequence[Box]],
    transformer: CoordinateTransformer,
) -> tuple[tuple[Box, ...], ...]:
    """Map every box of a grid into output space."""
    return tuple(tuple(transformer.box(b) for b in row) for row in rows)
