"""Grid selection -- pick the line group that forms the table border on one axis.

Every line group gets a *span*: the rendered distance from the start of its
earliest-starting line to the end of its latest-ending line.  Border lines of
a lattice are drawn with a uniform extent, while decorative rules are shorter
or longer outliers, so the group whose span equals the median span is taken
as the border.  When several groups share that span the one with the lowest
coordinate wins.
"""
from __future__ import annotations

import logging
from typing import Callable, Mapping, Sequence

from ..models import AxisSelection, AxisStatus, LineGroup, Page, RulingLine
from ..transform import CoordinateTransformer
from .clustering import group_horizontal, group_vertical

logger = logging.getLogger(__name__)


def horizontal_span(lines: Sequence[RulingLine], transformer: CoordinateTransformer) -> float:
    """Rendered x-extent covered by a group of horizontal lines."""
    if not lines:
        return 0.0
    start = min(line.x_start for line in lines)
    end = max(line.x_end for line in lines)
    x0, _ = transformer.point(start, 0.0)
    x1, _ = transformer.point(end, 0.0)
    return x1 - x0


def vertical_span(lines: Sequence[RulingLine], transformer: CoordinateTransformer) -> float:
    """Rendered y-extent covered by a group of vertical lines."""
    if not lines:
        return 0.0
    start = min(line.y_start for line in lines)
    end = max(line.y_end for line in lines)
    _, y0 = transformer.point(0.0, start)
    _, y1 = transformer.point(0.0, end)
    return y1 - y0


def _spans_match(span: float, reference: float, tolerance: float) -> bool:
    if tolerance == 0:
        return span == reference
    return abs(span - reference) <= tolerance


def select_group(
    groups: Mapping[float, Sequence[RulingLine]],
    span_of: Callable[[Sequence[RulingLine]], float],
    *,
    tolerance: float = 0.0,
) -> AxisSelection:
    """Return the first group (by coordinate) whose span matches the median span.

    Parameters
    ----------
    groups:
        Clusterer output, coordinate -> lines.
    span_of:
        Measures the span of one group.
    tolerance:
        Maximum absolute span difference still counted as a match.
        ``0`` requires exact equality.

    Returns
    -------
    AxisSelection
        ``MISSING_GEOMETRY`` when there are no groups, ``AMBIGUOUS_GRID``
        when no group matches the median span, else ``SELECTED``.
    """
    if not groups:
        return AxisSelection(status=AxisStatus.MISSING_GEOMETRY)

    measured = [
        LineGroup(key=key, lines=tuple(lines), span=span_of(lines))
        for key, lines in groups.items()
    ]

    by_span = sorted(measured, key=lambda g: g.span)
    reference = by_span[len(by_span) // 2].span

    for group in sorted(measured, key=lambda g: g.key):
        if _spans_match(group.span, reference, tolerance):
            return AxisSelection(
                status=AxisStatus.SELECTED, group=group, candidates=len(measured),
            )

    logger.warning(
        "No line group matches median span %.6f among %d candidates",
        reference, len(measured),
    )
    return AxisSelection(status=AxisStatus.AMBIGUOUS_GRID, candidates=len(measured))


def select_horizontal(
    page: Page,
    transformer: CoordinateTransformer,
    *,
    tolerance: float = 0.0,
) -> AxisSelection:
    """Select the top border: the horizontal group whose segments define columns."""
    return select_group(
        group_horizontal(page.hlines),
        lambda lines: horizontal_span(lines, transformer),
        tolerance=tolerance,
    )


def select_vertical(
    page: Page,
    transformer: CoordinateTransformer,
    *,
    tolerance: float = 0.0,
) -> AxisSelection:
    """Select the left border: the vertical group whose segments define rows."""
    return select_group(
        group_vertical(page.vlines),
        lambda lines: vertical_span(lines, transformer),
        tolerance=tolerance,
    )
