"""Line clustering -- group ruling lines by their constant coordinate.

Horizontal lines are keyed by ``y``, vertical lines by ``x``.  Keys appear in
first-encounter order and each group keeps its lines in encounter order.
"""
from __future__ import annotations

from typing import Iterable

from ..models import RulingLine


def group_horizontal(lines: Iterable[RulingLine]) -> dict[float, list[RulingLine]]:
    """Group horizontal lines sharing the same ``y``."""
    groups: dict[float, list[RulingLine]] = {}
    for line in lines:
        groups.setdefault(line.y, []).append(line)
    return groups


def group_vertical(lines: Iterable[RulingLine]) -> dict[float, list[RulingLine]]:
    """Group vertical lines sharing the same ``x``.

    Once a group holds more than two lines, a leading segment that ends
    before the second segment starts is a stray piece detached from the
    continuous border and is dropped.
    """
    groups: dict[float, list[RulingLine]] = {}
    for line in lines:
        group = groups.setdefault(line.x, [])
        group.append(line)
        if len(group) > 2:
            first, second = group[0], group[1]
            if first.y + first.l < second.y:
                del group[0]
    return groups
