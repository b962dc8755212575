"""Cell-text binding -- assign text runs to the cell containing their anchor."""
from __future__ import annotations

from typing import Sequence

from ..models import Box, Cell, TextRun


def texts_in_box(box: Box, texts: Sequence[TextRun]) -> list[TextRun]:
    """Text runs anchored inside ``box``, in reading order.

    Containment is half-open so a run sitting on a shared border belongs to
    exactly one cell.  Reading order is top-to-bottom, then left-to-right.
    """
    matched = [t for t in texts if box.contains(t.x, t.y)]
    matched.sort(key=lambda t: t.x)
    matched.sort(key=lambda t: t.y)
    return matched


def cell_text(texts: Sequence[TextRun]) -> str:
    """Join the decoded, trimmed runs with single spaces."""
    parts = (t.decoded_text().strip() for t in texts)
    return " ".join(p for p in parts if p)


def bind_cell(box: Box, texts: Sequence[TextRun]) -> Cell:
    matched = texts_in_box(box, texts)
    return Cell(box=box, texts=tuple(matched), text=cell_text(matched))


def bind_grid(
    rows: Sequence[Sequence[Box]],
    texts: Sequence[TextRun],
) -> tuple[tuple[Cell, ...], ...]:
    """Bind page text to every box of a grid."""
    return tuple(tuple(bind_cell(box, texts) for box in row) for row in rows)
