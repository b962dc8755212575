"""
All dataclasses for the system. No dependencies on implementation modules.

Page-model entities mirror what a document parser hands over for one page.
Derived entities (boxes, cells, grids) are produced per page by the detector
and never mutated afterwards.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import unquote


# =============================================================================
# PAGE MODEL
# =============================================================================

@dataclass(frozen=True)
class RulingLine:
    """A drawn horizontal or vertical segment.

    ``x``/``y`` is the line's anchor, ``w`` its stroke thickness and ``l`` its
    length.  A horizontal line covers ``[x - w/2, x - w/2 + l]`` on the x-axis;
    a vertical line covers ``[y - w/2, y - w/2 + l]`` on the y-axis.
    """
    x: float
    y: float
    w: float
    l: float  # noqa: E741
    color: str | None = None

    @property
    def x_start(self) -> float:
        return self.x - self.w / 2

    @property
    def x_end(self) -> float:
        return self.x - self.w / 2 + self.l

    @property
    def y_start(self) -> float:
        return self.y - self.w / 2

    @property
    def y_end(self) -> float:
        return self.y - self.w / 2 + self.l

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"x": self.x, "y": self.y, "w": self.w, "l": self.l}
        if self.color is not None:
            d["oc"] = self.color
        return d


@dataclass(frozen=True)
class StyledText:
    """One styled sub-run of a text run. ``text`` is percent-encoded."""
    text: str
    face_id: int = 0
    size: float = 12.0
    style: int = -1
    bold: bool = False
    italic: bool = False

    def decoded(self) -> str:
        return unquote(self.text)

    def to_dict(self) -> dict[str, Any]:
        return {
            "T": self.text,
            "S": self.style,
            "TS": [self.face_id, self.size, int(self.bold), int(self.italic)],
        }


@dataclass(frozen=True)
class TextRun:
    """A positioned text fragment anchored at its top-left point."""
    x: float
    y: float
    runs: tuple[StyledText, ...]
    w: float = 0.0
    sw: float = 0.0
    align: str = "left"

    def decoded_text(self) -> str:
        """Percent-decoded content of all sub-runs."""
        return "".join(r.decoded() for r in self.runs)

    @property
    def font_size(self) -> float:
        return self.runs[0].size if self.runs else 12.0

    @property
    def face_id(self) -> int:
        return self.runs[0].face_id if self.runs else 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "w": self.w,
            "sw": self.sw,
            "A": self.align,
            "R": [r.to_dict() for r in self.runs],
        }


@dataclass(frozen=True)
class Fill:
    """A filled rectangle (shading, backgrounds)."""
    x: float
    y: float
    w: float
    h: float
    color: int | str | None = None


@dataclass(frozen=True)
class Page:
    """Read-only model of one parsed page, in native page units."""
    width: float
    height: float
    hlines: tuple[RulingLine, ...] = ()
    vlines: tuple[RulingLine, ...] = ()
    texts: tuple[TextRun, ...] = ()
    fills: tuple[Fill, ...] = ()


@dataclass(frozen=True)
class Document:
    """Ordered pages of one parsed document."""
    pages: tuple[Page, ...]
    meta: dict[str, Any] = field(default_factory=dict)
    source: Path | None = None

    def __len__(self) -> int:
        return len(self.pages)


# =============================================================================
# DETECTION MODELS
# =============================================================================

class AxisStatus(enum.Enum):
    """Outcome of grid selection on one axis."""

    SELECTED = "selected"
    MISSING_GEOMETRY = "missing_geometry"  # no ruling lines on this axis
    AMBIGUOUS_GRID = "ambiguous_grid"      # no group matched the median span


@dataclass(frozen=True)
class LineGroup:
    """Ruling lines sharing one primary coordinate, with their rendered span."""
    key: float
    lines: tuple[RulingLine, ...]
    span: float


@dataclass(frozen=True)
class AxisSelection:
    """The group chosen as the table border on one axis (or why none was)."""
    status: AxisStatus
    group: LineGroup | None = None
    candidates: int = 0

    @property
    def lines(self) -> tuple[RulingLine, ...]:
        return self.group.lines if self.group is not None else ()


@dataclass(frozen=True)
class Box:
    """A cell rectangle, top-left anchored."""
    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def contains(self, x: float, y: float) -> bool:
        """Half-open containment: left/top edges inclusive, right/bottom exclusive."""
        return self.x <= x < self.right and self.y <= y < self.bottom

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "w": self.w, "h": self.h}


@dataclass(frozen=True)
class Cell:
    """A box with the text runs bound to it, in reading order."""
    box: Box
    texts: tuple[TextRun, ...]
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "box": self.box.to_dict(),
            "texts": [t.to_dict() for t in self.texts],
            "textContent": self.text,
        }


@dataclass(frozen=True)
class TableGrid:
    """Detected lattice for one page: rows top-to-bottom, cells left-to-right."""
    rows: tuple[tuple[Cell, ...], ...]
    row_status: AxisStatus = AxisStatus.SELECTED
    col_status: AxisStatus = AxisStatus.SELECTED
    hlines: tuple[RulingLine, ...] = ()
    vlines: tuple[RulingLine, ...] = ()

    @property
    def n_rows(self) -> int:
        return len(self.rows)

    @property
    def n_cols(self) -> int:
        return max((len(r) for r in self.rows), default=0)

    @property
    def is_empty(self) -> bool:
        return self.n_rows == 0 or self.n_cols == 0

    def text_rows(self) -> list[list[str]]:
        """The grid as plain cell strings."""
        return [[cell.text for cell in row] for row in self.rows]

    def to_dict(self) -> list[list[dict[str, Any]]]:
        """JSON-serializable grid, one dict per cell."""
        return [[cell.to_dict() for cell in row] for row in self.rows]
