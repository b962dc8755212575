"""Page-model readers: pdf2json JSON and PDF (via PyMuPDF) -> Document.

Both readers produce the same model: ruling lines as ``(x, y, w, l)`` with
``w`` the stroke thickness, text runs anchored at their top-left corner with
percent-encoded content, and filled rectangles.  Coordinates are y-down.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any
from urllib.parse import quote

import pymupdf

from .models import Document, Fill, Page, RulingLine, StyledText, TextRun

logger = logging.getLogger(__name__)

# Axis-alignment slack (points) for classifying a drawn segment.
_AXIS_EPS = 0.5
# Filled/stroked rectangles no thicker than this are treated as ruling lines.
_MAX_RULE_THICKNESS = 2.0
# Coordinates are rounded so that segments of one border share a key.
_PRECISION = 3

# Face ids follow pdf2json's font-face table ordering.
FACE_SANS = 0
FACE_SERIF = 2
FACE_MONO = 3


class PageModelError(Exception):
    """The input document could not be turned into a page model."""


# ---------------------------------------------------------------------------
# pdf2json
# ---------------------------------------------------------------------------

def _line_from_json(d: dict[str, Any]) -> RulingLine:
    return RulingLine(
        x=float(d["x"]),
        y=float(d["y"]),
        w=float(d.get("w", 0.0)),
        l=float(d["l"]),
        color=d.get("oc"),
    )


def _text_from_json(d: dict[str, Any]) -> TextRun:
    runs = []
    for r in d.get("R", []):
        ts = list(r.get("TS", [])) + [0, 12.0, 0, 0][len(r.get("TS", [])):]
        runs.append(StyledText(
            text=r.get("T", ""),
            face_id=int(ts[0]),
            size=float(ts[1]),
            style=int(r.get("S", -1)),
            bold=bool(ts[2]),
            italic=bool(ts[3]),
        ))
    return TextRun(
        x=float(d["x"]),
        y=float(d["y"]),
        runs=tuple(runs),
        w=float(d.get("w", 0.0)),
        sw=float(d.get("sw", 0.0)),
        align=d.get("A", "left"),
    )


def _fill_from_json(d: dict[str, Any]) -> Fill:
    return Fill(
        x=float(d["x"]),
        y=float(d["y"]),
        w=float(d["w"]),
        h=float(d["h"]),
        color=d.get("oc", d.get("clr")),
    )


def _page_from_json(d: dict[str, Any], index: int, default_width: float | None) -> Page:
    if not isinstance(d, dict):
        raise PageModelError(f"Page {index} is not an object: {d!r}")
    try:
        width = float(d.get("Width", default_width))
        height = float(d.get("Height"))
    except (TypeError, ValueError) as e:
        raise PageModelError(f"Page {index} has invalid size: {e}") from e
    if not (width > 0 and height > 0):
        raise PageModelError(f"Page {index} has invalid size {width}x{height}")
    try:
        return Page(
            width=width,
            height=height,
            hlines=tuple(_line_from_json(x) for x in d.get("HLines") or []),
            vlines=tuple(_line_from_json(x) for x in d.get("VLines") or []),
            texts=tuple(_text_from_json(x) for x in d.get("Texts") or []),
            fills=tuple(_fill_from_json(x) for x in d.get("Fills") or []),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise PageModelError(f"Page {index} is malformed: {e}") from e


def parse_pdf2json(data: dict[str, Any], source: Path | None = None) -> Document:
    """Build a Document from pdf2json output.

    Accepts both the current layout (``{"Pages": [...]}``) and the legacy one
    (``{"formImage": {"Width": ..., "Pages": [...]}}``) where the page width
    is declared once for the whole document.
    """
    root = data.get("formImage", data) if isinstance(data, dict) else None
    if not isinstance(root, dict) or not isinstance(root.get("Pages"), list):
        raise PageModelError("pdf2json data has no 'Pages' list")

    default_width = root.get("Width")
    pages = tuple(
        _page_from_json(p, i, default_width) for i, p in enumerate(root["Pages"])
    )
    meta = data.get("Meta") or {}
    if not isinstance(meta, dict):
        raise PageModelError(f"pdf2json 'Meta' must be an object, got {type(meta).__name__}")
    meta = dict(meta)
    if "Transcoder" in data:
        meta["Transcoder"] = data["Transcoder"]
    return Document(pages=pages, meta=meta, source=source)


def load_pdf2json(path: Path | str) -> Document:
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise PageModelError(f"Cannot read pdf2json file {path}: {e}") from e
    doc = parse_pdf2json(data, source=path)
    logger.info(f"{path} loaded ({len(doc)} pages)")
    return doc


# ---------------------------------------------------------------------------
# PDF via PyMuPDF
# ---------------------------------------------------------------------------

def _r(v: float) -> float:
    return round(v, _PRECISION)


def _hline(x0: float, x1: float, y: float, thickness: float) -> RulingLine:
    x0, x1 = min(x0, x1), max(x0, x1)
    return RulingLine(x=_r(x0 + thickness / 2), y=_r(y), w=_r(thickness), l=_r(x1 - x0))


def _vline(y0: float, y1: float, x: float, thickness: float) -> RulingLine:
    y0, y1 = min(y0, y1), max(y0, y1)
    return RulingLine(x=_r(x), y=_r(y0 + thickness / 2), w=_r(thickness), l=_r(y1 - y0))


def _color_hex(rgb: tuple[float, ...] | None) -> str | None:
    if not rgb:
        return None
    return "#" + "".join(f"{round(c * 255):02x}" for c in rgb[:3])


def _classify_segment(
    p1: pymupdf.Point, p2: pymupdf.Point, thickness: float,
) -> tuple[str, RulingLine] | None:
    if abs(p1.y - p2.y) <= _AXIS_EPS and abs(p1.x - p2.x) > _AXIS_EPS:
        return "h", _hline(p1.x, p2.x, (p1.y + p2.y) / 2, thickness)
    if abs(p1.x - p2.x) <= _AXIS_EPS and abs(p1.y - p2.y) > _AXIS_EPS:
        return "v", _vline(p1.y, p2.y, (p1.x + p2.x) / 2, thickness)
    return None


def _rect_lines(
    rect: pymupdf.Rect, drawing: dict,
) -> tuple[list[RulingLine], list[RulingLine], list[Fill]]:
    """Split a rectangle item into ruling lines and/or a fill.

    Thin rectangles are rules drawn as filled bars.  Other stroked rectangles
    contribute their four edges; filled ones are kept as fills.
    """
    hlines: list[RulingLine] = []
    vlines: list[RulingLine] = []
    fills: list[Fill] = []

    if rect.height <= _MAX_RULE_THICKNESS < rect.width:
        hlines.append(_hline(rect.x0, rect.x1, (rect.y0 + rect.y1) / 2, rect.height))
        return hlines, vlines, fills
    if rect.width <= _MAX_RULE_THICKNESS < rect.height:
        vlines.append(_vline(rect.y0, rect.y1, (rect.x0 + rect.x1) / 2, rect.width))
        return hlines, vlines, fills

    kind = drawing.get("type") or ""
    if "s" in kind:
        t = drawing.get("width") or 0.0
        hlines.append(_hline(rect.x0, rect.x1, rect.y0, t))
        hlines.append(_hline(rect.x0, rect.x1, rect.y1, t))
        vlines.append(_vline(rect.y0, rect.y1, rect.x0, t))
        vlines.append(_vline(rect.y0, rect.y1, rect.x1, t))
    if "f" in kind:
        fills.append(Fill(
            x=_r(rect.x0), y=_r(rect.y0), w=_r(rect.width), h=_r(rect.height),
            color=_color_hex(drawing.get("fill")),
        ))
    return hlines, vlines, fills


def _face_id(flags: int) -> int:
    if flags & 8:
        return FACE_MONO
    if flags & 4:
        return FACE_SERIF
    return FACE_SANS


def _page_from_pymupdf(page: pymupdf.Page) -> Page:
    hlines: list[RulingLine] = []
    vlines: list[RulingLine] = []
    fills: list[Fill] = []

    for d in page.get_drawings():
        thickness = d.get("width") or 0.0
        color = _color_hex(d.get("color"))
        for item in d.get("items", []):
            if item[0] == "l":
                classified = _classify_segment(item[1], item[2], thickness)
                if classified is None:
                    continue
                axis, line = classified
                line = RulingLine(x=line.x, y=line.y, w=line.w, l=line.l, color=color)
                (hlines if axis == "h" else vlines).append(line)
            elif item[0] == "re":
                h, v, f = _rect_lines(pymupdf.Rect(item[1]), d)
                hlines.extend(h)
                vlines.extend(v)
                fills.extend(f)

    texts: list[TextRun] = []
    for block in page.get_text("dict")["blocks"]:
        if block.get("type") != 0:
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                if not span["text"].strip():
                    continue
                x0, y0, x1, _ = span["bbox"]
                flags = span.get("flags", 0)
                texts.append(TextRun(
                    x=_r(x0),
                    y=_r(y0),
                    w=_r(x1 - x0),
                    runs=(StyledText(
                        text=quote(span["text"], safe="!*'()"),
                        face_id=_face_id(flags),
                        size=_r(span["size"]),
                        bold=bool(flags & 16),
                        italic=bool(flags & 2),
                    ),),
                ))

    return Page(
        width=_r(page.rect.width),
        height=_r(page.rect.height),
        hlines=tuple(hlines),
        vlines=tuple(vlines),
        texts=tuple(texts),
        fills=tuple(fills),
    )


def read_pdf(path: Path | str) -> Document:
    """Build a Document from a PDF using PyMuPDF drawings and text spans."""
    path = Path(path)
    if not path.exists():
        raise PageModelError(f"PDF not found: {path}")
    try:
        doc = pymupdf.open(str(path))
    except RuntimeError as e:
        raise PageModelError(f"Cannot open PDF {path}: {e}") from e
    try:
        pages = []
        for page in doc:
            if page.rect.width <= 0 or page.rect.height <= 0:
                raise PageModelError(f"Page {page.number} of {path} has an empty mediabox")
            pages.append(_page_from_pymupdf(page))
        meta = {k: v for k, v in (doc.metadata or {}).items() if v}
    finally:
        doc.close()
    logger.info(f"{path} loaded ({len(pages)} pages)")
    return Document(pages=tuple(pages), meta=meta, source=path)


def load_document(path: Path | str) -> Document:
    """Read ``.json`` (pdf2json) or ``.pdf`` input into a Document."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".json":
        return load_pdf2json(path)
    if suffix == ".pdf":
        return read_pdf(path)
    raise PageModelError(f"Unsupported input type: {path.name}")
