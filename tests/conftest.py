"""
Shared pytest fixtures for lattice-tables tests.

All fixtures that need to be shared across test modules should be defined here.
"""
from __future__ import annotations

import json
from pathlib import Path

import pymupdf
import pytest

from lattice_tables.config import PageLayout


# =============================================================================
# Layout fixtures
# =============================================================================

@pytest.fixture
def unit_layout() -> PageLayout:
    """800x1200 output pixels: identity scale for an 800x1200 page."""
    return PageLayout(width=8, height=12, resolution=100)


# =============================================================================
# Document fixtures
# =============================================================================

TABLE_X = 72.0
TABLE_Y = 140.0
COL_WIDTH = 100.0
ROW_HEIGHT = 30.0

HEADERS = ["Date", "Amount", "Memo"]
DATA = [
    ["2021-01-01", "100", "Rent"],
    ["2021-01-02", "250", "Groceries"],
]


@pytest.fixture
def lattice_pdf(tmp_path: Path) -> Path:
    """A one-page PDF whose table borders are drawn one cell edge at a time.

    Includes a short decorative rule under a title, which must not be taken
    as the table border.
    """
    doc = pymupdf.open()
    page = doc.new_page(width=612, height=792)

    page.insert_text((72, 72), "Account Statement", fontsize=16)
    page.draw_line((72, 80), (172, 80), color=(0, 0, 0), width=1)

    n_rows = 1 + len(DATA)
    n_cols = len(HEADERS)
    for r in range(n_rows + 1):
        y = TABLE_Y + r * ROW_HEIGHT
        for c in range(n_cols):
            x = TABLE_X + c * COL_WIDTH
            page.draw_line((x, y), (x + COL_WIDTH, y), color=(0, 0, 0), width=1)
    for c in range(n_cols + 1):
        x = TABLE_X + c * COL_WIDTH
        for r in range(n_rows):
            y = TABLE_Y + r * ROW_HEIGHT
            page.draw_line((x, y), (x, y + ROW_HEIGHT), color=(0, 0, 0), width=1)

    for r, row in enumerate([HEADERS] + DATA):
        for c, text in enumerate(row):
            page.insert_text(
                (TABLE_X + c * COL_WIDTH + 5, TABLE_Y + r * ROW_HEIGHT + 20),
                text,
                fontsize=10,
            )

    path = tmp_path / "statement.pdf"
    doc.save(str(path))
    doc.close()
    return path


def _pdf2json_page(rows: list[list[str]], y_offset: float = 2.0) -> dict:
    """pdf2json page with a 2-column lattice, one row per entry of ``rows``.

    Columns are 10 units wide starting at x=2; rows 2 units tall.
    """
    n_rows = len(rows)
    hlines = []
    for r in range(n_rows + 1):
        for c in range(2):
            hlines.append({"x": 2 + c * 10, "y": y_offset + r * 2, "w": 0, "l": 10})
    vlines = []
    for c in range(3):
        for r in range(n_rows):
            vlines.append({"x": 2 + c * 10, "y": y_offset + r * 2, "w": 0, "l": 2})
    texts = []
    for r, row in enumerate(rows):
        for c, value in enumerate(row):
            texts.append({
                "x": 3 + c * 10,
                "y": y_offset + r * 2 + 0.5,
                "w": 5,
                "sw": 0.3,
                "A": "left",
                "R": [{"T": value.replace(" ", "%20"), "S": -1, "TS": [0, 12, 0, 0]}],
            })
    return {
        "Width": 40,
        "Height": 60,
        "HLines": hlines,
        "VLines": vlines,
        "Fills": [],
        "Texts": texts,
    }


@pytest.fixture
def statement_json(tmp_path: Path) -> Path:
    """Two-page pdf2json document; headers only on page 0."""
    data = {
        "Transcoder": "pdf2json@2.0.0",
        "Meta": {"PDFFormatVersion": "1.4"},
        "Pages": [
            _pdf2json_page([["Date", "Amount"], ["2021-01-01", "100"]]),
            _pdf2json_page([["2021-01-02", "250"], ["2021-01-03", "75"]]),
        ],
    }
    path = tmp_path / "statement.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path
