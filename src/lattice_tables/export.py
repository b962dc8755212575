"""CSV / JSON writers for detected tables."""
from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Sequence

from .assembly import Record
from .models import TableGrid


def _fieldnames(headers: Sequence[str], records: Sequence[Record]) -> list[str]:
    """Headers in order, de-duplicated, falling back to record keys when empty."""
    names: list[str] = []
    for name in headers:
        if name not in names:
            names.append(name)
    if not names:
        for record in records:
            for name in record:
                if name not in names:
                    names.append(name)
    return names


def write_csv(path: Path | str, headers: Sequence[str], records: Sequence[Record]) -> Path:
    """Write records under a header line; missing values become empty fields."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=_fieldnames(headers, records), restval="")
        writer.writeheader()
        writer.writerows(records)
    return path


def write_grid_json(path: Path | str, grid: TableGrid) -> Path:
    """Write a page's cell grid (boxes, bound runs, text) as JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(grid.to_dict(), f)
    return path
