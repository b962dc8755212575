"""Batch driver: walk ``<src>/<subfolder>/`` and extract every document.

For each input ``<name>.pdf`` / ``<name>.json`` under a subfolder, writes
``<out>/<subfolder>/<name>_all.csv`` (records of all pages) and
``<out>/<subfolder>/<name>.png`` (overlay of page 0).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from tqdm import tqdm

from .config import Config
from .parser import LatticeTableParser

logger = logging.getLogger(__name__)


@dataclass
class DocumentResult:
    """Outcome of extracting a single document."""
    source: Path
    status: str          # "extracted", "empty", "failed"
    reason: str = ""
    n_pages: int = 0
    n_records: int = 0
    csv_path: Path | None = None
    image_path: Path | None = None


def find_inputs(src_dir: Path, suffixes: tuple[str, ...]) -> dict[str, list[Path]]:
    """Map subfolder name -> input files, both sorted."""
    found: dict[str, list[Path]] = {}
    for sub in sorted(p for p in src_dir.iterdir() if p.is_dir()):
        files = sorted(
            f for f in sub.iterdir()
            if f.is_file() and f.suffix.lower() in suffixes
        )
        if files:
            found[sub.name] = files
    return found


def extract_document(source: Path, out_dir: Path, config: Config) -> DocumentResult:
    """Extract one document into ``out_dir``. Failures are reported, not raised."""
    parser = LatticeTableParser(config)
    try:
        doc = parser.load(source)
        if not doc.pages:
            return DocumentResult(source=source, status="empty", reason="no pages")

        grids = parser.detect_all()
        headers, records = parser.assembler.records(grids)
        csv_path = parser.save_csv(out_dir / f"{source.stem}_all.csv", (headers, records))
        image_path = parser.save_image_page(0, out_dir / f"{source.stem}.png", grids[0])
    except Exception as e:
        logger.error(f"Failed to extract {source}: {type(e).__name__}: {e}")
        return DocumentResult(
            source=source, status="failed", reason=f"{type(e).__name__}: {e}",
        )

    n_records = len(records)

    return DocumentResult(
        source=source,
        status="extracted" if n_records else "empty",
        reason="" if n_records else "no table rows detected",
        n_pages=len(doc.pages),
        n_records=n_records,
        csv_path=csv_path,
        image_path=image_path,
    )


def run_batch(src_dir: Path | str, out_dir: Path | str, config: Config) -> dict:
    """Extract every document under ``src_dir``'s subfolders.

    Returns:
        Dict with 'results' (list[DocumentResult]) and summary counts.
    """
    src_dir = Path(src_dir)
    out_dir = Path(out_dir)
    results: list[DocumentResult] = []

    jobs = [
        (source, out_dir / sub)
        for sub, files in find_inputs(src_dir, config.input_suffixes).items()
        for source in files
    ]
    logger.info(f"Found {len(jobs)} documents under {src_dir}")

    for source, target in tqdm(jobs, desc="Extracting"):
        logger.debug(f"Starting {source}")
        target.mkdir(parents=True, exist_ok=True)
        result = extract_document(source, target, config)
        logger.debug(f"Completed {source}: {result.status}, {result.n_records} records")
        results.append(result)

    return {
        "results": results,
        "extracted": sum(1 for r in results if r.status == "extracted"),
        "empty": sum(1 for r in results if r.status == "empty"),
        "failed": sum(1 for r in results if r.status == "failed"),
    }
