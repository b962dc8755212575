"""Document-level facade: load a document, detect its tables, save outputs."""
from __future__ import annotations

import logging
from pathlib import Path

from .assembly import HeaderSource, Record, TableAssembler
from .config import Config
from .detection import LatticeTableDetector
from .export import write_csv, write_grid_json
from .interfaces import PageModelReaderProtocol
from .models import Document, TableGrid
from .page_model import load_document
from .render import render_page_image

logger = logging.getLogger(__name__)


class LatticeTableParser:
    """Extracts one lattice table per page of a document.

    Args:
        config: Layout, span tolerance, header policy and overlay settings.
        document: An already-parsed document; otherwise call ``load()``.
        reader: Callable turning a path into a Document. Defaults to
            ``load_document`` (PDF via PyMuPDF, or pdf2json JSON).
    """

    def __init__(
        self,
        config: Config | None = None,
        document: Document | None = None,
        reader: PageModelReaderProtocol | None = None,
    ):
        self.config = config or Config.from_dict({})
        self.detector = LatticeTableDetector(self.config.layout, self.config.span_tolerance)
        self.assembler = TableAssembler(
            HeaderSource(self.config.header_source), self.config.headers,
        )
        self.document = document
        self.reader = reader or load_document

    def load(self, path: Path | str) -> Document:
        """Read a document through the configured reader. Raises PageModelError."""
        self.document = self.reader(path)
        if self.document.meta:
            logger.debug(f"{path} meta: {self.document.meta}")
        return self.document

    def _require_document(self) -> Document:
        if self.document is None:
            raise RuntimeError("No document loaded; call load() first")
        return self.document

    def _page(self, page_index: int):
        doc = self._require_document()
        if not 0 <= page_index < len(doc.pages):
            raise IndexError(f"Page {page_index} out of range (document has {len(doc.pages)} pages)")
        return doc.pages[page_index]

    def detect_table(self, page_index: int) -> TableGrid:
        return self.detector.detect(self._page(page_index))

    def detect_all(self) -> list[TableGrid]:
        return [self.detector.detect(page) for page in self._require_document().pages]

    def headers(self) -> tuple[str, ...]:
        doc = self._require_document()
        first = self.detector.detect(doc.pages[0]) if doc.pages else None
        return self.assembler.headers_from(first)

    def fetch_rows(self) -> list[Record]:
        """Records for every page, keyed by the batch's headers."""
        _, records = self.assembler.records(self.detect_all())
        return records

    def page_rows(self, page_index: int, headers: tuple[str, ...] | None = None) -> list[Record]:
        grid = self.detect_table(page_index)
        if headers is None:
            headers = self.headers()
        return self.assembler.records_for_page(page_index, grid, headers)

    def save_csv(
        self,
        path: Path | str,
        table: tuple[tuple[str, ...], list[Record]] | None = None,
    ) -> Path:
        """Write every page's records. ``table`` is a precomputed ``(headers, records)``."""
        headers, records = table if table is not None else self.assembler.records(self.detect_all())
        write_csv(path, headers, records)
        logger.info(f"{path} saved!")
        return Path(path)

    def save_csv_page(self, page_index: int, path: Path | str) -> Path:
        headers = self.headers()
        write_csv(path, headers, self.page_rows(page_index, headers))
        logger.info(f"{path} saved!")
        return Path(path)

    def save_json_page(self, page_index: int, path: Path | str) -> Path:
        write_grid_json(path, self.detect_table(page_index))
        logger.info(f"{path} saved!")
        return Path(path)

    def save_image_page(self, page_index: int, path: Path | str, grid: TableGrid | None = None) -> Path:
        page = self._page(page_index)
        render_page_image(
            page,
            grid if grid is not None else self.detector.detect(page),
            self.config.layout,
            path,
            layers=self.config.overlay_layers,
            color=self.config.overlay_color,
        )
        logger.info(f"{path} saved!")
        return Path(path)
