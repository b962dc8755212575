"""Table assembly -- turn per-page cell grids into header-keyed records.

Headers are purely positional: the i-th cell of a row is stored under the
i-th header.  Cells beyond the header count are dropped and headers beyond
the cell count are left unset.
"""
from __future__ import annotations

import enum
import logging
from typing import Iterable, Sequence

from .models import TableGrid

logger = logging.getLogger(__name__)

Record = dict[str, str]


class HeaderSource(enum.Enum):
    """Where column labels come from."""

    FIRST_ROW_OF_FIRST_PAGE = "first_row_of_first_page"
    FIRST_ROW_OF_EACH_PAGE = "first_row_of_each_page"  # header repeated on every page
    EXPLICIT = "explicit"


def to_record(row: Sequence[str], headers: Sequence[str]) -> Record:
    """Assign cell texts to headers by position."""
    if len(row) != len(headers):
        logger.debug(
            "Row has %d cells for %d headers; assigning positionally",
            len(row), len(headers),
        )
    return {header: text for header, text in zip(headers, row)}


class TableAssembler:
    """Linearizes detected grids into records under a header policy.

    Parameters
    ----------
    header_source:
        Which rows supply the column labels.
    headers:
        Labels for ``HeaderSource.EXPLICIT``; ignored otherwise.
    """

    def __init__(
        self,
        header_source: HeaderSource = HeaderSource.FIRST_ROW_OF_FIRST_PAGE,
        headers: Sequence[str] | None = None,
    ) -> None:
        if header_source is HeaderSource.EXPLICIT and not headers:
            raise ValueError("HeaderSource.EXPLICIT requires headers")
        self.header_source = header_source
        self.headers = tuple(headers) if headers else None

    def headers_from(self, first_page: TableGrid | None) -> tuple[str, ...]:
        """Column labels for a batch, given the first page's grid."""
        if self.header_source is HeaderSource.EXPLICIT:
            return self.headers or ()
        if first_page is None or not first_page.rows:
            logger.warning("First page has no table rows; no headers available")
            return ()
        return tuple(first_page.text_rows()[0])

    def _skips_first_row(self, page_index: int) -> bool:
        if self.header_source is HeaderSource.EXPLICIT:
            return False
        if self.header_source is HeaderSource.FIRST_ROW_OF_EACH_PAGE:
            return True
        return page_index == 0

    def records_for_page(
        self,
        page_index: int,
        grid: TableGrid,
        headers: Sequence[str],
    ) -> list[Record]:
        rows = grid.text_rows()
        if self._skips_first_row(page_index):
            rows = rows[1:]
        return [to_record(row, headers) for row in rows]

    def records(self, grids: Iterable[TableGrid]) -> tuple[tuple[str, ...], list[Record]]:
        """Return ``(headers, records)`` for pages in document order."""
        grids = list(grids)
        headers = self.headers_from(grids[0] if grids else None)
        records: list[Record] = []
        for page_index, grid in enumerate(grids):
            records.extend(self.records_for_page(page_index, grid, headers))
        return headers, records
