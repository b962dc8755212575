"""Lattice table extraction from parsed document pages."""
from .assembly import HeaderSource, TableAssembler
from .config import Config, PageLayout
from .detection import LatticeTableDetector
from .models import (
    AxisStatus,
    Box,
    Cell,
    Document,
    Page,
    RulingLine,
    StyledText,
    TableGrid,
    TextRun,
)
from .page_model import PageModelError, load_document
from .parser import LatticeTableParser

__all__ = [
    "AxisStatus",
    "Box",
    "Cell",
    "Config",
    "Document",
    "HeaderSource",
    "LatticeTableDetector",
    "LatticeTableParser",
    "Page",
    "PageLayout",
    "PageModelError",
    "RulingLine",
    "StyledText",
    "TableAssembler",
    "TableGrid",
    "TextRun",
    "load_document",
]
