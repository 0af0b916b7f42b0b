"""Apply text watermarks to selected pages of a PDF from a CSV instruction list."""

from pdfmark.core.errors import (
    DuplicatePageError,
    EmptyInstructionsError,
    InvalidPageError,
    InvalidPDFError,
    MalformedRowError,
    PageOutOfRangeError,
    PdfMarkError,
)
from pdfmark.services.csv_parser import parse_instructions
from pdfmark.services.pdf_service import PDFBackend, PDFService, PypdfBackend
from pdfmark.services.watermark_service import watermark

__version__ = "0.1.0"

__all__ = [
    "DuplicatePageError",
    "EmptyInstructionsError",
    "InvalidPageError",
    "InvalidPDFError",
    "MalformedRowError",
    "PDFBackend",
    "PDFService",
    "PageOutOfRangeError",
    "PdfMarkError",
    "PypdfBackend",
    "parse_instructions",
    "watermark",
]
