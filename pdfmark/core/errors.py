from __future__ import annotations

from typing import Any, Optional


class PdfMarkError(Exception):
    """Base class for every error raised by pdfmark."""

    code = "error"
    default_message = "pdfmark: watermarking failed"

    def __init__(self, detail: Optional[str] = None) -> None:
        message = self.default_message if not detail else f"{self.default_message}: {detail}"
        super().__init__(message)
        self.detail = detail


class RowError(PdfMarkError):
    """An error tied to a specific line of the instruction CSV."""

    def __init__(self, detail: Optional[str] = None, *, line: Optional[int] = None, value: Any = None) -> None:
        if line is not None:
            detail = f"line {line}: {detail}" if detail else f"line {line}"
        super().__init__(detail)
        self.line = line
        self.value = value


class EmptyInstructionsError(PdfMarkError):
    code = "empty_input"
    default_message = "pdfmark: CSV contains no header row"


class MalformedRowError(RowError):
    code = "malformed_row"
    default_message = "pdfmark: malformed CSV row"


class InvalidPageError(RowError):
    code = "invalid_page"
    default_message = "pdfmark: page number must be >= 1"


class DuplicatePageError(RowError):
    code = "duplicate_page"
    default_message = "pdfmark: duplicate page number in CSV"


class InvalidPDFError(PdfMarkError):
    code = "invalid_pdf"
    default_message = "pdfmark: invalid or corrupt PDF input"


class PageOutOfRangeError(PdfMarkError):
    code = "page_out_of_range"
    default_message = "pdfmark: page number out of range"

    def __init__(self, page: int, total_pages: int) -> None:
        super().__init__(f"page {page}, PDF has {total_pages} pages")
        self.page = page
        self.total_pages = total_pages


__all__ = [
    "PdfMarkError",
    "RowError",
    "EmptyInstructionsError",
    "MalformedRowError",
    "InvalidPageError",
    "DuplicatePageError",
    "InvalidPDFError",
    "PageOutOfRangeError",
]
