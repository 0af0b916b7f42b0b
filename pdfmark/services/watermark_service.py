from __future__ import annotations

from typing import BinaryIO, Union

from pdfmark.core.logging import configure_logging
from pdfmark.services.csv_parser import parse_instructions
from pdfmark.services.pdf_service import PDFService
from pdfmark.utils.file_utils import Source

logger = configure_logging()


def watermark(
    dst: BinaryIO,
    src: Source,
    instructions_source: Union[str, Source],
    *,
    service: PDFService | None = None,
) -> None:
    """Stamp the PDF read from ``src`` according to the CSV in
    ``instructions_source`` and write the result to ``dst``.

    The CSV must have a header row and at least two columns: the 1-indexed
    page number and the watermark text. Pages not listed are passed through
    unchanged.

    The instructions are parsed before the PDF is read, so a bad CSV never
    touches the PDF. The first failure is raised as a ``PdfMarkError`` subclass
    and nothing is written to ``dst`` in that case. ``dst`` is never closed.

    No state is kept between calls: concurrent calls with their own sources and
    sinks are independent.
    """
    instructions = parse_instructions(instructions_source)

    service = service or PDFService()
    handle = service.load(src)
    total_pages = service.page_count(handle)
    service.validate_range(instructions, total_pages)
    service.apply(handle, instructions, dst)

    logger.info("Watermarked %s of %s page(s)", len(instructions), total_pages)
