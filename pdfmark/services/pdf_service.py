from __future__ import annotations

import math
import shutil
from io import BytesIO
from typing import BinaryIO, Mapping, Protocol, Tuple

from pypdf import PdfReader, PdfWriter, Transformation
from reportlab.lib.colors import Color
from reportlab.pdfgen import canvas

from pdfmark.core.errors import InvalidPDFError, PageOutOfRangeError
from pdfmark.core.logging import configure_logging
from pdfmark.models import DEFAULT_STYLE, InstructionSet, TextWatermark
from pdfmark.utils.file_utils import Source, read_source

logger = configure_logging()


class PDFBackend(Protocol):
    """Operations pdfmark needs from a PDF engine."""

    def page_count(self, stream: BinaryIO) -> int:
        """Return the number of pages of the document read from ``stream``."""

    def stamp(self, stream: BinaryIO, watermarks: Mapping[int, TextWatermark]) -> bytes:
        """Return the document with each 1-indexed page in ``watermarks`` stamped."""


class PypdfBackend:
    """Reads and writes with pypdf, draws each stamp on a ReportLab canvas."""

    def page_count(self, stream: BinaryIO) -> int:
        return len(PdfReader(stream).pages)

    def stamp(self, stream: BinaryIO, watermarks: Mapping[int, TextWatermark]) -> bytes:
        writer = PdfWriter(clone_from=PdfReader(stream))

        for page_number, page in enumerate(writer.pages, start=1):
            watermark = watermarks.get(page_number)
            if watermark is None:
                continue
            box = page.mediabox
            overlay = self._create_watermark_page(float(box.width), float(box.height), watermark)
            page.merge_transformed_page(
                overlay.pages[0],
                Transformation().translate(float(box.left), float(box.bottom)),
                over=watermark.style.on_top,
            )

        buffer = BytesIO()
        writer.write(buffer)
        return buffer.getvalue()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _create_watermark_page(width: float, height: float, watermark: TextWatermark) -> PdfReader:
        style = watermark.style
        packet = BytesIO()
        page_size = (width, height)
        c = canvas.Canvas(packet, pagesize=page_size)

        c.setFillAlpha(style.opacity)
        c.setStrokeAlpha(style.opacity)

        grey = Color(*style.color, alpha=style.opacity)
        c.setFillColor(grey)
        c.setStrokeColor(grey)
        c.setFont(style.font_name, style.font_size)

        PypdfBackend._draw_diagonal_watermark(c, watermark.text, page_size, style.diagonal)

        c.save()
        packet.seek(0)
        return PdfReader(packet)

    @staticmethod
    def _draw_diagonal_watermark(
        canvas_: canvas.Canvas,
        text: str,
        page_size: Tuple[float, float],
        diagonal: bool,
    ) -> None:
        width, height = page_size
        canvas_.saveState()
        canvas_.translate(width / 2, height / 2)
        if diagonal:
            # lower-left to upper-right corner
            canvas_.rotate(math.degrees(math.atan2(height, width)))
        canvas_.drawCentredString(0, 0, text)
        canvas_.restoreState()


class PDFService:
    """Validation and error translation around a ``PDFBackend``."""

    def __init__(self, backend: PDFBackend | None = None) -> None:
        self.backend = backend or PypdfBackend()

    def load(self, source: Source) -> BytesIO:
        """Buffer ``source`` in memory so the backend can seek within it."""
        try:
            data = read_source(source)
        except OSError as exc:
            raise InvalidPDFError(f"reading PDF input: {exc}") from exc
        if not data:
            raise InvalidPDFError("empty input")
        return BytesIO(data)

    def page_count(self, handle: BinaryIO) -> int:
        """Ask the backend for the page count and rewind ``handle``."""
        try:
            return self.backend.page_count(handle)
        except Exception as exc:
            raise InvalidPDFError(str(exc) or type(exc).__name__) from exc
        finally:
            handle.seek(0)

    @staticmethod
    def validate_range(instructions: InstructionSet, total_pages: int) -> None:
        for page in instructions:
            if page > total_pages:
                raise PageOutOfRangeError(page, total_pages)

    def apply(self, handle: BinaryIO, instructions: InstructionSet, sink: BinaryIO) -> None:
        """Write the stamped document to ``sink``, or the input unchanged when
        there is nothing to stamp. ``sink`` only receives bytes on success."""
        if not instructions:
            shutil.copyfileobj(handle, sink)
            return

        watermarks = {page: TextWatermark(text=text, style=DEFAULT_STYLE) for page, text in instructions.items()}
        try:
            data = self.backend.stamp(handle, watermarks)
        except Exception as exc:
            raise InvalidPDFError(f"stamping failed: {exc}") from exc

        logger.debug("Stamped %s page(s), %s bytes written", len(watermarks), len(data))
        sink.write(data)
