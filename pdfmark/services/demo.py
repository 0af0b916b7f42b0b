from __future__ import annotations

from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

DEMO_INSTRUCTIONS = {
    1: "CONFIDENTIAL",
    2: "DRAFT",
    4: "INTERNAL USE ONLY",
}


def generate_demo_pdf(pages: int) -> bytes:
    """Build an A4 document with ``pages`` numbered pages."""
    if pages < 1:
        raise ValueError("pages must be >= 1")

    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4
    for number in range(1, pages + 1):
        c.setFont("Helvetica", 14)
        c.drawString(72, height - 72, f"pdfmark demo document, page {number} of {pages}")
        c.drawCentredString(width / 2, 36, str(number))
        c.showPage()
    c.save()
    return buffer.getvalue()


def demo_csv() -> str:
    rows = ["page,watermark_text"]
    rows.extend(f"{page},{text}" for page, text in DEMO_INSTRUCTIONS.items())
    return "\n".join(rows)
