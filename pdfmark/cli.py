from __future__ import annotations

import argparse
import sys
from io import BytesIO
from pathlib import Path
from typing import Optional, Sequence

from pdfmark.core.config import get_settings
from pdfmark.core.errors import PdfMarkError
from pdfmark.services.demo import DEMO_INSTRUCTIONS, demo_csv, generate_demo_pdf
from pdfmark.services.watermark_service import watermark


USAGE = (
    "usage: pdfmark --pdf input.pdf --csv watermarks.csv [--out output.pdf]\n"
    "       pdfmark --demo [--out output.pdf]"
)


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="pdfmark",
        description="Add text watermarks to selected pages of a PDF from a CSV file.",
    )
    parser.add_argument("--pdf", type=Path, help="path to input PDF")
    parser.add_argument("--csv", type=Path, help="path to CSV watermark file")
    parser.add_argument(
        "--out",
        type=Path,
        default=settings.default_output,
        help=f"path to output PDF [default={settings.default_output}]",
    )
    parser.add_argument("--demo", action="store_true", help="run a self-contained demo (ignores --pdf and --csv)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.demo or (args.pdf is None and args.csv is None):
        return _run(args.out, *_demo_inputs())

    if args.pdf is None or args.csv is None:
        print(USAGE, file=sys.stderr)
        return 1

    try:
        pdf_data = args.pdf.read_bytes()
        csv_data = args.csv.read_bytes()
    except OSError as exc:
        print(f"reading input: {exc}", file=sys.stderr)
        return 1

    return _run(args.out, pdf_data, csv_data)


def _demo_inputs() -> tuple[bytes, str]:
    pages = get_settings().demo_pages
    print("Running demo mode...")
    print()

    pdf_data = generate_demo_pdf(pages)
    print(f"  Generated a {pages}-page demo PDF ({len(pdf_data)} bytes)")
    print("  CSV watermarks:")
    for page, text in DEMO_INSTRUCTIONS.items():
        print(f"    Page {page} -> {text}")
    unmarked = [str(page) for page in range(1, pages + 1) if page not in DEMO_INSTRUCTIONS]
    if unmarked:
        print(f"    Pages {', '.join(unmarked)} -> (no watermark)")
    print()
    return pdf_data, demo_csv()


def _run(out: Path, pdf_data: bytes, csv_data: bytes | str) -> int:
    buffer = BytesIO()
    try:
        watermark(buffer, pdf_data, csv_data)
    except PdfMarkError as exc:
        print(f"watermarking failed: {exc}", file=sys.stderr)
        return 1

    try:
        out.write_bytes(buffer.getvalue())
    except OSError as exc:
        print(f"writing output: {exc}", file=sys.stderr)
        return 1

    print(f"Done. Watermarked PDF written to {out}")
    return 0
