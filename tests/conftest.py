import io

import fitz  # PyMuPDF
import pytest

from pdfmark.services.demo import generate_demo_pdf


def csv_text(*lines: str) -> str:
    return "\n".join(lines)


def page_texts(data: bytes) -> list[str]:
    with fitz.open(stream=data, filetype="pdf") as document:
        return [page.get_text() for page in document]


def page_count(data: bytes) -> int:
    with fitz.open(stream=data, filetype="pdf") as document:
        return document.page_count


@pytest.fixture
def make_pdf():
    return generate_demo_pdf


@pytest.fixture
def five_page_pdf() -> bytes:
    return generate_demo_pdf(5)


@pytest.fixture
def three_page_pdf() -> bytes:
    return generate_demo_pdf(3)


class FakeBackend:
    """In-memory document model standing in for the PDF engine."""

    def __init__(self, pages: int = 3, fail_count: bool = False, fail_stamp: bool = False) -> None:
        self.pages = pages
        self.fail_count = fail_count
        self.fail_stamp = fail_stamp
        self.count_calls = 0
        self.stamp_calls: list[dict] = []

    def page_count(self, stream: io.BytesIO) -> int:
        self.count_calls += 1
        stream.read()
        if self.fail_count:
            raise ValueError("xref table is corrupt")
        return self.pages

    def stamp(self, stream: io.BytesIO, watermarks) -> bytes:
        data = stream.read()
        if self.fail_stamp:
            raise KeyError("/Contents")
        self.stamp_calls.append(dict(watermarks))
        marks = ";".join(f"{page}={wm.text}" for page, wm in sorted(watermarks.items()))
        return data + b"|" + marks.encode("utf-8")


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()
