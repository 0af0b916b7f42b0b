from pathlib import Path
from typing import IO, Union

from fastapi import HTTPException, UploadFile, status

Source = Union[bytes, bytearray, memoryview, IO[bytes], IO[str]]


def read_source(source: Source) -> bytes:
    """Read a byte string, a binary stream or a text stream fully into bytes."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    data = source.read()
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data or b"")


def ensure_pdf(upload: UploadFile) -> None:
    """Reject uploads that are neither labelled nor named as PDF."""
    content_type = (upload.content_type or "").lower()
    suffix = Path(upload.filename or "").suffix.lower()
    if not content_type.endswith("pdf") and suffix != ".pdf":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The uploaded file must be a PDF.",
        )


def output_filename(filename: str | None) -> str:
    stem = Path(filename or "document.pdf").stem or "document"
    return f"{stem}_wm.pdf"
