"""Read watermark instructions from CSV text.

The expected format is::

    page,watermark_text
    1,CONFIDENTIAL
    3,DRAFT

The first row is a header and must have at least two columns; its content is
not checked. Every following row maps a 1-indexed page number to the text
stamped on that page. Columns beyond the second are ignored and whitespace
around both fields is trimmed.
"""
from __future__ import annotations

import csv
import io
import re
from types import MappingProxyType
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from pdfmark.core.config import get_settings
from pdfmark.core.errors import (
    DuplicatePageError,
    EmptyInstructionsError,
    InvalidPageError,
    MalformedRowError,
)
from pdfmark.core.logging import configure_logging
from pdfmark.models import InstructionSet
from pdfmark.utils.file_utils import Source, read_source

logger = configure_logging()

_PAGE_PATTERN = re.compile(r"[+-]?[0-9]+")

# watermark text has no length cap, only the memory bound of the input
csv.field_size_limit(max(csv.field_size_limit(), 2**31 - 1))


def parse_instructions(
    source: Union[str, Source],
    *,
    encodings: Optional[Sequence[str]] = None,
) -> InstructionSet:
    """Parse CSV instructions into a read-only mapping of page number to text.

    Byte input is decoded with the first of ``encodings`` that accepts it
    (``Settings.csv_encodings`` by default).

    Raises ``EmptyInstructionsError`` when the input has no rows at all,
    ``MalformedRowError`` for structurally broken rows, ``InvalidPageError``
    for page numbers below 1 and ``DuplicatePageError`` when a page appears
    twice. A header without data rows yields an empty mapping.
    """
    lines = _RecordLines(_read_text(source, encodings))
    reader = csv.reader(lines, skipinitialspace=True, strict=True)
    rows = _iter_rows(reader, lines)

    try:
        line, header = next(rows)
    except StopIteration:
        raise EmptyInstructionsError() from None

    if len(header) < 2:
        raise MalformedRowError(
            f"header must have at least 2 columns, got {len(header)}", line=line, value=header
        )

    instructions: Dict[int, str] = {}
    for line, row in rows:
        page, text = _parse_row(line, row)
        if page in instructions:
            raise DuplicatePageError(f"page {page}", line=line, value=page)
        instructions[page] = text

    logger.debug("Parsed %s watermark instruction(s)", len(instructions))
    return MappingProxyType(instructions)


def _read_text(source: Union[str, Source], encodings: Optional[Sequence[str]]) -> str:
    if isinstance(source, str):
        return source.lstrip("\ufeff")

    data = read_source(source)
    tried = list(encodings or get_settings().csv_encodings)
    for encoding in tried:
        try:
            text = data.decode(encoding)
        except UnicodeDecodeError:
            continue
        if encoding != tried[0]:
            logger.debug("Instruction CSV decoded as %s", encoding)
        return text.lstrip("\ufeff")
    raise MalformedRowError(f"input is not valid {' or '.join(tried)}", line=1)


class _RecordLines:
    """Line iterator for ``csv.reader`` that keeps the raw text of the
    record being read."""

    def __init__(self, text: str) -> None:
        self._lines = io.StringIO(text, newline="")
        self.record: List[str] = []

    def __iter__(self) -> "_RecordLines":
        return self

    def __next__(self) -> str:
        line = next(self._lines)
        self.record.append(line)
        return line

    def take(self) -> str:
        raw = "".join(self.record)
        self.record.clear()
        return raw


def _iter_rows(reader, lines: _RecordLines) -> Iterator[Tuple[int, List[str]]]:
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except csv.Error as exc:
            raise MalformedRowError(str(exc), line=reader.line_num) from exc
        raw = lines.take()
        # blank lines carry no record
        if not row:
            continue
        if _has_bare_quote(raw):
            raise MalformedRowError('bare " in non-quoted field', line=reader.line_num, value=raw.rstrip("\r\n"))
        yield reader.line_num, row


def _has_bare_quote(record: str) -> bool:
    """True when a field that does not start with a quote contains one."""
    i, end = 0, len(record)
    while i < end:
        while i < end and record[i] == " ":
            i += 1
        if i < end and record[i] == '"':
            i += 1
            while i < end:
                if record[i] == '"':
                    if record[i + 1 : i + 2] == '"':
                        i += 2
                        continue
                    break
                i += 1
            # the strict reader already rejects text after a closing quote
            while i < end and record[i] != ",":
                i += 1
        else:
            while i < end and record[i] not in ",\r\n":
                if record[i] == '"':
                    return True
                i += 1
        i += 1
    return False


def _parse_row(line: int, row: List[str]) -> Tuple[int, str]:
    if len(row) < 2:
        raise MalformedRowError(f"expected at least 2 fields, got {len(row)}", line=line, value=row)

    page_field = row[0].strip()
    if not _PAGE_PATTERN.fullmatch(page_field):
        raise MalformedRowError(f"invalid page number {page_field!r}", line=line, value=page_field)

    page = int(page_field)
    if page < 1:
        raise InvalidPageError(f"page {page}", line=line, value=page)

    text = row[1].strip()
    if not text:
        raise MalformedRowError("watermark text is empty", line=line, value=row[1])

    return page, text
