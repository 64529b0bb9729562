from __future__ import annotations

from pathlib import Path

from .errors import ParseError
from .model import ParseOptions, WorkbookDoc
from .parser.ooxml import XlsxPackageParser


def read_xlsx(data: bytes, *, options: ParseOptions | None = None) -> WorkbookDoc:
    """Decode xlsx bytes, raising a :class:`ParseError` subclass on failure."""
    return XlsxPackageParser(data, options).parse()


def read_xlsx_result(data: bytes, *, options: ParseOptions | None = None) -> WorkbookDoc | ParseError:
    """Decode xlsx bytes, returning the classified error instead of raising it."""
    try:
        return read_xlsx(data, options=options)
    except ParseError as exc:
        return exc


def load_xlsx(path: str | Path, *, options: ParseOptions | None = None) -> WorkbookDoc:
    return read_xlsx(Path(path).read_bytes(), options=options)
