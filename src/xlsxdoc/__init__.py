from .api import load_xlsx, read_xlsx, read_xlsx_result
from .errors import (
    InconsistentDocument,
    InvalidFile,
    InvalidRef,
    InvalidZipArchive,
    MissingFile,
    ParseError,
)
from .model import ParseOptions, SheetDoc, WorkbookDoc

__all__ = [
    "ParseOptions",
    "WorkbookDoc",
    "SheetDoc",
    "ParseError",
    "InvalidZipArchive",
    "MissingFile",
    "InvalidFile",
    "InvalidRef",
    "InconsistentDocument",
    "load_xlsx",
    "read_xlsx",
    "read_xlsx_result",
]
