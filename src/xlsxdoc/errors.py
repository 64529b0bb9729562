"""Error kinds raised while decoding a package.

Every failure names the part (and relationship id, where one is involved)
that caused it, so callers can tell which piece of the package is broken.

    ParseError
    ├── InvalidZipArchive
    ├── MissingFile
    ├── InvalidFile
    ├── InvalidRef
    └── InconsistentDocument
"""

from __future__ import annotations


class ParseError(Exception):
    """Base class for all decode failures."""

    def _key(self) -> tuple:
        return (type(self),) + tuple(self.args)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParseError):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())


class InvalidZipArchive(ParseError):
    def __init__(self) -> None:
        super().__init__()

    def __str__(self) -> str:
        return "Input is not a valid zip archive"


class MissingFile(ParseError):
    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"Missing part: {self.path}"


class InvalidFile(ParseError):
    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"Invalid part: {self.path}"


class InvalidRef(ParseError):
    def __init__(self, path: str, ref_id: str) -> None:
        super().__init__(path, ref_id)
        self.path = path
        self.ref_id = ref_id

    def __str__(self) -> str:
        return f"Relationship {self.ref_id!r} not found for {self.path}"


class InconsistentDocument(ParseError):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message
