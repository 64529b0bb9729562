from __future__ import annotations

import logging
import zlib
from io import BytesIO
from typing import Callable, TypeVar
from xml.etree import ElementTree as ET
from zipfile import BadZipFile, ZipFile

from ..errors import InvalidFile, InvalidZipArchive, MissingFile

logger = logging.getLogger(__name__)

T = TypeVar("T")


def optional_part(read: Callable[[str], T], path: str) -> T | None:
    """Run ``read(path)``, treating a missing ``path`` as an absent part.

    This is the only place where ``MissingFile`` is downgraded; any other
    failure, including a missing part other than ``path``, propagates.
    """
    try:
        return read(path)
    except MissingFile as exc:
        if exc.path != path:
            raise
        logger.debug("Optional part absent: %s", path)
        return None


class XlsxArchive:
    """Read-only view of the parts inside an xlsx container."""

    def __init__(self, data: bytes) -> None:
        try:
            self._zip = ZipFile(BytesIO(data))
        except (BadZipFile, ValueError) as exc:
            raise InvalidZipArchive() from exc
        self._names = set(self._zip.namelist())

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> XlsxArchive:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def read(self, path: str) -> bytes:
        if path not in self._names:
            raise MissingFile(path)
        try:
            return self._zip.read(path)
        except (BadZipFile, zlib.error, EOFError, NotImplementedError, RuntimeError) as exc:
            raise InvalidFile(path) from exc

    def xml(self, path: str) -> ET.Element:
        payload = self.read(path)
        try:
            root = ET.fromstring(payload)
        except (ET.ParseError, LookupError, ValueError) as exc:
            raise InvalidFile(path) from exc
        logger.debug("Parsed part %s", path)
        return root

    def read_optional(self, path: str) -> bytes | None:
        return optional_part(self.read, path)

    def xml_optional(self, path: str) -> ET.Element | None:
        return optional_part(self.xml, path)
