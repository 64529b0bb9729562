from __future__ import annotations

import posixpath
from xml.etree import ElementTree as ET

from .archive import XlsxArchive
from .namespaces import CONTENT_TYPES_PATH
from .utils import local_name


class ContentTypes:
    """Declared MIME types, keyed by part name (with a leading ``/``)."""

    def __init__(self, overrides: dict[str, str], defaults: dict[str, str]) -> None:
        self._overrides = dict(overrides)
        self._defaults = dict(defaults)

    @classmethod
    def read(cls, archive: XlsxArchive) -> ContentTypes:
        return cls.from_xml(archive.xml(CONTENT_TYPES_PATH))

    @classmethod
    def from_xml(cls, root: ET.Element) -> ContentTypes:
        overrides: dict[str, str] = {}
        defaults: dict[str, str] = {}
        for child in list(root):
            tag = local_name(child.tag)
            ctype = child.attrib.get("ContentType", "")
            if not ctype:
                continue
            if tag == "Default":
                ext = child.attrib.get("Extension", "").lower()
                if ext:
                    defaults[ext] = ctype
            elif tag == "Override":
                part_name = child.attrib.get("PartName", "")
                if part_name:
                    overrides[part_name] = ctype
        return cls(overrides, defaults)

    def lookup(self, part_name: str) -> str | None:
        if part_name in self._overrides:
            return self._overrides[part_name]
        ext = posixpath.splitext(part_name)[1].lower().lstrip(".")
        return self._defaults.get(ext)
