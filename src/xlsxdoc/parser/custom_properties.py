from __future__ import annotations

import base64
import binascii
from datetime import datetime
from xml.etree import ElementTree as ET

from ..model import CustomPropertyValue
from .archive import XlsxArchive
from .namespaces import CUSTOM_PROPS_NS, CUSTOM_PROPS_PATH
from .utils import local_name, parse_bool, parse_float

_STRING_TYPES = {"lpwstr", "lpstr", "bstr"}
_INT_TYPES = {"i1", "i2", "i4", "i8", "int", "ui1", "ui2", "ui4", "ui8", "uint"}
_FLOAT_TYPES = {"r4", "r8", "decimal"}
_DATE_TYPES = {"filetime", "date"}


def get_custom_properties(archive: XlsxArchive) -> dict[str, CustomPropertyValue]:
    root = archive.xml_optional(CUSTOM_PROPS_PATH)
    if root is None:
        return {}
    return parse_custom_properties(root)


def parse_custom_properties(root: ET.Element) -> dict[str, CustomPropertyValue]:
    properties: dict[str, CustomPropertyValue] = {}
    for prop in root.findall(f"{{{CUSTOM_PROPS_NS}}}property"):
        name = prop.attrib.get("name")
        variant = next(iter(list(prop)), None)
        if not name or variant is None:
            continue
        value = _decode_variant(local_name(variant.tag), variant.text or "")
        if value is not None:
            properties[name] = value
    return properties


def _decode_variant(kind: str, text: str) -> CustomPropertyValue | None:
    if kind in _STRING_TYPES:
        return text
    if kind in _INT_TYPES:
        try:
            return int(text.strip())
        except ValueError:
            return None
    if kind in _FLOAT_TYPES:
        return parse_float(text)
    if kind == "bool":
        return parse_bool(text)
    if kind in _DATE_TYPES:
        try:
            return datetime.fromisoformat(text.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    if kind == "blob":
        try:
            return base64.b64decode("".join(text.split()), validate=True)
        except (binascii.Error, ValueError):
            return None
    return None
