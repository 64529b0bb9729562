from __future__ import annotations

import posixpath
import re
from xml.etree import ElementTree as ET

MAX_COLUMN = 16384
MAX_ROW = 1048576

CELL_RE = re.compile(r"^\$?([A-Z]+)\$?(\d+)$")
DECIMAL_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

_TRUE_VALUES = {"1", "true", "on"}
_FALSE_VALUES = {"0", "false", "off"}


def local_name(tag: str) -> str:
    if "}" in tag:
        return tag.rsplit("}", 1)[1]
    return tag


def col_to_index(col: str) -> int:
    value = 0
    for char in col.upper():
        if not "A" <= char <= "Z":
            raise ValueError(f"Invalid column name: {col}")
        value = value * 26 + (ord(char) - 64)
    if not 1 <= value <= MAX_COLUMN:
        raise ValueError(f"Column out of range: {col}")
    return value


def index_to_col(index: int) -> str:
    if not 1 <= index <= MAX_COLUMN:
        raise ValueError(f"Column index must be within 1..{MAX_COLUMN}")
    result: list[str] = []
    value = index
    while value > 0:
        value, rem = divmod(value - 1, 26)
        result.append(chr(65 + rem))
    return "".join(reversed(result))


def coord_to_rowcol(coord: str) -> tuple[int, int]:
    match = CELL_RE.match(coord)
    if not match:
        raise ValueError(f"Invalid coordinate: {coord}")
    col = col_to_index(match.group(1))
    row = int(match.group(2))
    if not 1 <= row <= MAX_ROW:
        raise ValueError(f"Row out of range: {coord}")
    return row, col


def rowcol_to_coord(row: int, col: int) -> str:
    if not 1 <= row <= MAX_ROW:
        raise ValueError(f"Row index must be within 1..{MAX_ROW}")
    return f"{index_to_col(col)}{row}"


def resolve_target(base_path: str, target: str) -> str:
    """Resolve a relationship target against the directory of its owning part."""
    if target.startswith("/"):
        joined = posixpath.normpath(target)
    else:
        joined = posixpath.normpath(posixpath.join(posixpath.dirname(base_path), target))
    return joined.lstrip("/")


def rels_path_for(part_path: str) -> str:
    directory, file_name = posixpath.split(part_path)
    return posixpath.join(directory, "_rels", f"{file_name}.rels")


def parse_bool(value: str | None, default: bool | None = None) -> bool | None:
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return default


def parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def parse_float(value: str | None) -> float | None:
    if value is None:
        return None
    raw = value.strip()
    if not DECIMAL_RE.match(raw):
        return None
    return float(raw)


def xml_to_dict(element: ET.Element) -> dict:
    children = [xml_to_dict(child) for child in list(element)]
    text = (element.text or "").strip()
    payload: dict[str, object] = {
        "tag": local_name(element.tag),
        "attrs": {local_name(key): value for key, value in sorted(element.attrib.items())},
    }
    if text:
        payload["text"] = text
    if children:
        payload["children"] = children
    return payload
