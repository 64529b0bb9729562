from __future__ import annotations

from xml.etree import ElementTree as ET

from ..model import RichText, RichTextRun, RunProperties, SharedStringItem
from .archive import XlsxArchive
from .namespaces import SHARED_STRINGS_PATH, SPREADSHEET_NS
from .utils import parse_bool, parse_float

_T = f"{{{SPREADSHEET_NS}}}t"
_R = f"{{{SPREADSHEET_NS}}}r"
_RPR = f"{{{SPREADSHEET_NS}}}rPr"


class SharedStringTable:
    def __init__(self, items: list[SharedStringItem] | None = None) -> None:
        self._items = tuple(items or ())

    @classmethod
    def read(cls, archive: XlsxArchive) -> SharedStringTable:
        root = archive.xml_optional(SHARED_STRINGS_PATH)
        if root is None:
            return cls()
        return cls.from_xml(root)

    @classmethod
    def from_xml(cls, root: ET.Element) -> SharedStringTable:
        return cls([parse_string_item(si) for si in root.findall(f"{{{SPREADSHEET_NS}}}si")])

    def __len__(self) -> int:
        return len(self._items)

    def item(self, index: int) -> SharedStringItem | None:
        if 0 <= index < len(self._items):
            return self._items[index]
        return None


def parse_string_item(element: ET.Element) -> SharedStringItem:
    """Decode an ``<si>``/``<is>``/``<text>`` element: plain text when it has a
    direct ``<t>``, rich text when it is made of ``<r>`` runs."""
    direct = element.find(_T)
    if direct is not None:
        return direct.text or ""
    runs = [
        RichTextRun(text=run.findtext(_T, default="") or "", properties=_parse_run_properties(run.find(_RPR)))
        for run in element.findall(_R)
    ]
    return RichText(runs=runs)


def _parse_run_properties(rpr: ET.Element | None) -> RunProperties | None:
    if rpr is None:
        return None

    def val(tag: str) -> str | None:
        node = rpr.find(f"{{{SPREADSHEET_NS}}}{tag}")
        if node is None:
            return None
        return node.attrib.get("val", "")

    def flag(tag: str) -> bool:
        raw = val(tag)
        if raw is None:
            return False
        return bool(parse_bool(raw, default=True))

    underline = val("u")
    color_elem = rpr.find(f"{{{SPREADSHEET_NS}}}color")
    color = None
    if color_elem is not None:
        color = color_elem.attrib.get("rgb") or (
            f"theme:{color_elem.attrib['theme']}" if "theme" in color_elem.attrib else None
        )
    return RunProperties(
        bold=flag("b"),
        italic=flag("i"),
        underline=(underline or "single") if underline is not None else None,
        strike=flag("strike"),
        font=val("rFont"),
        size=parse_float(val("sz")),
        color=color,
        vert_align=val("vertAlign"),
    )
