from __future__ import annotations

from xml.etree import ElementTree as ET

from ..errors import InconsistentDocument
from ..model import Table, TableColumn
from .archive import XlsxArchive
from .namespaces import NS
from .sheet_parts import parse_auto_filter
from .utils import local_name, parse_int


def get_table(archive: XlsxArchive, path: str) -> Table:
    table = parse_table(archive.xml(path))
    if table is None:
        raise InconsistentDocument(f"Bad table in {path}")
    return table


def parse_table(root: ET.Element) -> Table | None:
    if local_name(root.tag) != "table":
        return None
    display_name = root.attrib.get("displayName")
    ref = root.attrib.get("ref")
    if not display_name or not ref:
        return None

    columns = [
        TableColumn(
            id=parse_int(col.attrib.get("id")),
            name=col.attrib.get("name", ""),
            totals_row_label=col.attrib.get("totalsRowLabel"),
            totals_row_function=col.attrib.get("totalsRowFunction"),
            calculated_formula=col.findtext("a:calculatedColumnFormula", default=None, namespaces=NS),
        )
        for col in root.findall("a:tableColumns/a:tableColumn", NS)
    ]
    auto_filter_elem = root.find("a:autoFilter", NS)
    header_rows = parse_int(root.attrib.get("headerRowCount"))
    totals_rows = parse_int(root.attrib.get("totalsRowCount"))
    return Table(
        name=root.attrib.get("name"),
        display_name=display_name,
        ref=ref,
        columns=columns,
        auto_filter=parse_auto_filter(auto_filter_elem) if auto_filter_elem is not None else None,
        header_row_count=1 if header_rows is None else header_rows,
        totals_row_count=totals_rows or 0,
        comment=root.attrib.get("comment"),
    )
