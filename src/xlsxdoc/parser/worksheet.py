from __future__ import annotations

import logging
from dataclasses import replace
from xml.etree import ElementTree as ET

from ..errors import InconsistentDocument
from ..model import (
    DEFAULT_CELL,
    DEFAULT_ROW_PROPERTIES,
    Cell,
    CellFormula,
    CellValue,
    Comment,
    PivotCaches,
    PivotTable,
    RowProperties,
    SheetDoc,
)
from .archive import XlsxArchive
from .comments import CommentTable, get_comments
from .content_types import ContentTypes
from .drawing import get_drawing
from .namespaces import NS, R_ID, REL_COMMENTS, REL_PIVOT_TABLE
from .pivot import parse_pivot_table
from .relationships import Relationships, lookup_rel_path
from .shared_strings import SharedStringTable, parse_string_item
from .sheet_parts import (
    parse_auto_filter,
    parse_column,
    parse_conditional_formatting,
    parse_data_validation,
    parse_page_setup,
    parse_sheet_protection,
    parse_sheet_view,
)
from .tables import get_table
from .utils import coord_to_rowcol, parse_bool, parse_float, parse_int
from .workbook import WorksheetFile

logger = logging.getLogger(__name__)


def extract_sheet(
    archive: XlsxArchive,
    shared_strings: SharedStringTable,
    content_types: ContentTypes,
    caches: PivotCaches,
    sheet_file: WorksheetFile,
) -> SheetDoc:
    path = sheet_file.path
    root = archive.xml(path)
    rels = Relationships.build(archive, path)

    comments = {
        _decode_ref(ref, path): comment
        for ref, comment in (_read_comments(archive, root, rels, path) or {}).items()
    }
    row_properties, cells = _parse_sheet_data(root, shared_strings, comments, path)
    # Comment-only cells; cells holding data already carry their comment.
    for key, comment in comments.items():
        if key not in cells:
            cells[key] = replace(DEFAULT_CELL, comment=comment)

    sheet = SheetDoc(row_properties=row_properties, cells=cells)
    _parse_layout(root, sheet)

    drawing_elem = root.find("a:drawing", NS)
    if drawing_elem is not None and drawing_elem.attrib.get(R_ID):
        drawing_path = lookup_rel_path(path, rels, drawing_elem.attrib[R_ID])
        sheet.drawing = get_drawing(archive, content_types, drawing_path)

    for rel in rels.all_by_type(REL_PIVOT_TABLE):
        sheet.pivot_tables.append(_read_pivot_table(archive, rel.target, caches))

    for table_part in root.findall("a:tableParts/a:tablePart", NS):
        table_path = lookup_rel_path(path, rels, table_part.attrib.get(R_ID, ""))
        sheet.tables.append(get_table(archive, table_path))

    logger.debug(
        "Extracted sheet %r from %s: %d cells, %d tables, %d pivot tables",
        sheet_file.name,
        path,
        len(sheet.cells),
        len(sheet.tables),
        len(sheet.pivot_tables),
    )
    return sheet


def _read_comments(
    archive: XlsxArchive,
    root: ET.Element,
    rels: Relationships,
    path: str,
) -> CommentTable | None:
    legacy_path = None
    legacy = root.find("a:legacyDrawing", NS)
    if legacy is not None and legacy.attrib.get(R_ID):
        legacy_path = lookup_rel_path(path, rels, legacy.attrib[R_ID])

    comments_rel = rels.find_by_type(REL_COMMENTS)
    if comments_rel is None:
        return None
    return get_comments(archive, comments_rel.target, legacy_path)


def _read_pivot_table(archive: XlsxArchive, path: str, caches: PivotCaches) -> PivotTable:
    table = parse_pivot_table(archive.read(path), caches)
    if table is None:
        raise InconsistentDocument(f"Bad pivot table in {path}")
    return table


def _decode_ref(ref: str, path: str) -> tuple[int, int]:
    try:
        return coord_to_rowcol(ref)
    except ValueError as exc:
        raise InconsistentDocument(f"Invalid cell reference {ref!r} in {path}") from exc


def _parse_sheet_data(
    root: ET.Element,
    shared_strings: SharedStringTable,
    comments: dict[tuple[int, int], Comment],
    path: str,
) -> tuple[dict[int, RowProperties], dict[tuple[int, int], Cell]]:
    row_properties: dict[int, RowProperties] = {}
    cells: dict[tuple[int, int], Cell] = {}

    row_idx = 0
    for row_elem in root.findall("a:sheetData/a:row", NS):
        explicit_row = parse_int(row_elem.attrib.get("r"))
        row_idx = explicit_row if explicit_row is not None else row_idx + 1

        custom_height = parse_bool(row_elem.attrib.get("customHeight"), False)
        props = RowProperties(
            height=parse_float(row_elem.attrib.get("ht")) if custom_height else None,
            style_id=parse_int(row_elem.attrib.get("s")),
            hidden=bool(parse_bool(row_elem.attrib.get("hidden"), False)),
        )
        if props != DEFAULT_ROW_PROPERTIES:
            row_properties[row_idx] = props

        col_idx = 0
        for cell_elem in row_elem.findall("a:c", NS):
            ref = cell_elem.attrib.get("r")
            if ref:
                cell_row, col_idx = _decode_ref(ref, path)
            else:
                cell_row, col_idx = row_idx, col_idx + 1
            key = (cell_row, col_idx)
            if key in cells:
                continue

            cells[key] = Cell(
                style_id=parse_int(cell_elem.attrib.get("s")),
                value=decode_cell_value(cell_elem, cell_elem.attrib.get("t", "n"), shared_strings),
                comment=comments.get(key),
                formula=_parse_formula(cell_elem.find("a:f", NS)),
            )
    return row_properties, cells


def decode_cell_value(
    cell_elem: ET.Element,
    cell_type: str,
    shared_strings: SharedStringTable,
) -> CellValue | None:
    if cell_type == "inlineStr":
        inline = cell_elem.find("a:is", NS)
        return parse_string_item(inline) if inline is not None else None

    raw = cell_elem.findtext("a:v", default=None, namespaces=NS)
    if raw is None:
        return None

    if cell_type == "s":
        index = raw.strip()
        if not (index.isascii() and index.isdigit()):
            return None
        return shared_strings.item(int(index))

    if cell_type == "str":
        return raw

    if cell_type == "n":
        return parse_float(raw)

    if cell_type == "b":
        if raw == "1":
            return True
        if raw == "0":
            return False
        return None

    return None


def _parse_formula(formula_elem: ET.Element | None) -> CellFormula | None:
    if formula_elem is None:
        return None
    return CellFormula(
        expression=formula_elem.text or "",
        kind=formula_elem.attrib.get("t", "normal"),
        ref=formula_elem.attrib.get("ref"),
        shared_index=parse_int(formula_elem.attrib.get("si")),
    )


def _parse_layout(root: ET.Element, sheet: SheetDoc) -> None:
    for col in root.findall("a:cols/a:col", NS):
        props = parse_column(col)
        if props is not None:
            sheet.column_properties.append(props)

    for merge in root.findall("a:mergeCells/a:mergeCell", NS):
        ref = merge.attrib.get("ref")
        if ref:
            sheet.merges.append(ref)

    # sheetViews and pageSetup occur at most once; the first occurrence wins.
    views = root.find("a:sheetViews", NS)
    if views is not None:
        parsed_views = [parse_sheet_view(view) for view in views.findall("a:sheetView", NS)]
        sheet.sheet_views = parsed_views or None

    page_setup = root.find("a:pageSetup", NS)
    if page_setup is not None:
        sheet.page_setup = parse_page_setup(page_setup)

    for cf in root.findall("a:conditionalFormatting", NS):
        sqref, rules = parse_conditional_formatting(cf)
        sheet.conditional_formatting[sqref] = rules

    for dv in root.findall("a:dataValidations/a:dataValidation", NS):
        sqref, validation = parse_data_validation(dv)
        sheet.data_validations[sqref] = validation

    auto_filter = root.find("a:autoFilter", NS)
    if auto_filter is not None:
        sheet.auto_filter = parse_auto_filter(auto_filter)

    protection = root.find("a:sheetProtection", NS)
    if protection is not None:
        sheet.protection = parse_sheet_protection(protection)
