"""Decoders for worksheet fragments that carry no cross-part references.

Each function reads one element and returns its typed counterpart; none of
them touch the archive.
"""

from __future__ import annotations

from xml.etree import ElementTree as ET

from ..model import (
    AutoFilter,
    CfRule,
    ColumnProperties,
    CustomFilter,
    DataValidation,
    FilterColumn,
    PageSetup,
    Pane,
    Selection,
    SheetProtection,
    SheetView,
)
from .namespaces import NS, SPREADSHEET_NS
from .utils import local_name, parse_bool, parse_float, parse_int, xml_to_dict

_PROTECTION_ATTRS = {
    "sheet": "sheet",
    "objects": "objects",
    "scenarios": "scenarios",
    "format_cells": "formatCells",
    "format_columns": "formatColumns",
    "format_rows": "formatRows",
    "insert_columns": "insertColumns",
    "insert_rows": "insertRows",
    "insert_hyperlinks": "insertHyperlinks",
    "delete_columns": "deleteColumns",
    "delete_rows": "deleteRows",
    "select_locked_cells": "selectLockedCells",
    "sort": "sort",
    "auto_filter": "autoFilter",
    "pivot_tables": "pivotTables",
    "select_unlocked_cells": "selectUnlockedCells",
}

_RULE_DETAIL_TAGS = {"colorScale", "dataBar", "iconSet"}


def parse_column(col: ET.Element) -> ColumnProperties | None:
    start = parse_int(col.attrib.get("min"))
    end = parse_int(col.attrib.get("max"))
    if start is None or end is None:
        return None
    return ColumnProperties(
        min=start,
        max=end,
        width=parse_float(col.attrib.get("width")),
        style_id=parse_int(col.attrib.get("style")),
        hidden=bool(parse_bool(col.attrib.get("hidden"), False)),
        best_fit=bool(parse_bool(col.attrib.get("bestFit"), False)),
        custom_width=bool(parse_bool(col.attrib.get("customWidth"), False)),
        collapsed=bool(parse_bool(col.attrib.get("collapsed"), False)),
        outline_level=parse_int(col.attrib.get("outlineLevel")) or 0,
    )


def parse_sheet_view(view: ET.Element) -> SheetView:
    pane_elem = view.find("a:pane", NS)
    pane = None
    if pane_elem is not None:
        pane = Pane(
            x_split=parse_float(pane_elem.attrib.get("xSplit")),
            y_split=parse_float(pane_elem.attrib.get("ySplit")),
            top_left_cell=pane_elem.attrib.get("topLeftCell"),
            active_pane=pane_elem.attrib.get("activePane"),
            state=pane_elem.attrib.get("state"),
        )
    return SheetView(
        workbook_view_id=parse_int(view.attrib.get("workbookViewId")) or 0,
        tab_selected=bool(parse_bool(view.attrib.get("tabSelected"), False)),
        view=view.attrib.get("view"),
        zoom_scale=parse_int(view.attrib.get("zoomScale")),
        show_grid_lines=bool(parse_bool(view.attrib.get("showGridLines"), True)),
        show_formulas=bool(parse_bool(view.attrib.get("showFormulas"), False)),
        show_row_col_headers=bool(parse_bool(view.attrib.get("showRowColHeaders"), True)),
        right_to_left=bool(parse_bool(view.attrib.get("rightToLeft"), False)),
        top_left_cell=view.attrib.get("topLeftCell"),
        pane=pane,
        selections=[
            Selection(
                pane=sel.attrib.get("pane"),
                active_cell=sel.attrib.get("activeCell"),
                sqref=sel.attrib.get("sqref"),
            )
            for sel in view.findall("a:selection", NS)
        ],
    )


def parse_page_setup(elem: ET.Element) -> PageSetup:
    attrs = elem.attrib
    return PageSetup(
        paper_size=parse_int(attrs.get("paperSize")),
        scale=parse_int(attrs.get("scale")),
        first_page_number=parse_int(attrs.get("firstPageNumber")),
        fit_to_width=parse_int(attrs.get("fitToWidth")),
        fit_to_height=parse_int(attrs.get("fitToHeight")),
        page_order=attrs.get("pageOrder"),
        orientation=attrs.get("orientation"),
        use_printer_defaults=parse_bool(attrs.get("usePrinterDefaults")),
        black_and_white=parse_bool(attrs.get("blackAndWhite")),
        draft=parse_bool(attrs.get("draft")),
        cell_comments=attrs.get("cellComments"),
        use_first_page_number=parse_bool(attrs.get("useFirstPageNumber")),
        errors=attrs.get("errors"),
        horizontal_dpi=parse_int(attrs.get("horizontalDpi")),
        vertical_dpi=parse_int(attrs.get("verticalDpi")),
        copies=parse_int(attrs.get("copies")),
    )


def parse_conditional_formatting(elem: ET.Element) -> tuple[str, list[CfRule]]:
    sqref = elem.attrib.get("sqref", "")
    rules: list[CfRule] = []
    for rule in elem.findall("a:cfRule", NS):
        attrs = rule.attrib
        details = None
        for child in list(rule):
            if local_name(child.tag) in _RULE_DETAIL_TAGS:
                details = xml_to_dict(child)
                break
        rules.append(
            CfRule(
                type=attrs.get("type"),
                priority=parse_int(attrs.get("priority")),
                dxf_id=parse_int(attrs.get("dxfId")),
                operator=attrs.get("operator"),
                stop_if_true=bool(parse_bool(attrs.get("stopIfTrue"), False)),
                text=attrs.get("text"),
                time_period=attrs.get("timePeriod"),
                rank=parse_int(attrs.get("rank")),
                percent=bool(parse_bool(attrs.get("percent"), False)),
                bottom=bool(parse_bool(attrs.get("bottom"), False)),
                above_average=bool(parse_bool(attrs.get("aboveAverage"), True)),
                formulas=[node.text or "" for node in rule.findall("a:formula", NS)],
                details=details,
            )
        )
    return sqref, rules


def parse_data_validation(dv: ET.Element) -> tuple[str, DataValidation]:
    attrs = dv.attrib
    return attrs.get("sqref", ""), DataValidation(
        type=attrs.get("type", "none"),
        operator=attrs.get("operator", "between"),
        error_style=attrs.get("errorStyle", "stop"),
        allow_blank=bool(parse_bool(attrs.get("allowBlank"), False)),
        show_drop_down=bool(parse_bool(attrs.get("showDropDown"), False)),
        show_input_message=bool(parse_bool(attrs.get("showInputMessage"), False)),
        show_error_message=bool(parse_bool(attrs.get("showErrorMessage"), False)),
        error_title=attrs.get("errorTitle"),
        error=attrs.get("error"),
        prompt_title=attrs.get("promptTitle"),
        prompt=attrs.get("prompt"),
        formula1=dv.findtext("a:formula1", default=None, namespaces=NS),
        formula2=dv.findtext("a:formula2", default=None, namespaces=NS),
    )


def parse_auto_filter(elem: ET.Element) -> AutoFilter:
    columns: dict[int, FilterColumn] = {}
    for column in elem.findall("a:filterColumn", NS):
        col_id = parse_int(column.attrib.get("colId"))
        if col_id is None:
            continue
        columns[col_id] = _parse_filter_column(col_id, column)
    return AutoFilter(ref=elem.attrib.get("ref"), columns=columns)


def _parse_filter_column(col_id: int, column: ET.Element) -> FilterColumn:
    result = FilterColumn(col_id=col_id)
    criteria = next(iter(list(column)), None)
    if criteria is None:
        return result

    result.kind = local_name(criteria.tag)
    result.attributes = {local_name(k): v for k, v in criteria.attrib.items()}
    if result.kind == "filters":
        result.blank = bool(parse_bool(criteria.attrib.get("blank"), False))
        result.values = [f.attrib.get("val", "") for f in criteria.findall(f"{{{SPREADSHEET_NS}}}filter")]
    elif result.kind == "customFilters":
        result.match_all = bool(parse_bool(criteria.attrib.get("and"), False))
        result.custom_filters = [
            CustomFilter(operator=f.attrib.get("operator", "equal"), value=f.attrib.get("val", ""))
            for f in criteria.findall(f"{{{SPREADSHEET_NS}}}customFilter")
        ]
    return result


def parse_sheet_protection(elem: ET.Element) -> SheetProtection:
    protection = SheetProtection()
    for attr_name, xml_name in _PROTECTION_ATTRS.items():
        current = getattr(protection, attr_name)
        setattr(protection, attr_name, bool(parse_bool(elem.attrib.get(xml_name), current)))
    protection.password = elem.attrib.get("password")
    protection.algorithm_name = elem.attrib.get("algorithmName")
    protection.hash_value = elem.attrib.get("hashValue")
    protection.salt_value = elem.attrib.get("saltValue")
    protection.spin_count = parse_int(elem.attrib.get("spinCount"))
    return protection
