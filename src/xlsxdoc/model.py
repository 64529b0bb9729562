from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal, Union


@dataclass(slots=True)
class ParseOptions:
    max_workers: int = 1


@dataclass(slots=True)
class RunProperties:
    bold: bool = False
    italic: bool = False
    underline: str | None = None
    strike: bool = False
    font: str | None = None
    size: float | None = None
    color: str | None = None
    vert_align: str | None = None


@dataclass(slots=True)
class RichTextRun:
    text: str
    properties: RunProperties | None = None


@dataclass(slots=True)
class RichText:
    runs: list[RichTextRun] = field(default_factory=list)

    @property
    def plain_text(self) -> str:
        return "".join(run.text for run in self.runs)


SharedStringItem = Union[str, RichText]
CellValue = Union[str, RichText, float, bool]
CustomPropertyValue = Union[str, int, float, bool, datetime, bytes]


@dataclass(slots=True)
class Comment:
    text: str | RichText
    author: str | None = None
    visible: bool = True


@dataclass(slots=True)
class CellFormula:
    expression: str
    kind: Literal["normal", "shared", "array", "dataTable"] = "normal"
    ref: str | None = None
    shared_index: int | None = None


@dataclass(slots=True)
class Cell:
    style_id: int | None = None
    value: CellValue | None = None
    comment: Comment | None = None
    formula: CellFormula | None = None


DEFAULT_CELL = Cell()


@dataclass(slots=True, frozen=True)
class RowProperties:
    height: float | None = None
    style_id: int | None = None
    hidden: bool = False


DEFAULT_ROW_PROPERTIES = RowProperties()


@dataclass(slots=True)
class ColumnProperties:
    min: int
    max: int
    width: float | None = None
    style_id: int | None = None
    hidden: bool = False
    best_fit: bool = False
    custom_width: bool = False
    collapsed: bool = False
    outline_level: int = 0


@dataclass(slots=True)
class DefinedName:
    name: str
    value: str
    local_sheet_id: int | None = None


@dataclass(slots=True)
class Pane:
    x_split: float | None = None
    y_split: float | None = None
    top_left_cell: str | None = None
    active_pane: str | None = None
    state: str | None = None


@dataclass(slots=True)
class Selection:
    pane: str | None = None
    active_cell: str | None = None
    sqref: str | None = None


@dataclass(slots=True)
class SheetView:
    workbook_view_id: int = 0
    tab_selected: bool = False
    view: str | None = None
    zoom_scale: int | None = None
    show_grid_lines: bool = True
    show_formulas: bool = False
    show_row_col_headers: bool = True
    right_to_left: bool = False
    top_left_cell: str | None = None
    pane: Pane | None = None
    selections: list[Selection] = field(default_factory=list)


@dataclass(slots=True)
class PageSetup:
    paper_size: int | None = None
    scale: int | None = None
    first_page_number: int | None = None
    fit_to_width: int | None = None
    fit_to_height: int | None = None
    page_order: str | None = None
    orientation: str | None = None
    use_printer_defaults: bool | None = None
    black_and_white: bool | None = None
    draft: bool | None = None
    cell_comments: str | None = None
    use_first_page_number: bool | None = None
    errors: str | None = None
    horizontal_dpi: int | None = None
    vertical_dpi: int | None = None
    copies: int | None = None


@dataclass(slots=True)
class CfRule:
    type: str | None
    priority: int | None = None
    dxf_id: int | None = None
    operator: str | None = None
    stop_if_true: bool = False
    text: str | None = None
    time_period: str | None = None
    rank: int | None = None
    percent: bool = False
    bottom: bool = False
    above_average: bool = True
    formulas: list[str] = field(default_factory=list)
    details: dict[str, Any] | None = None


@dataclass(slots=True)
class DataValidation:
    type: str = "none"
    operator: str = "between"
    error_style: str = "stop"
    allow_blank: bool = False
    show_drop_down: bool = False
    show_input_message: bool = False
    show_error_message: bool = False
    error_title: str | None = None
    error: str | None = None
    prompt_title: str | None = None
    prompt: str | None = None
    formula1: str | None = None
    formula2: str | None = None


@dataclass(slots=True)
class CustomFilter:
    operator: str
    value: str


@dataclass(slots=True)
class FilterColumn:
    col_id: int
    kind: str | None = None
    values: list[str] = field(default_factory=list)
    blank: bool = False
    custom_filters: list[CustomFilter] = field(default_factory=list)
    match_all: bool = False
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class AutoFilter:
    ref: str | None = None
    columns: dict[int, FilterColumn] = field(default_factory=dict)


@dataclass(slots=True)
class SheetProtection:
    sheet: bool = False
    objects: bool = False
    scenarios: bool = False
    format_cells: bool = True
    format_columns: bool = True
    format_rows: bool = True
    insert_columns: bool = True
    insert_rows: bool = True
    insert_hyperlinks: bool = True
    delete_columns: bool = True
    delete_rows: bool = True
    select_locked_cells: bool = False
    sort: bool = True
    auto_filter: bool = True
    pivot_tables: bool = True
    select_unlocked_cells: bool = False
    password: str | None = None
    algorithm_name: str | None = None
    hash_value: str | None = None
    salt_value: str | None = None
    spin_count: int | None = None


@dataclass(slots=True)
class AnchorPoint:
    col: int
    row: int
    col_off: int
    row_off: int


@dataclass(slots=True)
class FileInfo:
    filename: str
    content_type: str
    contents: bytes


@dataclass(slots=True)
class ChartSeries:
    title_ref: str | None = None
    categories_ref: str | None = None
    values_ref: str | None = None
    x_values_ref: str | None = None
    y_values_ref: str | None = None


@dataclass(slots=True)
class Chart:
    kind: str
    bar_direction: str | None = None
    series: list[ChartSeries] = field(default_factory=list)


@dataclass(slots=True)
class ChartSpace:
    title: str | None = None
    charts: list[Chart] = field(default_factory=list)
    legend_position: str | None = None
    plot_visible_only: bool = True
    display_blanks_as: str | None = None


@dataclass(slots=True)
class Picture:
    object_id: str
    name: str
    description: str | None = None
    image_ref: str | None = None
    image: FileInfo | None = None


@dataclass(slots=True)
class Graphic:
    object_id: str
    name: str
    chart_ref: str
    chart: ChartSpace | None = None


@dataclass(slots=True)
class Shape:
    object_id: str
    name: str
    kind: str
    text: str = ""


DrawingObject = Union[Picture, Graphic, Shape]


@dataclass(slots=True)
class Anchor:
    anchor_type: str
    obj: DrawingObject
    anchor_from: AnchorPoint | None = None
    anchor_to: AnchorPoint | None = None
    position: tuple[int, int] | None = None
    extent: tuple[int, int] | None = None
    edit_as: str | None = None


@dataclass(slots=True)
class Drawing:
    anchors: list[Anchor] = field(default_factory=list)


@dataclass(slots=True)
class TableColumn:
    id: int | None
    name: str
    totals_row_label: str | None = None
    totals_row_function: str | None = None
    calculated_formula: str | None = None


@dataclass(slots=True)
class Table:
    name: str | None
    display_name: str
    ref: str
    columns: list[TableColumn] = field(default_factory=list)
    auto_filter: AutoFilter | None = None
    header_row_count: int = 1
    totals_row_count: int = 0
    comment: str | None = None


CacheItem = Union[str, float, bool, None]


@dataclass(slots=True)
class CacheField:
    name: str
    shared_items: list[CacheItem] = field(default_factory=list)


@dataclass(slots=True)
class PivotCacheDefinition:
    source_sheet: str
    source_ref: str
    fields: list[CacheField] = field(default_factory=list)


PivotCaches = dict[int, PivotCacheDefinition]


@dataclass(slots=True)
class PivotFieldInfo:
    name: str | None
    axis: str | None = None
    data_field: bool = False
    items: list[CacheItem] = field(default_factory=list)


@dataclass(slots=True)
class DataField:
    field: str | None
    name: str | None = None
    function: str = "sum"


@dataclass(slots=True)
class PivotTable:
    name: str
    cache_id: int
    location: str
    source_sheet: str
    source_ref: str
    data_caption: str | None = None
    fields: list[PivotFieldInfo] = field(default_factory=list)
    # None marks the position of the data (values) field.
    row_fields: list[str | None] = field(default_factory=list)
    column_fields: list[str | None] = field(default_factory=list)
    data_fields: list[DataField] = field(default_factory=list)
    row_grand_totals: bool = True
    column_grand_totals: bool = True
    outline: bool = False
    outline_data: bool = False


@dataclass(slots=True)
class SheetDoc:
    column_properties: list[ColumnProperties] = field(default_factory=list)
    row_properties: dict[int, RowProperties] = field(default_factory=dict)
    cells: dict[tuple[int, int], Cell] = field(default_factory=dict)
    drawing: Drawing | None = None
    merges: list[str] = field(default_factory=list)
    sheet_views: list[SheetView] | None = None
    page_setup: PageSetup | None = None
    conditional_formatting: dict[str, list[CfRule]] = field(default_factory=dict)
    data_validations: dict[str, DataValidation] = field(default_factory=dict)
    pivot_tables: list[PivotTable] = field(default_factory=list)
    auto_filter: AutoFilter | None = None
    tables: list[Table] = field(default_factory=list)
    protection: SheetProtection | None = None

    def cell(self, row: int, col: int) -> Cell | None:
        return self.cells.get((row, col))


@dataclass(slots=True)
class WorkbookDoc:
    sheets: list[tuple[str, SheetDoc]] = field(default_factory=list)
    styles: bytes = b""
    defined_names: list[DefinedName] = field(default_factory=list)
    custom_properties: dict[str, CustomPropertyValue] = field(default_factory=dict)

    def sheet(self, name: str) -> SheetDoc | None:
        for sheet_name, sheet in self.sheets:
            if sheet_name == name:
                return sheet
        return None

    @property
    def sheet_names(self) -> list[str]:
        return [name for name, _ in self.sheets]
