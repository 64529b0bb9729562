SPREADSHEET_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
DOCUMENT_REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
PACKAGE_REL_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
DRAWING_MAIN_NS = "http://schemas.openxmlformats.org/drawingml/2006/main"
SHEET_DRAWING_NS = "http://schemas.openxmlformats.org/drawingml/2006/spreadsheetDrawing"
CHART_NS = "http://schemas.openxmlformats.org/drawingml/2006/chart"
CUSTOM_PROPS_NS = "http://schemas.openxmlformats.org/officeDocument/2006/custom-properties"
VTYPES_NS = "http://schemas.openxmlformats.org/officeDocument/2006/docPropsVTypes"
VML_NS = "urn:schemas-microsoft-com:vml"
VML_EXCEL_NS = "urn:schemas-microsoft-com:office:excel"

NS = {
    "a": SPREADSHEET_NS,
    "r": DOCUMENT_REL_NS,
    "d": DRAWING_MAIN_NS,
    "xdr": SHEET_DRAWING_NS,
    "c": CHART_NS,
    "v": VML_NS,
    "x": VML_EXCEL_NS,
    "cp": CUSTOM_PROPS_NS,
    "vt": VTYPES_NS,
}

R_ID = f"{{{DOCUMENT_REL_NS}}}id"
R_EMBED = f"{{{DOCUMENT_REL_NS}}}embed"

# Relationship types, compared by equality only.
REL_OFFICE_DOCUMENT = f"{DOCUMENT_REL_NS}/officeDocument"
REL_COMMENTS = f"{DOCUMENT_REL_NS}/comments"
REL_PIVOT_TABLE = f"{DOCUMENT_REL_NS}/pivotTable"

CONTENT_TYPES_PATH = "[Content_Types].xml"
DEFAULT_WORKBOOK_PATH = "xl/workbook.xml"
SHARED_STRINGS_PATH = "xl/sharedStrings.xml"
STYLES_PATH = "xl/styles.xml"
CUSTOM_PROPS_PATH = "docProps/custom.xml"
