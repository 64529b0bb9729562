from __future__ import annotations

import struct
from io import BytesIO
from zipfile import ZIP_DEFLATED, ZIP_STORED, ZipFile

SPREADSHEET_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
DOC_REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
PACKAGE_REL_NS = "http://schemas.openxmlformats.org/package/2006/relationships"

REL_TYPES = {
    "officeDocument": f"{DOC_REL_NS}/officeDocument",
    "worksheet": f"{DOC_REL_NS}/worksheet",
    "sharedStrings": f"{DOC_REL_NS}/sharedStrings",
    "styles": f"{DOC_REL_NS}/styles",
    "comments": f"{DOC_REL_NS}/comments",
    "vmlDrawing": f"{DOC_REL_NS}/vmlDrawing",
    "drawing": f"{DOC_REL_NS}/drawing",
    "image": f"{DOC_REL_NS}/image",
    "chart": f"{DOC_REL_NS}/chart",
    "table": f"{DOC_REL_NS}/table",
    "pivotTable": f"{DOC_REL_NS}/pivotTable",
    "pivotCacheDefinition": f"{DOC_REL_NS}/pivotCacheDefinition",
}

CONTENT_TYPES_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">
  <Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>
  <Default Extension="xml" ContentType="application/xml"/>
  <Default Extension="png" ContentType="image/png"/>
  <Override PartName="/xl/workbook.xml" ContentType="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet.main+xml"/>
  <Override PartName="/xl/worksheets/sheet1.xml" ContentType="application/vnd.openxmlformats-officedocument.spreadsheetml.worksheet+xml"/>
</Types>
"""

ROOT_RELS_XML = f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Relationships xmlns="{PACKAGE_REL_NS}">
  <Relationship Id="rId1" Type="{REL_TYPES['officeDocument']}" Target="xl/workbook.xml"/>
</Relationships>
"""


def rels_xml(*relationships: tuple[str, str, str]) -> str:
    """Build a relationships part from ``(id, type key, target)`` triples."""
    body = "\n".join(
        f'  <Relationship Id="{rel_id}" Type="{REL_TYPES.get(rel_type, rel_type)}" Target="{target}"/>'
        for rel_id, rel_type, target in relationships
    )
    return f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Relationships xmlns="{PACKAGE_REL_NS}">
{body}
</Relationships>
"""


def workbook_xml(sheets: list[tuple[str, str]], extra: str = "") -> str:
    sheet_elems = "\n".join(
        f'    <sheet name="{name}" sheetId="{idx}" r:id="{rel_id}"/>'
        for idx, (name, rel_id) in enumerate(sheets, start=1)
    )
    return f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<workbook xmlns="{SPREADSHEET_NS}" xmlns:r="{DOC_REL_NS}">
  <sheets>
{sheet_elems}
  </sheets>
{extra}
</workbook>
"""


def sheet_xml(sheet_data: str = "", extra: str = "") -> str:
    return f"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<worksheet xmlns="{SPREADSHEET_NS}" xmlns:r="{DOC_REL_NS}">
  <sheetData>{sheet_data}</sheetData>
{extra}
</worksheet>
"""


def shared_strings_xml(*items: str) -> str:
    body = "".join(f"<si><t>{item}</t></si>" for item in items)
    return f'<sst xmlns="{SPREADSHEET_NS}" count="{len(items)}" uniqueCount="{len(items)}">{body}</sst>'


def base_parts(sheet_body: str = "", sheet_extra: str = "") -> dict[str, str | bytes]:
    """A one-sheet package named ``Sheet1``; callers add or replace parts."""
    return {
        "[Content_Types].xml": CONTENT_TYPES_XML,
        "_rels/.rels": ROOT_RELS_XML,
        "xl/workbook.xml": workbook_xml([("Sheet1", "rId1")]),
        "xl/_rels/workbook.xml.rels": rels_xml(("rId1", "worksheet", "worksheets/sheet1.xml")),
        "xl/worksheets/sheet1.xml": sheet_xml(sheet_body, sheet_extra),
    }


def build_xlsx(parts: dict[str, str | bytes], compression: int = ZIP_STORED) -> bytes:
    buffer = BytesIO()
    with ZipFile(buffer, "w", compression=compression) as zf:
        for name, payload in parts.items():
            zf.writestr(name, payload)
    return buffer.getvalue()

PIVOT_CACHE_XML = b"""<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<pivotCacheDefinition xmlns="http://schemas.openxmlformats.org/spreadsheetml/2006/main" recordCount="4">
  <cacheSource type="worksheet"><worksheetSource ref="A1:C5" sheet="Data"/></cacheSource>
  <cacheFields count="3">
    <cacheField name="Region"><sharedItems><s v="North"/><s v="South"/><m/></sharedItems></cacheField>
    <cacheField name="Active"><sharedItems><b v="1"/><b v="0"/></sharedItems></cacheField>
    <cacheField name="Amount"><sharedItems containsNumber="1"><n v="10.5"/></sharedItems></cacheField>
  </cacheFields>
</pivotCacheDefinition>
"""


def corrupt_deflated_part(parts: dict[str, str | bytes], name: str) -> bytes:
    """Build a deflated package whose ``name`` entry holds an invalid deflate stream."""
    data = bytearray(build_xlsx(parts, compression=ZIP_DEFLATED))
    with ZipFile(BytesIO(bytes(data))) as zf:
        info = zf.getinfo(name)
    # Local header: 30 fixed bytes, then the file name and the extra field.
    name_len, extra_len = struct.unpack("<HH", data[info.header_offset + 26 : info.header_offset + 30])
    start = info.header_offset + 30 + name_len + extra_len
    # 0xff starts a block of the reserved type 3.
    data[start : start + info.compress_size] = b"\xff" * info.compress_size
    return bytes(data)
