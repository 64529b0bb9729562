from __future__ import annotations

import logging
from dataclasses import dataclass

from ..errors import InconsistentDocument
from ..model import DefinedName, PivotCaches
from .archive import XlsxArchive
from .namespaces import DEFAULT_WORKBOOK_PATH, NS, R_ID, REL_OFFICE_DOCUMENT
from .pivot import parse_cache
from .relationships import Relationships, lookup_rel_path

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class WorksheetFile:
    name: str
    path: str


@dataclass(slots=True)
class WorkbookContents:
    sheet_files: list[WorksheetFile]
    defined_names: list[DefinedName]
    caches: PivotCaches


def find_workbook_path(archive: XlsxArchive) -> str:
    """Locate the main workbook part through the package relationships."""
    root_rels = Relationships.build(archive, "")
    rel = root_rels.find_by_type(REL_OFFICE_DOCUMENT)
    if rel is None:
        return DEFAULT_WORKBOOK_PATH
    return rel.target


def read_workbook(archive: XlsxArchive, workbook_path: str = DEFAULT_WORKBOOK_PATH) -> WorkbookContents:
    root = archive.xml(workbook_path)
    rels = Relationships.build(archive, workbook_path)

    sheet_files: list[WorksheetFile] = []
    for sheet in root.findall("a:sheets/a:sheet", NS):
        name = sheet.attrib.get("name")
        if name is None:
            raise InconsistentDocument(f"Sheet without a name in {workbook_path}")
        path = lookup_rel_path(workbook_path, rels, sheet.attrib.get(R_ID, ""))
        sheet_files.append(WorksheetFile(name=name, path=path))

    defined_names: list[DefinedName] = []
    for dn in root.findall("a:definedNames/a:definedName", NS):
        name = dn.attrib.get("name")
        if name is None:
            raise InconsistentDocument(f"Defined name without a name in {workbook_path}")
        local_sheet_id = None
        raw_scope = dn.attrib.get("localSheetId")
        if raw_scope:
            try:
                local_sheet_id = int(raw_scope)
            except ValueError as exc:
                raise InconsistentDocument(
                    f"Invalid localSheetId {raw_scope!r} for defined name {name!r} in {workbook_path}"
                ) from exc
        defined_names.append(DefinedName(name=name, value=dn.text or "", local_sheet_id=local_sheet_id))

    caches: PivotCaches = {}
    for pivot_cache in root.findall("a:pivotCaches/a:pivotCache", NS):
        raw_id = pivot_cache.attrib.get("cacheId", "")
        try:
            cache_id = int(raw_id)
        except ValueError as exc:
            raise InconsistentDocument(f"Invalid pivot cache id {raw_id!r} in {workbook_path}") from exc
        path = lookup_rel_path(workbook_path, rels, pivot_cache.attrib.get(R_ID, ""))
        cache = parse_cache(archive.read(path))
        if cache is None:
            raise InconsistentDocument(f"Bad pivot table cache in {path}")
        caches[cache_id] = cache

    logger.debug(
        "Read workbook %s: %d sheets, %d defined names, %d pivot caches",
        workbook_path,
        len(sheet_files),
        len(defined_names),
        len(caches),
    )
    return WorkbookContents(sheet_files=sheet_files, defined_names=defined_names, caches=caches)
