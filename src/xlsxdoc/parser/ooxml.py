from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from ..model import ParseOptions, SheetDoc, WorkbookDoc
from .archive import XlsxArchive
from .content_types import ContentTypes
from .custom_properties import get_custom_properties
from .namespaces import STYLES_PATH
from .shared_strings import SharedStringTable
from .workbook import WorkbookContents, WorksheetFile, find_workbook_path, read_workbook
from .worksheet import extract_sheet

logger = logging.getLogger(__name__)


class XlsxPackageParser:
    """Decodes raw container bytes into a :class:`WorkbookDoc`.

    Package-wide tables (shared strings, content types, pivot caches) are
    built before any worksheet is read and are only read afterwards, so
    worksheets can be extracted on several threads.
    """

    def __init__(self, data: bytes, options: ParseOptions | None = None) -> None:
        self.data = data
        self.options = options or ParseOptions()

    def parse(self) -> WorkbookDoc:
        with XlsxArchive(self.data) as archive:
            shared_strings = SharedStringTable.read(archive)
            content_types = ContentTypes.read(archive)
            workbook_path = find_workbook_path(archive)
            contents = read_workbook(archive, workbook_path)

            sheets = self._extract_sheets(archive, shared_strings, content_types, contents)

            workbook = WorkbookDoc(
                sheets=[(sheet_file.name, sheet) for sheet_file, sheet in zip(contents.sheet_files, sheets)],
                defined_names=contents.defined_names,
                custom_properties=get_custom_properties(archive),
                styles=archive.read_optional(STYLES_PATH) or b"",
            )
        logger.debug("Decoded workbook with %d sheets", len(workbook.sheets))
        return workbook

    def _extract_sheets(
        self,
        archive: XlsxArchive,
        shared_strings: SharedStringTable,
        content_types: ContentTypes,
        contents: WorkbookContents,
    ) -> list[SheetDoc]:
        def extract(sheet_file: WorksheetFile) -> SheetDoc:
            return extract_sheet(archive, shared_strings, content_types, contents.caches, sheet_file)

        workers = self.options.max_workers
        if workers <= 1 or len(contents.sheet_files) <= 1:
            return [extract(sheet_file) for sheet_file in contents.sheet_files]

        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(extract, contents.sheet_files))
