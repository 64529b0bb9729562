from __future__ import annotations

import pytest

from xlsxdoc.parser.archive import XlsxArchive
from tests.helpers import base_parts, build_xlsx, shared_strings_xml


@pytest.fixture
def hello_parts() -> dict[str, str | bytes]:
    parts = base_parts(
        sheet_body=(
            '<row r="1">'
            '<c r="A1" t="s"><v>0</v></c>'
            '<c r="B1"><v>42</v></c>'
            "</row>"
        )
    )
    parts["xl/sharedStrings.xml"] = shared_strings_xml("Hello")
    return parts


@pytest.fixture
def make_archive():
    opened: list[XlsxArchive] = []

    def _make(parts: dict[str, str | bytes]) -> XlsxArchive:
        archive = XlsxArchive(build_xlsx(parts))
        opened.append(archive)
        return archive

    yield _make
    for archive in opened:
        archive.close()
