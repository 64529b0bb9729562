from __future__ import annotations

from datetime import datetime, timezone

import pytest

from xlsxdoc.errors import InvalidFile
from xlsxdoc.parser.custom_properties import get_custom_properties

CUSTOM_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Properties xmlns="http://schemas.openxmlformats.org/officeDocument/2006/custom-properties"
            xmlns:vt="http://schemas.openxmlformats.org/officeDocument/2006/docPropsVTypes">
  <property fmtid="{D5CDD505-2E9C-101B-9397-08002B2CF9AE}" pid="2" name="Owner"><vt:lpwstr>Finance</vt:lpwstr></property>
  <property fmtid="{D5CDD505-2E9C-101B-9397-08002B2CF9AE}" pid="3" name="Revision"><vt:i4>12</vt:i4></property>
  <property fmtid="{D5CDD505-2E9C-101B-9397-08002B2CF9AE}" pid="4" name="Ratio"><vt:r8>0.75</vt:r8></property>
  <property fmtid="{D5CDD505-2E9C-101B-9397-08002B2CF9AE}" pid="5" name="Approved"><vt:bool>true</vt:bool></property>
  <property fmtid="{D5CDD505-2E9C-101B-9397-08002B2CF9AE}" pid="6" name="Reviewed"><vt:filetime>2023-04-05T10:30:00Z</vt:filetime></property>
  <property fmtid="{D5CDD505-2E9C-101B-9397-08002B2CF9AE}" pid="7" name="Payload"><vt:blob>aGVsbG8=</vt:blob></property>
  <property fmtid="{D5CDD505-2E9C-101B-9397-08002B2CF9AE}" pid="8" name="Broken"><vt:i4>twelve</vt:i4></property>
  <property fmtid="{D5CDD505-2E9C-101B-9397-08002B2CF9AE}" pid="9" name="Vector"><vt:vector size="0" baseType="lpwstr"/></property>
  <property fmtid="{D5CDD505-2E9C-101B-9397-08002B2CF9AE}" pid="10"><vt:lpwstr>nameless</vt:lpwstr></property>
</Properties>
"""


def test_typed_values(make_archive) -> None:
    properties = get_custom_properties(make_archive({"docProps/custom.xml": CUSTOM_XML}))

    assert properties == {
        "Owner": "Finance",
        "Revision": 12,
        "Ratio": 0.75,
        "Approved": True,
        "Reviewed": datetime(2023, 4, 5, 10, 30, tzinfo=timezone.utc),
        "Payload": b"hello",
    }


def test_part_is_optional(make_archive) -> None:
    assert get_custom_properties(make_archive({"xl/workbook.xml": "<workbook/>"})) == {}


def test_malformed_part_propagates(make_archive) -> None:
    with pytest.raises(InvalidFile) as excinfo:
        get_custom_properties(make_archive({"docProps/custom.xml": "<Properties"}))
    assert excinfo.value.path == "docProps/custom.xml"
