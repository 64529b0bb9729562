from __future__ import annotations

from xml.etree import ElementTree as ET

import pytest

from xlsxdoc.errors import InvalidFile, InvalidRef
from xlsxdoc.parser.relationships import Relationships, lookup_rel_path
from tests.helpers import REL_TYPES, rels_xml


def test_missing_rels_part_is_empty(make_archive) -> None:
    archive = make_archive({"xl/worksheets/sheet1.xml": "<worksheet/>"})
    rels = Relationships.build(archive, "xl/worksheets/sheet1.xml")

    assert len(rels) == 0
    assert rels.lookup("rId1") is None


def test_targets_are_normalized_to_package_root(make_archive) -> None:
    archive = make_archive(
        {
            "xl/worksheets/_rels/sheet1.xml.rels": rels_xml(
                ("rId1", "drawing", "../drawings/drawing1.xml"),
                ("rId2", "table", "/xl/tables/table1.xml"),
                ("rId3", "pivotTable", "../pivotTables/pivotTable1.xml"),
                ("rId4", "pivotTable", "../pivotTables/pivotTable2.xml"),
            )
        }
    )
    rels = Relationships.build(archive, "xl/worksheets/sheet1.xml")

    assert rels.lookup("rId1").target == "xl/drawings/drawing1.xml"
    assert rels.lookup("rId1").type == REL_TYPES["drawing"]
    assert rels.lookup("rId2").target == "xl/tables/table1.xml"
    assert [rel.id for rel in rels.all_by_type(REL_TYPES["pivotTable"])] == ["rId3", "rId4"]
    assert rels.find_by_type(REL_TYPES["comments"]) is None


def test_external_targets_kept_verbatim() -> None:
    root = ET.fromstring(
        '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
        '<Relationship Id="rId1" Type="hyperlink" Target="https://example.com/a" TargetMode="External"/>'
        "</Relationships>"
    )
    rels = Relationships.from_xml(root, "xl/worksheets/sheet1.xml")

    assert rels.lookup("rId1").target == "https://example.com/a"
    assert rels.lookup("rId1").external is True


def test_unparsable_rels_part(make_archive) -> None:
    archive = make_archive({"xl/_rels/workbook.xml.rels": "<Relationships"})

    with pytest.raises(InvalidFile) as excinfo:
        Relationships.build(archive, "xl/workbook.xml")
    assert excinfo.value.path == "xl/_rels/workbook.xml.rels"


def test_lookup_rel_path_names_owner_and_id(make_archive) -> None:
    archive = make_archive(
        {"xl/_rels/workbook.xml.rels": rels_xml(("rId1", "worksheet", "worksheets/sheet1.xml"))}
    )
    rels = Relationships.build(archive, "xl/workbook.xml")

    assert lookup_rel_path("xl/workbook.xml", rels, "rId1") == "xl/worksheets/sheet1.xml"
    with pytest.raises(InvalidRef) as excinfo:
        lookup_rel_path("xl/workbook.xml", rels, "rId9")
    assert excinfo.value == InvalidRef("xl/workbook.xml", "rId9")
