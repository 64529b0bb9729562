from __future__ import annotations

from xml.etree import ElementTree as ET

from xlsxdoc.model import Comment
from xlsxdoc.parser.comments import get_comments, hidden_comment_refs, parse_comments


def test_authors_resolved_by_index() -> None:
    root = ET.fromstring(
        '<comments xmlns="http://schemas.openxmlformats.org/spreadsheetml/2006/main">'
        "<authors><author>ann</author></authors>"
        "<commentList>"
        '<comment ref="B2" authorId="0"><text><t>first</t></text></comment>'
        '<comment ref="B3" authorId="4"><text><t>unknown author</t></text></comment>'
        '<comment authorId="0"><text><t>no ref</t></text></comment>'
        "</commentList></comments>"
    )

    assert parse_comments(root) == {
        "B2": Comment(text="first", author="ann"),
        "B3": Comment(text="unknown author"),
    }


def test_hidden_shapes_only() -> None:
    root = ET.fromstring(
        '<xml xmlns:v="urn:schemas-microsoft-com:vml" xmlns:x="urn:schemas-microsoft-com:office:excel">'
        '<v:shape style="visibility:hidden"><x:ClientData><x:Row>0</x:Row><x:Column>0</x:Column></x:ClientData></v:shape>'
        '<v:shape style="width:10pt; visibility:hidden ;height:5pt"><x:ClientData><x:Row>9</x:Row><x:Column>27</x:Column></x:ClientData></v:shape>'
        '<v:shape style="visibility:visible"><x:ClientData><x:Row>1</x:Row><x:Column>1</x:Column></x:ClientData></v:shape>'
        '<v:shape style="visibility:hidden"><x:ClientData><x:Row>x</x:Row><x:Column>1</x:Column></x:ClientData></v:shape>'
        '<v:shape style="visibility:hidden"><x:ClientData><x:Row>1</x:Row><x:Column>99999</x:Column></x:ClientData></v:shape>'
        "</xml>"
    )

    assert hidden_comment_refs(root) == ["A1", "AB10"]


def test_missing_comments_part(make_archive) -> None:
    archive = make_archive({"xl/workbook.xml": "<workbook/>"})

    assert get_comments(archive, "xl/comments1.xml", None) is None
