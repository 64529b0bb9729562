from __future__ import annotations

from xml.etree import ElementTree as ET

from ..model import Comment
from .archive import XlsxArchive
from .namespaces import NS, SPREADSHEET_NS, VML_EXCEL_NS, VML_NS
from .shared_strings import parse_string_item
from .utils import parse_int, rowcol_to_coord

CommentTable = dict[str, Comment]


def parse_comments(root: ET.Element) -> CommentTable:
    authors = [author.text or "" for author in root.findall("a:authors/a:author", NS)]
    table: CommentTable = {}
    for comment in root.findall("a:commentList/a:comment", NS):
        ref = comment.attrib.get("ref")
        if not ref:
            continue
        text_elem = comment.find(f"{{{SPREADSHEET_NS}}}text")
        text = parse_string_item(text_elem) if text_elem is not None else ""
        author_id = parse_int(comment.attrib.get("authorId"))
        author = authors[author_id] if author_id is not None and 0 <= author_id < len(authors) else None
        table[ref] = Comment(text=text, author=author)
    return table


def hidden_comment_refs(vml_root: ET.Element) -> list[str]:
    """Cell references of the comment shapes styled ``visibility:hidden``."""
    refs: list[str] = []
    for shape in vml_root.findall(f"{{{VML_NS}}}shape"):
        segments = [segment.strip() for segment in shape.attrib.get("style", "").split(";")]
        if "visibility:hidden" not in segments:
            continue
        for client_data in shape.findall(f"{{{VML_EXCEL_NS}}}ClientData"):
            row = parse_int(client_data.findtext(f"{{{VML_EXCEL_NS}}}Row"))
            col = parse_int(client_data.findtext(f"{{{VML_EXCEL_NS}}}Column"))
            if row is None or col is None:
                continue
            try:
                refs.append(rowcol_to_coord(row + 1, col + 1))
            except ValueError:
                continue
    return refs


def get_comments(
    archive: XlsxArchive,
    comments_path: str,
    legacy_drawing_path: str | None,
) -> CommentTable | None:
    """Read a comments part, hiding the comments whose VML shapes are hidden.

    A missing comments part means the sheet has no comments. A missing legacy
    drawing means no comment is hidden.
    """
    root = archive.xml_optional(comments_path)
    if root is None:
        return None
    table = parse_comments(root)

    if legacy_drawing_path is not None:
        vml_root = archive.xml_optional(legacy_drawing_path)
        if vml_root is not None:
            for ref in hidden_comment_refs(vml_root):
                if ref in table:
                    table[ref].visible = False
    return table
