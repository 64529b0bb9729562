from __future__ import annotations

import logging
from xml.etree import ElementTree as ET

from ..errors import InconsistentDocument, InvalidFile
from ..model import Anchor, AnchorPoint, Drawing, DrawingObject, FileInfo, Graphic, Picture, Shape
from .archive import XlsxArchive
from .chart import read_chart
from .content_types import ContentTypes
from .namespaces import CHART_NS, DRAWING_MAIN_NS, R_EMBED, R_ID, SHEET_DRAWING_NS
from .relationships import Relationships, lookup_rel_path
from .utils import local_name

logger = logging.getLogger(__name__)

MEDIA_PREFIX = "xl/media/"
ANCHOR_TAGS = {"twoCellAnchor", "oneCellAnchor", "absoluteAnchor"}
SHAPE_TAGS = {"sp", "cxnSp", "grpSp"}


def get_drawing(archive: XlsxArchive, content_types: ContentTypes, drawing_path: str) -> Drawing:
    root = archive.xml(drawing_path)
    rels = Relationships.build(archive, drawing_path)
    drawing = parse_drawing(root)
    if drawing is None:
        raise InconsistentDocument(f"Bad drawing in {drawing_path}")

    for anchor in drawing.anchors:
        obj = anchor.obj
        if isinstance(obj, Picture):
            obj.image = _resolve_file_info(archive, content_types, drawing_path, rels, obj.image_ref)
        elif isinstance(obj, Graphic):
            chart_path = lookup_rel_path(drawing_path, rels, obj.chart_ref)
            obj.chart = read_chart(archive, chart_path)
    logger.debug("Resolved %d anchors in %s", len(drawing.anchors), drawing_path)
    return drawing


def _resolve_file_info(
    archive: XlsxArchive,
    content_types: ContentTypes,
    drawing_path: str,
    rels: Relationships,
    ref_id: str | None,
) -> FileInfo | None:
    if ref_id is None:
        return None
    path = lookup_rel_path(drawing_path, rels, ref_id)
    # content types are keyed by part names starting with /
    content_type = content_types.lookup("/" + path)
    if content_type is None:
        raise InvalidFile(path)
    contents = archive.read(path)
    filename = path[len(MEDIA_PREFIX):] if path.startswith(MEDIA_PREFIX) else path
    return FileInfo(filename=filename, content_type=content_type, contents=contents)


def parse_drawing(root: ET.Element) -> Drawing | None:
    """Parse a ``wsDr`` element; relationship ids are left unresolved."""
    if root.tag != f"{{{SHEET_DRAWING_NS}}}wsDr":
        return None

    anchors: list[Anchor] = []
    for anchor in list(root):
        anchor_tag = local_name(anchor.tag)
        if anchor_tag not in ANCHOR_TAGS:
            continue
        obj = None
        for child in list(anchor):
            obj = _parse_object(child)
            if obj is not None:
                break
        if obj is None:
            continue
        try:
            anchors.append(
                Anchor(
                    anchor_type=anchor_tag,
                    obj=obj,
                    anchor_from=_parse_anchor_point(anchor.find(f"{{{SHEET_DRAWING_NS}}}from")),
                    anchor_to=_parse_anchor_point(anchor.find(f"{{{SHEET_DRAWING_NS}}}to")),
                    position=_parse_pair(anchor.find(f"{{{SHEET_DRAWING_NS}}}pos"), "x", "y"),
                    extent=_parse_pair(anchor.find(f"{{{SHEET_DRAWING_NS}}}ext"), "cx", "cy"),
                    edit_as=anchor.attrib.get("editAs"),
                )
            )
        except ValueError:
            return None
    return Drawing(anchors=anchors)


def _parse_object(element: ET.Element) -> DrawingObject | None:
    kind = local_name(element.tag)
    object_id, name, description = _extract_identity(element, kind)

    if kind == "pic":
        blip = element.find(f".//{{{DRAWING_MAIN_NS}}}blip")
        image_ref = blip.attrib.get(R_EMBED) if blip is not None else None
        return Picture(object_id=object_id, name=name, description=description, image_ref=image_ref or None)

    if kind == "graphicFrame":
        chart = element.find(f".//{{{CHART_NS}}}chart")
        chart_ref = chart.attrib.get(R_ID) if chart is not None else None
        if not chart_ref:
            return None
        return Graphic(object_id=object_id, name=name, chart_ref=chart_ref)

    if kind in SHAPE_TAGS:
        return Shape(object_id=object_id, name=name, kind=kind, text=_extract_text(element))

    return None


def _parse_anchor_point(elem: ET.Element | None) -> AnchorPoint | None:
    if elem is None:
        return None
    return AnchorPoint(
        col=int(elem.findtext(f"{{{SHEET_DRAWING_NS}}}col", default="0")),
        row=int(elem.findtext(f"{{{SHEET_DRAWING_NS}}}row", default="0")),
        col_off=int(elem.findtext(f"{{{SHEET_DRAWING_NS}}}colOff", default="0")),
        row_off=int(elem.findtext(f"{{{SHEET_DRAWING_NS}}}rowOff", default="0")),
    )


def _parse_pair(elem: ET.Element | None, first: str, second: str) -> tuple[int, int] | None:
    if elem is None:
        return None
    return int(elem.attrib.get(first, "0")), int(elem.attrib.get(second, "0"))


def _extract_identity(element: ET.Element, kind: str) -> tuple[str, str, str | None]:
    path_by_kind = {
        "sp": f"{{{SHEET_DRAWING_NS}}}nvSpPr/{{{SHEET_DRAWING_NS}}}cNvPr",
        "cxnSp": f"{{{SHEET_DRAWING_NS}}}nvCxnSpPr/{{{SHEET_DRAWING_NS}}}cNvPr",
        "pic": f"{{{SHEET_DRAWING_NS}}}nvPicPr/{{{SHEET_DRAWING_NS}}}cNvPr",
        "grpSp": f"{{{SHEET_DRAWING_NS}}}nvGrpSpPr/{{{SHEET_DRAWING_NS}}}cNvPr",
        "graphicFrame": f"{{{SHEET_DRAWING_NS}}}nvGraphicFramePr/{{{SHEET_DRAWING_NS}}}cNvPr",
    }
    path = path_by_kind.get(kind)
    c_nv_pr = element.find(path) if path else None
    if c_nv_pr is None:
        return "", "", None
    return c_nv_pr.attrib.get("id", ""), c_nv_pr.attrib.get("name", ""), c_nv_pr.attrib.get("descr")


def _extract_text(element: ET.Element) -> str:
    fragments: list[str] = []
    for txt in element.findall(f".//{{{DRAWING_MAIN_NS}}}t"):
        if txt.text:
            fragments.append(txt.text)
    return "".join(fragments).strip()
