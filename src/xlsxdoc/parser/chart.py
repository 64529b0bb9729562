from __future__ import annotations

from xml.etree import ElementTree as ET

from ..errors import InconsistentDocument
from ..model import Chart, ChartSeries, ChartSpace
from .archive import XlsxArchive
from .namespaces import CHART_NS, DRAWING_MAIN_NS, NS
from .utils import local_name, parse_bool


def read_chart(archive: XlsxArchive, path: str) -> ChartSpace:
    chart = parse_chart_space(archive.xml(path))
    if chart is None:
        raise InconsistentDocument(f"Bad chart in {path}")
    return chart


def parse_chart_space(root: ET.Element) -> ChartSpace | None:
    if root.tag != f"{{{CHART_NS}}}chartSpace":
        return None
    chart = root.find("c:chart", NS)
    if chart is None:
        return None

    title = None
    title_elem = chart.find("c:title", NS)
    if title_elem is not None:
        texts = [node.text or "" for node in title_elem.iter(f"{{{DRAWING_MAIN_NS}}}t")]
        title = "".join(texts) or title_elem.findtext("c:tx/c:strRef/c:f", default=None, namespaces=NS)

    charts: list[Chart] = []
    plot_area = chart.find("c:plotArea", NS)
    if plot_area is not None:
        for child in list(plot_area):
            kind = local_name(child.tag)
            if not kind.endswith("Chart"):
                continue
            bar_dir = child.find("c:barDir", NS)
            charts.append(
                Chart(
                    kind=kind,
                    bar_direction=bar_dir.attrib.get("val") if bar_dir is not None else None,
                    series=[_parse_series(ser) for ser in child.findall("c:ser", NS)],
                )
            )

    legend_pos = chart.find("c:legend/c:legendPos", NS)
    plot_vis = chart.find("c:plotVisOnly", NS)
    disp_blanks = chart.find("c:dispBlanksAs", NS)
    return ChartSpace(
        title=title,
        charts=charts,
        legend_position=legend_pos.attrib.get("val", "r") if legend_pos is not None else None,
        plot_visible_only=bool(parse_bool(plot_vis.attrib.get("val"), True)) if plot_vis is not None else True,
        display_blanks_as=disp_blanks.attrib.get("val") if disp_blanks is not None else None,
    )


def _parse_series(ser: ET.Element) -> ChartSeries:
    def ref(tag: str) -> str | None:
        node = ser.find(f"c:{tag}", NS)
        if node is None:
            return None
        for formula in node.iter(f"{{{CHART_NS}}}f"):
            return formula.text
        return None

    return ChartSeries(
        title_ref=ref("tx"),
        categories_ref=ref("cat"),
        values_ref=ref("val"),
        x_values_ref=ref("xVal"),
        y_values_ref=ref("yVal"),
    )
