"""Pivot cache definitions and pivot tables.

Pivot tables only carry field indices; names and items come from the
workbook-level cache with the matching ``cacheId``. Both parsers return
``None`` when the part does not have the expected shape, leaving the
caller to decide how to report it.
"""

from __future__ import annotations

from xml.etree import ElementTree as ET

from ..model import (
    CacheField,
    CacheItem,
    DataField,
    PivotCacheDefinition,
    PivotCaches,
    PivotFieldInfo,
    PivotTable,
)
from .namespaces import NS
from .utils import local_name, parse_bool, parse_float, parse_int

DATA_POSITION_INDEX = -2


def _parse_root(data: bytes, expected_tag: str) -> ET.Element | None:
    try:
        root = ET.fromstring(data)
    except (ET.ParseError, LookupError, ValueError):
        return None
    if local_name(root.tag) != expected_tag:
        return None
    return root


def parse_cache(data: bytes) -> PivotCacheDefinition | None:
    root = _parse_root(data, "pivotCacheDefinition")
    if root is None:
        return None
    source = root.find("a:cacheSource/a:worksheetSource", NS)
    if source is None:
        return None
    sheet = source.attrib.get("sheet")
    ref = source.attrib.get("ref")
    if not sheet or not ref:
        return None

    fields: list[CacheField] = []
    for cache_field in root.findall("a:cacheFields/a:cacheField", NS):
        name = cache_field.attrib.get("name")
        if name is None:
            return None
        shared = cache_field.find("a:sharedItems", NS)
        items = [_parse_cache_item(item) for item in list(shared)] if shared is not None else []
        fields.append(CacheField(name=name, shared_items=items))
    return PivotCacheDefinition(source_sheet=sheet, source_ref=ref, fields=fields)


def _parse_cache_item(item: ET.Element) -> CacheItem:
    tag = local_name(item.tag)
    raw = item.attrib.get("v")
    if tag == "n":
        return parse_float(raw)
    if tag == "b":
        return parse_bool(raw)
    if tag == "m":
        return None
    return raw


def parse_pivot_table(data: bytes, caches: PivotCaches) -> PivotTable | None:
    root = _parse_root(data, "pivotTableDefinition")
    if root is None:
        return None
    name = root.attrib.get("name")
    cache_id = parse_int(root.attrib.get("cacheId"))
    location = root.find("a:location", NS)
    if not name or cache_id is None or location is None or not location.attrib.get("ref"):
        return None
    cache = caches.get(cache_id)
    if cache is None:
        return None

    def field_name(index: int | None) -> str | None:
        if index is None or not 0 <= index < len(cache.fields):
            return None
        return cache.fields[index].name

    fields: list[PivotFieldInfo] = []
    for idx, pivot_field in enumerate(root.findall("a:pivotFields/a:pivotField", NS)):
        shared = cache.fields[idx].shared_items if idx < len(cache.fields) else []
        items: list[CacheItem] = []
        for item in pivot_field.findall("a:items/a:item", NS):
            if "t" in item.attrib:
                continue
            pos = parse_int(item.attrib.get("x"))
            if pos is not None and 0 <= pos < len(shared):
                items.append(shared[pos])
        fields.append(
            PivotFieldInfo(
                name=pivot_field.attrib.get("name") or field_name(idx),
                axis=pivot_field.attrib.get("axis"),
                data_field=bool(parse_bool(pivot_field.attrib.get("dataField"), False)),
                items=items,
            )
        )

    def positioned(path: str) -> list[str | None]:
        result: list[str | None] = []
        for ref in root.findall(path, NS):
            index = parse_int(ref.attrib.get("x"))
            result.append(None if index == DATA_POSITION_INDEX else field_name(index))
        return result

    data_fields = [
        DataField(
            field=field_name(parse_int(df.attrib.get("fld"))),
            name=df.attrib.get("name"),
            function=df.attrib.get("subtotal", "sum"),
        )
        for df in root.findall("a:dataFields/a:dataField", NS)
    ]

    return PivotTable(
        name=name,
        cache_id=cache_id,
        location=location.attrib["ref"],
        source_sheet=cache.source_sheet,
        source_ref=cache.source_ref,
        data_caption=root.attrib.get("dataCaption"),
        fields=fields,
        row_fields=positioned("a:rowFields/a:field"),
        column_fields=positioned("a:colFields/a:field"),
        data_fields=data_fields,
        row_grand_totals=bool(parse_bool(root.attrib.get("rowGrandTotals"), True)),
        column_grand_totals=bool(parse_bool(root.attrib.get("colGrandTotals"), True)),
        outline=bool(parse_bool(root.attrib.get("outline"), False)),
        outline_data=bool(parse_bool(root.attrib.get("outlineData"), False)),
    )
