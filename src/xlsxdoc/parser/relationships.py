from __future__ import annotations

from dataclasses import dataclass
from xml.etree import ElementTree as ET

from ..errors import InvalidRef
from .archive import XlsxArchive
from .namespaces import PACKAGE_REL_NS
from .utils import rels_path_for, resolve_target


@dataclass(slots=True, frozen=True)
class Relationship:
    id: str
    type: str
    target: str
    external: bool = False


class Relationships:
    """Relationships declared by a single part, with targets already
    resolved to package-root-relative paths."""

    def __init__(self, relationships: list[Relationship] | None = None) -> None:
        self._ordered = list(relationships or [])
        self._by_id = {rel.id: rel for rel in self._ordered}

    @classmethod
    def build(cls, archive: XlsxArchive, part_path: str) -> Relationships:
        root = archive.xml_optional(rels_path_for(part_path))
        if root is None:
            return cls()
        return cls.from_xml(root, part_path)

    @classmethod
    def from_xml(cls, root: ET.Element, part_path: str) -> Relationships:
        rels: list[Relationship] = []
        for rel in root.findall(f"{{{PACKAGE_REL_NS}}}Relationship"):
            rel_id = rel.attrib.get("Id")
            target = rel.attrib.get("Target")
            if not rel_id or target is None:
                continue
            external = rel.attrib.get("TargetMode") == "External"
            rels.append(
                Relationship(
                    id=rel_id,
                    type=rel.attrib.get("Type", ""),
                    target=target if external else resolve_target(part_path, target),
                    external=external,
                )
            )
        return cls(rels)

    def __len__(self) -> int:
        return len(self._ordered)

    def __iter__(self):
        return iter(self._ordered)

    def lookup(self, ref_id: str) -> Relationship | None:
        return self._by_id.get(ref_id)

    def all_by_type(self, rel_type: str) -> list[Relationship]:
        return [rel for rel in self._ordered if rel.type == rel_type]

    def find_by_type(self, rel_type: str) -> Relationship | None:
        for rel in self._ordered:
            if rel.type == rel_type:
                return rel
        return None


def lookup_rel_path(owner_path: str, rels: Relationships, ref_id: str) -> str:
    """Resolve ``ref_id`` declared by ``owner_path`` to the target part path."""
    rel = rels.lookup(ref_id)
    if rel is None:
        raise InvalidRef(owner_path, ref_id)
    return rel.target
