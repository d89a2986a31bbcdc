"""Utilities for reading Open Packaging Convention relationship parts."""
from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Dict, Iterator, Mapping, Optional
from xml.etree import ElementTree as ET

from pptx_markdown.parser.errors import PartMissing
from pptx_markdown.parser.pptx_loader import PptxPackage
from pptx_markdown.utils.logger import get_logger
from pptx_markdown.utils.xml_utils import Namespaces

LOGGER = get_logger(__name__)

OFFICE_REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"

RELTYPE_OFFICE_DOCUMENT = f"{OFFICE_REL_NS}/officeDocument"
RELTYPE_IMAGE = f"{OFFICE_REL_NS}/image"


@dataclass(frozen=True)
class Relationship:
    """Represents a single OPC relationship."""

    r_id: str
    target: str
    rel_type: str = ""
    is_external: bool = False


class RelationshipMap(Mapping[str, str]):
    """Relationship id to raw target mapping for one relationships part.

    Ids are only unique inside their own part, so maps are never merged.
    """

    def __init__(self, source_part: str, relationships: Dict[str, Relationship]) -> None:
        self.source_part = source_part
        self._by_id = relationships

    @classmethod
    def empty(cls, source_part: str) -> "RelationshipMap":
        return cls(source_part, {})

    @classmethod
    def from_tree(cls, source_part: str, tree: ET.ElementTree) -> "RelationshipMap":
        result: Dict[str, Relationship] = {}
        for rel_el in tree.findall(".//rel:Relationship", Namespaces.RELS):
            r_id = rel_el.attrib.get("Id")
            if not r_id:
                continue
            result[r_id] = Relationship(
                r_id=r_id,
                target=rel_el.attrib.get("Target", ""),
                rel_type=rel_el.attrib.get("Type", ""),
                is_external=rel_el.attrib.get("TargetMode") == "External",
            )
        return cls(source_part, result)

    def __getitem__(self, r_id: str) -> str:
        return self._by_id[r_id].target

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_id)

    def __len__(self) -> int:
        return len(self._by_id)

    def find(self, r_id: str) -> Optional[Relationship]:
        return self._by_id.get(r_id)

    def first_of_type(self, rel_type: str) -> Optional[Relationship]:
        for rel in self._by_id.values():
            if rel.rel_type == rel_type:
                return rel
        return None

    def resolve(self, r_id: str) -> Optional[str]:
        """Return the archive path a relationship points at, relative to its source part.

        External targets and unknown ids resolve to ``None``.
        """
        rel = self._by_id.get(r_id)
        if rel is None or rel.is_external or not rel.target:
            return None
        return resolve_target(posixpath.dirname(self.source_part), rel.target)


def resolve_target(base_dir: str, target: str) -> str:
    """Resolve a relationship target against the directory of its source part.

    >>> resolve_target("ppt/slides", "../media/image1.png")
    'ppt/media/image1.png'
    >>> resolve_target("ppt", "/ppt/media/x.png")
    'ppt/media/x.png'
    """
    if target.startswith("/"):
        return target[1:]
    combined = f"{base_dir}/{target}" if base_dir else target
    return posixpath.normpath(combined)


def rels_path_for(part_name: str) -> str:
    """Return the relationships part name belonging to ``part_name``."""
    folder, base = posixpath.split(part_name)
    if not folder:
        return f"_rels/{base}.rels"
    return f"{folder}/_rels/{base}.rels"


def parse_relationships(package: PptxPackage, rels_path: str, *, required: bool = False) -> RelationshipMap:
    """Parse a ``.rels`` part into a :class:`RelationshipMap`.

    A missing optional part yields an empty map; a missing required part
    raises :class:`PartMissing`.
    """
    source_part = _source_from_rel_part(rels_path)
    tree = package.get_xml_part(rels_path)
    if tree is None:
        if required:
            raise PartMissing(rels_path)
        LOGGER.debug("No relationships part at %s", rels_path)
        return RelationshipMap.empty(source_part)
    return RelationshipMap.from_tree(source_part, tree)


def _source_from_rel_part(rel_part: str) -> str:
    if rel_part == "_rels/.rels":
        return ""
    if "/_rels/" in rel_part:
        folder, suffix = rel_part.rsplit("/_rels/", 1)
        return f"{folder}/{suffix[:-5]}"
    if rel_part.startswith("_rels/"):
        return rel_part[len("_rels/") : -5]
    return rel_part[:-5]
