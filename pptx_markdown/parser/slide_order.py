"""Determine the ordered list of slide parts for a presentation."""
from __future__ import annotations

import posixpath
from typing import Iterable, List

from pptx_markdown.parser.pptx_loader import PACKAGE_REL_PATH, PRESENTATION_XML_PATH, PptxPackage
from pptx_markdown.parser.rels_parser import (
    RELTYPE_OFFICE_DOCUMENT,
    parse_relationships,
    rels_path_for,
    resolve_target,
)
from pptx_markdown.utils.logger import get_logger
from pptx_markdown.utils.xml_utils import R_ID, Namespaces

LOGGER = get_logger(__name__)


class SlideOrderResolver:
    """Resolves ``p:sldIdLst`` entries to slide part names in presentation order."""

    def __init__(self, package: PptxPackage) -> None:
        self._package = package

    def presentation_part(self) -> str:
        """Locate the main presentation part through the package relationships."""
        package_rels = parse_relationships(self._package, PACKAGE_REL_PATH)
        rel = package_rels.first_of_type(RELTYPE_OFFICE_DOCUMENT)
        if rel is not None and not rel.is_external and rel.target:
            part = resolve_target("", rel.target)
            if self._package.has_entry(part):
                return part
        return PRESENTATION_XML_PATH

    def resolve(self) -> List[str]:
        presentation_part = self.presentation_part()
        base_dir = posixpath.dirname(presentation_part)

        presentation_rels = parse_relationships(
            self._package, rels_path_for(presentation_part), required=True
        )
        root = self._package.require_xml_part(presentation_part).getroot()

        slides: List[str] = []
        for slide_id in root.findall("p:sldIdLst/p:sldId", Namespaces.PRESENTATION):
            r_id = slide_id.attrib.get(R_ID, "")
            target = presentation_rels.get(r_id)
            if not target:
                LOGGER.debug("Slide id %s has no relationship; skipping", r_id or "<missing>")
                continue
            slides.append(resolve_target(base_dir, target))

        if slides:
            LOGGER.debug("Resolved %d slides from %s", len(slides), presentation_part)
            return slides

        slides_prefix = f"{base_dir}/slides/slide" if base_dir else "slides/slide"
        slides = scan_slide_parts(self._package.names(), slides_prefix)
        LOGGER.warning(
            "Slide id list of %s is empty or unresolvable; using %d slides from archive scan",
            presentation_part,
            len(slides),
        )
        return slides


def scan_slide_parts(names: Iterable[str], slides_prefix: str = "ppt/slides/slide") -> List[str]:
    """Best-effort fallback: slide parts sorted lexically by full name.

    The sort is a plain string sort, so ``slide10.xml`` precedes ``slide2.xml``.
    """
    return sorted(
        name
        for name in names
        if name.startswith(slides_prefix) and name.endswith(".xml") and "_rels" not in name
    )
