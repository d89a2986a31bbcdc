"""Assemble a :class:`Slide` from a slide part and its relationships."""
from __future__ import annotations

from pptx_markdown.model.presentation_model import ImageRef, Slide
from pptx_markdown.parser.errors import EntryUnreadable, MalformedXML, PartMissing, SlideParseFailed
from pptx_markdown.parser.pptx_loader import PptxPackage
from pptx_markdown.parser.rels_parser import parse_relationships, rels_path_for
from pptx_markdown.parser.shape_tree import build_shape_tree, walk_shape_tree
from pptx_markdown.utils.logger import get_logger
from pptx_markdown.utils.xml_utils import Namespaces

LOGGER = get_logger(__name__)


class SlideParser:
    """Transforms one slide part into a resolved slide record."""

    def __init__(self, package: PptxPackage) -> None:
        self._package = package

    def parse(self, slide_path: str, index: int) -> Slide:
        try:
            root = self._package.require_xml_part(slide_path).getroot()
            slide_rels = parse_relationships(self._package, rels_path_for(slide_path))
        except (PartMissing, MalformedXML, EntryUnreadable) as err:
            raise SlideParseFailed(slide_path, err) from err

        sp_tree = root.find("p:cSld/p:spTree", Namespaces.PRESENTATION)
        if sp_tree is None:
            LOGGER.debug("%s has no shape tree", slide_path)
            return Slide(index=index)

        content = walk_shape_tree(build_shape_tree(sp_tree))

        images = []
        for r_id in content.image_ids:
            media_path = slide_rels.resolve(r_id)
            if media_path is None:
                LOGGER.debug("%s: image relationship %s is unresolved", slide_path, r_id)
            images.append(ImageRef(r_id=r_id, media_path=media_path or ""))

        return Slide(
            index=index,
            title=content.title,
            bodies=tuple(content.bodies),
            images=tuple(images),
        )
