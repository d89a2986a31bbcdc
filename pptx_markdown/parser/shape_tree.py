"""Walk a slide's shape tree and pull out title, body text and picture ids.

The tree is first converted into a small tagged union (:class:`ShapeNode`,
:class:`PictureNode`, :class:`GroupNode`) and then visited by a single
function, so the title/body/image rules live in one place.

Only one level of grouping is flattened: a group nested inside a group is
dropped together with its contents.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union
from xml.etree import ElementTree as ET

from pptx_markdown.utils.logger import get_logger
from pptx_markdown.utils.xml_utils import R_EMBED, Namespaces, local_name

LOGGER = get_logger(__name__)

NS = Namespaces.PRESENTATION
TITLE_PLACEHOLDER_TYPES = frozenset({"title", "ctrTitle"})


@dataclass(slots=True)
class ShapeNode:
    """``p:sp``: an optional title flag and the text of each paragraph."""

    is_title: bool = False
    paragraphs: Optional[List[str]] = None


@dataclass(slots=True)
class PictureNode:
    """``p:pic``: the relationship id of its blip, if any."""

    embed_id: Optional[str] = None


@dataclass(slots=True)
class GroupNode:
    """``p:grpSp``: the shapes and pictures directly inside the group."""

    children: List[Union[ShapeNode, PictureNode]] = field(default_factory=list)


Node = Union[ShapeNode, PictureNode, GroupNode]


@dataclass(slots=True)
class ShapeTreeContent:
    """Result of walking one slide's shape tree."""

    title: Optional[str] = None
    bodies: List[str] = field(default_factory=list)
    image_ids: List[str] = field(default_factory=list)

    def add_text(self, text: str, is_title: bool) -> None:
        if is_title and self.title is None:
            self.title = text
        elif text not in self.bodies:
            self.bodies.append(text)


def build_shape_tree(sp_tree: ET.Element) -> List[Node]:
    """Convert a ``p:spTree`` element into nodes, keeping document order."""
    nodes: List[Node] = []
    for child in sp_tree:
        tag = local_name(child.tag)
        if tag == "sp":
            nodes.append(_shape_node(child))
        elif tag == "pic":
            nodes.append(_picture_node(child))
        elif tag == "grpSp":
            nodes.append(_group_node(child))
    return nodes


def walk_shape_tree(nodes: List[Node]) -> ShapeTreeContent:
    """Visit direct shapes, then direct pictures, then each group's shapes and pictures."""
    content = ShapeTreeContent()
    shapes, pictures, groups = _partition(nodes)
    for node in shapes + pictures:
        _visit(node, content)
    for group in groups:
        _visit(group, content)
    return content


def paragraph_text(paragraph: ET.Element) -> str:
    """Concatenate the ``a:t`` text of every run in a paragraph."""
    parts = []
    for run in paragraph.findall("a:r", NS):
        text = run.findtext("a:t", default="", namespaces=NS)
        if text:
            parts.append(text)
    return "".join(parts)


def _visit(node: Node, content: ShapeTreeContent) -> None:
    if isinstance(node, ShapeNode):
        for text in node.paragraphs or ():
            text = text.strip()
            if text:
                content.add_text(text, node.is_title)
    elif isinstance(node, PictureNode):
        if node.embed_id:
            content.image_ids.append(node.embed_id)
    elif isinstance(node, GroupNode):
        shapes, pictures, _ = _partition(node.children)
        for child in shapes + pictures:
            _visit(child, content)
    else:  # pragma: no cover
        raise TypeError(f"Unknown shape tree node: {node!r}")


def _partition(nodes: List[Node]) -> Tuple[List[Node], List[Node], List[Node]]:
    shapes = [node for node in nodes if isinstance(node, ShapeNode)]
    pictures = [node for node in nodes if isinstance(node, PictureNode)]
    groups = [node for node in nodes if isinstance(node, GroupNode)]
    return shapes, pictures, groups


def _shape_node(shape_el: ET.Element) -> ShapeNode:
    placeholder = shape_el.find("p:nvSpPr/p:nvPr/p:ph", NS)
    is_title = placeholder is not None and placeholder.attrib.get("type") in TITLE_PLACEHOLDER_TYPES

    tx_body = shape_el.find("p:txBody", NS)
    if tx_body is None:
        return ShapeNode(is_title=is_title)
    paragraphs = [paragraph_text(p) for p in tx_body.findall("a:p", NS)]
    return ShapeNode(is_title=is_title, paragraphs=paragraphs)


def _picture_node(picture_el: ET.Element) -> PictureNode:
    blip = picture_el.find("p:blipFill/a:blip", NS)
    if blip is None:
        return PictureNode()
    return PictureNode(embed_id=blip.attrib.get(R_EMBED) or None)


def _group_node(group_el: ET.Element) -> GroupNode:
    group = GroupNode()
    for child in group_el:
        tag = local_name(child.tag)
        if tag == "sp":
            group.children.append(_shape_node(child))
        elif tag == "pic":
            group.children.append(_picture_node(child))
        elif tag == "grpSp":
            LOGGER.debug("Dropping nested shape group inside a group")
    return group
