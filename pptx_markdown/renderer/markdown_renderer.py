"""Render parsed slides into a single Markdown document."""
from __future__ import annotations

from typing import List, Optional

from pptx_markdown.model.presentation_model import Presentation, Slide
from pptx_markdown.renderer.utils import ExportNames, build_export_names

SLIDE_SEPARATOR = "---"


class MarkdownRenderer:
    """Produce one Markdown document with a ``##`` section per slide."""

    def __init__(self, image_dir_name: str) -> None:
        self._image_dir_name = image_dir_name.strip("/")

    def render(self, presentation: Presentation, names: Optional[ExportNames] = None) -> str:
        if names is None:
            names = build_export_names(presentation.slides)

        blocks: List[str] = []
        for position, slide in enumerate(presentation.slides):
            if position > 0:
                blocks.append(SLIDE_SEPARATOR)
            blocks.extend(self._slide_blocks(slide, names))

        return "\n\n".join(blocks).rstrip("\n") + "\n"

    def _slide_blocks(self, slide: Slide, names: ExportNames) -> List[str]:
        heading = slide.title if slide.title else f"Slide {slide.index}"
        blocks = [f"## {heading}"]
        blocks.extend(slide.bodies)
        for image in slide.resolved_images:
            file_name = names.name_for(image.media_path)
            blocks.append(f"![{file_name}](./{self._image_dir_name}/{file_name})")
        return blocks
