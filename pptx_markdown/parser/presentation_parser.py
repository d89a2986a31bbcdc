"""Load a PPTX file into a :class:`Presentation`."""
from __future__ import annotations

from pathlib import Path
from typing import Union

from pptx_markdown.model.presentation_model import Presentation
from pptx_markdown.parser.pptx_loader import PptxPackage
from pptx_markdown.parser.slide_order import SlideOrderResolver
from pptx_markdown.parser.slide_parser import SlideParser
from pptx_markdown.utils.logger import get_logger

LOGGER = get_logger(__name__)


def parse_presentation(pptx_path: Union[str, Path]) -> Presentation:
    """Open the package, resolve slide order and assemble every slide.

    Any failure closes the package before the error propagates; on success
    the returned presentation owns the open package until it is closed.
    """
    package = PptxPackage.open(pptx_path)
    try:
        slide_paths = SlideOrderResolver(package).resolve()
        parser = SlideParser(package)
        slides = [parser.parse(path, index) for index, path in enumerate(slide_paths, start=1)]
    except BaseException:
        package.close()
        raise

    LOGGER.debug("Parsed %d slides from %s", len(slides), package.source.name)
    return Presentation(package=package, slides=slides)
