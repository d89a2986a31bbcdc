"""Common helpers shared by the Markdown renderer and the image exporter."""
from __future__ import annotations

import posixpath
from typing import Dict, Iterable, Set, Tuple

from pptx_markdown.model.presentation_model import Slide


class ExportNames:
    """Deterministic media path to export filename assignment.

    The first media path with a given basename keeps it; later, distinct
    media paths with the same basename get ``_1``, ``_2``, ... inserted before
    the extension. A media path seen again keeps the name it already has.
    """

    def __init__(self) -> None:
        self._by_media: Dict[str, str] = {}
        self._collisions: Dict[str, int] = {}
        self._taken: Set[str] = set()

    def name_for(self, media_path: str) -> str:
        existing = self._by_media.get(media_path)
        if existing is not None:
            return existing

        basename = posixpath.basename(media_path)
        candidate = basename
        if candidate in self._taken:
            stem, ext = posixpath.splitext(basename)
            count = self._collisions.get(basename, 0)
            while candidate in self._taken:
                count += 1
                candidate = f"{stem}_{count}{ext}"
            self._collisions[basename] = count

        self._taken.add(candidate)
        self._by_media[media_path] = candidate
        return candidate

    def items(self) -> Iterable[Tuple[str, str]]:
        """(media path, export name) pairs in first-seen order."""
        return self._by_media.items()

    def __len__(self) -> int:
        return len(self._by_media)


def build_export_names(slides: Iterable[Slide]) -> ExportNames:
    """Assign export names to every resolved image across ``slides``, in order."""
    names = ExportNames()
    for slide in slides:
        for image in slide.resolved_images:
            names.name_for(image.media_path)
    return names
