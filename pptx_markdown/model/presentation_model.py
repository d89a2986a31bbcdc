"""In-memory representation of parsed presentation content."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from pptx_markdown.parser.errors import MediaNotFound
from pptx_markdown.parser.pptx_loader import PptxPackage


@dataclass(frozen=True, slots=True)
class ImageRef:
    """A picture's relationship id and the media entry it resolves to.

    ``media_path`` is empty when the id could not be resolved; consumers skip
    such references.
    """

    r_id: str
    media_path: str = ""


@dataclass(frozen=True, slots=True)
class Slide:
    """Text and image references extracted from one slide."""

    index: int
    title: Optional[str] = None
    bodies: Tuple[str, ...] = ()
    images: Tuple[ImageRef, ...] = ()

    @property
    def resolved_images(self) -> Tuple[ImageRef, ...]:
        return tuple(image for image in self.images if image.media_path)


@dataclass(slots=True)
class Presentation:
    """Ordered slides plus ownership of the package they were read from."""

    package: PptxPackage
    slides: List[Slide] = field(default_factory=list)

    def read_media(self, media_path: str) -> bytes:
        """Return the bytes of a media entry; raises :class:`MediaNotFound` if absent."""
        if not self.package.has_entry(media_path):
            raise MediaNotFound(media_path)
        return self.package.read_entry(media_path)

    def close(self) -> None:
        self.package.close()

    def __enter__(self) -> "Presentation":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
