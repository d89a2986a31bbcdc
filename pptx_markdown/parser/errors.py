"""Error kinds raised while reading and converting presentation packages."""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class PptxError(Exception):
    """Base class for every package, part and output failure."""


class OpenFailed(PptxError, ValueError):
    """The package archive could not be opened."""

    def __init__(self, path: Union[str, Path], cause: Optional[BaseException] = None) -> None:
        self.path = str(path)
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to open package {self.path}{detail}")


class PartMissing(PptxError, KeyError):
    """A required part is absent from the package."""

    def __init__(self, part: str) -> None:
        self.part = part
        super().__init__(f"Required part missing from package: {part}")

    def __str__(self) -> str:
        return self.args[0]


class MalformedXML(PptxError, ValueError):
    """A part could not be decoded as XML."""

    def __init__(self, part: str, cause: Optional[BaseException] = None) -> None:
        self.part = part
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Malformed XML in part {part}{detail}")


class EntryUnreadable(PptxError, ValueError):
    """An entry exists but its stored bytes cannot be extracted."""

    def __init__(self, part: str, cause: Optional[BaseException] = None) -> None:
        self.part = part
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Cannot read entry {part}{detail}")


class SlideParseFailed(MalformedXML):
    """A slide part could not be read or decoded; aborts the whole load."""

    def __init__(self, path: str, cause: BaseException) -> None:
        self.path = path
        super().__init__(path, cause)
        self.args = (f"Failed to parse slide {path}: {cause}",)


class MediaNotFound(PptxError, KeyError):
    """A requested media entry does not exist in the package."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Media not found: {path}")

    def __str__(self) -> str:
        return self.args[0]


class WriteFailed(PptxError, OSError):
    """An exported image or output document could not be written."""

    def __init__(self, path: Union[str, Path], cause: Optional[BaseException] = None) -> None:
        self.path = str(path)
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Failed to write {self.path}{detail}")
