"""PPTX package loader owning the open archive handle."""
from __future__ import annotations

import zipfile
import zlib
from pathlib import Path
from typing import Dict, List, Optional, Union
from xml.etree import ElementTree as ET

from pptx_markdown.parser.errors import EntryUnreadable, MalformedXML, OpenFailed, PartMissing
from pptx_markdown.utils.logger import get_logger
from pptx_markdown.utils.xml_utils import parse_xml

LOGGER = get_logger(__name__)

PACKAGE_REL_PATH = "_rels/.rels"
PRESENTATION_XML_PATH = "ppt/presentation.xml"


class PptxPackage:
    """Read-only view over the entries of a presentation archive.

    The archive handle stays open until :meth:`close` is called; entries are
    looked up by their exact internal name (case-sensitive, ``/`` separated).
    """

    def __init__(self, archive: zipfile.ZipFile, source: Path) -> None:
        self._archive: Optional[zipfile.ZipFile] = archive
        self.source = source
        self._names: List[str] = archive.namelist()
        self.xml_cache: Dict[str, ET.ElementTree] = {}

    @classmethod
    def open(cls, pptx_path: Union[str, Path]) -> "PptxPackage":
        """Open a PPTX archive; raises :class:`OpenFailed` naming the path."""
        path = Path(pptx_path)
        try:
            archive = zipfile.ZipFile(path)
        except (OSError, zipfile.BadZipFile) as err:
            raise OpenFailed(path, err) from err

        LOGGER.debug("Opened %s with %d entries", path.name, len(archive.namelist()))
        return cls(archive, path)

    # ------------------------------------------------------------------
    # Public helpers
    @property
    def closed(self) -> bool:
        return self._archive is None

    def names(self) -> List[str]:
        return list(self._names)

    def has_entry(self, name: str) -> bool:
        return name in self._names

    def read_entry(self, name: str) -> bytes:
        """Return the raw bytes of an entry.

        Raises :class:`PartMissing` when absent and :class:`EntryUnreadable`
        when the stored data is corrupt or cannot be decompressed.
        """
        archive = self._require_open()
        if name not in self._names:
            raise PartMissing(name)
        try:
            return archive.read(name)
        except (zipfile.BadZipFile, zlib.error, NotImplementedError, RuntimeError) as err:
            raise EntryUnreadable(name, err) from err

    def get_xml_part(self, name: str) -> Optional[ET.ElementTree]:
        """Parse an entry as XML, or return ``None`` if the entry does not exist."""
        if name in self.xml_cache:
            return self.xml_cache[name]
        if not self.has_entry(name):
            return None
        data = self.read_entry(name)
        try:
            tree = parse_xml(data)
        except ET.ParseError as err:
            raise MalformedXML(name, err) from err
        self.xml_cache[name] = tree
        return tree

    def require_xml_part(self, name: str) -> ET.ElementTree:
        tree = self.get_xml_part(name)
        if tree is None:
            raise PartMissing(name)
        return tree

    def close(self) -> None:
        """Release the archive handle. Safe to call more than once."""
        if self._archive is None:
            return
        self._archive.close()
        self._archive = None
        self.xml_cache.clear()
        LOGGER.debug("Closed %s", self.source.name)

    def __enter__(self) -> "PptxPackage":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internal helpers
    def _require_open(self) -> zipfile.ZipFile:
        if self._archive is None:
            raise ValueError(f"Package {self.source.name} is closed")
        return self._archive
