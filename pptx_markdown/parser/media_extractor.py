"""Export the images referenced by a presentation onto disk."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

from pptx_markdown.model.presentation_model import Presentation
from pptx_markdown.parser.errors import EntryUnreadable, MediaNotFound, PptxError, WriteFailed
from pptx_markdown.renderer.utils import ExportNames, build_export_names
from pptx_markdown.utils.logger import get_logger

LOGGER = get_logger(__name__)


@dataclass
class ExportResult:
    """Outcome of one export run."""

    exported_count: int = 0
    # None when nothing needed exporting and no directory was created
    output_dir: Optional[Path] = None
    written: List[Tuple[str, Path]] = field(default_factory=list)
    errors: List[PptxError] = field(default_factory=list)


class ImageExporter:
    """Writes each referenced media entry once, under its deduplicated name."""

    def __init__(self, presentation: Presentation) -> None:
        self.presentation = presentation

    def export(self, output_dir: Union[str, Path], names: Optional[ExportNames] = None) -> ExportResult:
        if names is None:
            names = build_export_names(self.presentation.slides)

        result = ExportResult()
        if not names:
            LOGGER.debug("No resolvable images; skipping %s", output_dir)
            return result

        target_dir = Path(output_dir)
        try:
            target_dir.mkdir(parents=True, exist_ok=True)
        except OSError as err:
            raise WriteFailed(target_dir, err) from err
        result.output_dir = target_dir

        for media_path, file_name in names.items():
            out_path = target_dir / file_name
            try:
                data = self.presentation.read_media(media_path)
                self._write(out_path, data)
            except (MediaNotFound, EntryUnreadable, WriteFailed) as err:
                LOGGER.warning("Skipping image %s: %s", media_path, err)
                result.errors.append(err)
                continue
            result.written.append((media_path, out_path))
            result.exported_count += 1

        LOGGER.info("Exported %d image(s) to %s", result.exported_count, target_dir)
        return result

    @staticmethod
    def _write(out_path: Path, data: bytes) -> None:
        try:
            out_path.write_bytes(data)
        except OSError as err:
            raise WriteFailed(out_path, err) from err
