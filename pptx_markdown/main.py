"""Entry-point for the PPTX/XLSX to Markdown converter."""
from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from pptx_markdown.parser.errors import PptxError, WriteFailed
from pptx_markdown.parser.media_extractor import ImageExporter
from pptx_markdown.parser.presentation_parser import parse_presentation
from pptx_markdown.renderer.markdown_renderer import MarkdownRenderer
from pptx_markdown.renderer.utils import build_export_names
from pptx_markdown.renderer.xlsx_renderer import XlsxRenderer
from pptx_markdown.utils.debug import DebugDumper
from pptx_markdown.utils.logger import get_logger, set_verbose

LOGGER = get_logger(__name__)

IMAGE_DIR_SUFFIX = "_images"


@dataclass(frozen=True)
class ConvertOptions:
    """Caller-supplied overrides for a conversion run."""

    # Image directory name beside the input; None means "<stem>_images"
    image_dir: Optional[str] = None
    # Sheets to convert from workbooks; empty means every sheet
    sheet_names: Tuple[str, ...] = ()
    debug_dir: Optional[Path] = None


@dataclass
class ConvertResult:
    markdown: str
    output_path: Path
    image_dir: Optional[Path] = None
    exported_images: int = 0
    errors: List[PptxError] = field(default_factory=list)


@dataclass
class BatchSummary:
    succeeded: int = 0
    failed: int = 0


def markdown_path_for(input_path: Path) -> Path:
    return input_path.with_suffix(".md")


def image_dir_name_for(input_path: Path, options: ConvertOptions) -> str:
    return options.image_dir or f"{input_path.stem}{IMAGE_DIR_SUFFIX}"


def write_markdown(output_path: Path, markdown: str) -> None:
    try:
        output_path.write_text(markdown, encoding="utf-8")
    except OSError as err:
        raise WriteFailed(output_path, err) from err


def convert_pptx(pptx_file: Union[str, Path], options: Optional[ConvertOptions] = None) -> ConvertResult:
    """Parse a presentation, export its images and write the Markdown beside it."""
    options = options or ConvertOptions()
    pptx_path = Path(pptx_file)
    image_dir_name = image_dir_name_for(pptx_path, options)

    LOGGER.info("Converting %s", pptx_path.name)
    with parse_presentation(pptx_path) as presentation:
        names = build_export_names(presentation.slides)
        export = ImageExporter(presentation).export(pptx_path.parent / image_dir_name, names)
        markdown = MarkdownRenderer(image_dir_name).render(presentation, names)
        if options.debug_dir is not None:
            DebugDumper(options.debug_dir / pptx_path.stem).dump(presentation)

    output_path = markdown_path_for(pptx_path)
    write_markdown(output_path, markdown)
    LOGGER.info("Wrote %s", output_path)
    return ConvertResult(
        markdown=markdown,
        output_path=output_path,
        image_dir=export.output_dir,
        exported_images=export.exported_count,
        errors=export.errors,
    )


def convert_xlsx(xlsx_file: Union[str, Path], options: Optional[ConvertOptions] = None) -> ConvertResult:
    """Render every (or every selected) sheet as a Markdown table beside the workbook."""
    options = options or ConvertOptions()
    xlsx_path = Path(xlsx_file)

    LOGGER.info("Converting %s", xlsx_path.name)
    markdown = XlsxRenderer(options.sheet_names).render(xlsx_path)
    output_path = markdown_path_for(xlsx_path)
    write_markdown(output_path, markdown)
    LOGGER.info("Wrote %s", output_path)
    return ConvertResult(markdown=markdown, output_path=output_path)


def convert_files(files: Sequence[Union[str, Path]], options: Optional[ConvertOptions] = None) -> BatchSummary:
    """Convert each file independently; a failure is logged and the batch continues."""
    options = options or ConvertOptions()
    summary = BatchSummary()
    for file in files:
        path = Path(file)
        suffix = path.suffix.lower()
        try:
            if suffix == ".pptx":
                result = convert_pptx(path, options)
            elif suffix == ".xlsx":
                result = convert_xlsx(path, options)
            else:
                raise ValueError(f"Unsupported file type: {path.suffix or '<none>'}")
        except (PptxError, OSError, KeyError, ValueError) as err:
            LOGGER.warning("✗ %s: %s", path.name, err)
            summary.failed += 1
            continue

        LOGGER.info("✓ %s → %s", path.name, result.output_path.name)
        if result.image_dir is not None:
            LOGGER.info("  images: %s", result.image_dir)
        summary.succeeded += 1

    LOGGER.info("Done: %d succeeded, %d failed", summary.succeeded, summary.failed)
    return summary


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pptx-markdown",
        description="Convert PowerPoint (.pptx) and Excel (.xlsx) files into Markdown",
    )
    parser.add_argument("files", nargs="+", help="Input .pptx or .xlsx files")
    parser.add_argument("--image-dir", help="Image directory name (default: <input name>_images)")
    parser.add_argument(
        "--sheet",
        action="append",
        default=[],
        dest="sheets",
        help="Sheet to convert from workbooks; repeat for several (default: all sheets)",
    )
    parser.add_argument("--debug-dir", help="Directory to dump the parsed presentation model as JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line interface and return the process exit code."""
    args = build_arg_parser().parse_args(argv)
    set_verbose(args.verbose)
    options = ConvertOptions(
        image_dir=args.image_dir,
        sheet_names=tuple(args.sheets),
        debug_dir=Path(args.debug_dir) if args.debug_dir else None,
    )
    summary = convert_files(args.files, options)
    return 0 if summary.failed == 0 else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(run())
