"""Tests for slide assembly and whole-presentation parsing."""
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from pptx_markdown.model.presentation_model import ImageRef
from pptx_markdown.parser.errors import EntryUnreadable, MediaNotFound, OpenFailed, SlideParseFailed
from pptx_markdown.parser.pptx_loader import PptxPackage
from pptx_markdown.parser.presentation_parser import parse_presentation
from pptx_markdown.parser.slide_parser import SlideParser
from pptx_markdown.tests.pptx_builder import (
    PNG_BYTES,
    body,
    corrupt_stored_entry,
    group,
    picture,
    slide_xml,
    standard_parts,
    title,
    write_parts,
    write_pptx,
)


class SlideParserTest(unittest.TestCase):
    """Image resolution against each slide's own relationships part."""

    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.tmp = Path(tmp.name)

    def test_resolves_images_against_slide_directory(self) -> None:
        path = write_pptx(
            self.tmp / "deck.pptx",
            [
                (
                    slide_xml(title("Features"), body("Fast"), picture("rId2"), picture("rId5")),
                    {"rId2": "../media/image1.png"},
                )
            ],
            media={"ppt/media/image1.png": PNG_BYTES},
        )
        with PptxPackage.open(path) as package:
            slide = SlideParser(package).parse("ppt/slides/slide1.xml", 1)

        self.assertEqual(slide.index, 1)
        self.assertEqual(slide.title, "Features")
        self.assertEqual(slide.bodies, ("Fast",))
        self.assertEqual(
            slide.images,
            (ImageRef("rId2", "ppt/media/image1.png"), ImageRef("rId5", "")),
        )
        self.assertEqual(slide.resolved_images, (ImageRef("rId2", "ppt/media/image1.png"),))

    def test_missing_slide_rels_is_not_an_error(self) -> None:
        path = write_pptx(self.tmp / "deck.pptx", [(slide_xml(title("Plain"), picture("rId1")), None)])
        with PptxPackage.open(path) as package:
            slide = SlideParser(package).parse("ppt/slides/slide1.xml", 4)
        self.assertEqual(slide.index, 4)
        self.assertEqual(slide.images, (ImageRef("rId1", ""),))

    def test_slide_without_shape_tree(self) -> None:
        parts = standard_parts([("<p:sld xmlns:p='http://schemas.openxmlformats.org/presentationml/2006/main'/>", None)])
        path = write_parts(self.tmp / "deck.pptx", parts)
        with PptxPackage.open(path) as package:
            slide = SlideParser(package).parse("ppt/slides/slide1.xml", 1)
        self.assertIsNone(slide.title)
        self.assertEqual(slide.bodies, ())

    def test_malformed_slide_raises_slide_parse_failed(self) -> None:
        path = write_pptx(self.tmp / "deck.pptx", [("<p:sld", None)])
        with PptxPackage.open(path) as package:
            with self.assertRaises(SlideParseFailed) as ctx:
                SlideParser(package).parse("ppt/slides/slide1.xml", 1)
        self.assertEqual(ctx.exception.path, "ppt/slides/slide1.xml")
        self.assertIsNotNone(ctx.exception.cause)

    def test_corrupted_slide_entry_raises_slide_parse_failed(self) -> None:
        path = write_pptx(self.tmp / "deck.pptx", [(slide_xml(title("Damaged")), None)])
        corrupt_stored_entry(path, b"Damaged")
        with PptxPackage.open(path) as package:
            with self.assertRaises(SlideParseFailed) as ctx:
                SlideParser(package).parse("ppt/slides/slide1.xml", 1)
        self.assertEqual(ctx.exception.path, "ppt/slides/slide1.xml")
        self.assertIsInstance(ctx.exception.cause, EntryUnreadable)

    def test_missing_slide_part_raises_slide_parse_failed(self) -> None:
        path = write_pptx(self.tmp / "deck.pptx", [])
        with PptxPackage.open(path) as package:
            with self.assertRaises(SlideParseFailed):
                SlideParser(package).parse("ppt/slides/slide7.xml", 1)


class ParsePresentationTest(unittest.TestCase):
    """Aggregate parsing, media access and handle release."""

    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.tmp = Path(tmp.name)

    def test_slides_follow_presentation_order(self) -> None:
        slides = [(slide_xml(title(name)), None) for name in ("One", "Two", "Three")]
        path = write_pptx(self.tmp / "deck.pptx", slides)
        with parse_presentation(path) as presentation:
            self.assertEqual([s.title for s in presentation.slides], ["One", "Two", "Three"])
            self.assertEqual([s.index for s in presentation.slides], [1, 2, 3])

    def test_group_content_is_assembled(self) -> None:
        path = write_pptx(
            self.tmp / "deck.pptx",
            [(slide_xml(title("G"), group(body("grouped"), picture("rId1"))), {"rId1": "../media/a.png"})],
            media={"ppt/media/a.png": PNG_BYTES},
        )
        with parse_presentation(path) as presentation:
            slide = presentation.slides[0]
        self.assertEqual(slide.bodies, ("grouped",))
        self.assertEqual(slide.images, (ImageRef("rId1", "ppt/media/a.png"),))

    def test_read_media(self) -> None:
        path = write_pptx(self.tmp / "deck.pptx", [(slide_xml(), None)], media={"ppt/media/image1.png": PNG_BYTES})
        with parse_presentation(path) as presentation:
            self.assertEqual(presentation.read_media("ppt/media/image1.png")[:4], b"\x89PNG")
            with self.assertRaises(MediaNotFound):
                presentation.read_media("ppt/media/nonexistent.png")

    def test_open_failure(self) -> None:
        with self.assertRaises(OpenFailed):
            parse_presentation(self.tmp / "nonexistent.pptx")

    def test_failure_releases_package(self) -> None:
        path = write_pptx(self.tmp / "deck.pptx", [(slide_xml(title("ok")), None), ("<broken", None)])
        package = PptxPackage.open(path)
        with patch.object(PptxPackage, "open", return_value=package):
            with self.assertRaises(SlideParseFailed):
                parse_presentation(path)
        self.assertTrue(package.closed)

    def test_close_releases_package(self) -> None:
        path = write_pptx(self.tmp / "deck.pptx", [(slide_xml(title("ok")), None)])
        presentation = parse_presentation(path)
        presentation.close()
        presentation.close()
        self.assertTrue(presentation.package.closed)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
