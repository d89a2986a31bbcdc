"""
Integration tests for the complete conversion pipeline.

Packages are written to a temporary directory and converted end to end.
"""
import json
import tempfile
import unittest
from pathlib import Path

from openpyxl import Workbook
from openpyxl.chart import BarChart, Reference

from pptx_markdown.main import ConvertOptions, convert_files, convert_pptx, convert_xlsx, run
from pptx_markdown.tests.pptx_builder import (
    PNG_BYTES,
    body,
    corrupt_stored_entry,
    picture,
    slide_xml,
    title,
    write_pptx,
)


class ConvertPptxTest(unittest.TestCase):
    """End-to-end conversion of a small two slide deck."""

    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.tmp = Path(tmp.name)
        self.deck = write_pptx(
            self.tmp / "sample.pptx",
            [
                (slide_xml(title("Welcome", placeholder="ctrTitle"), body("A developer toolkit")), None),
                (
                    slide_xml(
                        title("Features Overview"),
                        body("Excel to Markdown conversion", "PowerPoint to Markdown conversion"),
                        picture("rId2"),
                    ),
                    {"rId2": "../media/image1.png"},
                ),
            ],
            media={"ppt/media/image1.png": PNG_BYTES},
        )

    def test_convert_writes_markdown_and_images(self) -> None:
        result = convert_pptx(self.deck)

        expected = (
            "## Welcome\n\n"
            "A developer toolkit\n\n"
            "---\n\n"
            "## Features Overview\n\n"
            "Excel to Markdown conversion\n\n"
            "PowerPoint to Markdown conversion\n\n"
            "![image1.png](./sample_images/image1.png)\n"
        )
        self.assertEqual(result.markdown, expected)
        self.assertEqual(result.output_path, self.tmp / "sample.md")
        self.assertEqual(result.output_path.read_text(encoding="utf-8"), expected)
        self.assertEqual(result.image_dir, self.tmp / "sample_images")
        self.assertEqual(result.exported_images, 1)
        self.assertEqual((self.tmp / "sample_images" / "image1.png").read_bytes(), PNG_BYTES)
        self.assertEqual(result.errors, [])

    def test_custom_image_dir(self) -> None:
        result = convert_pptx(self.deck, ConvertOptions(image_dir="my_pics"))
        self.assertIn("![image1.png](./my_pics/image1.png)", result.markdown)
        self.assertTrue((self.tmp / "my_pics").is_dir())

    def test_deck_without_images_creates_no_directory(self) -> None:
        deck = write_pptx(self.tmp / "text.pptx", [(slide_xml(title("A")), None), (slide_xml(title("B")), None)])
        result = convert_pptx(deck)
        self.assertEqual(result.markdown, "## A\n\n---\n\n## B\n")
        self.assertIsNone(result.image_dir)
        self.assertFalse((self.tmp / "text_images").exists())

    def test_debug_dump(self) -> None:
        debug_dir = self.tmp / "debug"
        convert_pptx(self.deck, ConvertOptions(debug_dir=debug_dir))
        payload = json.loads((debug_dir / "sample" / "presentation_model.json").read_text(encoding="utf-8"))
        self.assertEqual([s["title"] for s in payload["slides"]], ["Welcome", "Features Overview"])
        self.assertEqual(payload["slides"][1]["images"][0]["media_path"], "ppt/media/image1.png")


class BatchConversionTest(unittest.TestCase):
    """Batch dispatch by suffix and per-file failure isolation."""

    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.tmp = Path(tmp.name)
        self.deck = write_pptx(self.tmp / "deck.pptx", [(slide_xml(title("Hi")), None)])

        wb = Workbook()
        wb.active.title = "Data"
        wb.active.append(["k", "v"])
        wb.active.append(["x", 1])
        self.book = self.tmp / "book.xlsx"
        wb.save(self.book)

    def test_convert_xlsx_writes_markdown(self) -> None:
        result = convert_xlsx(self.book)
        self.assertEqual(result.output_path, self.tmp / "book.md")
        self.assertEqual(
            result.output_path.read_text(encoding="utf-8"),
            "## Data\n\n| k | v |\n| --- | --- |\n| x | 1 |\n",
        )

    def test_failures_do_not_stop_the_batch(self) -> None:
        broken = self.tmp / "broken.pptx"
        broken.write_bytes(b"not a zip")
        notes = self.tmp / "notes.txt"
        notes.write_text("x", encoding="utf-8")

        summary = convert_files([broken, self.deck, notes, self.tmp / "missing.pptx", self.book])

        self.assertEqual(summary.succeeded, 2)
        self.assertEqual(summary.failed, 3)
        self.assertTrue((self.tmp / "deck.md").exists())
        self.assertTrue((self.tmp / "book.md").exists())
        self.assertFalse((self.tmp / "broken.md").exists())

    def test_corrupted_entries_do_not_stop_the_batch(self) -> None:
        damaged = write_pptx(self.tmp / "damaged.pptx", [(slide_xml(title("Damaged")), None)])
        corrupt_stored_entry(damaged, b"Damaged")

        wb = Workbook()
        wb.active.append(["n"])
        wb.active.append([3])
        chart = BarChart()
        chart.add_data(Reference(wb.active, min_col=1, min_row=1, max_row=2), titles_from_data=True)
        wb.create_chartsheet("Chart").add_chart(chart)
        charted = self.tmp / "charted.xlsx"
        wb.save(charted)

        summary = convert_files([damaged, charted, self.deck])

        self.assertEqual(summary.succeeded, 1)
        self.assertEqual(summary.failed, 2)
        self.assertTrue((self.tmp / "deck.md").exists())
        self.assertFalse((self.tmp / "damaged.md").exists())

    def test_run_exit_codes(self) -> None:
        self.assertEqual(run([str(self.deck)]), 0)
        self.assertEqual(run([str(self.deck), str(self.tmp / "missing.pptx")]), 1)
        self.assertEqual(run([str(self.book), "--sheet", "Data"]), 0)
        self.assertEqual(run([str(self.book), "--sheet", "Nope"]), 1)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
