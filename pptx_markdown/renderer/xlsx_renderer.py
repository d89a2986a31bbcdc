"""Render the sheets of an Excel workbook as Markdown tables."""
from __future__ import annotations

import datetime
import zipfile
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from pptx_markdown.parser.errors import OpenFailed
from pptx_markdown.utils.logger import get_logger

LOGGER = get_logger(__name__)


class XlsxRenderer:
    """Produce a ``## <sheet>`` section with a pipe table for each non-empty sheet."""

    def __init__(self, sheet_names: Sequence[str] = ()) -> None:
        self._sheet_names = list(sheet_names)

    def render(self, xlsx_path: Union[str, Path]) -> str:
        path = Path(xlsx_path)
        try:
            wb = load_workbook(path, read_only=True, data_only=True)
        except (OSError, zipfile.BadZipFile, InvalidFileException, KeyError, ValueError, AttributeError) as err:
            # read-only loading fails on workbooks holding chartsheets
            raise OpenFailed(path, err) from err

        try:
            sheets = self._sheet_names or list(wb.sheetnames)
            sections: List[str] = []
            for sheet in sheets:
                if sheet not in wb.sheetnames:
                    raise KeyError(f"Sheet not found in {path.name}: {sheet}")
                rows = _sheet_rows(wb[sheet].iter_rows(values_only=True))
                if not rows:
                    LOGGER.debug("Skipping empty sheet %s", sheet)
                    continue
                sections.append(f"## {sheet}\n\n{rows_to_markdown(rows)}")
        finally:
            wb.close()

        return "\n".join(sections)


def rows_to_markdown(rows: Sequence[Sequence[str]]) -> str:
    """Format rows as a Markdown table; the first row is the header."""
    if not rows:
        return ""
    max_cols = max(len(row) for row in rows)
    if max_cols == 0:
        return ""

    lines = [_table_line(_pad(rows[0], max_cols))]
    lines.append(_table_line(["---"] * max_cols))
    for row in rows[1:]:
        lines.append(_table_line(_pad(row, max_cols)))
    return "\n".join(lines) + "\n"


def _sheet_rows(values: Iterable[Sequence[object]]) -> List[List[str]]:
    rows: List[List[str]] = []
    for raw in values:
        row = [_cell_text(value) for value in raw]
        while row and row[-1] == "":
            row.pop()
        rows.append(row)
    while rows and not rows[-1]:
        rows.pop()
    return rows


def _cell_text(value: Optional[object]) -> str:
    """Approximate the text Excel displays for a stored cell value."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime.datetime):
        if value.time() == datetime.time(0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    return str(value)


def _pad(row: Sequence[str], width: int) -> List[str]:
    cells = list(row[:width])
    cells.extend([""] * (width - len(cells)))
    return cells


def _table_line(cells: Sequence[str]) -> str:
    return "| " + " | ".join(cell.replace("|", "\\|") for cell in cells) + " |"
