"""
Heuristic table extraction from plain PDF text.

Text extraction keeps the column gaps of table layouts as tabs or runs of
spaces, so a line containing such a gap is treated as a table row. The
first such line becomes the header and the remaining lines with a
matching column count become data rows. This is a best-effort heuristic:
tables whose extracted text is single-space separated are not detected.
"""

import logging
import math
import re
from decimal import Decimal
from typing import Any, Callable

# Handle both package imports and standalone imports
try:
    from ...models import CellValue, ExtractedTable
except ImportError:
    from models import CellValue, ExtractedTable

from .exceptions import NoTableFoundError

logger = logging.getLogger(__name__)

# Decides whether a single line of text belongs to a table
LinePredicate = Callable[[str], bool]

# A tab, or two or more consecutive whitespace characters
COLUMN_GAP_PATTERN = re.compile(r"\t|\s{2,}")

# Optional sign, digits with at most one decimal point, at least one digit
NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)", re.ASCII)


def looks_tabular(line: str) -> bool:
    """Return True when the line contains a tab or a multi-space column gap."""
    return COLUMN_GAP_PATTERN.search(line) is not None


def split_cells(line: str) -> list[str]:
    """Split a table line on column gaps, dropping empty cells."""
    cells = (cell.strip() for cell in COLUMN_GAP_PATTERN.split(line.strip()))
    return [cell for cell in cells if cell]


def coerce_cell(value: Any) -> CellValue:
    """
    Convert a cell to a number when its text is a plain numeric literal.

    Integers without a decimal point become ``int``, anything with a
    decimal point becomes ``float``. Exponents, thousands separators,
    lone signs or points and the empty string stay strings.

    Args:
        value: Raw cell text, or an already coerced value.

    Returns:
        The numeric value, or the trimmed text.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value

    text = str(value).strip()
    if not NUMBER_PATTERN.fullmatch(text):
        return text
    if "." in text:
        number = float(text)
        # Digit runs too long for a float overflow to inf
        return number if math.isfinite(number) else text
    try:
        return int(text)
    except ValueError:
        # Beyond the interpreter's int string-conversion limit
        return text


def format_number(value: int | float) -> str:
    """
    Return the positional text of a number, readable back by ``coerce_cell``.

    Floats never use exponent notation and always keep a decimal point,
    so ``coerce_cell(format_number(x)) == x`` with the same type.
    """
    if isinstance(value, float):
        if not math.isfinite(value):
            return str(value)
        text = format(Decimal(repr(value)), "f")
        return text if "." in text else f"{text}.0"
    return str(value)


def tabular_lines(text: str, is_tabular: LinePredicate = looks_tabular) -> list[str]:
    """Return the non-blank lines of ``text`` accepted by the predicate."""
    return [
        line
        for line in text.splitlines()
        if line.strip() and is_tabular(line)
    ]


def parse_table(text: str, is_tabular: LinePredicate = looks_tabular) -> ExtractedTable:
    """
    Build a table from the tabular-looking lines of extracted PDF text.

    Args:
        text: Plain text produced by the text extractor.
        is_tabular: Predicate selecting the lines that belong to the table.

    Returns:
        ExtractedTable whose rows all have one cell per header.

    Raises:
        NoTableFoundError: If fewer than two lines look tabular, or no data
            row has the same number of cells as the header.
    """
    lines = tabular_lines(text, is_tabular)

    if len(lines) < 2:
        logger.info("Found %d tabular line(s), need at least 2", len(lines))
        raise NoTableFoundError(
            "No table-like data found in the PDF or insufficient rows for a table.",
            reason=NoTableFoundError.TOO_FEW_LINES,
        )

    header_line, *data_lines = [split_cells(line) for line in lines]
    headers = [header.strip() for header in header_line]

    rows = [
        [coerce_cell(cell) for cell in cells]
        for cells in data_lines
        if len(cells) == len(headers)
    ]

    if not rows:
        logger.info(
            "Header has %d column(s) but none of %d candidate row(s) match",
            len(headers),
            len(data_lines),
        )
        raise NoTableFoundError(
            "Table headers found, but no valid data rows match the header count.",
            reason=NoTableFoundError.NO_VALID_ROWS,
        )

    logger.info(
        "Parsed table: %d column(s), %d row(s), %d row(s) dropped",
        len(headers),
        len(rows),
        len(data_lines) - len(rows),
    )
    return ExtractedTable(headers=headers, rows=rows)
