"""
CSV/TSV table loader.

Turns raw table text into a ``RawTable``. The delimiter is detected from
the text itself:

- A tab anywhere in the text -> tab-delimited, no quoting
- Otherwise -> comma-delimited with standard CSV quoting

The first line is the header; blank lines are skipped.
"""

from __future__ import annotations

import csv
import io
import logging

from src.models import RawTable

from .errors import EmptyTableError

logger = logging.getLogger(__name__)


def detect_delimiter(text: str) -> str:
    """Return ``"\\t"`` if the text contains a tab character, else ``","``."""
    return "\t" if "\t" in text else ","


def _reader(text: str):
    if detect_delimiter(text) == "\t":
        return csv.reader(io.StringIO(text), delimiter="\t", quoting=csv.QUOTE_NONE)
    return csv.reader(io.StringIO(text), delimiter=",")


def load_table(text: str) -> RawTable:
    """
    Parse table text into ordered row mappings.

    Args:
        text: CSV or TSV text with a header line

    Returns:
        RawTable whose rows map header names to raw cell strings

    Raises:
        EmptyTableError: if no data rows follow the header
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    columns: list[str] | None = None
    rows: list[dict[str, str]] = []

    for record in _reader(text):
        if not record or all(cell == "" for cell in record):
            continue
        if columns is None:
            columns = record
            continue
        # Pad short rows, drop surplus cells
        cells = record[:len(columns)] + [""] * (len(columns) - len(record))
        rows.append(dict(zip(columns, cells)))

    if not rows:
        raise EmptyTableError()

    logger.debug(
        "Loaded %d rows with columns %s (delimiter %r)",
        len(rows), columns, detect_delimiter(text),
    )
    return RawTable(columns=columns, rows=rows)
