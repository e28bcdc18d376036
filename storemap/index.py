# storemap/index.py
"""
StoreMap — Postal-Code Index Builder
====================================

Purpose
-------
Fold the text of one uploaded store CSV into an in-memory lookup table keyed by
postal code, plus a summary the presentation layer turns into a single
notification.

Folding rules
-------------
- Lines are split on "\\n" and numbered from 1; blank lines are ignored and
  never counted.
- Every other line is "processed"; a line rejected by `storemap.rows.parse_row`
  is also "skipped" and logged at WARNING.
- A valid row creates or updates the entry for its postal code: coordinates are
  overwritten (the last valid row wins), the store name is appended (order kept,
  duplicates kept).
- Text that is empty or only whitespace short-circuits with `EMPTY_INPUT_ERROR`.

Public API
----------
- `build_index(csv_text: str) -> tuple[PostalIndex, ParseSummary]`
- `index_to_dict(index: PostalIndex) -> dict`
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .rows import ParsedRow, SkippedRow, parse_row

logger = logging.getLogger(__name__)

EMPTY_INPUT_ERROR = "CSV file is empty or contains no data."


@dataclass
class PostalCodeEntry:
    """
    Coordinates and stores for one postal code.

    Attributes
    ----------
    lat, lng : float
        Coordinates of the last valid row seen for this postal code.
    stores : list[str]
        Store names in input order; duplicates are kept.
    """

    lat: float
    lng: float
    stores: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {"lat": self.lat, "lng": self.lng, "stores": list(self.stores)}


PostalIndex = Dict[str, PostalCodeEntry]


@dataclass(frozen=True)
class ParseSummary:
    """Counters for one upload; `error` is set only for the empty-input case."""

    processed_rows: int = 0
    skipped_rows: int = 0
    error: Optional[str] = None

    @property
    def valid_rows(self) -> int:
        """Number of store names appended to the index."""
        return self.processed_rows - self.skipped_rows

    def to_dict(self) -> Dict[str, object]:
        return {
            "processed_rows": self.processed_rows,
            "skipped_rows": self.skipped_rows,
            "valid_rows": self.valid_rows,
            "error": self.error,
        }


def _is_blank(lines: List[str]) -> bool:
    return all(not line.strip() for line in lines)


def build_index(csv_text: str) -> Tuple[PostalIndex, ParseSummary]:
    """
    Parse CSV text into a fresh postal-code index.

    Parameters
    ----------
    csv_text : str
        Full text of the uploaded file.

    Returns
    -------
    (PostalIndex, ParseSummary)
        The new index and its counters. On empty input the index is empty and
        `summary.error` is `EMPTY_INPUT_ERROR`.

    Examples
    --------
    >>> index, summary = build_index("Store A,12345,10.0,20.0\\nStore B,12345,10.1,20.1")
    >>> index["12345"].stores, index["12345"].lat
    (['Store A', 'Store B'], 10.1)
    >>> summary.processed_rows, summary.skipped_rows
    (2, 0)
    """
    # str.strip() keeps U+FEFF, so a byte-order mark would stick to the first store name
    lines = (csv_text or "").lstrip("\ufeff").split("\n")
    if _is_blank(lines):
        return {}, ParseSummary(error=EMPTY_INPUT_ERROR)

    index: PostalIndex = {}
    processed = 0
    skipped = 0

    for line_no, line in enumerate(lines, start=1):
        result = parse_row(line, line_no)
        if result is None:
            continue

        processed += 1
        if isinstance(result, SkippedRow):
            skipped += 1
            logger.warning("Skipping row %d (%s): %s", result.line_no, result.reason, result.line)
            continue

        _fold(index, result)

    logger.debug("Indexed %d postal codes from %d rows (%d skipped)", len(index), processed, skipped)
    return index, ParseSummary(processed_rows=processed, skipped_rows=skipped)


def _fold(index: PostalIndex, row: ParsedRow) -> None:
    entry = index.get(row.postal_code)
    if entry is None:
        entry = index[row.postal_code] = PostalCodeEntry(lat=row.lat, lng=row.lng)
    # last valid row wins for coordinates
    entry.lat = row.lat
    entry.lng = row.lng
    entry.stores.append(row.store_name)


def index_to_dict(index: PostalIndex) -> Dict[str, Dict[str, object]]:
    """Plain, JSON-ready copy of an index (`{code: {"lat", "lng", "stores"}}`)."""
    return {code: entry.to_dict() for code, entry in index.items()}
