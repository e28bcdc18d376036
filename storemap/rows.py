# storemap/rows.py
"""
StoreMap — CSV Row Validation
=============================

Purpose
-------
Turn one line of an uploaded store CSV into either a validated record or a
skip decision. The builder in `storemap.index` folds the results into the
postal-code index; this module never counts, logs or raises.

Row format
----------
    store name, postal code, latitude, longitude[, ignored...]

No header row, no quoting. Fields past the fourth are ignored.

Rules (first failure wins)
--------------------------
1) Whitespace-only line      → `None` (not a row at all).
2) Fewer than 4 fields       → skip "malformed: insufficient columns".
3) Empty store name          → skip "missing store name".
4) Empty postal code         → skip "missing postal code".
5) Unparsable lat or lng     → skip "invalid coordinates".

Public API
----------
- `parse_coordinate(text: str) -> float | None`
- `parse_row(line: str, line_no: int) -> ParsedRow | SkippedRow | None`
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

import regex as re


# ---------------------------------------------------------------------------
# Skip reasons
# ---------------------------------------------------------------------------

REASON_COLUMNS = "malformed: insufficient columns"
REASON_STORE = "missing store name"
REASON_POSTAL = "missing postal code"
REASON_COORDS = "invalid coordinates"

MIN_FIELDS = 4

# Plain decimal: optional sign, digits with an optional fraction (or a bare
# fraction), optional exponent. ASCII digits only; no thousands separators, no inf/nan.
RE_DECIMAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ParsedRow:
    """
    A CSV line that passed every validation rule.

    Attributes
    ----------
    store_name : str
        Trimmed store name (never empty).
    postal_code : str
        Trimmed postal code, kept verbatim (no case folding).
    lat : float
        Latitude as written in the file.
    lng : float
        Longitude as written in the file.
    """

    store_name: str
    postal_code: str
    lat: float
    lng: float


@dataclass(frozen=True)
class SkippedRow:
    """A CSV line rejected by a validation rule."""

    line_no: int
    reason: str
    line: str


RowResult = Union[ParsedRow, SkippedRow]


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def parse_coordinate(text: str) -> Optional[float]:
    """
    Parse a latitude/longitude field with locale-independent decimal rules.

    Parameters
    ----------
    text : str
        Field text; surrounding whitespace is ignored.

    Returns
    -------
    float | None
        The value, or None when the text is not a plain decimal number.

    Examples
    --------
    >>> parse_coordinate(" -12.5 ")
    -12.5
    >>> parse_coordinate("1,000.5") is None
    True
    >>> parse_coordinate("nan") is None
    True
    """
    s = (text or "").strip()
    if not RE_DECIMAL.fullmatch(s):
        return None
    return float(s)


def parse_row(line: str, line_no: int) -> Optional[RowResult]:
    """
    Validate one raw CSV line.

    Parameters
    ----------
    line : str
        Raw line text, possibly with a trailing carriage return.
    line_no : int
        1-based line number, carried into skip results for diagnostics.

    Returns
    -------
    ParsedRow | SkippedRow | None
        None for a blank line, otherwise the validation outcome.

    Examples
    --------
    >>> parse_row("Store A, 12345 ,10.0,20.0", 1)
    ParsedRow(store_name='Store A', postal_code='12345', lat=10.0, lng=20.0)
    >>> parse_row("Store B,67890,12.5", 2).reason
    'malformed: insufficient columns'
    >>> parse_row("   ", 3) is None
    True
    """
    trimmed = line.strip()
    if not trimmed:
        return None

    parts = trimmed.split(",")
    if len(parts) < MIN_FIELDS:
        return SkippedRow(line_no, REASON_COLUMNS, trimmed)

    store_name, postal_code, lat_text, lng_text = (p.strip() for p in parts[:MIN_FIELDS])

    if not store_name:
        return SkippedRow(line_no, REASON_STORE, trimmed)
    if not postal_code:
        return SkippedRow(line_no, REASON_POSTAL, trimmed)

    lat = parse_coordinate(lat_text)
    lng = parse_coordinate(lng_text)
    if lat is None or lng is None:
        return SkippedRow(line_no, REASON_COORDS, trimmed)

    return ParsedRow(store_name=store_name, postal_code=postal_code, lat=lat, lng=lng)
