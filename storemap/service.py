# storemap/service.py
"""
StoreMap — Locator service (upload → index → lookup/search)

What this module provides
-------------------------
- LocatorService: owns the current postal-code index and exposes:
    - load_text(csv_text) / load_bytes(data) / load_file(path) -> UploadOutcome
    - plot_postal_code(code) -> QueryOutcome
    - search(query) -> QueryOutcome
    - reset()
- Prometheus metrics updated on each call.

State model
-----------
The service is the single owner of the index. A new index is built completely
by `build_index` and then bound in one assignment, so readers see either the old
or the new table, never a half-built one. Any failed upload (empty input or an
unreadable file) leaves the service with an empty index.

Notifications
-------------
Every call returns exactly one user-facing message with a level of
"success", "info" or "error". The presentation layer shows it as-is.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from prometheus_client import Counter, Gauge, Histogram

from .errors import CsvReadError
from .index import ParseSummary, PostalCodeEntry, PostalIndex, build_index
from .query import StoreSearchResult, lookup_postal_code, search_stores

logger = logging.getLogger(__name__)


# ------------------------------ Metrics --------------------------------------

UPLOADS_TOTAL = Counter("csv_uploads_total", "CSV uploads by outcome", ["outcome"])
ROWS_PROCESSED = Counter("csv_rows_processed_total", "Non-blank CSV rows validated")
ROWS_SKIPPED = Counter("csv_rows_skipped_total", "CSV rows rejected by a validation rule")
LOOKUPS_TOTAL = Counter("postal_lookups_total", "Postal code lookups by result", ["result"])
SEARCHES_TOTAL = Counter("store_searches_total", "Store name searches")
POSTAL_CODES = Gauge("postal_codes_indexed", "Postal codes in the current index")
PARSE_LAT_MS = Histogram(
    "csv_parse_latency_ms",
    "CSV parse latency in milliseconds",
    buckets=(1, 5, 10, 25, 50, 100, 250, 500, 1000, 2500),
)


# ------------------------------ Messages -------------------------------------

LEVEL_SUCCESS = "success"
LEVEL_INFO = "info"
LEVEL_ERROR = "error"

MSG_UPLOAD_OK = "CSV data uploaded and processed successfully!"
MSG_NO_VALID_DATA = "No valid data found in the CSV file."
MSG_READ_ERROR = "Error reading file."
MSG_NO_FILE = "No file selected."
MSG_EMPTY_PINCODE = "Pincode cannot be empty."
MSG_PINCODE_NOT_FOUND = "Pincode not found in uploaded data."
MSG_EMPTY_STORE_QUERY = "Store name cannot be empty."


@dataclass(frozen=True)
class UploadOutcome:
    """
    Result of one upload attempt.

    `summary` is None when the file never reached the parser (nothing selected
    or the file could not be read).
    """

    level: str
    message: str
    summary: Optional[ParseSummary] = None
    postal_codes: int = 0

    @property
    def ok(self) -> bool:
        return self.level != LEVEL_ERROR

    @property
    def read_failed(self) -> bool:
        return self.level == LEVEL_ERROR and self.summary is None

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "message": self.message,
            "summary": self.summary.to_dict() if self.summary else None,
            "postal_codes": self.postal_codes,
        }


@dataclass(frozen=True)
class QueryOutcome:
    """Result of a lookup or search; a search miss still carries its empty result."""

    level: str
    message: str
    result: Union[PostalCodeEntry, StoreSearchResult, None] = None

    @property
    def ok(self) -> bool:
        return self.level != LEVEL_ERROR


def upload_message(summary: ParseSummary) -> UploadOutcome:
    """Pick the single notification shown for a parsed upload."""
    if summary.error:
        return UploadOutcome(LEVEL_ERROR, summary.error, summary)
    if summary.processed_rows == 0:
        return UploadOutcome(LEVEL_INFO, MSG_NO_VALID_DATA, summary)
    if summary.skipped_rows > 0:
        msg = f"CSV processed: {summary.valid_rows} valid entries. {summary.skipped_rows} rows skipped."
        return UploadOutcome(LEVEL_INFO, msg, summary)
    return UploadOutcome(LEVEL_SUCCESS, MSG_UPLOAD_OK, summary)


def read_csv_file(path: Union[str, Path], encoding: str = "utf-8-sig") -> str:
    """
    Read an uploaded CSV file as text.

    Raises
    ------
    CsvReadError
        If the file is missing, unreadable or not valid text in `encoding`.
    """
    p = Path(path)
    try:
        return p.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise CsvReadError(f"Cannot read {p}: {e}", path=p) from e


# ------------------------------ Service --------------------------------------

class LocatorService:
    """
    Owner of the current postal-code index.

    Parameters
    ----------
    index : PostalIndex, optional
        Starting index (defaults to empty).
    encoding : str, default="utf-8-sig"
        Text encoding used by `load_file` and `load_bytes`; the default drops a byte-order mark.
    """

    def __init__(self, index: Optional[PostalIndex] = None, encoding: str = "utf-8-sig"):
        self._index: PostalIndex = dict(index or {})
        self.encoding = encoding
        POSTAL_CODES.set(len(self._index))

    @property
    def index(self) -> PostalIndex:
        return self._index

    def _swap(self, index: PostalIndex) -> None:
        self._index = index
        POSTAL_CODES.set(len(index))

    def reset(self) -> None:
        """Drop the current index."""
        self._swap({})

    # -------------------------- Uploads --------------------------

    def load_text(self, csv_text: str) -> UploadOutcome:
        """Parse CSV text and, unless it is empty, replace the current index."""
        t0 = time.perf_counter()
        index, summary = build_index(csv_text)
        PARSE_LAT_MS.observe((time.perf_counter() - t0) * 1000.0)

        ROWS_PROCESSED.inc(summary.processed_rows)
        ROWS_SKIPPED.inc(summary.skipped_rows)

        outcome = upload_message(summary)
        if summary.error:
            self.reset()
            UPLOADS_TOTAL.labels(outcome="empty").inc()
            logger.info("Upload rejected: %s", summary.error)
            return outcome

        self._swap(index)
        UPLOADS_TOTAL.labels(outcome="partial" if summary.skipped_rows else "ok").inc()
        logger.info(
            "Upload indexed %d postal codes (%d valid rows, %d skipped)",
            len(index), summary.valid_rows, summary.skipped_rows,
        )
        return UploadOutcome(outcome.level, outcome.message, summary, postal_codes=len(index))

    def load_bytes(self, data: Optional[bytes]) -> UploadOutcome:
        """Decode raw upload bytes and load them; undecodable bytes count as a read failure."""
        if data is None:
            UPLOADS_TOTAL.labels(outcome="no_file").inc()
            return UploadOutcome(LEVEL_INFO, MSG_NO_FILE)
        try:
            text = data.decode(self.encoding)
        except UnicodeDecodeError as e:
            return self._read_failed(CsvReadError(f"Upload is not valid {self.encoding} text: {e}"))
        return self.load_text(text)

    def load_file(self, path: Optional[Union[str, Path]]) -> UploadOutcome:
        """Read a CSV file from disk and load it."""
        if path is None:
            UPLOADS_TOTAL.labels(outcome="no_file").inc()
            return UploadOutcome(LEVEL_INFO, MSG_NO_FILE)
        try:
            text = read_csv_file(path, encoding=self.encoding)
        except CsvReadError as e:
            return self._read_failed(e)
        return self.load_text(text)

    def _read_failed(self, err: CsvReadError) -> UploadOutcome:
        logger.error("Error reading file: %s", err)
        self.reset()
        UPLOADS_TOTAL.labels(outcome="read_error").inc()
        return UploadOutcome(LEVEL_ERROR, MSG_READ_ERROR)

    # -------------------------- Queries --------------------------

    def plot_postal_code(self, code: str) -> QueryOutcome:
        """Look up one postal code for plotting."""
        code = (code or "").strip()
        if not code:
            return QueryOutcome(LEVEL_ERROR, MSG_EMPTY_PINCODE)

        entry = lookup_postal_code(self._index, code)
        if entry is None:
            LOOKUPS_TOTAL.labels(result="miss").inc()
            return QueryOutcome(LEVEL_ERROR, MSG_PINCODE_NOT_FOUND)

        LOOKUPS_TOTAL.labels(result="hit").inc()
        return QueryOutcome(
            LEVEL_SUCCESS,
            f"Pincode {code} plotted. Stores: {', '.join(entry.stores)}",
            entry,
        )

    def search(self, query: str) -> QueryOutcome:
        """Case-insensitive store name search across every postal code."""
        q = (query or "").strip().lower()
        if not q:
            return QueryOutcome(LEVEL_ERROR, MSG_EMPTY_STORE_QUERY)

        SEARCHES_TOTAL.inc()
        result = search_stores(self._index, q)
        if result.total == 0:
            return QueryOutcome(LEVEL_ERROR, f'No stores found matching "{q}".', result)
        return QueryOutcome(LEVEL_SUCCESS, f'{result.total} store(s) found matching "{q}".', result)
