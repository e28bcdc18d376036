# storemap/errors.py
"""
StoreMap — Exceptions

Only genuinely exceptional conditions live here. Malformed CSV rows are data
(see `storemap.rows.SkippedRow`), and an empty upload is reported through
`ParseSummary.error`; neither raises.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class StoreMapError(Exception):
    """Base class for StoreMap errors."""


class CsvReadError(StoreMapError):
    """The uploaded file could not be read or decoded as text."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class EmptyQueryError(StoreMapError, ValueError):
    """A lookup or search was attempted with an empty query string."""
