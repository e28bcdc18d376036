# storemap/config.py
"""
Runtime configuration and logging setup.

Environment knobs
-----------------
- STOREMAP_LOG_LEVEL          : logging level name (default "INFO").
- STOREMAP_CSV_PATH           : optional CSV loaded into the API service at startup.
- STOREMAP_MAX_UPLOAD_BYTES   : largest accepted upload body (default 5 MiB).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rich.logging import RichHandler

DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    csv_path: Optional[Path] = None
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES

    @classmethod
    def from_env(cls) -> "Settings":
        csv_path = os.environ.get("STOREMAP_CSV_PATH", "").strip()
        max_bytes = os.environ.get("STOREMAP_MAX_UPLOAD_BYTES", "").strip()
        return cls(
            log_level=os.environ.get("STOREMAP_LOG_LEVEL", "INFO").strip().upper() or "INFO",
            csv_path=Path(csv_path) if csv_path else None,
            max_upload_bytes=int(max_bytes) if max_bytes else DEFAULT_MAX_UPLOAD_BYTES,
        )


def configure_logging(level: str = "INFO") -> None:
    """
    Route the `storemap` loggers through a Rich handler.

    Safe to call more than once; the handler is only installed the first time.
    """
    root = logging.getLogger("storemap")
    root.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(RichHandler(show_path=False, rich_tracebacks=True))
