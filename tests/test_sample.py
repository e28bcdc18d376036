# tests/test_sample.py
"""
Sample generator tests: generated files go through the real builder, so the
injected bad rows must show up as skipped rows and nothing else.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from storemap.index import build_index
from storemap.sample import generate_rows, write_sample_csv


def test_generated_rows_parse_cleanly():
    lines = generate_rows(n=40, seed=1)
    _, summary = build_index("\n".join(lines))
    assert (summary.processed_rows, summary.skipped_rows) == (40, 0)


def test_bad_rows_are_skipped(tmp_path: Path):
    path = write_sample_csv(tmp_path / "s.csv", n=20, bad=8, seed=2)
    index, summary = build_index(path.read_text(encoding="utf-8"))
    assert summary.processed_rows == 28
    assert summary.skipped_rows == 8
    assert sum(len(e.stores) for e in index.values()) == 20


def test_seed_is_reproducible():
    assert generate_rows(n=10, bad=2, seed=5) == generate_rows(n=10, bad=2, seed=5)


def test_negative_counts_rejected():
    with pytest.raises(ValueError):
        generate_rows(n=-1)
