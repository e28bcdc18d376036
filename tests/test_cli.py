# tests/test_cli.py
from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from storemap.cli import app

runner = CliRunner()


@pytest.fixture()
def stores_csv(tmp_path: Path) -> Path:
    p = tmp_path / "stores.csv"
    p.write_text("Store A,12345,10.0,20.0\nStore B,67890,12.5,22.5\nStore C,12345,10.0,20.0\n", encoding="utf-8")
    return p


def test_load_prints_summary(stores_csv: Path):
    r = runner.invoke(app, ["load", str(stores_csv)])
    assert r.exit_code == 0, r.output
    assert "CSV data uploaded and processed successfully!" in r.output
    assert "12345" in r.output and "67890" in r.output


def test_load_empty_file_exits_1(tmp_path: Path):
    p = tmp_path / "empty.csv"
    p.write_text("\n\n", encoding="utf-8")
    r = runner.invoke(app, ["load", str(p)])
    assert r.exit_code == 1
    assert "CSV file is empty or contains no data." in r.output


def test_load_missing_file_exits_1(tmp_path: Path):
    r = runner.invoke(app, ["load", str(tmp_path / "missing.csv")])
    assert r.exit_code == 1
    assert "Error reading file." in r.output


def test_lookup(stores_csv: Path):
    r = runner.invoke(app, ["lookup", str(stores_csv), "12345"])
    assert r.exit_code == 0, r.output
    assert "Pincode 12345 plotted" in r.output


def test_lookup_miss_exits_1(stores_csv: Path):
    r = runner.invoke(app, ["lookup", str(stores_csv), "00000"])
    assert r.exit_code == 1
    assert "Pincode not found" in r.output


def test_search(stores_csv: Path):
    r = runner.invoke(app, ["search", str(stores_csv), "store b"])
    assert r.exit_code == 0, r.output
    assert "1 store(s) found" in r.output


def test_sample_writes_file(tmp_path: Path):
    out = tmp_path / "sample.csv"
    r = runner.invoke(app, ["sample", str(out), "--n", "5", "--bad", "2", "--seed", "3"])
    assert r.exit_code == 0, r.output
    assert len(out.read_text(encoding="utf-8").splitlines()) == 7
