# tests/test_rows.py
from __future__ import annotations

import pytest

from storemap.rows import (
    REASON_COLUMNS,
    REASON_COORDS,
    REASON_POSTAL,
    REASON_STORE,
    ParsedRow,
    SkippedRow,
    parse_coordinate,
    parse_row,
)


def test_valid_row_fields_are_trimmed():
    out = parse_row("  Store A , 12345 ,  10.0 , 20.0  ", 1)
    assert out == ParsedRow(store_name="Store A", postal_code="12345", lat=10.0, lng=20.0)


def test_blank_line_is_not_a_row():
    assert parse_row("", 1) is None
    assert parse_row("   \t ", 2) is None
    assert parse_row("\r", 3) is None


def test_extra_columns_are_ignored():
    out = parse_row("Store A,12345,10.0,20.0,open 24h,extra", 4)
    assert isinstance(out, ParsedRow)
    assert (out.store_name, out.lat, out.lng) == ("Store A", 10.0, 20.0)


def test_crlf_line_is_accepted():
    out = parse_row("Store A,12345,10.0,20.0\r", 1)
    assert isinstance(out, ParsedRow)
    assert out.lng == 20.0


@pytest.mark.parametrize(
    "line, reason",
    [
        ("Store B,67890,12.5", REASON_COLUMNS),
        ("just some text", REASON_COLUMNS),
        (",12345,10.0,20.0", REASON_STORE),
        ("   ,12345,10.0,20.0", REASON_STORE),
        ("Store A,,10.0,20.0", REASON_POSTAL),
        ("Store A,12345,TEN,20.0", REASON_COORDS),
        ("Store A,12345,10.0,", REASON_COORDS),
        ("Store A,12345,nan,20.0", REASON_COORDS),
    ],
)
def test_skip_reasons(line: str, reason: str):
    out = parse_row(line, 7)
    assert isinstance(out, SkippedRow)
    assert out.reason == reason
    assert out.line_no == 7


def test_first_failing_rule_wins():
    # both store name and postal code are missing: store name is checked first
    out = parse_row(",,abc,def", 1)
    assert out.reason == REASON_STORE


def test_parse_coordinate_accepts_plain_decimals():
    assert parse_coordinate("10") == 10.0
    assert parse_coordinate("-12.75") == -12.75
    assert parse_coordinate("+0.5") == 0.5
    assert parse_coordinate(".5") == 0.5
    assert parse_coordinate("1e2") == 100.0


@pytest.mark.parametrize(
    "text",
    ["", "TEN", "1,5", "1 000", "inf", "Infinity", "12.5.1", "0x10", "12.5abc", "12.5N",
     "\u0661\u0662.\u0665", "\uff11\uff10"],
)
def test_parse_coordinate_rejects_non_decimals(text: str):
    assert parse_coordinate(text) is None


def test_trailing_junk_in_coordinate_is_invalid():
    out = parse_row("Store A,12345,12.5abc,20.0", 1)
    assert isinstance(out, SkippedRow)
    assert out.reason == REASON_COORDS
