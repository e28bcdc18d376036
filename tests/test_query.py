# tests/test_query.py
from __future__ import annotations

import pytest

from storemap.errors import EmptyQueryError
from storemap.index import build_index
from storemap.query import Bounds, lookup_postal_code, search_stores

CSV = "\n".join(
    [
        "Fresh Mart Andheri,400053,19.11,72.86",
        "City Grocers,400053,19.12,72.87",
        "fresh mart Koramangala,560034,12.93,77.62",
        "Book Nook,110001,28.63,77.21",
    ]
)


@pytest.fixture()
def index():
    idx, _ = build_index(CSV)
    return idx


def test_lookup_exact_match(index):
    entry = lookup_postal_code(index, "400053")
    assert entry is not None
    assert entry.stores == ["Fresh Mart Andheri", "City Grocers"]
    assert (entry.lat, entry.lng) == (19.12, 72.87)


def test_lookup_is_exact_text(index):
    assert lookup_postal_code(index, " 400053") is None
    assert lookup_postal_code(index, "999999") is None


def test_search_is_case_insensitive_and_returns_only_matches(index):
    result = search_stores(index, "FRESH mart")
    assert [(m.postal_code, m.stores) for m in result.matches] == [
        ("400053", ["Fresh Mart Andheri"]),
        ("560034", ["fresh mart Koramangala"]),
    ]
    assert result.total == 2


def test_search_counts_every_matching_name(index):
    result = search_stores(index, "r")
    # every store except "Book Nook" contains an "r"
    assert result.total == 3
    assert len(result.matches) == 2


def test_search_no_match(index):
    result = search_stores(index, "pharmacy")
    assert result.matches == []
    assert result.total == 0
    assert result.bounds is None


def test_search_bounds_cover_all_matches(index):
    result = search_stores(index, "fresh")
    assert result.bounds == Bounds(south=12.93, west=72.87, north=19.12, east=77.62)
    assert result.to_dict()["bounds"] == {"south": 12.93, "west": 72.87, "north": 19.12, "east": 77.62}


def test_search_rejects_empty_query(index):
    with pytest.raises(EmptyQueryError):
        search_stores(index, "")
