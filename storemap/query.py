# storemap/query.py
"""
Read-side helpers over a `PostalIndex`.

- `lookup_postal_code(index, code)` — exact key match, no trimming or folding.
- `search_stores(index, query)` — case-insensitive substring match on store
  names; only matching names are returned for each postal code.

Both are pure; the index is never mutated, so they are safe to call while a new
index is being built elsewhere.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .errors import EmptyQueryError
from .index import PostalCodeEntry, PostalIndex


@dataclass(frozen=True)
class Bounds:
    """Box enclosing a set of coordinates (what a map widget fits its view to)."""

    south: float
    west: float
    north: float
    east: float

    def extend(self, lat: float, lng: float) -> "Bounds":
        return Bounds(
            south=min(self.south, lat),
            west=min(self.west, lng),
            north=max(self.north, lat),
            east=max(self.east, lng),
        )

    def to_dict(self) -> Dict[str, float]:
        return {"south": self.south, "west": self.west, "north": self.north, "east": self.east}


@dataclass(frozen=True)
class StoreMatch:
    postal_code: str
    lat: float
    lng: float
    stores: List[str]

    def to_dict(self) -> Dict[str, object]:
        return {
            "postal_code": self.postal_code,
            "lat": self.lat,
            "lng": self.lng,
            "stores": list(self.stores),
        }


@dataclass(frozen=True)
class StoreSearchResult:
    query: str
    matches: List[StoreMatch] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Matching store names across every postal code."""
        return sum(len(m.stores) for m in self.matches)

    @property
    def bounds(self) -> Optional[Bounds]:
        if not self.matches:
            return None
        first = self.matches[0]
        box = Bounds(first.lat, first.lng, first.lat, first.lng)
        for m in self.matches[1:]:
            box = box.extend(m.lat, m.lng)
        return box

    def to_dict(self) -> Dict[str, object]:
        bounds = self.bounds
        return {
            "query": self.query,
            "total": self.total,
            "matches": [m.to_dict() for m in self.matches],
            "bounds": bounds.to_dict() if bounds else None,
        }


def lookup_postal_code(index: PostalIndex, code: str) -> Optional[PostalCodeEntry]:
    """Return the entry stored under exactly `code`, or None."""
    return index.get(code)


def search_stores(index: PostalIndex, query: str) -> StoreSearchResult:
    """
    Find stores whose name contains `query`, ignoring case.

    Parameters
    ----------
    index : PostalIndex
        Index to search.
    query : str
        Substring to look for; must not be empty.

    Returns
    -------
    StoreSearchResult
        One `StoreMatch` per postal code with at least one hit, in index order.

    Raises
    ------
    EmptyQueryError
        If `query` is empty (every name would match).

    Examples
    --------
    >>> from storemap.index import build_index
    >>> index, _ = build_index("Big Mart,111,1.0,2.0\\nCorner Shop,111,1.0,2.0\\nbig mart,222,3.0,4.0")
    >>> result = search_stores(index, "MART")
    >>> [(m.postal_code, m.stores) for m in result.matches], result.total
    ([('111', ['Big Mart']), ('222', ['big mart'])], 2)
    """
    if not query:
        raise EmptyQueryError("Store name query must not be empty")

    needle = query.lower()
    matches: List[StoreMatch] = []
    for code, entry in index.items():
        hits = [s for s in entry.stores if needle in s.lower()]
        if hits:
            matches.append(StoreMatch(postal_code=code, lat=entry.lat, lng=entry.lng, stores=hits))
    return StoreSearchResult(query=query, matches=matches)
