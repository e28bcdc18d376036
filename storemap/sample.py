# storemap/sample.py
"""
StoreMap – Sample Store CSV Generator

Creates plausible store-location CSVs for demos and manual testing of the
upload path. Output has no header and one store per line:

    store name,postal code,latitude,longitude

Malformed rows can be injected on purpose (`bad=`) so every skip rule of the
row validator shows up in the upload summary.

Usage
-----
CLI:
    storemap sample data/stores.csv --n 500 --bad 10 --seed 7

Programmatic:
    from storemap.sample import generate_rows
    lines = generate_rows(n=50, bad=5, seed=1)
"""

from __future__ import annotations

import random
from pathlib import Path
from typing import List, Optional, Tuple


# -----------------------------
# Domain configuration
# -----------------------------

#: Retail chains used for store names.
CHAINS = [
    "Fresh Mart", "City Grocers", "Daily Needs", "Green Basket", "Metro Pharmacy",
    "Urban Bakes", "Quick Stop", "Home Essentials", "Book Nook", "Tech Corner",
]

#: Areas as (name, postal code, latitude, longitude). Several stores share an
#: area so the index groups them under one postal code.
AREAS: List[Tuple[str, str, float, float]] = [
    ("Connaught Place", "110001", 28.6315, 77.2167),
    ("Andheri", "400053", 19.1136, 72.8697),
    ("Koramangala", "560034", 12.9352, 77.6245),
    ("T Nagar", "600017", 13.0418, 80.2341),
    ("Salt Lake", "700091", 22.5867, 88.4171),
    ("Banjara Hills", "500034", 17.4156, 78.4347),
    ("Kothrud", "411038", 18.5074, 73.8077),
    ("Navrangpura", "380009", 23.0365, 72.5611),
]

#: Broken row templates, one per skip reason.
BAD_TEMPLATES = [
    "{name},{code},{lat}",            # insufficient columns
    ",{code},{lat},{lng}",            # missing store name
    "{name},,{lat},{lng}",            # missing postal code
    "{name},{code},north,{lng}",      # invalid coordinates
]


def _jitter(rng: random.Random, value: float, spread: float = 0.02) -> float:
    return round(value + rng.uniform(-spread, spread), 6)


def generate_rows(n: int, bad: int = 0, seed: Optional[int] = None) -> List[str]:
    """
    Build `n` valid store rows plus `bad` malformed ones, shuffled together.

    Parameters
    ----------
    n : int
        Number of valid rows.
    bad : int, default=0
        Number of malformed rows; templates cycle through every skip reason.
    seed : int | None
        Seed for reproducible output.

    Returns
    -------
    list[str]
        CSV lines without trailing newlines.
    """
    if n < 0 or bad < 0:
        raise ValueError("n and bad must be non-negative")
    rng = random.Random(seed)
    rows: List[str] = []

    for i in range(n):
        area, code, lat, lng = rng.choice(AREAS)
        name = f"{rng.choice(CHAINS)} {area} #{i + 1}"
        # jitter the area coordinates; the index keeps the last one per code
        rows.append(f"{name},{code},{_jitter(rng, lat)},{_jitter(rng, lng)}")

    for j in range(bad):
        area, code, lat, lng = rng.choice(AREAS)
        tpl = BAD_TEMPLATES[j % len(BAD_TEMPLATES)]
        rows.append(tpl.format(name=f"{rng.choice(CHAINS)} {area}", code=code, lat=lat, lng=lng))

    rng.shuffle(rows)
    return rows


def write_sample_csv(path: Path, n: int = 100, bad: int = 0, seed: Optional[int] = None) -> Path:
    """Write a sample CSV (trailing newline included) and return its path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = generate_rows(n=n, bad=bad, seed=seed)
    path.write_text("\n".join(lines) + ("\n" if lines else ""), encoding="utf-8")
    return path
