# storemap/cli.py
"""
Command line entry point for StoreMap.

    storemap load data/stores.csv
    storemap lookup data/stores.csv 560034
    storemap search data/stores.csv "fresh mart"
    storemap sample data/stores.csv --n 200 --bad 8
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from storemap.config import Settings, configure_logging
from storemap.sample import write_sample_csv
from storemap.service import LEVEL_ERROR, LEVEL_SUCCESS, LocatorService, UploadOutcome

console = Console()
app = typer.Typer(no_args_is_help=True)

STYLE = {LEVEL_SUCCESS: "green", LEVEL_ERROR: "red"}


@app.callback()
def main_callback(log_level: str = typer.Option(None, "--log-level", help="Override STOREMAP_LOG_LEVEL")):
    """Upload store CSVs and query them by postal code or store name."""
    configure_logging((log_level or Settings.from_env().log_level).upper())


def _load(csv_path: Path) -> tuple[LocatorService, UploadOutcome]:
    """Load a CSV into a fresh service; print the notification and exit 1 on error."""
    svc = LocatorService()
    out = svc.load_file(csv_path)
    _notify(out.level, out.message)
    if not out.ok:
        raise typer.Exit(1)
    return svc, out


def _notify(level: str, message: str) -> None:
    style = STYLE.get(level, "yellow")
    console.print(f"[{style}]{message}[/]")


def _summary_line(out: UploadOutcome) -> str:
    s = out.summary
    return (f"processed: [bold]{s.processed_rows}[/] · skipped: [bold]{s.skipped_rows}[/] · "
            f"postal codes: [bold]{out.postal_codes}[/]")


@app.command()
def load(csv_path: Path = typer.Argument(..., help="Store CSV (name,postal code,lat,lng)")):
    """Parse a store CSV and show the resulting postal-code index."""
    svc, out = _load(csv_path)

    table = Table(title=f"Postal codes in {csv_path.name}")
    table.add_column("postal code")
    table.add_column("lat", justify="right")
    table.add_column("lng", justify="right")
    table.add_column("stores")
    for code, entry in svc.index.items():
        table.add_row(code, f"{entry.lat:g}", f"{entry.lng:g}", ", ".join(entry.stores))
    console.print(table)
    console.print(_summary_line(out))


@app.command()
def lookup(csv_path: Path, code: str):
    """Show the coordinates and stores for one postal code."""
    svc, _ = _load(csv_path)
    out = svc.plot_postal_code(code)
    _notify(out.level, out.message)
    if not out.ok:
        raise typer.Exit(1)
    entry = out.result
    console.print(f"lat=[bold]{entry.lat:g}[/] lng=[bold]{entry.lng:g}[/] stores={len(entry.stores)}")


@app.command()
def search(csv_path: Path, query: str):
    """Find stores whose name contains QUERY (case-insensitive)."""
    svc, _ = _load(csv_path)
    out = svc.search(query)
    _notify(out.level, out.message)
    if not out.ok:
        raise typer.Exit(1)

    result = out.result
    table = Table(title=f'Stores matching "{result.query}"')
    table.add_column("postal code")
    table.add_column("lat", justify="right")
    table.add_column("lng", justify="right")
    table.add_column("matching stores")
    for m in result.matches:
        table.add_row(m.postal_code, f"{m.lat:g}", f"{m.lng:g}", ", ".join(m.stores))
    console.print(table)
    b = result.bounds
    console.print(f"bounds: S {b.south:g} · W {b.west:g} · N {b.north:g} · E {b.east:g}")


@app.command()
def sample(
    out_path: Path = typer.Argument(..., help="Where to write the CSV"),
    n: int = typer.Option(100, "--n", help="Valid rows"),
    bad: int = typer.Option(0, "--bad", help="Malformed rows to inject"),
    seed: int = typer.Option(None, "--seed", help="Random seed"),
):
    """Write a synthetic store CSV for demos."""
    path = write_sample_csv(out_path, n=n, bad=bad, seed=seed)
    console.print(f"[green]Wrote[/] {n + bad} rows → {path}")


def main():
    app()


if __name__ == "__main__":
    main()
