"""Typer-based command line interface for media-catalog."""
from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from media_catalog import Category, MediaCatalog, StorageClass, classify_path  # type: ignore  # noqa: E402
from utils.config import AppConfig, load_config  # type: ignore  # noqa: E402
from utils.logging import configure_logging  # type: ignore  # noqa: E402

app = typer.Typer(add_completion=False)
console = Console()

_state = {"config": None}


@app.callback()
def main(
    config: Optional[Path] = typer.Option(None, "--config", help="YAML configuration file."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    loaded = load_config(config)
    configure_logging("DEBUG" if verbose else loaded.log_level)
    _state["config"] = loaded


def _config() -> AppConfig:
    return _state["config"] or load_config()


def _parse_category(raw: str) -> Category:
    category = Category.coerce(raw)
    if category is None or category is Category.UNKNOWN:
        choices = ", ".join(member.name.lower() for member in Category if member is not Category.UNKNOWN)
        raise typer.BadParameter(f"Unknown category {raw!r}; choose one of {choices}")
    return category


def _parse_storage(raw: Optional[str]) -> Optional[StorageClass]:
    if raw is None:
        return None
    storage = StorageClass.coerce(raw)
    if storage is None or storage is StorageClass.UNKNOWN:
        raise typer.BadParameter(f"Unknown storage class {raw!r}")
    return storage


def _build(category: Category) -> MediaCatalog:
    catalog = MediaCatalog.from_config(_config())
    catalog.select_category(category)
    return catalog


@app.command()
def roots() -> None:
    """Print the resolved storage roots."""

    catalog = MediaCatalog.from_config(_config())
    for storage_class, root in catalog.roots.scan_order():
        typer.echo(f"{storage_class.name.lower()}\t{root}")
    typer.echo(f"ignored\t{catalog.roots.ignored_dir}")


@app.command("list")
def list_entries(
    category: str = typer.Argument(..., help="audio, video, ebook, image or package."),
    attach: Optional[str] = typer.Option(None, "--attach", help="Storage class to detach and attach again after the scan."),
    detach: Optional[str] = typer.Option(None, "--detach", help="Storage class to detach after the scan."),
    as_json: bool = typer.Option(False, "--json", help="Emit a JSON array."),
) -> None:
    """Build the catalog for CATEGORY and print its entries."""

    attach_class = _parse_storage(attach)
    detach_class = _parse_storage(detach)
    catalog = _build(_parse_category(category))
    if detach_class is not None:
        catalog.detach_root(detach_class)
    if attach_class is not None:
        # the initial scan already covered every root
        catalog.detach_root(attach_class)
        catalog.attach_root(attach_class)
        catalog.sort()
    entries: List[str] = list(catalog)
    if as_json:
        typer.echo(json.dumps(entries, indent=2))
    else:
        for entry in entries:
            typer.echo(entry)
    if catalog.truncated:
        typer.echo(f"Catalog truncated at {catalog.cap} entries", err=True)


@app.command()
def summary(category: str = typer.Argument(..., help="audio, video, ebook, image or package.")) -> None:
    """Show per-root counts for CATEGORY."""

    catalog = _build(_parse_category(category))
    result = catalog.summary()
    table = Table(title=f"{result.category} catalog")
    table.add_column("storage")
    table.add_column("entries", justify="right")
    for name, count in result.per_storage.items():
        table.add_row(name, str(count))
    table.add_row("total", str(result.total_entries))
    console.print(table)
    if result.truncated:
        console.print(f"[yellow]Truncated at {catalog.cap} entries[/yellow]")
    for path in result.unreadable_dirs:
        console.print(f"[dim]unreadable: {path}[/dim]")


@app.command()
def classify(paths: List[str] = typer.Argument(..., help="File names or paths.")) -> None:
    """Print the category of each PATH."""

    for path in paths:
        typer.echo(f"{classify_path(path).name.lower()}\t{path}")


if __name__ == "__main__":
    app()
