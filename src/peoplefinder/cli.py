"""Command line interface for PeopleFinder."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from peoplefinder.config import DEFAULT_PORT, AppConfig
from peoplefinder.errors import DirectoryError
from peoplefinder.models import SearchCriteria
from peoplefinder.search.searcher import Searcher
from peoplefinder.web.app import app as web_app


console = Console()
app = typer.Typer(help="PeopleFinder - search a local data folder for people records")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _format_payload(data: Any) -> str:
    if isinstance(data, str):
        return data
    return json.dumps(data, ensure_ascii=False, default=str)


@app.command()
def search(
    first_name: str = typer.Option("", "--first-name", help="First name"),
    last_name: str = typer.Option("", "--last-name", help="Last name"),
    email: str = typer.Option("", "--email", help="Email address"),
    phone_number: str = typer.Option("", "--phone", help="Phone number"),
    address: str = typer.Option("", "--address", help="Street address"),
    country: str = typer.Option("", "--country", help="Country"),
    state: str = typer.Option("", "--state", help="State or region"),
    username: str = typer.Option("", "--username", help="Username"),
    data_dir: Path = typer.Option(None, "--data-dir", help="Folder with the data files"),
    workers: int = typer.Option(AppConfig().max_workers, min=1, help="Files searched in parallel"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search the data folder and print matching records and images."""
    _setup_logging(verbose)
    config = AppConfig(
        data_dir=data_dir if data_dir is not None else AppConfig().data_dir,
        max_workers=workers,
    )
    resolved_dir = config.resolve_data_dir(Path.cwd())

    criteria = SearchCriteria(
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone_number=phone_number,
        address=address,
        country=country,
        state=state,
        username=username,
    )
    if criteria.is_empty():
        raise typer.BadParameter("Provide at least one search field")

    try:
        found = Searcher(resolved_dir, max_workers=config.max_workers).search(criteria)
    except DirectoryError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    for name in found.failed_files:
        console.print(f"[yellow]Skipped {name}: see log for details.[/yellow]")

    if not found.results and not found.images:
        console.print("[yellow]No matches found.[/yellow]")
        return

    if found.results:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Source")
        table.add_column("Data")
        for result in found.results:
            table.add_row(result.source, _format_payload(result.data))
        console.print(table)

    if found.images:
        images = Table(show_header=True, header_style="bold magenta")
        images.add_column("Image")
        for name in found.images:
            images.add_row(name)
        console.print(images)


@app.command()
def web(
    host: str = typer.Option(AppConfig().host, help="Host interface"),
    port: int = typer.Option(DEFAULT_PORT, help="Server port"),
    data_dir: Path = typer.Option(None, "--data-dir", help="Folder with the data files"),
    workers: int = typer.Option(AppConfig().max_workers, min=1, help="Files searched in parallel"),
) -> None:
    """Start the web interface."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install it with \"python -m pip install uvicorn\""
        ) from exc

    config = AppConfig(
        data_dir=data_dir if data_dir is not None else AppConfig().data_dir,
        host=host,
        port=port,
        max_workers=workers,
    )
    resolved_dir = config.resolve_data_dir(Path.cwd())
    if not resolved_dir.is_dir():
        console.print("[yellow]Warning: data folder not found, searches will return nothing.[/yellow]")

    config.data_dir = resolved_dir
    web_app.state.config = config

    console.print(f"Server running at http://{host}:{port} (data folder: {resolved_dir})")
    uvicorn.run(
        web_app,
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
