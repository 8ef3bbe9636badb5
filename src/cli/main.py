"""CLI principal (Typer + Rich).

Por qué aquí y no en el Core:
- La CLI solo traduce argumentos a `FilterOptions` y pinta resultados.
- Toda la construcción de requests vive en `core.services.filter_client`.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.jira_client import JiraClient
from adapters.json_exporter import export_json, load_json
from cli import doctor
from cli.ui_components import build_columns_table, build_filter_panel, format_share_scope
from core.config import AppSettings
from core.domain.models import FilterOptions
from core.domain.share_scope import ShareScope
from core.errors import FilterClientError
from core.services.filter_client import FilterClient

app = typer.Typer(no_args_is_help=True, help="Manage Jira saved filters from the terminal.")
columns_app = typer.Typer(no_args_is_help=True, help="Show, set or reset a filter's columns.")
share_scope_app = typer.Typer(no_args_is_help=True, help="Default share scope of the current user.")

app.add_typer(columns_app, name="columns")
app.add_typer(share_scope_app, name="share-scope")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def build_transport() -> JiraClient:
    """Transporte usado por los comandos (sustituible en tests)."""

    return JiraClient(AppSettings())


def _split_csv(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def _call(operation: Callable[[FilterClient], Awaitable[Any]]) -> Any:
    async def _run() -> Any:
        async with build_transport() as transport:
            return await operation(FilterClient(transport))

    try:
        return asyncio.run(_run())
    except FilterClientError as exc:
        _err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def _read_filter_file(path: Path) -> Any:
    try:
        return load_json(path)
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(f"cannot read filter definition: {exc}") from exc


def _show_filter(record: Any, output: Path | None) -> None:
    if output is not None:
        export_json(payload=record, output_path=output)
        _console.print(f"[green]Saved to:[/green] {output}")
        return
    if isinstance(record, dict):
        _console.print(build_filter_panel(record))
    else:
        _console.print_json(data=record)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP traffic (DEBUG)."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


@app.command()
def get(
    filter_id: str = typer.Argument(..., help="ID of the filter."),
    fields: str | None = typer.Option(None, "--fields", help="Comma-separated fields to include."),
    expand: str | None = typer.Option(None, "--expand", help="Comma-separated entities to expand."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the raw JSON to a file."),
) -> None:
    """Show a filter."""

    options = FilterOptions(filter_id=filter_id, fields=_split_csv(fields), expand=_split_csv(expand))
    record = _call(lambda client: client.get_filter(options))
    _show_filter(record, output)


@app.command()
def create(
    definition: Path = typer.Argument(..., help="JSON file with the filter (name, jql, ...)."),
    expand: str | None = typer.Option(None, "--expand", help="Comma-separated entities to expand."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the raw JSON to a file."),
) -> None:
    """Create a filter using the user's default share permissions."""

    options = FilterOptions(filter=_read_filter_file(definition), expand=_split_csv(expand))
    record = _call(lambda client: client.create_filter(options))
    _show_filter(record, output)


@app.command()
def update(
    filter_id: str = typer.Argument(..., help="ID of the filter."),
    definition: Path = typer.Argument(..., help="JSON file with the new filter data."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the raw JSON to a file."),
) -> None:
    """Update an existing filter."""

    options = FilterOptions(filter_id=filter_id, filter=_read_filter_file(definition))
    record = _call(lambda client: client.update_filter(options))
    _show_filter(record, output)


@columns_app.command("show")
def columns_show(filter_id: str = typer.Argument(..., help="ID of the filter.")) -> None:
    """List the filter's default columns."""

    columns = _call(lambda client: client.get_filter_columns(FilterOptions(filter_id=filter_id)))
    _console.print(build_columns_table(columns or []))


@columns_app.command("set")
def columns_set(
    filter_id: str = typer.Argument(..., help="ID of the filter."),
    names: list[str] = typer.Argument(..., help="Column names, in display order."),
) -> None:
    """Set the filter's columns."""

    options = FilterOptions(filter_id=filter_id, columns=names)
    message = _call(lambda client: client.set_filter_columns(options))
    _console.print(f"[green]{message}[/green]")


@columns_app.command("reset")
def columns_reset(filter_id: str = typer.Argument(..., help="ID of the filter.")) -> None:
    """Drop the filter's own column configuration."""

    message = _call(lambda client: client.reset_filter_columns(FilterOptions(filter_id=filter_id)))
    _console.print(f"[green]{message}[/green]")


@share_scope_app.command("show")
def share_scope_show() -> None:
    """Show the default share scope."""

    record = _call(lambda client: client.get_default_share_scope())
    _console.print(format_share_scope(record))


@share_scope_app.command("set")
def share_scope_set(scope: ShareScope = typer.Argument(..., help="GLOBAL or PRIVATE.")) -> None:
    """Change the default share scope for new filters."""

    record = _call(lambda client: client.set_default_share_scope(FilterOptions(scope=scope)))
    _console.print(format_share_scope(record))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
