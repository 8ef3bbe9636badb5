"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.jira_client import JiraClient
from cli.ui_components import print_banner
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.errors import FilterClientError
from core.services.filter_client import FilterClient

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_api(settings: AppSettings) -> tuple[bool, str]:
    """Reads the default share scope: cheap, authenticated and filter-scoped."""

    try:
        async with JiraClient(settings) as transport:
            record = await FilterClient(transport).get_default_share_scope()
    except FilterClientError as exc:
        return False, str(exc)
    scope = record.get("scope") if isinstance(record, dict) else record
    return True, f"default share scope = {scope}"


def _auth_mode(settings: AppSettings) -> tuple[str, str]:
    if settings.personal_access_token:
        return "OK", "Bearer (personal access token)"
    if settings.username and settings.api_token:
        return "OK", f"Basic ({settings.username})"
    if settings.username:
        return "WARN", "Username set but no API token"
    return "WARN", "No credentials -> anonymous access"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    print_banner(_console)

    table = Table(title="jira-filters Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("API root", "OK", settings.api_root)
    status, detail = _auth_mode(settings)
    table.add_row("Auth", status, detail)
    table.add_row("TLS verify", "OK" if settings.verify_ssl else "WARN", str(settings.verify_ssl))

    # Connectivity (best-effort)
    ok_api, detail_api = asyncio.run(_check_api(settings))
    table.add_row("Filter API", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if not ok_api:
        _console.print(
            f"\n[yellow]Note:[/yellow] run `jira-filters doctor setup` or edit {get_user_env_file()}."
        )
        raise typer.Exit(code=1)


@app.command()
def setup() -> None:
    """Interactive connection setup (stored in the user config .env)."""

    base_url = typer.prompt("Jira base URL (https://host[:port])").strip()
    path_prefix = typer.prompt("Context path", default="", show_default=False).strip()
    username = typer.prompt("Username (leave empty to use a personal access token)", default="").strip()
    secret = typer.prompt("API token / personal access token", hide_input=True).strip()

    if not base_url or not secret:
        raise typer.BadParameter("base URL and token are required")

    values: dict[str, str | None] = {
        "JIRA_FILTERS_BASE_URL": base_url,
        "JIRA_FILTERS_PATH_PREFIX": path_prefix,
    }
    if username:
        values["JIRA_FILTERS_USERNAME"] = username
        values["JIRA_FILTERS_API_TOKEN"] = secret
    else:
        values["JIRA_FILTERS_PERSONAL_ACCESS_TOKEN"] = secret

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved connection config to:[/green] {env_path}")
