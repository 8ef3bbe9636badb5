"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Any, Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.share_scope import ShareScope


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en `doctor`)."""

    title = Text("jira-filters", style="bold cyan")
    subtitle = Text("Saved filters • Columns • Share scope", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_columns_table(columns: Iterable[Any]) -> Table:
    """Tabla de columnas de un filtro, en el orden devuelto por Jira."""

    table = Table(title="Filter Columns")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Label", style="cyan")
    table.add_column("Value", style="white")
    for position, column in enumerate(columns, start=1):
        if isinstance(column, dict):
            table.add_row(str(position), str(column.get("label", "")), str(column.get("value", "")))
        else:
            table.add_row(str(position), str(column), "")
    return table


def build_filter_panel(record: dict[str, Any]) -> Panel:
    """Panel resumen de un filtro (`id`, `jql`, owner, favourite...)."""

    title = Text(str(record.get("name") or "(unnamed filter)"), style="bold yellow")
    body = Text()
    body.append("ID: ", style="bold")
    body.append(f"{record.get('id', '-')}\n")
    jql = record.get("jql")
    if jql:
        body.append("JQL: ", style="bold")
        body.append(f"{jql}\n")
    owner = record.get("owner")
    if isinstance(owner, dict):
        body.append("Owner: ", style="bold")
        body.append(f"{owner.get('displayName') or owner.get('name') or '-'}\n")
    if record.get("description"):
        body.append(f"\n{record['description']}\n", style="dim")
    if record.get("favourite") is not None:
        body.append(f"\nFavourite: {'yes' if record['favourite'] else 'no'}")
    if record.get("viewUrl"):
        body.append(f"\n{record['viewUrl']}", style="magenta")

    return Panel(body, title=title, border_style="yellow")


def format_share_scope(record: Any) -> Text:
    """Texto para la respuesta `{"scope": ...}`."""

    raw = record.get("scope") if isinstance(record, dict) else None
    try:
        scope = ShareScope.parse(raw)
    except ValueError:
        return Text(f"Default share scope: {raw}", style="yellow")
    return Text.assemble(
        ("Default share scope: ", "bold"),
        (scope.value, "green"),
        (f" ({scope.label()})", "dim"),
    )
