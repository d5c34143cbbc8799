"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- El reporte va a stdout en texto plano; Rich se usa solo en stderr y en
  el comando `doctor`.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

TOOL_NAME = "tour-recon"


def print_error(console: Console, message: str, *, context: str = "Error analyzing data") -> None:
    """Una sola línea de error: herramienta y mensaje."""

    console.print(f"[bold red]{TOOL_NAME}:[/bold red] {context}: {escape(message)}")


def build_checks_table(title: str) -> Table:
    table = Table(title=title)
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table
