"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from adapters.http_client import HttpSectionSource, build_async_client, section_url
from cli.ui_components import build_checks_table
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.models import Section
from core.errors import ReconError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _settings_from(ctx: typer.Context) -> AppSettings:
    """Config efectiva del comando raíz (con `--base-url`), o la de entorno."""

    return ctx.obj if isinstance(ctx.obj, AppSettings) else AppSettings()


async def _probe_sections(settings: AppSettings) -> list[tuple[Section, bool, str]]:
    """Pide cada sección una vez y resume estado y cantidad de registros."""

    results: list[tuple[Section, bool, str]] = []
    async with build_async_client(settings) as client:
        source = HttpSectionSource(client, settings.base_url)
        for section in Section:
            try:
                records = await source.fetch_collection(section)
            except ReconError as exc:
                results.append((section, False, str(exc)))
                continue
            results.append((section, True, f"{len(records)} records"))
    return results


@app.command()
def run(ctx: typer.Context) -> None:
    """Show the effective configuration and probe every section endpoint."""

    settings = _settings_from(ctx)

    table = build_checks_table("tour-recon Doctor")
    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("Unassigned label", "OK", settings.unassigned_label)

    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))

    probes = asyncio.run(_probe_sections(settings))
    for section, ok, detail in probes:
        url = section_url(settings.base_url, section)
        table.add_row(f"GET {url}", "OK" if ok else "FAIL", detail)

    _console.print(table)

    if not all(ok for _, ok, _ in probes):
        _console.print("\n[yellow]Note:[/yellow] the report needs all three sections; check the API is running.")
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup(ctx: typer.Context) -> None:
    """Store the API base URL in the user config .env."""

    current = _settings_from(ctx).base_url
    base_url = typer.prompt("API base URL", default=current, show_default=True).strip()
    if not base_url.startswith(("http://", "https://")):
        raise typer.BadParameter("base URL must start with http:// or https://")

    env_path = write_user_env_vars({"TOUR_RECON_BASE_URL": base_url.rstrip("/")})
    _console.print(f"[green]Saved config to:[/green] {env_path}")
