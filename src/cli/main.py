"""CLI principal.

Sin subcomando ejecuta la conciliación completa e imprime el reporte en
stdout. Código de salida 0 aunque haya anomalías (son datos, no fallos);
1 si alguna sección no se pudo descargar o parsear.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.http_client import HttpSectionSource, build_async_client
from adapters.json_exporter import export_reconciliation_json
from adapters.report_renderer import render_report
from cli import doctor
from cli.ui_components import print_error
from core.config import AppSettings
from core.domain.models import ReconciliationResult
from core.errors import ReconError
from core.services.reconciliation_pipeline import ReconciliationOptions, run_reconciliation
from core.services.report_sections import build_sections

app = typer.Typer(
    help="Cross-check drivers, vehicles and reservations of the back-office API.",
    add_completion=False,
)
app.add_typer(doctor.app, name="doctor")

_err_console = Console(stderr=True)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _settings_error(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )


def _effective_settings(base_url: str | None, concurrent: bool | None) -> AppSettings:
    settings = AppSettings()
    overrides: dict[str, object] = {}
    if base_url:
        overrides["base_url"] = base_url
    if concurrent is not None:
        overrides["concurrent_fetch"] = concurrent
    return settings.model_copy(update=overrides) if overrides else settings


async def _analyze(settings: AppSettings) -> ReconciliationResult:
    async with build_async_client(settings) as client:
        source = HttpSectionSource(client, settings.base_url)
        return await run_reconciliation(source, ReconciliationOptions.from_settings(settings))


@app.callback(invoke_without_command=True)
def analyze(
    ctx: typer.Context,
    base_url: str | None = typer.Option(
        None,
        "--base-url",
        help="API base URL (default: TOUR_RECON_BASE_URL or http://localhost:4050).",
    ),
    concurrent: bool | None = typer.Option(
        None,
        "--concurrent/--sequential",
        help="Fetch the three sections in parallel.",
    ),
    json_out: Path | None = typer.Option(
        None,
        "--json-out",
        help="Also write the findings and resolutions as JSON.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
) -> None:
    """Fetch, cross-check and print the reconciliation report."""

    try:
        settings = _effective_settings(base_url, concurrent)
    except ValidationError as exc:
        print_error(_err_console, _settings_error(exc), context="Invalid configuration")
        raise typer.Exit(code=1) from exc

    _configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings

    if ctx.invoked_subcommand is not None:
        return

    try:
        result = asyncio.run(_analyze(settings))
    except ReconError as exc:
        print_error(_err_console, str(exc))
        raise typer.Exit(code=1) from exc

    sections = build_sections(
        result,
        reservation_sample_size=settings.reservation_sample_size,
        resolution_sample_size=settings.resolution_sample_size,
    )
    typer.echo(render_report(sections), nl=False)

    if json_out is not None:
        path = export_reconciliation_json(result=result, output_path=json_out)
        _err_console.print(f"[green]JSON saved to:[/green] {path}")


def run() -> None:
    app()
