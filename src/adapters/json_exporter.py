"""Exportación JSON del agregado de conciliación.

Por qué JSON:
- Permite comparar ejecuciones o alimentar otras herramientas sin parsear
  el reporte de texto.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.domain.models import ReconciliationResult


def build_payload(result: ReconciliationResult) -> dict[str, Any]:
    """Resumen serializable: contadores primero, luego el detalle."""

    payload = result.model_dump(mode="json", exclude={"drivers", "vehicles", "reservations"})
    payload["counts"] = {
        "drivers": len(result.drivers),
        "vehicles": len(result.vehicles),
        "reservations": len(result.reservations),
        "missing_drivers": len(result.findings_for("drivers")),
        "missing_vehicles": len(result.findings_for("vehicles")),
    }
    return payload


def export_reconciliation_json(*, result: ReconciliationResult, output_path: Path) -> Path:
    """Exporta el resultado a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(build_payload(result), ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
