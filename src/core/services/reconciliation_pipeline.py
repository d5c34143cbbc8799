"""Orquestación de una conciliación completa.

Flujo lineal: descargar las tres secciones -> indexar conductores y
vehículos -> buscar referencias rotas -> simular la resolución de etiquetas
-> extraer opciones de filtro. Todo queda en un `ReconciliationResult`; la
presentación (texto, JSON) vive fuera del Core.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from core.config import DEFAULT_UNASSIGNED_LABEL, AppSettings
from core.domain.models import (
    Driver,
    FilterOptions,
    ReconciliationResult,
    Reservation,
    ResolvedReservation,
    Section,
    Vehicle,
)
from core.interfaces.source import DataSource
from core.services.checker import ReferenceCheck, find_broken_references
from core.services.indexer import build_index
from core.services.resolver import DRIVER_LABEL, VEHICLE_LABEL, resolve

logger = logging.getLogger(__name__)

# Valores que el filtro del historial nunca ofrece como opción.
_EXCLUDED_FILTER_LABELS = ("N/A",)


@dataclass
class ReconciliationOptions:
    """Parámetros de una ejecución."""

    base_url: str
    unassigned_label: str = DEFAULT_UNASSIGNED_LABEL
    concurrent_fetch: bool = False

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "ReconciliationOptions":
        return cls(
            base_url=settings.base_url,
            unassigned_label=settings.unassigned_label,
            concurrent_fetch=settings.concurrent_fetch,
        )


async def fetch_sections(
    source: DataSource,
    *,
    concurrent: bool = False,
) -> tuple[list[Driver], list[Vehicle], list[Reservation]]:
    """Descarga conductores, vehículos y reservas.

    En modo concurrente las tres peticiones se lanzan juntas; el resultado es
    el mismo porque ninguna depende de otra.
    """

    if concurrent:
        drivers, vehicles, reservations = await asyncio.gather(
            source.fetch_collection(Section.DRIVERS, Driver),
            source.fetch_collection(Section.VEHICLES, Vehicle),
            source.fetch_collection(Section.RESERVATIONS, Reservation),
        )
        return drivers, vehicles, reservations

    drivers = await source.fetch_collection(Section.DRIVERS, Driver)
    vehicles = await source.fetch_collection(Section.VEHICLES, Vehicle)
    reservations = await source.fetch_collection(Section.RESERVATIONS, Reservation)
    return drivers, vehicles, reservations


def resolve_reservations(
    reservations: Iterable[Reservation],
    drivers: Sequence[Driver],
    vehicles: Sequence[Vehicle],
    *,
    unassigned_label: str = DEFAULT_UNASSIGNED_LABEL,
) -> list[ResolvedReservation]:
    """Etiquetas de conductor y vehículo tal como las mostraría el panel."""

    driver_strategy = DRIVER_LABEL.with_default(unassigned_label)
    vehicle_strategy = VEHICLE_LABEL.with_default(unassigned_label)
    return [
        ResolvedReservation(
            reservation_id=reservation.id,
            driver=resolve(reservation, "driver_id", drivers, driver_strategy),
            vehicle=resolve(reservation, "vehicle_id", vehicles, vehicle_strategy),
        )
        for reservation in reservations
    ]


def _unique_labels(labels: Iterable[str], excluded: set[str]) -> list[str]:
    seen: dict[str, None] = {}
    for label in labels:
        if label and label not in excluded:
            seen.setdefault(label, None)
    return list(seen)


def extract_filter_options(
    resolutions: Sequence[ResolvedReservation],
    *,
    unassigned_label: str = DEFAULT_UNASSIGNED_LABEL,
) -> FilterOptions:
    """Valores únicos (en orden de aparición) para los filtros del historial."""

    excluded = {unassigned_label, *_EXCLUDED_FILTER_LABELS}
    return FilterOptions(
        drivers=_unique_labels((r.driver.label for r in resolutions), excluded),
        vehicles=_unique_labels((r.vehicle.label for r in resolutions), excluded),
    )


def reconcile(
    drivers: list[Driver],
    vehicles: list[Vehicle],
    reservations: list[Reservation],
    options: ReconciliationOptions,
) -> ReconciliationResult:
    """Parte pura del pipeline: no hace I/O."""

    checks = [
        ReferenceCheck("driver_id", build_index(drivers), Section.DRIVERS.value),
        ReferenceCheck("vehicle_id", build_index(vehicles), Section.VEHICLES.value),
    ]
    findings = find_broken_references(reservations, checks)
    resolutions = resolve_reservations(
        reservations,
        drivers,
        vehicles,
        unassigned_label=options.unassigned_label,
    )
    logger.info(
        "Conciliación: %d reservas, %d referencias rotas",
        len(reservations),
        len(findings),
    )

    return ReconciliationResult(
        base_url=options.base_url,
        drivers=drivers,
        vehicles=vehicles,
        reservations=reservations,
        findings=findings,
        resolutions=resolutions,
        filter_options=extract_filter_options(resolutions, unassigned_label=options.unassigned_label),
    )


async def run_reconciliation(source: DataSource, options: ReconciliationOptions) -> ReconciliationResult:
    """Ejecuta el pipeline completo. Un fallo de descarga aborta la ejecución."""

    drivers, vehicles, reservations = await fetch_sections(source, concurrent=options.concurrent_fetch)
    return reconcile(drivers, vehicles, reservations, options)
