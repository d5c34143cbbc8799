"""Contenido de las secciones del reporte de conciliación.

Devuelve un `dict` título -> líneas en el orden fijo del reporte. Los
contadores se emiten siempre, también cuando valen 0: un reporte sin
anomalías nunca debe parecer un reporte vacío.
"""

from __future__ import annotations

from typing import Any

from core.domain.models import ReconciliationResult, Section
from core.services.resolver import DRIVER_ROSTER_LABEL, vehicle_description

DRIVERS_TITLE = "DRIVERS DATA"
VEHICLES_TITLE = "VEHICLES DATA"
RESERVATIONS_TITLE = "RESERVATIONS DATA"
CROSS_REFERENCE_TITLE = "CROSS-REFERENCE ANALYSIS"
RESOLUTION_TITLE = "RESOLUTION SIMULATION"
FILTER_OPTIONS_TITLE = "FILTER OPTIONS"


def _show(value: Any) -> str:
    return "(none)" if value is None else str(value)


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def _drivers_section(result: ReconciliationResult) -> list[str]:
    lines = [f"Total drivers: {len(result.drivers)}", "Driver IDs and Names:"]
    for driver in result.drivers:
        lines.append(f"  - {_show(driver.id)}: {DRIVER_ROSTER_LABEL.label_for(driver, driver)}")
    return lines


def _vehicles_section(result: ReconciliationResult) -> list[str]:
    lines = [f"Total vehicles: {len(result.vehicles)}", "Vehicle IDs and Info:"]
    for vehicle in result.vehicles:
        lines.append(f"  - {_show(vehicle.id)}: {vehicle_description(vehicle) or 'N/A'}")
    return lines


def _reservations_section(result: ReconciliationResult, sample_size: int) -> list[str]:
    lines = [
        f"Total reservations: {len(result.reservations)}",
        f"First {sample_size} reservations with driver/vehicle info:",
    ]
    for reservation in result.reservations[:sample_size]:
        lines.append(f"  - {_show(reservation.id)}:")
        lines.append(f"    driver_id: {_show(reservation.driver_id)}")
        lines.append(f"    vehicle_id: {_show(reservation.vehicle_id)}")
    return lines


def _missing_lines(result: ReconciliationResult, target: Section, field: str, noun: str) -> list[str]:
    findings = result.findings_for(target.value)
    lines = [f"Reservations with missing {noun}: {len(findings)}"]
    if findings:
        lines.append("Details:")
        for finding in findings:
            lines.append(
                f"  - Reservation {_show(finding.record_id)} references {field}: "
                f"{_show(finding.value)} (NOT FOUND)"
            )
    return lines


def _cross_reference_section(result: ReconciliationResult) -> list[str]:
    return [
        *_missing_lines(result, Section.DRIVERS, "driver_id", "drivers"),
        "",
        *_missing_lines(result, Section.VEHICLES, "vehicle_id", "vehicles"),
    ]


def _resolution_section(result: ReconciliationResult, sample_size: int) -> list[str]:
    sample = result.resolutions[:sample_size]
    lines = [f"Driver name resolution for first {sample_size} reservations:"]
    for item in sample:
        lines += [
            f"  - Reservation {_show(item.reservation_id)}:",
            f"    driver_id: {_show(item.driver.raw_value)}",
            f"    driver found: {_yes_no(item.driver.matched)}",
            f"    resolved name: {item.driver.label}",
        ]
    lines += ["", f"Vehicle info resolution for first {sample_size} reservations:"]
    for item in sample:
        lines += [
            f"  - Reservation {_show(item.reservation_id)}:",
            f"    vehicle_id: {_show(item.vehicle.raw_value)}",
            f"    vehicle found: {_yes_no(item.vehicle.matched)}",
            f"    resolved info: {item.vehicle.label}",
        ]
    return lines


def _filter_options_section(result: ReconciliationResult) -> list[str]:
    options = result.filter_options
    lines = [f"Unique drivers for filter: {len(options.drivers)}"]
    lines += [f"  - {label}" for label in options.drivers]
    lines += ["", f"Unique vehicles for filter: {len(options.vehicles)}"]
    lines += [f"  - {label}" for label in options.vehicles]
    return lines


def build_sections(
    result: ReconciliationResult,
    *,
    reservation_sample_size: int = 10,
    resolution_sample_size: int = 5,
) -> dict[str, list[str]]:
    return {
        DRIVERS_TITLE: _drivers_section(result),
        VEHICLES_TITLE: _vehicles_section(result),
        RESERVATIONS_TITLE: _reservations_section(result, reservation_sample_size),
        CROSS_REFERENCE_TITLE: _cross_reference_section(result),
        RESOLUTION_TITLE: _resolution_section(result, resolution_sample_size),
        FILTER_OPTIONS_TITLE: _filter_options_section(result),
    }
