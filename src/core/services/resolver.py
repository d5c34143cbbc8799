"""Resolución de claves foráneas a etiquetas legibles.

Replica cómo el panel de administración muestra conductor y vehículo de una
reserva. Cada etiqueta se obtiene con una `LabelStrategy`: una lista ordenada
de accesores que se prueban en secuencia hasta que uno devuelve texto.

Las estrategias de conductor y vehículo no son simétricas y se mantienen así:
- conductor: el `driver_name` de la reserva manda sobre la ficha del conductor;
- vehículo: la ficha del vehículo manda sobre el `vehicle` de la reserva.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable

from core.config import DEFAULT_UNASSIGNED_LABEL
from core.domain.models import Record, ResolutionResult, is_blank, is_unset

Accessor = Callable[[Record | None, Record], "str | None"]


def _text(value: Any) -> str | None:
    if isinstance(value, bool) or is_blank(value):
        return None
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


def _field(record: Record | dict[str, Any] | None, name: str) -> str | None:
    if record is None:
        return None
    return _text(record.get(name))


def person_full_name(person: Record | None) -> str | None:
    """`first_name last_name` solo si ambos existen."""

    first = _field(person, "first_name")
    last = _field(person, "last_name")
    if first and last:
        return f"{first} {last}"
    return None


def vehicle_description(vehicle: Record | dict[str, Any] | None) -> str | None:
    """`brand model (plate)` con las partes disponibles, `None` si no hay ninguna."""

    brand = _field(vehicle, "brand")
    model = _field(vehicle, "model")
    plate = _field(vehicle, "plate")
    text = " ".join(part for part in (brand, model) if part)
    if plate:
        text = f"{text} ({plate})" if text else f"({plate})"
    return text or None


def target_field(name: str) -> Accessor:
    """Accesor que lee `name` del registro encontrado."""

    def accessor(target: Record | None, linking: Record) -> str | None:
        return _field(target, name)

    accessor.__name__ = f"target.{name}"
    return accessor


def linking_field(name: str) -> Accessor:
    """Accesor que lee `name` del registro que contiene la clave foránea."""

    def accessor(target: Record | None, linking: Record) -> str | None:
        return _field(linking, name)

    accessor.__name__ = f"linking.{name}"
    return accessor


def _target_full_name(target: Record | None, linking: Record) -> str | None:
    return person_full_name(target)


def _target_vehicle(target: Record | None, linking: Record) -> str | None:
    return vehicle_description(target)


def _linking_vehicle(target: Record | None, linking: Record) -> str | None:
    value = linking.get("vehicle")
    if isinstance(value, dict):
        return vehicle_description(value)
    return _text(value)


@dataclass(frozen=True)
class LabelStrategy:
    """Cadena de prioridad para derivar una etiqueta."""

    name: str
    accessors: tuple[Accessor, ...]
    default: str = DEFAULT_UNASSIGNED_LABEL

    def label_for(self, target: Record | None, linking: Record) -> str:
        for accessor in self.accessors:
            value = accessor(target, linking)
            if value:
                return value
        return self.default

    def with_default(self, default: str) -> "LabelStrategy":
        return replace(self, default=default)


DRIVER_LABEL = LabelStrategy(
    name="driver",
    accessors=(
        linking_field("driver_name"),
        target_field("name"),
        target_field("fullName"),
        _target_full_name,
    ),
)

VEHICLE_LABEL = LabelStrategy(
    name="vehicle",
    accessors=(
        _target_vehicle,
        _linking_vehicle,
    ),
)

DRIVER_ROSTER_LABEL = LabelStrategy(
    name="driver-roster",
    accessors=(
        target_field("name"),
        target_field("fullName"),
        _target_full_name,
    ),
    default="N/A",
)


def resolve(
    record: Record,
    foreign_key_field: str,
    target_collection: Iterable[Record],
    label_strategy: LabelStrategy,
) -> ResolutionResult:
    """Resuelve `record[foreign_key_field]` contra `target_collection`.

    Sin clave no se recorre la colección. Con clave, gana el primer registro
    cuyo `id` coincide. Una referencia sin resolver no es un error.
    """

    value = record.get(foreign_key_field)
    match: Record | None = None
    if not is_unset(value):
        match = next((item for item in target_collection if item.get("id") == value), None)

    return ResolutionResult(
        matched=match is not None,
        label=label_strategy.label_for(match, record),
        default_label=label_strategy.default,
        raw_value=value,
        record=match,
    )
