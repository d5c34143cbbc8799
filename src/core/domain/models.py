"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Los registros de la API no tienen esquema fijo: todos los campos conocidos
  son opcionales y los desconocidos se conservan (`extra="allow"`).
- Los resultados (hallazgos, resoluciones, agregado final) se serializan a
  JSON sin código adicional.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, SerializeAsAny, field_validator
from pydantic.config import ConfigDict


class Section(str, Enum):
    """Secciones conocidas de `/api/data/section/{name}`."""

    DRIVERS = "drivers"
    VEHICLES = "vehicles"
    RESERVATIONS = "reservations"


def is_blank(value: Any) -> bool:
    """`None`, ausente o texto vacío cuentan igual: no hay valor."""

    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def is_unset(value: Any) -> bool:
    """Clave foránea sin asignar: `None`, ausente o `""`.

    A diferencia de `is_blank`, un texto con espacios sí es una clave.
    """

    return value is None or value == ""


def _text_or_none(value: Any) -> Any:
    # Un campo de texto con un tipo inesperado (objeto, lista) se trata como ausente.
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (str, int, float)):
        return value
    return None


class Record(BaseModel):
    """Un ítem devuelto por la API.

    `get()` permite leer tanto los campos declarados como los extra, y
    devuelve `None` si el campo no existe.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id: Any = Field(default=None, description="Clave primaria del ítem.")

    def get(self, field: str) -> Any:
        if field in type(self).model_fields:
            return getattr(self, field)
        return (self.model_extra or {}).get(field)


class Driver(Record):
    name: str | None = None
    fullName: str | None = None
    first_name: str | None = None
    last_name: str | None = None

    tolerant_text = field_validator("name", "fullName", "first_name", "last_name", mode="before")(_text_or_none)


class Vehicle(Record):
    brand: str | None = None
    model: str | None = None
    plate: str | None = None

    tolerant_text = field_validator("brand", "model", "plate", mode="before")(_text_or_none)


class Reservation(Record):
    driver_id: Any = None
    vehicle_id: Any = None
    driver_name: str | None = None
    vehicle: str | dict[str, Any] | None = Field(
        default=None,
        description="Texto libre del vehículo o un objeto con brand/model/plate.",
    )

    tolerant_text = field_validator("driver_name", mode="before")(_text_or_none)

    @field_validator("vehicle", mode="before")
    @classmethod
    def _tolerant_vehicle(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return value
        return _text_or_none(value)


class ResolutionResult(BaseModel):
    """Resultado de resolver una clave foránea contra una colección."""

    matched: bool = Field(..., description="Se encontró un registro con ese id.")
    label: str = Field(..., description="Etiqueta para mostrar (puede ser el centinela).")
    default_label: str = Field(..., description="Centinela configurado en la estrategia.")
    raw_value: Any = Field(default=None, description="Valor crudo de la clave foránea.")
    record: SerializeAsAny[Record] | None = Field(default=None, description="Registro encontrado, si lo hay.")


class Finding(BaseModel):
    """Una referencia rota: la clave existe pero no apunta a ningún registro."""

    record_id: Any = Field(default=None, description="Id del registro que referencia.")
    foreign_key_field: str = Field(..., min_length=1)
    value: Any = Field(..., description="Valor de la clave que no se encontró.")
    target_name: str = Field(..., min_length=1, description="Colección contra la que falló.")


class ResolvedReservation(BaseModel):
    """Simulación de cómo el panel mostraría conductor y vehículo de una reserva."""

    reservation_id: Any = None
    driver: ResolutionResult
    vehicle: ResolutionResult


class FilterOptions(BaseModel):
    """Valores únicos que ofrecería el filtro del historial."""

    drivers: list[str] = Field(default_factory=list)
    vehicles: list[str] = Field(default_factory=list)


class ReconciliationResult(BaseModel):
    """Agregado de una ejecución completa (datos + hallazgos + simulaciones)."""

    base_url: str
    drivers: list[Driver] = Field(default_factory=list)
    vehicles: list[Vehicle] = Field(default_factory=list)
    reservations: list[Reservation] = Field(default_factory=list)
    findings: list[Finding] = Field(default_factory=list)
    resolutions: list[ResolvedReservation] = Field(default_factory=list)
    filter_options: FilterOptions = Field(default_factory=FilterOptions)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def findings_for(self, target_name: str) -> list[Finding]:
        return [f for f in self.findings if f.target_name == target_name]
