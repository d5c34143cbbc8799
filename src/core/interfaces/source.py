"""Contrato de las fuentes de datos del back-office.

Por qué Protocol:
- El pipeline solo necesita "dame la sección X como lista de registros".
- Permite sustituir la API HTTP por datos en memoria en los tests.
"""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

from core.domain.models import Record, Section

RecordT = TypeVar("RecordT", bound=Record)


@runtime_checkable
class DataSource(Protocol):
    """Contrato mínimo para obtener una colección.

    Reglas de diseño:
    - `fetch_collection` es asíncrono porque típicamente hará I/O (HTTP).
    - Un único intento por sección; los fallos se propagan como `ReconError`.
    """

    async def fetch_collection(self, section: Section | str, model: type[RecordT]) -> list[RecordT]:
        """Devuelve los registros de `section` en el orden de la respuesta."""

        ...
