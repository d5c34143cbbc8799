"""Detección de referencias rotas entre colecciones."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from core.domain.models import Finding, Record, is_unset
from core.services.indexer import MembershipIndex


@dataclass(frozen=True)
class ReferenceCheck:
    """Qué campo del registro enlazante se valida y contra qué índice."""

    foreign_key_field: str
    target_index: MembershipIndex
    target_name: str


def find_broken_references(
    linking_collection: Iterable[Record],
    checks: Sequence[ReferenceCheck],
) -> list[Finding]:
    """Devuelve un `Finding` por cada clave foránea presente que no existe.

    Orden: el de `linking_collection` y, dentro de cada registro, el de
    `checks`. Una clave `None` o `""` significa "sin asignar", no referencia rota.
    """

    findings: list[Finding] = []
    for record in linking_collection:
        for check in checks:
            value = record.get(check.foreign_key_field)
            if is_unset(value) or check.target_index.contains(value):
                continue
            findings.append(
                Finding(
                    record_id=record.get("id"),
                    foreign_key_field=check.foreign_key_field,
                    value=value,
                    target_name=check.target_name,
                )
            )
    return findings
