"""Índice de pertenencia por clave primaria.

Se construye una vez por colección y solo responde "¿existe algún registro
con este id?". No guarda orden: el orden de los hallazgos lo da el checker.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from core.domain.models import Record


@dataclass(frozen=True)
class MembershipIndex:
    key_field: str = "id"
    keys: frozenset[Any] = field(default_factory=frozenset)

    def contains(self, value: Any) -> bool:
        try:
            return value in self.keys
        except TypeError:
            # Valores no hashables (p.ej. un objeto anidado) nunca son claves.
            return False

    def __contains__(self, value: object) -> bool:
        return self.contains(value)

    def __len__(self) -> int:
        return len(self.keys)


def build_index(collection: Iterable[Record], key_field: str = "id") -> MembershipIndex:
    """Indexa `record[key_field]`; solo quedan fuera los registros sin clave (`None`)."""

    keys: set[Any] = set()
    for record in collection:
        value = record.get(key_field)
        if value is None:
            continue
        try:
            keys.add(value)
        except TypeError:
            continue
    return MembershipIndex(key_field=key_field, keys=frozenset(keys))
