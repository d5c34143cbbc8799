from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

from core.domain.models import Record, Section

BASE_URL = "http://api.test"


class InMemorySource:
    """`DataSource` sobre payloads ya parseados; registra el orden de las llamadas."""

    def __init__(self, sections: dict[str, list[dict[str, Any]]]) -> None:
        self._sections = sections
        self.calls: list[str] = []

    async def fetch_collection(self, section: Section | str, model: type[Record] = Record) -> list[Record]:
        name = Section(section).value
        self.calls.append(name)
        return [model.model_validate(item) for item in self._sections.get(name, [])]


def json_transport(
    sections: dict[str, Any],
    *,
    fail: dict[str, Callable[[httpx.Request], httpx.Response]] | None = None,
) -> httpx.MockTransport:
    """Responde `{"data": ...}` por sección; `fail` permite sobreescribir una."""

    fail = fail or {}

    def handler(request: httpx.Request) -> httpx.Response:
        name = request.url.path.rsplit("/", 1)[-1]
        if name in fail:
            return fail[name](request)
        if name not in sections:
            return httpx.Response(404, json={"success": False, "error": f"Sección '{name}' no encontrada"})
        return httpx.Response(200, json={"success": True, "data": sections[name]})

    return httpx.MockTransport(handler)


@pytest.fixture
def happy_sections() -> dict[str, list[dict[str, Any]]]:
    return {
        "drivers": [{"id": "D1", "name": "Ana"}],
        "vehicles": [{"id": "V1", "brand": "Toyota", "model": "Hiace", "plate": "ABC-123"}],
        "reservations": [{"id": "R1", "driver_id": "D1", "vehicle_id": "V1"}],
    }
