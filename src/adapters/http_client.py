"""Wrapper de httpx para la API del back-office.

Por qué un wrapper:
- Estandariza timeouts y headers de todas las peticiones.
- Traduce errores de transporte/JSON a `FetchError`/`ParseError` para que
  el Core no conozca httpx.
- Facilita testeo: el `AsyncClient` se inyecta (p.ej. con `MockTransport`).
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import ValidationError

from core.config import AppSettings
from core.domain.models import Record, Section
from core.errors import FetchError, ParseError

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=Record)

SECTION_PATH = "/api/data/section/{section}"


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con los defaults de la herramienta."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
    )


def section_url(base_url: str, section: Section | str) -> str:
    """URL de una sección conocida; cualquier otro nombre es un error de uso."""

    name = Section(section).value
    return base_url.rstrip("/") + SECTION_PATH.format(section=name)


def _records_from_payload(payload: Any, section: str, url: str) -> list[dict[str, Any]]:
    if not isinstance(payload, dict):
        raise ParseError(section, url, f"expected a JSON object, got {type(payload).__name__}")

    data = payload.get("data")
    if data is None:
        return []
    if not isinstance(data, list):
        raise ParseError(section, url, f"'data' must be a list, got {type(data).__name__}")

    for position, item in enumerate(data):
        if not isinstance(item, dict):
            raise ParseError(section, url, f"item #{position} is not an object")
    return data


class HttpSectionSource:
    """`DataSource` sobre `GET {base_url}/api/data/section/{name}`.

    Un único intento por sección: sin caché ni reintentos.
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str) -> None:
        self._client = client
        self._base_url = base_url

    @property
    def base_url(self) -> str:
        return self._base_url

    async def fetch_json(self, section: Section | str) -> Any:
        url = section_url(self._base_url, section)
        name = Section(section).value
        logger.debug("GET %s", url)

        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            raise FetchError(name, url, str(exc) or exc.__class__.__name__) from exc

        if not response.is_success:
            raise FetchError(name, url, response.reason_phrase or "error", status_code=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise ParseError(name, url, f"body is not valid JSON: {exc}") from exc

    async def fetch_collection(self, section: Section | str, model: type[RecordT] = Record) -> list[RecordT]:
        url = section_url(self._base_url, section)
        name = Section(section).value
        items = _records_from_payload(await self.fetch_json(section), name, url)

        try:
            records = [model.model_validate(item) for item in items]
        except ValidationError as exc:
            raise ParseError(name, url, f"unexpected record shape: {exc.error_count()} error(s)") from exc

        logger.info("Sección %s: %d registros", name, len(records))
        return records
