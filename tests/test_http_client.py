from __future__ import annotations

import asyncio

import httpx
import pytest

from adapters.http_client import HttpSectionSource, build_async_client, section_url
from core.config import AppSettings
from core.domain.models import Driver, Record, Section
from core.errors import FetchError, ParseError

from conftest import BASE_URL, json_transport


def _fetch(transport: httpx.MockTransport, section: str, model: type[Record] = Record) -> list[Record]:
    async def go() -> list[Record]:
        async with httpx.AsyncClient(transport=transport) as client:
            return await HttpSectionSource(client, BASE_URL).fetch_collection(section, model)

    return asyncio.run(go())


def _respond(response: httpx.Response) -> httpx.MockTransport:
    return httpx.MockTransport(lambda request: response)


def test_section_url_normalises_trailing_slash() -> None:
    assert section_url("http://localhost:4050/", "drivers") == "http://localhost:4050/api/data/section/drivers"
    assert section_url("http://h", Section.VEHICLES) == "http://h/api/data/section/vehicles"


def test_unknown_section_is_rejected_before_any_request() -> None:
    with pytest.raises(ValueError):
        section_url("http://h", "guides")


def test_fetch_collection_parses_data_into_models() -> None:
    transport = json_transport({"drivers": [{"id": "D1", "name": "Ana", "phone": "555"}]})

    drivers = _fetch(transport, "drivers", Driver)

    assert len(drivers) == 1
    assert isinstance(drivers[0], Driver)
    assert drivers[0].name == "Ana"
    assert drivers[0].get("phone") == "555"


def test_request_goes_to_section_endpoint() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"data": []})

    _fetch(httpx.MockTransport(handler), "reservations")

    assert seen == [f"{BASE_URL}/api/data/section/reservations"]


@pytest.mark.parametrize("payload", [{}, {"data": None}, {"success": True}])
def test_missing_data_means_empty_collection(payload: dict) -> None:
    assert _fetch(_respond(httpx.Response(200, json=payload)), "drivers") == []


def test_order_is_preserved_and_duplicates_kept() -> None:
    transport = json_transport({"vehicles": [{"id": "V2"}, {"id": "V1"}, {"id": "V2"}]})

    assert [v.id for v in _fetch(transport, "vehicles")] == ["V2", "V1", "V2"]


def test_connection_error_raises_fetch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(FetchError) as excinfo:
        _fetch(httpx.MockTransport(handler), "vehicles")

    assert excinfo.value.section == "vehicles"
    assert excinfo.value.status_code is None
    assert "connection refused" in str(excinfo.value)


def test_timeout_raises_fetch_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(FetchError):
        _fetch(httpx.MockTransport(handler), "drivers")


def test_non_2xx_raises_fetch_error_with_status() -> None:
    with pytest.raises(FetchError) as excinfo:
        _fetch(_respond(httpx.Response(500, text="boom")), "drivers")

    assert excinfo.value.status_code == 500
    assert "HTTP 500" in str(excinfo.value)


def test_invalid_json_raises_parse_error() -> None:
    with pytest.raises(ParseError) as excinfo:
        _fetch(_respond(httpx.Response(200, text="<html>not json</html>")), "drivers")

    assert excinfo.value.section == "drivers"


@pytest.mark.parametrize(
    "payload",
    [["D1"], {"data": {"D1": {}}}, {"data": ["D1"]}],
)
def test_unexpected_shapes_raise_parse_error(payload: object) -> None:
    with pytest.raises(ParseError):
        _fetch(_respond(httpx.Response(200, json=payload)), "drivers")


def test_build_async_client_applies_settings() -> None:
    settings = AppSettings(http_timeout_seconds=3.5, user_agent="ua-test")

    client = build_async_client(settings, extra_headers={"X-Trace": "1"})
    try:
        assert client.timeout.read == 3.5
        assert client.headers["User-Agent"] == "ua-test"
        assert client.headers["Accept"] == "application/json"
        assert client.headers["X-Trace"] == "1"
    finally:
        asyncio.run(client.aclose())


def test_nested_value_in_optional_field_is_not_fatal() -> None:
    transport = json_transport({"drivers": [{"id": "D1", "name": {"es": "Ana"}, "fullName": "Ana López"}]})

    drivers = _fetch(transport, "drivers", Driver)

    assert drivers[0].name is None
    assert drivers[0].fullName == "Ana López"
