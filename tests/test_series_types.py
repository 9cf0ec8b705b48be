"""Series-type lookup: client decoding, fallback list and the HTTP route."""

import base64

import httpx
import pytest

from brainqr.clients import SeriesTypeClient
from brainqr.main import app
from brainqr.routes.series_types import get_series_type_service
from brainqr.services.series_types import (
    FALLBACK_NOTICE,
    FALLBACK_SERIES_TYPES,
    SeriesTypeService,
)

REMOTE = [
    {"id": 11, "name": "T1 Weighted", "mnemonic": "T1", "description": "anatomical"},
    {"id": 12, "name": "Proton Density", "mnemonic": "PD"},
]


def _client(handler) -> SeriesTypeClient:
    return SeriesTypeClient(
        url="http://master.test/Seriestype/?format=json",
        username="admin",
        password="secret",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


@pytest.mark.asyncio
async def test_client_decodes_and_sends_basic_auth():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("authorization")
        return httpx.Response(200, json=REMOTE)

    series = await _client(handler).list_series_types()

    assert [s.mnemonic for s in series] == ["T1", "PD"]
    assert series[0].description == "anatomical"
    assert series[1].description is None
    assert seen["auth"] == "Basic " + base64.b64encode(b"admin:secret").decode()


@pytest.mark.asyncio
async def test_service_returns_remote_list():
    lookup = await SeriesTypeService(_client(lambda r: httpx.Response(200, json=REMOTE))).load()
    assert not lookup.fallback
    assert lookup.notice is None
    assert len(lookup.series_types) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="boom"),
        httpx.Response(200, text="<html>not json</html>"),
        httpx.Response(200, json={"results": []}),
        httpx.Response(200, json=[{"id": 1}]),
    ],
)
async def test_service_falls_back(response):
    lookup = await SeriesTypeService(_client(lambda r: response)).load()

    assert lookup.fallback
    assert lookup.notice == FALLBACK_NOTICE
    assert [s.mnemonic for s in lookup.series_types] == [
        "T1", "T2", "FLAIR", "DWI", "SWI", "DTI",
    ]


@pytest.mark.asyncio
async def test_service_falls_back_on_connection_error():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    lookup = await SeriesTypeService(_client(handler)).load()
    assert lookup.fallback
    assert len(lookup.series_types) == len(FALLBACK_SERIES_TYPES)


def test_route_reports_fallback(client):
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    app.dependency_overrides[get_series_type_service] = lambda: SeriesTypeService(
        _client(handler)
    )
    try:
        resp = client.get("/api/series-types")
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 200
    data = resp.json()
    assert data["fallback"] is True
    assert data["notice"] == FALLBACK_NOTICE
    assert data["seriesTypes"][0] == {"id": 1, "name": "T1 Weighted", "mnemonic": "T1"}


def test_route_returns_remote(client):
    app.dependency_overrides[get_series_type_service] = lambda: SeriesTypeService(
        _client(lambda r: httpx.Response(200, json=REMOTE))
    )
    try:
        data = client.get("/api/series-types").json()
    finally:
        app.dependency_overrides.clear()

    assert data["fallback"] is False
    assert data["seriesTypes"][1] == {"id": 12, "name": "Proton Density", "mnemonic": "PD"}
