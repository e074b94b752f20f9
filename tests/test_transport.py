from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import aiohttp
import pytest
from aiohttp import test_utils, web

from pyswapi._transport import AiohttpTransport
from pyswapi.config import PyswapiConfig
from pyswapi.exceptions import SwapiTransportError


def _app() -> web.Application:
    async def person(_request: web.Request) -> web.Response:
        return web.json_response({"name": "Luke Skywalker", "films": []})

    async def missing(_request: web.Request) -> web.Response:
        return web.json_response({"detail": "Not found"}, status=404)

    async def broken(_request: web.Request) -> web.Response:
        return web.Response(status=500, text="<html>upstream exploded</html>")

    async def not_json(_request: web.Request) -> web.Response:
        return web.Response(text="definitely not json")

    async def json_list(_request: web.Request) -> web.Response:
        return web.json_response([1, 2, 3])

    async def echo_headers(request: web.Request) -> web.Response:
        return web.json_response({"user_agent": request.headers.get("User-Agent")})

    app = web.Application()
    app.router.add_get("/api/people/1/", person)
    app.router.add_get("/api/people/unknown/", missing)
    app.router.add_get("/api/broken/", broken)
    app.router.add_get("/api/not-json/", not_json)
    app.router.add_get("/api/list/", json_list)
    app.router.add_get("/api/headers/", echo_headers)
    return app


def _plain_config(**overrides: Any) -> PyswapiConfig:
    return PyswapiConfig(force_https=False, request_timeout=5.0, **overrides)


@pytest.mark.asyncio
async def test_get_json_returns_decoded_object() -> None:
    async with test_utils.TestServer(_app()) as server, aiohttp.ClientSession() as session:
        transport = AiohttpTransport(_plain_config(), session)
        data = await transport.get_json(str(server.make_url("/api/people/1/")))

    assert data == {"name": "Luke Skywalker", "films": []}


@pytest.mark.asyncio
async def test_get_json_sends_configured_user_agent() -> None:
    async with test_utils.TestServer(_app()) as server, aiohttp.ClientSession() as session:
        transport = AiohttpTransport(_plain_config(user_agent="pyswapi-tests"), session)
        data = await transport.get_json(str(server.make_url("/api/headers/")))

    assert data == {"user_agent": "pyswapi-tests"}


@pytest.mark.asyncio
async def test_error_uses_detail_message() -> None:
    async with test_utils.TestServer(_app()) as server, aiohttp.ClientSession() as session:
        transport = AiohttpTransport(_plain_config(), session)
        with pytest.raises(SwapiTransportError) as excinfo:
            await transport.get_json(str(server.make_url("/api/people/unknown/")))

    assert str(excinfo.value) == "Not found"
    assert excinfo.value.status_code == 404


@pytest.mark.asyncio
async def test_error_without_detail_falls_back_to_status() -> None:
    async with test_utils.TestServer(_app()) as server, aiohttp.ClientSession() as session:
        transport = AiohttpTransport(_plain_config(), session)
        with pytest.raises(SwapiTransportError, match="HTTP 500") as excinfo:
            await transport.get_json(str(server.make_url("/api/broken/")))

    assert excinfo.value.status_code == 500


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/api/not-json/", "/api/list/"])
async def test_non_object_bodies_are_rejected(path: str) -> None:
    async with test_utils.TestServer(_app()) as server, aiohttp.ClientSession() as session:
        transport = AiohttpTransport(_plain_config(), session)
        with pytest.raises(SwapiTransportError, match="from http"):
            await transport.get_json(str(server.make_url(path)))


@pytest.mark.asyncio
async def test_connection_failure_is_wrapped() -> None:
    server = test_utils.TestServer(_app())
    await server.start_server()
    url = str(server.make_url("/api/people/1/"))
    await server.close()

    async with aiohttp.ClientSession() as session:
        transport = AiohttpTransport(_plain_config(), session)
        with pytest.raises(SwapiTransportError, match="failed") as excinfo:
            await transport.get_json(url)

    assert isinstance(excinfo.value.__cause__, aiohttp.ClientError)


@dataclass
class _RecordingResponse:
    status: int = 200
    body: str = "{}"

    async def text(self) -> str:
        return self.body

    async def __aenter__(self) -> _RecordingResponse:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None


@dataclass
class _RecordingSession:
    requested: list[str] = field(default_factory=list)

    def get(self, url: str, **_kwargs: Any) -> _RecordingResponse:
        self.requested.append(url)
        return _RecordingResponse()


@pytest.mark.asyncio
async def test_outgoing_urls_are_rewritten_to_https() -> None:
    session = _RecordingSession()
    transport = AiohttpTransport(PyswapiConfig(), session)  # type: ignore[arg-type]

    await transport.get_json("http://swapi.dev/api/people/1/")
    await transport.get_json("https://swapi.dev/api/films/1/")

    assert session.requested == [
        "https://swapi.dev/api/people/1/",
        "https://swapi.dev/api/films/1/",
    ]
