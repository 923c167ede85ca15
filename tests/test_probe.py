# File: tests/test_probe.py
from __future__ import annotations

import asyncio
import socket
from unittest.mock import MagicMock

import aiohttp
import pytest
from aiohttp import web

from link_scout.crawler.models import (
    Reachable,
    TransportConnectFailed,
    TransportInvalidBody,
    TransportRedirectLoop,
    TransportTimeout,
    TransportUnresolvedHost,
    Unreachable,
)
from link_scout.crawler.probe import HttpProbe, classify_failure
from link_scout.crawler.urls import AbsoluteUrl
from link_scout.errors import FatalTransportError

URL = AbsoluteUrl.parse("http://example.com/page")

#: seconds the slow handler sleeps; the probe timeout is well below it
SLOW_SLEEP: float = 1.0


# --------------------------------------------------------------------------- #
#                               Test server                                   #
# --------------------------------------------------------------------------- #


def make_app(hits: dict[str, int]) -> web.Application:
    app = web.Application()

    def count(name: str) -> None:
        hits[name] = hits.get(name, 0) + 1

    async def ok(request):
        count(f"{request.method} {request.path}")
        return web.Response(text="<h1>ok</h1>", content_type="text/html")

    async def method_not_allowed(request):
        count(f"{request.method} {request.path}")
        return web.Response(status=405)

    async def server_error(request):
        count(f"{request.method} {request.path}")
        return web.Response(status=500)

    async def redirect(_):
        raise web.HTTPFound("/ok")

    async def loop(_):
        raise web.HTTPFound("/loop")

    async def slow(_):
        await asyncio.sleep(SLOW_SLEEP)
        return web.Response(text="late")

    async def echo_agent(request):
        count(request.headers.get("User-Agent", ""))
        return web.Response(text="ok")

    app.router.add_get("/ok", ok)
    app.router.add_route("HEAD", "/nohead", method_not_allowed)
    app.router.add_get("/nohead", ok, allow_head=False)
    app.router.add_route("HEAD", "/never", method_not_allowed)
    app.router.add_get("/never", method_not_allowed, allow_head=False)
    app.router.add_get("/broken", server_error)
    app.router.add_get("/redirect", redirect)
    app.router.add_get("/loop", loop)
    app.router.add_get("/slow", slow)
    app.router.add_get("/agent", echo_agent)
    return app


async def run_probe(base: str, path: str, timeout: float = 2.0, user_agent: str = "TestAgent/1.0"):
    async with aiohttp.ClientSession() as session:
        probe = HttpProbe(session, user_agent, timeout)
        return await probe.probe(AbsoluteUrl.parse(base + path))


# --------------------------------------------------------------------------- #
#                                 Tests                                       #
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio()
async def test_head_success_needs_no_get(serve):
    hits: dict[str, int] = {}
    base = await serve(make_app(hits))
    outcome = await run_probe(base, "/ok")
    assert isinstance(outcome, Reachable)
    assert outcome.status == 200
    assert hits == {"HEAD /ok": 1}


@pytest.mark.asyncio()
async def test_method_not_allowed_falls_back_to_one_get(serve):
    hits: dict[str, int] = {}
    base = await serve(make_app(hits))
    outcome = await run_probe(base, "/nohead")
    assert outcome == Reachable(outcome.url, 200)
    assert hits == {"HEAD /nohead": 1, "GET /nohead": 1}


@pytest.mark.asyncio()
async def test_second_method_not_allowed_is_unreachable(serve):
    hits: dict[str, int] = {}
    base = await serve(make_app(hits))
    outcome = await run_probe(base, "/never")
    assert isinstance(outcome, Unreachable)
    assert outcome.status == 405
    assert not outcome.ok
    assert hits == {"HEAD /never": 1, "GET /never": 1}


@pytest.mark.asyncio()
async def test_failing_status_is_confirmed_once_with_get(serve):
    hits: dict[str, int] = {}
    base = await serve(make_app(hits))
    outcome = await run_probe(base, "/broken")
    assert outcome == Unreachable(outcome.url, 500)
    assert hits == {"HEAD /broken": 1, "GET /broken": 1}


@pytest.mark.asyncio()
async def test_missing_page(serve):
    base = await serve(make_app({}))
    outcome = await run_probe(base, "/missing")
    assert isinstance(outcome, Unreachable)
    assert outcome.status == 404
    assert outcome.reason == "Not Found"


@pytest.mark.asyncio()
async def test_redirect_is_followed(serve):
    hits: dict[str, int] = {}
    base = await serve(make_app(hits))
    outcome = await run_probe(base, "/redirect")
    assert isinstance(outcome, Reachable)
    assert hits["HEAD /ok"] == 1


@pytest.mark.asyncio()
async def test_redirect_loop(serve):
    base = await serve(make_app({}))
    outcome = await run_probe(base, "/loop")
    assert isinstance(outcome, TransportRedirectLoop)
    assert outcome.status == 421


@pytest.mark.asyncio()
async def test_timeout(serve):
    base = await serve(make_app({}))
    outcome = await run_probe(base, "/slow", timeout=0.2)
    assert isinstance(outcome, TransportTimeout)
    assert outcome.status == 408


@pytest.mark.asyncio()
async def test_connection_refused(unused_tcp_port_factory):
    port = unused_tcp_port_factory()
    outcome = await run_probe(f"http://127.0.0.1:{port}", "/")
    assert isinstance(outcome, TransportConnectFailed)
    assert outcome.status == 404


@pytest.mark.asyncio()
async def test_user_agent_is_sent(serve):
    hits: dict[str, int] = {}
    base = await serve(make_app(hits))
    await run_probe(base, "/agent", user_agent="Custom/2.0")
    assert hits == {"Custom/2.0": 1}


def test_classify_timeout():
    assert isinstance(classify_failure(URL, asyncio.TimeoutError()), TransportTimeout)
    assert isinstance(classify_failure(URL, aiohttp.ServerTimeoutError("read")), TransportTimeout)


def test_classify_dns_failure():
    exc = aiohttp.ClientConnectorError(MagicMock(), socket.gaierror(-2, "Name or service not known"))
    outcome = classify_failure(URL, exc)
    assert isinstance(outcome, TransportUnresolvedHost)
    assert outcome.status == 404


def test_classify_connection_failures():
    refused = aiohttp.ClientConnectorError(MagicMock(), ConnectionRefusedError(111, "refused"))
    assert isinstance(classify_failure(URL, refused), TransportConnectFailed)
    assert isinstance(classify_failure(URL, aiohttp.ServerDisconnectedError()), TransportConnectFailed)


def test_classify_redirects_and_body():
    redirects = aiohttp.TooManyRedirects(MagicMock(), ())
    assert isinstance(classify_failure(URL, redirects), TransportRedirectLoop)
    payload = aiohttp.ClientPayloadError("Response payload is not completed")
    outcome = classify_failure(URL, payload)
    assert isinstance(outcome, TransportInvalidBody)
    assert "ClientPayloadError" in outcome.reason


def test_classify_unknown_failure_is_fatal():
    with pytest.raises(FatalTransportError) as excinfo:
        classify_failure(URL, aiohttp.InvalidURL("http://exa mple.com"))
    assert excinfo.value.url == str(URL)
