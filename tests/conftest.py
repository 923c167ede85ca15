# File: tests/conftest.py
from collections.abc import AsyncIterator, Awaitable, Callable

import pytest
import pytest_asyncio
from aiohttp import web

from link_scout.config import CheckConfig
from link_scout.crawler.urls import AbsoluteUrl

ServeT = Callable[[web.Application], Awaitable[str]]


@pytest.fixture()
def base_url() -> AbsoluteUrl:
    """Base used by the resolution examples."""
    return AbsoluteUrl.parse("https://test.com/")


@pytest.fixture()
def basic_config() -> CheckConfig:
    """
    Return a basic valid CheckConfig.
    """
    return CheckConfig(
        url="http://example.com",
        timeout=2.0,
        user_agent="TestAgent/1.0",
        concurrency=2,
    )


@pytest.fixture()
def sample_html() -> str:
    return (
        "<html><body>"
        '<a href="https://a.com/1">one</a>'
        '<img src="/logo.png">'
        "<a>no href</a>"
        '<a href="/2#top">two</a>'
        "<img alt='no src'>"
        '<link href="/style.css" rel="stylesheet">'
        "</body></html>"
    )


@pytest_asyncio.fixture
async def serve(unused_tcp_port: int) -> AsyncIterator[ServeT]:
    """Start an aiohttp app on ``localhost:<unused port>``; cleaned up after the test."""
    runners: list[web.AppRunner] = []

    async def _start(app: web.Application) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "localhost", unused_tcp_port)
        await site.start()
        runners.append(runner)
        return f"http://localhost:{unused_tcp_port}"

    try:
        yield _start
    finally:
        for runner in runners:
            await runner.cleanup()
