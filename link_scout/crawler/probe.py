# link_scout/crawler/probe.py
"""
Probe module: checks a single URL with HEAD, falling back to GET, and maps
transport failures onto synthetic outcomes.
"""
from __future__ import annotations

import asyncio
import logging
import socket
from typing import Protocol

from aiohttp import (
    ClientConnectionError,
    ClientConnectorError,
    ClientError,
    ClientPayloadError,
    ClientSession,
    ClientTimeout,
    TooManyRedirects,
    hdrs,
)

from link_scout.crawler.models import (
    ProbeOutcome,
    Reachable,
    TransportConnectFailed,
    TransportFailure,
    TransportInvalidBody,
    TransportRedirectLoop,
    TransportTimeout,
    TransportUnresolvedHost,
    Unreachable,
    is_valid_status,
)
from link_scout.crawler.urls import AbsoluteUrl
from link_scout.errors import FatalTransportError

logger = logging.getLogger("LinkScout")


class Probe(Protocol):
    async def probe(self, url: AbsoluteUrl) -> ProbeOutcome: ...


def classify_failure(url: AbsoluteUrl, exc: BaseException) -> TransportFailure:
    """
    Map a transport exception to its synthetic outcome.

    Raises FatalTransportError for anything outside the known set.
    """
    detail = f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__
    # ServerTimeoutError is also a ClientConnectionError, so timeouts go first
    if isinstance(exc, asyncio.TimeoutError):
        return TransportTimeout(url, detail)
    if isinstance(exc, TooManyRedirects):
        return TransportRedirectLoop(url, detail)
    if isinstance(exc, ClientPayloadError):
        return TransportInvalidBody(url, detail)
    if isinstance(exc, ClientConnectorError) and isinstance(exc.os_error, socket.gaierror):
        return TransportUnresolvedHost(url, detail)
    if isinstance(exc, ClientConnectionError):
        return TransportConnectFailed(url, detail)
    raise FatalTransportError(str(url), exc) from exc


class HttpProbe:
    """Checks URLs through a shared session; one HEAD, at most one GET."""

    def __init__(self, session: ClientSession, user_agent: str, timeout: float) -> None:
        self.session = session
        self.user_agent = user_agent
        self.timeout = ClientTimeout(total=timeout)

    async def _request(self, method: str, url: AbsoluteUrl) -> int:
        headers = {hdrs.USER_AGENT: self.user_agent}
        async with self.session.request(
            method, str(url), headers=headers, timeout=self.timeout, allow_redirects=True
        ) as resp:
            if method == hdrs.METH_GET:
                await resp.read()
            return resp.status

    async def probe(self, url: AbsoluteUrl) -> ProbeOutcome:
        try:
            status = await self._request(hdrs.METH_HEAD, url)
            if is_valid_status(status):
                return Reachable(url, status)
            logger.debug("HEAD %s -> %s, confirming with GET", url, status)
            status = await self._request(hdrs.METH_GET, url)
        except (asyncio.TimeoutError, ClientError) as exc:
            # a transport failure on HEAD is final; only a bad status earns the GET
            outcome = classify_failure(url, exc)
            logger.debug("%s -> %s (%s)", url, outcome.kind, outcome.detail)
            return outcome

        if is_valid_status(status):
            return Reachable(url, status)
        return Unreachable(url, status)


__all__ = ["Probe", "HttpProbe", "classify_failure"]
