# === FILE: link_scout/checker.py ===
from __future__ import annotations

import asyncio
import logging
from typing import Optional, Tuple

from aiohttp import ClientError, ClientSession, ClientTimeout, TCPConnector

from link_scout.config import LinkConfig
from link_scout.crawler.grouping import collect_links, group_by_host
from link_scout.crawler.link_extractor import HtmlDocument, extract_links
from link_scout.crawler.models import CrawlResult, LinkSet, LinkStats, PageData, is_valid_status
from link_scout.crawler.probe import HttpProbe
from link_scout.crawler.scheduler import OutcomeCallback, ProgressSink, crawl
from link_scout.crawler.urls import AbsoluteUrl, normalize_seed
from link_scout.errors import SeedUnreachable

__all__ = ("LinkChecker",)


class LinkChecker:
    """Fetches one seed page and checks every link found on it.

    Owns the HTTP session shared by all probes; use as ``async with``.
    """

    def __init__(self, config: LinkConfig) -> None:
        self.config = config
        self.seed: AbsoluteUrl = normalize_seed(config.url)
        self.session: Optional[ClientSession] = None
        self.logger = logging.getLogger("LinkScout")

    async def __aenter__(self) -> LinkChecker:
        connector = None if self.config.verify_tls else TCPConnector(ssl=False)
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.config.timeout),
            headers={"User-Agent": self.config.user_agent},
            connector=connector,
            raise_for_status=False,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    def _require_session(self) -> ClientSession:
        if not self.session:
            raise RuntimeError("Session not initialized")
        return self.session

    async def fetch_seed(self) -> PageData:
        """GET the seed page; anything but 2xx/3xx is :class:`SeedUnreachable`."""
        session = self._require_session()
        self.logger.info("Fetching seed page: %s", self.seed)
        try:
            async with session.get(str(self.seed)) as resp:
                if not is_valid_status(resp.status):
                    raise SeedUnreachable(str(self.seed), resp.status)
                text = await resp.text(errors="replace")
                final_url = AbsoluteUrl.parse(str(resp.url))
                return PageData(final_url, text, resp.status)
        except asyncio.TimeoutError as exc:
            raise SeedUnreachable(str(self.seed), reason="timed out") from exc
        except ClientError as exc:
            raise SeedUnreachable(str(self.seed), reason=f"{type(exc).__name__}: {exc}") from exc

    async def discover(self) -> Tuple[LinkSet, LinkStats]:
        """Fetch the seed page and return its resolved, filtered, unique links."""
        page = await self.fetch_seed()
        document = HtmlDocument.from_page(page)
        return collect_links(
            extract_links(document),
            page.url,
            truncate_fragments=self.config.truncate_fragments,
            ignore=self.config.ignore_regex,
        )

    async def check(
        self,
        concurrency: int,
        *,
        progress: Optional[ProgressSink] = None,
        on_outcome: Optional[OutcomeCallback] = None,
    ) -> CrawlResult:
        links, stats = await self.discover()
        return await self.probe_links(
            links, stats, concurrency, progress=progress, on_outcome=on_outcome
        )

    async def probe_links(
        self,
        links: LinkSet,
        stats: LinkStats,
        concurrency: int,
        *,
        progress: Optional[ProgressSink] = None,
        on_outcome: Optional[OutcomeCallback] = None,
    ) -> CrawlResult:
        probe = HttpProbe(self._require_session(), self.config.user_agent, self.config.timeout)
        return await crawl(
            group_by_host(links),
            concurrency,
            probe,
            progress=progress,
            on_outcome=on_outcome,
            total_links=stats.parsed,
            stats=stats,
        )
