# link_scout/crawler/scheduler.py
"""
Concurrency scheduler: probes every host group with its own bounded pool of
workers, and runs all hosts side by side.

Within one host at most ``concurrency`` probes are in flight; there is no cap
across hosts, so the total is roughly ``concurrency * len(groups)``.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, List, Optional, Protocol

from link_scout.crawler.models import CrawlResult, HostGroups, LinkSet, LinkStats, ProbeOutcome
from link_scout.crawler.probe import Probe
from link_scout.crawler.urls import AbsoluteUrl

logger = logging.getLogger("LinkScout")

OutcomeCallback = Callable[[AbsoluteUrl, ProbeOutcome], None]


class ProgressSink(Protocol):
    def update(self, n: int = 1) -> object: ...


class ProgressCounter:
    """Minimal progress sink; a ``tqdm`` bar has the same ``update`` method."""

    def __init__(self) -> None:
        self.count = 0

    def update(self, n: int = 1) -> None:
        # only ever called from the event loop thread
        self.count += n


async def _gather_or_cancel(tasks: List[asyncio.Task]) -> None:
    """Await *tasks*; on the first error cancel the rest and re-raise it."""
    try:
        await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class _Crawl:
    def __init__(
        self,
        probe: Probe,
        concurrency: int,
        progress: ProgressSink,
        on_outcome: Optional[OutcomeCallback],
    ) -> None:
        self.probe = probe
        self.concurrency = concurrency
        self.progress = progress
        self.on_outcome = on_outcome
        self.outcomes: List[ProbeOutcome] = []

    async def _worker(self, queue: asyncio.Queue[AbsoluteUrl]) -> None:
        while True:
            try:
                url = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            outcome = await self.probe.probe(url)
            self.outcomes.append(outcome)
            self.progress.update(1)
            if self.on_outcome is not None:
                self.on_outcome(url, outcome)
            queue.task_done()

    async def host(self, host: str, urls: LinkSet) -> None:
        queue: asyncio.Queue[AbsoluteUrl] = asyncio.Queue()
        for url in sorted(urls):
            queue.put_nowait(url)
        n_workers = min(self.concurrency, len(urls))
        logger.debug("Host %s: %d links, %d workers", host, len(urls), n_workers)
        await _gather_or_cancel([asyncio.create_task(self._worker(queue)) for _ in range(n_workers)])


async def crawl(
    groups: HostGroups,
    concurrency: int,
    probe: Probe,
    *,
    progress: Optional[ProgressSink] = None,
    on_outcome: Optional[OutcomeCallback] = None,
    total_links: Optional[int] = None,
    stats: Optional[LinkStats] = None,
) -> CrawlResult:
    """
    Probe every URL of every host group and return once all outcomes are in.

    ``progress.update(1)`` and ``on_outcome(url, outcome)`` run once per
    completed probe, in completion order. A
    :class:`~link_scout.errors.FatalTransportError` from any probe cancels the
    remaining work and propagates.
    """
    if concurrency < 1:
        raise ValueError("concurrency must be >= 1")
    run = _Crawl(probe, concurrency, progress if progress is not None else ProgressCounter(), on_outcome)
    submitted = count_links(groups)

    logger.info("Checking %d links on %d hosts (%d per host)", submitted, len(groups), concurrency)
    start = time.monotonic()
    await _gather_or_cancel(
        [asyncio.create_task(run.host(host, urls)) for host, urls in groups.items()]
    )
    duration = time.monotonic() - start
    logger.info("Finished: %d links in %.2f s", len(run.outcomes), duration)

    return CrawlResult(
        outcomes=tuple(run.outcomes),
        total_links=submitted if total_links is None else total_links,
        stats=stats or LinkStats(unique=submitted, domains=len(groups)),
    )


def count_links(groups: HostGroups) -> int:
    return sum(len(urls) for urls in groups.values())


__all__ = ["crawl", "count_links", "ProgressCounter", "ProgressSink", "OutcomeCallback"]
