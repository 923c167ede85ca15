# File: link_scout/engine.py
"""link_scout.engine: entry coroutines used by the CLI and by library callers."""

from __future__ import annotations

from typing import Optional, Tuple

from link_scout.checker import LinkChecker
from link_scout.config import CheckConfig, DumpConfig
from link_scout.crawler.models import CrawlResult, LinkSet, LinkStats
from link_scout.logger import logger
from link_scout.report.console import ConsoleReporter

__all__ = ["check_links", "dump_links"]


async def check_links(config: CheckConfig, reporter: Optional[ConsoleReporter] = None) -> CrawlResult:
    """Fetch the seed page, probe all its links and return the full result.

    With a *reporter*, its progress bar is sized once the links are known and
    every outcome is handed to it as soon as it completes.
    """
    logger.info("Starting check of %s", config.url)
    async with LinkChecker(config) as checker:
        links, stats = await checker.discover()
        if reporter is None:
            return await checker.probe_links(links, stats, config.concurrency)
        reporter.start(stats)
        try:
            result = await checker.probe_links(
                links,
                stats,
                config.concurrency,
                progress=reporter.progress,
                on_outcome=reporter,
            )
        finally:
            reporter.close()
    reporter.summary(result)
    return result


async def dump_links(config: DumpConfig) -> Tuple[LinkSet, LinkStats]:
    """Discover the links of the seed page without probing them."""
    logger.info("Collecting links of %s", config.url)
    async with LinkChecker(config) as checker:
        return await checker.discover()
