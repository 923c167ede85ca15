# link_scout/crawler/grouping.py
"""
Turning raw link values into a deduplicated link set, and splitting it by host.
"""
from __future__ import annotations

import logging
import re
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Set, Tuple

from link_scout.crawler.models import HostGroups, LinkSet, LinkStats
from link_scout.crawler.urls import AbsoluteUrl, resolve_link
from link_scout.errors import MalformedUrl

logger = logging.getLogger("LinkScout")


def filter_ignored(links: Iterable[AbsoluteUrl], pattern: Optional[re.Pattern[str]]) -> List[AbsoluteUrl]:
    """Drop links whose string form matches *pattern* anywhere."""
    if pattern is None:
        return list(links)
    kept = []
    for url in links:
        if pattern.search(str(url)):
            logger.debug("Ignoring %s (matches %s)", url, pattern.pattern)
            continue
        kept.append(url)
    return kept


def group_by_host(links: Iterable[AbsoluteUrl]) -> HostGroups:
    """Bucket every link under its own host."""
    buckets: Dict[str, Set[AbsoluteUrl]] = defaultdict(set)
    for url in links:
        buckets[url.host].add(url)
    return {host: frozenset(urls) for host, urls in buckets.items()}


def collect_links(
    raw_links: Iterable[str],
    base: AbsoluteUrl,
    *,
    truncate_fragments: bool = True,
    ignore: Optional[re.Pattern[str]] = None,
) -> Tuple[LinkSet, LinkStats]:
    """Resolve, filter and deduplicate *raw_links*; malformed ones are logged and dropped."""
    parsed = 0
    resolved: List[AbsoluteUrl] = []
    for raw in raw_links:
        parsed += 1
        try:
            resolved.append(resolve_link(raw, base, truncate_fragment=truncate_fragments))
        except MalformedUrl as exc:
            logger.warning("Skipping link: %s", exc)

    kept = filter_ignored(resolved, ignore)
    links: LinkSet = frozenset(kept)
    stats = LinkStats(
        parsed=parsed,
        valid=len(resolved),
        filtered=len(kept),
        unique=len(links),
        domains=len({url.host for url in links}),
    )
    logger.info(
        "Links: %d parsed, %d valid, %d after filter, %d unique on %d domains",
        stats.parsed, stats.valid, stats.filtered, stats.unique, stats.domains,
    )
    return links, stats
