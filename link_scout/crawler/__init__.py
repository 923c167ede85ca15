# File: link_scout/crawler/__init__.py
"""link_scout.crawler: URL resolution, link extraction, grouping, probing and scheduling."""

from .grouping import collect_links, filter_ignored, group_by_host
from .link_extractor import HtmlDocument, extract_links
from .models import (
    CrawlResult,
    LinkStats,
    PageData,
    ProbeOutcome,
    Reachable,
    TransportFailure,
    Unreachable,
)
from .probe import HttpProbe
from .scheduler import ProgressCounter, crawl
from .urls import AbsoluteUrl, normalize_seed, resolve_link

__all__ = [
    "AbsoluteUrl",
    "normalize_seed",
    "resolve_link",
    "HtmlDocument",
    "extract_links",
    "collect_links",
    "filter_ignored",
    "group_by_host",
    "HttpProbe",
    "crawl",
    "ProgressCounter",
    "PageData",
    "LinkStats",
    "ProbeOutcome",
    "Reachable",
    "Unreachable",
    "TransportFailure",
    "CrawlResult",
]
