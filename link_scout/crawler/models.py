# link_scout/crawler/models.py
"""
Data models for the LinkScout crawler: fetched pages, probe outcomes and the
crawl result.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import ClassVar, Dict, FrozenSet, Tuple

from link_scout.crawler.urls import AbsoluteUrl

LinkSet = FrozenSet[AbsoluteUrl]
HostGroups = Dict[str, LinkSet]


def is_valid_status(status: int) -> bool:
    """2xx and 3xx count as reachable."""
    return 200 <= status < 400


@dataclass(slots=True)
class PageData:
    """Holds the final URL (after redirects) and the HTML of the seed page."""

    url: AbsoluteUrl
    content: str
    status: int = HTTPStatus.OK


@dataclass(frozen=True, slots=True)
class LinkStats:
    """Counters gathered while turning raw attribute values into a link set."""

    parsed: int = 0
    valid: int = 0
    filtered: int = 0
    unique: int = 0
    domains: int = 0


# --------------------------------------------------------------------------- #
# Probe outcomes                                                              #
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class ProbeOutcome(ABC):
    """Result of checking one URL. Use one of the concrete subclasses."""

    url: AbsoluteUrl

    ok: ClassVar[bool] = False
    kind: ClassVar[str] = "outcome"

    @property
    @abstractmethod
    def status(self) -> int:
        """HTTP status, or the synthetic one for transport failures."""

    @property
    def reason(self) -> str:
        try:
            return HTTPStatus(self.status).phrase
        except ValueError:
            return ""


@dataclass(frozen=True, slots=True)
class Reachable(ProbeOutcome):
    """The server answered with a 2xx/3xx status."""

    code: int = HTTPStatus.OK

    ok: ClassVar[bool] = True
    kind: ClassVar[str] = "reachable"

    @property
    def status(self) -> int:
        return self.code


@dataclass(frozen=True, slots=True)
class Unreachable(ProbeOutcome):
    """The server answered, but not with a 2xx/3xx status."""

    code: int = HTTPStatus.NOT_FOUND

    kind: ClassVar[str] = "unreachable"

    @property
    def status(self) -> int:
        return self.code


@dataclass(frozen=True, slots=True)
class TransportFailure(ProbeOutcome):
    """No HTTP response at all; :attr:`status` is synthetic."""

    detail: str = ""

    synthetic_status: ClassVar[HTTPStatus] = HTTPStatus.NOT_FOUND
    kind: ClassVar[str] = "transport"

    @property
    def status(self) -> int:
        return int(self.synthetic_status)

    @property
    def reason(self) -> str:
        return self.detail or self.kind


@dataclass(frozen=True, slots=True)
class TransportTimeout(TransportFailure):
    synthetic_status: ClassVar[HTTPStatus] = HTTPStatus.REQUEST_TIMEOUT
    kind: ClassVar[str] = "timeout"


@dataclass(frozen=True, slots=True)
class TransportUnresolvedHost(TransportFailure):
    kind: ClassVar[str] = "unresolved-host"


@dataclass(frozen=True, slots=True)
class TransportConnectFailed(TransportFailure):
    kind: ClassVar[str] = "connect-failed"


@dataclass(frozen=True, slots=True)
class TransportRedirectLoop(TransportFailure):
    synthetic_status: ClassVar[HTTPStatus] = HTTPStatus.MISDIRECTED_REQUEST
    kind: ClassVar[str] = "redirect-loop"


@dataclass(frozen=True, slots=True)
class TransportInvalidBody(TransportFailure):
    kind: ClassVar[str] = "invalid-body"


# --------------------------------------------------------------------------- #
# Crawl result                                                                #
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class CrawlResult:
    """Every outcome of one crawl (completion order, not submission order)."""

    outcomes: Tuple[ProbeOutcome, ...]
    total_links: int
    stats: LinkStats = field(default_factory=LinkStats)

    @property
    def unique_links(self) -> int:
        return len(self.outcomes)

    @property
    def reachable_count(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failures(self) -> Tuple[ProbeOutcome, ...]:
        return tuple(o for o in self.outcomes if not o.ok)

    def by_url(self) -> Dict[AbsoluteUrl, ProbeOutcome]:
        return {o.url: o for o in self.outcomes}


__all__ = [
    "LinkSet",
    "HostGroups",
    "is_valid_status",
    "PageData",
    "LinkStats",
    "ProbeOutcome",
    "Reachable",
    "Unreachable",
    "TransportFailure",
    "TransportTimeout",
    "TransportUnresolvedHost",
    "TransportConnectFailed",
    "TransportRedirectLoop",
    "TransportInvalidBody",
    "CrawlResult",
]
