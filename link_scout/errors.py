# File: link_scout/errors.py
"""link_scout.errors: exception hierarchy shared by the crawler, config and CLI."""

from __future__ import annotations

from typing import Optional

__all__ = [
    "LinkScoutError",
    "MalformedUrl",
    "SeedUnreachable",
    "FatalTransportError",
    "PatternError",
]


class LinkScoutError(Exception):
    """Base class for every error raised by LinkScout."""


class MalformedUrl(LinkScoutError):
    """A seed or discovered link could not be parsed or resolved."""

    def __init__(self, raw: str, reason: str = "cannot be resolved to an http(s) URL") -> None:
        self.raw = raw
        self.reason = reason
        super().__init__(f"Malformed URL {raw!r}: {reason}")


class SeedUnreachable(LinkScoutError):
    """The seed page itself could not be fetched; there is nothing to check."""

    def __init__(self, url: str, status: Optional[int] = None, reason: str = "") -> None:
        self.url = url
        self.status = status
        self.reason = reason
        detail = f"HTTP {status}" if status is not None else (reason or "transport failure")
        super().__init__(f"Could not reach website {url}: {detail}")


class FatalTransportError(LinkScoutError):
    """A transport failure outside the known recoverable set; halts the crawl."""

    def __init__(self, url: str, cause: BaseException) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Unexpected transport failure for {url}: {type(cause).__name__}: {cause}")


class PatternError(LinkScoutError):
    """The configured ignore pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid ignore pattern {pattern!r}: {reason}")
