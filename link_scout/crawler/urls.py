# link_scout/crawler/urls.py
"""
URL normalization and link resolution for LinkScout.

Nothing here touches the network: a seed string becomes an
:class:`AbsoluteUrl`, and every raw ``href``/``src`` found on the seed page is
resolved against it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence
from urllib.parse import urljoin, urlsplit, urlunsplit

from yarl import URL

from link_scout.errors import MalformedUrl

__all__: Sequence[str] = ("AbsoluteUrl", "normalize_seed", "resolve_link")

_HTTP_SCHEMES = ("http", "https")


@dataclass(frozen=True, slots=True, order=True)
class AbsoluteUrl:
    """Canonical absolute http(s) URL with a non-empty host.

    Build it with :meth:`parse`; the constructor does no validation.
    """

    value: str

    @classmethod
    def parse(cls, raw: str) -> AbsoluteUrl:
        """Parse *raw* into canonical form: lower-case scheme/host, ``/`` for an empty path."""
        try:
            parts = urlsplit(raw)
            host = parts.hostname
            parts.port  # raises ValueError on a non-numeric or out-of-range port
        except ValueError as exc:
            raise MalformedUrl(raw, str(exc)) from exc

        scheme = parts.scheme.lower()
        if scheme not in _HTTP_SCHEMES:
            raise MalformedUrl(raw, f"unsupported scheme {parts.scheme!r}")
        if not host:
            raise MalformedUrl(raw, "no host")

        userinfo, sep, hostport = parts.netloc.rpartition("@")
        netloc = f"{userinfo}{sep}{hostport.lower()}"
        path = parts.path or "/"
        value = urlunsplit((scheme, netloc, path, parts.query, parts.fragment))
        # the session parses with yarl, which is stricter about the authority
        try:
            if not URL(value).raw_host:
                raise MalformedUrl(raw, "no host")
        except ValueError as exc:
            raise MalformedUrl(raw, f"invalid host: {exc}") from exc
        return cls(value)

    @property
    def scheme(self) -> str:
        return urlsplit(self.value).scheme

    @property
    def host(self) -> str:
        return urlsplit(self.value).hostname or ""

    @property
    def path(self) -> str:
        return urlsplit(self.value).path

    @property
    def query(self) -> str:
        return urlsplit(self.value).query

    @property
    def fragment(self) -> str:
        return urlsplit(self.value).fragment

    def without_fragment(self) -> AbsoluteUrl:
        parts = urlsplit(self.value)
        if not parts.fragment:
            return self
        return AbsoluteUrl(urlunsplit(parts._replace(fragment="")))

    def __str__(self) -> str:
        return self.value


def _check_raw(raw: str) -> str:
    candidate = raw.strip()
    if not candidate:
        raise MalformedUrl(raw, "empty")
    if any(ch.isspace() for ch in candidate):
        raise MalformedUrl(raw, "contains whitespace")
    return candidate


def normalize_seed(raw: str) -> AbsoluteUrl:
    """Turn user input into an absolute URL, assuming ``http://`` when no scheme is given."""
    candidate = _check_raw(raw)
    if not candidate.lower().startswith(("http://", "https://")):
        candidate = f"http://{candidate}"
    return AbsoluteUrl.parse(candidate)


def resolve_link(raw: str, base: AbsoluteUrl, *, truncate_fragment: bool = False) -> AbsoluteUrl:
    """
    Resolve a discovered link against *base*.

    Protocol-relative links (``//host/path``) always get ``http``, whatever the
    base scheme is. Everything else follows RFC 3986 joining. Non-HTTP schemes
    (``mailto:``, ``javascript:``...) raise :class:`MalformedUrl`.
    """
    candidate = _check_raw(raw)
    if candidate.startswith("//"):
        joined = f"http:{candidate}"
    else:
        try:
            scheme = urlsplit(candidate).scheme
        except ValueError as exc:
            raise MalformedUrl(raw, str(exc)) from exc
        if scheme and scheme.lower() not in _HTTP_SCHEMES:
            raise MalformedUrl(raw, f"unsupported scheme {scheme!r}")
        joined = urljoin(base.value, candidate)

    try:
        url = AbsoluteUrl.parse(joined)
    except MalformedUrl as exc:
        raise MalformedUrl(raw, exc.reason) from exc
    return url.without_fragment() if truncate_fragment else url
