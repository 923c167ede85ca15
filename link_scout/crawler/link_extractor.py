# link_scout/crawler/link_extractor.py
"""
Link extraction from an already-loaded HTML document.
"""
from __future__ import annotations

from typing import Iterator, Optional, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from link_scout.crawler.models import PageData

# tag name -> attribute holding the link
_LINK_ATTRS = {"a": "href", "img": "src"}


class HtmlDocument:
    """HTML markup plus the URL it was loaded from; parsed lazily, at most once."""

    def __init__(self, url: str, content: Union[str, bytes]) -> None:
        self.url = url
        self.content = content
        self._soup: Optional[BeautifulSoup] = None

    @classmethod
    def from_page(cls, page: PageData) -> HtmlDocument:
        return cls(str(page.url), page.content)

    @property
    def soup(self) -> BeautifulSoup:
        if self._soup is None:
            self._soup = BeautifulSoup(self.content, "html.parser")
        return self._soup


class ExtractedLinks:
    """Restartable view over the raw link values of a document.

    Every ``iter()`` walks the parsed tree again, in document order.
    """

    def __init__(self, document: HtmlDocument) -> None:
        self._document = document

    def __iter__(self) -> Iterator[str]:
        for tag in self._document.soup.find_all(list(_LINK_ATTRS)):
            if not isinstance(tag, Tag):
                continue
            value = tag.get(_LINK_ATTRS[tag.name])
            if isinstance(value, str):
                yield value


def extract_links(document: HtmlDocument) -> ExtractedLinks:
    """
    Raw ``<a href>`` and ``<img src>`` values of *document*.

    Elements without the attribute are skipped; values are returned untouched
    (resolution happens in :mod:`link_scout.crawler.urls`).
    """
    return ExtractedLinks(document)
