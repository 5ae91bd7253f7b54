"""
Link classification for SitemapGen: which hrefs belong to the crawled site,
and the canonical path each of them maps to.
"""
from __future__ import annotations

from typing import Iterable, Optional, Set

from bs4 import BeautifulSoup
from bs4.element import Tag


class LinkClassifier:
    """Decides scope and canonical form of hrefs found on the target site."""

    def __init__(self, base_url: str, exclude: Iterable[str] = ()) -> None:
        self.base_url = base_url
        self.exclude = frozenset(exclude)

    def classify(self, href: str) -> Optional[str]:
        """
        Return the root-relative path for *href*, or None when it is out of scope.

        Only hrefs starting with ``/`` or with the base URL are in scope;
        fragments, relative links and other hosts are dropped.
        """
        if href.startswith("/"):
            return href
        if href.startswith(self.base_url):
            return href[len(self.base_url):]
        return None

    def is_excluded(self, path: str) -> bool:
        """Plain string-prefix match, so ``/admin`` also covers ``/administration``."""
        return any(path.startswith(prefix) for prefix in self.exclude)

    def accept(self, href: str) -> Optional[str]:
        path = self.classify(href)
        if path is None or self.is_excluded(path):
            return None
        return path

    def extract_links(self, body: str) -> Set[str]:
        """Collect accepted paths from every ``<a href>`` of an HTML body."""
        soup = BeautifulSoup(body, "html.parser")
        links: Set[str] = set()
        for tag in soup.find_all("a", href=True):
            if not isinstance(tag, Tag):
                continue
            href_val = tag.get("href")
            if not isinstance(href_val, str):
                continue
            path = self.accept(href_val)
            if path is not None:
                links.add(path)
        return links
