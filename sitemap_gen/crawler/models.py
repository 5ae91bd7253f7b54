"""
Data models for the SitemapGen crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Set

#: seed of every crawl
ROOT_PATH = "/"


@dataclass(slots=True, frozen=True)
class FetchResult:
    """Outcome of fetching one path: the response body or a diagnostic error."""

    path: str
    body: Optional[str] = None
    error: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.body is None) == (self.error is None):
            raise ValueError("FetchResult needs exactly one of body or error")

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class CrawlReport:
    """Final state of a crawl handed to the sitemap and JSON writers."""

    base_url: str
    visited: Set[str] = field(default_factory=set)
    failures: Dict[str, str] = field(default_factory=dict)
    rounds: int = 0

    def as_dict(self) -> dict:
        return {
            "base_url": self.base_url,
            "pages": sorted(self.visited),
            "failures": dict(sorted(self.failures.items())),
            "rounds": self.rounds,
        }
