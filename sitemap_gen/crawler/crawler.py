# === FILE: sitemap_gen/crawler/crawler.py ===
from __future__ import annotations

import logging
import time
from typing import Dict, Optional, Set

from aiohttp import ClientSession, ClientTimeout

from sitemap_gen.config import CrawlerConfig
from sitemap_gen.crawler.fetcher import PageFetcher
from sitemap_gen.crawler.link_classifier import LinkClassifier
from sitemap_gen.crawler.models import ROOT_PATH, CrawlReport

__all__ = ("FrontierCrawler",)


class FrontierCrawler:
    """Breadth-first crawler: fetches the frontier round by round until nothing new is found."""

    def __init__(self, config: CrawlerConfig, fetcher: Optional[PageFetcher] = None) -> None:
        self.config = config
        self.classifier = LinkClassifier(config.base_url, config.exclude)
        self.fetcher = fetcher
        self.visited: Set[str] = set()
        self.failures: Dict[str, str] = {}
        self.rounds: int = 0
        self.session: Optional[ClientSession] = None
        self.logger = logging.getLogger("SitemapGen")

    async def __aenter__(self) -> FrontierCrawler:
        if self.fetcher is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
            self.fetcher = PageFetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def run(self) -> Set[str]:
        if self.fetcher is None:
            raise RuntimeError("Fetcher not initialized, use 'async with FrontierCrawler(...)'")
        self.logger.info("Start crawl: %s", self.config.base_url)
        if self.config.exclude:
            self.logger.info("Excluded prefixes: %s", ", ".join(sorted(self.config.exclude)))
        start = time.monotonic()

        frontier: Set[str] = {ROOT_PATH}
        while frontier:
            frontier = await self.crawl_round(frontier)

        duration = time.monotonic() - start
        self.logger.info(
            "Finished: %d paths in %d rounds, %.2f s", len(self.visited), self.rounds, duration
        )
        if self.failures:
            self.logger.info("Failed to fetch: %d", len(self.failures))
        return set(self.visited)

    async def crawl_round(self, frontier: Set[str]) -> Set[str]:
        """Fetch *frontier*, mark it visited and return the paths to fetch next."""
        self.rounds += 1
        self.logger.info("Round %d: fetching %d paths", self.rounds, len(frontier))
        results = await self.fetcher.fetch_batch(frontier)

        candidates: Set[str] = set()
        for path, result in results.items():
            if result.ok:
                candidates |= self.classifier.extract_links(result.body)
            else:
                self.failures[path] = result.error
                self.logger.warning("Failed %s: %s", path, result.error)

        # failed paths too, a dead link is not retried
        self.visited |= frontier
        return candidates - self.visited

    def report(self) -> CrawlReport:
        return CrawlReport(
            base_url=self.config.base_url,
            visited=set(self.visited),
            failures=dict(self.failures),
            rounds=self.rounds,
        )
