# sitemap_gen/crawler/fetcher.py
"""
Fetcher module: resolves crawl paths to URLs and downloads a whole frontier
concurrently, turning every per-page failure into a FetchResult error.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterable

from aiohttp import ClientError, ClientSession

from sitemap_gen.config import CrawlerConfig
from sitemap_gen.crawler.models import FetchResult


class PageFetcher:
    """Batch GET of crawl paths against the configured base URL."""

    def __init__(self, session: ClientSession, config: CrawlerConfig) -> None:
        self.session = session
        self.config = config
        self.logger = logging.getLogger("SitemapGen")

    def resolve(self, path: str) -> str:
        """Absolute http(s) paths are used verbatim, anything else is appended to the base URL."""
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.config.base_url}{path}"

    async def fetch(self, path: str) -> FetchResult:
        """
        Fetch a single path.

        Returns a FetchResult holding either the body or the error message;
        never raises for network, redirect or timeout failures.
        """
        url = self.resolve(path)
        try:
            # aiohttp raises on the hop that reaches max_redirects, so allow one more
            async with self.session.get(
                url,
                allow_redirects=True,
                max_redirects=self.config.max_redirects + 1,
            ) as resp:
                if resp.status >= 400:
                    self.logger.debug("HTTP %s for %s", resp.status, url)
                text = await resp.text(errors="replace")
                return FetchResult(path, body=text)
        except asyncio.TimeoutError:
            return FetchResult(path, error=f"timed out fetching {url}")
        except ClientError as e:
            return FetchResult(path, error=f"{type(e).__name__}: {e}")

    async def fetch_batch(self, paths: Iterable[str]) -> Dict[str, FetchResult]:
        """Fetch all *paths* at once and wait for every request to finish."""
        ordered = list(paths)
        results = await asyncio.gather(*(self.fetch(p) for p in ordered))
        return dict(zip(ordered, results))
