# File: sitemap_gen/engine.py
"""sitemap_gen.engine: runs a crawl for a configuration and returns its report."""

from __future__ import annotations

from sitemap_gen.config import CrawlerConfig
from sitemap_gen.crawler.crawler import FrontierCrawler
from sitemap_gen.crawler.models import CrawlReport
from sitemap_gen.logger import logger

__all__ = ["start_crawl"]


async def start_crawl(cfg: CrawlerConfig) -> CrawlReport:
    """
    Run the frontier crawler inside its session context.

    Parameters
    ----------
    cfg : CrawlerConfig
        Crawl configuration.

    Returns
    -------
    CrawlReport
        Visited paths, fetch failures and round count.
    """
    async with FrontierCrawler(cfg) as crawler:
        await crawler.run()
    report = crawler.report()
    logger.debug("Crawl of %s produced %d paths", cfg.base_url, len(report.visited))
    return report
