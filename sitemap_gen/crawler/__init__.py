"""sitemap_gen.crawler: frontier crawler, link classifier and page fetcher."""

from sitemap_gen.crawler.crawler import FrontierCrawler
from sitemap_gen.crawler.fetcher import PageFetcher
from sitemap_gen.crawler.link_classifier import LinkClassifier
from sitemap_gen.crawler.models import ROOT_PATH, CrawlReport, FetchResult

__all__ = ["FrontierCrawler", "PageFetcher", "LinkClassifier", "FetchResult", "CrawlReport", "ROOT_PATH"]
