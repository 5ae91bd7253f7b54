# File: tests/conftest.py
import logging
from collections.abc import AsyncIterator
from typing import Dict

import pytest
from aiohttp import web

from sitemap_gen.config import CrawlerConfig
from sitemap_gen.crawler.models import FetchResult
from sitemap_gen.logger import LOGGER_NAME


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


@pytest.fixture()
def basic_config() -> CrawlerConfig:
    """
    Return a basic valid CrawlerConfig for unit tests that never touch the network.
    """
    return CrawlerConfig(base_url="https://ex.com", user_agent="TestAgent/1.0")


@pytest.fixture()
def sitemap_logs(caplog):
    """
    The project logger does not propagate to root, hook caplog in directly.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger=LOGGER_NAME)
    yield caplog
    lg.removeHandler(caplog.handler)


class StubFetcher:
    """
    In-memory fetcher: *site* maps a path to its HTML body or to an Exception
    instance that stands for a transport failure.
    """

    def __init__(self, site: Dict[str, object]) -> None:
        self.site = site
        self.batches: list[set[str]] = []
        self.on_batch = None

    async def fetch_batch(self, paths):
        batch = set(paths)
        self.batches.append(batch)
        if self.on_batch is not None:
            self.on_batch(batch)
        results = {}
        for path in batch:
            page = self.site.get(path)
            if page is None:
                results[path] = FetchResult(path, body="<html>not found</html>")
            elif isinstance(page, Exception):
                results[path] = FetchResult(path, error=str(page))
            else:
                results[path] = FetchResult(path, body=page)
        return results


@pytest.fixture()
def stub_fetcher_factory():
    return StubFetcher


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


def html_page(*hrefs: str) -> str:
    links = "".join(f'<a href="{h}">{h}</a>' for h in hrefs)
    return f"<html><body>{links}</body></html>"
