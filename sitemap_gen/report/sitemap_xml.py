# File: sitemap_gen/report/sitemap_xml.py
"""sitemap_gen.report.sitemap_xml: writing and reading sitemap.xml (sitemaps.org 0.9)."""

from __future__ import annotations

import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional, Union

from lxml import etree

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def _q(tag: str) -> str:
    return f"{{{SITEMAP_NS}}}{tag}"


def build_sitemap(
    paths: Iterable[str],
    base_url: str,
    *,
    changefreq: str = "monthly",
    priority: float = 0.5,
    lastmod: Optional[datetime] = None,
) -> bytes:
    """Serialize *paths* into sitemap XML bytes, one ``<url>`` per path sorted by path."""
    stamp = (lastmod or datetime.now(timezone.utc)).isoformat(timespec="seconds")
    urlset = etree.Element(_q("urlset"), nsmap={None: SITEMAP_NS})
    for path in sorted(paths):
        url = etree.SubElement(urlset, _q("url"))
        etree.SubElement(url, _q("loc")).text = f"{base_url}{path}"
        etree.SubElement(url, _q("lastmod")).text = stamp
        etree.SubElement(url, _q("changefreq")).text = changefreq
        etree.SubElement(url, _q("priority")).text = f"{priority:g}"
    return etree.tostring(urlset, xml_declaration=True, encoding="UTF-8", pretty_print=True)


def render_sitemap(
    paths: Iterable[str],
    base_url: str,
    output_path: Union[Path, str],
    *,
    changefreq: str = "monthly",
    priority: float = 0.5,
    lastmod: Optional[datetime] = None,
) -> Path:
    """Write the sitemap to *output_path* atomically and return the path.

    The document goes to a temporary file next to the target and is moved into
    place only when fully written, so a failed write never leaves a partial
    sitemap behind. Any ``OSError`` propagates to the caller.

    Example:
    ```python
    from sitemap_gen.report.sitemap_xml import render_sitemap
    render_sitemap({"/", "/about"}, "https://example.com", "sitemap.xml")
    ```
    """
    output = Path(output_path)
    data = build_sitemap(paths, base_url, changefreq=changefreq, priority=priority, lastmod=lastmod)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{output.name}.", suffix=".tmp", dir=output.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, output)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return output


def parse_sitemap(xml_content: Union[str, bytes]) -> List[str]:
    """Return the URLs found in the ``<loc>`` tags of a sitemap document."""
    if isinstance(xml_content, str):
        xml_content = xml_content.encode("utf-8")
    parser = etree.XMLParser(ns_clean=True, recover=True)
    root = etree.fromstring(xml_content, parser=parser)
    locs = root.findall(".//{*}loc")
    return [loc.text.strip() for loc in locs if loc.text]
