"""sitemap_gen.report: sitemap.xml and JSON outputs of a finished crawl."""

from sitemap_gen.report.json_report import render_json
from sitemap_gen.report.sitemap_xml import SITEMAP_NS, build_sitemap, parse_sitemap, render_sitemap

__all__ = ["render_json", "render_sitemap", "build_sitemap", "parse_sitemap", "SITEMAP_NS"]
