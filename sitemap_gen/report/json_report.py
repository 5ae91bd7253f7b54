# sitemap_gen/report/json_report.py

"""
JSON crawl report for SitemapGen.

Serializes a CrawlReport (visited pages and broken links) to a file.
"""
import json
from pathlib import Path

from sitemap_gen.crawler.models import CrawlReport


def render_json(report: CrawlReport, output_path: Path | str) -> Path:
    """
    Save *report* as JSON at *output_path*.

    :param report: CrawlReport of a finished crawl
    :param output_path: path of the JSON file
    :return: Path of the saved file
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(report.as_dict(), f, ensure_ascii=False, indent=2)

    return output
