# File: tests/test_sitemap.py
import json
from datetime import datetime, timezone

import pytest
from lxml import etree

from sitemap_gen.crawler.models import CrawlReport
from sitemap_gen.report import SITEMAP_NS, build_sitemap, parse_sitemap, render_json, render_sitemap

NS = {"sm": SITEMAP_NS}
WHEN = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


def test_sitemap_entries(tmp_path):
    out = render_sitemap({"/", "/b", "/a"}, "https://ex.com", tmp_path / "sitemap.xml", lastmod=WHEN)

    root = etree.parse(str(out)).getroot()
    assert root.tag == f"{{{SITEMAP_NS}}}urlset"
    urls = root.findall("sm:url", NS)
    assert [u.findtext("sm:loc", namespaces=NS) for u in urls] == [
        "https://ex.com/",
        "https://ex.com/a",
        "https://ex.com/b",
    ]
    for u in urls:
        assert u.findtext("sm:lastmod", namespaces=NS) == "2024-05-01T12:30:00+00:00"
        assert u.findtext("sm:changefreq", namespaces=NS) == "monthly"
        assert u.findtext("sm:priority", namespaces=NS) == "0.5"


def test_sitemap_round_trips_through_parser(tmp_path):
    paths = {"/", "/docs/intro", "/search?q=a&b=c"}
    out = render_sitemap(paths, "https://ex.com", tmp_path / "sitemap.xml")
    locs = parse_sitemap(out.read_text(encoding="utf-8"))
    assert sorted(locs) == sorted(f"https://ex.com{p}" for p in paths)
    # ampersands must be escaped on disk
    assert "&amp;" in out.read_text(encoding="utf-8")


def test_sitemap_custom_changefreq_and_priority():
    xml = build_sitemap({"/"}, "https://ex.com", changefreq="daily", priority=0.8)
    root = etree.fromstring(xml)
    assert root.findtext("sm:url/sm:changefreq", namespaces=NS) == "daily"
    assert root.findtext("sm:url/sm:priority", namespaces=NS) == "0.8"


def test_lastmod_defaults_to_now():
    xml = build_sitemap({"/"}, "https://ex.com")
    stamp = etree.fromstring(xml).findtext("sm:url/sm:lastmod", namespaces=NS)
    parsed = datetime.fromisoformat(stamp)
    assert parsed.tzinfo is not None
    assert abs((datetime.now(timezone.utc) - parsed).total_seconds()) < 60


def test_empty_sitemap_is_valid():
    root = etree.fromstring(build_sitemap(set(), "https://ex.com"))
    assert len(root) == 0


def test_write_replaces_existing_file(tmp_path):
    out = tmp_path / "sitemap.xml"
    out.write_text("old", encoding="utf-8")
    render_sitemap({"/"}, "https://ex.com", out)
    assert parse_sitemap(out.read_bytes()) == ["https://ex.com/"]
    assert [p.name for p in tmp_path.iterdir()] == ["sitemap.xml"]


def test_failed_write_leaves_no_output(tmp_path):
    out = tmp_path / "missing-dir" / "sitemap.xml"
    with pytest.raises(OSError):
        render_sitemap({"/"}, "https://ex.com", out)
    assert not out.exists()
    assert list(tmp_path.iterdir()) == []


def test_failed_replace_removes_temp_file(tmp_path):
    # a directory at the target path makes the final rename fail
    out = tmp_path / "sitemap.xml"
    out.mkdir()
    with pytest.raises(OSError):
        render_sitemap({"/"}, "https://ex.com", out)
    assert [p.name for p in tmp_path.iterdir()] == ["sitemap.xml"]
    assert out.is_dir()


def test_json_report(tmp_path):
    report = CrawlReport(
        base_url="https://ex.com",
        visited={"/b", "/", "/broken"},
        failures={"/broken": "ClientConnectorError: refused"},
        rounds=2,
    )
    out = render_json(report, tmp_path / "reports" / "crawl.json")
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data == {
        "base_url": "https://ex.com",
        "pages": ["/", "/b", "/broken"],
        "failures": {"/broken": "ClientConnectorError: refused"},
        "rounds": 2,
    }
