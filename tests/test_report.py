# File: tests/test_report.py
import json

import pytest
import pytest_asyncio

from aeo_scout.aggregator import run_clarity_scan, scan_to_score_input
from aeo_scout.fixes import transform_to_report
from aeo_scout.parser.extractor import run_extraction
from aeo_scout.report import DEFAULT_TEMPLATE_DIR, render_html, render_json, score_band

URL = "https://example.com/faq"


@pytest_asyncio.fixture
async def full_report(two_h1_faq_page, fixed_now):
    scan = await run_clarity_scan(two_h1_faq_page, URL)
    extraction = run_extraction(
        two_h1_faq_page, URL, "User-agent: GPTBot\nDisallow: /", now=fixed_now
    )
    return transform_to_report(scan_to_score_input(scan), extraction=extraction, scan=scan)


@pytest.mark.asyncio()
async def test_render_json(full_report, tmp_path):
    out = render_json(full_report, tmp_path / "nested" / "report.json")
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["url"] == URL
    assert data["title"] == full_report.title
    assert data["crawler_access"]["GPTBot"] == "block"
    assert list(data["score_blocks"]) == ["Structure", "Meta", "Schema", "Navigation", "Content", "Links"]
    assert data["metrics"]["structured_data"]["types"] == ["FAQPage"]
    assert len(data["prioritized"]["fixes"]) <= 10


@pytest.mark.asyncio()
async def test_render_json_compact(full_report, tmp_path):
    out = render_json(full_report, tmp_path / "report.json", pretty=False)
    assert "\n" not in out.read_text(encoding="utf-8").rstrip("\n")


@pytest.mark.asyncio()
async def test_render_html(full_report, tmp_path):
    out = render_html(full_report, None, tmp_path / "report.html")
    html = out.read_text(encoding="utf-8")
    assert f"{full_report.score}/100" in html
    assert "Multiple H1 Tags" in html
    assert "GPTBot: block" in html
    # fix examples are autoescaped
    assert "&lt;h1&gt;" in html


@pytest.mark.asyncio()
async def test_render_html_custom_template(full_report, tmp_path):
    (tmp_path / "report.html.j2").write_text("{{ data.url }}|{{ report.score }}", encoding="utf-8")
    out = render_html(full_report, tmp_path, tmp_path / "out" / "r.html")
    assert out.read_text(encoding="utf-8") == f"{URL}|{full_report.score}"


def test_default_template_shipped():
    assert (DEFAULT_TEMPLATE_DIR / "report.html.j2").is_file()


@pytest.mark.parametrize("score,band", [(100, "good"), (80, "good"), (79, "fair"), (50, "fair"), (49, "poor")])
def test_score_band(score, band):
    assert score_band(score) == band
