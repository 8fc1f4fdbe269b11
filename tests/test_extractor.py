# File: tests/test_extractor.py
"""Tests for head extraction, JSON-LD snippets, text budgeting and per-category metrics."""
import json
from datetime import datetime, timezone

import pytest

from aeo_scout.models import TRACKED_AGENTS
from aeo_scout.parser.extractor import TRUNCATION_MARKER, run_extraction
from aeo_scout.parser.html_parser import extract_head, json_ld_blocks, parse_html, types_of

URL = "https://blog.example.com/aeo"


def ld(data) -> str:
    return f'<script type="application/ld+json">{json.dumps(data)}</script>'


def page(head: str = "", body: str = "", lang: str = "") -> str:
    lang_attr = f' lang="{lang}"' if lang else ""
    return f"<html{lang_attr}><head>{head}</head><body>{body}</body></html>"


# --------------------------------------------------------------------------- #
#                                  Head / JSON-LD                              #
# --------------------------------------------------------------------------- #


def test_head_first_match_wins():
    soup = parse_html(
        page(
            head='<title> Hello </title>'
            '<meta name="description" content="first">'
            '<meta name="description" content="second">'
            '<meta property="og:image" content="">'
        )
    )
    head = extract_head(soup)
    assert head == {"title": "Hello", "description": "first"}


def test_head_fields_of_article(article_page, fixed_now):
    bundle = run_extraction(article_page, URL, now=fixed_now)
    assert bundle.head["title"] == "How answer engines read your pages in 2024"
    assert bundle.head["canonical"] == "https://blog.example.com/aeo"
    assert bundle.head["hreflang"] == "https://blog.example.com/de/aeo"
    assert bundle.head["published_time"] == "2024-01-01T00:00:00Z"
    assert "robots" not in bundle.head


def test_json_ld_array_and_type_list():
    soup = parse_html(
        page(head=ld([{"@type": ["Article", "NewsArticle"]}, "junk", {"type": "Person"}]))
    )
    (block,) = json_ld_blocks(soup)
    assert block.ok
    assert [types_of(obj) for obj in block.objects()] == [["Article", "NewsArticle"], ["Person"]]


def test_schema_snippet_truncated_but_types_kept(fixed_now):
    data = {"@type": "Article", "headline": "A rather long headline for the snippet"}
    bundle = run_extraction(page(head=ld(data)), URL, schema_cap=20, now=fixed_now)
    assert bundle.schema == json.dumps(data)[:20] + TRUNCATION_MARKER
    assert bundle.metrics.structured_data.types == ("Article",)
    assert bundle.metrics.structured_data.json_ld_blocks == 1


def test_schema_whitespace_runs_removed(fixed_now):
    raw = '{  "@type":  "WebPage"  }'
    bundle = run_extraction(
        page(head=f'<script type="application/ld+json">{raw}</script>'), URL, now=fixed_now
    )
    assert bundle.schema == '{"@type":"WebPage"}'


def test_malformed_block_does_not_abort(fixed_now):
    head = '<script type="application/ld+json">{not json</script>' + ld({"@type": "Article"})
    bundle = run_extraction(page(head=head), URL, now=fixed_now)
    assert bundle.schema.splitlines()[0] == "{not json"
    assert bundle.metrics.structured_data.json_ld_blocks == 2
    assert bundle.metrics.structured_data.types == ("Article",)


def test_speakable_blocks(fixed_now):
    head = ld({"@type": "SpeakableSpecification", "cssSelector": [".tldr"]})
    bundle = run_extraction(page(head=head, body="<speakable>Hi</speakable>"), URL, now=fixed_now)
    assert bundle.metrics.speakable_ready.speakable_blocks == 2


# --------------------------------------------------------------------------- #
#                                     Text                                     #
# --------------------------------------------------------------------------- #


def test_text_budget_keeps_whole_sentences(fixed_now):
    body = (
        "<article><p>One two three four five. Six seven eight nine ten. "
        "Eleven twelve thirteen fourteen fifteen.</p></article>"
    )
    bundle = run_extraction(page(body=body), URL, max_words=12, now=fixed_now)
    assert bundle.text == "One two three four five. Six seven eight nine ten."


def test_text_under_budget_is_complete(fixed_now):
    body = "<article><p>Short pages are returned in full by the extractor.</p></article>"
    bundle = run_extraction(page(body=body), URL, max_words=1200, now=fixed_now)
    assert bundle.text == "Short pages are returned in full by the extractor."


def test_empty_document(fixed_now):
    bundle = run_extraction("", URL, now=fixed_now)
    assert bundle.text == ""
    assert bundle.head == {}
    assert bundle.schema == ""
    assert bundle.metrics.answer_upfront.tldr_source == "document"
    assert bundle.metrics.snippet_conciseness.avg_sentence_len == 0


def test_links_inlined_and_counted(fixed_now):
    body = (
        "<article><p>Answer engines cite sources that are easy to verify. "
        'Compare <a href="https://en.wikipedia.org/wiki/AEO">the encyclopedia entry</a>, '
        '<a href="https://www.wikidata.org/wiki/Q1">the entity record</a>, '
        '<a href="https://example.org/guide">an external guide</a>, '
        '<a href="/about">our about page</a> and '
        '<a href="mailto:team@example.com">an email address</a> before publishing.</p></article>'
    )
    bundle = run_extraction(page(body=body), URL, now=fixed_now)
    eeat = bundle.metrics.e_e_a_t_signals
    assert eeat.entity_links == 2
    assert eeat.outbound_citations == 3
    assert "our about page (https://blog.example.com/about)" in bundle.text


# --------------------------------------------------------------------------- #
#                                    Metrics                                   #
# --------------------------------------------------------------------------- #


def test_answer_upfront_tldr(article_page, fixed_now):
    metrics = run_extraction(article_page, URL, now=fixed_now).metrics.answer_upfront
    assert metrics.tldr_source == ".tldr"
    assert metrics.tldr_text == "Answer engines favour pages that answer the question first."
    assert metrics.words_in_tldr == 9


def test_answer_upfront_fallback(fixed_now):
    metrics = run_extraction(
        page(body="<main><p>Hello world here.</p></main>"), URL, now=fixed_now
    ).metrics.answer_upfront
    assert metrics.tldr_source == "article/main"
    assert metrics.words_in_tldr == 3


def test_media_metrics(fixed_now):
    body = (
        '<img src="a.png" alt="">'
        '<img data-src="b.png" alt="A cat">'
        '<img data-lazy-src="c.png" alt="A cat sitting on a mat">'
        '<img alt="no source at all here">'
        '<video src="a.mp4"><track kind="captions" src="a.vtt"></video>'
        '<video src="b.mp4"></video>'
    )
    media = run_extraction(page(body=body), URL, now=fixed_now).metrics.media_alt_caption
    assert media.images_total == 3
    assert media.images_missing_good_alt == 2
    assert media.sample_bad_alts == ("", "A cat")
    assert media.videos_missing_captions == 1


def test_media_samples_capped(fixed_now):
    body = "".join(f'<img src="{i}.png" alt="x{i}">' for i in range(7))
    media = run_extraction(page(body=body), URL, now=fixed_now).metrics.media_alt_caption
    assert media.images_missing_good_alt == 7
    assert len(media.sample_bad_alts) == 5


def test_conciseness(fixed_now):
    long_heading = " ".join(["word"] * 13)
    body = (
        f"<h2>{long_heading}</h2><h2>Short heading</h2>"
        "<p>First paragraph has five words.</p><p>Second one.</p>"
    )
    metrics = run_extraction(page(body=body), URL, now=fixed_now).metrics.snippet_conciseness
    assert metrics.first_para_words == 5
    assert metrics.long_headings == 1


@pytest.mark.parametrize(
    "modified,now,expected",
    [
        ("2024-02-20T00:00:00Z", datetime(2024, 3, 1, tzinfo=timezone.utc), 10),
        ("2024-02-29T12:00:00Z", datetime(2024, 3, 1, tzinfo=timezone.utc), 1),
        ("2024-02-29T00:00:00", datetime(2024, 3, 1, tzinfo=timezone.utc), 1),
        ("yesterday", datetime(2024, 3, 1, tzinfo=timezone.utc), None),
        ("Wed, 01 May 2024 00:00:00 GMT", datetime(2024, 6, 1, tzinfo=timezone.utc), 31),
        ("May 1, 2024", datetime(2024, 6, 1, tzinfo=timezone.utc), 31),
        ("2024/05/01", datetime(2024, 6, 1, tzinfo=timezone.utc), 31),
        ("2024-05-01T02:00:00+02:00", datetime(2024, 6, 1, tzinfo=timezone.utc), 31),
    ],
)
def test_days_since_modified(modified, now, expected):
    head = f'<meta property="article:modified_time" content="{modified}">'
    freshness = run_extraction(page(head=head), URL, now=now).metrics.freshness_meta
    assert freshness.modified == modified
    assert freshness.days_since_modified == expected


def test_freshness_absent(fixed_now):
    freshness = run_extraction(page(), URL, now=fixed_now).metrics.freshness_meta
    assert freshness.published is None
    assert freshness.modified is None
    assert freshness.days_since_modified is None


@pytest.mark.parametrize(
    "head,body,expected",
    [
        ('<meta name="author" content="Jane">', "", True),
        (ld({"@type": "Person", "name": "Jane"}), "", True),
        (ld({"@type": "Article", "author": {"name": "Jane"}}), "", True),
        ("", '<span class="byline">By Jane</span>', True),
        ("", '<div class="author-box"></div>', False),
        ("", "<p>Nobody wrote this.</p>", False),
    ],
)
def test_author_present(head, body, expected, fixed_now):
    eeat = run_extraction(page(head=head, body=body), URL, now=fixed_now).metrics.e_e_a_t_signals
    assert eeat.author_present is expected


def test_https_flag(fixed_now):
    assert run_extraction(page(), URL, now=fixed_now).metrics.e_e_a_t_signals.https is True
    assert (
        run_extraction(page(), "http://example.com/", now=fixed_now).metrics.e_e_a_t_signals.https
        is False
    )


def test_hreflang_metrics(article_page, fixed_now):
    hreflang = run_extraction(article_page, URL, now=fixed_now).metrics.hreflang_lang_meta
    assert hreflang.canonical_tags == 1
    assert hreflang.hreflang_tags == 1
    assert hreflang.html_lang == "en"


def test_core_web_vitals_not_tested(fixed_now):
    vitals = run_extraction(page(), URL, now=fixed_now).metrics.core_web_vitals
    assert vitals.tested is False
    assert vitals.lcp_ms is None


def test_crawler_access_from_robots(fixed_now):
    bundle = run_extraction(page(), URL, robots_text="User-agent: GPTBot\nDisallow: /", now=fixed_now)
    assert bundle.crawler_access["GPTBot"] == "block"
    assert set(bundle.crawler_access) == set(TRACKED_AGENTS)


def test_extraction_is_deterministic(article_page, fixed_now):
    first = run_extraction(article_page, URL, robots_text="User-agent: *\nDisallow: /x", now=fixed_now)
    second = run_extraction(article_page, URL, robots_text="User-agent: *\nDisallow: /x", now=fixed_now)
    assert first.to_dict() == second.to_dict()
    assert list(first.metrics.to_dict()) == [
        "structured_data",
        "answer_upfront",
        "freshness_meta",
        "e_e_a_t_signals",
        "snippet_conciseness",
        "speakable_ready",
        "media_alt_caption",
        "hreflang_lang_meta",
        "core_web_vitals",
    ]


def test_headings_listed_in_order(article_page, fixed_now):
    bundle = run_extraction(article_page, URL, now=fixed_now)
    assert bundle.headings.splitlines() == [
        "How answer engines read your pages",
        "Structure",
        "Details",
    ]
