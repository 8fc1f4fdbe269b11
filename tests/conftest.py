# File: tests/conftest.py
from datetime import datetime, timezone

import pytest

from aeo_scout.config import AuditConfig
from pages import faq_block, words

FIXED_NOW = datetime(2024, 3, 1, tzinfo=timezone.utc)


@pytest.fixture()
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture()
def audit_config() -> AuditConfig:
    """Config with short timeouts for network tests."""
    return AuditConfig(timeout=5.0, link_check_limit=10)


@pytest.fixture()
def no_h1_page() -> str:
    """A page with no <h1> and a 150-word body."""
    return (
        "<html><head><title>Short page</title></head><body>"
        f"<main><h2>Section</h2><p>{words(148)}</p></main>"
        "</body></html>"
    )


@pytest.fixture()
def two_h1_faq_page() -> str:
    """A page with two <h1> tags and a valid FAQPage JSON-LD block."""
    return (
        "<html><head><title>Frequently asked questions about answer engines</title>"
        f"{faq_block()}</head><body><main>"
        "<h1>First heading</h1><h1>Second heading</h1>"
        f"<p>{words(320)}</p></main></body></html>"
    )


@pytest.fixture()
def article_page() -> str:
    """A reasonably complete article page."""
    paragraph = (
        "Answer engines read structured pages quickly. "
        "They prefer short sentences and clear headings. "
        'See <a href="https://en.wikipedia.org/wiki/Search_engine">search engines</a> '
        'and <a href="https://example.org/guide">an external guide</a> '
        'or our <a href="/about">about page</a> for details. '
    )
    return (
        '<html lang="en"><head>'
        "<title>How answer engines read your pages in 2024</title>"
        '<meta name="description" content="A practical walkthrough of how answer engines '
        'parse headings, structured data and summaries on a typical article page.">'
        '<meta name="author" content="Jane Doe">'
        '<link rel="canonical" href="https://blog.example.com/aeo">'
        '<link rel="alternate" hreflang="de" href="https://blog.example.com/de/aeo">'
        '<meta property="og:title" content="How answer engines read your pages">'
        '<meta property="og:description" content="A practical walkthrough">'
        '<meta property="article:published_time" content="2024-01-01T00:00:00Z">'
        '<meta property="article:modified_time" content="2024-02-20T00:00:00Z">'
        f"{faq_block()}"
        "</head><body>"
        '<a href="#main">Skip to content</a>'
        '<nav class="breadcrumb"><a href="/">Home</a></nav>'
        '<main id="main"><article>'
        "<h1>How answer engines read your pages</h1>"
        '<p class="tldr">Answer engines favour pages that answer the question first.</p>'
        f"<h2>Structure</h2><p>{paragraph * 3}</p>"
        f"<h3>Details</h3><p><strong>Key point:</strong> {paragraph * 3}</p>"
        '<img src="a.png" alt="">'
        '<img src="b.png" alt="A diagram of how crawlers parse headings">'
        "</article></main></body></html>"
    )
