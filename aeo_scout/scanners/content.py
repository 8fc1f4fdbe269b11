"""Content scanner: word count, paragraph length, emphasis, link/button density."""

from __future__ import annotations

from bs4 import BeautifulSoup

from aeo_scout.models import ScoreBlock
from aeo_scout.scanners.base import CheckList
from aeo_scout.utils import word_count

MAIN_CONTENT_SELECTOR = "main, article, .content, .main, #content, #main"
MIN_WORDS = 300
GOOD_WORDS = 500
MAX_PARAGRAPH_WORDS = 100
MAX_LINK_BUTTON_PERCENT = 50


def main_content(soup: BeautifulSoup):
    """First main-content landmark, else ``<body>``, else the whole document."""
    return soup.select_one(MAIN_CONTENT_SELECTOR) or soup.body or soup


def scan_content(soup: BeautifulSoup) -> ScoreBlock:
    checks = CheckList("Content")
    content = main_content(soup)

    words = word_count(content.get_text(" "))
    if words < MIN_WORDS:
        checks.fail(
            "Insufficient content",
            "Insufficient Content",
            f"Only {words} words found",
            "Add more content with direct answers to common questions",
        )
    elif words < GOOD_WORDS:
        checks.warn(
            "Expand content length",
            "Content Could Be Longer",
            f"{words} words found",
            "Consider expanding content with more detailed information",
        )
    else:
        checks.ok(f"{words} words of content")

    paragraphs = content.find_all("p")
    avg_paragraph = (
        sum(word_count(p.get_text(" ")) for p in paragraphs) / len(paragraphs) if paragraphs else 0.0
    )
    if avg_paragraph > MAX_PARAGRAPH_WORDS:
        checks.warn(
            "Shorten paragraphs",
            "Long Paragraphs",
            f"Average paragraph length: {avg_paragraph:.1f} words",
            "Break long paragraphs into shorter ones for better readability",
        )
    else:
        checks.ok("Good paragraph length")

    if not content.find_all(["strong", "b", "em", "i", "code"]):
        checks.warn(
            "Add content emphasis",
            "No Content Emphasis",
            "No emphasis tags found",
            "Use bold, italic, and code tags to highlight important information",
        )
    else:
        checks.ok("Content emphasis present")

    links = len(content.find_all("a"))
    buttons = len(content.select("button, input[type='button'], input[type='submit']"))
    total = len(content.find_all(True))
    link_percent = (links + buttons) / total * 100 if total else 0.0
    if link_percent > MAX_LINK_BUTTON_PERCENT:
        checks.warn(
            "Add more substantive content",
            "Thin Content",
            f"{link_percent:.1f}% of elements are links/buttons",
            "Add more substantive content beyond links and buttons",
        )
    else:
        checks.ok("Good content-to-link ratio")

    return checks.to_block()
