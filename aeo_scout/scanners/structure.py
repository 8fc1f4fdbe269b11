"""Structure scanner: single H1, heading hierarchy, semantic landmarks, div ratio."""

from __future__ import annotations

from bs4 import BeautifulSoup

from aeo_scout.models import ScoreBlock
from aeo_scout.scanners.base import CheckList

SEMANTIC_TAGS = "main, article, section, nav, header, footer"
MAX_DIV_PERCENT = 80


def scan_structure(soup: BeautifulSoup) -> ScoreBlock:
    checks = CheckList("Structure")

    h1_tags = soup.find_all("h1")
    if not h1_tags:
        checks.fail(
            "Missing H1 tag",
            "Missing H1 Tag",
            "No H1 tag found on the page. H1 tags are crucial for search engines and answer "
            "engines to understand your main topic. They should contain your primary keyword "
            "and clearly describe what the page is about.",
            "Add exactly one H1 tag with your main page title. Example: <h1>Your Main Page "
            "Title with Primary Keyword</h1>. Make it descriptive and include your target "
            "keyword naturally.",
        )
    elif len(h1_tags) > 1:
        checks.fail(
            "Multiple H1 tags",
            "Multiple H1 Tags",
            f"Found {len(h1_tags)} H1 tags on the page. Multiple H1 tags confuse search engines "
            "about your main topic and can hurt your rankings. Each page should have only one "
            "H1 tag.",
            "Use only one H1 tag per page. Keep the most important one and convert others to "
            "H2 or H3 tags. The H1 should represent your main topic and primary keyword.",
            selector_example=str(h1_tags[0]),
        )
    else:
        checks.ok("Single H1 tag present")

    # consecutive comparison in document order, no per-branch nesting
    previous = 0
    hierarchy_ok = True
    for heading in soup.find_all(["h1", "h2", "h3", "h4", "h5", "h6"]):
        level = int(heading.name[1])
        if level > previous + 1:
            hierarchy_ok = False
            checks.fail(
                "Invalid heading hierarchy",
                "Invalid Heading Hierarchy",
                f"Heading level {level} appears without level {level - 1}. This breaks the "
                "logical structure of your content and confuses both users and search engines. "
                "Answer engines rely on proper heading hierarchy to understand content "
                "relationships and extract relevant information for featured snippets.",
                "Follow proper heading hierarchy: H1 → H2 → H3 → H4 → H5 → H6. Never skip "
                "levels. For example, if you have an H4, you must have at least one H3 before it.",
                selector_example=str(heading),
            )
        previous = level
    if hierarchy_ok:
        checks.ok("Proper heading hierarchy")

    if soup.select_one(SEMANTIC_TAGS) is None:
        checks.warn(
            "Add semantic HTML5 tags",
            "No Semantic HTML Tags",
            "No semantic HTML5 tags found",
            "Use semantic tags like <main>, <article>, <section> for better structure",
        )
    else:
        checks.ok("Semantic HTML tags present")

    total = len(soup.find_all(True))
    div_percent = len(soup.find_all("div")) / total * 100 if total else 0.0
    if div_percent > MAX_DIV_PERCENT:
        checks.warn(
            "Reduce div usage with semantic tags",
            "Excessive Div Usage",
            f"{div_percent:.1f}% of elements are divs",
            "Consider using semantic HTML tags instead of divs",
        )
    else:
        checks.ok("Reasonable div usage")

    return checks.to_block()
