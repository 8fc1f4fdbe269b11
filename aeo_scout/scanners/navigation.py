"""Navigation scanner: in-page anchors, breadcrumbs, skip links."""

from __future__ import annotations

from bs4 import BeautifulSoup

from aeo_scout.models import ScoreBlock
from aeo_scout.parser.html_parser import json_ld_blocks, types_of
from aeo_scout.scanners.base import CheckList

MIN_ANCHOR_LINKS = 3
BREADCRUMB_SELECTOR = '[aria-label="breadcrumb"], [class*="breadcrumb"], [id*="breadcrumb"]'
SKIP_LINK_SELECTOR = 'a[href^="#main"], a[href^="#content"], a[href^="#skip"]'


def _has_breadcrumb_schema(soup: BeautifulSoup) -> bool:
    return any(
        "BreadcrumbList" in types_of(obj)
        for block in json_ld_blocks(soup)
        for obj in block.objects()
    )


def scan_navigation(soup: BeautifulSoup) -> ScoreBlock:
    checks = CheckList("Navigation")

    anchors = soup.select('a[href^="#"]')
    if len(anchors) < MIN_ANCHOR_LINKS:
        checks.warn(
            "Add more anchor links",
            "Insufficient In-Page Navigation",
            f"Only {len(anchors)} anchor links found",
            "Add more anchor links for better page navigation",
        )
    else:
        checks.ok(f"{len(anchors)} anchor links found")

    if soup.select_one(BREADCRUMB_SELECTOR) is None and not _has_breadcrumb_schema(soup):
        checks.warn(
            "Add breadcrumb navigation",
            "No Breadcrumbs",
            "No breadcrumb navigation found",
            "Add breadcrumb navigation for better user experience",
        )
    else:
        checks.ok("Breadcrumb navigation present")

    if soup.select_one(SKIP_LINK_SELECTOR) is None:
        checks.warn(
            "Add skip navigation links",
            "No Skip Links",
            "No skip navigation links found",
            "Add skip links for better accessibility",
        )
    else:
        checks.ok("Skip links present")

    return checks.to_block()
