"""Links scanner: internal/external balance, generic anchor text, broken external links."""

from __future__ import annotations

from typing import Awaitable, Callable, List, Optional, Sequence

from bs4 import BeautifulSoup

from aeo_scout.crawler.models import LinkStatus
from aeo_scout.logger import logger
from aeo_scout.models import ScoreBlock
from aeo_scout.scanners.base import CheckList
from aeo_scout.utils import host_of, is_http_url, remove_duplicates, resolve_url

LinkCheck = Callable[[Sequence[str]], Awaitable[List[LinkStatus]]]

GENERIC_ANCHOR_PHRASES = ("click here", "read more", "learn more", "click", "here", "more", "link")
MAX_GENERIC_PERCENT = 30


def classify_links(soup: BeautifulSoup, url: str) -> tuple[int, int, int, int, List[str]]:
    """Count internal, external, generic-anchor and total links; list external URLs."""
    page_host = host_of(url)
    internal = external = generic = total = 0
    externals: List[str] = []
    for anchor in soup.select("a[href]"):
        total += 1
        text = anchor.get_text().strip().lower()
        if any(phrase in text for phrase in GENERIC_ANCHOR_PHRASES):
            generic += 1
        full = resolve_url(str(anchor.get("href", "")), url)
        if full is None or not is_http_url(full):
            continue
        if host_of(full) == page_host:
            internal += 1
        else:
            external += 1
            externals.append(full)
    return internal, external, generic, total, remove_duplicates(externals)


async def scan_links(
    soup: BeautifulSoup, url: str, link_checker: Optional[LinkCheck] = None
) -> ScoreBlock:
    checks = CheckList("Links")
    internal, external, generic, total, externals = classify_links(soup, url)

    if internal == 0:
        checks.warn(
            "Add internal links",
            "No Internal Links",
            "No internal links found",
            "Add internal links to related content",
        )
    else:
        checks.ok(f"{internal} internal links")

    if external == 0:
        checks.warn(
            "Add external links",
            "No External Links",
            "No external links found",
            "Add relevant external links for credibility",
        )
    else:
        checks.ok(f"{external} external links")

    generic_percent = generic / total * 100 if total else 0.0
    if generic_percent > MAX_GENERIC_PERCENT:
        checks.warn(
            "Improve anchor text quality",
            "Poor Anchor Text",
            f"{generic_percent:.1f}% of links use generic anchor text",
            "Replace generic anchor text with descriptive, keyword-rich phrases",
        )
    else:
        checks.ok("Good anchor text quality")

    if link_checker is not None:
        statuses = await link_checker(externals)
        broken = [s for s in statuses if s.broken]
        if broken:
            logger.debug("Broken links on %s: %s", url, [s.url for s in broken])
            checks.fail(
                f"{len(broken)} broken links",
                "Broken Links Found",
                f"{len(broken)} broken links detected",
                "Fix or remove broken links",
                selector_example=broken[0].url,
            )
        else:
            checks.ok("No broken links detected")

    return checks.to_block()
