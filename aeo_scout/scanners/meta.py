"""Meta scanner: title and description length bands, robots meta, Open Graph pair."""

from __future__ import annotations

from bs4 import BeautifulSoup

from aeo_scout.models import ScoreBlock
from aeo_scout.scanners.base import CheckList

TITLE_RANGE = (30, 65)
DESCRIPTION_RANGE = (100, 160)


def scan_meta(soup: BeautifulSoup) -> ScoreBlock:
    checks = CheckList("Meta")

    title_tag = soup.find("title")
    title = title_tag.get_text().strip() if title_tag is not None else ""
    low, high = TITLE_RANGE
    if not title:
        checks.fail(
            "Missing title tag",
            "Missing Title Tag",
            "No title tag found. The title tag is the most important on-page SEO element and "
            "is crucial for search engines and answer engines to understand what your page is "
            "about. It appears in search results and browser tabs.",
            "Add a descriptive title tag that includes your primary keyword. Example: "
            "<title>Your Primary Keyword - Secondary Keyword | Brand Name</title>. Keep it "
            f"between {low}-{high} characters for optimal display in search results.",
        )
    elif len(title) < low:
        checks.warn(
            "Expand title length",
            "Title Too Short",
            f"Title is {len(title)} characters (recommended: {low}-{high}). Short titles may "
            "not provide enough context for search engines and users.",
            f"Make title more descriptive ({low}-{high} characters). Include your primary "
            "keyword and make it compelling.",
            selector_example=f"<title>{title}</title>",
        )
    elif len(title) > high:
        checks.warn(
            "Shorten title length",
            "Title Too Long",
            f"Title is {len(title)} characters (recommended: {low}-{high})",
            f"Shorten title to {low}-{high} characters",
            selector_example=f"<title>{title}</title>",
        )
    else:
        checks.ok("Title length optimal")

    desc_tag = soup.select_one("meta[name='description']")
    description = str(desc_tag.get("content") or "") if desc_tag is not None else ""
    low, high = DESCRIPTION_RANGE
    if not description:
        checks.fail(
            "Missing meta description",
            "Missing Meta Description",
            "No meta description found. Meta descriptions appear in search results and help "
            "users understand what your page is about. They're also used by answer engines to "
            "understand your content context.",
            f"Add a compelling meta description ({low}-{high} characters) that includes your "
            "primary keyword and clearly explains what users will find on the page.",
        )
    elif len(description) < low:
        checks.warn(
            "Expand meta description",
            "Meta Description Too Short",
            f"Description is {len(description)} characters (recommended: {low}-{high})",
            f"Expand meta description to {low}-{high} characters",
        )
    elif len(description) > high:
        checks.warn(
            "Shorten meta description",
            "Meta Description Too Long",
            f"Description is {len(description)} characters (recommended: {low}-{high})",
            f"Shorten meta description to {low}-{high} characters",
        )
    else:
        checks.ok("Meta description length optimal")

    robots_tag = soup.select_one("meta[name='robots']")
    robots = str(robots_tag.get("content") or "") if robots_tag is not None else ""
    if "noindex" in robots.lower() or "nofollow" in robots.lower():
        checks.fail(
            "Search engines blocked",
            "Blocking Search Engines",
            f"Robots meta: {robots}",
            "Remove noindex/nofollow to allow search engine indexing",
        )
    else:
        checks.ok("Search engines allowed")

    og_title = soup.select_one("meta[property='og:title']")
    og_description = soup.select_one("meta[property='og:description']")
    if og_title is not None and og_description is not None:
        checks.ok("Open Graph tags present")
    else:
        checks.warn(
            "Add Open Graph tags",
            "Missing Open Graph Tags",
            "Open Graph tags missing for social sharing. These tags control how your content "
            "appears when shared on social media platforms and help answer engines understand "
            "your content better.",
            "Add og:title and og:description for better social sharing. Example: <meta "
            "property='og:title' content='Your Page Title' />. Also consider adding og:image.",
        )

    return checks.to_block()
