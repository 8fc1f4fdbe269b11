"""DOM extraction & metrics engine.

:func:`run_extraction` turns one fetched page into an
:class:`~aeo_scout.models.ExtractionBundle`: head fields, minified JSON-LD
snippets, h1–h3 headings, the main-content text cut to a word budget, typed
per-category metrics and the robots.txt crawler-access summary.

The only wall-clock dependency is ``days_since_modified``; pass ``now`` to
pin it and the output is fully deterministic.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone
from statistics import mean
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup
from dateutil import parser as date_parser
from readability import Document
from readability.readability import Unparseable

from aeo_scout.crawler.robots import summarize_robots
from aeo_scout.logger import logger
from aeo_scout.models import (
    AnswerUpfrontMetrics,
    ConcisenessMetrics,
    EeatMetrics,
    ExtractionBundle,
    FreshnessMetrics,
    HreflangMetrics,
    MediaMetrics,
    Metrics,
    SpeakableMetrics,
    StructuredDataMetrics,
)
from aeo_scout.parser.html_parser import extract_head, json_ld_blocks, parse_html, types_of
from aeo_scout.utils import (
    clean_text,
    host_of,
    is_http_url,
    resolve_url,
    round_half_up,
    sentence_lengths,
    split_sentences,
    word_count,
)

__all__ = ["run_extraction", "ENTITY_DOMAINS", "TRUNCATION_MARKER"]

ENTITY_DOMAINS: Tuple[str, ...] = ("wikipedia.org", "wikidata.org", "dbpedia.org")
TRUNCATION_MARKER = "… [truncated]"

TLDR_SELECTORS: Tuple[str, ...] = (".tldr", ".summary", ".lead", ".abstract", "#tldr", "#summary")
AUTHOR_META_SELECTOR = "meta[name='author'], meta[property='article:author']"
BYLINE_SELECTOR = "[class*='author'], .byline, .post-author"
IMAGE_SELECTOR = "img[src], img[data-src], img[data-lazy-src]"

MIN_GOOD_ALT_WORDS = 4
MAX_BAD_ALT_SAMPLES = 5
LONG_HEADING_WORDS = 12

_WS_RUN_RE = re.compile(r"\s{2,}")
_NOISE_TAGS = ("script", "style", "noscript", "template")


# --------------------------------------------------------------------------- #
#                              Main content                                    #
# --------------------------------------------------------------------------- #


def _readable_content(html: str) -> Optional[BeautifulSoup]:
    """Article body found by readability, or None when nothing usable comes out."""
    if not html.strip():
        return None
    try:
        summary = Document(html).summary(html_partial=True)
    except Unparseable as exc:
        logger.debug("Readability could not parse the page: %s", exc)
        return None
    soup = parse_html(summary)
    return soup if soup.get_text(strip=True) else None


def _content_soup(html: str) -> BeautifulSoup:
    soup = _readable_content(html) or parse_html(html)
    for element in soup(list(_NOISE_TAGS)):
        element.decompose()
    return soup


def _inline_links(soup: BeautifulSoup, url: str) -> Tuple[int, int]:
    """Replace every anchor by ``text (absolute-url)``; count entity and outbound links."""
    page_host = host_of(url)
    entity_links = outbound = 0
    for anchor in soup.select("a[href]"):
        full = resolve_url(str(anchor.get("href", "")), url)
        if full is None:
            continue
        text = anchor.get_text().strip()
        anchor.replace_with(f"{text} ({full})")
        if not is_http_url(full):
            continue
        link_host = host_of(full)
        if any(link_host == d or link_host.endswith("." + d) for d in ENTITY_DOMAINS):
            entity_links += 1
        if link_host != page_host:
            outbound += 1
    return entity_links, outbound


def _budget_text(raw_text: str, max_words: int) -> str:
    """Greedy, order-preserving cut: whole sentences until the next would overflow."""
    kept: List[str] = []
    words = 0
    for sentence in split_sentences(raw_text):
        n = word_count(sentence)
        if words + n > max_words:
            break
        kept.append(sentence.strip())
        words += n
    return " ".join(kept)


# --------------------------------------------------------------------------- #
#                              Per-category passes                             #
# --------------------------------------------------------------------------- #


def _author_present(full: BeautifulSoup) -> bool:
    if full.select_one(AUTHOR_META_SELECTOR) is not None:
        return True
    byline = full.select_one(BYLINE_SELECTOR)
    return byline is not None and bool(byline.get_text(strip=True))


def _structured_data(
    full: BeautifulSoup, schema_cap: int
) -> Tuple[List[str], StructuredDataMetrics, SpeakableMetrics, bool]:
    snippets: List[str] = []
    types: List[str] = []
    speakable = 0
    author = False
    for block in json_ld_blocks(full):
        raw = _WS_RUN_RE.sub("", block.raw)
        if len(raw) > schema_cap:
            raw = raw[:schema_cap] + TRUNCATION_MARKER
        snippets.append(raw)
        if not block.ok:
            logger.debug("Skipping malformed JSON-LD block: %s", block.error)
            continue
        for obj in block.objects():
            obj_types = types_of(obj)
            types.extend(obj_types)
            if "SpeakableSpecification" in obj_types:
                speakable += 1
            if obj.get("author") or ("Person" in obj_types and obj.get("name")):
                author = True
    speakable += len(full.find_all("speakable"))
    metrics = StructuredDataMetrics(json_ld_blocks=len(snippets), types=tuple(dict.fromkeys(types)))
    return snippets, metrics, SpeakableMetrics(speakable_blocks=speakable), author


def _answer_upfront(full: BeautifulSoup) -> AnswerUpfrontMetrics:
    for selector in TLDR_SELECTORS:
        el = full.select_one(selector)
        if el is not None:
            text = el.get_text().strip()
            return AnswerUpfrontMetrics(word_count(text), text, selector)
    el = full.select_one("article p, article li, main p, main li")
    source = "article/main"
    if el is None:
        el = full.select_one("p, li")
        source = "document"
    text = el.get_text().strip() if el is not None else ""
    return AnswerUpfrontMetrics(word_count(text), text, source)


def _media(full: BeautifulSoup) -> MediaMetrics:
    images = full.select(IMAGE_SELECTOR)
    bad_alts: List[str] = []
    for img in images:
        alt = str(img.get("alt") or "").strip()
        if word_count(alt) < MIN_GOOD_ALT_WORDS:
            bad_alts.append(alt)
    videos_missing = sum(
        1 for v in full.find_all("video") if v.select_one("track[kind='captions']") is None
    )
    return MediaMetrics(
        images_total=len(images),
        images_missing_good_alt=len(bad_alts),
        sample_bad_alts=tuple(bad_alts[:MAX_BAD_ALT_SAMPLES]),
        videos_missing_captions=videos_missing,
    )


def _conciseness(full: BeautifulSoup, final_text: str) -> ConcisenessMetrics:
    first = full.select_one("p, li")
    lengths = sentence_lengths(final_text)
    long_headings = sum(
        1 for h in full.select("h1, h2, h3") if word_count(h.get_text()) > LONG_HEADING_WORDS
    )
    return ConcisenessMetrics(
        first_para_words=word_count(first.get_text()) if first is not None else 0,
        avg_sentence_len=round_half_up(mean(lengths)) if lengths else 0,
        long_headings=long_headings,
    )


def _parse_date(value: str) -> Optional[datetime]:
    try:
        parsed = date_parser.parse(value.strip())
    except (ValueError, OverflowError):
        logger.debug("Unparseable date %r", value)
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _freshness(full: BeautifulSoup, now: datetime) -> FreshnessMetrics:
    def meta(prop: str) -> Optional[str]:
        tag = full.select_one(f"meta[property='{prop}']")
        if tag is None:
            return None
        return str(tag.get("content") or "") or None

    published = meta("article:published_time")
    modified = meta("article:modified_time")
    days: Optional[int] = None
    if modified:
        modified_at = _parse_date(modified)
        if modified_at is not None:
            days = round_half_up((now - modified_at).total_seconds() / 86_400)
    return FreshnessMetrics(published=published, modified=modified, days_since_modified=days)


def _hreflang(full: BeautifulSoup) -> HreflangMetrics:
    html_tag = full.find("html")
    lang = html_tag.get("lang") if html_tag is not None else None
    return HreflangMetrics(
        canonical_tags=len(full.select("link[rel='canonical']")),
        hreflang_tags=len(full.select("link[rel='alternate'][hreflang]")),
        html_lang=str(lang) if lang else None,
    )


# --------------------------------------------------------------------------- #
#                                  Entry point                                 #
# --------------------------------------------------------------------------- #


def run_extraction(
    html: str,
    url: str,
    robots_text: str = "",
    max_words: int = 1200,
    schema_cap: int = 1024,
    now: Optional[datetime] = None,
) -> ExtractionBundle:
    """Extract head fields, schema snippets, headings, budgeted text and metrics."""
    now = now or datetime.now(timezone.utc)
    full = parse_html(html)

    head = extract_head(full)
    content = _content_soup(html)
    entity_links, outbound = _inline_links(content, url)
    body = content.body or content
    final_text = _budget_text(body.get_text(" ").strip(), max_words)

    snippets, structured, speakable, json_ld_author = _structured_data(full, schema_cap)
    headings = "\n".join(h.get_text().strip() for h in full.select("h1, h2, h3"))

    metrics = Metrics(
        structured_data=structured,
        answer_upfront=_answer_upfront(full),
        freshness_meta=_freshness(full, now),
        e_e_a_t_signals=EeatMetrics(
            author_present=_author_present(full) or json_ld_author,
            outbound_citations=outbound,
            entity_links=entity_links,
            https=url.startswith("https://"),
        ),
        snippet_conciseness=_conciseness(full, final_text),
        speakable_ready=speakable,
        media_alt_caption=_media(full),
        hreflang_lang_meta=_hreflang(full),
    )
    logger.debug("Extracted %d words of text from %s", word_count(final_text), url)

    return ExtractionBundle(
        head=head,
        schema="\n".join(snippets),
        headings=headings,
        text=clean_text(final_text),
        metrics=metrics,
        crawler_access=summarize_robots(robots_text),
    )
