"""aeo_scout.utils: URL helpers, word/sentence splitting and text cleanup."""

from __future__ import annotations

import math
import re
from typing import Collection, List, Optional, Sequence
from urllib.parse import urljoin, urlparse, urlunparse

from aeo_scout.logger import logger

__all__: Sequence[str] = (
    "host_of",
    "origin_of",
    "resolve_url",
    "is_http_url",
    "remove_duplicates",
    "word_count",
    "split_sentences",
    "sentence_lengths",
    "clean_text",
    "round_half_up",
)

# terminal punctuation counts only before whitespace or the end of text
_SENTENCE_RE = re.compile(r"\S.*?(?:[.!?]+(?=\s|$)|$)", re.S)
_SENTENCE_BREAK_RE = re.compile(r"[.!?]+(?=\s|$)")


def host_of(url: str) -> str:
    """Lower-cased host of *url* without a leading ``www.``."""
    host = (urlparse(url).hostname or "").lower()
    return host[4:] if host.startswith("www.") else host


def origin_of(url: str) -> str:
    """``scheme://netloc`` part of *url*."""
    parsed = urlparse(url)
    return urlunparse((parsed.scheme, parsed.netloc, "", "", "", ""))


def resolve_url(href: str, base_url: str) -> Optional[str]:
    """Resolve *href* against *base_url*; ``None`` when it cannot be resolved."""
    href = href.strip()
    if not href:
        return None
    try:
        return urljoin(base_url, href)
    except ValueError as exc:
        logger.debug("Cannot resolve %r against %s: %s", href, base_url, exc)
        return None


def is_http_url(url: str) -> bool:
    return urlparse(url).scheme in ("http", "https")


def remove_duplicates(urls: Collection[str]) -> List[str]:
    """Удаляет дубликаты из списка URL, сохраняя порядок."""
    unique = list(dict.fromkeys(urls))
    removed = len(urls) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate URLs", removed)
    return unique


def word_count(text: str) -> int:
    return len(text.split())


def split_sentences(text: str) -> List[str]:
    """Split *text* into sentences ending in ``.``, ``!`` or ``?`` before whitespace.

    A trailing fragment without terminal punctuation is kept as its own
    sentence, so no text is lost.
    """
    return [m.group(0) for m in _SENTENCE_RE.finditer(text) if m.group(0).strip()]


def sentence_lengths(text: str) -> List[int]:
    """Word counts of the sentence fragments between terminal punctuation."""
    return [n for n in (word_count(part) for part in _SENTENCE_BREAK_RE.split(text)) if n]


def clean_text(text: str) -> str:
    """Normalise line breaks, collapse blanks and drop empty lines."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = re.sub(r"[ \t]+", " ", text)
    lines = (line.strip() for line in text.split("\n"))
    return "\n".join(line for line in lines if line)


def round_half_up(value: float) -> int:
    """Round like JavaScript's ``Math.round`` (halves go towards +inf)."""
    return int(math.floor(value + 0.5))
