"""HTML parsing utilities for AEO Scout.

Everything downstream works on a :class:`bs4.BeautifulSoup` tree produced by
:func:`parse_html`. This module also owns the two lookups several stages
share:

* head fields: a fixed list of ``<head>`` selectors, first match wins;
* JSON-LD blocks: every ``<script type="application/ld+json">`` parsed into a
  :class:`JsonLdBlock` that holds either the decoded data or the parse error,
  so callers count failures instead of catching exceptions.
"""
from __future__ import annotations

import json
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__: Sequence[str] = (
    "HEAD_FIELDS",
    "JsonLdBlock",
    "parse_html",
    "extract_head",
    "json_ld_blocks",
    "json_ld_objects",
    "types_of",
)

#: (field name, CSS selector) pairs read from the document head
HEAD_FIELDS: tuple[tuple[str, str], ...] = (
    ("title", "title"),
    ("description", "meta[name='description']"),
    ("robots", "meta[name='robots']"),
    ("canonical", "link[rel='canonical']"),
    ("og_title", "meta[property='og:title']"),
    ("og_description", "meta[property='og:description']"),
    ("og_url", "meta[property='og:url']"),
    ("og_image", "meta[property='og:image']"),
    ("published_time", "meta[property='article:published_time']"),
    ("modified_time", "meta[property='article:modified_time']"),
    ("hreflang", "link[rel='alternate'][hreflang]"),
)

JSON_LD_SELECTOR = "script[type='application/ld+json']"


@dataclass(frozen=True, slots=True)
class JsonLdBlock:
    """One structured-data block: raw text plus either ``data`` or ``error``."""

    raw: str
    data: Any = None
    error: Optional[str] = None
    tag: Optional[Tag] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def empty(self) -> bool:
        return not self.raw.strip()

    def objects(self) -> list[dict[str, Any]]:
        return list(json_ld_objects(self.data)) if self.ok else []


def parse_html(html: str) -> BeautifulSoup:
    """Parse raw markup into a BeautifulSoup tree (stdlib ``html.parser`` backend)."""
    return BeautifulSoup(html or "", "html.parser")


def _tag_value(tag: Tag) -> str:
    if tag.name == "meta":
        return str(tag.get("content") or "")
    if tag.name == "link":
        return str(tag.get("href") or "")
    return tag.get_text()


def extract_head(soup: BeautifulSoup) -> dict[str, str]:
    """Return the non-empty head fields, in :data:`HEAD_FIELDS` order."""
    head: dict[str, str] = {}
    for name, selector in HEAD_FIELDS:
        tag = soup.select_one(selector)
        if tag is None:
            continue
        value = _tag_value(tag).strip()
        if value:
            head[name] = value
    return head


def parse_json_ld(raw: str, tag: Optional[Tag] = None) -> JsonLdBlock:
    try:
        return JsonLdBlock(raw=raw, data=json.loads(raw), tag=tag)
    except (json.JSONDecodeError, RecursionError) as exc:
        return JsonLdBlock(raw=raw, error=str(exc), tag=tag)


def json_ld_blocks(soup: BeautifulSoup) -> list[JsonLdBlock]:
    """Parse every JSON-LD script of the document, in document order."""
    return [parse_json_ld(tag.get_text(), tag) for tag in soup.select(JSON_LD_SELECTOR)]


def json_ld_objects(data: Any) -> Iterator[dict[str, Any]]:
    """Yield the top-level objects of a decoded block (a single object or an array)."""
    items = data if isinstance(data, list) else [data]
    for item in items:
        if isinstance(item, dict):
            yield item


def types_of(obj: dict[str, Any]) -> list[str]:
    """``@type`` (or plain ``type``) of a JSON-LD object as a list of strings."""
    value = obj.get("@type") or obj.get("type")
    if not value:
        return []
    if isinstance(value, list):
        return [str(v) for v in value if v]
    return [str(value)]
