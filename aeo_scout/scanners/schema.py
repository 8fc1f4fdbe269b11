"""Schema scanner: JSON-LD validity, presence of typed blocks, FAQPage markup."""

from __future__ import annotations

from bs4 import BeautifulSoup

from aeo_scout.logger import logger
from aeo_scout.models import ScoreBlock
from aeo_scout.parser.html_parser import json_ld_blocks, types_of
from aeo_scout.scanners.base import CheckList

RECOGNIZED_TYPES = ("FAQPage", "WebPage", "Article", "Organization", "WebSite")


def scan_schema(soup: BeautifulSoup) -> ScoreBlock:
    checks = CheckList("Schema")

    valid = malformed = 0
    has_faq = False
    for block in json_ld_blocks(soup):
        if block.empty:
            continue
        if not block.ok:
            malformed += 1
            logger.debug("Malformed JSON-LD block: %s", block.error)
            checks.fail(
                None,
                "Malformed JSON-LD Schema",
                "Invalid JSON in schema script",
                "Fix JSON syntax in schema markup",
                selector_example=str(block.tag) if block.tag is not None else block.raw,
            )
            continue
        block_types = [t for obj in block.objects() for t in types_of(obj)]
        if not block_types:
            continue
        valid += 1
        for schema_type in dict.fromkeys(block_types):
            if schema_type in RECOGNIZED_TYPES:
                checks.ok(f"Valid {schema_type} schema found")
        has_faq = has_faq or "FAQPage" in block_types

    if valid == 0:
        checks.fail(
            "No structured data",
            "No Structured Data",
            "No valid structured data found. Structured data helps search engines understand "
            "your content better and increases your chances of appearing in rich snippets, "
            "featured snippets, and answer boxes.",
            "Add JSON-LD structured data for better search visibility. Start with basic "
            "schemas like Organization, WebPage, or Article, then add FAQ, HowTo, or Product "
            "schemas depending on your content type.",
        )
    else:
        checks.ok(f"{valid} valid schema(s) found")

    if has_faq:
        checks.ok("FAQ schema present")
    else:
        checks.warn(
            "Add FAQ schema",
            "Missing FAQ Schema",
            "No FAQ structured data found. FAQ schemas directly provide question-answer pairs "
            "that search engines can use for featured snippets and answer boxes.",
            "Add FAQ schema for your top 3-5 customer questions. Structure it as: "
            "{ '@type': 'FAQPage', 'mainEntity': [{ '@type': 'Question', 'name': 'Question "
            "text', 'acceptedAnswer': { '@type': 'Answer', 'text': 'Answer text' } }] }",
        )

    if malformed:
        checks.failed.append(f"{malformed} malformed schema(s)")

    return checks.to_block()
