"""Fix generator & prioritizer.

:func:`transform_to_report` builds one deterministic :class:`Fix` per scored
category (tier picked by the score band), puts externally supplied fixes in
front of them, drops duplicates and ranks the rest into the final
:class:`AuditReport`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from aeo_scout.logger import logger
from aeo_scout.models import (
    AuditReport,
    ClarityScan,
    CodePlaceholders,
    Effort,
    ExtractionBundle,
    Fix,
    Impact,
    PrioritizedFixes,
    ScoreInput,
)

__all__ = [
    "PLAYBOOKS",
    "HIGHLIGHTS",
    "CODE_PLACEHOLDERS",
    "generate_category_fixes",
    "remove_duplicate_fixes",
    "prioritize_fixes",
    "transform_to_report",
]

MAX_FIXES = 10
MAX_QUICK_WINS = 5
DEDUP_PREFIX = 50

# TODO: derive highlights from the lowest-scoring categories once report consumers stop
# relying on this literal list
HIGHLIGHTS: Tuple[str, ...] = ("structured_data", "answer_upfront", "freshness_meta")

_IMPACT_RANK = {"high": 0, "med": 1, "low": 2}
_EFFORT_RANK = {"low": 0, "medium": 1, "high": 2}


@dataclass(frozen=True, slots=True)
class Playbook:
    """Canned remediation material for one category."""

    display: str
    importance: float
    effort: Effort
    critical: str
    improve: str
    advanced: str
    example: str
    validation: Tuple[str, ...]


PLAYBOOKS: Dict[str, Playbook] = {
    # AI rubric categories
    "structured_data": Playbook(
        "structured data", 0.9, "medium",
        "Implement basic structured data markup immediately",
        "Enhance structured data with additional properties",
        "Implement advanced schema markup and testing",
        '{ "@context": "https://schema.org", "@type": "[CONTENT_TYPE_PLACEHOLDER]" }',
        ("json_ld_valid=true", "schema_type_appropriate=true"),
    ),
    "answer_upfront": Playbook(
        "answer upfront content", 0.85, "low",
        "Add essential answer upfront content",
        "Enhance answer upfront content quality",
        "Implement advanced answer optimization strategies",
        "<p class='tldr'>[PLACEHOLDER_TLDR]</p>",
        ("tldr_words>=30", "tldr_visible=true"),
    ),
    "freshness_meta": Playbook(
        "freshness indicators", 0.8, "low",
        "Add essential date and freshness signals",
        "Enhance freshness signals and update frequency",
        "Implement advanced freshness and update strategies",
        '{ "datePublished": "[YYYY-MM-DD]", "dateModified": "[YYYY-MM-DD]" }',
        ("date_published_exists=true", "date_modified_exists=true"),
    ),
    "e_e_a_t_signals": Playbook(
        "E-E-A-T signals", 0.75, "medium",
        "Implement basic author and expertise signals",
        "Strengthen expertise and authority signals",
        "Add advanced expertise and authority features",
        '<p class="byline">By [AUTHOR_NAME_PLACEHOLDER]</p>',
        ("author_name_exists=true", "author_credentials_exists=true"),
    ),
    "speakable_ready": Playbook(
        "speakable content", 0.7, "medium",
        "Add essential speakable content markup",
        "Optimize speakable content for better voice search",
        "Add advanced voice optimization features",
        '{ "@type": "SpeakableSpecification", "cssSelector": ["h1", ".tldr"] }',
        ("speakable_markup_exists=true", "css_selectors_valid=true"),
    ),
    "snippet_conciseness": Playbook(
        "snippet optimization", 0.65, "medium",
        "Fix critical content structure issues",
        "Improve content structure and readability",
        "Implement advanced content optimization strategies",
        "<!-- [SNIPPET_CONCISENESS_PLACEHOLDER] -->",
        ("snippet_conciseness_score>=80",),
    ),
    "crawler_access": Playbook(
        "crawler accessibility", 0.6, "high",
        "Resolve major crawler blocking issues",
        "Optimize crawler accessibility and indexing",
        "Add advanced crawler optimization features",
        '<meta name="robots" content="[ROBOTS_DIRECTIVES]" />',
        ("robots_txt_accessible=true", "canonical_url_exists=true"),
    ),
    "media_alt_caption": Playbook(
        "media descriptions", 0.55, "low",
        "Add missing alt text and captions",
        "Improve media descriptions and accessibility",
        "Implement advanced media optimization",
        '<figure><img src="[IMG_SRC]" alt="[ALT_TEXT_PLACEHOLDER]" />'
        "<figcaption>[CAPTION_PLACEHOLDER]</figcaption></figure>",
        ("alt_text_exists=true", "alt_text_descriptive=true"),
    ),
    "hreflang_lang_meta": Playbook(
        "hreflang implementation", 0.5, "medium",
        "Set up basic internationalization",
        "Optimize internationalization setup",
        "Add advanced internationalization features",
        '<link rel="alternate" hreflang="en" href="[PAGE_URL_EN]" />',
        ("hreflang_count>=1", "hreflang_attributes_valid=true"),
    ),
    # rule-based scanner categories
    "structure": Playbook(
        "page structure", 0.8, "low",
        "Add a single descriptive H1 and stop skipping heading levels",
        "Tighten the heading hierarchy and wrap content in semantic landmarks",
        "Shape section headings after the questions your readers ask",
        "<main><article><h1>[MAIN_HEADING_PLACEHOLDER]</h1>"
        "<h2>[SECTION_HEADING_PLACEHOLDER]</h2></article></main>",
        ("h1_count=1", "heading_levels_skipped=0"),
    ),
    "meta": Playbook(
        "meta tags", 0.85, "low",
        "Add a title, a meta description and remove noindex/nofollow",
        "Bring title and description lengths into the recommended ranges",
        "Add complete Open Graph metadata for richer previews",
        '<meta name="description" content="[DESCRIPTION_PLACEHOLDER]" />',
        ("title_length=30..65", "meta_description_length=100..160"),
    ),
    "schema": Playbook(
        "schema markup", 0.9, "medium",
        "Add valid JSON-LD structured data and fix malformed blocks",
        "Add FAQPage markup for the main questions the page answers",
        "Extend schema coverage with nested entities and validation",
        '{ "@context": "https://schema.org", "@type": "FAQPage", "mainEntity": '
        '[{ "@type": "Question", "name": "[QUESTION_PLACEHOLDER]", "acceptedAnswer": '
        '{ "@type": "Answer", "text": "[ANSWER_PLACEHOLDER]" } }] }',
        ("json_ld_valid=true", "faq_schema_exists=true"),
    ),
    "navigation": Playbook(
        "page navigation", 0.6, "medium",
        "Add breadcrumbs, skip links and in-page anchors",
        "Add a table of contents with anchor links",
        "Mirror breadcrumbs in BreadcrumbList markup",
        '<nav aria-label="breadcrumb"><a href="[URL_1]">[BREADCRUMB_1]</a></nav>',
        ("breadcrumb_exists=true", "skip_link_exists=true"),
    ),
    "content": Playbook(
        "content depth", 0.75, "high",
        "Write substantially more content with direct answers",
        "Expand thin sections and break up long paragraphs",
        "Add examples, data and emphasis to key answers",
        '<p class="lead">[LEAD_PARAGRAPH_PLACEHOLDER]</p>',
        ("word_count>=500", "avg_paragraph_words<=100"),
    ),
    "links": Playbook(
        "link quality", 0.55, "low",
        "Fix broken links and add internal and external references",
        "Replace generic anchor text with descriptive phrases",
        "Cite authoritative sources for key claims",
        '<a href="[LINK_URL_PLACEHOLDER]">[DESCRIPTIVE_ANCHOR_TEXT]</a>',
        ("broken_links=0", "generic_anchor_ratio<=0.3"),
    ),
}

CODE_PLACEHOLDERS = CodePlaceholders(
    jsonld=(
        '{ "@context": "https://schema.org", "@type": "Article", "headline": "[HEADLINE_PLACEHOLDER]", '
        '"author": { "@type": "Person", "name": "[AUTHOR_NAME_PLACEHOLDER]" } }',
        '{ "@context": "https://schema.org", "@type": "WebPage", "name": "[PAGE_TITLE_PLACEHOLDER]", '
        '"description": "[DESCRIPTION_PLACEHOLDER]" }',
        '{ "@context": "https://schema.org", "@type": "Organization", "name": "[COMPANY_NAME_PLACEHOLDER]", '
        '"url": "[WEBSITE_URL_PLACEHOLDER]" }',
        '{ "@context": "https://schema.org", "@type": "FAQPage", "mainEntity": [{ "@type": "Question", '
        '"name": "[QUESTION_PLACEHOLDER]", "acceptedAnswer": { "@type": "Answer", "text": "[ANSWER_PLACEHOLDER]" } }] }',
        '{ "@context": "https://schema.org", "@type": "BreadcrumbList", "itemListElement": [{ "@type": "ListItem", '
        '"position": 1, "name": "[BREADCRUMB_1]", "item": "[URL_1]" }] }',
        '{ "@context": "https://schema.org", "@type": "Product", "name": "[PRODUCT_NAME_PLACEHOLDER]", '
        '"description": "[PRODUCT_DESCRIPTION_PLACEHOLDER]", "brand": { "@type": "Brand", "name": "[BRAND_NAME_PLACEHOLDER]" } }',
    ),
    head=(
        '<meta name="description" content="[DESCRIPTION_PLACEHOLDER]" />',
        '<meta property="og:title" content="[OG_TITLE_PLACEHOLDER]" />',
        '<meta property="og:description" content="[OG_DESCRIPTION_PLACEHOLDER]" />',
        '<link rel="canonical" href="[CANONICAL_URL_PLACEHOLDER]" />',
        '<meta name="robots" content="[ROBOTS_DIRECTIVES_PLACEHOLDER]" />',
        '<meta property="og:type" content="[OG_TYPE_PLACEHOLDER]" />',
        '<meta property="og:image" content="[OG_IMAGE_PLACEHOLDER]" />',
        '<meta property="og:url" content="[OG_URL_PLACEHOLDER]" />',
        '<meta name="keywords" content="[KEYWORDS_PLACEHOLDER]" />',
    ),
    dom=(
        "<h1>[MAIN_HEADING_PLACEHOLDER]</h1>",
        '<p class="lead">[LEAD_PARAGRAPH_PLACEHOLDER]</p>',
        '<img src="[IMAGE_SRC_PLACEHOLDER]" alt="[ALT_TEXT_PLACEHOLDER]" />',
        '<a href="[LINK_URL_PLACEHOLDER]" title="[LINK_TITLE_PLACEHOLDER]">[LINK_TEXT_PLACEHOLDER]</a>',
        '<div class="summary">[SUMMARY_CONTENT_PLACEHOLDER]</div>',
        '<nav aria-label="[NAVIGATION_LABEL_PLACEHOLDER]">[NAVIGATION_CONTENT_PLACEHOLDER]</nav>',
    ),
)


def playbook_for(category: str) -> Playbook:
    """Playbook of *category*; unknown categories get generic wording."""
    known = PLAYBOOKS.get(category)
    if known is not None:
        return known
    name = category.replace("_", " ")
    return Playbook(
        display=name,
        importance=0.5,
        effort="medium",
        critical=f"Fix critical {name} issues",
        improve=f"Improve {name} implementation",
        advanced=f"Add advanced {name} features",
        example=f"<!-- [{category.upper()}_PLACEHOLDER] -->",
        validation=(f"{category}_score>=80",),
    )


def impact_of(importance: float) -> Impact:
    if importance >= 0.8:
        return "high"
    if importance >= 0.6:
        return "med"
    return "low"


def generate_category_fixes(category_scores: Dict[str, int]) -> List[Fix]:
    """One fix per scored category; the score band picks the tier of the wording."""
    fixes: List[Fix] = []
    for category, raw_score in category_scores.items():
        score = raw_score or 0
        book = playbook_for(category)
        if score < 50:
            problem = f"Critical {book.display} issues (score: {score}). This needs immediate attention."
            text = book.critical
        elif score < 80:
            problem = f"Moderate {book.display} issues (score: {score}). This can be improved."
            text = book.improve
        else:
            problem = (
                f"Good {book.display} implementation (score: {score}). "
                "Consider advanced optimizations."
            )
            text = book.advanced
        fixes.append(
            Fix(
                problem=problem,
                example=book.example,
                fix=text,
                impact=impact_of(book.importance),
                category=category,
                effort=book.effort,
                validation=book.validation,
            )
        )
    return fixes


def dedup_key(fix: Fix) -> str:
    return f"{fix.category}:{fix.problem.lower()[:DEDUP_PREFIX]}"


def remove_duplicate_fixes(fixes: Iterable[Fix]) -> List[Fix]:
    """Keep the first fix for every (category, problem prefix) key."""
    seen: set[str] = set()
    unique: List[Fix] = []
    for fix in fixes:
        key = dedup_key(fix)
        if key not in seen:
            seen.add(key)
            unique.append(fix)
    return unique


def prioritize_fixes(fixes: Sequence[Fix]) -> PrioritizedFixes:
    """Sort by impact (high first), then effort (low first); keep the top ten.

    Quick wins are the fix texts of the low-effort entries among those ten.
    """
    ranked = sorted(fixes, key=lambda f: (_IMPACT_RANK[f.impact], _EFFORT_RANK[f.effort]))[:MAX_FIXES]
    quick_wins = tuple(f.fix for f in ranked if f.effort == "low")[:MAX_QUICK_WINS]
    return PrioritizedFixes(highlights=HIGHLIGHTS, quick_wins=quick_wins, fixes=tuple(ranked))


def transform_to_report(
    score_input: ScoreInput,
    extraction: Optional[ExtractionBundle] = None,
    scan: Optional[ClarityScan] = None,
) -> AuditReport:
    """Assemble the final report from category scores and optional earlier stage outputs."""
    generated = generate_category_fixes(dict(score_input.category_scores))
    unique = remove_duplicate_fixes([*score_input.fixes, *generated])
    prioritized = prioritize_fixes(unique)
    logger.debug(
        "%d fixes (%d external), %d prioritized, %d quick wins",
        len(unique), len(score_input.fixes), len(prioritized.fixes), len(prioritized.quick_wins),
    )
    return AuditReport(
        url=score_input.url,
        score=score_input.score,
        category_scores=dict(score_input.category_scores),
        fixes=tuple(unique),
        prioritized=prioritized,
        code_placeholders=CODE_PLACEHOLDERS,
        title=scan.title if scan is not None else None,
        summary=scan.global_summary if scan is not None else None,
        score_blocks=dict(scan.summary_by_category) if scan is not None else {},
        metrics=extraction.metrics if extraction is not None else None,
        crawler_access=dict(extraction.crawler_access) if extraction is not None else {},
    )
