"""aeo_scout.aggregator: запуск шести сканеров, глобальный балл и текстовое резюме."""

from __future__ import annotations

import asyncio
from statistics import fmean
from typing import Dict, Iterable, Optional, Sequence

from aeo_scout.logger import logger
from aeo_scout.models import ClarityScan, Fix, IssueReport, ScoreBlock, ScoreInput
from aeo_scout.parser.html_parser import parse_html
from aeo_scout.scanners import CATEGORIES, SYNC_SCANNERS
from aeo_scout.scanners.links import LinkCheck, scan_links
from aeo_scout.utils import round_half_up

__all__ = [
    "calculate_global_score",
    "generate_global_summary",
    "run_clarity_scan",
    "scan_to_score_input",
]

_BANDS = (
    (90, "Excellent! Your content is well-optimized for answer engines. "),
    (80, "Good job! Your content is mostly optimized but has room for improvement. "),
    (70, "Fair performance. Several improvements are needed for better answer engine visibility. "),
    (60, "Below average. Significant improvements are needed to optimize for answer engines. "),
)
_POOR = "Poor performance. Major improvements are required for answer engine optimization. "


def calculate_global_score(blocks: Iterable[ScoreBlock]) -> int:
    """Rounded arithmetic mean of the category scores (100 for no categories)."""
    scores = [block.score for block in blocks]
    return round_half_up(fmean(scores)) if scores else 100


def generate_global_summary(issues: Sequence[IssueReport], global_score: int) -> str:
    """Резюме: оценка по шкале, затем количество fail/warning/pass проблем."""
    fails = sum(1 for i in issues if i.status == "fail")
    warnings = sum(1 for i in issues if i.status == "warning")
    passes = sum(1 for i in issues if i.status == "pass")

    summary = f"Your page scored {global_score}/100 on the AEO clarity scale. "
    summary += next((text for floor, text in _BANDS if global_score >= floor), _POOR)

    if fails:
        summary += f"You have {fails} critical issues that need immediate attention. "
    if warnings:
        summary += f"There are {warnings} improvement opportunities to enhance your content. "
    if passes:
        summary += f"Great! {passes} aspects of your content are already optimized. "
    if global_score < 80:
        summary += "Focus on fixing critical issues first, then address warnings to improve your score. "
    return summary


async def run_clarity_scan(
    html: str, url: str, link_checker: Optional[LinkCheck] = None
) -> ClarityScan:
    """Fan the six scanners out over one parsed DOM and join their results.

    The synchronous scanners run in worker threads; the Links scanner awaits
    *link_checker* (no broken-link check when it is None).
    """
    soup = parse_html(html)
    title_tag = soup.find("title")
    title = title_tag.get_text().strip() if title_tag is not None else ""

    tasks = [asyncio.to_thread(scanner, soup) for scanner in SYNC_SCANNERS.values()]
    tasks.append(scan_links(soup, url, link_checker))
    blocks = await asyncio.gather(*tasks)

    by_category: Dict[str, ScoreBlock] = dict(zip(CATEGORIES, blocks))
    issues = tuple(issue for block in blocks for issue in block.issues)
    global_score = calculate_global_score(blocks)
    logger.debug(
        "Clarity scan of %s: %s", url, {name: b.score for name, b in by_category.items()}
    )
    return ClarityScan(
        url=url,
        title=title or None,
        global_score=global_score,
        global_summary=generate_global_summary(issues, global_score),
        issues=issues,
        summary_by_category=by_category,
    )


def scan_to_score_input(scan: ClarityScan, fixes: Iterable[Fix] = ()) -> ScoreInput:
    """Category scores of a clarity scan, keyed by lower-case category name."""
    return ScoreInput(
        url=scan.url,
        score=scan.global_score,
        category_scores={name.lower(): block.score for name, block in scan.summary_by_category.items()},
        fixes=tuple(fixes),
    )
