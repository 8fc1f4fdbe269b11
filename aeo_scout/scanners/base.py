"""Shared pieces of the category scanners: the score formula and a check collector."""

from __future__ import annotations

from typing import List, Optional

from aeo_scout.models import IssueReport, ScoreBlock
from aeo_scout.utils import round_half_up

__all__ = ["category_score", "CheckList"]


def category_score(passed: int, failed: int, recommendations: int) -> int:
    """Passes weigh 2, warnings 1, failures 0, over twice the number of checks.

    An empty category scores 100; the result is clamped to ``[0, 100]``.
    """
    total = passed + failed + recommendations
    if total == 0:
        return 100
    score = round_half_up((passed * 2 + recommendations * 1 + failed * 0) / (total * 2) * 100)
    return max(0, min(100, score))


class CheckList:
    """Collects the outcome of one scanner's checks and freezes it into a ScoreBlock."""

    def __init__(self, group: str) -> None:
        self.group = group
        self.passed: List[str] = []
        self.failed: List[str] = []
        self.recommendations: List[str] = []
        self.issues: List[IssueReport] = []

    def ok(self, label: str) -> None:
        self.passed.append(label)

    def fail(
        self,
        label: Optional[str],
        title: str,
        details: str,
        recommendation: str,
        selector_example: Optional[str] = None,
    ) -> None:
        """Record a failure; ``label=None`` adds the issue without a failed entry."""
        self.issues.append(
            IssueReport(self.group, title, "fail", details, recommendation, selector_example)
        )
        if label is not None:
            self.failed.append(label)

    def warn(
        self,
        label: str,
        title: str,
        details: str,
        recommendation: str,
        selector_example: Optional[str] = None,
    ) -> None:
        self.issues.append(
            IssueReport(self.group, title, "warning", details, recommendation, selector_example)
        )
        self.recommendations.append(label)

    def to_block(self) -> ScoreBlock:
        return ScoreBlock(
            score=category_score(len(self.passed), len(self.failed), len(self.recommendations)),
            passed=tuple(self.passed),
            failed=tuple(self.failed),
            recommendations=tuple(self.recommendations),
            issues=tuple(self.issues),
        )
