"""
Data models for the AEO Scout audit pipeline.

Every stage returns a new frozen value; nothing downstream mutates what an
earlier stage produced.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Literal, Mapping, Optional, Tuple

__all__ = [
    "Access",
    "TRACKED_AGENTS",
    "AuditInput",
    "IssueReport",
    "ScoreBlock",
    "ClarityScan",
    "Fix",
    "ScoreInput",
    "PrioritizedFixes",
    "CodePlaceholders",
    "AuditReport",
    "StructuredDataMetrics",
    "AnswerUpfrontMetrics",
    "FreshnessMetrics",
    "EeatMetrics",
    "ConcisenessMetrics",
    "SpeakableMetrics",
    "MediaMetrics",
    "HreflangMetrics",
    "CoreWebVitals",
    "Metrics",
    "ExtractionBundle",
]

Access = Literal["allow", "block", "partial"]
IssueStatus = Literal["pass", "fail", "warning"]
Impact = Literal["high", "med", "low"]
Effort = Literal["low", "medium", "high"]

#: crawler agents whose access is always reported
TRACKED_AGENTS: Tuple[str, ...] = ("GPTBot", "Google-Extended", "PerplexityBot", "ClaudeBot", "*")


@dataclass(frozen=True, slots=True)
class AuditInput:
    """Raw material of one audit: the page URL, its HTML and its robots.txt."""

    url: str
    raw_html: str
    robots_text: str = ""


# --------------------------------------------------------------------------- #
#                               Scan results                                   #
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class IssueReport:
    group: str
    title: str
    status: IssueStatus
    details: str
    recommendation: str
    selector_example: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if self.selector_example is None:
            del data["selector_example"]
        return data


@dataclass(frozen=True, slots=True)
class ScoreBlock:
    """Result of one category scanner.

    ``score`` is derived from the lengths of ``passed``, ``failed`` and
    ``recommendations``; build instances through
    :func:`aeo_scout.scanners.base.CheckList.to_block`.
    """

    score: int
    passed: Tuple[str, ...] = ()
    failed: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()
    issues: Tuple[IssueReport, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "passed": list(self.passed),
            "failed": list(self.failed),
            "recommendations": list(self.recommendations),
            "issues": [issue.to_dict() for issue in self.issues],
        }


@dataclass(frozen=True, slots=True)
class ClarityScan:
    """Combined output of the six category scanners."""

    url: str
    title: Optional[str]
    global_score: int
    global_summary: str
    issues: Tuple[IssueReport, ...]
    summary_by_category: Mapping[str, ScoreBlock]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "global_score": self.global_score,
            "global_summary": self.global_summary,
            "issues": [issue.to_dict() for issue in self.issues],
            "summary_by_category": {
                name: block.to_dict() for name, block in self.summary_by_category.items()
            },
        }


# --------------------------------------------------------------------------- #
#                                   Fixes                                      #
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class Fix:
    problem: str
    example: str
    fix: str
    impact: Impact
    category: str
    effort: Effort = "medium"
    validation: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], category: str = "general") -> Fix:
        """Build a Fix from an externally produced mapping (e.g. an AI answer)."""
        impact = data.get("impact", "med")
        effort = data.get("effort", "medium")
        return cls(
            problem=str(data.get("problem", "")),
            example=str(data.get("example", "")),
            fix=str(data.get("fix", "")),
            impact=impact if impact in ("high", "med", "low") else "med",
            category=str(data.get("category") or category),
            effort=effort if effort in ("low", "medium", "high") else "medium",
            validation=tuple(str(v) for v in data.get("validation") or ()),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["validation"] = list(self.validation)
        return data


@dataclass(frozen=True, slots=True)
class ScoreInput:
    """What the fix generator needs: category scores plus optional external fixes."""

    url: str
    score: int
    category_scores: Mapping[str, int]
    fixes: Tuple[Fix, ...] = ()


@dataclass(frozen=True, slots=True)
class PrioritizedFixes:
    highlights: Tuple[str, ...]
    quick_wins: Tuple[str, ...]
    fixes: Tuple[Fix, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "highlights": list(self.highlights),
            "quick_wins": list(self.quick_wins),
            "fixes": [f.to_dict() for f in self.fixes],
        }


@dataclass(frozen=True, slots=True)
class CodePlaceholders:
    jsonld: Tuple[str, ...]
    head: Tuple[str, ...]
    dom: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"jsonld": list(self.jsonld), "head": list(self.head), "dom": list(self.dom)}


# --------------------------------------------------------------------------- #
#                       Per-category extraction metrics                        #
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class StructuredDataMetrics:
    json_ld_blocks: int
    types: Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class AnswerUpfrontMetrics:
    words_in_tldr: int
    tldr_text: str
    tldr_source: str


@dataclass(frozen=True, slots=True)
class FreshnessMetrics:
    published: Optional[str]
    modified: Optional[str]
    days_since_modified: Optional[int]


@dataclass(frozen=True, slots=True)
class EeatMetrics:
    author_present: bool
    outbound_citations: int
    entity_links: int
    https: bool


@dataclass(frozen=True, slots=True)
class ConcisenessMetrics:
    first_para_words: int
    avg_sentence_len: int
    long_headings: int


@dataclass(frozen=True, slots=True)
class SpeakableMetrics:
    speakable_blocks: int


@dataclass(frozen=True, slots=True)
class MediaMetrics:
    images_total: int
    images_missing_good_alt: int
    sample_bad_alts: Tuple[str, ...]
    videos_missing_captions: int


@dataclass(frozen=True, slots=True)
class HreflangMetrics:
    canonical_tags: int
    hreflang_tags: int
    html_lang: Optional[str]


@dataclass(frozen=True, slots=True)
class CoreWebVitals:
    """Performance is out of scope: always reported as not tested."""

    tested: bool = False
    lcp_ms: Optional[int] = None
    inp_ms: Optional[int] = None
    cls: Optional[float] = None


@dataclass(frozen=True, slots=True)
class Metrics:
    """Closed set of metric categories; one typed record per category."""

    structured_data: StructuredDataMetrics
    answer_upfront: AnswerUpfrontMetrics
    freshness_meta: FreshnessMetrics
    e_e_a_t_signals: EeatMetrics
    snippet_conciseness: ConcisenessMetrics
    speakable_ready: SpeakableMetrics
    media_alt_caption: MediaMetrics
    hreflang_lang_meta: HreflangMetrics
    core_web_vitals: CoreWebVitals = field(default_factory=CoreWebVitals)

    @classmethod
    def categories(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        out: Dict[str, Dict[str, Any]] = {}
        for name in self.categories():
            record = asdict(getattr(self, name))
            out[name] = {k: list(v) if isinstance(v, tuple) else v for k, v in record.items()}
        return out


@dataclass(frozen=True, slots=True)
class ExtractionBundle:
    head: Mapping[str, str]
    schema: str
    headings: str
    text: str
    metrics: Metrics
    crawler_access: Mapping[str, Access]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "head": dict(self.head),
            "schema": self.schema,
            "headings": self.headings,
            "text": self.text,
            "metrics": self.metrics.to_dict(),
            "crawler_access": dict(self.crawler_access),
        }


# --------------------------------------------------------------------------- #
#                                 The report                                   #
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class AuditReport:
    url: str
    score: int
    category_scores: Mapping[str, int]
    fixes: Tuple[Fix, ...]
    prioritized: PrioritizedFixes
    code_placeholders: CodePlaceholders
    title: Optional[str] = None
    summary: Optional[str] = None
    score_blocks: Mapping[str, ScoreBlock] = field(default_factory=dict)
    metrics: Optional[Metrics] = None
    crawler_access: Mapping[str, Access] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "score": self.score,
            "summary": self.summary,
            "category_scores": dict(self.category_scores),
            "score_blocks": {name: b.to_dict() for name, b in self.score_blocks.items()},
            "fixes": [f.to_dict() for f in self.fixes],
            "prioritized": self.prioritized.to_dict(),
            "code_placeholders": self.code_placeholders.to_dict(),
            "metrics": self.metrics.to_dict() if self.metrics is not None else None,
            "crawler_access": dict(self.crawler_access),
        }
