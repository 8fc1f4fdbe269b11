"""Weighted AEO rubric used by the AI-driven scoring path.

That path scores nine categories 0–5 and reports a weighted score on a 0–10
scale. Converting its category scores to 0–100 lets the result go through
the same fix generator as the rule-based scan.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

from aeo_scout.fixes import generate_category_fixes
from aeo_scout.models import Fix, ScoreInput
from aeo_scout.utils import round_half_up

__all__ = [
    "RUBRIC",
    "RUBRIC_KEYS",
    "weighted_rubric_score",
    "rubric_to_score_input",
    "rubric_fixes",
    "load_rubric",
]

RUBRIC: Dict[str, float] = {
    "structured_data": 1.7,
    "speakable_ready": 0.7,
    "snippet_conciseness": 1.5,
    "crawler_access": 1.5,
    "freshness_meta": 0.9,
    "e_e_a_t_signals": 1.0,
    "media_alt_caption": 0.8,
    "hreflang_lang_meta": 0.5,
    "answer_upfront": 1.4,
}
RUBRIC_KEYS = tuple(RUBRIC)
MAX_RUBRIC_SCORE = 5


def _clamp(value: float) -> float:
    return max(0.0, min(float(MAX_RUBRIC_SCORE), float(value)))


def weighted_rubric_score(category_scores: Mapping[str, float]) -> float:
    """Weighted mean of the 0–5 rubric scores, scaled to 0–10 (one decimal).

    Missing categories count as 0; unknown keys are ignored.
    """
    total_weight = sum(RUBRIC.values())
    weighted = sum(w * _clamp(category_scores.get(k, 0)) for k, w in RUBRIC.items())
    return round(weighted / total_weight * 10 / MAX_RUBRIC_SCORE, 1)


def rubric_to_score_input(url: str, result: Mapping[str, Any]) -> ScoreInput:
    """Turn an AI audit answer (``score``, ``category_scores``, ``recommendations``) into a ScoreInput."""
    raw_scores = result.get("category_scores") or {}
    category_scores = {
        key: round_half_up(_clamp(raw_scores.get(key, 0)) * 100 / MAX_RUBRIC_SCORE)
        for key in RUBRIC_KEYS
    }
    score = result.get("score")
    if not isinstance(score, (int, float)):
        score = weighted_rubric_score(raw_scores)
    fixes = tuple(
        Fix.from_dict(rec)
        for rec in result.get("recommendations") or ()
        if isinstance(rec, Mapping) and rec.get("problem")
    )
    return ScoreInput(
        url=url,
        score=round_half_up(float(score) * 10),
        category_scores=category_scores,
        fixes=fixes,
    )


def rubric_fixes(url: str, result: Mapping[str, Any]) -> List[Fix]:
    """AI recommendations first, then one playbook fix per rubric category.

    The engine passes these to the report as external fixes, so they are
    deduplicated and ranked together with the rule-based ones.
    """
    score_input = rubric_to_score_input(url, result)
    return [*score_input.fixes, *generate_category_fixes(dict(score_input.category_scores))]


def load_rubric(path: Union[str, Path]) -> Dict[str, Any]:
    """Читает сохранённый JSON-ответ AI-аудита (объект со ``score``, ``category_scores``, ``recommendations``)."""
    path_obj = Path(path)
    try:
        data = json.loads(path_obj.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Неправильный JSON в {path_obj}: {e}") from e
    if not isinstance(data, dict):
        raise TypeError(f"Ожидался JSON-объект в {path_obj}, получено {type(data).__name__}")
    return data
