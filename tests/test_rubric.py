# File: tests/test_rubric.py
import json

import pytest

from aeo_scout.rubric import (
    RUBRIC,
    RUBRIC_KEYS,
    load_rubric,
    rubric_fixes,
    rubric_to_score_input,
    weighted_rubric_score,
)


def test_rubric_weights():
    assert len(RUBRIC_KEYS) == 9
    assert RUBRIC["structured_data"] == 1.7
    assert sum(RUBRIC.values()) == pytest.approx(10.0)


@pytest.mark.parametrize(
    "scores,expected",
    [
        ({k: 5 for k in RUBRIC_KEYS}, 10.0),
        ({}, 0.0),
        ({k: 9 for k in RUBRIC_KEYS}, 10.0),
        ({"structured_data": 5}, 1.7),
        ({"unknown": 5}, 0.0),
    ],
)
def test_weighted_rubric_score(scores, expected):
    assert weighted_rubric_score(scores) == pytest.approx(expected)


def test_rubric_to_score_input():
    result = {
        "score": 6.5,
        "category_scores": {"structured_data": 4, "answer_upfront": 2.5},
        "recommendations": [
            {"problem": "No FAQ", "fix": "Add FAQPage", "impact": "high", "effort": "low"},
            {"fix": "no problem text, skipped"},
            "garbage",
        ],
    }
    score_input = rubric_to_score_input("https://example.com", result)
    assert score_input.score == 65
    assert score_input.category_scores["structured_data"] == 80
    assert score_input.category_scores["answer_upfront"] == 50
    assert score_input.category_scores["hreflang_lang_meta"] == 0
    assert [f.problem for f in score_input.fixes] == ["No FAQ"]
    assert score_input.fixes[0].category == "general"


def test_rubric_score_computed_when_missing():
    score_input = rubric_to_score_input(
        "https://example.com", {"category_scores": {k: 5 for k in RUBRIC_KEYS}}
    )
    assert score_input.score == 100


def test_rubric_fixes_recommendations_first():
    result = {
        "category_scores": {k: 5 for k in RUBRIC_KEYS} | {"crawler_access": 1},
        "recommendations": [{"problem": "Robots blocks GPTBot", "fix": "Allow GPTBot", "effort": "low"}],
    }
    fixes = rubric_fixes("https://example.com", result)
    assert fixes[0].problem == "Robots blocks GPTBot"
    assert fixes[0].category == "general"
    generated = {f.category: f for f in fixes[1:]}
    assert set(generated) == set(RUBRIC_KEYS)
    assert generated["crawler_access"].problem.startswith("Critical")
    assert generated["structured_data"].problem.startswith("Good")


@pytest.mark.parametrize(
    "content,expect_exc",
    [
        (json.dumps({"score": 7}), None),
        ("[1, 2]", TypeError),
        ("{broken", ValueError),
    ],
)
def test_load_rubric(tmp_path, content, expect_exc):
    path = tmp_path / "rubric.json"
    path.write_text(content, encoding="utf-8")
    if expect_exc:
        with pytest.raises(expect_exc):
            load_rubric(path)
    else:
        assert load_rubric(path) == {"score": 7}
