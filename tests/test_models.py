"""Tests for the analysis input models."""

import pytest
from pydantic import ValidationError

from lint_report.models import AnalysisResult, FileAnalysis, Issue, Recommendation, normalize_level


def test_levels_default_to_medium():
    assert Issue().severity == "medium"
    assert Recommendation().priority == "medium"
    assert Issue(severity=None).severity == "medium"
    assert Recommendation(priority="urgent").priority == "medium"


def test_levels_are_case_insensitive():
    assert Issue(severity="HIGH").severity == "high"
    assert Recommendation(priority=" Low ").priority == "low"
    assert normalize_level(3) == "medium"


def test_null_text_fields_become_empty():
    issue = Issue(type=None, description=None, suggestion=None)
    assert issue.type == issue.description == issue.suggestion == ""
    rec = Recommendation(category=None, description=None, impact=None)
    assert rec.category == rec.description == rec.impact == ""


def test_analysis_from_json_with_nulls():
    analysis = AnalysisResult.model_validate({
        "overall_debt_score": 55,
        "summary": None,
        "file_analyses": [{"file_path": "a.py", "debt_score": 10, "issues": None}],
        "recommendations": None,
    })
    assert analysis.summary == ""
    assert analysis.file_analyses[0].issues == []
    assert analysis.recommendations == []


@pytest.mark.parametrize("score", [-1, 101])
def test_scores_outside_range_are_rejected(score):
    with pytest.raises(ValidationError):
        AnalysisResult(overall_debt_score=score)
    with pytest.raises(ValidationError):
        FileAnalysis(file_path="a.py", debt_score=score)
