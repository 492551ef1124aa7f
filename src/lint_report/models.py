"""Pydantic models for the technical-debt analysis consumed by the report.

The analysis comes from an upstream model call, so optional text fields
tolerate ``null`` and severity/priority labels are normalised rather than
rejected. Scores are the one thing validated strictly (0-100).
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

Level = Literal["low", "medium", "high"]

_LEVELS = ("low", "medium", "high")


def normalize_level(value) -> str:
    """Fold a severity/priority value to low/medium/high (default medium)."""
    if isinstance(value, str):
        value = value.strip().lower()
        if value in _LEVELS:
            return value
    return "medium"


def _empty_if_none(value):
    return "" if value is None else value


class Issue(BaseModel):
    type: str = ""
    severity: Level = "medium"
    description: str = ""
    suggestion: str = ""

    @field_validator("type", "description", "suggestion", mode="before")
    @classmethod
    def blank_text(cls, v):
        return _empty_if_none(v)

    @field_validator("severity", mode="before")
    @classmethod
    def fold_severity(cls, v):
        return normalize_level(v)


class FileAnalysis(BaseModel):
    file_path: str
    debt_score: int = Field(ge=0, le=100)
    issues: list[Issue] = Field(default_factory=list)

    @field_validator("issues", mode="before")
    @classmethod
    def blank_issues(cls, v):
        return [] if v is None else v


class Recommendation(BaseModel):
    category: str = ""
    priority: Level = "medium"
    description: str = ""
    impact: str = ""

    @field_validator("category", "description", "impact", mode="before")
    @classmethod
    def blank_text(cls, v):
        return _empty_if_none(v)

    @field_validator("priority", mode="before")
    @classmethod
    def fold_priority(cls, v):
        return normalize_level(v)


class AnalysisResult(BaseModel):
    overall_debt_score: int = Field(ge=0, le=100)
    summary: str = ""
    file_analyses: list[FileAnalysis] = Field(default_factory=list)
    recommendations: list[Recommendation] = Field(default_factory=list)

    @field_validator("summary", mode="before")
    @classmethod
    def blank_summary(cls, v):
        return _empty_if_none(v)

    @field_validator("file_analyses", "recommendations", mode="before")
    @classmethod
    def blank_lists(cls, v):
        return [] if v is None else v
