"""
Anonymous per-form statistics. Nothing here identifies a respondent.
"""

from typing import Optional

from pydantic import BaseModel, Field


class RoleCount(BaseModel):
    role: Optional[str]
    count: int


class RatingCount(BaseModel):
    rating: int
    count: int


class QuestionStat(BaseModel):
    """Aggregates over the numeric answers to one question."""

    question_id: str
    response_count: int = Field(..., description="Distinct responses with a numeric answer")
    average_rating: Optional[float] = None
    rating_distribution: list[RatingCount] = Field(default_factory=list)


class AnonymousStats(BaseModel):
    form_id: str
    total_responses: int
    role_distribution: list[RoleCount] = Field(default_factory=list)
    question_stats: list[QuestionStat] = Field(default_factory=list)
