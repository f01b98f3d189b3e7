"""Schemas module initialization."""

from schemas.response import AnswerOut, ErasureResult, ResponseWithPII
from schemas.stats import AnonymousStats, QuestionStat, RatingCount, RoleCount
from schemas.submission import AnswerInput, SubmissionCreated, SubmitFormRequest

__all__ = [
    "AnswerInput",
    "SubmitFormRequest",
    "SubmissionCreated",
    "AnswerOut",
    "ResponseWithPII",
    "ErasureResult",
    "AnonymousStats",
    "QuestionStat",
    "RatingCount",
    "RoleCount",
]
