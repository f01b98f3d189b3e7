"""
Submission-related Pydantic schemas.

These schemas carry a respondent's answers into the PII-separating
submission workflow.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


class AnswerInput(BaseModel):
    """One answer as received on the wire. `value` is parsed later."""

    question_id: str
    value: Any = None


class SubmitFormRequest(BaseModel):
    """Schema for submitting a form. The form id comes from the URL."""

    respondent_name: str
    respondent_email: str
    role: Optional[str] = None
    answers: list[AnswerInput] = Field(default_factory=list)


class SubmissionCreated(BaseModel):
    """Response after a submission has been committed."""

    response_id: str
    status: Literal["created"] = "created"
