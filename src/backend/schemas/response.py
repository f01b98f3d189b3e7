"""
Admin views over stored responses.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class AnswerOut(BaseModel):
    question_id: str
    value: Any


class ResponseWithPII(BaseModel):
    """
    A response joined with its respondent's identity.

    respondent_name/respondent_email are None once the respondent has been
    erased; the response and its answers remain.
    """

    id: str
    form_id: str
    respondent_id: str
    respondent_name: Optional[str] = None
    respondent_email: Optional[str] = None
    role: Optional[str] = None
    submitted_at: datetime
    answers: list[AnswerOut] = Field(default_factory=list)


class ErasureResult(BaseModel):
    message: str = "PII deleted successfully"
    note: str = "Response data remains anonymous in the system"
