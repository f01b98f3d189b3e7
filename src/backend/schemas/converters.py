"""
Schema converter functions.

Centralized helpers for converting SQLAlchemy models to Pydantic schemas.
"""

from typing import TYPE_CHECKING, Iterable, Optional

from schemas.response import AnswerOut, ResponseWithPII

if TYPE_CHECKING:
    from models.answer import Answer
    from models.respondent import Respondent
    from models.response import FormResponse


def response_model_to_pii_schema(
    response: "FormResponse",
    respondent: Optional["Respondent"],
    answers: Iterable["Answer"],
) -> ResponseWithPII:
    """
    Convert a response, its (possibly erased) respondent and its answers
    into the admin PII view.
    """
    return ResponseWithPII(
        id=response.id,
        form_id=response.form_id,
        respondent_id=response.respondent_id,
        respondent_name=respondent.name if respondent else None,
        respondent_email=respondent.email if respondent else None,
        role=response.role,
        submitted_at=response.submitted_at,
        answers=[AnswerOut(question_id=a.question_id, value=a.value) for a in answers],
    )
