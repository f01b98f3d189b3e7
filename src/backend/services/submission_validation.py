"""
Submission validation.

Runs before the submission workflow touches any store. Every failure is a
ValidationError carrying a message that is safe to show the respondent.
"""

import math
import re
from dataclasses import dataclass
from typing import Optional

from core.config import settings
from core.errors import ValidationError
from schemas.answer_value import AnswerValue, RatedValue, ScalarValue, parse_answer_value, text_parts
from schemas.submission import SubmitFormRequest

SCRIPT_MARKERS = ("<script", "javascript:")
INLINE_HANDLER = re.compile(
    r"\bon(?:abort|blur|change|click|dblclick|error|focus|input|key\w*|load|mouse\w*|submit|unload)\s*=",
    re.IGNORECASE,
)
EMAIL_FORBIDDEN = (";", "--", "/*", "*/", "\\")
MAX_REFERENCE_LENGTH = 64  # form_id / question_id column width


@dataclass(frozen=True)
class ValidatedAnswer:
    question_id: str
    value: AnswerValue


@dataclass(frozen=True)
class ValidatedSubmission:
    """A submission that passed validation, with fields trimmed."""

    form_id: str
    respondent_name: str
    respondent_email: str
    role: Optional[str]
    answers: tuple[ValidatedAnswer, ...]


def _validate_name(name: str) -> str:
    name = name.strip()
    if not name:
        raise ValidationError("Name is required")
    if len(name) > settings.MAX_NAME_LENGTH:
        raise ValidationError(f"Name is too long (max {settings.MAX_NAME_LENGTH} characters)")
    lowered = name.lower()
    if "<" in name or ">" in name or "script" in lowered or "javascript:" in lowered:
        raise ValidationError("Invalid characters in name")
    return name


def _validate_email(email: str) -> str:
    email = email.strip()
    if not email:
        raise ValidationError("Email is required")
    if len(email) > settings.MAX_EMAIL_LENGTH:
        raise ValidationError("Email is too long")

    local, sep, domain = email.partition("@")
    if not sep or not local or not domain or "@" in domain or any(c.isspace() for c in email):
        raise ValidationError("Invalid email address")
    if "." not in domain or domain.startswith(".") or domain.endswith("."):
        raise ValidationError("Invalid email domain")
    if any(marker in email for marker in EMAIL_FORBIDDEN):
        raise ValidationError("Invalid characters in email")
    return email


def _validate_role(role: Optional[str]) -> Optional[str]:
    if role is None:
        return None
    role = role.strip()
    if not role:
        return None
    if len(role) > settings.MAX_ROLE_LENGTH:
        raise ValidationError(f"Role is too long (max {settings.MAX_ROLE_LENGTH} characters)")
    if "<" in role or ">" in role or "script" in role.lower():
        raise ValidationError("Invalid characters in role")
    return role


def is_unsafe_text(text: str) -> bool:
    """True if the text carries an obvious script-injection marker."""
    lowered = text.lower()
    return any(marker in lowered for marker in SCRIPT_MARKERS) or bool(INLINE_HANDLER.search(text))


def _check_number(number: float | int) -> None:
    # ints are always finite; only floats can carry NaN/Infinity
    if isinstance(number, float) and not math.isfinite(number):
        raise ValidationError("Invalid numeric value")


def _validate_value(raw: object) -> AnswerValue:
    try:
        value = parse_answer_value(raw)
    except ValueError as e:
        raise ValidationError(f"Invalid answer value: {e}") from e

    if isinstance(value, ScalarValue):
        _check_number(value.number)
    elif isinstance(value, RatedValue):
        _check_number(value.rating)

    for text in text_parts(value):
        if len(text) > settings.MAX_ANSWER_TEXT_LENGTH:
            raise ValidationError(
                f"Answer text is too long (max {settings.MAX_ANSWER_TEXT_LENGTH} characters)"
            )
        if is_unsafe_text(text):
            raise ValidationError("Invalid content in answer")
    return value


def validate_submission(form_id: str, request: SubmitFormRequest) -> ValidatedSubmission:
    """
    Validate a submission request.

    Raises:
        ValidationError: On the first problem found.
    """
    if not form_id or not form_id.strip():
        raise ValidationError("Form id is required")
    if len(form_id.strip()) > MAX_REFERENCE_LENGTH:
        raise ValidationError("Form id is too long")

    name = _validate_name(request.respondent_name)
    email = _validate_email(request.respondent_email)
    role = _validate_role(request.role)

    if not request.answers:
        raise ValidationError("No answers provided")

    answers = []
    for answer in request.answers:
        question_id = answer.question_id.strip()
        if not question_id:
            raise ValidationError("Every answer needs a question id")
        if len(question_id) > MAX_REFERENCE_LENGTH:
            raise ValidationError("Question id is too long")
        answers.append(ValidatedAnswer(question_id=question_id, value=_validate_value(answer.value)))

    return ValidatedSubmission(
        form_id=form_id.strip(),
        respondent_name=name,
        respondent_email=email,
        role=role,
        answers=tuple(answers),
    )
