"""Database models module."""

from models.answer import Answer
from models.respondent import Respondent
from models.response import FormResponse

__all__ = [
    "Respondent",
    "FormResponse",
    "Answer",
]
