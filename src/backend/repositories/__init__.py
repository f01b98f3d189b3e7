"""Repository modules for database access."""

from repositories.answer_repository import AnswerRepository
from repositories.respondent_repository import RespondentRepository
from repositories.response_repository import ResponseRepository

__all__ = [
    "RespondentRepository",
    "ResponseRepository",
    "AnswerRepository",
]
