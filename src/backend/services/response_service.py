"""
Admin access to raw responses together with respondent PII.
"""

from collections import defaultdict

from sqlalchemy.ext.asyncio import AsyncSession

from models.answer import Answer
from repositories.answer_repository import AnswerRepository
from repositories.response_repository import ResponseRepository
from schemas.converters import response_model_to_pii_schema
from schemas.response import ResponseWithPII


class ResponseService:
    def __init__(self, db: AsyncSession):
        self.responses = ResponseRepository(db)
        self.answers = AnswerRepository(db)

    async def list_with_pii(self, form_id: str) -> list[ResponseWithPII]:
        """
        All responses to a form, newest first, with name and email.

        Erased respondents show up with name and email set to None.
        """
        rows = await self.responses.list_by_form_with_respondents(form_id)

        answers_by_response: dict[str, list[Answer]] = defaultdict(list)
        for answer in await self.answers.list_by_form(form_id):
            answers_by_response[answer.response_id].append(answer)

        return [
            response_model_to_pii_schema(response, respondent, answers_by_response[response.id])
            for response, respondent in rows
        ]
