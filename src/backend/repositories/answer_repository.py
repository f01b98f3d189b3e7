"""
Answer repository for database operations.
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.answer import Answer
from models.response import FormResponse


class AnswerRepository:
    """Repository for individual question answers."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        answer_id: str,
        response_id: str,
        question_id: str,
        value: Any,
    ) -> str:
        """Insert an answer. `value` is the JSON form of an AnswerValue."""
        answer = Answer(
            id=answer_id,
            response_id=response_id,
            question_id=question_id,
            value=value,
        )
        self.db.add(answer)
        await self.db.flush()
        return answer.id

    async def list_by_response(self, response_id: str) -> list[Answer]:
        result = await self.db.execute(
            select(Answer).where(Answer.response_id == response_id).order_by(Answer.question_id)
        )
        return list(result.scalars().all())

    async def list_by_form(self, form_id: str) -> list[Answer]:
        """All answers belonging to responses of a form."""
        result = await self.db.execute(
            select(Answer)
            .join(FormResponse, FormResponse.id == Answer.response_id)
            .where(FormResponse.form_id == form_id)
            .order_by(Answer.question_id)
        )
        return list(result.scalars().all())
