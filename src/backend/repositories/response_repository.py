"""
Response repository for database operations.

Implements anonymized response storage: rows reference a respondent by
opaque id only.
"""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.respondent import Respondent
from models.response import FormResponse


class ResponseRepository:
    """Repository for response envelope operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def count_by_respondent_and_form(self, respondent_id: str, form_id: str) -> int:
        """
        Count responses by one respondent to one form (duplicate guard).

        Runs in the caller's transaction, so rows flushed earlier in it are
        included.
        """
        result = await self.db.execute(
            select(func.count(FormResponse.id)).where(
                FormResponse.respondent_id == respondent_id,
                FormResponse.form_id == form_id,
            )
        )
        return result.scalar() or 0

    async def create(
        self,
        response_id: str,
        respondent_id: str,
        form_id: str,
        submitted_at: datetime,
        role: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> str:
        """
        Insert a response. No existence checks; the caller owns the invariants.

        Flushes so the (respondent_id, form_id) unique constraint is checked
        before any answers are written.
        """
        response = FormResponse(
            id=response_id,
            respondent_id=respondent_id,
            form_id=form_id,
            role=role,
            submitted_at=submitted_at,
            extra_metadata=metadata if metadata is not None else {},
        )
        self.db.add(response)
        await self.db.flush()
        return response.id

    async def list_by_form(self, form_id: str) -> list[FormResponse]:
        """All responses to a form, newest first."""
        result = await self.db.execute(
            select(FormResponse)
            .where(FormResponse.form_id == form_id)
            .order_by(FormResponse.submitted_at.desc())
        )
        return list(result.scalars().all())

    async def list_by_form_with_respondents(
        self, form_id: str
    ) -> list[tuple[FormResponse, Optional[Respondent]]]:
        """
        Responses to a form paired with their respondent, newest first.

        Outer join: erased respondents come back as None.
        """
        result = await self.db.execute(
            select(FormResponse, Respondent)
            .outerjoin(Respondent, Respondent.id == FormResponse.respondent_id)
            .where(FormResponse.form_id == form_id)
            .order_by(FormResponse.submitted_at.desc())
        )
        return [(row[0], row[1]) for row in result.all()]

    async def count_by_form(self, form_id: str) -> int:
        result = await self.db.execute(
            select(func.count(FormResponse.id)).where(FormResponse.form_id == form_id)
        )
        return result.scalar() or 0

    async def role_distribution(self, form_id: str) -> list[tuple[Optional[str], int]]:
        """
        Response counts per role for a form, most common first.

        Responses without a role are grouped under None.
        """
        count = func.count(FormResponse.id).label("count")
        result = await self.db.execute(
            select(FormResponse.role, count)
            .where(FormResponse.form_id == form_id)
            .group_by(FormResponse.role)
            .order_by(count.desc(), FormResponse.role)
        )
        return [(row[0], row[1]) for row in result.all()]
