"""
Respondent repository for database operations.

Holds the only PII in the system. All methods run inside the caller's
transaction; nothing here commits.
"""

from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.respondent import Respondent


class RespondentRepository:
    """Repository for respondent identity records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_fingerprint(self, fingerprint: str) -> Optional[Respondent]:
        """Get a respondent by their email fingerprint."""
        result = await self.db.execute(
            select(Respondent).where(Respondent.fingerprint == fingerprint)
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, respondent_id: str) -> Optional[Respondent]:
        result = await self.db.execute(select(Respondent).where(Respondent.id == respondent_id))
        return result.scalar_one_or_none()

    async def create(
        self,
        respondent_id: str,
        name: str,
        email: str,
        fingerprint: str,
    ) -> str:
        """
        Insert a respondent.

        Flushes immediately so a fingerprint collision with a concurrent
        transaction raises IntegrityError here rather than at commit.
        """
        respondent = Respondent(
            id=respondent_id,
            name=name,
            email=email,
            fingerprint=fingerprint,
        )
        self.db.add(respondent)
        await self.db.flush()
        return respondent.id

    async def delete_by_id(self, respondent_id: str) -> bool:
        """
        Delete a respondent row and report whether one was removed.

        Uses a bulk DELETE so no ORM cascade can reach the respondent's
        responses.
        """
        result = await self.db.execute(
            delete(Respondent)
            .where(Respondent.id == respondent_id)
            .execution_options(synchronize_session=False)
        )
        return (result.rowcount or 0) > 0
