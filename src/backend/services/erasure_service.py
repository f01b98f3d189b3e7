"""
Respondent erasure (GDPR right to be forgotten).

Deletes the respondent's identity record only. Their responses and answers
stay in place, pointing at an id that no longer resolves, so anonymous
statistics are unaffected.
"""

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from repositories.respondent_repository import RespondentRepository

logger = structlog.get_logger(__name__)


class ErasureService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.respondents = RespondentRepository(db)

    async def erase(self, respondent_id: str) -> bool:
        """
        Delete a respondent's PII.

        Returns:
            True if a respondent was deleted, False if the id was unknown.
        """
        try:
            changed = await self.respondents.delete_by_id(respondent_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.warning(
                "respondent_erasure_failed",
                respondent_id=respondent_id,
                error_type=type(e).__name__,
            )
            raise

        if changed:
            logger.info("respondent_erased", respondent_id=respondent_id)
        else:
            logger.info("respondent_erasure_not_found", respondent_id=respondent_id)
        return changed
