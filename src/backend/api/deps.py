"""
Shared dependencies for API endpoints.

Includes:
- Admin API key check for the admin routes
- Request-scoped service construction
"""

from typing import Annotated

import structlog
from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import UnauthorizedError
from core.security import verify_admin_key
from db.session import get_db
from services.erasure_service import ErasureService
from services.response_service import ResponseService
from services.stats_service import StatsService
from services.submission_service import SubmissionService

logger = structlog.get_logger(__name__)


# =============================================================================
# Admin access
# =============================================================================


async def require_admin(
    request: Request,
    x_admin_key: Annotated[str | None, Header()] = None,
) -> None:
    """
    Reject requests without a valid X-Admin-Key header.

    Raises:
        UnauthorizedError: 401 if the key is missing or wrong.
    """
    if not verify_admin_key(x_admin_key):
        logger.warning(
            "admin_access_denied",
            path=request.url.path,
            client=request.client.host if request.client else "unknown",
        )
        raise UnauthorizedError()


# =============================================================================
# Services
# =============================================================================


def get_submission_service(db: AsyncSession = Depends(get_db)) -> SubmissionService:
    return SubmissionService(db)


def get_erasure_service(db: AsyncSession = Depends(get_db)) -> ErasureService:
    return ErasureService(db)


def get_stats_service(db: AsyncSession = Depends(get_db)) -> StatsService:
    return StatsService(db)


def get_response_service(db: AsyncSession = Depends(get_db)) -> ResponseService:
    return ResponseService(db)
