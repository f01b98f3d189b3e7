"""
API v1 router aggregating all endpoints.
"""

from fastapi import APIRouter

from api.v1.admin import router as admin_router
from api.v1.submissions import router as submissions_router

router = APIRouter()

router.include_router(submissions_router, prefix="/forms", tags=["Submissions"])
router.include_router(admin_router, prefix="/admin", tags=["Admin"])
