"""
Admin endpoints: statistics, raw responses and respondent erasure.
"""

from fastapi import APIRouter, Depends

from api.deps import (
    get_erasure_service,
    get_response_service,
    get_stats_service,
    require_admin,
)
from core.errors import NotFoundError
from schemas.response import ErasureResult, ResponseWithPII
from schemas.stats import AnonymousStats
from services.erasure_service import ErasureService
from services.response_service import ResponseService
from services.stats_service import StatsService

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/forms/{form_id}/stats", response_model=AnonymousStats)
async def get_form_stats(
    form_id: str,
    service: StatsService = Depends(get_stats_service),
) -> AnonymousStats:
    """Anonymous statistics for a form. Contains no PII."""
    return await service.get_form_stats(form_id)


@router.get("/forms/{form_id}/responses", response_model=list[ResponseWithPII])
async def get_responses_with_pii(
    form_id: str,
    service: ResponseService = Depends(get_response_service),
) -> list[ResponseWithPII]:
    """Every response to a form with the respondent's name and email."""
    return await service.list_with_pii(form_id)


@router.delete("/respondents/{respondent_id}", response_model=ErasureResult)
async def delete_respondent_pii(
    respondent_id: str,
    service: ErasureService = Depends(get_erasure_service),
) -> ErasureResult:
    """
    Delete a respondent's PII (GDPR erasure).

    The respondent's responses remain, anonymously, in statistics.
    """
    if not await service.erase(respondent_id):
        raise NotFoundError("Respondent not found")
    return ErasureResult()
