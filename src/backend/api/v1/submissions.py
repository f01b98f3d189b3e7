"""
Public form submission endpoint.

Respondents are anonymous: there is no login. Identity is derived from the
submitted email and used only to stop the same person answering a form
twice.
"""

from fastapi import APIRouter, Depends, status

from api.deps import get_submission_service
from schemas.submission import SubmissionCreated, SubmitFormRequest
from services.submission_service import SubmissionService

router = APIRouter()


@router.post(
    "/{form_id}/responses",
    response_model=SubmissionCreated,
    status_code=status.HTTP_201_CREATED,
)
async def submit_form(
    form_id: str,
    submission: SubmitFormRequest,
    service: SubmissionService = Depends(get_submission_service),
) -> SubmissionCreated:
    """
    Submit answers to a form.

    Privacy-preserving implementation:
    1. Fingerprint the email with a salted one-way hash
    2. Reuse the respondent with that fingerprint, or create one
    3. Reject if that respondent already answered this form
    4. Store the response and answers without name or email

    Returns 400 for invalid input and for duplicate submissions; the two
    are told apart by the `code` field of the error body.
    """
    result = await service.submit(form_id, submission)
    return SubmissionCreated(response_id=result.response_id)
