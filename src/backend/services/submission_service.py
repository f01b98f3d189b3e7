"""
Submission coordinator.

Turns a validated form submission into one Respondent (reused or new), one
anonymized Response and its Answers, all inside a single transaction.

Workflow states:

    START -> IDENTITY_RESOLVED -> DUPLICATE_CHECKED -> PERSISTED -> COMMITTED

Any failure before COMMITTED rolls the whole transaction back (ABORTED).

Two submissions with the same email can race past the fingerprint lookup.
The unique indexes on respondents.fingerprint and
responses(respondent_id, form_id) make the loser fail on insert; that
failure is retried from the lookup, which then sees the winner's rows and
either reuses the respondent (different form) or rejects the duplicate.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from core.errors import ConflictError, DuplicateSubmissionError
from core.security import generate_respondent_fingerprint
from repositories.answer_repository import AnswerRepository
from repositories.respondent_repository import RespondentRepository
from repositories.response_repository import ResponseRepository
from schemas.submission import SubmitFormRequest
from services.submission_validation import ValidatedSubmission, validate_submission

logger = structlog.get_logger(__name__)


class SubmissionState(str, Enum):
    START = "start"
    IDENTITY_RESOLVED = "identity_resolved"
    DUPLICATE_CHECKED = "duplicate_checked"
    PERSISTED = "persisted"
    COMMITTED = "committed"
    ABORTED = "aborted"


# Steps whose IntegrityError means "someone else submitted the same identity"
_CONFLICT_STEPS = frozenset({"respondent_insert", "response_insert", "commit"})


@dataclass(frozen=True)
class SubmissionResult:
    response_id: str
    respondent_id: str
    new_respondent: bool


class SubmissionService:
    """
    Coordinates a form submission across the respondent, response and
    answer stores.

    The session is owned by the caller and must not be shared with any
    other in-flight submission.
    """

    def __init__(self, db: AsyncSession, max_attempts: Optional[int] = None):
        self.db = db
        self.respondents = RespondentRepository(db)
        self.responses = ResponseRepository(db)
        self.answers = AnswerRepository(db)
        self.max_attempts = max_attempts or settings.SUBMISSION_MAX_ATTEMPTS

    async def submit(self, form_id: str, request: SubmitFormRequest) -> SubmissionResult:
        """
        Validate and persist a submission.

        Raises:
            ValidationError: The request is malformed; nothing was written.
            DuplicateSubmissionError: This respondent already answered the form.
            SQLAlchemyError: Any other storage failure, after rollback.
        """
        submission = validate_submission(form_id, request)
        fingerprint = generate_respondent_fingerprint(submission.respondent_email)
        log = logger.bind(form_id=submission.form_id, fingerprint=fingerprint[:8])

        for attempt in range(1, self.max_attempts + 1):
            try:
                return await self._submit_once(submission, fingerprint, log)
            except ConflictError:
                log.warning(
                    "submission_conflict",
                    attempt=attempt,
                    max_attempts=self.max_attempts,
                )

        log.info("submission_rejected", reason="conflict_retries_exhausted")
        raise DuplicateSubmissionError()

    async def _submit_once(
        self,
        submission: ValidatedSubmission,
        fingerprint: str,
        log: structlog.stdlib.BoundLogger,
    ) -> SubmissionResult:
        state = SubmissionState.START
        step = "respondent_lookup"

        try:
            existing = await self.respondents.get_by_fingerprint(fingerprint)
            state = SubmissionState.IDENTITY_RESOLVED

            if existing is not None:
                step = "duplicate_check"
                count = await self.responses.count_by_respondent_and_form(existing.id, submission.form_id)
                if count > 0:
                    raise DuplicateSubmissionError()
                respondent_id = existing.id
            state = SubmissionState.DUPLICATE_CHECKED

            if existing is None:
                step = "respondent_insert"
                respondent_id = await self.respondents.create(
                    respondent_id=str(uuid4()),
                    name=submission.respondent_name,
                    email=submission.respondent_email,
                    fingerprint=fingerprint,
                )

            step = "response_insert"
            response_id = await self.responses.create(
                response_id=str(uuid4()),
                respondent_id=respondent_id,
                form_id=submission.form_id,
                role=submission.role,
                submitted_at=datetime.now(timezone.utc),
                metadata={},
            )

            step = "answer_insert"
            for answer in submission.answers:
                await self.answers.create(
                    answer_id=str(uuid4()),
                    response_id=response_id,
                    question_id=answer.question_id,
                    value=answer.value.to_json(),
                )
            state = SubmissionState.PERSISTED

            step = "commit"
            await self.db.commit()

        except DuplicateSubmissionError:
            await self.db.rollback()
            log.info("submission_rejected", reason="duplicate", state=state.value)
            raise
        except IntegrityError as e:
            await self.db.rollback()
            if step in _CONFLICT_STEPS:
                raise ConflictError() from e
            log.warning("submission_failed", step=step, state=state.value, error_type=type(e).__name__)
            raise
        except SQLAlchemyError as e:
            # Traceback is logged once, by the HTTP storage error handler
            await self.db.rollback()
            log.warning("submission_failed", step=step, state=state.value, error_type=type(e).__name__)
            raise
        except asyncio.CancelledError:
            # Client went away; leave nothing half-written
            await self.db.rollback()
            log.warning("submission_cancelled", step=step, state=SubmissionState.ABORTED.value)
            raise

        log.info(
            "submission_committed",
            response_id=response_id,
            new_respondent=existing is None,
            answers=len(submission.answers),
            state=SubmissionState.COMMITTED.value,
        )
        return SubmissionResult(
            response_id=response_id,
            respondent_id=respondent_id,
            new_respondent=existing is None,
        )
