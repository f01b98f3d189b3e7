"""
Domain error taxonomy.

Services raise these; the exception handlers in main.py turn them into
JSON responses. Only `message` ever reaches the client.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"
    default_message: str = "An internal server error occurred. Please try again later."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing submission fields. Raised before any write."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"
    default_message = "Invalid submission"


class DuplicateSubmissionError(AppError):
    """The respondent has already answered this form."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "duplicate_submission"
    default_message = "You have already submitted a response for this form"


class ConflictError(AppError):
    """
    Write-time uniqueness violation caused by a concurrent identical submission.

    The submission coordinator always translates this into
    DuplicateSubmissionError; it is not expected to reach a handler.
    """

    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
    default_message = "Concurrent submission conflict"


class StorageError(AppError):
    """Any database failure other than a duplicate conflict."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "storage_error"
    default_message = "Could not save your response. Please try again later."


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Not found"


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthorized"
    default_message = "Invalid admin API key"
