# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors should tell HOW to fix, not just WHAT failed.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config import settings


class AiShipsException(Exception):
    """
    Base exception for the AI Ships API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "AISHIPS_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Request Exceptions
# =============================================================================

class MissingFieldError(AiShipsException):
    """Raised when a required request field is absent or empty."""

    def __init__(self, field: str, message: str | None = None):
        super().__init__(
            message=message or f"{field} is required",
            code="MISSING_FIELD",
            status_code=400,
            suggestion=f"Include a non-empty '{field}' in the request",
            details={"field": field}
        )


# =============================================================================
# Task Idea Exceptions
# =============================================================================

class TaskIdeaNotFoundError(AiShipsException):
    """Raised when an idea ID doesn't exist."""

    def __init__(self, idea_id: str):
        super().__init__(
            message="Task idea not found",
            code="IDEA_NOT_FOUND",
            status_code=404,
            suggestion="Refresh the idea list; the idea may have been cleaned up",
            details={"ideaId": idea_id}
        )


class AlreadyVotedError(AiShipsException):
    """Raised when a user votes for the same idea twice."""

    def __init__(self, idea_id: str, user_id: str):
        super().__init__(
            message="You have already voted for this task idea",
            code="ALREADY_VOTED",
            status_code=409,
            details={"ideaId": idea_id, "userId": user_id}
        )


def _describe_window(seconds: int) -> str:
    if seconds == 3600:
        return "hour"
    if seconds % 3600 == 0:
        return f"{seconds // 3600} hours"
    if seconds % 60 == 0:
        return f"{seconds // 60} minutes"
    return f"{seconds} seconds"


class RateLimitExceededError(AiShipsException):
    """
    Raised when a user submits ideas faster than the submission window allows.

    timeRemaining (ms) is returned at the top level of the response body.
    """

    def __init__(self, time_remaining_ms: int, minutes_remaining: int):
        window = _describe_window(settings.SUBMISSION_WINDOW_SECONDS)
        super().__init__(
            message=(
                f"You can only submit one task per {window}. "
                f"Please wait {minutes_remaining} minutes before submitting again."
            ),
            code="RATE_LIMIT_EXCEEDED",
            status_code=429,
            suggestion=f"Try again in {minutes_remaining} minutes",
            details={"timeRemaining": time_remaining_ms}
        )
        self.time_remaining_ms = time_remaining_ms

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["timeRemaining"] = self.time_remaining_ms
        return result


# =============================================================================
# Cron Authentication Exceptions
# =============================================================================

class CronUnauthorizedError(AiShipsException):
    """Raised when a scheduled-job endpoint is called without the right bearer token."""

    def __init__(self, reason: str):
        super().__init__(
            message="Unauthorized",
            code="CRON_UNAUTHORIZED",
            status_code=401,
            suggestion="Send 'Authorization: Bearer <CRON_SECRET>'",
            details={"reason": reason}
        )


class CronNotConfiguredError(AiShipsException):
    """Raised when CRON_SECRET is missing outside development."""

    def __init__(self):
        super().__init__(
            message="Server configuration error",
            code="CRON_SECRET_MISSING",
            status_code=500,
            suggestion="Set the CRON_SECRET environment variable",
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def aiships_exception_handler(
    request: Request,
    exc: AiShipsException
) -> JSONResponse:
    """
    Convert AiShipsException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Missing or malformed fields are a client error, reported as 400 with
    the list of offending fields.
    """
    fields = [".".join(str(part) for part in err.get("loc", ())[1:]) for err in exc.errors()]
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Missing required fields",
            "code": "VALIDATION_ERROR",
            "details": {"fields": fields},
        }
    )
