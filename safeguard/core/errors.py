"""Error taxonomy for the moderation relay and dashboard flow."""
from __future__ import annotations

from fastapi import Request, status
from fastapi.responses import JSONResponse


class AnalysisError(Exception):
    """Base error carrying the HTTP status surfaced to the caller."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "An error occurred during analysis"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ClientInputError(AnalysisError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request body"


class UpstreamRateLimited(AnalysisError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = "Rate limit exceeded. Please try again in a moment."


class UpstreamQuotaExceeded(AnalysisError):
    status_code = status.HTTP_402_PAYMENT_REQUIRED
    default_message = "AI usage limit reached. Please try again later."


class UpstreamUnexpectedError(AnalysisError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class AnalysisInProgressError(AnalysisError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "An analysis is already running for this session"


class SessionNotFoundError(AnalysisError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "session_not_found"


async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:  # noqa: ARG001
    """Render an ``AnalysisError`` as ``{"error": message}``."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
