"""Helper functions for constructing structured API error responses.

Every payload shares the ``{"error": {"message", "status", ...}}`` shape and
embeds the request ID and a timezone-aware timestamp, regardless of which
exception handler built it.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from fastapi.responses import JSONResponse

from acme_store.schemas.error import (
    ErrorDetail,
    ErrorResponse,
    ErrorType,
    ValidationErrorDetail,
)
from acme_store.utils.request_context import get_request_id

__all__ = [
    "build_error_response",
    "error_json_response",
]


def _current_timestamp() -> datetime:
    """Return a timezone-aware timestamp for error payloads.

    Split out so unit tests can monkeypatch the clock.
    """

    return datetime.now(UTC)


def build_error_response(
    *,
    error_type: ErrorType,
    message: str,
    status_code: int,
    path: str,
    errors: Sequence[ValidationErrorDetail] | None = None,
    request_id: str | None = None,
) -> ErrorResponse:
    """Construct an ``ErrorResponse`` enriched with metadata."""

    resolved_request_id = request_id or get_request_id() or None
    return ErrorResponse(
        error=ErrorDetail(
            message=message,
            status=status_code,
            error_type=error_type,
            timestamp=_current_timestamp(),
            request_id=resolved_request_id,
            path=path,
            errors=list(errors) if errors is not None else None,
        )
    )


def error_json_response(response: ErrorResponse) -> JSONResponse:
    """Render ``response`` with its own status code, dropping unset fields."""

    return JSONResponse(
        status_code=response.error.status,
        content=response.model_dump(mode="json", exclude_none=True),
    )
