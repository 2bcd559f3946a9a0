"""Error response schemas for consistent error handling."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ErrorType(str, Enum):
    """Types of errors that can occur."""

    VALIDATION_ERROR = "validation_error"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    DATABASE_ERROR = "database_error"
    INTERNAL_ERROR = "internal_error"


class ValidationErrorDetail(BaseModel):
    """Details for validation errors."""

    field: str = Field(..., description="Field that failed validation")
    message: str = Field(..., description="Validation error message")
    value: Any = Field(None, description="Value that failed validation")


class ErrorDetail(BaseModel):
    """Body nested under the top-level ``error`` key."""

    message: str = Field(..., description="Human-readable error message")
    status: int = Field(..., description="HTTP status code")
    error_type: ErrorType = Field(..., description="Category of error")
    timestamp: datetime = Field(..., description="When error occurred")
    request_id: str | None = Field(None, description="Unique request identifier for tracking")
    path: str | None = Field(None, description="Request path that caused the error")
    errors: list[ValidationErrorDetail] | None = Field(
        None, description="Per-field failures for validation errors"
    )


class ErrorResponse(BaseModel):
    """Standardized error response model."""

    error: ErrorDetail

    class Config:
        """Pydantic config."""

        json_schema_extra = {
            "example": {
                "error": {
                    "message": "Favorite already exists",
                    "status": 409,
                    "error_type": "conflict",
                    "timestamp": "2025-11-03T10:30:00Z",
                    "request_id": "0f6c4a0e-6f55-4d0c-9a51-2b6a3f1e9b77",
                    "path": "/api/users/9b2c.../favorites",
                }
            }
        }
