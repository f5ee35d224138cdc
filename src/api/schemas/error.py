"""
Error schemas - Pydantic models for error responses
"""

from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ErrorDetail(BaseModel):
    """Detailed error information"""
    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        None,
        description="Additional context (index, frame count, operation, ...)"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the error occurred"
    )


class ErrorResponse(BaseModel):
    """API error response - every error uses this structure"""
    error: ErrorDetail = Field(description="Error information")
    request_id: Optional[str] = Field(None, description="Request ID for logging/debugging")

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": {
                    "code": "FRAME_INDEX_OUT_OF_RANGE",
                    "message": "Frame index 14 out of range (0..11)",
                    "details": {"index": 14, "frame_count": 12},
                    "timestamp": "2026-10-18T10:30:00Z"
                },
                "request_id": "3f0c1c5e-9d1a-4b8e-8a59-6f1d2a7c9b10"
            }
        }
    }


class ValidationErrorResponse(BaseModel):
    """Validation error - request body or path is invalid"""
    error: ErrorDetail = Field(description="Error information")
    validation_errors: list[Dict[str, Any]] = Field(
        description="Per-field validation errors"
    )
    request_id: Optional[str] = Field(None, description="Request ID for logging/debugging")
