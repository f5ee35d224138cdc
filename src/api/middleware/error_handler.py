"""
Error handling for the API

Engine exceptions are mapped to ErrorResponse JSON with a machine-readable
code and an HTTP status. Anything unexpected becomes a 500.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import uuid
from typing import Any, Dict, List, Optional, Tuple, Type

from api.schemas.error import ErrorResponse, ErrorDetail, ValidationErrorResponse
from engine.errors import (
    AlreadyExportingError,
    AnimationEngineError,
    ExportError,
    FrameCountError,
    FrameIndexError,
    InvalidFpsError,
    NothingToExportError,
    PlaybackActiveError,
    SnapshotParseError,
)
from utils.logger import get_logger
from models.enums import LogCategory

log = get_logger().for_category(LogCategory.API)


# First match wins: subclasses before their bases
ENGINE_ERROR_CODES: List[Tuple[Type[AnimationEngineError], str, int]] = [
    (FrameIndexError, "FRAME_INDEX_OUT_OF_RANGE", status.HTTP_422_UNPROCESSABLE_ENTITY),
    (FrameCountError, "INVALID_FRAME_COUNT", status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidFpsError, "INVALID_FPS", status.HTTP_422_UNPROCESSABLE_ENTITY),
    (SnapshotParseError, "INVALID_SNAPSHOT", status.HTTP_422_UNPROCESSABLE_ENTITY),
    (PlaybackActiveError, "PLAYBACK_ACTIVE", status.HTTP_409_CONFLICT),
    (NothingToExportError, "NOTHING_TO_EXPORT", status.HTTP_409_CONFLICT),
    (AlreadyExportingError, "ALREADY_EXPORTING", status.HTTP_409_CONFLICT),
    (ExportError, "EXPORT_FAILED", status.HTTP_500_INTERNAL_SERVER_ERROR),
]


def classify_engine_error(exc: AnimationEngineError) -> Tuple[str, int]:
    for error_cls, code, status_code in ENGINE_ERROR_CODES:
        if isinstance(exc, error_cls):
            return code, status_code
    return "ENGINE_ERROR", status.HTTP_400_BAD_REQUEST


def _error_details(exc: AnimationEngineError) -> Dict[str, Any]:
    details: Dict[str, Any] = {}
    for attr in ("index", "frame_count", "count", "fps", "operation", "position"):
        value = getattr(exc, attr, None)
        if value is not None:
            details[attr] = value
    return details


def _error_response(status_code: int, code: str, message: str, details: Optional[dict], request_id: str) -> JSONResponse:
    response = ErrorResponse(
        error=ErrorDetail(code=code, message=message, details=details),
        request_id=request_id
    )
    return JSONResponse(status_code=status_code, content=response.model_dump(mode="json"))


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI app"""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle Pydantic validation errors (bad JSON structure)"""
        request_id = str(uuid.uuid4())
        errors = exc.errors()

        log.warn(f"Validation error ({request_id}): {len(errors)} errors", path=request.url.path)

        validation_errors = []
        for error in errors:
            field = ".".join(str(x) for x in error["loc"][1:])  # Skip "body"/"path"
            validation_errors.append({
                "field": field,
                "message": error["msg"],
                "type": error["type"]
            })

        response = ValidationErrorResponse(
            error=ErrorDetail(
                code="VALIDATION_ERROR",
                message="Request validation failed",
                details={"error_count": len(errors)},
            ),
            validation_errors=validation_errors,
            request_id=request_id
        )

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=response.model_dump(mode="json")
        )

    @app.exception_handler(AnimationEngineError)
    async def engine_exception_handler(request: Request, exc: AnimationEngineError):
        """Contract violations and export failures raised by the engine"""
        request_id = str(uuid.uuid4())
        code, status_code = classify_engine_error(exc)

        log.warn(f"Engine error ({request_id}): {code} - {exc}", path=request.url.path)

        return _error_response(status_code, code, str(exc), _error_details(exc), request_id)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected errors"""
        request_id = str(uuid.uuid4())

        log.error(
            f"Unexpected error ({request_id}): {type(exc).__name__}: {exc}",
            path=request.url.path
        )

        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_SERVER_ERROR",
            "An unexpected error occurred. Please try again.",
            {"request_id": request_id},
            request_id,
        )
