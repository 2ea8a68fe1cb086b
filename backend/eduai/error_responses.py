"""
Standardized error envelope for API consistency.
All HTTP error responses follow the {success: false, error} shape.
"""

from __future__ import annotations

from enum import Enum

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from .logger import logger

INTERNAL_ERROR_MESSAGE = "Internal server error"
INVALID_BODY_MESSAGE = "Invalid request body"


class ErrorCode(str, Enum):
    """Application error codes (logged, not serialized)."""

    # 4xx Client Errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"


class ErrorEnvelope(BaseModel):
    """Uniform failure body."""

    success: bool = False
    error: str


# R: Reusable OpenAPI response entries for the error envelope
OPENAPI_ERROR_RESPONSES = {
    400: {"description": "Bad Request", "model": ErrorEnvelope},
    401: {"description": "Unauthorized", "model": ErrorEnvelope},
    403: {"description": "Forbidden", "model": ErrorEnvelope},
    500: {"description": "Internal Server Error", "model": ErrorEnvelope},
}


class AppHTTPException(HTTPException):
    """Application-specific HTTP exception with error code."""

    def __init__(self, status_code: int, code: ErrorCode, detail: str):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code


# Pre-defined error factories
def bad_request(detail: str) -> AppHTTPException:
    return AppHTTPException(400, ErrorCode.VALIDATION_ERROR, detail)


def not_found(detail: str) -> AppHTTPException:
    return AppHTTPException(404, ErrorCode.NOT_FOUND, detail)


def envelope_response(
    status_code: int, detail: str, headers: dict | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorEnvelope(error=detail).model_dump(),
        headers=headers,
    )


# Exception handlers for FastAPI
async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    """Handler for AppHTTPException."""
    logger.info(
        "Request rejected",
        extra={"status_code": exc.status_code, "error_code": exc.code.value},
    )
    return envelope_response(
        exc.status_code, exc.detail, headers=getattr(exc, "headers", None)
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Framework HTTP errors (unknown route, method not allowed)."""
    detail = exc.detail if isinstance(exc.detail, str) else INTERNAL_ERROR_MESSAGE
    return envelope_response(
        exc.status_code, detail, headers=getattr(exc, "headers", None)
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed JSON or wrongly typed fields → 400 instead of FastAPI's 422."""
    logger.info(
        "Request body rejected",
        extra={"validation_errors": len(exc.errors())},
    )
    return envelope_response(400, INVALID_BODY_MESSAGE)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unhandled exceptions."""
    logger.error(
        "Unhandled error",
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return envelope_response(500, INTERNAL_ERROR_MESSAGE)
