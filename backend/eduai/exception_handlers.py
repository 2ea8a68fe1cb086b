"""
Name: FastAPI Exception Handlers

Responsibilities:
  - Convert typed application errors into the {success: false, error} envelope
  - Centralized logging of errors with correlation ids

Collaborators:
  - main.py: Registers these handlers
  - exceptions.py: EduAIError and subclasses
  - error_responses.py: envelope construction, framework-level handlers

Constraints:
  - 400 validation, 401 authentication, 403 role, 404 not found,
    500 upstream/parse/unclassified
  - Upstream raw error text is logged, never returned
"""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .error_responses import (
    INTERNAL_ERROR_MESSAGE,
    AppHTTPException,
    app_exception_handler,
    envelope_response,
    generic_exception_handler,
    http_exception_handler,
    request_validation_handler,
)
from .exceptions import (
    AuthenticationError,
    EduAIError,
    ForbiddenError,
    ParseError,
    UpstreamServiceError,
    UserNotFoundError,
    ValidationError,
)
from .logger import logger


async def validation_error_handler(
    request: Request, exc: ValidationError
) -> JSONResponse:
    """Handle input validation and duplicate-user errors."""
    logger.info(
        "Validation error",
        extra={"error_id": exc.error_id, "error_code": exc.error_code},
    )
    return envelope_response(400, exc.message)


async def authentication_error_handler(
    request: Request, exc: AuthenticationError
) -> JSONResponse:
    """Handle missing/invalid credentials and tokens."""
    logger.warning(
        "Authentication failed",
        extra={"error_id": exc.error_id, "error_code": exc.error_code},
    )
    return envelope_response(401, exc.message)


async def forbidden_error_handler(
    request: Request, exc: ForbiddenError
) -> JSONResponse:
    logger.warning(
        "Access denied",
        extra={"error_id": exc.error_id, "error_code": exc.error_code},
    )
    return envelope_response(403, exc.message)


async def user_not_found_handler(
    request: Request, exc: UserNotFoundError
) -> JSONResponse:
    return envelope_response(404, exc.message)


async def upstream_error_handler(
    request: Request, exc: UpstreamServiceError
) -> JSONResponse:
    """Handle completion service failures."""
    logger.error(
        "Completion service error",
        extra={
            "error_id": exc.error_id,
            "error_message": exc.message,
            "upstream_error": str(exc.original_error) if exc.original_error else None,
        },
    )
    return envelope_response(500, exc.message)


async def parse_error_handler(request: Request, exc: ParseError) -> JSONResponse:
    """Handle model replies that could not be decoded as JSON."""
    logger.error(
        "AI response parse error",
        extra={"error_id": exc.error_id, "error_message": exc.message},
    )
    return envelope_response(500, exc.message)


async def eduai_error_handler(request: Request, exc: EduAIError) -> JSONResponse:
    """Handle any other typed error."""
    logger.error(
        "Application error",
        extra={"error_id": exc.error_id, "error_message": exc.message},
    )
    return envelope_response(500, INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app) -> None:
    """
    Register all exception handlers on the FastAPI app.

    Usage:
        from .exception_handlers import register_exception_handlers
        register_exception_handlers(app)
    """
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
    app.add_exception_handler(ForbiddenError, forbidden_error_handler)
    app.add_exception_handler(UserNotFoundError, user_not_found_handler)
    app.add_exception_handler(UpstreamServiceError, upstream_error_handler)
    app.add_exception_handler(ParseError, parse_error_handler)
    app.add_exception_handler(EduAIError, eduai_error_handler)
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
