"""
Name: Typed Application Errors

Responsibilities:
  - Define the error taxonomy raised by the auth gate and the AI bridge
  - Carry a stable error_code and an error_id for log correlation

Collaborators:
  - exception_handlers.py: maps each class to an HTTP status + envelope
  - application.auth_service / ai_routes.py: raise these errors

Constraints:
  - message is user-facing: never put upstream raw error text in it
  - original_error keeps the cause for logging only
"""

from uuid import uuid4


class EduAIError(Exception):
    """R: Base class for application errors."""

    error_code: str = "EDUAI_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class ValidationError(EduAIError):
    """Missing/empty required fields, short passwords, malformed role."""

    error_code = "VALIDATION_ERROR"


class DuplicateUserError(ValidationError):
    """Registration with an email that already exists."""

    error_code = "DUPLICATE_USER"


class AuthenticationError(EduAIError):
    """Missing, invalid or expired credentials."""

    error_code = "UNAUTHORIZED"


class InvalidCredentialsError(AuthenticationError):
    """Unknown email or wrong password (deliberately indistinguishable)."""

    error_code = "INVALID_CREDENTIALS"


class InvalidTokenError(AuthenticationError):
    """Bad signature, malformed or expired bearer token."""

    error_code = "INVALID_TOKEN"


class ForbiddenError(EduAIError):
    """Authenticated user lacks the required role."""

    error_code = "FORBIDDEN"


class UserNotFoundError(EduAIError):
    """Identity no longer present in the user store."""

    error_code = "USER_NOT_FOUND"


class UpstreamServiceError(EduAIError):
    """Network failure, non-2xx or timeout calling the completion service."""

    error_code = "UPSTREAM_ERROR"


class ParseError(EduAIError):
    """Model output was not valid or extractable JSON."""

    error_code = "PARSE_ERROR"
