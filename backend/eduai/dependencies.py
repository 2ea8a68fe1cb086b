"""
Name: Bearer Auth Dependencies

Responsibilities:
  - Resolve `Authorization: Bearer <token>` to the live user projection
  - Guard endpoints by role

Collaborators:
  - container.get_auth_service: token verification against the store
  - auth_users.extract_bearer_token: header parsing
  - context.user_id_var: user id for structured logs

Notes:
  - A token whose user disappeared reads as 401, not 404
  - Dependencies are async so the context var set here is visible to the
    endpoint that runs afterwards
"""

from typing import Callable

from fastapi import Depends, Header, Request

from .application import AuthService
from .auth_users import extract_bearer_token
from .container import get_auth_service
from .context import user_id_var
from .exceptions import AuthenticationError, ForbiddenError, UserNotFoundError
from .users import PublicUser, UserRole

NO_TOKEN_MESSAGE = "No token provided"
INSUFFICIENT_PERMISSIONS_MESSAGE = "Insufficient permissions"


def require_user() -> Callable:
    """R: FastAPI dependency that requires a valid bearer token."""

    async def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
        service: AuthService = Depends(get_auth_service),
    ) -> PublicUser:
        token = extract_bearer_token(authorization)
        if not token:
            raise AuthenticationError(NO_TOKEN_MESSAGE)

        try:
            user = service.verify_token(token)
        except UserNotFoundError as exc:
            raise AuthenticationError(exc.message, original_error=exc) from exc

        request.state.user = user
        user_id_var.set(user.id)
        return user

    return dependency


def require_role(*roles: UserRole | str) -> Callable:
    """R: FastAPI dependency that requires one of the given roles."""
    allowed = {UserRole(role) for role in roles}

    async def dependency(user: PublicUser = Depends(require_user())) -> PublicUser:
        if user.role not in allowed:
            raise ForbiddenError(INSUFFICIENT_PERMISSIONS_MESSAGE)
        return user

    return dependency


def require_admin() -> Callable:
    """R: Require the admin role."""
    return require_role(UserRole.ADMIN)
