"""
Name: User Authentication Primitives (Argon2 + JWT)

Responsibilities:
  - Hash and verify passwords using Argon2 (slow, salted, adaptive)
  - Issue and validate signed JWT access tokens
  - Extract bearer tokens from the Authorization header

Collaborators:
  - config.get_settings: JWT secret and TTL
  - application.auth_service: registration/login/verification flows
  - dependencies.py: bearer resolution for protected routes

Notes:
  - Claims: sub (user id), email, role, iat, exp
  - Decoding failures of any kind collapse to InvalidTokenError
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from .config import get_settings
from .exceptions import InvalidTokenError
from .users import User

JWT_ALGORITHM = "HS256"
INVALID_TOKEN_MESSAGE = "Invalid or expired token"

_password_hasher = PasswordHasher()


@dataclass(frozen=True)
class AuthSettings:
    jwt_secret: str
    jwt_access_ttl_minutes: int


@dataclass(frozen=True)
class TokenPayload:
    user_id: str
    email: str
    role: str


def get_auth_settings() -> AuthSettings:
    settings = get_settings()
    return AuthSettings(
        jwt_secret=settings.jwt_secret,
        jwt_access_ttl_minutes=settings.jwt_access_ttl_minutes,
    )


def hash_password(password: str) -> str:
    """R: Hash a password using Argon2."""
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """R: Verify password against stored hash."""
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def create_access_token(
    user: User, settings: AuthSettings | None = None
) -> tuple[str, int]:
    """R: Create a signed JWT access token. Returns (token, expires_in_seconds)."""
    auth_settings = settings or get_auth_settings()
    now = datetime.now(timezone.utc)
    expires_in = auth_settings.jwt_access_ttl_minutes * 60
    payload = {
        "sub": user.id,
        "email": user.email,
        "role": user.role.value,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=expires_in)).timestamp()),
    }
    token = jwt.encode(payload, auth_settings.jwt_secret, algorithm=JWT_ALGORITHM)
    return token, expires_in


def decode_access_token(
    token: str, settings: AuthSettings | None = None
) -> TokenPayload:
    """R: Decode and validate a JWT access token."""
    auth_settings = settings or get_auth_settings()
    try:
        payload = jwt.decode(
            token,
            auth_settings.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["sub", "email", "exp"]},
        )
    except jwt.InvalidTokenError as exc:
        # R: ExpiredSignatureError is a subclass; both read the same to clients
        raise InvalidTokenError(INVALID_TOKEN_MESSAGE, original_error=exc) from exc

    user_id = payload.get("sub")
    email = payload.get("email")
    if not user_id or not email:
        raise InvalidTokenError(INVALID_TOKEN_MESSAGE)

    return TokenPayload(
        user_id=str(user_id), email=str(email), role=str(payload.get("role", ""))
    )


def extract_bearer_token(authorization: str | None) -> str | None:
    """R: Extract token from `Authorization: Bearer <token>`."""
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    token = parts[1].strip()
    return token or None
