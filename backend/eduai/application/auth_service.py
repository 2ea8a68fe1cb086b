"""
Name: Auth Gate (Application Service)

Responsibilities:
  - Register users and issue their first access token
  - Log users in without revealing which half of the credential was wrong
  - Verify bearer tokens against the live user store
  - Profile maintenance: update name/avatar, change password, list/get users

Collaborators:
  - domain.repositories.UserRepository: injected user store
  - auth_users: Argon2 hashing and JWT issue/decode
  - exceptions: typed failures mapped to HTTP by exception_handlers

Constraints:
  - No HTTP concerns
  - Hashes never leave this service (callers get PublicUser)
  - Every mutation bumps updated_at

Notes:
  - No locking beyond the repository's own: two concurrent registrations
    of the same email may both pass the duplicate check
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from typing import List, Optional
from uuid import uuid4

from ..auth_users import (
    AuthSettings,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from ..domain.repositories import UserRepository
from ..exceptions import (
    DuplicateUserError,
    InvalidCredentialsError,
    UserNotFoundError,
    ValidationError,
)
from ..logger import logger
from ..users import PublicUser, User, UserRole

MIN_PASSWORD_LENGTH = 6

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
USER_NOT_FOUND_MESSAGE = "User not found"


@dataclass(frozen=True)
class AuthResult:
    """R: Outcome of register/login: public user plus signed token."""

    user: PublicUser
    token: str
    expires_in: int


def _now() -> datetime:
    return datetime.now(timezone.utc)


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    """R: Stand-in Argon2 hash verified when the email is unknown."""
    return hash_password(uuid4().hex)


def _coerce_role(role: UserRole | str) -> UserRole:
    try:
        return UserRole(role)
    except ValueError as exc:
        raise ValidationError("Invalid role specified", original_error=exc) from exc


class AuthService:
    """R: Credential and identity operations over an injected user store."""

    def __init__(
        self,
        repository: UserRepository,
        auth_settings: Optional[AuthSettings] = None,
    ):
        self.repository = repository
        self._auth_settings = auth_settings

    def register(
        self,
        email: str,
        password: str,
        name: str,
        role: UserRole | str = UserRole.STUDENT,
    ) -> AuthResult:
        """
        R: Create a user and sign them in.

        Raises:
            ValidationError: Empty field, short password or unknown role
            DuplicateUserError: Email already registered (case-insensitive)
        """
        normalized_email = (email or "").strip().lower()
        display_name = (name or "").strip()
        if not normalized_email or not password or not display_name:
            raise ValidationError("All fields are required")

        user_role = _coerce_role(role)

        if self.repository.get_by_email(normalized_email):
            raise DuplicateUserError("User with this email already exists")

        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )

        now = _now()
        user = User(
            id=f"{user_role.value}-{uuid4().hex[:12]}",
            email=normalized_email,
            password_hash=hash_password(password),
            name=display_name,
            role=user_role,
            created_at=now,
            updated_at=now,
        )
        self.repository.save(user)

        token, expires_in = create_access_token(user, settings=self._auth_settings)
        logger.info(
            "User registered", extra={"user_id": user.id, "role": user.role.value}
        )
        return AuthResult(user=user.to_public(), token=token, expires_in=expires_in)

    def login(self, email: str, password: str) -> AuthResult:
        """
        R: Check credentials and issue a token.

        Raises:
            ValidationError: Missing email or password
            InvalidCredentialsError: Unknown email or wrong password (same error)
        """
        if not (email or "").strip() or not password:
            raise ValidationError("Email and password are required")

        user = self.repository.get_by_email(email)
        password_hash = user.password_hash if user else _dummy_hash()
        if not verify_password(password, password_hash) or not user:
            logger.info("Login rejected")
            raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

        token, expires_in = create_access_token(user, settings=self._auth_settings)
        logger.info("User logged in", extra={"user_id": user.id})
        return AuthResult(user=user.to_public(), token=token, expires_in=expires_in)

    def verify_token(self, token: str) -> PublicUser:
        """
        R: Resolve a bearer token to the user's current projection.

        Role and name come from the store, not from the token claims.

        Raises:
            InvalidTokenError: Bad signature, malformed or expired token
            UserNotFoundError: Token email no longer in the store
        """
        payload = decode_access_token(token, settings=self._auth_settings)
        user = self.repository.get_by_email(payload.email)
        if not user:
            raise UserNotFoundError(USER_NOT_FOUND_MESSAGE)
        return user.to_public()

    def get_user_by_id(self, user_id: str) -> Optional[PublicUser]:
        user = self.repository.get_by_id(user_id)
        return user.to_public() if user else None

    def get_all_users(self) -> List[PublicUser]:
        return [user.to_public() for user in self.repository.list_all()]

    def update_user(
        self,
        user_id: str,
        *,
        name: Optional[str] = None,
        avatar: Optional[str] = None,
    ) -> PublicUser:
        """
        R: Update profile fields. An empty name is ignored; an empty avatar
        clears it.

        Raises:
            UserNotFoundError: Unknown user id
        """
        user = self._require_user(user_id)

        if name and name.strip():
            user.name = name.strip()
        if avatar is not None:
            user.avatar = avatar or None
        user.updated_at = _now()

        self.repository.save(user)
        logger.info("User profile updated", extra={"user_id": user.id})
        return user.to_public()

    def change_password(
        self, user_id: str, current_password: str, new_password: str
    ) -> None:
        """
        R: Replace the password after checking the current one.

        Raises:
            UserNotFoundError: Unknown user id
            ValidationError: Wrong current password or short new password
        """
        user = self._require_user(user_id)

        if not verify_password(current_password or "", user.password_hash):
            raise ValidationError("Current password is incorrect")

        if len(new_password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"New password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )

        user.password_hash = hash_password(new_password)
        user.updated_at = _now()
        self.repository.save(user)
        logger.info("User password changed", extra={"user_id": user.id})

    def _require_user(self, user_id: str) -> User:
        user = self.repository.get_by_id(user_id)
        if not user:
            raise UserNotFoundError(USER_NOT_FOUND_MESSAGE)
        return user
