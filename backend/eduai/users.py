"""
Name: User Models

Responsibilities:
  - Define user roles, the stored user record and its public projection
  - Keep auth-specific data shapes centralized
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class UserRole(str, Enum):
    """R: Supported user roles."""

    STUDENT = "student"
    PROFESSOR = "professor"
    ADMIN = "admin"


# R: Roles a visitor may pick when self-registering
SELF_REGISTRATION_ROLES = frozenset({UserRole.STUDENT, UserRole.PROFESSOR})


@dataclass
class User:
    """R: User record as held by the store (includes the credential hash)."""

    id: str
    email: str
    password_hash: str
    name: str
    role: UserRole
    created_at: datetime
    updated_at: datetime
    avatar: str | None = None

    def to_public(self) -> "PublicUser":
        return PublicUser(
            id=self.id,
            email=self.email,
            name=self.name,
            role=self.role,
            avatar=self.avatar,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


@dataclass(frozen=True)
class PublicUser:
    """R: User projection safe to hand out of the auth gate (no hash)."""

    id: str
    email: str
    name: str
    role: UserRole
    created_at: datetime
    updated_at: datetime
    avatar: str | None = None
