"""
Name: Shared HTTP Schemas

Responsibilities:
  - camelCase wire models shared by the auth and AI routers
  - Public user representation (never carries the credential hash)
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .users import PublicUser, UserRole


class CamelModel(BaseModel):
    """R: Accepts and emits camelCase keys; snake_case accepted on input too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserResponse(CamelModel):
    id: str
    email: str
    name: str
    role: UserRole
    avatar: str | None = None
    created_at: datetime
    updated_at: datetime


def to_user_response(user: PublicUser) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        avatar=user.avatar,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )
