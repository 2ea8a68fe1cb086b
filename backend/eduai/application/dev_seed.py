"""
Name: Dev Seed Demo Users
Description: Seed the demo admin/professor/student accounts on startup.
"""

from datetime import datetime, timezone
from typing import NamedTuple

from ..auth_users import hash_password
from ..config import Settings
from ..domain.repositories import UserRepository
from ..logger import logger
from ..users import User, UserRole


class DemoAccount(NamedTuple):
    id: str
    email: str
    password: str
    name: str
    role: UserRole


DEMO_ACCOUNTS = (
    DemoAccount("admin-1", "admin@eduai.com", "admin123", "Admin User", UserRole.ADMIN),
    DemoAccount(
        "prof-1", "professor@eduai.com", "prof123", "Professor Smith", UserRole.PROFESSOR
    ),
    DemoAccount(
        "student-1", "student@eduai.com", "student123", "John Student", UserRole.STUDENT
    ),
)


def ensure_demo_users(repository: UserRepository, settings: Settings) -> int:
    """
    R: Create the demo accounts that are not yet in the store.

    Existing accounts are left untouched. Returns the number created.
    FAIL-FAST if enabled in production.
    """
    if not settings.seed_demo_users:
        return 0

    if settings.is_production():
        raise RuntimeError(
            "FATAL: SEED_DEMO_USERS is enabled in production. "
            "Demo accounts have well-known passwords."
        )

    created = 0
    for account in DEMO_ACCOUNTS:
        if repository.get_by_email(account.email):
            continue
        now = datetime.now(timezone.utc)
        repository.save(
            User(
                id=account.id,
                email=account.email,
                password_hash=hash_password(account.password),
                name=account.name,
                role=account.role,
                created_at=now,
                updated_at=now,
            )
        )
        created += 1

    logger.info("Demo users ensured", extra={"users_created": created})
    return created
