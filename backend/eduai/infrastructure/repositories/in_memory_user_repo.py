"""
Name: In-Memory User Repository

Responsibilities:
  - Keep user records in a process-local map keyed by lower-cased email
  - Serve lookups by email and by id
  - Provide thread-safe upsert and listing

Collaborators:
  - domain.repositories.UserRepository (contract)
  - users.User (stored record)
  - threading.Lock (FastAPI runs sync handlers on a threadpool)

Constraints:
  - Non-durable: contents vanish on restart
  - Repo only: no business rules (duplicates are checked by the auth gate)
  - Returned records are copies; mutate and save() to persist changes
"""

from dataclasses import replace
from threading import Lock
from typing import Dict, List, Optional

from ...users import User


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class InMemoryUserRepository:
    """R: Thread-safe in-memory implementation of UserRepository."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[str, User] = {}

    def get_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            user = self._users.get(normalize_email(email))
            return replace(user) if user else None

    def get_by_id(self, user_id: str) -> Optional[User]:
        with self._lock:
            for user in self._users.values():
                if user.id == user_id:
                    return replace(user)
        return None

    def save(self, user: User) -> None:
        stored = replace(user, email=normalize_email(user.email))
        with self._lock:
            self._users[stored.email] = stored

    def list_all(self) -> List[User]:
        with self._lock:
            return [replace(user) for user in self._users.values()]

    def clear(self) -> None:
        """R: Drop every record (tests)."""
        with self._lock:
            self._users.clear()
