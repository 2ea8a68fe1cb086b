"""
Name: Domain Repository Interfaces

Responsibilities:
  - Define the contract for user persistence
  - Enable dependency inversion (the auth gate doesn't depend on a store)

Collaborators:
  - users.User: stored record
  - Implementations in infrastructure.repositories

Constraints:
  - Pure interfaces (Protocol), no implementation
  - Storage-agnostic (in-memory today, a database tomorrow)

Notes:
  - Email lookups are case-insensitive; implementations normalize
  - Enables testing with mock repositories
"""

from typing import List, Optional, Protocol

from ..users import User


class UserRepository(Protocol):
    """
    R: Interface for user persistence.

    Implementations must provide:
      - Case-insensitive lookup by email (the unique key)
      - Lookup by id
      - Upsert keyed by email
      - Listing of every stored user
    """

    def get_by_email(self, email: str) -> Optional[User]:
        """
        R: Fetch a user by email (case-insensitive).

        Returns:
            User or None if not found
        """
        ...

    def get_by_id(self, user_id: str) -> Optional[User]:
        """R: Fetch a user by id, or None."""
        ...

    def save(self, user: User) -> None:
        """
        R: Insert or replace the record stored under user.email.

        Args:
            user: Record to persist
        """
        ...

    def list_all(self) -> List[User]:
        """R: All stored users in insertion order."""
        ...
