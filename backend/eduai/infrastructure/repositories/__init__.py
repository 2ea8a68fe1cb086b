"""
Repository implementations.
"""

from .in_memory_user_repo import InMemoryUserRepository

__all__ = ["InMemoryUserRepository"]
