"""
Domain layer: entities and ports (protocols) with no framework dependencies.
"""

from .entities import AIResponse, ChatMessage, Difficulty, Language, TestCase, TokenUsage
from .repositories import UserRepository
from .services import CompletionService

__all__ = [
    "AIResponse",
    "ChatMessage",
    "CompletionService",
    "Difficulty",
    "Language",
    "TestCase",
    "TokenUsage",
    "UserRepository",
]
