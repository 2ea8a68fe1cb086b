"""
Name: Domain Entities

Responsibilities:
  - Shapes of one AI exchange (messages in, AIResponse out)
  - Enumerations shared by prompts and HTTP schemas

Constraints:
  - No persistence: every instance lives for one request
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal


class Language(str, Enum):
    """R: Prompt language switch."""

    EN = "en"
    FR = "fr"

    @classmethod
    def resolve(cls, value: "str | Language | None") -> "Language":
        """R: Anything other than French falls back to English."""
        return cls.FR if value == cls.FR.value else cls.EN


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


@dataclass(frozen=True)
class ChatMessage:
    """R: One message of a chat-completion request."""

    role: Literal["system", "user", "assistant"]
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class TestCase:
    """R: Input/expected output pair used to grade a student's code."""

    __test__ = False  # not a pytest class

    input: str
    expected_output: str


def _count(value: Any) -> int:
    """R: Token count from an untrusted usage field; 0 when not numeric."""
    if isinstance(value, bool):
        return 0
    try:
        return int(value or 0)
    except (TypeError, ValueError, OverflowError):
        return 0


@dataclass(frozen=True)
class TokenUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def from_payload(cls, payload: Any) -> "TokenUsage | None":
        """R: Build from an OpenAI-style usage object; None if absent."""
        if not isinstance(payload, dict):
            return None
        return cls(
            prompt_tokens=_count(payload.get("prompt_tokens")),
            completion_tokens=_count(payload.get("completion_tokens")),
            total_tokens=_count(payload.get("total_tokens")),
        )


@dataclass
class AIResponse:
    """
    R: Result of one call to the completion service.

    Attributes:
        success: True on HTTP 2xx with a decodable body
        data: Completion text (success only)
        error: Failure description (logged, never shown to end users)
        usage: Token accounting when the service reports it
    """

    success: bool
    data: Any = None
    error: str | None = None
    usage: TokenUsage | None = None
