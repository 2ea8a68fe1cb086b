"""
Name: Fake Completion Service (Deterministic)

Responsibilities:
  - Provide deterministic completions for testing/CI (FAKE_LLM=1)
  - Avoid external dependencies (no HTTP calls)
  - Record the calls it receives for assertions
"""

from __future__ import annotations

import hashlib
import json
from typing import List, Optional

from ...domain.entities import AIResponse, ChatMessage, TokenUsage
from ...logger import logger


def _digest(messages: List[ChatMessage]) -> str:
    joined = "|".join(f"{m.role}:{m.content}" for m in messages)
    return hashlib.sha256(joined.encode("utf-8")).hexdigest()[:16]


class FakeCompletionService:
    """R: Deterministic CompletionService for tests/CI."""

    MODEL_ID = "fake-completion-v1"

    def __init__(self, reply: Optional[str] = None) -> None:
        self._reply = reply
        self.calls: list[dict] = []
        logger.info("FakeCompletionService initialized")

    def complete(
        self,
        messages: List[ChatMessage],
        *,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> AIResponse:
        self.calls.append(
            {
                "messages": list(messages),
                "model": model or self.MODEL_ID,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        if self._reply is not None:
            text = self._reply
        else:
            payload = {"fake": True, "digest": _digest(messages)}
            text = f"```json\n{json.dumps(payload)}\n```"

        prompt_tokens = sum(len(m.content.split()) for m in messages)
        completion_tokens = len(text.split())
        return AIResponse(
            success=True,
            data=text,
            usage=TokenUsage(
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                total_tokens=prompt_tokens + completion_tokens,
            ),
        )
