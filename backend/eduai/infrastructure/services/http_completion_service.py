"""
Name: HTTP Chat-Completion Service

Responsibilities:
  - Implement CompletionService against an OpenAI-style
    /chat/completions endpoint
  - Apply configured defaults (model, temperature, max tokens)
  - Enforce the outbound timeout
  - Turn every failure into AIResponse(success=False, error=...)

Collaborators:
  - domain.services.CompletionService: Interface implementation
  - httpx: HTTP client
  - config.Settings: endpoint, credentials and defaults (via container)

Constraints:
  - Single attempt: no retries, no backoff
  - Never raises; callers inspect AIResponse.success
  - Never logs the Authorization header

Notes:
  - timeout_s is handed to httpx, which applies it to each phase
    (connect, write, read, pool) separately. It bounds any single stall,
    not the wall-clock length of the whole call: a server that keeps
    trickling bytes can hold a request open longer than timeout_s.
"""

from __future__ import annotations

from typing import Any, List, Optional

import httpx

from ...domain.entities import AIResponse, ChatMessage, TokenUsage
from ...logger import logger

DEFAULT_TIMEOUT_SECONDS = 300.0


class _MalformedPayload(ValueError):
    """Body decoded as JSON but does not look like a completion."""


def _extract_content(payload: Any) -> Any:
    """
    R: choices[0].message.content, else a top-level content field.

    Raises:
        _MalformedPayload: Body is not an object, or choices/message have
            the wrong type
    """
    if not isinstance(payload, dict):
        raise _MalformedPayload(f"expected an object, got {type(payload).__name__}")
    choices = payload.get("choices") or []
    if not isinstance(choices, list):
        raise _MalformedPayload("choices is not a list")
    if choices and isinstance(choices[0], dict):
        message = choices[0].get("message") or {}
        if not isinstance(message, dict):
            raise _MalformedPayload("choices[0].message is not an object")
        content = message.get("content")
        if content:
            return content
    return payload.get("content")


class HttpCompletionService:
    """R: httpx-backed implementation of CompletionService."""

    def __init__(
        self,
        endpoint: str,
        *,
        authorization: str = "",
        customer_id: str = "",
        default_model: str,
        temperature: float = 0.5,
        max_tokens: int = 4000,
        timeout_s: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        if not endpoint:
            raise ValueError("endpoint is required for HttpCompletionService")
        self.endpoint = endpoint
        self.default_model = default_model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._timeout = timeout_s
        self._headers = {
            "Content-Type": "application/json",
            "Authorization": authorization,
            "customerId": customer_id,
        }

    def complete(
        self,
        messages: List[ChatMessage],
        *,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> AIResponse:
        body = {
            "model": model or self.default_model,
            "messages": [message.to_dict() for message in messages],
            "temperature": self.temperature if temperature is None else temperature,
            "max_tokens": max_tokens or self.max_tokens,
        }

        try:
            resp = httpx.post(
                self.endpoint,
                json=body,
                headers=self._headers,
                timeout=self._timeout,
            )
        except httpx.TimeoutException as exc:
            logger.error(
                "Completion request timed out",
                extra={"model": body["model"], "timeout_s": self._timeout},
            )
            return AIResponse(success=False, error=f"AI API request timed out: {exc}")
        except httpx.HTTPError as exc:
            logger.error(
                "Completion request failed",
                extra={"model": body["model"], "error": str(exc)},
            )
            return AIResponse(success=False, error=str(exc) or type(exc).__name__)

        if not resp.is_success:
            logger.error(
                "Completion service returned an error status",
                extra={"model": body["model"], "status": resp.status_code},
            )
            return AIResponse(
                success=False,
                error=f"AI API request failed: {resp.status_code} {resp.reason_phrase}",
            )

        try:
            payload = resp.json()
        except ValueError as exc:
            logger.error(
                "Completion service returned a non-JSON body",
                extra={"model": body["model"], "status": resp.status_code},
            )
            return AIResponse(success=False, error=f"Invalid AI API response: {exc}")

        try:
            content = _extract_content(payload)
        except _MalformedPayload as exc:
            logger.error(
                "Completion service returned an unexpected body",
                extra={"model": body["model"], "status": resp.status_code},
            )
            return AIResponse(success=False, error=f"Invalid AI API response: {exc}")

        usage = TokenUsage.from_payload(payload.get("usage"))
        logger.info(
            "Completion received",
            extra={
                "model": body["model"],
                "max_tokens": body["max_tokens"],
                "total_tokens": usage.total_tokens if usage else None,
            },
        )
        return AIResponse(success=True, data=content, usage=usage)
