"""
Name: AI Reply Parsing

Responsibilities:
  - Extract the JSON object from a free-text completion
  - Check that a parsed payload carries the fields a caller relies on

Notes:
  - Models often wrap JSON in markdown fences or add prose around it;
    both are tolerated
  - Failures return None/False and are logged, never raised
"""

import json
import re
from collections.abc import Mapping, Sequence
from typing import Any, Iterable, Optional

from ..domain.entities import AIResponse
from ..logger import logger

_LEADING_JSON_FENCE = re.compile(r"^```json\s*")
_LEADING_FENCE = re.compile(r"^```\s*")
_TRAILING_FENCE = re.compile(r"\s*```$")
_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def _strip_fences(text: str) -> str:
    text = _TRAILING_FENCE.sub("", _LEADING_JSON_FENCE.sub("", text))
    return _TRAILING_FENCE.sub("", _LEADING_FENCE.sub("", text))


def parse_ai_response(response: AIResponse) -> Optional[Any]:
    """
    R: Decode the JSON carried by a completion reply.

    Returns:
        The decoded value, or None when the call failed, the reply is empty,
        or the text holds no decodable JSON.
    """
    if not response.success or not response.data:
        logger.warning("AI response unusable", extra={"upstream_error": response.error})
        return None

    raw = response.data if isinstance(response.data, str) else json.dumps(response.data)
    text = _strip_fences(raw)

    match = _JSON_OBJECT.search(text)
    if match:
        text = match.group(0)

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning(
            "Failed to parse AI response",
            extra={"error": str(exc), "raw_chars": len(raw)},
        )
        return None


def _step(current: Any, key: str) -> tuple[bool, Any]:
    if isinstance(current, Mapping):
        if key not in current:
            return False, None
        return True, current[key]
    if isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
        if key.isdigit() and int(key) < len(current):
            return True, current[int(key)]
    return False, None


def validate_ai_response(payload: Any, required_fields: Iterable[str]) -> bool:
    """
    R: True if every dotted path in `required_fields` resolves in `payload`.

    Example:
        validate_ai_response(data, ["questions", "summary.score"])
    """
    if not isinstance(payload, Mapping):
        return False

    for field_path in required_fields:
        current: Any = payload
        for key in field_path.split("."):
            found, current = _step(current, key)
            if not found:
                return False
    return True
