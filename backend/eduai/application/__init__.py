"""
Application layer: auth gate, AI bridge and reply parsing.
"""

from .ai_bridge import AIBridge
from .auth_service import AuthResult, AuthService
from .dev_seed import DEMO_ACCOUNTS, ensure_demo_users
from .response_parsing import parse_ai_response, validate_ai_response

__all__ = [
    "AIBridge",
    "AuthResult",
    "AuthService",
    "DEMO_ACCOUNTS",
    "ensure_demo_users",
    "parse_ai_response",
    "validate_ai_response",
]
