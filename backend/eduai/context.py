"""
Name: Request Context (ContextVars)

Responsibilities:
  - Store request-scoped data (request_id, method, path, user_id)
  - Enable structured logging with request correlation

Collaborators:
  - middleware.py: Sets context at request start
  - logger.py: Reads context for log enrichment
  - auth_users.py: Sets user_id once the bearer token resolves

Constraints:
  - Only primitive types (str) for safety
  - Default empty string (never None) for JSON serialization
"""

from contextvars import ContextVar

# R: Request identifier (UUID) - set by middleware
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# R: HTTP method - set by middleware
http_method_var: ContextVar[str] = ContextVar("http_method", default="")

# R: Request path - set by middleware
http_path_var: ContextVar[str] = ContextVar("http_path", default="")

# R: Authenticated user id - set by the bearer dependency
user_id_var: ContextVar[str] = ContextVar("user_id", default="")


def get_context_dict() -> dict:
    """
    R: Get current context as dict for log enrichment.

    Returns:
        Dict with non-empty context values only
    """
    ctx = {}

    if val := request_id_var.get():
        ctx["request_id"] = val
    if val := http_method_var.get():
        ctx["method"] = val
    if val := http_path_var.get():
        ctx["path"] = val
    if val := user_id_var.get():
        ctx["user_id"] = val

    return ctx


def clear_context() -> None:
    """R: Reset all context vars (called at request end)."""
    request_id_var.set("")
    http_method_var.set("")
    http_path_var.set("")
    user_id_var.set("")
