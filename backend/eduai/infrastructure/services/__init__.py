"""
Completion service implementations.
"""

from .fake_completion_service import FakeCompletionService
from .http_completion_service import HttpCompletionService

__all__ = ["FakeCompletionService", "HttpCompletionService"]
