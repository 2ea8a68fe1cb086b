"""
Name: Dependency Injection Container

Responsibilities:
  - Wire up dependencies for the application
  - Manage singleton instances of the user store and completion client
  - Enable dependency injection in FastAPI endpoints

Collaborators:
  - infrastructure.repositories: InMemoryUserRepository
  - infrastructure.services: HttpCompletionService, FakeCompletionService
  - application: AuthService, AIBridge
  - FastAPI Depends(): Dependency injection mechanism

Constraints:
  - Manual DI (no library like dependency-injector)
  - Singletons via functools.lru_cache

Notes:
  - This is the composition root (where dependencies are wired)
  - Tests override these factories via app.dependency_overrides or
    call cache_clear() after changing the environment
"""

from functools import lru_cache

from .application import AIBridge, AuthService
from .auth_users import get_auth_settings
from .config import get_settings
from .domain.repositories import UserRepository
from .domain.services import CompletionService
from .infrastructure.prompts import PromptLoader, get_prompt_loader
from .infrastructure.repositories import InMemoryUserRepository
from .infrastructure.services import FakeCompletionService, HttpCompletionService


# R: Repository factory (singleton)
@lru_cache
def get_user_repository() -> UserRepository:
    """
    R: Get singleton instance of the user store.

    Returns:
        In-memory implementation of UserRepository
    """
    return InMemoryUserRepository()


@lru_cache
def get_completion_service() -> CompletionService:
    """
    R: Get singleton instance of the completion client.

    Returns:
        HTTP or Fake implementation of CompletionService
    """
    settings = get_settings()
    if settings.fake_llm:
        return FakeCompletionService()
    return HttpCompletionService(
        settings.ai_api_endpoint,
        authorization=settings.ai_authorization,
        customer_id=settings.ai_customer_id,
        default_model=settings.default_chat_model,
        temperature=settings.ai_temperature,
        max_tokens=settings.ai_max_tokens,
        timeout_s=settings.ai_timeout_seconds,
    )


def get_prompts() -> PromptLoader:
    return get_prompt_loader()


# R: Use-case style factories (cheap, rebuilt per request)
def get_auth_service() -> AuthService:
    """R: Create AuthService over the shared user store."""
    return AuthService(
        repository=get_user_repository(),
        auth_settings=get_auth_settings(),
    )


def get_ai_bridge() -> AIBridge:
    """R: Create AIBridge with the configured models and token ceilings."""
    settings = get_settings()
    return AIBridge(
        completion_service=get_completion_service(),
        prompt_loader=get_prompts(),
        chat_model=settings.default_chat_model,
        image_model=settings.default_image_model,
        temperature=settings.ai_temperature,
        max_tokens=settings.ai_max_tokens,
        exam_max_tokens=settings.ai_exam_max_tokens,
    )


def reset_container() -> None:
    """R: Drop cached singletons (tests, settings reload)."""
    get_user_repository.cache_clear()
    get_completion_service.cache_clear()
    get_prompt_loader.cache_clear()
