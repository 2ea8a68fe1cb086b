"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Provide reusable test fixtures
  - Configure an isolated test environment (no .env, fake completions)
  - Reset cached singletons between tests

Collaborators:
  - pytest: Test framework
  - eduai.container: singleton factories cleared per test

Notes:
  - Env vars are set BEFORE importing eduai so import-time settings
    lookups (CORS) succeed
"""

import os
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("FAKE_LLM", "1")
os.environ.setdefault("JWT_SECRET", "test-secret")

from eduai import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from eduai.application import AIBridge, AuthService  # noqa: E402
from eduai.auth_users import AuthSettings  # noqa: E402
from eduai.container import reset_container  # noqa: E402
from eduai.infrastructure.prompts import PromptLoader  # noqa: E402
from eduai.infrastructure.repositories import InMemoryUserRepository  # noqa: E402
from eduai.infrastructure.services import FakeCompletionService  # noqa: E402


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


@pytest.fixture(autouse=True)
def reset_singletons():
    """R: Fresh settings and container state for every test."""
    app_config.get_settings.cache_clear()
    reset_container()
    yield
    app_config.get_settings.cache_clear()
    reset_container()


# ============================================================================
# Auth Fixtures
# ============================================================================


@pytest.fixture
def auth_settings() -> AuthSettings:
    return AuthSettings(jwt_secret="test-secret", jwt_access_ttl_minutes=30)


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def auth_service(user_repository, auth_settings) -> AuthService:
    return AuthService(repository=user_repository, auth_settings=auth_settings)


# ============================================================================
# AI Fixtures
# ============================================================================


@pytest.fixture
def fake_completion() -> FakeCompletionService:
    return FakeCompletionService()


@pytest.fixture
def prompt_loader() -> PromptLoader:
    return PromptLoader(version="v1")


@pytest.fixture
def ai_bridge(fake_completion, prompt_loader) -> AIBridge:
    return AIBridge(
        completion_service=fake_completion,
        prompt_loader=prompt_loader,
        chat_model="chat-model",
        image_model="image-model",
    )
