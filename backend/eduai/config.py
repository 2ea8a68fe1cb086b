"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults that match the demo deployment

Collaborators:
  - main.py: reads settings for CORS, seeding and startup validation
  - container.py: reads settings for the completion client and prompts
  - auth_users.py: reads JWT secret and token TTL

Constraints:
  - No business logic, pure configuration

Notes:
  - Singleton via lru_cache
  - Tests clear the cache (get_settings.cache_clear()) after monkeypatching env
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_JWT_SECRET = "your-super-secure-jwt-secret-development-only"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: Deployment environment (development, test, production)
        allowed_origins: Comma-separated CORS origins
        cors_allow_credentials: Allow cookies cross-origin (default: False)
        jwt_secret: Secret for signing access tokens
        jwt_access_ttl_minutes: Access token TTL (default: 7 days)
        ai_api_endpoint: Chat-completion endpoint URL
        ai_customer_id: Value sent in the customerId header
        ai_authorization: Value sent in the Authorization header
        default_chat_model: Model id for text generation
        default_image_model: Model id for image generation
        ai_temperature: Sampling temperature for every call (default: 0.5)
        ai_max_tokens: Token ceiling for regular calls (default: 4000)
        ai_exam_max_tokens: Token ceiling for exam generation (default: 6000)
        ai_timeout_seconds: Outbound call timeout (default: 300)
        fake_llm: Use the deterministic completion service (tests/CI)
        prompt_version: Prompt template version directory
        seed_demo_users: Seed demo admin/professor/student accounts
    """

    app_env: str = "development"

    # CORS
    allowed_origins: str = "http://localhost:3000"
    cors_allow_credentials: bool = False

    # Security - JWT Auth
    jwt_secret: str = DEV_JWT_SECRET
    jwt_access_ttl_minutes: int = 7 * 24 * 60

    # Completion service
    ai_api_endpoint: str = "https://oi-server.onrender.com/chat/completions"
    ai_customer_id: str = ""
    ai_authorization: str = ""
    default_chat_model: str = "openrouter/anthropic/claude-sonnet-4"
    default_image_model: str = "replicate/black-forest-labs/flux-1.1-pro"
    ai_temperature: float = 0.5
    ai_max_tokens: int = 4000
    ai_exam_max_tokens: int = 6000
    ai_timeout_seconds: float = 300.0

    # Testing/CI
    fake_llm: bool = False

    # Prompts
    prompt_version: str = "v1"

    # Demo data
    seed_demo_users: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("ai_temperature")
    @classmethod
    def temperature_in_range(cls, v: float) -> float:
        if not 0.0 <= v <= 2.0:
            raise ValueError("ai_temperature must be between 0 and 2")
        return v

    @field_validator(
        "ai_max_tokens", "ai_exam_max_tokens", "jwt_access_ttl_minutes"
    )
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be greater than 0")
        return v

    @field_validator("ai_timeout_seconds")
    @classmethod
    def timeout_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("ai_timeout_seconds must be greater than 0")
        return v

    @model_validator(mode="after")
    def validate_ai_requirements(self):
        if not self.ai_authorization and not self.fake_llm:
            raise ValueError("AI_AUTHORIZATION is required unless FAKE_LLM=1")
        return self

    @model_validator(mode="after")
    def validate_production_secrets(self):
        if self.is_production() and self.jwt_secret == DEV_JWT_SECRET:
            raise ValueError("JWT_SECRET must be set in production")
        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()
