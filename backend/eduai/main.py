"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Initialize FastAPI application with metadata (title, version)
  - Configure middleware (CORS, request context)
  - Mount auth and AI routers under /api
  - Seed demo accounts at startup when enabled
  - Expose health check endpoint

Collaborators:
  - FastAPI: ASGI web framework
  - CORSMiddleware: Cross-Origin Resource Sharing handler
  - RequestContextMiddleware: Request ID and logging context
  - auth_routes.router / ai_routes.router: business endpoints

Constraints:
  - CORS configurable via ALLOWED_ORIGINS env var (comma-separated)
  - Health check is local only (does not call the AI endpoint)

Notes:
  - Middleware order matters: RequestContext → CORS → routes
  - /healthz follows Kubernetes health check convention

Production Readiness:
  - Env validation enforced at startup (via lifespan, not import time)
  - Request tracing with X-Request-Id header
  - Structured JSON logging with request correlation
"""

from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError as SettingsValidationError

from .ai_routes import router as ai_router
from .application import ensure_demo_users
from .auth_routes import router as auth_router
from .config import get_settings
from .container import get_user_repository
from .exception_handlers import register_exception_handlers
from .logger import logger
from .middleware import RequestContextMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Validates settings and seeds demo users."""
    # This will raise ValidationError if env vars are missing/invalid
    settings = get_settings()

    seeded = ensure_demo_users(get_user_repository(), settings)

    logger.info(
        "EduAI API starting up",
        extra={
            "app_env": settings.app_env,
            "fake_llm": settings.fake_llm,
            "prompt_version": settings.prompt_version,
            "chat_model": settings.default_chat_model,
            "demo_users_created": seeded,
        },
    )
    yield
    logger.info("EduAI API shutting down")


def _get_allowed_origins() -> list[str]:
    """Get CORS origins from settings, with fallback for import-time errors."""
    try:
        return get_settings().get_allowed_origins_list()
    except SettingsValidationError:
        # Startup validation in lifespan reports the real problem
        return ["http://localhost:3000"]


def _cors_allow_credentials() -> bool:
    try:
        return get_settings().cors_allow_credentials
    except SettingsValidationError:
        return False


def create_app() -> FastAPI:
    app = FastAPI(
        title="EduAI API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "User authentication (JWT)"},
            {"name": "ai", "description": "AI-assisted assessment (bearer token)"},
        ],
    )

    # R: Middleware order (bottom = first to execute):
    # 1. CORSMiddleware - handles preflight
    # 2. RequestContextMiddleware - sets request_id
    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_get_allowed_origins(),
        allow_credentials=_cors_allow_credentials(),
        allow_methods=["GET", "POST", "PATCH", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-Id"],
        expose_headers=["X-Request-Id"],
    )

    api_router = APIRouter(prefix="/api")
    api_router.include_router(auth_router)
    api_router.include_router(ai_router)
    app.include_router(api_router)

    register_exception_handlers(app)

    @app.get("/healthz")
    def healthz(request: Request):
        """
        R: Liveness check.

        Returns:
            ok: Always True when the process serves requests
            request_id: Correlation ID for this request
        """
        return {
            "ok": True,
            "request_id": getattr(request.state, "request_id", None),
        }

    return app


app = create_app()
