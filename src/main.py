"""Devnet API application factory and ASGI entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.routes import router as api_router
from api.routes.health import router as health_router
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter, rate_limit_exceeded_handler
from infrastructure.database.session import engine

setup_logging()

logger = structlog.get_logger()

API_PREFIX = "/api"

DESCRIPTION = f"""
Developer social network: register, keep a profile, and share posts that
others can like and comment on.

Protected endpoints take the token from `POST {API_PREFIX}/users` or
`POST {API_PREFIX}/auth` as `Authorization: Bearer <token>`, or in the
`x-auth-token` header.

Rate limits per client: reads {READ_LIMIT}, writes {WRITE_LIMIT}.
"""

OPENAPI_TAGS = [
    {"name": "health", "description": "Liveness and database checks"},
    {"name": "users", "description": "Registration"},
    {"name": "auth", "description": "Login and current user"},
    {"name": "profile", "description": "Developer profiles, experience and education"},
    {"name": "posts", "description": "Posts, likes and comments"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("app_started", environment=settings.app_env, port=settings.port)
    yield
    await engine.dispose()
    logger.info("app_stopped")


def _add_middleware(app: FastAPI) -> None:
    # Starlette runs the last-added middleware first, so request IDs are
    # assigned before the logging middleware reads them.
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def create_app() -> FastAPI:
    """Build the FastAPI application with middleware, handlers and routes."""
    app = FastAPI(
        title=settings.app_name,
        description=DESCRIPTION,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        openapi_tags=OPENAPI_TAGS,
        license_info={"name": "MIT"},
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    setup_exception_handlers(app)

    _add_middleware(app)

    app.include_router(health_router)
    app.include_router(api_router, prefix=API_PREFIX)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
