"""
Application factory for FastAPI.

This module provides the create_app() function that creates and configures
the FastAPI application instance.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from api.v1 import api_router
from app.routes import root_router, health_router
from core.config import settings
from core.lifespan import lifespan
from core.middleware import CorrelationIdMiddleware, DebugLoggingMiddleware
from core.rate_limit import limiter

logger = logging.getLogger(__name__)


async def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Reject malformed bodies with a 400 and a generic message.

    Field-level details are logged, not echoed back to the caller.
    """
    logger.info(
        f"Rejected invalid request to {request.method} {request.url.path}: "
        f"{exc.errors()}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request data"},
    )


def create_app() -> FastAPI:
    """
    Application factory function.

    Creates and configures the FastAPI application with all necessary
    middleware and routes.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.api.app_name,
        version=settings.api.app_version,
        description="Repair shop back office, technician directory and client portal",
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    # Add rate limiter (shared with the endpoint decorators)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_exception_handler(RequestValidationError, _validation_exception_handler)

    # Debug logging middleware (only enabled when DEBUG=True)
    if settings.api.debug:
        app.add_middleware(DebugLoggingMiddleware)

    # CORS middleware; credentials are required for the client session cookie
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept", "Origin", "X-Requested-With", "X-Correlation-ID"],
        expose_headers=["X-Correlation-ID"],
    )

    # Outermost so every log line of a request carries its correlation ID
    app.add_middleware(CorrelationIdMiddleware)

    # Include routers
    app.include_router(root_router)
    app.include_router(health_router)
    app.include_router(api_router, prefix=settings.api.api_prefix)

    return app
