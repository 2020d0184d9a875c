"""
Debug logging middleware for request troubleshooting.

SECURITY: Only enabled when DEBUG=True.
Sensitive headers (Authorization, Cookie) are redacted, which also keeps the
client session cookie out of the logs.
"""

import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from core.config import settings


class DebugLoggingMiddleware(BaseHTTPMiddleware):
    """Log request headers and outcome when the API runs in debug mode."""

    # Headers that should never be logged in full
    SENSITIVE_HEADERS = {"authorization", "cookie", "set-cookie"}

    async def dispatch(self, request: Request, call_next):
        if not settings.api.debug:
            return await call_next(request)

        logger = logging.getLogger("debug")

        safe_headers = {
            key: "[REDACTED]" if key.lower() in self.SENSITIVE_HEADERS else value
            for key, value in request.headers.items()
        }

        logger.debug(f"Request: {request.method} {request.url.path}")
        logger.debug(f"   Origin: {request.headers.get('origin', 'NONE')}")
        logger.debug(f"   Headers: {safe_headers}")

        try:
            response = await call_next(request)
            logger.debug(f"   Response: {response.status_code}")
            return response
        except Exception as e:
            logger.error(f"   Error: {str(e)}", exc_info=True)
            raise
