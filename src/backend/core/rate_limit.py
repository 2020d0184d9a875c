"""
Shared slowapi limiter.

Endpoints decorate handlers with ``@limiter.limit(...)`` (the handler must take
``request: Request``); the app factory registers the same instance on
``app.state`` together with the 429 handler.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from core.config import settings

limiter = Limiter(
    key_func=get_remote_address,
    enabled=settings.rate_limit.enabled,
)
