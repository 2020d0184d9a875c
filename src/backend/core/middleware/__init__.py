"""
Middleware classes for FastAPI application.

This package contains all custom middleware used by the application.
"""

from .correlation import CorrelationIdMiddleware, get_correlation_id
from .debug import DebugLoggingMiddleware

__all__ = [
    "CorrelationIdMiddleware",
    "DebugLoggingMiddleware",
    "get_correlation_id",
]
