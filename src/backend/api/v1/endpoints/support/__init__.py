"""Service request, ticket and incident endpoints."""

from . import incidents, service_requests, tickets

__all__ = [
    "incidents",
    "service_requests",
    "tickets",
]
