"""Staff authentication endpoints."""

from . import auth

__all__ = ["auth"]
