"""Client portal endpoints (cookie session)."""

from . import client_auth, client_portal

__all__ = ["client_auth", "client_portal"]
