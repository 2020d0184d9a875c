"""
API v1 routes.

Endpoints are organized into subdirectories: auth, portal, support,
technicians and back_office.
"""

from fastapi import APIRouter

# Import from subdirectories
from .endpoints.auth import auth
from .endpoints.portal import client_auth, client_portal
from .endpoints.support import incidents, service_requests, tickets
from .endpoints.technicians import (
    certifications,
    completions,
    skills,
    stats,
    tech_profiles,
)
from .endpoints.back_office import clients, dashboard, inventory, invoices, leads

api_router = APIRouter()

# Staff authentication
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])

# Client portal (cookie session)
api_router.include_router(
    client_auth.router, prefix="/client", tags=["client-auth"]
)
api_router.include_router(
    client_portal.router, prefix="/client", tags=["client-portal"]
)

# Support desk
api_router.include_router(tickets.router, prefix="/tickets", tags=["tickets"])

api_router.include_router(
    service_requests.router,
    prefix="/service-requests",
    tags=["service-requests"],
)

api_router.include_router(
    incidents.router, prefix="/incidents", tags=["incidents"]
)

# Technicians
api_router.include_router(
    tech_profiles.router, prefix="/tech-profile", tags=["tech-profiles"]
)

api_router.include_router(
    certifications.router,
    prefix="/tech-certifications",
    tags=["tech-certifications"],
)

api_router.include_router(skills.router, prefix="/tech-skills", tags=["tech-skills"])

api_router.include_router(
    completions.router,
    prefix="/service-completions",
    tags=["service-completions"],
)

api_router.include_router(stats.router, prefix="/tech-stats", tags=["tech-stats"])

# Back office
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])

api_router.include_router(
    inventory.router, prefix="/inventory", tags=["inventory"]
)

api_router.include_router(invoices.router, prefix="/invoices", tags=["invoices"])

api_router.include_router(leads.router, prefix="/leads", tags=["leads"])

api_router.include_router(
    dashboard.router, prefix="/dashboard", tags=["dashboard"]
)
