"""Back-office endpoints: clients, inventory, invoices, leads and dashboard."""

from . import clients, dashboard, inventory, invoices, leads

__all__ = [
    "clients",
    "dashboard",
    "inventory",
    "invoices",
    "leads",
]
