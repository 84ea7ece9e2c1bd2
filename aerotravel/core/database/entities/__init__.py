"""
Database entity models.

Each module represents a single table or a small group of related tables:

- app_events: Event bus audit log
- notifications: User and admin-channel notifications
- inventory: Stock items, stock movements and trip expenses
- vendors: Vendors and their locked-price history
- compliance: Business licenses and expiry alerts
- rewards: Guide reward point balances and ledger
"""

from . import (
    app_events,
    compliance,
    inventory,
    notifications,
    rewards,
    vendors,
)

__all__ = [
    "app_events",
    "compliance",
    "inventory",
    "notifications",
    "rewards",
    "vendors",
]
