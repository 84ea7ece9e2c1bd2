"""
Database repository layer using SQLModel.

This package contains all repository classes organized by business domain.
Each module provides async data access operations for its SQLModel entities
on top of the shared CRUD implementation in ``base``.

Modules:
- base: AsyncBaseRepository interface, SQLModelRepository and QueryBuilder
- app_events: Event audit log (append-only)
- notifications: Notification storage
- inventory: Stock items, stock movements and trip expenses
- vendors: Vendors and price history
- compliance: Business licenses and alerts
- rewards: Guide reward balances and ledger
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
