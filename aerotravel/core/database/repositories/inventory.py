"""
Inventory repositories: stock items, stock movements and trip expenses.
"""

from __future__ import annotations

from typing import List

from sqlalchemy import update as sa_update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.inventory import InventoryItem, InventoryTransaction, TripExpense
from .base import SQLModelRepository


class InventoryItemRepository(SQLModelRepository[InventoryItem]):
    """Repository for inventory item data access operations."""

    order_by = "name"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, InventoryItem)

    async def list_for_branch(self, branch_id: str) -> List[InventoryItem]:
        """List a branch's items ordered by name."""
        stmt = select(InventoryItem).where(InventoryItem.branch_id == branch_id).order_by(InventoryItem.name.asc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_low_stock(self, branch_id: str) -> List[InventoryItem]:
        """List a branch's items at or below their minimum stock, ordered by name."""
        stmt = (
            select(InventoryItem)
            .where(InventoryItem.branch_id == branch_id)
            .where(InventoryItem.current_stock <= InventoryItem.min_stock)
            .order_by(InventoryItem.name.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class InventoryTransactionRepository(SQLModelRepository[InventoryTransaction]):
    """Repository for the stock movement ledger."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, InventoryTransaction)

    async def history(self, inventory_id: str, limit: int = 50) -> List[InventoryTransaction]:
        """Movements for one item, newest first."""
        return await self.list(limit=limit, filters={"inventory_id": inventory_id})


class TripExpenseRepository(SQLModelRepository[TripExpense]):
    """Repository for trip expense lines."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, TripExpense)

    async def list_for_trip(self, trip_id: str) -> List[TripExpense]:
        return await self.list(filters={"trip_id": trip_id})

    async def flag_anomaly(self, trip_id: str) -> int:
        """Mark every expense of a trip as anomalous without committing.

        Returns:
            Number of rows affected
        """
        stmt = sa_update(TripExpense).where(TripExpense.trip_id == trip_id).values(is_anomaly=True)
        result = await self.session.execute(stmt)
        return result.rowcount or 0
