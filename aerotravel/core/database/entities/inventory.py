"""
Inventory entity models.

Covers stock items per branch (fuel, consumables, equipment), their
movement ledger, and the trip expense rows that usage anomalies flag.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, new_id, utc_now


class InventoryItemBase(Base):
    """Base fields for inventory item entity."""

    branch_id: str = Field(max_length=64, index=True, description="Owning branch")
    name: str = Field(max_length=255, description="Item name")
    sku: Optional[str] = Field(default=None, max_length=64)
    unit: str = Field(max_length=32, description="Unit of measure (liter, pcs, pack)")
    current_stock: float = Field(default=0.0)
    min_stock: float = Field(default=0.0, description="Low-stock threshold")
    unit_cost: float = Field(default=0.0, description="Weighted average cost per unit")


class InventoryItem(InventoryItemBase, table=True):
    """Entity for stock items.

    Table: inventory
    """

    __tablename__ = "inventory"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock <= self.min_stock

    def __repr__(self) -> str:
        return f"InventoryItem(id={self.id}, name={self.name}, current_stock={self.current_stock})"


class InventoryTransaction(Base, table=True):
    """Entity for stock movements. Quantity is signed: usage rows are negative.

    Table: inventory_transactions
    """

    __tablename__ = "inventory_transactions"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    inventory_id: str = Field(foreign_key="inventory.id", max_length=64, index=True)
    transaction_type: str = Field(max_length=16, description="purchase, usage, adjustment or transfer")
    quantity: float
    stock_before: float
    stock_after: float
    trip_id: Optional[str] = Field(default=None, max_length=64, index=True)
    notes: Optional[str] = Field(default=None)
    created_by: Optional[str] = Field(default=None, max_length=64)
    created_at: datetime = Field(default_factory=utc_now, index=True)


class TripExpense(Base, table=True):
    """Entity for trip expense lines.

    Table: trip_expenses
    """

    __tablename__ = "trip_expenses"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    trip_id: str = Field(max_length=64, index=True)
    vendor_id: Optional[str] = Field(default=None, max_length=64)
    description: str = Field(max_length=255)
    amount: float = Field(default=0.0)
    is_anomaly: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)
