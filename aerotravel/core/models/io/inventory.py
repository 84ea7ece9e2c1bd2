"""
Inventory I/O models: stock items, movements and operation results.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class InventoryItemCreate(BaseModel):
    """Schema for creating a stock item."""

    branch_id: str
    name: str = Field(min_length=1, max_length=255)
    unit: str = Field(min_length=1, max_length=32, description="Unit of measure (liter, pcs, pack)")
    sku: Optional[str] = None
    current_stock: float = Field(default=0.0, ge=0)
    min_stock: float = Field(default=0.0, ge=0)
    unit_cost: float = Field(default=0.0, ge=0)


class InventoryItemRead(BaseModel):
    """Schema for reading a stock item."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    branch_id: str
    name: str
    sku: Optional[str] = None
    unit: str
    current_stock: float
    min_stock: float
    unit_cost: float
    is_low_stock: bool
    created_at: datetime
    updated_at: datetime


class StockPurchase(BaseModel):
    """Schema for receiving purchased stock."""

    quantity: float = Field(gt=0)
    unit_cost: float = Field(ge=0)
    notes: Optional[str] = None
    created_by: Optional[str] = None


class TripUsage(BaseModel):
    """Schema for recording stock consumed by a trip."""

    trip_id: str
    actual_quantity: float = Field(ge=0)
    expected_quantity: float = Field(ge=0)
    notes: Optional[str] = None
    created_by: Optional[str] = None


class StockAdjustment(BaseModel):
    """Schema for a stock opname (physical count) correction."""

    actual_stock: float = Field(ge=0)
    reason: str = Field(min_length=1)
    created_by: Optional[str] = None


class StockTransactionRead(BaseModel):
    """Schema for reading a stock movement."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    inventory_id: str
    transaction_type: str
    quantity: float
    stock_before: float
    stock_after: float
    trip_id: Optional[str] = None
    notes: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime


class UsageResult(BaseModel):
    """Outcome of recording trip usage."""

    transaction: StockTransactionRead
    variance_percent: float
    is_anomaly: bool
    is_low_stock: bool
    message: str


class AdjustmentResult(BaseModel):
    """Outcome of a stock opname."""

    transaction: StockTransactionRead
    variance: float
    message: str
