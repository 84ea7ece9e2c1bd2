"""
Vendor entity models.

Vendor prices are locked: only the price-lock role may change
``default_price``, and every change leaves a ``vendor_price_history`` row.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, new_id, utc_now


class VendorBase(Base):
    """Base fields for vendor entity."""

    branch_id: str = Field(max_length=64, index=True)
    name: str = Field(max_length=255)
    vendor_type: str = Field(default="other", max_length=32, index=True)
    description: Optional[str] = None
    contact_person: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=32)
    email: Optional[str] = Field(default=None, max_length=255)
    address: Optional[str] = None
    default_price: float = Field(default=0.0)
    price_unit: str = Field(default="per trip", max_length=32)
    bank_name: Optional[str] = Field(default=None, max_length=128)
    bank_account_number: Optional[str] = Field(default=None, max_length=64)
    bank_account_name: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = Field(default=True)


class Vendor(VendorBase, table=True):
    """Entity for vendors.

    Table: vendors
    """

    __tablename__ = "vendors"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    deleted_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"Vendor(id={self.id}, name={self.name}, default_price={self.default_price})"


class VendorPriceHistory(Base, table=True):
    """Entity for vendor price changes.

    Table: vendor_price_history
    """

    __tablename__ = "vendor_price_history"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    vendor_id: str = Field(foreign_key="vendors.id", max_length=64, index=True)
    old_price: float
    new_price: float
    reason: str
    changed_by: Optional[str] = Field(default=None, max_length=64)
    changed_at: datetime = Field(default_factory=utc_now, index=True)
