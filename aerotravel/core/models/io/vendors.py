"""
Vendor I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain.enums import VendorType


class VendorCreate(BaseModel):
    """Schema for creating a vendor."""

    branch_id: str
    name: str = Field(description="Vendor name, must not be blank")
    vendor_type: VendorType = VendorType.other
    description: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    default_price: float = Field(description="Locked default price, must be positive")
    price_unit: str = "per trip"
    bank_name: Optional[str] = None
    bank_account_number: Optional[str] = None
    bank_account_name: Optional[str] = None
    is_active: bool = True


class VendorUpdate(BaseModel):
    """Schema for editing vendor details. The price is changed separately."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    vendor_type: Optional[VendorType] = None
    description: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    price_unit: Optional[str] = None
    bank_name: Optional[str] = None
    bank_account_number: Optional[str] = None
    bank_account_name: Optional[str] = None
    is_active: Optional[bool] = None


class VendorPriceUpdate(BaseModel):
    """Schema for changing a locked vendor price."""

    new_price: float
    reason: str
    changed_by: Optional[str] = None


class VendorPriceHistoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    vendor_id: str
    old_price: float
    new_price: float
    reason: str
    changed_by: Optional[str] = None
    changed_at: datetime


class VendorRead(BaseModel):
    """Schema for reading a vendor."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    branch_id: str
    name: str
    vendor_type: str
    description: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    default_price: float
    price_unit: str
    bank_name: Optional[str] = None
    bank_account_number: Optional[str] = None
    bank_account_name: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class VendorDetail(VendorRead):
    """Vendor with its price history, newest first."""

    price_history: List[VendorPriceHistoryRead] = Field(default_factory=list)
