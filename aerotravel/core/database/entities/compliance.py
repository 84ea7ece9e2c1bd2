"""
Compliance entity models: business licenses and their expiry alerts.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, new_id, utc_now


class BusinessLicenseBase(Base):
    """Base fields for business license entity."""

    license_type: str = Field(max_length=64, description="Permit category (e.g. nib, tdup, skpd)")
    license_name: str = Field(max_length=255)
    license_number: str = Field(max_length=128)
    expiry_date: Optional[date] = Field(default=None, index=True)
    status: str = Field(default="active", max_length=32)


class BusinessLicense(BusinessLicenseBase, table=True):
    """Entity for business licenses.

    Table: business_licenses
    """

    __tablename__ = "business_licenses"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    reminder_30d_sent: bool = Field(default=False)
    reminder_15d_sent: bool = Field(default=False)
    reminder_7d_sent: bool = Field(default=False)
    reminder_1d_sent: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class ComplianceAlert(Base, table=True):
    """Entity for compliance alerts.

    Table: compliance_alerts
    """

    __tablename__ = "compliance_alerts"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    license_id: str = Field(foreign_key="business_licenses.id", max_length=64, index=True)
    alert_type: str = Field(max_length=32)
    severity: str = Field(max_length=16)
    message: str
    is_read: bool = Field(default=False, index=True)
    read_by: Optional[str] = Field(default=None, max_length=64)
    read_at: Optional[datetime] = None
    is_resolved: bool = Field(default=False, index=True)
    resolved_by: Optional[str] = Field(default=None, max_length=64)
    resolved_at: Optional[datetime] = None
    resolution_notes: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now, index=True)
