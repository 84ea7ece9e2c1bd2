"""
Compliance I/O models.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain.enums import LicenseStatus


class LicenseCreate(BaseModel):
    """Schema for registering a business license."""

    license_type: str
    license_name: str
    license_number: str
    expiry_date: Optional[date] = None
    status: LicenseStatus = LicenseStatus.active


class LicenseRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    license_type: str
    license_name: str
    license_number: str
    expiry_date: Optional[date] = None
    status: str
    reminder_30d_sent: bool
    reminder_15d_sent: bool
    reminder_7d_sent: bool
    reminder_1d_sent: bool


class AlertRead(BaseModel):
    """Schema for reading a compliance alert."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    license_id: str
    alert_type: str
    severity: str
    message: str
    is_read: bool
    read_by: Optional[str] = None
    read_at: Optional[datetime] = None
    is_resolved: bool
    resolved_by: Optional[str] = None
    resolved_at: Optional[datetime] = None
    resolution_notes: Optional[str] = None
    created_at: datetime


class AlertGenerateRequest(BaseModel):
    today: Optional[date] = Field(default=None, description="Reference date, defaults to the current UTC date")


class AlertGenerateResult(BaseModel):
    alerts_created: int
    alerts: List[AlertRead] = Field(default_factory=list)


class AlertResolve(BaseModel):
    resolved_by: Optional[str] = None
    resolution_notes: Optional[str] = None


class UnreadCount(BaseModel):
    count: int
