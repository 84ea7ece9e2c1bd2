"""
Notification I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class NotificationRead(BaseModel):
    """Schema for reading a notification."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: Optional[str] = None
    event_type: str
    title: str
    message: str
    is_read: bool
    read_at: Optional[datetime] = None
    created_at: datetime
