"""
Notification entity.

Rows are created by event handlers and reward processing. A row without a
``user_id`` belongs to the admin channel.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, new_id, utc_now


class Notification(Base, table=True):
    """Entity for user-facing notifications.

    Table: notifications
    """

    __tablename__ = "notifications"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    user_id: Optional[str] = Field(default=None, max_length=64, index=True, description="Recipient, None for admins")
    event_type: str = Field(max_length=64, description="Event type that produced the notification")
    title: str = Field(max_length=255)
    message: str = Field(description="Notification body")
    payload: str = Field(default="{}", description="JSON copy of the event data")
    is_read: bool = Field(default=False, index=True)
    read_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, index=True)

    def __repr__(self) -> str:
        return f"Notification(id={self.id}, user_id={self.user_id}, event_type={self.event_type})"
