"""
Application event entity.

Every emission on the event bus is recorded here, forming an append-only
audit log. The bus never replays these rows; they exist for inspection only.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from sqlmodel import Field

from ..base import Base, dumps_payload, loads_payload, new_id, utc_now


class AppEventBase(Base):
    """Base fields for the application event entity."""

    type: str = Field(max_length=64, index=True, description="Event type identifier")
    user_id: Optional[str] = Field(default=None, max_length=64, index=True, description="User that triggered the event")
    payload: str = Field(default="{}", description="JSON event data")


class AppEvent(AppEventBase, table=True):
    """Entity for the event audit log.

    Table: app_events
    """

    __tablename__ = "app_events"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    created_at: datetime = Field(default_factory=utc_now, index=True)

    def get_payload_dict(self) -> Dict[str, Any]:
        """Get payload as a dictionary."""
        return loads_payload(self.payload)

    def set_payload_dict(self, payload_dict: Dict[str, Any]) -> None:
        """Set payload from a dictionary."""
        self.payload = dumps_payload(payload_dict)

    def __repr__(self) -> str:
        return f"AppEvent(id={self.id}, type={self.type})"
