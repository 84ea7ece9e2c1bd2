"""
Event I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain.enums import EventType


class EventEmit(BaseModel):
    """Schema for emitting an event through the API."""

    type: EventType = Field(description="Event type identifier")
    data: Dict[str, Any] = Field(default_factory=dict, description="Event payload")
    user_id: Optional[str] = Field(default=None, description="User that triggered the event")


class EventRead(BaseModel):
    """Schema for an emitted or audited event."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    type: str
    data: Dict[str, Any] = Field(default_factory=dict)
    user_id: Optional[str] = None
    occurred_at: datetime
