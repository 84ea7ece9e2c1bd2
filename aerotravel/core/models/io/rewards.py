"""
Guide reward point I/O models.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain.enums import RewardSourceType


class PointsAward(BaseModel):
    """Schema for awarding points to a guide."""

    points: int
    source_type: RewardSourceType = RewardSourceType.manual
    source_id: Optional[str] = None
    description: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class PointsRedeem(BaseModel):
    points: int
    description: Optional[str] = None


class RewardBalanceRead(BaseModel):
    """Schema for a guide's point balance."""

    model_config = ConfigDict(from_attributes=True)

    guide_id: str
    balance: int = 0
    lifetime_earned: int = 0
    lifetime_redeemed: int = 0
    expired_points: int = 0


class RewardTransactionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    guide_id: str
    transaction_type: str
    points: int
    source_type: Optional[str] = None
    source_id: Optional[str] = None
    description: Optional[str] = None
    expires_at: Optional[datetime] = None
    created_at: datetime


class ExpiringPoints(BaseModel):
    """Points that expire on one date."""

    expires_on: date
    points: int


class ExpiringPointsRead(BaseModel):
    guide_id: str
    days: int
    total: int
    items: List[ExpiringPoints] = Field(default_factory=list)
