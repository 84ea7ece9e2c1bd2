"""
Guide reward point entity models: one balance row per guide plus a ledger.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, new_id, utc_now


class GuideRewardPoints(Base, table=True):
    """Entity for a guide's point balance.

    Table: guide_reward_points
    """

    __tablename__ = "guide_reward_points"

    guide_id: str = Field(primary_key=True, max_length=64)
    balance: int = Field(default=0)
    lifetime_earned: int = Field(default=0)
    lifetime_redeemed: int = Field(default=0)
    expired_points: int = Field(default=0)
    updated_at: datetime = Field(default_factory=utc_now)


class GuideRewardTransaction(Base, table=True):
    """Entity for reward point movements.

    Table: guide_reward_transactions
    """

    __tablename__ = "guide_reward_transactions"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=64)
    guide_id: str = Field(max_length=64, index=True)
    transaction_type: str = Field(max_length=16)
    points: int
    source_type: Optional[str] = Field(default=None, max_length=32)
    source_id: Optional[str] = Field(default=None, max_length=64)
    description: Optional[str] = None
    payload: str = Field(default="{}", description="JSON metadata")
    expires_at: Optional[datetime] = Field(default=None, index=True)
    created_at: datetime = Field(default_factory=utc_now, index=True)
