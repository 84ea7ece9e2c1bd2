"""
Guide reward point repositories.
"""

from __future__ import annotations

from datetime import datetime
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.rewards import GuideRewardPoints, GuideRewardTransaction
from .base import SQLModelRepository


class GuideRewardPointsRepository(SQLModelRepository[GuideRewardPoints]):
    """Repository for guide point balances, keyed by guide id."""

    order_by = "updated_at"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, GuideRewardPoints)


class GuideRewardTransactionRepository(SQLModelRepository[GuideRewardTransaction]):
    """Repository for the reward point ledger."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, GuideRewardTransaction)

    async def list_for_guide(self, guide_id: str, limit: int = 50) -> List[GuideRewardTransaction]:
        return await self.list(limit=limit, filters={"guide_id": guide_id})

    async def list_expiring(self, guide_id: str, now: datetime, until: datetime) -> List[GuideRewardTransaction]:
        """Earn transactions of a guide expiring in ``(now, until]``, soonest first."""
        stmt = (
            select(GuideRewardTransaction)
            .where(GuideRewardTransaction.guide_id == guide_id)
            .where(GuideRewardTransaction.transaction_type == "earn")
            .where(GuideRewardTransaction.expires_at.is_not(None))
            .where(GuideRewardTransaction.expires_at > now)
            .where(GuideRewardTransaction.expires_at <= until)
            .order_by(GuideRewardTransaction.expires_at.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
