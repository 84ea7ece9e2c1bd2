"""
Guide reward points.

Points are earned from challenges, badges, level-ups, performance bonuses and
wallet milestones, and spent through redemptions. Each guide has one balance
row plus a ledger of transactions; earned points expire after
``REWARD_POINTS_EXPIRY_DAYS``.
"""

from __future__ import annotations

import math
from collections import OrderedDict
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from aerotravel.core.database.base import dumps_payload, utc_now
from aerotravel.core.database.entities.notifications import Notification
from aerotravel.core.database.entities.rewards import GuideRewardPoints, GuideRewardTransaction
from aerotravel.core.database.repositories.notifications import NotificationRepository
from aerotravel.core.database.repositories.rewards import (
    GuideRewardPointsRepository,
    GuideRewardTransactionRepository,
)
from aerotravel.core.errors import InsufficientPointsError, InvalidOperationError
from aerotravel.core.logging_config import get_logger
from aerotravel.core.models.domain.enums import EventType, RewardSourceType, RewardTransactionType
from aerotravel.core.models.io.rewards import ExpiringPoints
from aerotravel.notifications.service import NotificationService
from aerotravel.server.core.config import settings

logger = get_logger(__name__)

BADGE_POINTS = {
    "first_trip": 50,
    "rookie": 50,
    "experienced": 100,
    "excellent_service": 100,
    "expert": 150,
    "five_star": 150,
    "master": 200,
    "zero_complaints": 200,
    "clean_record": 200,
}

LEVEL_UP_POINTS = {
    ("bronze", "silver"): 200,
    ("silver", "gold"): 300,
    ("gold", "platinum"): 500,
    ("platinum", "diamond"): 1000,
}

POINTS_EXPIRING_TITLE = "Poin Akan Kadaluarsa!"

MILESTONE_POINTS = {
    "first_million": 500,
    "five_million": 1000,
    "ten_million": 2000,
}


def calculate_challenge_points(challenge_type: str, target_value: float) -> int:
    """Points for completing a challenge.

    ``trip_count`` gives 100 per 10 trips capped at 500, ``rating`` 200 for a
    perfect score and 100 otherwise, ``earnings`` 1 per Rp 1,000, and
    ``perfect_month`` a flat 1000. Other challenges give 100.
    """
    if challenge_type == "trip_count":
        return min(500, math.floor(target_value / 10) * 100)
    if challenge_type == "rating":
        return 200 if target_value >= 5.0 else 100
    if challenge_type == "earnings":
        return math.floor(target_value / 1000)
    if challenge_type == "perfect_month":
        return 1000
    return 100


def calculate_badge_points(badge_id: str) -> int:
    return BADGE_POINTS.get(badge_id, 50)


def calculate_level_up_points(from_level: str, to_level: str) -> int:
    return LEVEL_UP_POINTS.get((from_level, to_level), 0)


def calculate_performance_bonus_points(bonus_amount: float) -> int:
    """10% of the bonus amount, rounded down."""
    return math.floor(bonus_amount * 0.1)


def calculate_milestone_points(milestone_type: str) -> int:
    return MILESTONE_POINTS.get(milestone_type, 0)


def _format_points(points: int) -> str:
    # Indonesian thousands separator
    return f"{points:,}".replace(",", ".")


class RewardPointsService:
    """Reward point operations for one database session."""

    def __init__(self, session: AsyncSession, expiry_days: Optional[int] = None) -> None:
        self.session = session
        self.balances = GuideRewardPointsRepository(session)
        self.transactions = GuideRewardTransactionRepository(session)
        self.expiry_days = settings.reward_points_expiry_days if expiry_days is None else expiry_days

    async def _balance_row(self, guide_id: str) -> GuideRewardPoints:
        row = await self.balances.get_by_id(guide_id)
        if row is None:
            row = GuideRewardPoints(guide_id=guide_id)
            self.session.add(row)
        return row

    async def award_points(
        self,
        guide_id: str,
        points: int,
        source_type: RewardSourceType | str = RewardSourceType.manual,
        source_id: Optional[str] = None,
        description: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> GuideRewardTransaction:
        """Credit points to a guide and notify them.

        Raises:
            InvalidOperationError: If ``points`` is not positive
        """
        if points <= 0:
            raise InvalidOperationError("Points to award must be positive")
        source = RewardSourceType(source_type).value

        now = utc_now()
        row = await self._balance_row(guide_id)
        row.balance += points
        row.lifetime_earned += points
        row.updated_at = now

        transaction = await self.transactions.create(
            GuideRewardTransaction(
                guide_id=guide_id,
                transaction_type=RewardTransactionType.earn.value,
                points=points,
                source_type=source,
                source_id=source_id,
                description=description,
                payload=dumps_payload(metadata),
                expires_at=now + timedelta(days=self.expiry_days),
                created_at=now,
            )
        )
        logger.info(f"Awarded {points} points to guide {guide_id} from {source}")

        try:
            await self._notify_points_earned(guide_id, points, source, description)
        except Exception as e:
            # The ledger row is already committed; only the notification is lost
            await self.session.rollback()
            await self.session.refresh(transaction)
            logger.warning(f"Failed to create points earned notification for guide {guide_id}: {e}")
        return transaction

    async def redeem_points(
        self,
        guide_id: str,
        points: int,
        description: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> GuideRewardTransaction:
        """Debit points from a guide's balance.

        Raises:
            InvalidOperationError: If ``points`` is not positive
            InsufficientPointsError: If the balance does not cover ``points``
        """
        if points <= 0:
            raise InvalidOperationError("Points to redeem must be positive")

        row = await self.balances.get_by_id(guide_id)
        balance = row.balance if row is not None else 0
        if row is None or balance < points:
            raise InsufficientPointsError(guide_id, points, balance)

        row.balance -= points
        row.lifetime_redeemed += points
        row.updated_at = utc_now()

        transaction = await self.transactions.create(
            GuideRewardTransaction(
                guide_id=guide_id,
                transaction_type=RewardTransactionType.redeem.value,
                points=-points,
                description=description,
                payload=dumps_payload(metadata),
            )
        )
        logger.info(f"Guide {guide_id} redeemed {points} points")
        return transaction

    async def get_balance(self, guide_id: str) -> GuideRewardPoints:
        """The guide's balance; a guide without a row has a zero balance."""
        row = await self.balances.get_by_id(guide_id)
        return row if row is not None else GuideRewardPoints(guide_id=guide_id)

    async def get_expiring_points(
        self, guide_id: str, days: int = 30, now: Optional[datetime] = None
    ) -> List[ExpiringPoints]:
        """Earned points expiring within ``days``, summed per expiry date, soonest first."""
        now = now or utc_now()
        rows = await self.transactions.list_expiring(guide_id, now, now + timedelta(days=days))

        grouped: "OrderedDict[date, int]" = OrderedDict()
        for row in rows:
            day = row.expires_at.date()
            grouped[day] = grouped.get(day, 0) + row.points
        return [ExpiringPoints(expires_on=day, points=points) for day, points in grouped.items()]

    async def notify_points_expiring(
        self, guide_id: str, days: int = 30, now: Optional[datetime] = None
    ) -> Optional[Notification]:
        """Remind a guide of points expiring within ``days``.

        An unread reminder is refreshed in place rather than duplicated.
        Returns None when nothing expires in the window.
        """
        items = await self.get_expiring_points(guide_id, days=days, now=now)
        total = sum(item.points for item in items)
        if total <= 0:
            return None

        message = (
            f"Anda memiliki {_format_points(total)} poin yang akan kadaluarsa "
            f"dalam {days} hari. Tukar sekarang!"
        )
        data = {"guide_id": guide_id, "total_expiring": total, "days_until_expiry": days}

        repo = NotificationRepository(self.session)
        existing = await repo.latest_unread(guide_id, EventType.custom.value, POINTS_EXPIRING_TITLE)
        if existing is not None:
            existing.message = message
            existing.payload = dumps_payload(data)
            logger.info(f"Refreshed expiring points reminder for guide {guide_id}: {total} points")
            return await repo.update(existing)

        created = await NotificationService(self.session).create_event_notifications(
            EventType.custom.value, data, POINTS_EXPIRING_TITLE, message
        )
        logger.info(f"Sent expiring points reminder to guide {guide_id}: {total} points")
        return created[0]

    async def _notify_points_earned(
        self, guide_id: str, points: int, source: str, description: Optional[str]
    ) -> None:
        message = description or f"Anda memperoleh {_format_points(points)} poin reward dari {source}"
        await NotificationService(self.session).create_event_notifications(
            EventType.custom.value,
            {"guide_id": guide_id, "points": points, "source": source, "description": description},
            "Poin Reward Diperoleh!",
            message,
        )
