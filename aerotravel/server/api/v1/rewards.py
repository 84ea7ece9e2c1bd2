"""
Guide Reward Point Endpoints.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query, status

from aerotravel.core.models.io.notifications import NotificationRead
from aerotravel.core.models.io.rewards import (
    ExpiringPointsRead,
    PointsAward,
    PointsRedeem,
    RewardBalanceRead,
    RewardTransactionRead,
)
from aerotravel.guide.reward_points import RewardPointsService
from aerotravel.server.services.deps import SessionDep

router = APIRouter()


@router.get("/guides/{guide_id}/balance", response_model=RewardBalanceRead, summary="Get Points Balance")
async def get_balance(guide_id: str, session: SessionDep) -> RewardBalanceRead:
    return RewardBalanceRead.model_validate(await RewardPointsService(session).get_balance(guide_id))


@router.post(
    "/guides/{guide_id}/award",
    response_model=RewardTransactionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Award Points",
    responses={422: {"description": "Points must be positive"}},
)
async def award_points(guide_id: str, payload: PointsAward, session: SessionDep) -> RewardTransactionRead:
    transaction = await RewardPointsService(session).award_points(
        guide_id,
        payload.points,
        payload.source_type,
        source_id=payload.source_id,
        description=payload.description,
        metadata=payload.metadata,
    )
    return RewardTransactionRead.model_validate(transaction)


@router.post(
    "/guides/{guide_id}/redeem",
    response_model=RewardTransactionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Redeem Points",
    responses={409: {"description": "Balance too low"}, 422: {"description": "Points must be positive"}},
)
async def redeem_points(guide_id: str, payload: PointsRedeem, session: SessionDep) -> RewardTransactionRead:
    transaction = await RewardPointsService(session).redeem_points(
        guide_id, payload.points, description=payload.description
    )
    return RewardTransactionRead.model_validate(transaction)


@router.get(
    "/guides/{guide_id}/expiring",
    response_model=ExpiringPointsRead,
    summary="Expiring Points",
    description="Earned points expiring within the given number of days, grouped by expiry date.",
)
async def expiring_points(
    guide_id: str, session: SessionDep, days: int = Query(default=30, ge=1, le=3650)
) -> ExpiringPointsRead:
    items = await RewardPointsService(session).get_expiring_points(guide_id, days=days)
    return ExpiringPointsRead(guide_id=guide_id, days=days, total=sum(i.points for i in items), items=items)


@router.post(
    "/guides/{guide_id}/expiring/notify",
    response_model=Optional[NotificationRead],
    summary="Remind Expiring Points",
    description=(
        "Notify the guide of points expiring within the given number of days. "
        "An unread reminder is refreshed instead of duplicated; returns null when nothing expires."
    ),
)
async def notify_expiring_points(
    guide_id: str, session: SessionDep, days: int = Query(default=30, ge=1, le=3650)
) -> Optional[NotificationRead]:
    notification = await RewardPointsService(session).notify_points_expiring(guide_id, days=days)
    return NotificationRead.model_validate(notification) if notification is not None else None
