"""
Notification Endpoints.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query

from aerotravel.core.models.io.notifications import NotificationRead
from aerotravel.notifications.service import NotificationService
from aerotravel.server.services.deps import SessionDep, UserIdDep

router = APIRouter()


@router.get(
    "",
    response_model=List[NotificationRead],
    summary="List Notifications",
    description=(
        "List notifications for a user (query parameter or X-User-Id header), newest first. "
        "Without a user the admin channel is listed."
    ),
)
async def list_notifications(
    session: SessionDep,
    caller_id: UserIdDep,
    user_id: Optional[str] = None,
    unread_only: bool = False,
    limit: int = Query(default=50, ge=1, le=200),
) -> List[NotificationRead]:
    service = NotificationService(session)
    recipient = user_id or caller_id
    if recipient is None:
        rows = await service.list_admin_channel(limit=limit)
    else:
        rows = await service.list_for_user(recipient, unread_only=unread_only, limit=limit)
    return [NotificationRead.model_validate(row) for row in rows]


@router.post(
    "/{notification_id}/read",
    response_model=NotificationRead,
    summary="Mark Notification Read",
    responses={404: {"description": "Notification not found"}},
)
async def mark_notification_read(notification_id: str, session: SessionDep) -> NotificationRead:
    notification = await NotificationService(session).mark_read(notification_id)
    return NotificationRead.model_validate(notification)
