"""
Event Endpoints.

Emit events onto the in-memory bus and read the audit log of past emissions.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query, status

from aerotravel.core.database.repositories.app_events import AppEventRepository
from aerotravel.core.logging_config import get_logger
from aerotravel.core.models.domain.enums import EventType
from aerotravel.core.models.io.events import EventEmit, EventRead
from aerotravel.server.services.deps import EventBusDep, SessionDep, UserIdDep

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=EventRead,
    status_code=status.HTTP_201_CREATED,
    summary="Emit Event",
    description="Record an event in the audit log and dispatch it to every subscribed handler.",
)
async def emit_event(payload: EventEmit, bus: EventBusDep, user_id: UserIdDep) -> EventRead:
    """
    Emit an event.

    Handlers run before the response is returned; a failing handler is logged
    and does not fail the request.
    """
    event = await bus.emit(payload.type, payload.data, user_id=payload.user_id or user_id)
    return EventRead(
        id=event.id,
        type=event.type,
        data=event.data,
        user_id=event.user_id,
        occurred_at=event.occurred_at,
    )


@router.get(
    "",
    response_model=List[EventRead],
    summary="List Events",
    description="List the newest audited events, optionally filtered by type and user.",
)
async def list_events(
    session: SessionDep,
    type: Optional[EventType] = None,
    user_id: Optional[str] = None,
    limit: int = Query(default=100, ge=1, le=500),
) -> List[EventRead]:
    rows = await AppEventRepository(session).list_recent(
        event_type=type.value if type else None, user_id=user_id, limit=limit
    )
    return [
        EventRead(
            id=row.id,
            type=row.type,
            data=row.get_payload_dict(),
            user_id=row.user_id,
            occurred_at=row.created_at,
        )
        for row in rows
    ]
