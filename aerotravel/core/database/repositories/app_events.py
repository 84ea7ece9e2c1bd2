"""
Application event repository.

Events are append-only: they support creation and querying but not updates
or deletes.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..entities.app_events import AppEvent
from .base import SQLModelRepository


class AppEventRepository(SQLModelRepository[AppEvent]):
    """Repository for the event audit log."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AppEvent)

    async def update(self, entity: AppEvent) -> AppEvent:
        """Update operation not supported for events (append-only).

        Raises:
            NotImplementedError: Events cannot be updated
        """
        raise NotImplementedError("Events are append-only and cannot be updated")

    async def delete(self, entity_id: str | int) -> bool:
        """Delete operation not supported for events (append-only).

        Raises:
            NotImplementedError: Events cannot be deleted
        """
        raise NotImplementedError("Events are append-only and cannot be deleted")

    async def list_recent(
        self,
        event_type: Optional[str] = None,
        user_id: Optional[str] = None,
        limit: int = 100,
    ) -> List[AppEvent]:
        """List the newest events, optionally filtered by type and user."""
        return await self.list(limit=limit, filters={"type": event_type, "user_id": user_id})
