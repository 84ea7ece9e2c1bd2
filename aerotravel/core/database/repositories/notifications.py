"""
Notification repository.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.notifications import Notification
from .base import QueryBuilder, SQLModelRepository


class NotificationRepository(SQLModelRepository[Notification]):
    """Repository for notification data access operations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Notification)

    async def create_many(self, notifications: Iterable[Notification]) -> List[Notification]:
        """Insert several notifications in one transaction."""
        rows = list(notifications)
        self.session.add_all(rows)
        await self.session.commit()
        for row in rows:
            await self.session.refresh(row)
        return rows

    async def list_for_user(self, user_id: str, unread_only: bool = False, limit: int = 50) -> List[Notification]:
        """List a user's notifications, newest first."""
        stmt = select(Notification).where(Notification.user_id == user_id)
        if unread_only:
            stmt = stmt.where(Notification.is_read == False)  # noqa: E712
        stmt = stmt.order_by(Notification.created_at.desc())
        stmt = QueryBuilder.apply_pagination(stmt, limit, None)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def latest_unread(self, user_id: str, event_type: str, title: str) -> Optional[Notification]:
        """The newest unread notification of a user with the given type and title."""
        stmt = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .where(Notification.event_type == event_type)
            .where(Notification.title == title)
            .where(Notification.is_read == False)  # noqa: E712
            .order_by(Notification.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_admin_channel(self, limit: int = 50) -> List[Notification]:
        """List notifications that have no recipient, newest first."""
        stmt = (
            select(Notification)
            .where(Notification.user_id.is_(None))
            .order_by(Notification.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
