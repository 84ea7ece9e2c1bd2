"""
Notification creation and reads.

:class:`NotificationService` works on a caller-provided session (API routes).
:class:`NotificationDispatcher` opens its own session per call, which is what
event handlers need since they run outside any request.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from aerotravel.core.database.base import dumps_payload, utc_now
from aerotravel.core.database.entities.notifications import Notification
from aerotravel.core.database.repositories.notifications import NotificationRepository
from aerotravel.core.errors import NotFoundError
from aerotravel.core.logging_config import get_logger

logger = get_logger(__name__)

# Keys of the event data that name a single recipient
RECIPIENT_KEYS = ("user_id", "customer_id", "guide_id", "partner_id")


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


def _lookup(data: Dict[str, Any], key: str) -> Any:
    value = data.get(key)
    return data.get(_camel(key)) if value is None else value


def resolve_recipients(data: Dict[str, Any]) -> List[str]:
    """Collect recipient user ids from event data, deduplicated in order of appearance.

    Looks at ``user_id``, ``customer_id``, ``guide_id`` and ``partner_id``
    followed by every entry of ``recipient_ids``. Each key is also accepted
    in its camelCase spelling (``userId``, ``recipientIds``).
    """
    candidates: List[Any] = [_lookup(data, key) for key in RECIPIENT_KEYS]
    extra = _lookup(data, "recipient_ids") or []
    if isinstance(extra, (list, tuple)):
        candidates.extend(extra)

    recipients: List[str] = []
    for candidate in candidates:
        if candidate and str(candidate) not in recipients:
            recipients.append(str(candidate))
    return recipients


class NotificationService:
    """Notification operations bound to one database session."""

    def __init__(self, session: AsyncSession) -> None:
        self.repo = NotificationRepository(session)

    async def create_event_notifications(
        self,
        event_type: str,
        data: Dict[str, Any],
        title: str,
        message: str,
    ) -> List[Notification]:
        """Create one notification per recipient found in ``data``.

        With no recipient a single admin-channel notification (no user) is
        created instead.
        """
        recipients: Iterable[Optional[str]] = resolve_recipients(data) or [None]
        payload = dumps_payload(data)
        rows = [
            Notification(
                user_id=user_id,
                event_type=event_type,
                title=title,
                message=message,
                payload=payload,
            )
            for user_id in recipients
        ]
        created = await self.repo.create_many(rows)
        logger.info(f"Created {len(created)} notification(s) for {event_type}")
        return created

    async def list_for_user(self, user_id: str, unread_only: bool = False, limit: int = 50) -> List[Notification]:
        return await self.repo.list_for_user(user_id, unread_only=unread_only, limit=limit)

    async def list_admin_channel(self, limit: int = 50) -> List[Notification]:
        return await self.repo.list_admin_channel(limit=limit)

    async def mark_read(self, notification_id: str) -> Notification:
        """Mark a notification as read. Already-read rows keep their original ``read_at``.

        Raises:
            NotFoundError: If the notification does not exist
        """
        notification = await self.repo.get_by_id(notification_id)
        if notification is None:
            raise NotFoundError("Notification", notification_id)
        if notification.is_read:
            return notification
        notification.is_read = True
        notification.read_at = utc_now()
        return await self.repo.update(notification)


class NotificationDispatcher:
    """Creates notifications in a fresh session per call."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create_event_notifications(
        self,
        event_type: str,
        data: Dict[str, Any],
        title: str,
        message: str,
    ) -> List[Notification]:
        async with self._session_factory() as session:
            return await NotificationService(session).create_event_notifications(event_type, data, title, message)
