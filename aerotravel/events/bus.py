"""
In-memory event bus.

Handlers subscribe per event type. ``emit`` records the event in the
``app_events`` audit table, then calls every handler for the type one after
another, awaiting coroutine handlers. There is no queue, retry or ordering
guarantee across concurrent emits: a failing audit write or handler is logged
and dispatch moves on.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, Optional, Set, Union

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from aerotravel.core.database.base import dumps_payload, new_id, utc_now
from aerotravel.core.database.entities.app_events import AppEvent as AppEventRecord
from aerotravel.core.database.repositories.app_events import AppEventRepository
from aerotravel.core.logging_config import get_logger
from aerotravel.core.models.domain.enums import EventType
from aerotravel.core.monitoring import log_domain_event, log_error

logger = get_logger(__name__)


@dataclass(frozen=True)
class AppEvent:
    """An emitted event as handed to handlers."""

    type: str
    data: Dict[str, Any] = field(default_factory=dict)
    user_id: Optional[str] = None
    id: str = field(default_factory=new_id)
    occurred_at: datetime = field(default_factory=utc_now)


EventHandler = Callable[[AppEvent], Union[None, Awaitable[None]]]


def _type_key(event_type: Union[EventType, str]) -> str:
    return event_type.value if isinstance(event_type, EventType) else str(event_type)


class EventBus:
    """Type-keyed publish/subscribe registry with an audit trail.

    Args:
        session_factory: Factory used to open a session for each audit write;
            ``None`` disables auditing.
    """

    def __init__(self, session_factory: Optional[async_sessionmaker[AsyncSession]] = None) -> None:
        self._session_factory = session_factory
        self._handlers: Dict[str, Set[EventHandler]] = {}

    def subscribe(self, event_type: Union[EventType, str], handler: EventHandler) -> Callable[[], None]:
        """Register ``handler`` for ``event_type``.

        Returns:
            A callable that removes this subscription
        """
        key = _type_key(event_type)
        self._handlers.setdefault(key, set()).add(handler)
        logger.debug(f"Subscribed {getattr(handler, '__name__', handler)!s} to {key}")

        def _unsubscribe() -> None:
            self.unsubscribe(key, handler)

        return _unsubscribe

    def unsubscribe(self, event_type: Union[EventType, str], handler: EventHandler) -> None:
        key = _type_key(event_type)
        handlers = self._handlers.get(key)
        if not handlers:
            return
        handlers.discard(handler)
        if not handlers:
            del self._handlers[key]

    def handler_count(self, event_type: Union[EventType, str]) -> int:
        return len(self._handlers.get(_type_key(event_type), ()))

    def clear(self) -> None:
        """Remove every subscription."""
        self._handlers.clear()

    async def emit(
        self,
        event_type: Union[EventType, str],
        data: Optional[Dict[str, Any]] = None,
        user_id: Optional[str] = None,
    ) -> AppEvent:
        """Record and dispatch an event.

        Args:
            event_type: Event type identifier
            data: Event payload
            user_id: User that triggered the event

        Returns:
            The emitted event
        """
        event = AppEvent(type=_type_key(event_type), data=dict(data or {}), user_id=user_id)

        await self._record(event)

        handlers = list(self._handlers.get(event.type, ()))
        for handler in handlers:
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(
                    f"Event handler {getattr(handler, '__name__', handler)!s} failed for {event.type}: {e}",
                    exc_info=True,
                    extra={"event_id": event.id, "event_type": event.type},
                )
                log_error(type(e).__name__, str(e), {"event_type": event.type, "event_id": event.id})

        logger.debug(f"Emitted {event.type} ({event.id}) to {len(handlers)} handler(s)")
        log_domain_event(event.type, event.id, len(handlers))
        return event

    async def _record(self, event: AppEvent) -> None:
        if self._session_factory is None:
            return
        try:
            async with self._session_factory() as session:
                await AppEventRepository(session).create(
                    AppEventRecord(
                        id=event.id,
                        type=event.type,
                        user_id=event.user_id,
                        payload=dumps_payload(event.data),
                        created_at=event.occurred_at,
                    )
                )
        except Exception as e:
            logger.error(f"Failed to record event {event.type} ({event.id}): {e}", exc_info=True)
