"""
Event Bus Service.

Provides the process-wide event bus. Its audit writes and the default
notification handlers use the global session factory, never a request session.
"""

from typing import Optional

from aerotravel.core.database import async_session_maker
from aerotravel.core.logging_config import get_logger
from aerotravel.events.bus import EventBus
from aerotravel.events.handlers import initialize_event_handlers
from aerotravel.notifications.service import NotificationDispatcher

logger = get_logger(__name__)

_event_bus: Optional[EventBus] = None


def get_event_bus() -> EventBus:
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus(async_session_maker)
    return _event_bus


def register_default_handlers() -> EventBus:
    """Subscribe the default handlers on the global bus, replacing any existing subscriptions."""
    bus = get_event_bus()
    bus.clear()
    initialize_event_handlers(bus, NotificationDispatcher(async_session_maker))
    return bus
