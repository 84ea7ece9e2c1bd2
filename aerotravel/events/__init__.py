"""In-memory event bus and its default handlers."""

from .bus import AppEvent, EventBus, EventHandler
from .handlers import initialize_event_handlers

__all__ = ["AppEvent", "EventBus", "EventHandler", "initialize_event_handlers"]
