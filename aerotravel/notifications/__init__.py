"""User and admin-channel notifications."""

from .service import NotificationDispatcher, NotificationService, resolve_recipients

__all__ = ["NotificationDispatcher", "NotificationService", "resolve_recipients"]
