"""Errors raised by the notification use cases."""

from __future__ import annotations


class NotificationError(RuntimeError):
    """Base class for notification persistence failures."""


class NotificationWriteError(NotificationError):
    """Raised when a new notification could not be stored."""


class NotificationUpdateError(NotificationError):
    """Raised when a notification could not be marked as read."""


class NotificationNotFoundError(ValueError):
    """Raised when a notification does not exist for the requesting user."""


__all__ = [
    "NotificationError",
    "NotificationNotFoundError",
    "NotificationUpdateError",
    "NotificationWriteError",
]
