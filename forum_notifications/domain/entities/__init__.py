"""Domain entities exposed by the application."""

from .notification import Notification, NotificationDataType

__all__ = [
    "Notification",
    "NotificationDataType",
]
