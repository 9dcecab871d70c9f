"""Use cases for reading a user's notifications."""

from __future__ import annotations

from sqlalchemy.orm import Session

from forum_notifications.domain.entities import Notification, NotificationDataType
from forum_notifications.domain.exceptions import NotificationNotFoundError
from forum_notifications.infrastructure.repositories import NotificationRepository


def _user_filters(
    user_id: str, *, data_type: NotificationDataType | int | None, unread_only: bool
) -> dict[str, object]:
    filters: dict[str, object] = {"user_id": user_id}
    if unread_only:
        filters["has_read"] = False
    if data_type is not None:
        filters["data_type"] = NotificationDataType(data_type)
    return filters


def list_notifications(
    session: Session,
    user_id: str,
    *,
    data_type: NotificationDataType | int | None = None,
    unread_only: bool = False,
    skip: int = 0,
    limit: int = 50,
) -> list[Notification]:
    """Return the notifications received by ``user_id``, newest first."""

    filters = _user_filters(user_id, data_type=data_type, unread_only=unread_only)
    return NotificationRepository(session).query(filters, skip=skip, limit=limit)


def count_unread(
    session: Session, user_id: str, *, data_type: NotificationDataType | int | None = None
) -> int:
    filters = _user_filters(user_id, data_type=data_type, unread_only=True)
    return NotificationRepository(session).count(filters)


def get_notification(session: Session, notification_id: str, *, user_id: str) -> Notification:
    """Return the notification or raise if it is missing or not owned by ``user_id``."""

    notification = NotificationRepository(session).get(notification_id)
    if notification is None or notification.user_id != user_id:
        raise NotificationNotFoundError("Notification not found")
    return notification


__all__ = ["count_unread", "get_notification", "list_notifications"]
