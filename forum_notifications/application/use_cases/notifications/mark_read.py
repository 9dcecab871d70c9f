"""Use cases that move notifications from unread to read."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from forum_notifications.domain.entities import Notification, NotificationDataType
from forum_notifications.domain.exceptions import NotificationUpdateError
from forum_notifications.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)

FailureHandler = Callable[[Notification | None, NotificationUpdateError], None]


def log_and_continue(notification: Notification | None, error: NotificationUpdateError) -> None:
    """Record the failure and let the batch move on to the next notification."""

    if notification is None:
        logger.error("Makes read failed: %s", error, exc_info=error)
    else:
        logger.error(
            "Makes notification %s as read failed: %s", notification.id, error, exc_info=error
        )


def abort_on_error(notification: Notification | None, error: NotificationUpdateError) -> None:
    """Stop the batch at the first failed notification."""

    raise error


FAILURE_HANDLERS: dict[str, FailureHandler] = {
    "continue": log_and_continue,
    "abort": abort_on_error,
}


def mark_read(session: Session, notification: Notification) -> Notification:
    """Flag ``notification`` as read.

    Already read notifications are returned untouched without touching the
    database. Raises :class:`NotificationUpdateError` when the stored record
    is missing or cannot be written.
    """

    if notification.has_read:
        return notification
    record, _ = _flip_read(session, notification)
    return record


def _flip_read(session: Session, notification: Notification) -> tuple[Notification, bool]:
    """Write ``has_read`` for the stored record; the flag tells whether a write happened."""

    repository = NotificationRepository(session)
    try:
        if notification.id is None:
            raise ValueError("Notification id is required to mark it as read")
        record = repository.get(notification.id)
        if record is None:
            raise ValueError(f"Notification {notification.id} not found")
        if record.has_read:
            return record, False
        record.has_read = True
        return repository.update(record), True
    except (SQLAlchemyError, ValueError) as exc:
        session.rollback()
        msg = "Makes notification as read failed"
        logger.exception("%s [id=%s]", msg, notification.id)
        raise NotificationUpdateError(msg) from exc


def mark_notifications_read(
    session: Session,
    notifications: Iterable[Notification],
    *,
    on_error: FailureHandler = log_and_continue,
) -> int:
    """Mark each notification read independently and return how many flipped."""

    marked = 0
    for notification in notifications:
        if notification.has_read:
            continue
        try:
            _, written = _flip_read(session, notification)
        except NotificationUpdateError as exc:
            on_error(notification, exc)
            continue
        if written:
            marked += 1
    return marked


def mark_read_by_type(
    session: Session,
    user_id: str,
    data_type: NotificationDataType | int,
    *,
    on_error: FailureHandler = log_and_continue,
) -> int:
    """Mark every unread notification of ``data_type`` for ``user_id`` as read."""

    filters = {
        "user_id": user_id,
        "has_read": False,
        "data_type": NotificationDataType(data_type),
    }
    return _mark_matching_read(session, filters, on_error=on_error)


def mark_read_by_data_ids(
    session: Session,
    user_id: str,
    article_id: str,
    comment_ids: Iterable[str],
    *,
    on_error: FailureHandler = log_and_continue,
) -> int:
    """Mark unread notifications about an article or its comments as read."""

    data_ids = set(comment_ids)
    data_ids.add(article_id)
    filters = {
        "user_id": user_id,
        "has_read": False,
        "data_id": data_ids,
    }
    return _mark_matching_read(session, filters, on_error=on_error)


def _mark_matching_read(
    session: Session,
    filters: dict[str, object],
    *,
    on_error: FailureHandler,
) -> int:
    try:
        notifications = NotificationRepository(session).query(filters)
    except SQLAlchemyError as exc:
        session.rollback()
        error = NotificationUpdateError("Makes read failed")
        error.__cause__ = exc
        on_error(None, error)
        return 0

    marked = mark_notifications_read(session, notifications, on_error=on_error)
    logger.debug(
        "Marked %d of %d notifications read for user %s",
        marked,
        len(notifications),
        filters["user_id"],
    )
    return marked


__all__ = [
    "FAILURE_HANDLERS",
    "FailureHandler",
    "abort_on_error",
    "log_and_continue",
    "mark_notifications_read",
    "mark_read",
    "mark_read_by_data_ids",
    "mark_read_by_type",
]
