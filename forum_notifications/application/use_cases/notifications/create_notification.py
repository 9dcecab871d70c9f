"""Use cases that record new notifications."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from forum_notifications.domain.entities import Notification, NotificationDataType
from forum_notifications.domain.exceptions import NotificationWriteError
from forum_notifications.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


def create_notification(
    session: Session,
    *,
    user_id: str,
    data_id: str,
    data_type: NotificationDataType | int,
) -> Notification:
    """Persist a new unread notification for ``user_id``.

    Identical calls are not deduplicated; each one stores a new record.
    Raises ``ValueError`` for invalid fields and
    :class:`NotificationWriteError` when the database write fails.
    """

    notification = Notification(
        id=None,
        user_id=user_id,
        data_id=data_id,
        data_type=data_type,
        has_read=False,
    )
    try:
        return NotificationRepository(session).create(notification)
    except SQLAlchemyError as exc:
        session.rollback()
        msg = f"Adds notification [type={notification.data_type.label}] failed"
        logger.exception(msg)
        raise NotificationWriteError(msg) from exc


def notify(
    session: Session,
    kind: NotificationDataType | str,
    *,
    user_id: str,
    data_id: str = "",
) -> Notification:
    """Record a notification of ``kind``, given as enum member or label."""

    data_type = kind if isinstance(kind, NotificationDataType) else NotificationDataType.from_label(kind)
    return create_notification(session, user_id=user_id, data_id=data_id, data_type=data_type)


def broadcast(session: Session, *, user_ids: Iterable[str], data_id: str) -> list[Notification]:
    """Send the broadcast ``data_id`` to every distinct recipient in ``user_ids``."""

    created: list[Notification] = []
    seen: set[str] = set()
    for user_id in user_ids:
        if user_id in seen:
            continue
        seen.add(user_id)
        created.append(
            create_notification(
                session,
                user_id=user_id,
                data_id=data_id,
                data_type=NotificationDataType.BROADCAST,
            )
        )
    logger.info("Broadcast %s delivered to %d users", data_id, len(created))
    return created


def _kind_helper(data_type: NotificationDataType):
    def helper(session: Session, *, user_id: str, data_id: str = "") -> Notification:
        return create_notification(session, user_id=user_id, data_id=data_id, data_type=data_type)

    helper.__name__ = f"add_{data_type.name.lower()}_notification"
    helper.__doc__ = f"Record a ``{data_type.label}`` notification."
    return helper


add_invitecode_used_notification = _kind_helper(NotificationDataType.INVITECODE_USED)
add_broadcast_notification = _kind_helper(NotificationDataType.BROADCAST)
add_point_charge_notification = _kind_helper(NotificationDataType.POINT_CHARGE)
add_abuse_point_deduct_notification = _kind_helper(NotificationDataType.ABUSE_POINT_DEDUCT)
add_point_exchange_notification = _kind_helper(NotificationDataType.POINT_EXCHANGE)
add_point_transfer_notification = _kind_helper(NotificationDataType.POINT_TRANSFER)
add_article_reward_notification = _kind_helper(NotificationDataType.POINT_ARTICLE_REWARD)
add_article_thank_notification = _kind_helper(NotificationDataType.POINT_ARTICLE_THANK)
add_comment_thank_notification = _kind_helper(NotificationDataType.POINT_COMMENT_THANK)
add_at_notification = _kind_helper(NotificationDataType.AT)
add_following_user_notification = _kind_helper(NotificationDataType.FOLLOWING_USER)
add_commented_notification = _kind_helper(NotificationDataType.COMMENTED)
add_reply_notification = _kind_helper(NotificationDataType.REPLY)


__all__ = [
    "add_abuse_point_deduct_notification",
    "add_article_reward_notification",
    "add_article_thank_notification",
    "add_at_notification",
    "add_broadcast_notification",
    "add_comment_thank_notification",
    "add_commented_notification",
    "add_following_user_notification",
    "add_invitecode_used_notification",
    "add_point_charge_notification",
    "add_point_exchange_notification",
    "add_point_transfer_notification",
    "add_reply_notification",
    "broadcast",
    "create_notification",
    "notify",
]
