"""SQLAlchemy model for persisted notifications."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String

from forum_notifications.infrastructure.database import Base


def _new_notification_id() -> str:
    return uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_user_unread_type", "user_id", "has_read", "data_type"),
    )

    id = Column(String(32), primary_key=True, default=_new_notification_id)
    user_id = Column(String(64), nullable=False, index=True)
    data_id = Column(String(64), nullable=False, default="", index=True)
    data_type = Column(Integer, nullable=False)
    has_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)


__all__ = ["NotificationModel"]
