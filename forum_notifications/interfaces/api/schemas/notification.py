"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from forum_notifications.domain.entities import NotificationDataType


class NotificationCreate(BaseModel):
    """Event reported by an upstream producer."""

    user_id: str = Field(..., min_length=1, max_length=64, description="Recipient of the notification")
    data_id: str = Field(default="", max_length=64, description="Referenced article, comment, etc.")
    data_type: NotificationDataType


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: str
    user_id: str
    data_id: str
    data_type: NotificationDataType
    data_type_label: str
    has_read: bool
    created_at: datetime | None = None


class MarkReadByTypeRequest(BaseModel):
    """Mark every unread notification of one kind as read."""

    data_type: NotificationDataType


class MarkReadByArticleRequest(BaseModel):
    """Mark unread notifications about an article and some of its comments."""

    article_id: str = Field(..., min_length=1)
    comment_ids: list[str] = Field(default_factory=list)


class MarkReadResponse(BaseModel):
    marked: int


class UnreadCountResponse(BaseModel):
    count: int


__all__ = [
    "MarkReadByArticleRequest",
    "MarkReadByTypeRequest",
    "MarkReadResponse",
    "NotificationCreate",
    "NotificationRead",
    "UnreadCountResponse",
]
