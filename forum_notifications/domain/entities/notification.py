"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum


class NotificationDataType(IntEnum):
    """Kind of forum event a notification refers to.

    The integer values are persisted and shared with the rest of the forum,
    so they must never be renumbered.
    """

    ARTICLE = 0
    COMMENT = 1
    AT = 2
    COMMENTED = 3
    FOLLOWING_USER = 4
    POINT_CHARGE = 5
    POINT_TRANSFER = 6
    POINT_ARTICLE_REWARD = 7
    POINT_COMMENT_THANK = 8
    BROADCAST = 9
    POINT_EXCHANGE = 10
    ABUSE_POINT_DEDUCT = 11
    POINT_ARTICLE_THANK = 12
    REPLY = 13
    INVITECODE_USED = 14

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> "NotificationDataType":
        for member, member_label in _LABELS.items():
            if member_label == label:
                return member
        raise ValueError(f"Unknown notification type: {label}")


_LABELS: dict[NotificationDataType, str] = {
    NotificationDataType.ARTICLE: "article",
    NotificationDataType.COMMENT: "comment",
    NotificationDataType.AT: "at",
    NotificationDataType.COMMENTED: "commented",
    NotificationDataType.FOLLOWING_USER: "followingUser",
    NotificationDataType.POINT_CHARGE: "point_charge",
    NotificationDataType.POINT_TRANSFER: "point_transfer",
    NotificationDataType.POINT_ARTICLE_REWARD: "article_reward",
    NotificationDataType.POINT_COMMENT_THANK: "comment_thank",
    NotificationDataType.BROADCAST: "broadcast",
    NotificationDataType.POINT_EXCHANGE: "point_exchange",
    NotificationDataType.ABUSE_POINT_DEDUCT: "abuse_point_deduct",
    NotificationDataType.POINT_ARTICLE_THANK: "article_thank",
    NotificationDataType.REPLY: "reply",
    NotificationDataType.INVITECODE_USED: "invitecode_used",
}


@dataclass
class Notification:
    """Message telling ``user_id`` that an event about ``data_id`` happened."""

    id: str | None
    user_id: str
    data_id: str
    data_type: NotificationDataType
    has_read: bool = False
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.user_id, str) or not self.user_id.strip():
            raise ValueError("Notification user_id is required")
        if not isinstance(self.data_id, str):
            raise ValueError("Notification data_id must be a string")
        if isinstance(self.data_type, bool):
            raise ValueError(f"Unknown notification type: {self.data_type!r}")
        try:
            self.data_type = NotificationDataType(self.data_type)
        except ValueError as exc:
            raise ValueError(f"Unknown notification type: {self.data_type!r}") from exc


__all__ = ["Notification", "NotificationDataType"]
