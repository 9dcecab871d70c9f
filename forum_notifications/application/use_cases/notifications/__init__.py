"""Public helpers for recording and reading forum notifications."""

from .create_notification import (
    add_abuse_point_deduct_notification,
    add_article_reward_notification,
    add_article_thank_notification,
    add_at_notification,
    add_broadcast_notification,
    add_comment_thank_notification,
    add_commented_notification,
    add_following_user_notification,
    add_invitecode_used_notification,
    add_point_charge_notification,
    add_point_exchange_notification,
    add_point_transfer_notification,
    add_reply_notification,
    broadcast,
    create_notification,
    notify,
)
from .list_notifications import count_unread, get_notification, list_notifications
from .mark_read import (
    FAILURE_HANDLERS,
    FailureHandler,
    abort_on_error,
    log_and_continue,
    mark_notifications_read,
    mark_read,
    mark_read_by_data_ids,
    mark_read_by_type,
)

__all__ = [
    "FAILURE_HANDLERS",
    "FailureHandler",
    "abort_on_error",
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
    "count_unread",
    "create_notification",
    "get_notification",
    "list_notifications",
    "log_and_continue",
    "mark_notifications_read",
    "mark_read",
    "mark_read_by_data_ids",
    "mark_read_by_type",
    "notify",
]
