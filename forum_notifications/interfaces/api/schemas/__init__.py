from .notification import (
    MarkReadByArticleRequest,
    MarkReadByTypeRequest,
    MarkReadResponse,
    NotificationCreate,
    NotificationRead,
    UnreadCountResponse,
)

__all__ = [
    "MarkReadByArticleRequest",
    "MarkReadByTypeRequest",
    "MarkReadResponse",
    "NotificationCreate",
    "NotificationRead",
    "UnreadCountResponse",
]
