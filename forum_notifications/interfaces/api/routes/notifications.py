"""Endpoints for recording notifications and marking them as read."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from forum_notifications.application.use_cases.notifications import (
    FailureHandler,
    count_unread,
    create_notification,
    get_notification,
    list_notifications as list_notifications_uc,
    mark_read,
    mark_read_by_data_ids,
    mark_read_by_type,
)
from forum_notifications.domain.entities import Notification
from forum_notifications.domain.exceptions import (
    NotificationNotFoundError,
    NotificationUpdateError,
    NotificationWriteError,
)
from forum_notifications.infrastructure.database import get_db
from forum_notifications.interfaces.api.dependencies import (
    get_batch_failure_handler,
    get_current_user_id,
)
from forum_notifications.interfaces.api.schemas import (
    MarkReadByArticleRequest,
    MarkReadByTypeRequest,
    MarkReadResponse,
    NotificationCreate,
    NotificationRead,
    UnreadCountResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])

logger = logging.getLogger(__name__)


def _to_read_model(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or "",
        user_id=notification.user_id,
        data_id=notification.data_id,
        data_type=notification.data_type,
        data_type_label=notification.data_type.label,
        has_read=notification.has_read,
        created_at=notification.created_at,
    )


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    data_type: int | None = Query(default=None, ge=0),
    unread_only: bool = Query(default=False),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user_id: str = Depends(get_current_user_id),
) -> list[NotificationRead]:
    """Return the authenticated user's notifications, newest first."""

    try:
        notifications = list_notifications_uc(
            db,
            current_user_id,
            data_type=data_type,
            unread_only=unread_only,
            skip=skip,
            limit=limit,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return [_to_read_model(notification) for notification in notifications]


@router.get("/unread-count", response_model=UnreadCountResponse)
def unread_count(
    data_type: int | None = Query(default=None, ge=0),
    db: Session = Depends(get_db),
    current_user_id: str = Depends(get_current_user_id),
) -> UnreadCountResponse:
    try:
        count = count_unread(db, current_user_id, data_type=data_type)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return UnreadCountResponse(count=count)


@router.post("/", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
def create(
    notification_in: NotificationCreate,
    db: Session = Depends(get_db),
    current_user_id: str = Depends(get_current_user_id),
) -> NotificationRead:
    """Record a notification on behalf of an upstream event producer."""

    try:
        notification = create_notification(
            db,
            user_id=notification_in.user_id,
            data_id=notification_in.data_id,
            data_type=notification_in.data_type,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except NotificationWriteError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc

    logger.info(
        "User %s recorded %s notification %s for user %s",
        current_user_id,
        notification.data_type.label,
        notification.id,
        notification.user_id,
    )
    return _to_read_model(notification)


@router.post("/{notification_id}/read", response_model=NotificationRead)
def mark_notification_read(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user_id: str = Depends(get_current_user_id),
) -> NotificationRead:
    try:
        notification = get_notification(db, notification_id, user_id=current_user_id)
    except NotificationNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    try:
        notification = mark_read(db, notification)
    except NotificationUpdateError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    return _to_read_model(notification)


@router.post("/read/by-type", response_model=MarkReadResponse)
def mark_type_read(
    request: MarkReadByTypeRequest,
    db: Session = Depends(get_db),
    current_user_id: str = Depends(get_current_user_id),
    on_error: FailureHandler = Depends(get_batch_failure_handler),
) -> MarkReadResponse:
    try:
        marked = mark_read_by_type(db, current_user_id, request.data_type, on_error=on_error)
    except NotificationUpdateError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    return MarkReadResponse(marked=marked)


@router.post("/read/by-article", response_model=MarkReadResponse)
def mark_article_read(
    request: MarkReadByArticleRequest,
    db: Session = Depends(get_db),
    current_user_id: str = Depends(get_current_user_id),
    on_error: FailureHandler = Depends(get_batch_failure_handler),
) -> MarkReadResponse:
    try:
        marked = mark_read_by_data_ids(
            db,
            current_user_id,
            request.article_id,
            request.comment_ids,
            on_error=on_error,
        )
    except NotificationUpdateError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    return MarkReadResponse(marked=marked)
