"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import and_, func, select, true
from sqlalchemy.orm import Session

from forum_notifications.domain.entities import Notification
from forum_notifications.infrastructure.models import NotificationModel

_FILTERABLE_COLUMNS = {
    "user_id": NotificationModel.user_id,
    "data_id": NotificationModel.data_id,
    "data_type": NotificationModel.data_type,
    "has_read": NotificationModel.has_read,
}


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite drops the offset, stored values are always UTC.
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: str) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        if notification.created_at is not None:
            model.created_at = _as_utc(notification.created_at).astimezone(timezone.utc)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, notification: Notification) -> Notification:
        if notification.id is None:
            raise ValueError("Notification id is required for updates")
        model = self.session.get(NotificationModel, notification.id)
        if model is None:
            msg = f"Notification with id {notification.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def query(
        self,
        filters: Mapping[str, Any],
        *,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[Notification]:
        """Return notifications matching every criterion in ``filters``.

        Scalar values are compared for equality, non-string iterables are
        matched with ``IN``. Results are ordered newest first.
        """

        statement = (
            select(NotificationModel)
            .where(self._build_criteria(filters))
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .offset(skip)
        )
        if limit is not None:
            statement = statement.limit(limit)
        return [self._to_entity(model) for model in self.session.scalars(statement)]

    def count(self, filters: Mapping[str, Any]) -> int:
        statement = (
            select(func.count())
            .select_from(NotificationModel)
            .where(self._build_criteria(filters))
        )
        return int(self.session.scalar(statement) or 0)

    @staticmethod
    def _build_criteria(filters: Mapping[str, Any]):
        clauses = []
        for name, value in filters.items():
            column = _FILTERABLE_COLUMNS.get(name)
            if column is None:
                raise ValueError(f"Unsupported notification filter: {name}")
            if isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
                clauses.append(column.in_(list(value)))
            else:
                clauses.append(column == value)
        return and_(true(), *clauses)

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        model.user_id = notification.user_id
        model.data_id = notification.data_id
        model.data_type = int(notification.data_type)
        model.has_read = notification.has_read

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            data_id=model.data_id,
            data_type=model.data_type,
            has_read=bool(model.has_read),
            created_at=_as_utc(model.created_at),
        )


__all__ = ["NotificationRepository"]
