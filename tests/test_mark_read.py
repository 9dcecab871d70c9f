"""Tests for the read-state transitions of notifications."""

from __future__ import annotations

import logging

import pytest
from sqlalchemy import delete
from sqlalchemy.exc import OperationalError

from forum_notifications.application.use_cases.notifications import (
    abort_on_error,
    create_notification,
    log_and_continue,
    mark_notifications_read,
    mark_read,
    mark_read_by_data_ids,
    mark_read_by_type,
)
from forum_notifications.domain.entities import Notification, NotificationDataType
from forum_notifications.domain.exceptions import NotificationUpdateError
from forum_notifications.infrastructure.models import NotificationModel
from forum_notifications.infrastructure.repositories import NotificationRepository

T = NotificationDataType.COMMENTED
T2 = NotificationDataType.AT


def _operational_error() -> OperationalError:
    return OperationalError("UPDATE", {}, Exception("database is locked"))


def _unread_ids(session, user_id: str) -> set[str]:
    repository = NotificationRepository(session)
    return {n.id for n in repository.query({"user_id": user_id, "has_read": False})}


@pytest.fixture()
def populated(session):
    """Two users, each with two unread ``T`` and one unread ``T2`` notification."""

    created: dict[str, list[Notification]] = {}
    for user_id in ("U1", "U2"):
        created[user_id] = [
            create_notification(session, user_id=user_id, data_id="a1", data_type=T),
            create_notification(session, user_id=user_id, data_id="a2", data_type=T),
            create_notification(session, user_id=user_id, data_id="a3", data_type=T2),
        ]
    return created


def test_mark_read_flips_only_the_read_flag(session):
    created = create_notification(session, user_id="u1", data_id="a1", data_type=T)

    updated = mark_read(session, created)

    assert updated.has_read is True
    assert updated.id == created.id
    assert updated.user_id == created.user_id
    assert updated.data_id == created.data_id
    assert updated.data_type is created.data_type
    assert updated.created_at == created.created_at
    assert NotificationRepository(session).get(created.id).has_read is True


def test_mark_read_on_read_notification_does_not_write(session, monkeypatch):
    created = create_notification(session, user_id="u1", data_id="a1", data_type=T)
    already_read = mark_read(session, created)

    def failing_update(self, notification):
        raise AssertionError("no write expected")

    monkeypatch.setattr(NotificationRepository, "update", failing_update)

    assert mark_read(session, already_read) is already_read


def test_mark_read_skips_records_read_concurrently(session, monkeypatch):
    created = create_notification(session, user_id="u1", data_id="a1", data_type=T)
    mark_read(session, created)

    def failing_update(self, notification):
        raise AssertionError("no write expected")

    monkeypatch.setattr(NotificationRepository, "update", failing_update)

    # ``created`` is a stale copy that still says unread.
    assert mark_read(session, created).has_read is True


def test_mark_read_surfaces_update_failures(session, monkeypatch):
    created = create_notification(session, user_id="u1", data_id="a1", data_type=T)

    def failing_update(self, notification):
        raise _operational_error()

    monkeypatch.setattr(NotificationRepository, "update", failing_update)

    with pytest.raises(NotificationUpdateError) as exc_info:
        mark_read(session, created)

    assert isinstance(exc_info.value.__cause__, OperationalError)


def test_mark_read_of_missing_record_fails(session, caplog):
    ghost = Notification(id="missing", user_id="u1", data_id="a1", data_type=T)

    with caplog.at_level(logging.ERROR):
        with pytest.raises(NotificationUpdateError) as exc_info:
            mark_read(session, ghost)

    assert isinstance(exc_info.value.__cause__, ValueError)
    assert "missing" in caplog.text


def test_mark_read_without_id_is_logged_and_fails(session, caplog):
    unsaved = Notification(id=None, user_id="u1", data_id="a1", data_type=T)

    with caplog.at_level(logging.ERROR):
        with pytest.raises(NotificationUpdateError):
            mark_read(session, unsaved)

    assert "Makes notification as read failed" in caplog.text


def test_mark_read_by_type_only_touches_matching_notifications(session, populated):
    marked = mark_read_by_type(session, "U1", T)

    assert marked == 2
    assert _unread_ids(session, "U1") == {populated["U1"][2].id}
    assert _unread_ids(session, "U2") == {n.id for n in populated["U2"]}


def test_mark_read_by_type_accepts_integer_values(session, populated):
    assert mark_read_by_type(session, "U1", int(T2)) == 1


def test_mark_read_by_data_ids_covers_article_and_comments(session):
    article = create_notification(session, user_id="u1", data_id="article-1", data_type=T)
    first = create_notification(session, user_id="u1", data_id="comment-1", data_type=NotificationDataType.REPLY)
    second = create_notification(session, user_id="u1", data_id="comment-2", data_type=T2)
    other = create_notification(session, user_id="u1", data_id="comment-3", data_type=T)
    foreign = create_notification(session, user_id="u2", data_id="comment-1", data_type=T)

    marked = mark_read_by_data_ids(session, "u1", "article-1", ["comment-1", "comment-2"])

    assert marked == 3
    repository = NotificationRepository(session)
    assert all(repository.get(n.id).has_read for n in (article, first, second))
    assert repository.get(other.id).has_read is False
    assert repository.get(foreign.id).has_read is False


def test_mark_read_by_data_ids_without_comments(session):
    article = create_notification(session, user_id="u1", data_id="article-1", data_type=T)

    assert mark_read_by_data_ids(session, "u1", "article-1", []) == 1
    assert NotificationRepository(session).get(article.id).has_read is True


def test_batch_operations_are_idempotent(session, populated):
    assert mark_read_by_type(session, "U1", T) == 2
    after_first = _unread_ids(session, "U1")
    assert mark_read_by_type(session, "U1", T) == 0
    assert _unread_ids(session, "U1") == after_first

    assert mark_read_by_data_ids(session, "U2", "a3", ["a1"]) == 2
    after_first = _unread_ids(session, "U2")
    assert mark_read_by_data_ids(session, "U2", "a3", ["a1"]) == 0
    assert _unread_ids(session, "U2") == after_first


def _fail_for(monkeypatch, failing_id: str) -> None:
    original_update = NotificationRepository.update

    def flaky_update(self, notification):
        if notification.id == failing_id:
            raise _operational_error()
        return original_update(self, notification)

    monkeypatch.setattr(NotificationRepository, "update", flaky_update)


def test_batch_continues_after_a_failed_record(session, populated, monkeypatch, caplog):
    first, second, _ = populated["U1"]
    _fail_for(monkeypatch, first.id)

    with caplog.at_level(logging.ERROR):
        marked = mark_notifications_read(session, [first, second], on_error=log_and_continue)

    assert marked == 1
    assert _unread_ids(session, "U1") == {first.id, populated["U1"][2].id}
    assert any(first.id in record.getMessage() for record in caplog.records)


def test_batch_aborts_when_requested(session, populated, monkeypatch):
    first, second, _ = populated["U1"]
    _fail_for(monkeypatch, first.id)

    with pytest.raises(NotificationUpdateError):
        mark_notifications_read(session, [first, second], on_error=abort_on_error)

    assert second.id in _unread_ids(session, "U1")


def _delete_after_fetch(monkeypatch, session, vanishing_id: str) -> None:
    original_get = NotificationRepository.get

    def get_then_delete(self, notification_id):
        found = original_get(self, notification_id)
        if notification_id == vanishing_id:
            session.execute(delete(NotificationModel).where(NotificationModel.id == vanishing_id))
            session.commit()
        return found

    monkeypatch.setattr(NotificationRepository, "get", get_then_delete)


def test_batch_continues_when_a_record_vanishes_before_update(session, populated, monkeypatch):
    first, second, _ = populated["U1"]
    _delete_after_fetch(monkeypatch, session, first.id)

    marked = mark_notifications_read(session, [first, second], on_error=log_and_continue)

    assert marked == 1
    monkeypatch.undo()
    assert NotificationRepository(session).get(first.id) is None
    assert NotificationRepository(session).get(second.id).has_read is True


def test_mark_read_of_vanished_record_raises_update_error(session, monkeypatch):
    created = create_notification(session, user_id="u1", data_id="a1", data_type=T)
    _delete_after_fetch(monkeypatch, session, created.id)

    with pytest.raises(NotificationUpdateError):
        mark_read(session, created)


def test_batch_counts_only_records_it_wrote(session):
    stale = create_notification(session, user_id="u1", data_id="a1", data_type=T)
    mark_read(session, stale)

    # ``stale`` still says unread although the stored record is already read.
    assert stale.has_read is False
    assert mark_notifications_read(session, [stale]) == 0
    assert mark_read_by_type(session, "u1", T) == 0


def test_batch_skips_notifications_already_read(session, populated, monkeypatch):
    first = mark_read(session, populated["U1"][0])

    assert mark_notifications_read(session, [first]) == 0


def test_query_failure_is_logged_and_suppressed(session, monkeypatch, caplog):
    def failing_query(self, filters, **kwargs):
        raise _operational_error()

    monkeypatch.setattr(NotificationRepository, "query", failing_query)

    with caplog.at_level(logging.ERROR):
        assert mark_read_by_type(session, "U1", T) == 0

    assert "Makes read failed" in caplog.text


def test_query_failure_aborts_when_requested(session, monkeypatch):
    def failing_query(self, filters, **kwargs):
        raise _operational_error()

    monkeypatch.setattr(NotificationRepository, "query", failing_query)

    with pytest.raises(NotificationUpdateError) as exc_info:
        mark_read_by_data_ids(session, "U1", "a1", [], on_error=abort_on_error)

    assert isinstance(exc_info.value.__cause__, OperationalError)
