"""Aggregate application use cases."""

from .notifications import create_notification, mark_read, mark_read_by_data_ids, mark_read_by_type

__all__ = [
    "create_notification",
    "mark_read",
    "mark_read_by_data_ids",
    "mark_read_by_type",
]
