"""Notification management for the forum backend.

Records per-user notifications raised by forum events and tracks whether
the recipient has read them.
"""
