"""Timestamp helpers shared by models and sync services."""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current UTC time, timezone-aware."""
    return datetime.now(timezone.utc)


def unix_now() -> int:
    """Current time in whole epoch seconds.

    The CMS stores ``created_at``/``updated_at`` as unsigned integer seconds.
    """
    return int(utcnow().timestamp())
