"""Datetime utilities for timestamps and the office-local calendar day.

Usage:
    from libs.common.datetime_utils import utc_now, local_today

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
"""

from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from libs.common.config import get_settings


def utc_now() -> datetime:
    """Return timezone-aware UTC datetime.

    Always use this for timestamps in the database.
    """
    return datetime.now(timezone.utc)


def local_now(tz_name: Optional[str] = None) -> datetime:
    """Return the current time in the configured office timezone."""
    return datetime.now(ZoneInfo(tz_name or get_settings().TIMEZONE))


def local_today(tz_name: Optional[str] = None) -> date:
    """Return today's calendar date in the configured office timezone.

    Attendance rows are keyed by this date, not by the UTC date.
    """
    return local_now(tz_name).date()
