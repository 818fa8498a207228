"""Attendance Service schemas package."""

from services.attendance_service.schemas.main import (
    AttendanceResponse,
    TimeEntryCreate,
    TimeEntryResult,
    parse_clock_time,
)

__all__ = [
    "AttendanceResponse",
    "TimeEntryCreate",
    "TimeEntryResult",
    "parse_clock_time",
]
