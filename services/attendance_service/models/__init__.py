"""Attendance Service models package."""

from services.attendance_service.models.core import (
    AccessControl,
    AttendanceRecord,
    OfficeHours,
)
from services.attendance_service.models.enums import (
    AccessTier,
    AttendanceStatus,
    EntryType,
)

__all__ = [
    "AccessControl",
    "AccessTier",
    "AttendanceRecord",
    "AttendanceStatus",
    "EntryType",
    "OfficeHours",
]
