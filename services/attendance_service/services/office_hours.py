from datetime import time
from typing import Optional

from services.attendance_service.models import AttendanceStatus, OfficeHours
from services.attendance_service.repository import AttendanceStore


async def get_office_hours(
    store: AttendanceStore, department_id: int
) -> Optional[OfficeHours]:
    return await store.get_office_hours(department_id)


def classify_time_in(submitted: time, office_hours: OfficeHours) -> AttendanceStatus:
    """Status for a time-in at ``submitted``; arriving exactly at start is on time."""
    submitted = submitted.replace(microsecond=0)
    if submitted > office_hours.time_end:
        return AttendanceStatus.ABSENT
    if submitted > office_hours.time_start:
        return AttendanceStatus.LATE
    return AttendanceStatus.PRESENT
