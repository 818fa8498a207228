"""Daily time-in / time-out submission.

Each user has at most one attendance row per day. The first submission of the
day creates it (time in), the second closes it (time out) and any later
submission is a no-op reported as ``completed``.

Expected failures (missing department, missing office hours, failure to read
today's row) are returned as ``TimeEntryResult`` values with ``type="error"``.
"""

from datetime import date, time
from typing import Optional

from libs.auth.models import AuthUser
from libs.common.datetime_utils import local_today
from libs.common.errors import StoreError
from libs.common.logging import get_logger
from services.attendance_service.models import AttendanceRecord, EntryType
from services.attendance_service.repository import AttendanceStore
from services.attendance_service.schemas import AttendanceResponse, TimeEntryResult
from services.attendance_service.services.office_hours import (
    classify_time_in,
    get_office_hours,
)

logger = get_logger(__name__)

MSG_TIME_IN = "Time in recorded successfully"
MSG_TIME_OUT = "Time out recorded successfully"
MSG_COMPLETED = "Attendance for today is already completed"
MSG_NO_DEPARTMENT = "User department not found"


def _result(
    entry_type: EntryType, message: str, record: AttendanceRecord
) -> TimeEntryResult:
    return TimeEntryResult(
        success=True,
        message=message,
        type=entry_type,
        data=AttendanceResponse.model_validate(record),
    )


def _check_failed(error: StoreError) -> TimeEntryResult:
    return TimeEntryResult.failure(
        f"Failed to check existing attendance: {error.message}"
    )


async def _record_time_in(
    store: AttendanceStore,
    user: AuthUser,
    day: date,
    submitted_time: time,
    remarks: Optional[str],
) -> Optional[TimeEntryResult]:
    """Create today's row.

    Returns a result on success or configuration failure, or None when a
    concurrent submission created the row first.
    """
    if user.department_id is None:
        return TimeEntryResult.failure(MSG_NO_DEPARTMENT)

    office_hours = await get_office_hours(store, user.department_id)
    if office_hours is None:
        logger.warning(
            "Office hours missing for department",
            extra={"extra_fields": {"department_id": user.department_id}},
        )
        return TimeEntryResult.failure(
            f"Office hours not found for department {user.department_id}"
        )

    record = AttendanceRecord(
        user_id=user.id,
        date=day,
        time_in=submitted_time,
        time_out=None,
        status=classify_time_in(submitted_time, office_hours),
        remarks=remarks,
    )
    created = await store.insert_record_if_absent(record)
    if created is None:
        return None

    logger.info(
        "Recorded time in",
        extra={
            "extra_fields": {
                "user_id": user.id,
                "date": day.isoformat(),
                "status": created.status.value,
            }
        },
    )
    return _result(EntryType.TIME_IN, MSG_TIME_IN, created)


async def submit_time_entry(
    store: AttendanceStore,
    user: AuthUser,
    submitted_time: time,
    remarks: Optional[str] = None,
    *,
    today: Optional[date] = None,
) -> TimeEntryResult:
    """Advance the caller's attendance for ``today`` by one step."""
    day = today or local_today()
    submitted_time = submitted_time.replace(microsecond=0)

    try:
        existing = await store.get_record(user.id, day)
    except StoreError as e:
        return _check_failed(e)

    if existing is None:
        outcome = await _record_time_in(store, user, day, submitted_time, remarks)
        if outcome is not None:
            return outcome
        # Lost the insert race; continue from the row the other request created
        try:
            existing = await store.get_record(user.id, day)
        except StoreError as e:
            return _check_failed(e)
        if existing is None:
            return TimeEntryResult.failure("Failed to record attendance, please retry")

    if existing.time_out is None:
        updated = await store.set_time_out_if_open(existing.id, submitted_time, remarks)
        if updated is not None:
            logger.info(
                "Recorded time out",
                extra={"extra_fields": {"user_id": user.id, "date": day.isoformat()}},
            )
            return _result(EntryType.TIME_OUT, MSG_TIME_OUT, updated)
        try:
            existing = await store.get_record(user.id, day) or existing
        except StoreError as e:
            return _check_failed(e)

    return _result(EntryType.COMPLETED, MSG_COMPLETED, existing)
