from typing import List

from fastapi import APIRouter, Depends, Request
from libs.auth.dependencies import get_current_user
from libs.auth.directory import UserDirectory, get_user_directory
from libs.auth.models import AuthUser
from libs.common.rate_limit import submit_time_limit
from services.attendance_service.repository import (
    AttendanceStore,
    get_attendance_store,
)
from services.attendance_service.schemas import (
    AttendanceResponse,
    TimeEntryCreate,
    TimeEntryResult,
)
from services.attendance_service.services.query import list_attendance
from services.attendance_service.services.time_entry import submit_time_entry

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.get("", response_model=List[AttendanceResponse])
async def get_attendance(
    current_user: AuthUser = Depends(get_current_user),
    store: AttendanceStore = Depends(get_attendance_store),
    directory: UserDirectory = Depends(get_user_directory),
):
    """
    List attendance visible to the caller's access tier, newest first.
    """
    return await list_attendance(store, directory, current_user)


@router.post("/submit-time", response_model=TimeEntryResult)
@submit_time_limit
async def submit_time(
    request: Request,
    entry: TimeEntryCreate,
    current_user: AuthUser = Depends(get_current_user),
    store: AttendanceStore = Depends(get_attendance_store),
):
    """
    Record today's time in, or time out if already timed in.

    Domain failures (missing department or office hours) come back as a
    result with ``success=false`` and ``type="error"``.
    """
    return await submit_time_entry(store, current_user, entry.time, entry.remarks)
