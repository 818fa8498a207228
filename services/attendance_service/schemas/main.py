import re
import uuid
from datetime import date as date_type
from datetime import datetime
from datetime import time as time_type
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator
from services.attendance_service.models.enums import AttendanceStatus, EntryType

_CLOCK_RE = re.compile(r"^(\d{2}):(\d{2})(?::(\d{2}))?$")


def parse_clock_time(value: str) -> time_type:
    """Parse a zero-padded ``HH:MM`` or ``HH:MM:SS`` clock value."""
    match = _CLOCK_RE.match(value.strip())
    if not match:
        raise ValueError("time must be formatted as HH:MM or HH:MM:SS")
    hour, minute, second = (int(part or 0) for part in match.groups())
    try:
        return time_type(hour, minute, second)
    except ValueError as e:
        raise ValueError(f"invalid clock time {value!r}: {e}") from e


def format_clock_time(value: Optional[time_type]) -> Optional[str]:
    return value.strftime("%H:%M:%S") if value is not None else None


class TimeEntryCreate(BaseModel):
    time: time_type
    remarks: Optional[str] = None

    @field_validator("time", mode="before")
    @classmethod
    def parse_time(cls, v):
        if isinstance(v, str):
            return parse_clock_time(v)
        return v

    @field_validator("remarks")
    @classmethod
    def blank_remarks_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v


class AttendanceResponse(BaseModel):
    id: uuid.UUID
    user_id: str
    date: date_type
    time_in: Optional[time_type] = None
    time_out: Optional[time_type] = None
    status: AttendanceStatus
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Populated from the identity provider when listing
    user_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("time_in", "time_out")
    def serialize_clock(self, value: Optional[time_type]) -> Optional[str]:
        return format_clock_time(value)


class TimeEntryResult(BaseModel):
    """Outcome of a time submission, including expected failures."""

    success: bool
    message: str
    type: EntryType
    data: Optional[AttendanceResponse] = None

    @classmethod
    def failure(cls, message: str) -> "TimeEntryResult":
        return cls(success=False, message=message, type=EntryType.ERROR, data=None)
