"""Enum definitions for attendance service models."""

import enum


def enum_values(enum_cls):
    """Return persistent DB values for SAEnum mappings."""
    return [member.value for member in enum_cls]


class AttendanceStatus(str, enum.Enum):
    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"


class AccessTier(str, enum.Enum):
    """Named access levels stored in ``access_control.name``."""

    USERS = "Users"
    MODERATOR = "Moderator"
    ADMINISTRATOR = "Administrator"

    @classmethod
    def from_name(cls, name):
        """Return the tier for a stored policy name, or None if it is not a known tier."""
        for tier in cls:
            if tier.value == name:
                return tier
        return None


class EntryType(str, enum.Enum):
    """Outcome of a time submission."""

    TIME_IN = "time_in"
    TIME_OUT = "time_out"
    COMPLETED = "completed"
    ERROR = "error"
