from typing import Dict, List

from libs.auth.directory import UserDirectory
from libs.auth.models import AuthUser
from libs.common.errors import AccessDeniedError
from libs.common.logging import get_logger
from services.attendance_service.models import AccessTier
from services.attendance_service.repository import AttendanceStore
from services.attendance_service.schemas import AttendanceResponse
from services.attendance_service.services.access_policy import resolve_access_tier

logger = get_logger(__name__)

ELEVATED_TIERS = frozenset({AccessTier.MODERATOR, AccessTier.ADMINISTRATOR})


async def list_attendance(
    store: AttendanceStore,
    directory: UserDirectory,
    user: AuthUser,
) -> List[AttendanceResponse]:
    """
    Return the attendance rows visible to ``user``, newest first.

    Regular users see their own rows; moderators and administrators see
    everything. Each row carries the owner's display name, and a failed name
    lookup fails the whole listing rather than returning partial data.
    """
    tier = await resolve_access_tier(store, user.role_id)

    if tier is AccessTier.USERS:
        records = await store.list_records(user_id=user.id)
    elif tier in ELEVATED_TIERS:
        records = await store.list_records()
    else:
        logger.info(
            "Attendance listing denied",
            extra={"extra_fields": {"user_id": user.id, "role_id": user.role_id}},
        )
        raise AccessDeniedError()

    names: Dict[str, str] = {}
    rows: List[AttendanceResponse] = []
    for record in records:
        if record.user_id not in names:
            owner = await directory.get_user(record.user_id)
            names[record.user_id] = owner.display_name
        row = AttendanceResponse.model_validate(record)
        row.user_name = names[record.user_id]
        rows.append(row)

    return rows
