"""Resolve a caller's role id to an access tier."""

from typing import Optional

from libs.common.logging import get_logger
from services.attendance_service.models import AccessTier
from services.attendance_service.repository import AttendanceStore

logger = get_logger(__name__)


async def resolve_access_tier(
    store: AttendanceStore, role_id: Optional[int]
) -> Optional[AccessTier]:
    """Return the tier of the first policy entry (by id) allowing ``role_id``.

    Returns None when the caller has no role, no entry allows it, or the
    matching entry's name is not a known tier. Store failures propagate.
    """
    if role_id is None:
        return None

    policies = await store.list_access_policies()
    matches = [policy for policy in policies if role_id in (policy.allowed_to or [])]
    if not matches:
        return None

    if len(matches) > 1:
        logger.warning(
            "Role is assigned to more than one access tier; using the first",
            extra={
                "extra_fields": {
                    "role_id": role_id,
                    "tiers": [policy.name for policy in matches],
                }
            },
        )

    tier = AccessTier.from_name(matches[0].name)
    if tier is None:
        logger.warning(
            "Access control entry has an unknown tier name",
            extra={"extra_fields": {"name": matches[0].name, "role_id": role_id}},
        )
    return tier
