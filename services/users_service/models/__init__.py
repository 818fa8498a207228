"""Users Service models package."""

from services.users_service.models.core import Department, Role

__all__ = [
    "Department",
    "Role",
]
