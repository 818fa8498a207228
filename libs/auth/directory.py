"""Access to users stored in the identity provider (Supabase Auth).

Services depend on the ``UserDirectory`` protocol; the Supabase-backed
implementation wraps the blocking admin client with ``asyncio.to_thread``.
"""

import asyncio
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol

from pydantic import BaseModel, Field

from libs.common.errors import IdentityLookupError, NotFoundError
from libs.common.logging import get_logger
from libs.common.supabase import get_supabase_admin_client

logger = get_logger(__name__)

_PAGE_SIZE = 1000


class DirectoryUser(BaseModel):
    """A user record as returned by the identity provider."""

    id: str
    email: Optional[str] = None
    user_metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        return self.user_metadata.get("full_name") or "Unknown"


class UserDirectory(Protocol):
    async def get_user(self, user_id: str) -> DirectoryUser: ...

    async def list_users(self) -> List[DirectoryUser]: ...

    async def create_user(
        self, *, email: str, password: str, user_metadata: Dict[str, Any]
    ) -> DirectoryUser: ...

    async def update_user(
        self,
        user_id: str,
        *,
        email: Optional[str] = None,
        user_metadata: Optional[Dict[str, Any]] = None,
    ) -> DirectoryUser: ...

    async def delete_user(self, user_id: str) -> None: ...


def _to_directory_user(user: Any) -> DirectoryUser:
    return DirectoryUser(
        id=str(user.id),
        email=getattr(user, "email", None),
        user_metadata=dict(getattr(user, "user_metadata", None) or {}),
        created_at=getattr(user, "created_at", None),
    )


class SupabaseUserDirectory:
    """UserDirectory backed by the Supabase Auth admin API."""

    def __init__(self, client=None):
        self._client = client

    @property
    def admin(self):
        if self._client is None:
            self._client = get_supabase_admin_client()
        return self._client.auth.admin

    async def _call(self, action: str, func, *args):
        try:
            return await asyncio.to_thread(func, *args)
        except Exception as e:
            logger.error(
                "Identity provider request failed",
                extra={"extra_fields": {"action": action, "error": str(e)}},
            )
            raise IdentityLookupError(f"Failed to {action}: {e}") from e

    async def get_user(self, user_id: str) -> DirectoryUser:
        response = await self._call("fetch user data", self.admin.get_user_by_id, user_id)
        user = getattr(response, "user", None)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return _to_directory_user(user)

    async def list_users(self) -> List[DirectoryUser]:
        users: List[DirectoryUser] = []
        page = 1
        while True:
            batch = await self._call(
                "list users", self.admin.list_users, page, _PAGE_SIZE
            )
            users.extend(_to_directory_user(user) for user in batch)
            if len(batch) < _PAGE_SIZE:
                return users
            page += 1

    async def create_user(
        self, *, email: str, password: str, user_metadata: Dict[str, Any]
    ) -> DirectoryUser:
        attributes = {
            "email": email,
            "password": password,
            "email_confirm": True,
            "user_metadata": user_metadata,
        }
        response = await self._call("create user", self.admin.create_user, attributes)
        if getattr(response, "user", None) is None:
            raise IdentityLookupError("Auth user creation failed")
        return _to_directory_user(response.user)

    async def update_user(
        self,
        user_id: str,
        *,
        email: Optional[str] = None,
        user_metadata: Optional[Dict[str, Any]] = None,
    ) -> DirectoryUser:
        attributes: Dict[str, Any] = {}
        if email is not None:
            attributes["email"] = email
        if user_metadata is not None:
            attributes["user_metadata"] = user_metadata
        response = await self._call(
            "update user", self.admin.update_user_by_id, user_id, attributes
        )
        return _to_directory_user(response.user)

    async def delete_user(self, user_id: str) -> None:
        await self._call("delete user", self.admin.delete_user, user_id)


def get_user_directory() -> UserDirectory:
    """FastAPI dependency returning the identity provider directory."""
    return SupabaseUserDirectory()
