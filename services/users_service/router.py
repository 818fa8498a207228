"""User management backed by the identity provider.

User records live in Supabase Auth; names, username, role and department are
kept in ``user_metadata``. Roles and departments are plain lookup tables.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from libs.auth.dependencies import get_current_user
from libs.auth.directory import DirectoryUser, UserDirectory, get_user_directory
from libs.auth.models import AuthUser
from libs.common.logging import get_logger
from services.users_service.repository import (
    OrganizationStore,
    get_organization_store,
)
from services.users_service.schemas import (
    DepartmentResponse,
    MessageResponse,
    RoleResponse,
    UserCreate,
    UserCreatedResponse,
    UserListItem,
    UserResponse,
    UserUpdate,
)

logger = get_logger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


def _full_name(first_name: str, last_name: str) -> str:
    return f"{first_name} {last_name}"


def _as_int(value) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _flatten(user: DirectoryUser) -> UserResponse:
    metadata = {
        key: value
        for key, value in user.user_metadata.items()
        if key not in ("id", "email")
    }
    return UserResponse(id=user.id, email=user.email, **metadata)


@router.post("", response_model=UserCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_in: UserCreate,
    current_user: AuthUser = Depends(get_current_user),
    directory: UserDirectory = Depends(get_user_directory),
):
    """Create a confirmed identity with profile data in its metadata."""
    metadata = {
        "first_name": user_in.first_name,
        "last_name": user_in.last_name,
        "username": user_in.username,
        "role_id": user_in.role_id,
        "department_id": user_in.department_id,
        "full_name": _full_name(user_in.first_name, user_in.last_name),
        "status": "active",
    }
    created = await directory.create_user(
        email=user_in.email, password=user_in.password, user_metadata=metadata
    )
    logger.info(
        "Created user",
        extra={"extra_fields": {"user_id": created.id, "created_by": current_user.id}},
    )
    return UserCreatedResponse(
        id=created.id,
        email=created.email,
        username=user_in.username,
        first_name=user_in.first_name,
        last_name=user_in.last_name,
        role_id=user_in.role_id,
        department_id=user_in.department_id,
    )


@router.get("", response_model=List[UserListItem])
async def list_users(
    current_user: AuthUser = Depends(get_current_user),
    directory: UserDirectory = Depends(get_user_directory),
    store: OrganizationStore = Depends(get_organization_store),
):
    """List all users, adding ``role_name`` to each user's metadata."""
    users = await directory.list_users()
    role_names = {role.id: role.name for role in await store.list_roles()}

    items = []
    for user in users:
        metadata = dict(user.user_metadata)
        role_id = metadata.get("role_id")
        metadata["role_name"] = role_names.get(_as_int(role_id)) if role_id else None
        items.append(
            UserListItem(
                id=user.id,
                email=user.email,
                user_metadata=metadata,
                created_at=user.created_at,
            )
        )
    return items


@router.get("/roles", response_model=List[RoleResponse])
async def list_roles(
    department_id: Optional[int] = Query(None, alias="departmentId"),
    store: OrganizationStore = Depends(get_organization_store),
):
    """Roles ordered by name, optionally limited to one department."""
    return await store.list_roles(department_id)


@router.get("/departments/list", response_model=List[DepartmentResponse])
async def list_departments(
    current_user: AuthUser = Depends(get_current_user),
    store: OrganizationStore = Depends(get_organization_store),
):
    return await store.list_departments()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    current_user: AuthUser = Depends(get_current_user),
    directory: UserDirectory = Depends(get_user_directory),
):
    return _flatten(await directory.get_user(user_id))


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    user_in: UserUpdate,
    current_user: AuthUser = Depends(get_current_user),
    directory: UserDirectory = Depends(get_user_directory),
):
    """Replace a user's profile metadata; ``full_name`` is recomputed."""
    existing = await directory.get_user(user_id)
    metadata = dict(existing.user_metadata)
    metadata.update(
        {
            "first_name": user_in.first_name,
            "last_name": user_in.last_name,
            "username": user_in.username,
            "role_id": user_in.role_id,
            "full_name": _full_name(user_in.first_name, user_in.last_name),
        }
    )
    if user_in.department_id is not None:
        metadata["department_id"] = user_in.department_id

    updated = await directory.update_user(
        user_id, email=user_in.email, user_metadata=metadata
    )
    logger.info(
        "Updated user",
        extra={"extra_fields": {"user_id": user_id, "updated_by": current_user.id}},
    )
    return _flatten(updated)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    current_user: AuthUser = Depends(get_current_user),
    directory: UserDirectory = Depends(get_user_directory),
):
    await directory.delete_user(user_id)
    logger.info(
        "Deleted user",
        extra={"extra_fields": {"user_id": user_id, "deleted_by": current_user.id}},
    )
    return MessageResponse(message="User deleted successfully")
