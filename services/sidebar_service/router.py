from typing import List

from fastapi import APIRouter, Depends
from libs.auth.dependencies import get_current_user
from libs.auth.directory import UserDirectory, get_user_directory
from libs.auth.models import AuthUser
from libs.common.errors import NotFoundError
from libs.common.logging import get_logger
from services.sidebar_service.repository import SidebarStore, get_sidebar_store
from services.sidebar_service.schemas import SidebarItemResponse

logger = get_logger(__name__)
router = APIRouter(prefix="/sidebar", tags=["sidebar"])


@router.get("/items", response_model=List[SidebarItemResponse])
async def get_sidebar_items(
    current_user: AuthUser = Depends(get_current_user),
    store: SidebarStore = Depends(get_sidebar_store),
    directory: UserDirectory = Depends(get_user_directory),
):
    """
    Navigation items for the caller's role.

    The role is re-read from the identity provider so a role change applies
    without waiting for the caller's token to refresh.
    """
    user = await directory.get_user(current_user.id)
    try:
        role_id = int(user.user_metadata.get("role_id"))
    except (TypeError, ValueError):
        logger.warning(
            "User has no usable role_id in metadata",
            extra={"extra_fields": {"user_id": current_user.id}},
        )
        raise NotFoundError("User role not found")

    return await store.list_items_for_role(role_id)
