from typing import Protocol, Sequence

from fastapi import Depends
from libs.common.errors import StoreError
from libs.db.session import get_async_db
from services.sidebar_service.models import SidebarItem
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession


class SidebarStore(Protocol):
    async def list_items_for_role(self, role_id: int) -> Sequence[SidebarItem]:
        """Items whose ``user_access`` contains ``role_id``, ordered by id."""
        ...


class SqlSidebarStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_items_for_role(self, role_id: int) -> Sequence[SidebarItem]:
        query = (
            select(SidebarItem)
            .where(SidebarItem.user_access.contains([role_id]))
            .order_by(SidebarItem.id)
        )
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to fetch sidebar items: {e}") from e
        return result.scalars().all()


def get_sidebar_store(db: AsyncSession = Depends(get_async_db)) -> SidebarStore:
    return SqlSidebarStore(db)
