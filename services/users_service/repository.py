from typing import Optional, Protocol, Sequence

from fastapi import Depends
from libs.common.errors import StoreError
from libs.db.session import get_async_db
from services.users_service.models import Department, Role
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession


class OrganizationStore(Protocol):
    async def list_roles(
        self, department_id: Optional[int] = None
    ) -> Sequence[Role]: ...

    async def list_departments(self) -> Sequence[Department]: ...


class SqlOrganizationStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_roles(self, department_id: Optional[int] = None) -> Sequence[Role]:
        query = select(Role).order_by(Role.name)
        if department_id is not None:
            query = query.where(Role.department_id == department_id)
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to fetch roles: {e}") from e
        return result.scalars().all()

    async def list_departments(self) -> Sequence[Department]:
        try:
            result = await self.db.execute(select(Department).order_by(Department.name))
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to fetch departments: {e}") from e
        return result.scalars().all()


def get_organization_store(
    db: AsyncSession = Depends(get_async_db),
) -> OrganizationStore:
    return SqlOrganizationStore(db)
