from datetime import date
from typing import Dict, Protocol, Sequence

from fastapi import Depends
from libs.common.errors import StoreError
from libs.db.session import get_async_db
from services.attendance_service.models import AttendanceRecord
from services.users_service.models import Department
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession


class DashboardStore(Protocol):
    async def count_departments(self) -> int: ...

    async def count_attendance_by_date(self, days: Sequence[date]) -> Dict[date, int]:
        """Attendance row counts for each of ``days`` (zero when absent)."""
        ...


class SqlDashboardStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def count_departments(self) -> int:
        try:
            result = await self.db.execute(select(func.count(Department.id)))
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to fetch departments: {e}") from e
        return result.scalar_one()

    async def count_attendance_by_date(self, days: Sequence[date]) -> Dict[date, int]:
        query = (
            select(AttendanceRecord.date, func.count(AttendanceRecord.id))
            .where(AttendanceRecord.date.in_(list(days)))
            .group_by(AttendanceRecord.date)
        )
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to fetch attendance: {e}") from e
        counts = {day: 0 for day in days}
        for day, count in result.all():
            counts[day] = count
        return counts


def get_dashboard_store(db: AsyncSession = Depends(get_async_db)) -> DashboardStore:
    return SqlDashboardStore(db)
