"""Storage access for the attendance workflow.

The services depend on the ``AttendanceStore`` protocol so the state machine
and query logic never touch a session directly. ``SqlAttendanceStore`` is the
PostgreSQL implementation; writes go through single conditional statements so
the (user_id, date) uniqueness holds under concurrent submissions.
"""

import uuid
from contextlib import asynccontextmanager
from datetime import date, time
from typing import Optional, Protocol, Sequence

from fastapi import Depends
from libs.common.datetime_utils import utc_now
from libs.common.errors import StoreError
from libs.common.logging import get_logger
from libs.db.session import get_async_db
from services.attendance_service.models import (
    AccessControl,
    AttendanceRecord,
    OfficeHours,
)
from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


class AttendanceStore(Protocol):
    async def list_access_policies(self) -> Sequence[AccessControl]: ...

    async def get_office_hours(self, department_id: int) -> Optional[OfficeHours]: ...

    async def get_record(
        self, user_id: str, day: date
    ) -> Optional[AttendanceRecord]: ...

    async def insert_record_if_absent(
        self, record: AttendanceRecord
    ) -> Optional[AttendanceRecord]:
        """Insert ``record`` unless one exists for its (user_id, date); None on conflict."""
        ...

    async def set_time_out_if_open(
        self, record_id: uuid.UUID, time_out: time, remarks: Optional[str] = None
    ) -> Optional[AttendanceRecord]:
        """Set time_out on a record that has none yet; None if it was already set."""
        ...

    async def list_records(
        self, user_id: Optional[str] = None
    ) -> Sequence[AttendanceRecord]:
        """Records ordered by date then time_in, most recent first."""
        ...


class SqlAttendanceStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _guard(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                "Attendance store failure",
                extra={"extra_fields": {"action": action, "error": str(e)}},
            )
            raise StoreError(f"Failed to {action}: {e}") from e

    async def list_access_policies(self) -> Sequence[AccessControl]:
        async with self._guard("fetch access control data"):
            result = await self.db.execute(
                select(AccessControl).order_by(AccessControl.id)
            )
            return result.scalars().all()

    async def get_office_hours(self, department_id: int) -> Optional[OfficeHours]:
        async with self._guard("fetch office hours"):
            result = await self.db.execute(
                select(OfficeHours).where(OfficeHours.department_id == department_id)
            )
            return result.scalar_one_or_none()

    async def get_record(self, user_id: str, day: date) -> Optional[AttendanceRecord]:
        async with self._guard("check existing attendance"):
            result = await self.db.execute(
                select(AttendanceRecord).where(
                    AttendanceRecord.user_id == user_id,
                    AttendanceRecord.date == day,
                )
            )
            return result.scalar_one_or_none()

    async def insert_record_if_absent(
        self, record: AttendanceRecord
    ) -> Optional[AttendanceRecord]:
        now = utc_now()
        stmt = (
            insert(AttendanceRecord)
            .values(
                id=record.id or uuid.uuid4(),
                user_id=record.user_id,
                date=record.date,
                time_in=record.time_in,
                time_out=record.time_out,
                status=record.status,
                remarks=record.remarks,
                created_at=now,
                updated_at=now,
            )
            .on_conflict_do_nothing(index_elements=["user_id", "date"])
            .returning(AttendanceRecord)
        )
        async with self._guard("record time in"):
            result = await self.db.scalars(
                stmt, execution_options={"populate_existing": True}
            )
            created = result.one_or_none()
            await self.db.commit()
            return created

    async def set_time_out_if_open(
        self, record_id: uuid.UUID, time_out: time, remarks: Optional[str] = None
    ) -> Optional[AttendanceRecord]:
        values = {"time_out": time_out, "updated_at": utc_now()}
        if remarks is not None:
            values["remarks"] = remarks

        stmt = (
            update(AttendanceRecord)
            .where(
                AttendanceRecord.id == record_id,
                AttendanceRecord.time_out.is_(None),
            )
            .values(**values)
            .returning(AttendanceRecord)
        )
        async with self._guard("record time out"):
            result = await self.db.scalars(
                stmt, execution_options={"populate_existing": True}
            )
            updated = result.one_or_none()
            await self.db.commit()
            return updated

    async def list_records(
        self, user_id: Optional[str] = None
    ) -> Sequence[AttendanceRecord]:
        query = select(AttendanceRecord).order_by(
            AttendanceRecord.date.desc(), AttendanceRecord.time_in.desc()
        )
        if user_id is not None:
            query = query.where(AttendanceRecord.user_id == user_id)
        async with self._guard("fetch attendance"):
            result = await self.db.execute(query)
            return result.scalars().all()


def get_attendance_store(db: AsyncSession = Depends(get_async_db)) -> AttendanceStore:
    """FastAPI dependency providing the SQL-backed store for the request."""
    return SqlAttendanceStore(db)
