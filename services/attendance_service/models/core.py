import uuid
from datetime import date as date_type
from datetime import datetime, time
from typing import List, Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from services.attendance_service.models.enums import AttendanceStatus, enum_values
from sqlalchemy import ARRAY, Date, DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy import Integer, String, Time, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column


class AccessControl(Base):
    """Policy entry mapping a tier name to the role ids allowed into it."""

    __tablename__ = "access_control"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    allowed_to: Mapped[List[int]] = mapped_column(
        ARRAY(Integer), nullable=False, default=list
    )

    def __repr__(self):
        return f"<AccessControl {self.name} roles={self.allowed_to}>"


class OfficeHours(Base):
    __tablename__ = "office_hours"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    department_id: Mapped[int] = mapped_column(
        Integer, unique=True, index=True, nullable=False
    )
    time_start: Mapped[time] = mapped_column(Time, nullable=False)
    time_end: Mapped[time] = mapped_column(Time, nullable=False)

    def __repr__(self):
        return (
            f"<OfficeHours Department={self.department_id} "
            f"{self.time_start}-{self.time_end}>"
        )


class AttendanceRecord(Base):
    __tablename__ = "attendance_table"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    # auth.users id from the identity provider
    user_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False), nullable=False, index=True
    )
    date: Mapped[date_type] = mapped_column(Date, nullable=False, index=True)

    time_in: Mapped[Optional[time]] = mapped_column(Time, nullable=True)
    time_out: Mapped[Optional[time]] = mapped_column(Time, nullable=True)
    status: Mapped[AttendanceStatus] = mapped_column(
        SAEnum(
            AttendanceStatus,
            name="attendance_status_enum",
            values_callable=enum_values,
            validate_strings=True,
        ),
        nullable=False,
    )
    remarks: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_attendance_user_date"),
    )

    def __repr__(self):
        return f"<AttendanceRecord User={self.user_id} Date={self.date}>"
