from datetime import date as date_type
from typing import List

from pydantic import BaseModel


class DailyAttendanceCount(BaseModel):
    date: date_type
    count: int


class MonthlyHeadcount(BaseModel):
    month: str
    count: int


class DashboardStats(BaseModel):
    total_users: int
    total_departments: int
    attendance_by_day: List[DailyAttendanceCount]
    attendance_rate: float
    today_attendance: int
    employment_overview: List[MonthlyHeadcount]
