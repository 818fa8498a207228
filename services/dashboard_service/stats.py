"""Dashboard aggregates: headcount, departments, daily attendance and hiring."""

from datetime import date, timedelta
from typing import List, Optional

from libs.auth.directory import UserDirectory
from libs.common.datetime_utils import local_today
from services.dashboard_service.repository import DashboardStore
from services.dashboard_service.schemas import (
    DailyAttendanceCount,
    DashboardStats,
    MonthlyHeadcount,
)

ATTENDANCE_WINDOW_DAYS = 6
EMPLOYMENT_WINDOW_MONTHS = 12


def last_n_days(today: date, n: int) -> List[date]:
    """The ``n`` days ending with ``today``, oldest first."""
    return [today - timedelta(days=offset) for offset in range(n - 1, -1, -1)]


def last_n_months(today: date, n: int) -> List[str]:
    """``YYYY-MM`` keys for the ``n`` months ending with ``today``'s, oldest first."""
    months = []
    year, month = today.year, today.month
    for _ in range(n):
        months.append(f"{year:04d}-{month:02d}")
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(months))


def format_month(month_key: str) -> str:
    year, month = month_key.split("-")
    return date(int(year), int(month), 1).strftime("%b %Y")


def attendance_rate(present: int, total_users: int) -> float:
    if total_users <= 0:
        return 0.0
    return round(present / total_users * 100, 2)


async def get_dashboard_stats(
    store: DashboardStore,
    directory: UserDirectory,
    *,
    today: Optional[date] = None,
) -> DashboardStats:
    today = today or local_today()

    users = await directory.list_users()
    total_users = len(users)
    total_departments = await store.count_departments()

    days = last_n_days(today, ATTENDANCE_WINDOW_DAYS)
    counts = await store.count_attendance_by_date(days)
    today_attendance = counts.get(today, 0)

    hires_by_month: dict[str, int] = {}
    for user in users:
        if user.created_at is not None:
            key = user.created_at.strftime("%Y-%m")
            hires_by_month[key] = hires_by_month.get(key, 0) + 1

    return DashboardStats(
        total_users=total_users,
        total_departments=total_departments,
        attendance_by_day=[
            DailyAttendanceCount(date=day, count=counts.get(day, 0)) for day in days
        ],
        attendance_rate=attendance_rate(today_attendance, total_users),
        today_attendance=today_attendance,
        employment_overview=[
            MonthlyHeadcount(month=format_month(key), count=hires_by_month.get(key, 0))
            for key in last_n_months(today, EMPLOYMENT_WINDOW_MONTHS)
        ],
    )
