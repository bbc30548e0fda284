"""
Attendance Helpers (``nomina_modules.attendance.helpers``).

Pure classification of punch logs.  No I/O.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from nomina_kernel.domain.amounts import sum_amounts
from nomina_modules.attendance.models import (
    AttendanceDayLog,
    DailyStatus,
    DayStatus,
    MonthlyAttendanceDay,
    MonthlyAttendanceReport,
)

WEEKDAY_NAMES_ES = (
    "lunes",
    "martes",
    "miércoles",
    "jueves",
    "viernes",
    "sábado",
    "domingo",
)


def daily_status(log: AttendanceDayLog | None) -> DailyStatus:
    if log is None or log.clock_in is None:
        return DailyStatus.ABSENT
    if log.clock_out is None:
        return DailyStatus.PRESENT
    return DailyStatus.FINISHED


def day_status(day: date, log: AttendanceDayLog | None) -> DayStatus:
    """Weekends first, then complete, clock-in only, nothing."""
    if day.weekday() >= 5:
        return DayStatus.WEEKEND
    if log is not None and log.is_complete:
        return DayStatus.ATTENDED
    if log is not None and log.clock_in is not None:
        return DayStatus.INCOMPLETE
    return DayStatus.ABSENT


def build_monthly_report(
    employee_id: int,
    year: int,
    month: int,
    logs: Iterable[AttendanceDayLog],
) -> MonthlyAttendanceReport:
    by_day = {
        log.work_date: log for log in logs
        if log.employee_id == employee_id
        and log.work_date.year == year
        and log.work_date.month == month
    }
    days = []
    for day_number in range(1, calendar.monthrange(year, month)[1] + 1):
        day = date(year, month, day_number)
        log = by_day.get(day)
        days.append(MonthlyAttendanceDay(
            day=day,
            day_name=WEEKDAY_NAMES_ES[day.weekday()],
            clock_in=log.clock_in if log else None,
            clock_out=log.clock_out if log else None,
            hours_worked=log.hours_worked if log else Decimal("0.00"),
            status=day_status(day, log),
        ))
    return MonthlyAttendanceReport(
        employee_id=employee_id,
        year=year,
        month=month,
        days=tuple(days),
        worked_days=sum(
            1 for d in days if d.status in (DayStatus.ATTENDED, DayStatus.INCOMPLETE)
        ),
        absences=sum(1 for d in days if d.status is DayStatus.ABSENT),
        total_hours=sum_amounts(d.hours_worked for d in days),
    )
