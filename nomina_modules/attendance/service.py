"""
Attendance Module Service (``nomina_modules.attendance.service``).

Responsibility
--------------
Clock-in/clock-out registration on the simulated current day, the daily
presence board and per-employee monthly reports.

Invariants enforced
-------------------
* The first punch of a day is the clock-in, the second the clock-out;
  later punches change nothing.
* Only active employees can punch; archived employees still have reports.
* The board lists only visible, active employees.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, date, datetime, tzinfo

from nomina_kernel.domain.access import User, filter_visible
from nomina_kernel.domain.clock import Clock, SimulatedClock
from nomina_kernel.domain.periods import CIVIL_TZ, to_civil_date
from nomina_kernel.exceptions import InvalidInputError
from nomina_kernel.logging_config import get_logger
from nomina_kernel.store import PayrollStore
from nomina_modules._service_helpers import acting_as, require_eligible, visible_employee
from nomina_modules.attendance.helpers import build_monthly_report, daily_status
from nomina_modules.attendance.models import (
    AttendanceDayLog,
    DailyAttendance,
    MonthlyAttendanceReport,
)
from nomina_modules.employees.helpers import active_only

logger = get_logger("modules.attendance.service")


class AttendanceService:
    """Punch registration and attendance views."""

    def __init__(self, store: PayrollStore, clock: Clock | None = None, tz: tzinfo = CIVIL_TZ):
        self._store = store
        self._clock = clock or SimulatedClock()
        self._tz = tz

    def _today(self) -> date:
        return to_civil_date(self._clock.now(), self._tz)

    def day_log(self, employee_id: int, work_date: date) -> AttendanceDayLog | None:
        for log in self._store.attendance_logs.list():
            if log.employee_id == employee_id and log.work_date == work_date:
                return log
        return None

    def register_punch(
        self,
        user: User,
        employee_id: int,
        at: datetime | None = None,
    ) -> AttendanceDayLog:
        """
        Record the next punch of today for ``employee_id``.

        ``at`` defaults to the clock's current time; the day is always the
        clock's current civil day.  A naive ``at`` is a UTC instant.
        """
        punch_time = at or self._clock.now()
        if punch_time.tzinfo is None:
            punch_time = punch_time.replace(tzinfo=UTC)
        punch_time = punch_time.astimezone(self._tz)
        with acting_as(user, employee_id=employee_id), self._store.transaction():
            employee = visible_employee(self._store, user, employee_id)
            require_eligible(employee, "register_punch")
            today = self._today()
            log = self.day_log(employee.id, today)

            if log is None:
                log = AttendanceDayLog(
                    id=self._store.attendance_logs.next_id(),
                    employee_id=employee.id,
                    work_date=today,
                    clock_in=punch_time,
                )
                self._store.attendance_logs.add(log)
                logger.info("clock_in_registered", extra={
                    "employee_id": employee.id,
                    "work_date": today,
                    "clock_in": punch_time,
                })
                return log

            if log.clock_out is None:
                if punch_time < log.clock_in:
                    raise InvalidInputError("clock_out", punch_time, "before clock-in")
                log = replace(log, clock_out=punch_time)
                self._store.attendance_logs.put(log)
                logger.info("clock_out_registered", extra={
                    "employee_id": employee.id,
                    "work_date": today,
                    "clock_out": punch_time,
                    "hours_worked": str(log.hours_worked),
                })
                return log

            logger.info("punch_ignored_day_complete", extra={
                "employee_id": employee.id,
                "work_date": today,
            })
            return log

    def daily_summary(self, user: User, day: date | None = None) -> list[DailyAttendance]:
        """Presence board for ``day`` (default today) over visible active employees."""
        day = day or self._today()
        logs = {
            log.employee_id: log
            for log in self._store.attendance_logs.list()
            if log.work_date == day
        }
        board = []
        for employee in active_only(filter_visible(user, self._store.employees.list())):
            log = logs.get(employee.id)
            board.append(DailyAttendance(
                employee_id=employee.id,
                employee_name=employee.name,
                clock_in=log.clock_in if log else None,
                clock_out=log.clock_out if log else None,
                status=daily_status(log),
            ))
        return board

    def monthly_report(
        self,
        user: User,
        employee_id: int,
        year: int | None = None,
        month: int | None = None,
    ) -> MonthlyAttendanceReport:
        """Month view for one visible employee (default: the clock's month)."""
        employee = visible_employee(self._store, user, employee_id)
        today = self._today()
        year = year or today.year
        month = month or today.month
        if not 1 <= month <= 12:
            raise InvalidInputError("month", month, "must be 1-12")
        return build_monthly_report(
            employee.id, year, month, self._store.attendance_logs.list()
        )
