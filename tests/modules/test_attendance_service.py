"""Tests for punch registration and attendance views (nomina_modules/attendance)."""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from nomina_kernel.domain.clock import DeterministicClock
from nomina_kernel.domain.periods import CIVIL_TZ
from nomina_kernel.exceptions import (
    EmployeeNotEligibleError,
    EmployeeNotFoundError,
    InvalidInputError,
)
from nomina_modules.attendance.helpers import build_monthly_report, day_status
from nomina_modules.attendance.models import AttendanceDayLog, DailyStatus, DayStatus
from nomina_modules.attendance.service import AttendanceService
from scripts.seed_data import build_seed_store, generate_attendance

MONDAY_MORNING = datetime(2024, 7, 22, 8, 55, tzinfo=CIVIL_TZ)


def _log(id, day, clock_in=None, clock_out=None, employee_id=2):
    at = lambda h, m: datetime(2024, 7, day, h, m, tzinfo=CIVIL_TZ)  # noqa: E731
    return AttendanceDayLog(
        id=id,
        employee_id=employee_id,
        work_date=date(2024, 7, day),
        clock_in=at(*clock_in) if clock_in else None,
        clock_out=at(*clock_out) if clock_out else None,
    )


@pytest.fixture
def punch_clock():
    return DeterministicClock(MONDAY_MORNING)


@pytest.fixture
def attendance(store, punch_clock):
    return AttendanceService(store, punch_clock)


# =============================================================================
# Models and helpers
# =============================================================================


class TestDayLog:

    def test_hours_worked(self):
        assert _log(1, 1, (9, 0), (17, 30)).hours_worked == Decimal("8.50")

    def test_incomplete_has_no_hours(self):
        assert _log(1, 1, (9, 0)).hours_worked == Decimal("0.00")

    def test_clock_out_without_clock_in_rejected(self):
        with pytest.raises(InvalidInputError):
            _log(1, 1, None, (17, 0))

    def test_clock_out_before_clock_in_rejected(self):
        with pytest.raises(InvalidInputError):
            _log(1, 1, (17, 0), (9, 0))

    def test_naive_times_rejected(self):
        with pytest.raises(InvalidInputError):
            AttendanceDayLog(id=1, employee_id=2, work_date=date(2024, 7, 1),
                             clock_in=datetime(2024, 7, 1, 9, 0))


class TestMonthlyReport:

    def test_statuses_and_totals(self):
        logs = [_log(1, 1, (9, 0), (18, 0)), _log(2, 2, (9, 0)), _log(3, 6, (10, 0), (12, 0))]
        report = build_monthly_report(2, 2024, 7, logs)

        assert len(report.days) == 31
        assert report.days[0].status is DayStatus.ATTENDED
        assert report.days[0].day_name == "lunes"
        assert report.days[1].status is DayStatus.INCOMPLETE
        assert report.days[2].status is DayStatus.ABSENT
        # a Saturday punch still shows as weekend
        assert report.days[5].status is DayStatus.WEEKEND
        assert report.worked_days == 2
        assert report.absences == 21
        assert report.total_hours == Decimal("11.00")

    def test_other_employees_ignored(self):
        report = build_monthly_report(3, 2024, 7, [_log(1, 1, (9, 0), (18, 0))])
        assert report.worked_days == 0

    def test_day_status_weekend_first(self):
        assert day_status(date(2024, 7, 7), None) is DayStatus.WEEKEND


# =============================================================================
# Service
# =============================================================================


class TestRegisterPunch:

    def test_clock_in_then_out_then_ignored(self, attendance, punch_clock, admin, captured_logs):
        first = attendance.register_punch(admin, 2)
        assert first.clock_in == MONDAY_MORNING
        assert first.clock_out is None

        punch_clock.set_time(MONDAY_MORNING + timedelta(hours=9))
        second = attendance.register_punch(admin, 2)
        assert second.id == first.id
        assert second.hours_worked == Decimal("9.00")

        punch_clock.set_time(MONDAY_MORNING + timedelta(hours=10))
        third = attendance.register_punch(admin, 2)
        assert third == second
        assert any(r["message"] == "punch_ignored_day_complete" for r in captured_logs())

    def test_explicit_time(self, attendance, admin):
        at = MONDAY_MORNING + timedelta(minutes=20)
        assert attendance.register_punch(admin, 3, at=at).clock_in == at

    def test_clock_out_before_clock_in_rejected(self, attendance, admin):
        attendance.register_punch(admin, 2)
        with pytest.raises(InvalidInputError):
            attendance.register_punch(admin, 2, at=MONDAY_MORNING - timedelta(hours=1))

    def test_archived_employee_rejected(self, attendance, admin):
        with pytest.raises(EmployeeNotEligibleError):
            attendance.register_punch(admin, 6)

    def test_out_of_scope_rejected(self, attendance, employee_user):
        with pytest.raises(EmployeeNotFoundError):
            attendance.register_punch(employee_user, 2)

    def test_employee_punches_self(self, attendance, employee_user):
        assert attendance.register_punch(employee_user, 3).employee_id == 3


class TestDailySummary:

    def test_manager_board(self, attendance, punch_clock, manager):
        attendance.register_punch(manager, 2)
        attendance.register_punch(manager, 5)
        punch_clock.set_time(MONDAY_MORNING + timedelta(hours=8))
        attendance.register_punch(manager, 5)

        board = {row.employee_id: row.status for row in attendance.daily_summary(manager)}
        assert board == {
            2: DailyStatus.PRESENT,
            4: DailyStatus.ABSENT,
            5: DailyStatus.FINISHED,
        }

    def test_other_day(self, attendance, admin):
        attendance.register_punch(admin, 2)
        board = attendance.daily_summary(admin, date(2024, 7, 23))
        assert all(row.status is DailyStatus.ABSENT for row in board)


class TestMonthlyReportService:

    def test_seeded_month_adds_up(self, admin):
        store = build_seed_store()
        service = AttendanceService(store, DeterministicClock(MONDAY_MORNING))
        report = service.monthly_report(admin, 2)
        assert (report.year, report.month) == (2024, 7)
        assert report.worked_days + report.absences == 23
        assert report.total_hours == sum(d.hours_worked for d in report.days)

    def test_invalid_month(self, attendance, admin):
        with pytest.raises(InvalidInputError):
            attendance.monthly_report(admin, 2, 2024, 13)

    def test_out_of_scope(self, attendance, manager):
        with pytest.raises(EmployeeNotFoundError):
            attendance.monthly_report(manager, 3)


class TestSeedAttendance:

    def test_reproducible_and_weekdays_only(self):
        first = generate_attendance(date(2024, 7, 20))
        assert first == generate_attendance(date(2024, 7, 20))
        assert all(log.work_date.weekday() < 5 for log in first)
        assert all(log.work_date.day < 20 for log in first)
        assert {log.employee_id for log in first} <= {2, 3, 5}
