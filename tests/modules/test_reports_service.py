"""Tests for the payroll register, dashboard and branch reports (nomina_modules/reports)."""

from decimal import Decimal

import pytest

from nomina_kernel.domain.periods import PeriodStatus
from nomina_modules.payroll.service import PayrollService
from nomina_modules.reports.service import ReportService


@pytest.fixture
def payroll(store, clock):
    return PayrollService(store, clock)


@pytest.fixture
def reports(store, payroll):
    return ReportService(store, payroll)


class TestPayrollRegister:

    def test_admin_register(self, reports, admin):
        register = reports.payroll_register(admin)
        assert register.period.identifier == "2024-07-Q2"
        assert [line.employee_id for line in register.lines] == [1, 2, 3, 4, 5]
        assert register.total_net == Decimal("77887.50")
        assert register.total_earnings - register.total_deductions == register.total_net

    def test_line_breakdown(self, reports, admin):
        line = reports.payroll_register(admin).lines[4]
        assert line.external_id == "EMP-005"
        assert line.base_salary == Decimal("11000.00")
        assert line.isr_deduction == Decimal("2200.00")
        assert line.imss_deduction == Decimal("550.00")
        assert line.other_deductions == Decimal("1500.00")
        assert line.net_pay == Decimal("6750.00")

    def test_manager_register(self, reports, manager):
        register = reports.payroll_register(manager)
        assert [line.employee_id for line in register.lines] == [2, 4, 5]
        assert register.total_net == Decimal("46125.00")

    def test_employee_register_is_own_payslip(self, reports, employee_user):
        register = reports.payroll_register(employee_user)
        assert [line.employee_id for line in register.lines] == [3]

    def test_other_period(self, reports, admin):
        register = reports.payroll_register(admin, "2024-07-03")
        assert register.period.identifier == "2024-07-Q1"
        assert register.lines[1].net_pay == Decimal("17500.00")

    def test_paid_and_signed_flags(self, reports, payroll, admin, employee_user):
        payroll.pay_employee(admin, 3)
        payroll.sign_payslip(employee_user, 3, "Sofía Martínez Hernández")
        register = reports.payroll_register(admin)
        line = register.lines[2]
        assert line.paid and line.signed
        assert not register.lines[0].paid
        assert register.period.status is PeriodStatus.IN_PROGRESS


class TestDashboard:

    def test_admin_summary(self, reports, payroll, admin):
        payroll.pay_employee(admin, 1)
        summary = reports.dashboard_summary(admin)
        assert summary.active_headcount == 5
        assert summary.archived_headcount == 1
        assert summary.paid_count == 1
        assert summary.pending_count == 4
        assert summary.incident_count == 3
        assert summary.total_net == Decimal("77887.50")

    def test_manager_summary(self, reports, manager):
        summary = reports.dashboard_summary(manager)
        assert summary.active_headcount == 3
        assert summary.archived_headcount == 0
        assert summary.incident_count == 2


class TestBranchReports:

    def test_headcount(self, reports, admin):
        assert reports.headcount_by_branch(admin) == {1: 2, 2: 2, 3: 1}

    def test_cost_by_branch_for_manager(self, reports, manager):
        costs = reports.cost_by_branch(manager)
        assert [(c.branch_code, c.headcount) for c in costs] == [("MTY-NORTE", 2), ("GDL-OCC", 1)]
        assert costs[0].monthly_gross == Decimal("70000")
        assert costs[0].period_net == Decimal("26625.00")
        assert costs[1].period_net == Decimal("19500.00")
