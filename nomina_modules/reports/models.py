"""
Report Models (``nomina_modules.reports.models``).

Frozen read models handed to rendering and export collaborators.  Every
figure is already computed; nothing here formats currency.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from nomina_kernel.domain.periods import PeriodInfo


@dataclass(frozen=True)
class PayrollRegisterLine:
    employee_id: int
    external_id: str
    employee_name: str
    branch_id: int
    base_salary: Decimal
    total_earnings: Decimal
    isr_deduction: Decimal
    imss_deduction: Decimal
    other_deductions: Decimal
    total_deductions: Decimal
    net_pay: Decimal
    paid: bool
    signed: bool


@dataclass(frozen=True)
class PayrollRegister:
    """One line per payroll target for one period, plus column totals."""
    period: PeriodInfo
    lines: tuple[PayrollRegisterLine, ...]
    total_earnings: Decimal
    total_deductions: Decimal
    total_net: Decimal


@dataclass(frozen=True)
class DashboardSummary:
    period: PeriodInfo
    active_headcount: int
    archived_headcount: int
    paid_count: int
    pending_count: int
    incident_count: int
    total_net: Decimal


@dataclass(frozen=True)
class BranchCost:
    """Payroll cost of one branch: monthly gross and this period's net."""
    branch_id: int
    branch_code: str
    branch_name: str
    headcount: int
    monthly_gross: Decimal
    period_net: Decimal
