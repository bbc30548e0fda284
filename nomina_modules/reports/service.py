"""
Report Module Service (``nomina_modules.reports.service``).

Responsibility
--------------
Read-only views over the current snapshot: the payroll register, the
dashboard summary, cost and headcount per branch.

Invariants enforced
-------------------
* Every figure comes from the payroll calculator; reports never recompute
  withholdings themselves.
* Every view is restricted to the employees the caller may see.
"""

from __future__ import annotations

from dataclasses import replace

from nomina_kernel.domain.access import User, filter_visible
from nomina_kernel.domain.amounts import sum_amounts
from nomina_kernel.domain.periods import resolve_period
from nomina_kernel.logging_config import get_logger
from nomina_kernel.store import PayrollStore
from nomina_modules.employees.helpers import active_only
from nomina_modules.payroll.helpers import calculate_payroll
from nomina_modules.payroll.service import PayrollService
from nomina_modules.reports.helpers import count_by_branch, register_line
from nomina_modules.reports.models import (
    BranchCost,
    DashboardSummary,
    PayrollRegister,
)

logger = get_logger("modules.reports.service")


class ReportService:
    """Scoped payroll and headcount reports."""

    def __init__(self, store: PayrollStore, payroll: PayrollService):
        self._store = store
        self._payroll = payroll

    def payroll_register(self, user: User, reference_date: object = None) -> PayrollRegister:
        """
        Register for the period of ``reference_date`` (default: the clock).

        Lines follow employee id order.
        """
        reference = reference_date if reference_date is not None else self._payroll.clock.now()
        period = resolve_period(reference, self._payroll.tz)
        run = self._payroll.run_for(period.identifier)
        incidents = self._store.incidents.list()
        lines = []
        for employee in self._payroll.payroll_targets(user):
            result = calculate_payroll(
                employee, incidents, reference, self._payroll.config.withholding, self._payroll.tz
            )
            lines.append(register_line(employee, result, run))

        register = PayrollRegister(
            period=replace(period, status=run.status),
            lines=tuple(lines),
            total_earnings=sum_amounts(line.total_earnings for line in lines),
            total_deductions=sum_amounts(line.total_deductions for line in lines),
            total_net=sum_amounts(line.net_pay for line in lines),
        )
        logger.info("payroll_register_built", extra={
            "period_id": period.identifier,
            "lines": len(lines),
            "total_net": str(register.total_net),
        })
        return register

    def dashboard_summary(self, user: User) -> DashboardSummary:
        visible = filter_visible(user, self._store.employees.list())
        register = self.payroll_register(user)
        visible_ids = {e.id for e in visible}
        incident_count = sum(
            1 for i in self._store.incidents.list()
            if i.employee_id in visible_ids and i.period == register.period.identifier
        )
        paid = sum(1 for line in register.lines if line.paid)
        return DashboardSummary(
            period=register.period,
            active_headcount=len(register.lines),
            archived_headcount=len(visible) - len(register.lines),
            paid_count=paid,
            pending_count=len(register.lines) - paid,
            incident_count=incident_count,
            total_net=register.total_net,
        )

    def headcount_by_branch(self, user: User) -> dict[int, int]:
        """Active visible employees per branch id."""
        return count_by_branch(active_only(filter_visible(user, self._store.employees.list())))

    def cost_by_branch(self, user: User) -> list[BranchCost]:
        """Branches with at least one active visible employee, in branch id order."""
        register = self.payroll_register(user)
        targets = {e.id: e for e in self._payroll.payroll_targets(user)}
        costs = []
        for branch in self._store.branches.list():
            lines = [line for line in register.lines if line.branch_id == branch.id]
            if not lines:
                continue
            costs.append(BranchCost(
                branch_id=branch.id,
                branch_code=branch.code,
                branch_name=branch.name,
                headcount=len(lines),
                monthly_gross=sum_amounts(targets[line.employee_id].gross_salary for line in lines),
                period_net=sum_amounts(line.net_pay for line in lines),
            ))
        return costs
