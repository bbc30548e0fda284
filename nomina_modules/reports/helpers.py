"""
Report Helpers (``nomina_modules.reports.helpers``).

Pure builders turning calculator results into report rows.
"""

from __future__ import annotations

from collections.abc import Iterable

from nomina_kernel.domain.amounts import sum_amounts
from nomina_modules.employees.models import Employee
from nomina_modules.payroll.models import PayrollResult, PayrollRun
from nomina_modules.reports.models import PayrollRegisterLine


def register_line(
    employee: Employee,
    result: PayrollResult,
    run: PayrollRun,
) -> PayrollRegisterLine:
    return PayrollRegisterLine(
        employee_id=employee.id,
        external_id=employee.external_id,
        employee_name=employee.name,
        branch_id=employee.branch_id,
        base_salary=result.base_salary,
        total_earnings=result.total_earnings,
        isr_deduction=result.isr_deduction,
        imss_deduction=result.imss_deduction,
        other_deductions=abs(sum_amounts(i.amount for i in result.other_deductions)),
        total_deductions=result.total_deductions,
        net_pay=result.net_pay,
        paid=employee.id in run.paid_employee_ids,
        signed=employee.id in run.signed_employee_ids,
    )


def count_by_branch(employees: Iterable[Employee]) -> dict[int, int]:
    counts: dict[int, int] = {}
    for e in employees:
        counts[e.branch_id] = counts.get(e.branch_id, 0) + 1
    return counts
