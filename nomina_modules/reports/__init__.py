"""
Reports Module (``nomina_modules.reports``).

Payroll register, dashboard summary and per-branch cost and headcount.
"""

from nomina_modules.reports.models import (
    BranchCost,
    DashboardSummary,
    PayrollRegister,
    PayrollRegisterLine,
)

__all__ = [
    "BranchCost",
    "DashboardSummary",
    "PayrollRegister",
    "PayrollRegisterLine",
]
