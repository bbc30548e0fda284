"""
Payroll Module (``nomina_modules.payroll``).

Responsibility
--------------
Semi-monthly payroll: incidents, the gross-to-net calculator with flat
simulated ISR/IMSS withholdings, payroll run progress, payslip signatures
and period close.

Architecture position
---------------------
**Modules layer** -- config schema, pure helpers, workflow and a service
facade over the kernel store.
"""

from nomina_modules.payroll.config import PayrollConfig, WithholdingPolicy
from nomina_modules.payroll.helpers import calculate_payroll
from nomina_modules.payroll.models import (
    Incident,
    IncidentType,
    PayrollProgress,
    PayrollResult,
    PayrollRun,
    PeriodCloseResult,
)
from nomina_modules.payroll.workflows import PAYROLL_PERIOD_WORKFLOW

__all__ = [
    "Incident",
    "IncidentType",
    "PAYROLL_PERIOD_WORKFLOW",
    "PayrollConfig",
    "PayrollProgress",
    "PayrollResult",
    "PayrollRun",
    "PeriodCloseResult",
    "WithholdingPolicy",
    "calculate_payroll",
]
