"""
Employees Module (``nomina_modules.employees``).

Employee and branch records, the Active -> Archived lifecycle, and the
``EmployeeService`` facade for scoped reads and admin mutations.
"""

from nomina_modules.employees.models import (
    DAILY_SALARY_DIVISOR,
    Branch,
    Employee,
    EmployeeStatus,
    daily_salary_for,
)
from nomina_modules.employees.workflows import EMPLOYEE_LIFECYCLE_WORKFLOW

__all__ = [
    "DAILY_SALARY_DIVISOR",
    "Branch",
    "Employee",
    "EmployeeStatus",
    "EMPLOYEE_LIFECYCLE_WORKFLOW",
    "daily_salary_for",
]
