"""
Shared service plumbing (``nomina_modules._service_helpers``).

Every module service binds the acting user into the log context and looks
employees up through the access scope filter the same way; the helpers
live here so that no service can skip the filter.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any

from nomina_kernel.domain.access import User, resolve_selection
from nomina_kernel.exceptions import EmployeeNotEligibleError, EmployeeNotFoundError
from nomina_kernel.logging_config import LogContext
from nomina_kernel.store import PayrollStore


@contextmanager
def acting_as(user: User, **fields: Any):
    """Bind ``user`` (and any extra context fields) to log records."""
    with LogContext.bind(actor_id=user.id, actor_role=user.role.value, **fields):
        yield


def visible_employee(store: PayrollStore, user: User, employee_id: int):
    """
    The employee ``user`` selected.

    Raises:
        EmployeeNotFoundError: if it does not exist or is out of scope.
    """
    employee = resolve_selection(user, store.employees.list(), employee_id)
    if employee is None:
        raise EmployeeNotFoundError(employee_id)
    return employee


def require_eligible(employee, operation: str) -> None:
    """Archived employees are readable but never targets of new work."""
    if not employee.is_active:
        raise EmployeeNotEligibleError(employee.id, operation)
