"""
Employee Helpers (``nomina_modules.employees.helpers``).

Pure list filters used by the employee listing: free-text search over
name and position, status filtering, and active-only selection.
"""

from __future__ import annotations

from collections.abc import Iterable

from nomina_modules.employees.models import Employee, EmployeeStatus


def matches_search(employee: Employee, term: str | None) -> bool:
    """Case-insensitive substring match on name or position; empty matches all."""
    if not term or not term.strip():
        return True
    needle = term.strip().casefold()
    return needle in employee.name.casefold() or needle in employee.position.casefold()


def filter_employees(
    employees: Iterable[Employee],
    search: str | None = None,
    status: EmployeeStatus | str | None = None,
) -> list[Employee]:
    if status is not None and not isinstance(status, EmployeeStatus):
        status = EmployeeStatus(status)
    return [
        e for e in employees
        if matches_search(e, search) and (status is None or e.status is status)
    ]


def active_only(employees: Iterable[Employee]) -> list[Employee]:
    return [e for e in employees if e.is_active]
