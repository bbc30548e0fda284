"""
Employee Domain Models (``nomina_modules.employees.models``).

Responsibility
--------------
Frozen dataclass value objects for the people on the payroll and the
branches they belong to.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.

Invariants enforced
-------------------
* All models are ``frozen=True``.
* ``gross_salary`` is a non-negative ``Decimal`` (monthly).
* ``daily_salary`` is derived from ``gross_salary`` on every read and is
  never stored, so the two can never disagree.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from nomina_kernel.domain.amounts import quantize_cents, to_decimal
from nomina_kernel.exceptions import InvalidAmountError, InvalidInputError

DAILY_SALARY_DIVISOR = 30


class EmployeeStatus(Enum):
    """Employee lifecycle states."""
    ACTIVE = "Activo"
    ARCHIVED = "Archivado"


@dataclass(frozen=True)
class Branch:
    """A company location employees are assigned to."""
    id: int
    name: str
    code: str


def daily_salary_for(gross_salary: Decimal, divisor: int = DAILY_SALARY_DIVISOR) -> Decimal:
    """Monthly gross over the fixed day divisor, in cents."""
    return quantize_cents(gross_salary / Decimal(divisor))


@dataclass(frozen=True)
class Employee:
    """An employee on the payroll."""
    id: int
    external_id: str
    name: str
    email: str
    rfc: str
    curp: str
    nss: str
    clabe: str
    branch_id: int
    position: str
    rank: str
    gross_salary: Decimal
    hire_date: date
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    avatar_url: str | None = None

    def __post_init__(self):
        gross = to_decimal(self.gross_salary, "gross_salary")
        if gross < 0:
            raise InvalidAmountError("gross_salary", self.gross_salary, "cannot be negative")
        object.__setattr__(self, "gross_salary", gross)

        if not self.name or not self.name.strip():
            raise InvalidInputError("name", self.name, "required")

        if isinstance(self.hire_date, str):
            try:
                object.__setattr__(self, "hire_date", date.fromisoformat(self.hire_date))
            except ValueError:
                raise InvalidInputError("hire_date", self.hire_date, "expected YYYY-MM-DD") from None

        if not isinstance(self.status, EmployeeStatus):
            try:
                object.__setattr__(self, "status", EmployeeStatus(self.status))
            except ValueError:
                raise InvalidInputError("status", self.status, "unknown status") from None

    @property
    def daily_salary(self) -> Decimal:
        return daily_salary_for(self.gross_salary)

    @property
    def is_active(self) -> bool:
        return self.status is EmployeeStatus.ACTIVE
