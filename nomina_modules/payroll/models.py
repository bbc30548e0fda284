"""
Payroll Domain Models (``nomina_modules.payroll.models``).

Responsibility
--------------
Frozen dataclass value objects for the nouns of a payroll period:
incidents, the calculation result, payroll runs and their progress.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.

Invariants enforced
-------------------
* All models are ``frozen=True``.
* All monetary fields use ``Decimal`` -- NEVER ``float``.
* Incident amounts are signed: positive earnings, negative deductions,
  never zero.
* ``Incident.period`` is always a well-formed ``YYYY-MM-Q{1|2}`` key.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from nomina_kernel.domain.amounts import ZERO, to_decimal
from nomina_kernel.domain.periods import PeriodStatus, parse_period_identifier
from nomina_kernel.exceptions import InvalidIncidentError


class IncidentType(Enum):
    """Kinds of one-off payroll adjustments."""
    BONUS = "Bono"
    OVERTIME = "Horas Extra"
    DEDUCTION = "Deducción"
    ADVANCE = "Anticipo"
    HOLIDAY = "Festivo"
    ABSENCE = "Falta (Deducción)"


@dataclass(frozen=True)
class Incident:
    """A signed adjustment to one employee's pay in one period."""
    id: int
    employee_id: int
    period: str
    type: IncidentType
    amount: Decimal
    comment: str = ""

    def __post_init__(self):
        parse_period_identifier(self.period)
        if not isinstance(self.type, IncidentType):
            try:
                object.__setattr__(self, "type", IncidentType(self.type))
            except ValueError:
                raise InvalidIncidentError(
                    f"unknown incident type {self.type!r}", self.employee_id
                ) from None
        amount = to_decimal(self.amount)
        if amount == 0:
            raise InvalidIncidentError("amount cannot be zero", self.employee_id)
        object.__setattr__(self, "amount", amount)

    @property
    def is_earning(self) -> bool:
        return self.amount > 0

    @property
    def is_deduction(self) -> bool:
        return self.amount < 0


@dataclass(frozen=True)
class PayrollResult:
    """
    Gross-to-net for one employee in one period.

    Guarantees:
        - ``total_earnings == base_salary + sum(earnings)``
        - ``total_deductions == isr + imss + |sum(other_deductions)|``
        - ``net_pay == total_earnings - total_deductions``

    Rounding: ``base_salary``, ``isr_deduction`` and ``imss_deduction`` are
    quantized to cents with ROUND_HALF_UP (as is the daily salary behind an
    absence); the totals are exact sums of those figures and the incidents.
    """
    employee_id: int
    period_id: str
    base_salary: Decimal
    earnings: tuple[Incident, ...]
    total_earnings: Decimal
    isr_deduction: Decimal
    imss_deduction: Decimal
    other_deductions: tuple[Incident, ...]
    total_deductions: Decimal
    net_pay: Decimal

    @property
    def is_negative(self) -> bool:
        return self.net_pay < 0


@dataclass(frozen=True)
class PayrollRun:
    """
    Processing state of one payroll period.

    ``paid_employee_ids`` and ``signed_employee_ids`` grow while the run is
    open; the totals are written once, when the run is closed.
    """
    id: int
    period_id: str
    status: PeriodStatus = PeriodStatus.OPEN
    paid_employee_ids: frozenset[int] = field(default_factory=frozenset)
    signed_employee_ids: frozenset[int] = field(default_factory=frozenset)
    total_gross: Decimal = ZERO
    total_deductions: Decimal = ZERO
    total_net: Decimal = ZERO
    employee_count: int = 0
    closed_at: datetime | None = None

    def __post_init__(self):
        parse_period_identifier(self.period_id)
        if not isinstance(self.status, PeriodStatus):
            object.__setattr__(self, "status", PeriodStatus(self.status))
        for name in ("paid_employee_ids", "signed_employee_ids"):
            value = getattr(self, name)
            if not isinstance(value, frozenset):
                object.__setattr__(self, name, frozenset(value))

    @property
    def is_closed(self) -> bool:
        return self.status is PeriodStatus.CLOSED


@dataclass(frozen=True)
class PayrollProgress:
    """How far the current run has got through its targets."""
    period_id: str
    status: PeriodStatus
    total_count: int
    paid_count: int
    pending_employee_ids: tuple[int, ...]
    percent_complete: Decimal

    @property
    def is_complete(self) -> bool:
        return self.total_count > 0 and self.paid_count == self.total_count


@dataclass(frozen=True)
class PeriodCloseResult:
    """Outcome of closing a period: the closed run and the next reference time."""
    run: PayrollRun
    next_period_id: str
    next_reference: datetime
