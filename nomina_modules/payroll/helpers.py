"""
Payroll Helpers (``nomina_modules.payroll.helpers``).

Responsibility
--------------
Pure calculation functions: the semi-monthly gross-to-net calculator,
absence amounts, run totals and payslip signature matching.

Architecture position
---------------------
**Modules layer** -- pure helper functions.  No I/O, no store, no clock.
Called by ``PayrollService``, the reports module, or from tests.

Invariants enforced
-------------------
* All numeric inputs and outputs use ``Decimal`` -- NEVER ``float``.
* ISR and IMSS are quantized to cents (half-up) before any total is formed,
  so the published totals add up exactly.
* The calculator never mutates its inputs and never reads the clock.

Failure modes
-------------
* Unparseable reference date -> ``InvalidReferenceDateError``.
* Negative net pay is returned as-is; ``PayrollResult.is_negative`` flags it.
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable
from decimal import Decimal

from nomina_kernel.domain.amounts import ZERO, quantize_cents, sum_amounts
from nomina_kernel.domain.periods import CIVIL_TZ, period_identifier
from nomina_modules.employees.models import DAILY_SALARY_DIVISOR, Employee, daily_salary_for
from nomina_modules.payroll.config import WithholdingPolicy
from nomina_modules.payroll.models import Incident, IncidentType, PayrollResult

DEFAULT_POLICY = WithholdingPolicy()


def calculate_payroll(
    employee: Employee,
    incidents: Iterable[Incident],
    reference_date: object,
    policy: WithholdingPolicy = DEFAULT_POLICY,
    tz=CIVIL_TZ,
) -> PayrollResult:
    """
    Semi-monthly gross-to-net for ``employee`` in the period of ``reference_date``.

    Only incidents of this employee tagged with this period count.  The base
    is half the monthly gross; positive incidents are earnings, negative ones
    other deductions; ISR and IMSS are flat rates on total earnings.

    Example (gross 48000, one +2500 bonus)::

        base 24000.00, earnings 26500.00, ISR 5300.00, IMSS 1325.00,
        deductions 6625.00, net 19875.00
    """
    period_id = period_identifier(reference_date, tz)
    relevant = [
        i for i in incidents
        if i.employee_id == employee.id and i.period == period_id
    ]

    base_salary = quantize_cents(employee.gross_salary / 2)
    earnings = tuple(i for i in relevant if i.amount > 0)
    other_deductions = tuple(i for i in relevant if i.amount < 0)

    total_earnings = base_salary + sum_amounts(i.amount for i in earnings)
    isr = quantize_cents(total_earnings * policy.isr_rate)
    imss = quantize_cents(total_earnings * policy.imss_rate)
    other_total = abs(sum_amounts(i.amount for i in other_deductions))
    total_deductions = isr + imss + other_total

    return PayrollResult(
        employee_id=employee.id,
        period_id=period_id,
        base_salary=base_salary,
        earnings=earnings,
        total_earnings=total_earnings,
        isr_deduction=isr,
        imss_deduction=imss,
        other_deductions=other_deductions,
        total_deductions=total_deductions,
        net_pay=total_earnings - total_deductions,
    )


def absence_amount(employee: Employee, divisor: int = DAILY_SALARY_DIVISOR) -> Decimal:
    """One day of pay, as a deduction."""
    return -daily_salary_for(employee.gross_salary, divisor)


def run_totals(results: Iterable[PayrollResult]) -> tuple[Decimal, Decimal, Decimal, int]:
    """``(total_gross, total_deductions, total_net, count)`` across results."""
    gross = deductions = net = ZERO
    count = 0
    for r in results:
        gross += r.total_earnings
        deductions += r.total_deductions
        net += r.net_pay
        count += 1
    return gross, deductions, net, count


def normalize_signature(text: str) -> str:
    """Strip accents, surrounding whitespace and case: ``" Sofía "`` -> ``"sofia"``."""
    decomposed = unicodedata.normalize("NFD", text)
    bare = "".join(c for c in decomposed if not unicodedata.combining(c))
    return bare.strip().casefold()


def signature_matches(signature: str, employee_name: str) -> bool:
    return normalize_signature(signature) == normalize_signature(employee_name)


_EARNING_TYPES = frozenset({IncidentType.BONUS, IncidentType.OVERTIME, IncidentType.HOLIDAY})


def sign_is_valid(incident_type: IncidentType, amount: Decimal) -> bool:
    """Earnings are positive; deductions, advances and absences negative."""
    if amount == 0:
        return False
    if incident_type in _EARNING_TYPES:
        return amount > 0
    return amount < 0
