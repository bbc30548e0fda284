"""
Bonus Helpers (``nomina_modules.bonuses.helpers``).

Pure amount calculation for bonus templates.  No I/O.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal

from nomina_kernel.domain.amounts import quantize_cents, sum_amounts
from nomina_modules.bonuses.models import (
    BonusAssignmentSummary,
    BonusCalculationType,
    BonusTemplate,
)
from nomina_modules.employees.models import Employee


def calculate_bonus_amount(employee: Employee, template: BonusTemplate) -> Decimal:
    """
    Fixed templates pay their value; percentage templates pay
    ``gross_salary * value / 100``, rounded to cents.
    """
    if template.calculation_type is BonusCalculationType.FIXED:
        return quantize_cents(template.value)
    return quantize_cents(employee.gross_salary * template.value / 100)


def propose_amounts(
    employees: Iterable[Employee],
    template: BonusTemplate,
) -> dict[int, Decimal]:
    return {e.id: calculate_bonus_amount(e, template) for e in employees}


def summarize_assignment(
    template: BonusTemplate,
    amounts: Mapping[int, Decimal],
) -> BonusAssignmentSummary:
    return BonusAssignmentSummary(
        template_name=template.name,
        count=len(amounts),
        total_amount=sum_amounts(amounts.values()),
    )
