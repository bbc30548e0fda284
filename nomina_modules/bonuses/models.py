"""
Bonus Domain Models (``nomina_modules.bonuses.models``).

Frozen value objects for reusable bonus templates and the per-employee
amounts proposed from them.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from nomina_kernel.domain.amounts import to_decimal
from nomina_kernel.exceptions import InvalidBonusTemplateError


class BonusCalculationType(Enum):
    """How a template turns into an amount."""
    FIXED = "Monto Fijo"
    PERCENTAGE = "Porcentaje de Salario"


@dataclass(frozen=True)
class BonusTemplate:
    """
    A named bonus rule.

    ``value`` is pesos for FIXED and a percentage of monthly gross salary
    (``10`` means 10%) for PERCENTAGE.
    """
    id: int
    name: str
    calculation_type: BonusCalculationType
    value: Decimal
    description: str = ""

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise InvalidBonusTemplateError("name is required")
        if not isinstance(self.calculation_type, BonusCalculationType):
            try:
                object.__setattr__(
                    self, "calculation_type", BonusCalculationType(self.calculation_type)
                )
            except ValueError:
                raise InvalidBonusTemplateError(
                    f"unknown calculation type {self.calculation_type!r}"
                ) from None
        value = to_decimal(self.value, "value")
        if value <= 0:
            raise InvalidBonusTemplateError("value must be positive")
        object.__setattr__(self, "value", value)


@dataclass(frozen=True)
class BonusAssignmentSummary:
    """What an assignment will add to the period before it is confirmed."""
    template_name: str
    count: int
    total_amount: Decimal
