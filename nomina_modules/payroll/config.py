"""
Payroll Configuration Schema.

Defines the structure and defaults for payroll settings.  Actual values are
loaded from ``nomina_config`` at runtime (see ``nomina_config.bridges``).
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Self

from nomina_kernel.domain.amounts import to_decimal
from nomina_kernel.domain.periods import CIVIL_UTC_OFFSET_HOURS
from nomina_kernel.logging_config import get_logger
from nomina_modules.employees.models import DAILY_SALARY_DIVISOR

logger = get_logger("modules.payroll.config")


@dataclass(frozen=True)
class WithholdingPolicy:
    """
    Flat-rate simulated withholdings applied to total earnings.

    ``isr_rate`` stands in for income tax, ``imss_rate`` for social security.
    Neither is a real tariff table.
    """
    isr_rate: Decimal = Decimal("0.20")
    imss_rate: Decimal = Decimal("0.05")

    def __post_init__(self):
        for name in ("isr_rate", "imss_rate"):
            rate = to_decimal(getattr(self, name), name)
            if not Decimal("0") <= rate <= Decimal("1"):
                raise ValueError(f"{name} must be between 0 and 1, got {rate}")
            object.__setattr__(self, name, rate)


@dataclass(frozen=True)
class PayrollConfig:
    """
    Configuration schema for the payroll module.

    Field defaults are the simulated Mexican policy values:

        config = PayrollConfig(
            withholding=WithholdingPolicy(isr_rate=Decimal("0.20")),
            daily_salary_divisor=30,
        )
    """

    withholding: WithholdingPolicy = field(default_factory=WithholdingPolicy)
    daily_salary_divisor: int = DAILY_SALARY_DIVISOR
    civil_utc_offset_hours: int = CIVIL_UTC_OFFSET_HOURS

    def __post_init__(self):
        if self.daily_salary_divisor <= 0:
            raise ValueError("daily_salary_divisor must be positive")
        if not -12 <= self.civil_utc_offset_hours <= 14:
            raise ValueError(
                f"civil_utc_offset_hours out of range: {self.civil_utc_offset_hours}"
            )
        logger.debug(
            "payroll_config_initialized",
            extra={
                "isr_rate": str(self.withholding.isr_rate),
                "imss_rate": str(self.withholding.imss_rate),
                "daily_salary_divisor": self.daily_salary_divisor,
                "civil_utc_offset_hours": self.civil_utc_offset_hours,
            },
        )

    @classmethod
    def with_defaults(cls) -> Self:
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Build from a plain mapping (YAML section or API payload)."""
        withholding = data.get("withholding", {})
        return cls(
            withholding=WithholdingPolicy(
                isr_rate=to_decimal(withholding.get("isr_rate", "0.20"), "isr_rate"),
                imss_rate=to_decimal(withholding.get("imss_rate", "0.05"), "imss_rate"),
            ),
            daily_salary_divisor=int(data.get("daily_salary_divisor", DAILY_SALARY_DIVISOR)),
            civil_utc_offset_hours=int(
                data.get("civil_utc_offset_hours", CIVIL_UTC_OFFSET_HOURS)
            ),
        )
