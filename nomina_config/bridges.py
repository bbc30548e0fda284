"""
Config -> service bridges.

Translate a ``NominaConfigurationSet`` into the inputs services and the
access filter take.  They live here because neither the kernel nor the
modules read configuration files.

Usage:
    from nomina_config.bridges import payroll_config_from, page_access_from

    cfg = get_active_config()
    payroll = PayrollService(store, clock, payroll_config_from(cfg))
"""

from __future__ import annotations

from typing import Any

from nomina_config.schema import NominaConfigurationSet
from nomina_kernel.domain.access import Page, Role
from nomina_kernel.domain.periods import FIRST_HALF_LAST_DAY
from nomina_modules.payroll.config import PayrollConfig, WithholdingPolicy


def payroll_config_from(cfg: NominaConfigurationSet) -> PayrollConfig:
    """
    Raises:
        ValueError: if the set asks for a different half-month split than
            the period resolver implements.
    """
    policy = cfg.payroll
    if policy.first_half_last_day != FIRST_HALF_LAST_DAY:
        raise ValueError(
            f"first_half_last_day {policy.first_half_last_day} is not supported; "
            f"periods split after day {FIRST_HALF_LAST_DAY}"
        )
    return PayrollConfig(
        withholding=WithholdingPolicy(
            isr_rate=policy.isr_rate,
            imss_rate=policy.imss_rate,
        ),
        daily_salary_divisor=policy.daily_salary_divisor,
        civil_utc_offset_hours=policy.civil_utc_offset_hours,
    )


def page_access_from(cfg: NominaConfigurationSet) -> dict[Role, frozenset[Page]]:
    """Role -> pages map for ``can_access_page``; unknown names raise ValueError."""
    access: dict[Role, frozenset[Page]] = {role: frozenset() for role in Role}
    for entry in cfg.page_access:
        access[Role(entry.role)] = frozenset(Page(p) for p in entry.pages)
    return access


def pagination_settings_from(cfg: NominaConfigurationSet) -> dict[str, Any]:
    """Keyword arguments for ``EmployeeService``."""
    return {
        "default_page_size": cfg.pagination.default_page_size,
        "max_page_size": cfg.pagination.max_page_size,
    }
