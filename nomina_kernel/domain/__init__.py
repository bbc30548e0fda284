"""
Pure domain layer.

This module contains pure value objects and domain logic with NO
dependencies on:
- ORM (SQLAlchemy)
- Database
- Wall-clock time (the clock is injected)
- I/O

All domain objects are immutable and deterministic.
"""

from nomina_kernel.domain.access import (
    DEFAULT_PAGE_ACCESS,
    Page,
    Role,
    User,
    can_access_page,
    filter_visible,
    is_visible,
    require_role,
    resolve_selection,
    visible_pages,
)
from nomina_kernel.domain.amounts import quantize_cents, sum_amounts, to_decimal
from nomina_kernel.domain.clock import (
    Clock,
    DeterministicClock,
    SimulatedClock,
    SystemClock,
)
from nomina_kernel.domain.periods import (
    CIVIL_TZ,
    PeriodInfo,
    PeriodStatus,
    advance_to_next_period,
    parse_period_identifier,
    period_identifier,
    resolve_period,
)
from nomina_kernel.domain.workflow import Guard, Transition, Workflow

__all__ = [
    "CIVIL_TZ",
    "Clock",
    "DEFAULT_PAGE_ACCESS",
    "DeterministicClock",
    "Guard",
    "Page",
    "PeriodInfo",
    "PeriodStatus",
    "Role",
    "SimulatedClock",
    "SystemClock",
    "Transition",
    "User",
    "Workflow",
    "advance_to_next_period",
    "can_access_page",
    "filter_visible",
    "is_visible",
    "parse_period_identifier",
    "period_identifier",
    "quantize_cents",
    "require_role",
    "resolve_period",
    "resolve_selection",
    "sum_amounts",
    "to_decimal",
    "visible_pages",
]
