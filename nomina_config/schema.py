"""
NominaConfigurationSet schema.

The reviewable source artifact for payroll policy.  YAML is parsed into
these frozen types by the loader; bridges translate them into the
constructor arguments of the services.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

# ---------------------------------------------------------------------------
# Payroll policy
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PayrollPolicyDef:
    """Withholding rates and calendar constants."""

    isr_rate: Decimal
    imss_rate: Decimal
    daily_salary_divisor: int
    civil_utc_offset_hours: int
    first_half_last_day: int = 15


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PaginationDef:
    default_page_size: int
    max_page_size: int
    page_size_options: tuple[int, ...] = ()


# ---------------------------------------------------------------------------
# Access
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PageAccessDef:
    """Pages one role may open (raw role and page values)."""

    role: str
    pages: tuple[str, ...]


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NominaConfigurationSet:
    """A complete, versioned configuration set."""

    config_id: str
    version: int
    payroll: PayrollPolicyDef
    pagination: PaginationDef
    page_access: tuple[PageAccessDef, ...]
    checksum: str = ""
