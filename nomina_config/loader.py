"""
Configuration Loader (``nomina_config.loader``).

Responsibility
--------------
Loads a YAML configuration set and parses it into the frozen types of
``nomina_config.schema``.  Runtime callers go through
``nomina_config.get_active_config()`` instead.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError``.
* Out-of-range values  -> ``ValueError``.
"""

from __future__ import annotations

import hashlib
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from nomina_config.schema import (
    NominaConfigurationSet,
    PageAccessDef,
    PaginationDef,
    PayrollPolicyDef,
)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def compute_checksum(path: Path) -> str:
    """SHA-256 of the raw file bytes."""
    return hashlib.sha256(Path(path).read_bytes()).hexdigest()


def parse_rate(value: Any, name: str) -> Decimal:
    """A rate between 0 and 1; floats go through ``str`` to avoid binary noise."""
    try:
        rate = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"{name} is not a number: {value!r}") from None
    if not Decimal("0") <= rate <= Decimal("1"):
        raise ValueError(f"{name} must be between 0 and 1, got {rate}")
    return rate


def parse_payroll(data: dict[str, Any]) -> PayrollPolicyDef:
    withholding = data["withholding"]
    divisor = int(data["daily_salary_divisor"])
    if divisor <= 0:
        raise ValueError(f"daily_salary_divisor must be positive, got {divisor}")
    offset = int(data["civil_utc_offset_hours"])
    if not -12 <= offset <= 14:
        raise ValueError(f"civil_utc_offset_hours out of range: {offset}")
    first_half_last_day = int(data.get("first_half_last_day", 15))
    if not 1 <= first_half_last_day <= 27:
        raise ValueError(f"first_half_last_day out of range: {first_half_last_day}")
    return PayrollPolicyDef(
        isr_rate=parse_rate(withholding["isr_rate"], "isr_rate"),
        imss_rate=parse_rate(withholding["imss_rate"], "imss_rate"),
        daily_salary_divisor=divisor,
        civil_utc_offset_hours=offset,
        first_half_last_day=first_half_last_day,
    )


def parse_pagination(data: dict[str, Any]) -> PaginationDef:
    default_size = int(data["default_page_size"])
    max_size = int(data["max_page_size"])
    if not 1 <= default_size <= max_size:
        raise ValueError(
            f"default_page_size must be between 1 and max_page_size ({max_size})"
        )
    options = tuple(int(o) for o in data.get("page_size_options", ()))
    if any(not 1 <= o <= max_size for o in options):
        raise ValueError(f"page_size_options must be within 1..{max_size}")
    return PaginationDef(
        default_page_size=default_size,
        max_page_size=max_size,
        page_size_options=options,
    )


def parse_page_access(data: dict[str, Any]) -> tuple[PageAccessDef, ...]:
    return tuple(
        PageAccessDef(role=str(role), pages=tuple(str(p) for p in pages or ()))
        for role, pages in data.items()
    )


def parse_configuration_set(
    data: dict[str, Any],
    checksum: str = "",
) -> NominaConfigurationSet:
    """Parse a full configuration set from a dict."""
    return NominaConfigurationSet(
        config_id=data["config_id"],
        version=int(data.get("version", 1)),
        payroll=parse_payroll(data["payroll"]),
        pagination=parse_pagination(data["pagination"]),
        page_access=parse_page_access(data["page_access"]),
        checksum=checksum,
    )


def load_configuration_set(path: Path) -> NominaConfigurationSet:
    """Load and parse the YAML file at ``path``."""
    path = Path(path)
    return parse_configuration_set(load_yaml_file(path), compute_checksum(path))
