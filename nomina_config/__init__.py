"""
nomina_config -- single public entrypoint for payroll configuration.

Responsibility:
    ``get_active_config()`` is the only way runtime code obtains policy
    values.  Services receive the translated values through constructor
    injection (see ``nomina_config.bridges``).

Architecture position:
    Sits above ``nomina_kernel`` and ``nomina_modules``.  Neither of them
    imports this package.

Failure modes:
    - ``FileNotFoundError`` -- the configuration file does not exist.
    - ``KeyError`` -- a required key is missing.
    - ``ValueError`` -- a value is out of range.
"""

from __future__ import annotations

from pathlib import Path

from nomina_config.loader import load_configuration_set
from nomina_config.schema import NominaConfigurationSet
from nomina_kernel.logging_config import get_logger

_logger = get_logger("config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "sets" / "default.yaml"


def get_active_config(config_path: Path | None = None) -> NominaConfigurationSet:
    """
    Load, validate and trace the active configuration set.

    Every successful call logs ``nomina_config_loaded`` with the file
    checksum so a payroll run can be tied to the exact policy values that
    produced it.  Nothing is cached.
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    cfg = load_configuration_set(path)
    _logger.info(
        "nomina_config_loaded",
        extra={
            "config_id": cfg.config_id,
            "config_version": cfg.version,
            "checksum": cfg.checksum,
            "isr_rate": str(cfg.payroll.isr_rate),
            "imss_rate": str(cfg.payroll.imss_rate),
            "role_count": len(cfg.page_access),
        },
    )
    return cfg


__all__ = ["DEFAULT_CONFIG_PATH", "NominaConfigurationSet", "get_active_config"]
