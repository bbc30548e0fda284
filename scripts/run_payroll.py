#!/usr/bin/env python3
"""
Payroll register from the command line.

Loads the seed data (optionally into a SQL database), resolves the period
of ``--date`` and prints the register visible to ``--user`` as JSON.
``--pay-all`` marks every target paid; ``--close`` then closes the period.

Usage:
    python3 -m scripts.run_payroll --date 2024-07-20 --user manager
    python3 -m scripts.run_payroll --date 2024-07-20 --pay-all --close
"""

import argparse
import json
import sys
from dataclasses import asdict
from datetime import datetime, time
from decimal import Decimal
from enum import Enum
from pathlib import Path

from nomina_config import get_active_config
from nomina_config.bridges import payroll_config_from
from nomina_kernel.db.engine import get_session, init_engine_from_url
from nomina_kernel.domain.clock import SimulatedClock
from nomina_kernel.domain.periods import civil_timezone, to_civil_date
from nomina_kernel.exceptions import NominaError
from nomina_kernel.logging_config import configure_logging, get_logger
from nomina_modules._orm_registry import create_all_tables
from nomina_modules.payroll.service import PayrollService
from nomina_modules.reports.service import ReportService
from nomina_modules.stores import build_sql_store, copy_store
from scripts.seed_data import SEED_REFERENCE, USERS, build_seed_store

logger = get_logger("scripts.run_payroll")


def _json_default(value):
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    if hasattr(value, "isoformat"):
        return value.isoformat()
    raise TypeError(f"Not JSON serializable: {type(value).__name__}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Print the payroll register of one period as JSON.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--date", type=str, default=None,
        help="Reference date (YYYY-MM-DD); defaults to the seed date 2024-07-20",
    )
    parser.add_argument(
        "--user", choices=sorted(USERS), default="admin",
        help="Acting demo user (default: admin)",
    )
    parser.add_argument(
        "--db-url", type=str, default=None,
        help="Load the seed data into this database instead of memory",
    )
    parser.add_argument(
        "--config", type=Path, default=None,
        help="Configuration YAML (default: nomina_config/sets/default.yaml)",
    )
    parser.add_argument(
        "--pay-all", action="store_true",
        help="Mark every visible target paid before printing",
    )
    parser.add_argument(
        "--close", action="store_true",
        help="Close the period after printing the register",
    )
    parser.add_argument(
        "--log-level", type=str, default="WARNING",
        help="Log level for the JSON log stream on stderr",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level.upper(), stream=sys.stderr)

    cfg = get_active_config(args.config)
    payroll_config = payroll_config_from(cfg)
    tz = civil_timezone(payroll_config.civil_utc_offset_hours)

    try:
        reference = to_civil_date(args.date, tz) if args.date else None
    except NominaError as exc:
        print(f"  ERROR: {exc}", file=sys.stderr)
        return 2

    store = build_seed_store()
    if args.db_url:
        init_engine_from_url(args.db_url)
        create_all_tables()
        store = copy_store(store, build_sql_store(get_session()))

    start = reference or SEED_REFERENCE.date()
    clock = SimulatedClock(datetime.combine(start, time(12, 0), tzinfo=tz))

    payroll = PayrollService(store, clock, payroll_config)
    reports = ReportService(store, payroll)
    user = USERS[args.user]

    try:
        if args.pay_all:
            for employee in payroll.payroll_targets(user):
                payroll.pay_employee(user, employee.id)
        register = reports.payroll_register(user)
        output = {"register": asdict(register)}
        if args.close:
            closed = payroll.close_period(user)
            output["closed"] = {
                "period_id": closed.run.period_id,
                "total_net": closed.run.total_net,
                "next_period_id": closed.next_period_id,
            }
    except NominaError as exc:
        logger.error("run_payroll_failed", extra={"error_code": exc.code})
        print(f"  ERROR: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(output, default=_json_default, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
