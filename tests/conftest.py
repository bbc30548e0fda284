"""
Pytest fixtures for the nómina test suite.

Provides:
- Structured logging configured once per session, context cleared per test
- ``captured_logs`` for asserting on emitted events
- Seeded in-memory stores and a SQLite-backed store
- A simulated clock pinned to 2024-07-20 (period 2024-07-Q2)
- The three demo users
"""

import json
import logging
from datetime import datetime
from io import StringIO

import pytest

from nomina_kernel.db.engine import get_session, init_engine_from_url, reset_engine
from nomina_kernel.domain.clock import SimulatedClock
from nomina_kernel.domain.periods import CIVIL_TZ
from nomina_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from nomina_modules._orm_registry import create_all_tables
from nomina_modules.stores import build_memory_store, build_sql_store, copy_store
from scripts.seed_data import ADMIN, EMPLOYEE_USER, MANAGER, build_seed_store

SEED_NOW = datetime(2024, 7, 20, 12, 0, tzinfo=CIVIL_TZ)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture nomina_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, payroll_service):
            payroll_service.pay_employee(admin, 2)
            logs = captured_logs()
            assert any(r["message"] == "employee_paid" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("nomina_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Time
# =============================================================================


@pytest.fixture
def clock():
    """Simulated clock at 2024-07-20 12:00 civil time (period 2024-07-Q2)."""
    return SimulatedClock(SEED_NOW)


# =============================================================================
# Users
# =============================================================================


@pytest.fixture
def admin():
    return ADMIN


@pytest.fixture
def manager():
    """Branch manager of Monterrey (2) and Guadalajara (3)."""
    return MANAGER


@pytest.fixture
def employee_user():
    """Self-service user bound to employee 3."""
    return EMPLOYEE_USER


# =============================================================================
# Stores
# =============================================================================


@pytest.fixture
def store():
    """Fresh in-memory store with the seed records, no attendance punches."""
    return build_seed_store(with_attendance=False)


@pytest.fixture
def empty_store():
    return build_memory_store()


@pytest.fixture
def sql_session():
    """Session on a fresh in-memory SQLite database with every table created."""
    init_engine_from_url("sqlite+pysqlite:///:memory:")
    create_all_tables()
    session = get_session()
    yield session
    session.close()
    reset_engine()


@pytest.fixture
def sql_store(sql_session):
    """SQL-backed store loaded with the seed records, no attendance punches."""
    return copy_store(build_seed_store(with_attendance=False), build_sql_store(sql_session))
