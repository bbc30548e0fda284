"""Tests for the clock abstraction, including the payroll calendar clock."""

from datetime import UTC, datetime, timedelta

import pytest

from nomina_kernel.domain.clock import DeterministicClock, SimulatedClock, SystemClock
from nomina_kernel.domain.periods import CIVIL_TZ, period_identifier
from nomina_kernel.exceptions import InvalidReferenceDateError


class TestDeterministicClock:

    def test_fixed_until_advanced(self):
        clock = DeterministicClock(datetime(2024, 7, 1, tzinfo=UTC))
        assert clock.now() == clock.now()
        clock.advance(60)
        assert clock.now() == datetime(2024, 7, 1, 0, 1, tzinfo=UTC)

    def test_set_time_resets_advance(self):
        clock = DeterministicClock()
        clock.advance(10)
        clock.set_time(datetime(2025, 1, 1, tzinfo=UTC))
        assert clock.now() == datetime(2025, 1, 1, tzinfo=UTC)

    def test_now_utc(self):
        clock = DeterministicClock(datetime(2024, 7, 1, 12, 0, tzinfo=CIVIL_TZ))
        assert clock.now_utc() == datetime(2024, 7, 1, 18, 0, tzinfo=UTC)


class TestSimulatedClock:

    def test_default_start(self):
        assert period_identifier(SimulatedClock().now()) == "2024-07-Q1"

    def test_naive_start_rejected(self):
        with pytest.raises(InvalidReferenceDateError):
            SimulatedClock(datetime(2024, 7, 1))

    def test_advance_to_next_period(self):
        clock = SimulatedClock(datetime(2024, 7, 20, 12, 0, tzinfo=CIVIL_TZ))
        nxt = clock.advance_to_next_period()
        assert nxt == datetime(2024, 8, 1, tzinfo=CIVIL_TZ)
        assert clock.now() == nxt
        clock.advance_to_next_period()
        assert period_identifier(clock.now()) == "2024-08-Q2"


class TestSystemClock:

    def test_aware_and_recent(self):
        now = SystemClock().now()
        assert now.tzinfo is not None
        assert abs(datetime.now(UTC) - now) < timedelta(minutes=1)
