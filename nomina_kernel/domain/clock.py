"""
Clock -- Deterministic time abstraction.

Responsibility:
    Provides an injectable clock interface so that domain, module and
    service code never call ``datetime.now()`` or ``date.today()`` directly.
    The payroll core receives its reference date explicitly; services read
    it from the injected clock.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O (except SystemClock,
    which is the one sanctioned I/O boundary for time).

Failure modes:
    - SimulatedClock raises InvalidReferenceDateError on naive start times.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone

from nomina_kernel.domain.periods import CIVIL_TZ, advance_to_next_period
from nomina_kernel.exceptions import InvalidReferenceDateError


class Clock(ABC):
    """
    Abstract clock interface.

    Contract:
        All services that need current time must receive a Clock instance
        via constructor injection.

    Guarantees:
        - ``now()`` returns a timezone-aware ``datetime``.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Get the current time."""
        ...

    def now_utc(self) -> datetime:
        """Get the current UTC time."""
        return self.now().astimezone(timezone.utc)


class SystemClock(Clock):
    """
    Production clock that returns actual system time.

    Non-goals:
        Not suitable for deterministic replay or testing, and cannot be
        advanced by a period close.
    """

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Test clock with controlled time.

    Guarantees:
        - ``now()`` returns the same value on repeated calls until
          ``advance()`` or ``set_time()`` is called.
    """

    def __init__(self, fixed_time: datetime | None = None):
        """
        Args:
            fixed_time: If provided, clock always returns this time.
                       If None, uses a default epoch time.
        """
        self._fixed_time = fixed_time or datetime(
            2024, 7, 1, 12, 0, 0, tzinfo=timezone.utc
        )
        self._advance_seconds = 0

    def now(self) -> datetime:
        return self._fixed_time + timedelta(seconds=self._advance_seconds)

    def set_time(self, time: datetime) -> None:
        """Set the clock to a specific time."""
        self._fixed_time = time
        self._advance_seconds = 0

    def advance(self, seconds: int = 1) -> None:
        """Advance the clock by the specified seconds."""
        self._advance_seconds += seconds


class SimulatedClock(DeterministicClock):
    """
    App-controlled "current date" for the payroll calendar.

    Contract:
        Starts at an operator-chosen time and only moves when a payroll run
        is closed (``advance_to_next_period``) or explicitly reset.

    Guarantees:
        After ``advance_to_next_period()`` the clock reads civil midnight of
        the first day of the following period.
    """

    def __init__(self, start: datetime | None = None):
        if start is not None and start.tzinfo is None:
            raise InvalidReferenceDateError(start, "simulated clock needs an aware datetime")
        super().__init__(start or datetime(2024, 7, 1, 12, 0, 0, tzinfo=CIVIL_TZ))

    def advance_to_next_period(self) -> datetime:
        """Move to the first instant of the next payroll period."""
        nxt = advance_to_next_period(self.now())
        self.set_time(nxt)
        return nxt
