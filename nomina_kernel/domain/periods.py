"""
Periods -- Semi-monthly (quincena) payroll period resolution.

Responsibility:
    Maps a reference date onto its payroll period: every calendar month is
    split into two fixed halves, days 1-15 (Q1) and day 16 through the last
    calendar day (Q2).  Produces the human-readable label, the stable
    ``YYYY-MM-Q{1|2}`` key that incidents and payslip signatures are grouped
    by, and the next period boundary used when a payroll run is closed.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.  Leaf module: no
    imports from other domain modules.

Invariants enforced:
    - All datetime arithmetic happens in a fixed UTC-06:00 civil zone with no
      daylight-saving adjustment, so period boundaries do not depend on the
      caller's local time zone.
    - Two dates in the same half of the same month share one identifier;
      dates in different halves or months never do.
    - The identifier sorts chronologically as a plain string.

Failure modes:
    - InvalidReferenceDateError for values that are not dates, datetimes or
      ISO-8601 strings, and for datetimes out of range after conversion.
    - InvalidPeriodIdentifierError from ``parse_period_identifier``.

Reference date interpretation:
    - ``date`` and date-only strings (``"2024-07-20"``) are civil dates.
    - Aware ``datetime`` values are converted to the civil zone.
    - Naive ``datetime`` values are UTC instants.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta, timezone, tzinfo
from enum import Enum

from nomina_kernel.exceptions import (
    InvalidPeriodIdentifierError,
    InvalidReferenceDateError,
)

CIVIL_UTC_OFFSET_HOURS = -6
FIRST_HALF_LAST_DAY = 15

MONTH_NAMES_ES: tuple[str, ...] = (
    "Enero",
    "Febrero",
    "Marzo",
    "Abril",
    "Mayo",
    "Junio",
    "Julio",
    "Agosto",
    "Septiembre",
    "Octubre",
    "Noviembre",
    "Diciembre",
)

_IDENTIFIER_RE = re.compile(r"^(\d{4})-(\d{2})-Q([12])$")


def civil_timezone(offset_hours: int = CIVIL_UTC_OFFSET_HOURS) -> timezone:
    """Fixed-offset civil zone (no DST)."""
    sign = "+" if offset_hours >= 0 else "-"
    return timezone(
        timedelta(hours=offset_hours),
        f"UTC{sign}{abs(offset_hours):02d}:00",
    )


CIVIL_TZ = civil_timezone()


class PeriodStatus(Enum):
    """Payroll run states for a period."""
    OPEN = "Abierta"
    IN_PROGRESS = "En Progreso"
    CLOSED = "Cerrada"


@dataclass(frozen=True)
class PeriodInfo:
    """
    A semi-monthly payroll period.

    Contract:
        Derived value -- never stored.  ``identifier`` is the grouping key,
        ``display_range`` the label (``"16 - 31 de Julio"``).
    """
    year: int
    month: int
    month_name: str
    half: int
    display_range: str
    identifier: str
    start_date: date
    end_date: date
    status: PeriodStatus = PeriodStatus.OPEN

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


def to_civil_date(reference: object, tz: tzinfo = CIVIL_TZ) -> date:
    """
    Reduce a reference value to its civil calendar date.

    Raises:
        InvalidReferenceDateError: if ``reference`` cannot be read as a date.
    """
    if isinstance(reference, str):
        reference = _parse_reference_string(reference)

    # datetime is a subclass of date: test it first
    if isinstance(reference, datetime):
        instant = reference if reference.tzinfo is not None else reference.replace(tzinfo=UTC)
        try:
            return instant.astimezone(tz).date()
        except OverflowError:
            raise InvalidReferenceDateError(reference, "out of range") from None
    if isinstance(reference, date):
        return reference
    raise InvalidReferenceDateError(reference)


def _parse_reference_string(value: str) -> date | datetime:
    text = value.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text)
    except ValueError:
        raise InvalidReferenceDateError(value, "unparseable") from None


def _half_of(day: int) -> int:
    return 1 if day <= FIRST_HALF_LAST_DAY else 2


def _build_period(year: int, month: int, half: int) -> PeriodInfo:
    month_name = MONTH_NAMES_ES[month - 1]
    last_day = calendar.monthrange(year, month)[1]
    if half == 1:
        start_day, end_day = 1, FIRST_HALF_LAST_DAY
    else:
        start_day, end_day = FIRST_HALF_LAST_DAY + 1, last_day
    return PeriodInfo(
        year=year,
        month=month,
        month_name=month_name,
        half=half,
        display_range=f"{start_day:02d} - {end_day} de {month_name}",
        identifier=f"{year:04d}-{month:02d}-Q{half}",
        start_date=date(year, month, start_day),
        end_date=date(year, month, end_day),
    )


def resolve_period(reference: object, tz: tzinfo = CIVIL_TZ) -> PeriodInfo:
    """
    Resolve the payroll period that contains ``reference``.

    Postconditions:
        - ``half`` is 1 for days 1-15 and 2 for day 16 onward.
        - ``display_range`` ends on the true last day of the month
          (28/29/30/31).
    """
    civil = to_civil_date(reference, tz)
    return _build_period(civil.year, civil.month, _half_of(civil.day))


def period_identifier(reference: object, tz: tzinfo = CIVIL_TZ) -> str:
    """``YYYY-MM-Q{1|2}`` key for the period containing ``reference``."""
    civil = to_civil_date(reference, tz)
    return f"{civil.year:04d}-{civil.month:02d}-Q{_half_of(civil.day)}"


def advance_to_next_period(reference: object, tz: tzinfo = CIVIL_TZ) -> date | datetime:
    """
    First day of the period after the one containing ``reference``.

    Q1 advances to day 16 of the same month; Q2 advances to day 1 of the
    next month, rolling December into January of the following year.

    Returns a ``date`` for date inputs, otherwise a ``datetime`` at civil
    midnight in ``tz``.
    """
    civil = to_civil_date(reference, tz)
    if civil.day <= FIRST_HALF_LAST_DAY:
        nxt = date(civil.year, civil.month, FIRST_HALF_LAST_DAY + 1)
    elif civil.month == 12:
        nxt = date(civil.year + 1, 1, 1)
    else:
        nxt = date(civil.year, civil.month + 1, 1)

    if isinstance(reference, datetime) or (
        isinstance(reference, str) and len(reference.strip()) != 10
    ):
        return datetime(nxt.year, nxt.month, nxt.day, tzinfo=tz)
    return nxt


def parse_period_identifier(identifier: str) -> PeriodInfo:
    """
    Rebuild the ``PeriodInfo`` for a stored period key.

    Raises:
        InvalidPeriodIdentifierError: if ``identifier`` is malformed.
    """
    match = _IDENTIFIER_RE.match(identifier) if isinstance(identifier, str) else None
    if match is None:
        raise InvalidPeriodIdentifierError(identifier)
    year, month, half = (int(g) for g in match.groups())
    if not 1 <= month <= 12 or year < 1:
        raise InvalidPeriodIdentifierError(identifier)
    return _build_period(year, month, half)


def previous_period_identifier(identifier: str) -> str:
    """Key of the period immediately before ``identifier``."""
    period = parse_period_identifier(identifier)
    if period.half == 2:
        return f"{period.year:04d}-{period.month:02d}-Q1"
    if period.month == 1:
        return f"{period.year - 1:04d}-12-Q2"
    return f"{period.year:04d}-{period.month - 1:02d}-Q2"


def period_bounds(reference: object, tz: tzinfo = CIVIL_TZ) -> tuple[date, date]:
    """Inclusive first and last civil day of the period containing ``reference``."""
    period = resolve_period(reference, tz)
    return period.start_date, period.end_date
