"""
Tests for the period resolver (nomina_kernel/domain/periods.py).

Covers identifier and label formatting, the civil-time (UTC-6) conversion,
month-end lengths and period advancement, plus property tests over the
whole calendar.
"""

from datetime import UTC, date, datetime, timedelta, timezone

import pytest
from hypothesis import given
from hypothesis import strategies as st

from nomina_kernel.domain.periods import (
    CIVIL_TZ,
    PeriodStatus,
    advance_to_next_period,
    civil_timezone,
    parse_period_identifier,
    period_bounds,
    period_identifier,
    previous_period_identifier,
    resolve_period,
    to_civil_date,
)
from nomina_kernel.exceptions import (
    InvalidPeriodIdentifierError,
    InvalidReferenceDateError,
)


# =============================================================================
# resolve_period
# =============================================================================


class TestResolvePeriod:

    def test_second_half_of_july(self):
        period = resolve_period(date(2024, 7, 20))
        assert period.identifier == "2024-07-Q2"
        assert period.display_range == "16 - 31 de Julio"
        assert period.half == 2
        assert period.month_name == "Julio"
        assert period.status is PeriodStatus.OPEN

    def test_first_half_label_is_zero_padded(self):
        period = resolve_period(date(2024, 7, 3))
        assert period.identifier == "2024-07-Q1"
        assert period.display_range == "01 - 15 de Julio"
        assert period.start_date == date(2024, 7, 1)
        assert period.end_date == date(2024, 7, 15)

    @pytest.mark.parametrize("day, half", [(15, 1), (16, 2), (1, 1), (31, 2)])
    def test_split_after_day_fifteen(self, day, half):
        assert resolve_period(date(2024, 7, day)).half == half

    @pytest.mark.parametrize(
        "reference, label",
        [
            (date(2024, 2, 20), "16 - 29 de Febrero"),
            (date(2023, 2, 20), "16 - 28 de Febrero"),
            (date(2024, 4, 30), "16 - 30 de Abril"),
            (date(2024, 12, 16), "16 - 31 de Diciembre"),
        ],
    )
    def test_second_half_ends_on_true_month_end(self, reference, label):
        assert resolve_period(reference).display_range == label

    def test_utc_instant_late_evening_is_previous_civil_day(self):
        # 2024-07-16 03:00 UTC is 2024-07-15 21:00 in UTC-6
        instant = datetime(2024, 7, 16, 3, 0, tzinfo=UTC)
        assert resolve_period(instant).identifier == "2024-07-Q1"

    def test_naive_datetime_is_read_as_utc(self):
        assert period_identifier(datetime(2024, 8, 1, 2, 0)) == "2024-07-Q2"

    def test_iso_strings_accepted(self):
        assert period_identifier("2024-07-20") == "2024-07-Q2"
        assert period_identifier("2024-07-16T03:00:00+00:00") == "2024-07-Q1"

    def test_unparseable_reference_rejected(self):
        with pytest.raises(InvalidReferenceDateError):
            resolve_period("not-a-date")

    def test_unsupported_type_rejected(self):
        with pytest.raises(InvalidReferenceDateError):
            resolve_period(20240720)

    def test_custom_timezone(self):
        plus_nine = timezone(timedelta(hours=9))
        instant = datetime(2024, 7, 15, 16, 0, tzinfo=UTC)
        assert period_identifier(instant, plus_nine) == "2024-07-Q2"
        assert period_identifier(instant) == "2024-07-Q1"


class TestCivilTimezone:

    def test_default_offset(self):
        assert CIVIL_TZ.utcoffset(None) == timedelta(hours=-6)

    def test_named_offset(self):
        assert civil_timezone(-6).tzname(None) == "UTC-06:00"
        assert civil_timezone(1).tzname(None) == "UTC+01:00"

    def test_to_civil_date_passes_dates_through(self):
        assert to_civil_date(date(2024, 1, 1)) == date(2024, 1, 1)


# =============================================================================
# Advancement and identifiers
# =============================================================================


class TestAdvanceToNextPeriod:

    def test_first_half_advances_to_sixteenth(self):
        assert advance_to_next_period(date(2024, 7, 3)) == date(2024, 7, 16)

    def test_second_half_advances_to_next_month(self):
        assert advance_to_next_period(date(2024, 7, 20)) == date(2024, 8, 1)

    def test_december_rolls_into_january(self):
        assert advance_to_next_period(date(2024, 12, 20)) == date(2025, 1, 1)

    def test_datetime_input_gives_civil_midnight(self):
        nxt = advance_to_next_period(datetime(2024, 7, 20, 12, 0, tzinfo=CIVIL_TZ))
        assert nxt == datetime(2024, 8, 1, tzinfo=CIVIL_TZ)
        assert period_identifier(nxt) == "2024-08-Q1"

    @pytest.mark.parametrize(
        "start, after_one, after_two",
        [
            (date(2024, 7, 3), "2024-07-Q2", "2024-08-Q1"),
            (date(2024, 7, 20), "2024-08-Q1", "2024-08-Q2"),
            (date(2024, 12, 5), "2024-12-Q2", "2025-01-Q1"),
            (date(2024, 12, 20), "2025-01-Q1", "2025-01-Q2"),
        ],
    )
    def test_advancing_twice(self, start, after_one, after_two):
        first = advance_to_next_period(start)
        second = advance_to_next_period(first)
        assert period_identifier(first) == after_one
        assert period_identifier(second) == after_two

    def test_two_closes_from_july_second_half(self):
        first = advance_to_next_period(datetime(2024, 7, 20, 12, 0, tzinfo=CIVIL_TZ))
        second = advance_to_next_period(first)
        assert second == datetime(2024, 8, 16, tzinfo=CIVIL_TZ)


class TestPeriodIdentifiers:

    def test_parse_round_trips_label(self):
        period = parse_period_identifier("2024-02-Q2")
        assert period.display_range == "16 - 29 de Febrero"
        assert period.end_date == date(2024, 2, 29)

    @pytest.mark.parametrize("bad", ["2024-07", "2024-13-Q1", "2024-07-Q3", "", None, "24-07-Q1"])
    def test_malformed_identifiers_rejected(self, bad):
        with pytest.raises(InvalidPeriodIdentifierError):
            parse_period_identifier(bad)

    @pytest.mark.parametrize(
        "identifier, previous",
        [("2024-07-Q2", "2024-07-Q1"), ("2024-07-Q1", "2024-06-Q2"), ("2024-01-Q1", "2023-12-Q2")],
    )
    def test_previous_period(self, identifier, previous):
        assert previous_period_identifier(identifier) == previous

    def test_period_bounds(self):
        assert period_bounds(date(2024, 4, 16)) == (date(2024, 4, 16), date(2024, 4, 30))


# =============================================================================
# Properties
# =============================================================================


_days = st.dates(min_value=date(1970, 1, 1), max_value=date(2199, 12, 31))


class TestPeriodProperties:

    @given(_days)
    def test_period_contains_its_reference(self, day):
        assert resolve_period(day).contains(day)

    @given(_days)
    def test_identifier_matches_resolved_period(self, day):
        period = resolve_period(day)
        assert period_identifier(day) == period.identifier
        assert parse_period_identifier(period.identifier) == period

    @given(_days)
    def test_next_period_starts_the_day_after_this_one_ends(self, day):
        period = resolve_period(day)
        assert advance_to_next_period(day) == period.end_date + timedelta(days=1)

    @given(_days)
    def test_previous_of_next_is_current(self, day):
        nxt = period_identifier(advance_to_next_period(day))
        assert previous_period_identifier(nxt) == period_identifier(day)

    @given(_days.filter(lambda d: d < date(2199, 12, 1)))
    def test_advancing_twice_skips_exactly_one_period(self, day):
        first = advance_to_next_period(day)
        second = advance_to_next_period(first)
        assert first < second
        assert resolve_period(second).start_date == second
        assert previous_period_identifier(previous_period_identifier(period_identifier(second))) == (
            period_identifier(day)
        )
        if resolve_period(day).half == 1:
            assert second.day == 1 and second.month != day.month
