"""Unit tests for calendar-day helpers."""

from datetime import date, datetime

from staycal.utils.dates import (
    date_key,
    days_in_month,
    first_weekday,
    format_stay_dates,
    iter_days,
    nights_between,
    parse_date_param,
    to_local_date,
)


class TestToLocalDate:
    """Tests for date normalization."""

    def test_date_only_string_is_local_day(self):
        assert to_local_date("2024-03-10") == date(2024, 3, 10)

    def test_time_of_day_is_stripped(self):
        assert to_local_date(datetime(2024, 3, 10, 23, 59, 59)) == date(2024, 3, 10)
        assert to_local_date("2024-03-10T06:30:00") == date(2024, 3, 10)

    def test_same_day_values_share_a_key(self):
        """Different times on one local day normalize to the same key."""
        keys = {
            date_key(date(2024, 3, 10)),
            date_key(datetime(2024, 3, 10, 0, 0)),
            date_key(datetime(2024, 3, 10, 18, 45)),
            date_key("2024-03-10"),
        }
        assert keys == {"2024-03-10"}

    def test_timestamp_mapping(self):
        """Document-store timestamps are read in local time."""
        local = datetime(2024, 5, 1, 12, 0)
        value = {"seconds": int(local.timestamp()), "nanoseconds": 0}
        assert to_local_date(value) == date(2024, 5, 1)

    def test_epoch_milliseconds(self):
        local = datetime(2024, 5, 1, 12, 0)
        assert to_local_date(local.timestamp() * 1000) == date(2024, 5, 1)

    def test_unparsable_values(self):
        assert to_local_date(None) is None
        assert to_local_date("") is None
        assert to_local_date("not a date") is None
        assert to_local_date("2024-02-30") is None
        assert to_local_date(True) is None
        assert to_local_date({"foo": 1}) is None


class TestMonthLayoutHelpers:
    """Tests for month length and first weekday."""

    def test_days_in_month(self):
        assert days_in_month(2024, 1) == 31
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2023, 2) == 28
        assert days_in_month(1900, 2) == 28
        assert days_in_month(2000, 2) == 29
        assert days_in_month(2024, 4) == 30
        assert days_in_month(2024, 12) == 31
        assert days_in_month(9999, 12) == 31

    def test_first_weekday_is_sunday_based(self):
        assert first_weekday(2024, 1) == 1  # Monday
        assert first_weekday(2024, 9) == 0  # Sunday
        assert first_weekday(2024, 6) == 6  # Saturday


class TestIterDays:
    """Tests for calendar-day stepping."""

    def test_half_open(self):
        days = list(iter_days(date(2024, 5, 1), date(2024, 5, 3)))
        assert days == [date(2024, 5, 1), date(2024, 5, 2)]

    def test_empty_when_end_not_after_start(self):
        assert list(iter_days(date(2024, 5, 3), date(2024, 5, 3))) == []
        assert list(iter_days(date(2024, 5, 3), date(2024, 5, 1))) == []

    def test_across_daylight_saving_change(self):
        """One key per calendar day across the March DST switch."""
        days = list(iter_days(date(2024, 3, 9), date(2024, 3, 12)))
        assert [d.isoformat() for d in days] == ["2024-03-09", "2024-03-10", "2024-03-11"]

        days = list(iter_days(date(2024, 10, 26), date(2024, 10, 29)))
        assert len({d.isoformat() for d in days}) == 3


class TestFormatting:
    """Tests for parameter parsing and stay formatting."""

    def test_parse_date_param(self):
        assert parse_date_param("2024-03-05") == date(2024, 3, 5)
        assert parse_date_param("2024-3-5") == date(2024, 3, 5)
        assert parse_date_param("2024-13-01") is None
        assert parse_date_param("yesterday") is None
        assert parse_date_param(None) is None

    def test_nights_between(self):
        assert nights_between("2024-03-10", "2024-03-12") == 2
        assert nights_between(None, "2024-03-12") is None

    def test_format_stay_dates(self):
        assert format_stay_dates("2026-04-17", "2026-04-19") == "Apr 17 – Apr 19, 2026"
        assert format_stay_dates(None, "2026-04-19") == ""
