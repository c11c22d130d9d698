"""Unit tests for time and age helpers."""
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from volunteerhub.core.utils import (
    age_bucket,
    calculate_age,
    day_name,
    end_of_day,
    format_elapsed,
    hours_between,
    round_to_quarter_hour,
    slugify_label,
    start_of_day,
    time_of_day,
    to_utc,
)


@pytest.mark.unit
class TestQuarterHourRounding:

    def test_37_minutes_rounds_down_to_half_hour(self):
        assert round_to_quarter_hour(37 / 60) == 0.5

    def test_53_minutes_rounds_up_to_one_hour(self):
        assert round_to_quarter_hour(53 / 60) == 1.0

    def test_exact_quarter_is_kept(self):
        assert round_to_quarter_hour(1.25) == 1.25

    def test_half_way_rounds_up(self):
        # 7.5 minutes is exactly half a quarter
        assert round_to_quarter_hour(7.5 / 60) == 0.25

    def test_zero(self):
        assert round_to_quarter_hour(0) == 0.0

    def test_negative_is_not_clamped(self):
        assert round_to_quarter_hour(-0.625) == -0.5

    def test_hours_between_uses_utc(self):
        start = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
        end = start + timedelta(hours=1, minutes=15)
        assert hours_between(start, end) == 1.25


@pytest.mark.unit
class TestAge:

    def test_birthday_not_yet_reached(self):
        assert calculate_age(date(2000, 6, 15), date(2024, 6, 14)) == 23

    def test_on_birthday(self):
        assert calculate_age(date(2000, 6, 15), date(2024, 6, 15)) == 24

    @pytest.mark.parametrize(
        "age,bucket",
        [(18, "18-24"), (24, "18-24"), (25, "25-34"), (44, "35-44"), (64, "55-64"), (65, "65+"), (90, "65+")],
    )
    def test_age_buckets(self, age, bucket):
        assert age_bucket(age) == bucket


@pytest.mark.unit
class TestFormatting:

    def test_naive_datetime_treated_as_utc(self):
        assert to_utc(datetime(2024, 1, 1, 12, 0)).tzinfo == timezone.utc

    def test_day_name_and_time_of_day(self):
        dt = datetime(2024, 3, 15, 18, 1)
        assert day_name(dt) == "friday"
        assert time_of_day(dt) == "18:01"

    def test_day_bounds(self):
        tz = ZoneInfo("America/Chicago")
        start = start_of_day(date(2024, 3, 15), tz)
        end = end_of_day(date(2024, 3, 15), tz)
        assert (start.hour, start.minute) == (0, 0)
        assert (end.hour, end.minute, end.second, end.microsecond) == (23, 59, 59, 999999)

    def test_format_elapsed(self):
        assert format_elapsed(125) == "2h 05m"
        assert format_elapsed(45) == "45m"

    def test_slugify_label(self):
        assert slugify_label("Last Month") == "last-month"
        assert slugify_label(None) == "all-time"
