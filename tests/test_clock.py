"""Unit tests for the clock and date helpers."""
from datetime import date, datetime

import pytest

from workout_scheduler_api.clock import Clock
from workout_scheduler_api.utils import end_of_day, hours_to_minutes, new_exercise_id, week_start_for


class TestClock:
    def test_uses_source_without_override(self):
        clock = Clock(source=lambda: datetime(2026, 10, 21, 14, 30))

        assert clock.now() == datetime(2026, 10, 21, 14, 30)
        assert clock.today() == date(2026, 10, 21)
        assert clock.override is None

    def test_override_returns_local_midnight(self):
        clock = Clock(source=lambda: datetime(2026, 10, 21, 14, 30))

        clock.set_override("2026-12-25")

        assert clock.now() == datetime(2026, 12, 25, 0, 0)
        assert clock.today() == date(2026, 12, 25)

    def test_clear_override_reverts_to_source(self):
        clock = Clock(override="2026-12-25", source=lambda: datetime(2026, 10, 21, 9, 0))

        clock.clear_override()

        assert clock.now() == datetime(2026, 10, 21, 9, 0)

    @pytest.mark.parametrize("value", ["", "tomorrow", "2026-13-01", "25/12/2026"])
    def test_invalid_override_rejected(self, value):
        clock = Clock()

        with pytest.raises(ValueError):
            clock.set_override(value)
        assert clock.override is None


class TestDateHelpers:
    @pytest.mark.parametrize(
        "day,expected",
        [
            (date(2026, 10, 18), date(2026, 10, 18)),  # Sunday
            (date(2026, 10, 19), date(2026, 10, 18)),
            (date(2026, 10, 24), date(2026, 10, 18)),  # Saturday
            (date(2026, 11, 1), date(2026, 11, 1)),
        ],
    )
    def test_week_start_is_sunday_on_or_before(self, day, expected):
        assert week_start_for(day) == expected

    def test_end_of_day(self):
        assert end_of_day(date(2026, 10, 18)) == datetime(2026, 10, 18, 23, 59, 59, 999000)

    @pytest.mark.parametrize(
        "hours,minutes",
        [(0.5, 30), (1.0, 60), (0.75, 45), (0.2583, 15), (0.0, 1), (0.0125, 1)],
    )
    def test_hours_to_minutes(self, hours, minutes):
        assert hours_to_minutes(hours) == minutes

    def test_new_exercise_ids_are_unique(self):
        ids = {new_exercise_id("redist") for _ in range(50)}

        assert len(ids) == 50
        assert all(i.startswith("redist-") for i in ids)
