"""Tests for session metrics (pure functions)."""

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from grove.services import metrics


class TestParseWeight:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("10kg", 10.0),
            ("22.5 kg", 22.5),
            ("40", 40.0),
            ("corporal", None),
            ("Bodyweight", None),
            ("heavy", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parse_weight(self, raw, expected):
        assert metrics.parse_weight(raw) == expected


class TestVolume:
    def test_weighted_and_bodyweight_sets(self):
        """10kg x 5 counts, bodyweight reps count only towards total reps."""
        performed = [
            {
                "sets_completed": [
                    {"weight_used": "10kg", "reps_completed": 5},
                    {"weight_used": "corporal", "reps_completed": 8},
                ]
            }
        ]
        assert metrics.session_totals(performed) == (50.0, 13)

    def test_missing_reps_contribute_nothing(self):
        assert metrics.set_volume({"weight_used": "20kg"}) == 0
        assert metrics.set_volume({"weight_used": "20kg", "reps_completed": None}) == 0

    def test_rest_total(self):
        performed = [
            {"sets_completed": [{"rest_after_seconds": 60}, {"rest_after_seconds": None}]},
            {"sets_completed": [{"rest_after_seconds": 90}]},
            {},
        ]
        assert metrics.total_rest_seconds(performed) == 150


class TestCompletionPercentage:
    def test_rounded_ratio(self):
        performed = [
            {"total_sets": 3, "completed_sets": 3},
            {"total_sets": 4, "completed_sets": 2},
        ]
        assert metrics.completion_percentage(performed) == 71.43

    def test_zero_planned_sets(self):
        assert metrics.completion_percentage([{"total_sets": 0, "completed_sets": 0}]) == 0
        assert metrics.completion_percentage([]) == 0


class TestStreaks:
    today = date(2026, 10, 14)

    def test_gap_breaks_current_streak(self):
        days = [self.today, self.today - timedelta(days=1), self.today - timedelta(days=3)]
        assert metrics.current_streak(days, self.today) == 2

    def test_same_day_duplicates_are_skipped(self):
        days = [self.today, self.today, self.today - timedelta(days=1)]
        assert metrics.current_streak(days, self.today) == 2

    def test_no_session_today_means_no_streak(self):
        assert metrics.current_streak([self.today - timedelta(days=1)], self.today) == 0

    def test_longest_streak(self):
        days = [date(2026, 9, d) for d in (1, 2, 3, 4, 10, 11)] + [self.today]
        assert metrics.longest_streak(days) == 4
        assert metrics.longest_streak([]) == 0


class TestWeekStart:
    def test_sunday_midnight_utc(self):
        now = datetime(2026, 10, 14, 15, 30, tzinfo=timezone.utc)  # Wednesday
        assert metrics.week_start(now, timezone.utc) == datetime(
            2026, 10, 11, tzinfo=timezone.utc
        )

    def test_sunday_is_its_own_week_start(self):
        now = datetime(2026, 10, 11, 0, 5, tzinfo=timezone.utc)
        assert metrics.week_start(now, timezone.utc) == datetime(
            2026, 10, 11, tzinfo=timezone.utc
        )

    def test_local_timezone(self):
        """Sunday 00:00 in Madrid (UTC+2 in October) is Saturday 22:00 UTC."""
        now = datetime(2026, 10, 14, 12, tzinfo=timezone.utc)
        assert metrics.week_start(now, ZoneInfo("Europe/Madrid")) == datetime(
            2026, 10, 10, 22, tzinfo=timezone.utc
        )

    def test_naive_datetimes_are_utc(self):
        assert metrics.as_utc(datetime(2026, 1, 1)) == datetime(2026, 1, 1, tzinfo=timezone.utc)
