"""
Unit tests for the statistics and trend utilities.
"""

import datetime as dt

import pytest

from health_tracker.service.health_analysis.common.data_models import (
    HealthEntry,
    HealthGoal,
    HealthMetric,
    MoodLevel,
    TrendDirection,
)
from health_tracker.service.health_analysis.core_metrics.trend_metrics import (
    average_mood_score,
    best_day,
    chart_points,
    consistency_percentage,
    current_streak,
    day_score,
    entries_since,
    entries_within,
    goals_met_count,
    half_trend,
    metric_statistics,
    most_active_weekday,
    moving_average,
    safe_mean,
    summary_stats,
)
from tests import FIXED_NOW, days_ago


class TestStreak:
    @pytest.fixture
    def week_of_entries(self):
        """Seven consecutive daily entries ending today."""
        return [HealthEntry(date=days_ago(i), steps=1000) for i in range(7)]

    def test_seven_consecutive_days(self, week_of_entries):
        assert current_streak(week_of_entries, FIXED_NOW.date()) == 7

    def test_gap_caps_streak(self, week_of_entries):
        """Test that a missing day three days back stops the count."""
        with_gap = [entry for entry in week_of_entries if entry.day != days_ago(3).date()]

        assert current_streak(with_gap, FIXED_NOW.date()) == 3

    def test_no_entry_today_is_zero(self, week_of_entries):
        without_today = [entry for entry in week_of_entries if entry.day != FIXED_NOW.date()]

        assert current_streak(without_today, FIXED_NOW.date()) == 0

    def test_streak_capped_at_thirty_days(self):
        entries = [HealthEntry(date=days_ago(i)) for i in range(45)]

        assert current_streak(entries, FIXED_NOW.date()) == 30

    def test_entry_order_does_not_matter(self, week_of_entries):
        assert current_streak(list(reversed(week_of_entries)), FIXED_NOW.date()) == 7


class TestAverages:
    def test_safe_mean(self):
        assert safe_mean([]) == 0.0
        assert safe_mean([1.0, 2.0, 3.0]) == 2.0

    def test_moving_average(self):
        assert moving_average([1.0, 2.0, 3.0, 4.0], 2) == [1.0, 1.5, 2.5, 3.5]
        assert moving_average([], 3) == []

    def test_moving_average_rejects_empty_window(self):
        with pytest.raises(ValueError):
            moving_average([1.0], 0)

    def test_half_trend(self):
        assert half_trend([]) == 0.0
        assert half_trend([5.0]) == 0.0
        assert half_trend([1.0, 3.0]) == 2.0
        # Middle value of an odd series is ignored
        assert half_trend([1.0, 100.0, 3.0]) == 2.0

    def test_summary_stats(self):
        entries = [
            HealthEntry(date=days_ago(1), steps=4000, water_intake=1.0, sleep_hours=6.0, calories_burned=1800),
            HealthEntry(date=days_ago(0), steps=6000, water_intake=2.0, sleep_hours=8.0, calories_burned=2200),
        ]

        stats = summary_stats(entries)

        assert stats.avg_steps == 5000
        assert stats.avg_water == 1.5
        assert stats.avg_sleep == 7.0
        assert stats.avg_calories == 2000

    def test_summary_stats_empty(self):
        stats = summary_stats([])

        assert stats.avg_steps == 0
        assert stats.avg_water == 0

    def test_average_mood_score(self):
        entries = [
            HealthEntry(date=days_ago(1), mood=MoodLevel.VERY_HAPPY),
            HealthEntry(date=days_ago(0), mood=MoodLevel.SAD),
        ]

        assert average_mood_score(entries) == 3.5
        assert average_mood_score([]) == 0.0


class TestMetricStatistics:
    def test_chart_points_skip_unrecorded(self):
        entries = [
            HealthEntry(date=days_ago(2), weight=80.0),
            HealthEntry(date=days_ago(1), weight=0.0),
            HealthEntry(date=days_ago(0), weight=79.5),
        ]

        points = chart_points(entries, HealthMetric.WEIGHT)

        assert [point.value for point in points] == [80.0, 79.5]

    def test_statistics_upward_trend(self):
        entries = [HealthEntry(date=days_ago(3 - i), steps=steps) for i, steps in enumerate([1000, 2000, 3000, 4000])]

        stats = metric_statistics(entries, HealthMetric.STEPS)

        assert stats is not None
        assert stats.average == 2500
        assert stats.maximum == 4000
        assert stats.trend == 2000
        assert stats.trend_direction == TrendDirection.UP

    def test_statistics_small_change_is_neutral(self):
        entries = [HealthEntry(date=days_ago(1), sleep_hours=7.0), HealthEntry(date=days_ago(0), sleep_hours=7.05)]

        stats = metric_statistics(entries, HealthMetric.SLEEP)

        assert stats.trend_direction == TrendDirection.NEUTRAL

    def test_statistics_without_values(self):
        assert metric_statistics([HealthEntry(date=FIXED_NOW)], HealthMetric.HEART_RATE) is None


class TestDayScores:
    @pytest.fixture
    def goal(self):
        return HealthGoal()

    def test_day_score(self, goal):
        entry = HealthEntry(date=FIXED_NOW, steps=5000, water_intake=2.5, sleep_hours=4.0, calories_burned=2000)

        assert day_score(entry, goal) == pytest.approx((0.5 + 1.0 + 0.5 + 1.0) / 4)

    def test_best_day(self, goal):
        # 2025-05-12 is a Monday, 2025-05-13 a Tuesday
        entries = [
            HealthEntry(date=dt.datetime(2025, 5, 12, 9), steps=2000),
            HealthEntry(date=dt.datetime(2025, 5, 13, 9), steps=9000),
        ]

        assert best_day(entries, goal) == "Tue"
        assert best_day([], goal) == "N/A"

    def test_most_active_weekday(self):
        entries = [
            HealthEntry(date=dt.datetime(2025, 5, 12, 9), steps=8000),
            HealthEntry(date=dt.datetime(2025, 5, 13, 9), steps=3000),
            HealthEntry(date=dt.datetime(2025, 5, 5, 9), steps=6000),
        ]

        assert most_active_weekday(entries) == "Mon"
        assert most_active_weekday([]) == "N/A"

    def test_goals_met_count(self, goal):
        entries = [
            HealthEntry(
                date=days_ago(1), steps=10000, water_intake=2.5, sleep_hours=8.0, heart_rate=60, calories_burned=2000
            ),
            HealthEntry(date=days_ago(0), steps=1000),
        ]

        assert goals_met_count(entries, goal) == 1

    def test_consistency_percentage(self):
        entries = [HealthEntry(date=days_ago(i)) for i in range(3)]

        assert consistency_percentage(entries, 7) == 42
        assert consistency_percentage(entries, 0) == 0


class TestWindows:
    def test_entries_within_is_inclusive_and_ascending(self):
        entries = [
            HealthEntry(date=FIXED_NOW),
            HealthEntry(date=FIXED_NOW - dt.timedelta(days=7)),  # exactly at the cutoff
            HealthEntry(date=FIXED_NOW - dt.timedelta(days=7, seconds=1)),
            HealthEntry(date=FIXED_NOW + dt.timedelta(hours=1)),  # in the future
            HealthEntry(date=days_ago(3)),
        ]

        window = entries_within(entries, FIXED_NOW, 7)

        assert [entry.date for entry in window] == [
            FIXED_NOW - dt.timedelta(days=7),
            days_ago(3),
            FIXED_NOW,
        ]

    def test_entries_since_keeps_later_timestamps(self):
        entries = [
            HealthEntry(date=days_ago(0, hour=20)),
            HealthEntry(date=FIXED_NOW - dt.timedelta(days=7)),
            HealthEntry(date=FIXED_NOW - dt.timedelta(days=7, seconds=1)),
        ]

        window = entries_since(entries, FIXED_NOW, 7)

        assert [entry.date for entry in window] == [FIXED_NOW - dt.timedelta(days=7), days_ago(0, hour=20)]
