"""
Unit tests for goal progress calculation.

These tests verify clamping, the heart-rate scoring rule, and the zero-goal guard.
"""

import math

import pytest

from health_tracker.service.health_analysis.common.data_models import GoalProgress, HealthEntry, HealthGoal
from health_tracker.service.health_analysis.core_metrics.progress_metrics import (
    calculate_progress,
    heart_rate_progress,
    meets_perfect_day,
    ratio,
)
from tests import FIXED_NOW


class TestProgressMetrics:
    @pytest.fixture
    def goal(self):
        """Default goal configuration."""
        return HealthGoal()

    def test_default_goal(self, goal):
        assert goal.steps == 10000
        assert goal.water_intake == 2.5
        assert goal.sleep_hours == 8.0
        assert goal.heart_rate == 70
        assert goal.calories_burned == 2000

    def test_reference_day(self, goal):
        """Test the reference scenario: steps and calories over goal, water and sleep short."""
        entry = HealthEntry(
            date=FIXED_NOW, steps=12000, water_intake=1.0, sleep_hours=7.0, heart_rate=65, calories_burned=2200
        )

        progress = calculate_progress(entry, goal)

        assert progress.steps == 1.0
        assert progress.water == pytest.approx(0.4)
        assert progress.sleep == pytest.approx(0.875)
        assert progress.heart_rate == 1.0
        assert progress.calories == 1.0
        assert progress.overall == pytest.approx(0.855)

    def test_heart_rate_scoring(self):
        assert heart_rate_progress(0, 70) == 0.0  # not recorded
        assert heart_rate_progress(70, 70) == 1.0  # at target
        assert heart_rate_progress(55, 70) == 1.0  # under target
        assert heart_rate_progress(90, 70) == 0.5  # over target

    def test_zero_goal_components_yield_zero(self):
        """Test that a zero goal never divides by zero."""
        goal = HealthGoal(steps=0, water_intake=0.0, sleep_hours=0.0, heart_rate=0, calories_burned=0)
        entry = HealthEntry(
            date=FIXED_NOW, steps=5000, water_intake=2.0, sleep_hours=7.0, heart_rate=60, calories_burned=1500
        )

        progress = calculate_progress(entry, goal)

        for value in (progress.steps, progress.water, progress.sleep, progress.heart_rate, progress.calories):
            assert value == 0.0
            assert not math.isnan(value)
        assert progress.overall == 0.0

    def test_components_stay_in_unit_interval(self, goal):
        entries = [
            HealthEntry(date=FIXED_NOW),
            HealthEntry(date=FIXED_NOW, steps=10**7, water_intake=100.0, sleep_hours=24.0, calories_burned=10**6),
            HealthEntry(date=FIXED_NOW, steps=1, water_intake=0.01, sleep_hours=0.1, heart_rate=200),
        ]

        for entry in entries:
            progress = calculate_progress(entry, goal)
            for value in progress.model_dump().values():
                assert 0.0 <= value <= 1.0

    def test_missing_entry_scores_as_zero(self, goal):
        progress = calculate_progress(None, goal)

        assert progress == GoalProgress()
        assert progress.overall == 0.0

    def test_ratio_clamps(self):
        assert ratio(5, 10) == 0.5
        assert ratio(20, 10) == 1.0
        assert ratio(5, 0) == 0.0
        assert ratio(5, -1) == 0.0

    def test_perfect_day_ignores_heart_rate_and_calories(self, goal):
        entry = HealthEntry(date=FIXED_NOW, steps=10000, water_intake=2.5, sleep_hours=8.0)
        assert meets_perfect_day(entry, goal)

        short_on_water = entry.model_copy(update={"water_intake": 2.4})
        assert not meets_perfect_day(short_on_water, goal)
