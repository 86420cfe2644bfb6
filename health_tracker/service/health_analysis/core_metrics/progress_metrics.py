"""
Goal progress metrics module.

This module maps a health entry and the goal configuration to normalized per-metric
progress ratios.
"""

from typing import Optional, Union

from health_tracker.service.health_analysis.common.data_models import GoalProgress, HealthEntry, HealthGoal


def ratio(value: Union[int, float], target: Union[int, float]) -> float:
    """
    Calculate a progress ratio clamped to [0, 1].

    Args:
        value: Logged value.
        target: Goal value.

    Returns:
        value / target clamped to [0, 1], or 0.0 when the target is not positive.
    """
    if target <= 0:
        return 0.0
    return max(0.0, min(value / target, 1.0))


def heart_rate_progress(heart_rate: int, target: int) -> float:
    # Lower is better: 1.0 at or under target, 0.5 over target, 0.0 when unrecorded or no target
    if heart_rate <= 0 or target <= 0:
        return 0.0
    return 1.0 if heart_rate <= target else 0.5


def calculate_progress(entry: Optional[HealthEntry], goal: HealthGoal) -> GoalProgress:
    """
    Calculate goal progress for a single entry.

    Args:
        entry: The entry to score. A missing entry is scored as an all-zero day.
        goal: Current goal configuration.

    Returns:
        GoalProgress with every component in [0, 1].
    """
    if entry is None:
        entry = HealthEntry()

    return GoalProgress(
        steps=ratio(entry.steps, goal.steps),
        water=ratio(entry.water_intake, goal.water_intake),
        sleep=ratio(entry.sleep_hours, goal.sleep_hours),
        heart_rate=heart_rate_progress(entry.heart_rate, goal.heart_rate),
        calories=ratio(entry.calories_burned, goal.calories_burned),
    )


def meets_perfect_day(entry: HealthEntry, goal: HealthGoal) -> bool:
    """Steps, water and sleep all at or above goal. Heart rate and calories are not part of a perfect day."""
    return (
        entry.steps >= goal.steps
        and entry.water_intake >= goal.water_intake
        and entry.sleep_hours >= goal.sleep_hours
    )
