"""
Constants for the health analysis framework.

This module defines the fixed policy values used throughout the analysis framework, including:
- Insight thresholds and evaluation windows
- Streak configuration
- Mood scoring
- Storage keys for persisted records
"""


class InsightThresholds:
    """Threshold values used by the insights engine."""

    MIN_STEP_GOAL_DAYS = 3  # Fewer days meeting the step goal in a week triggers a challenge
    STEP_TREND_RATIO = 1.10  # Weekly average above monthly average by this factor counts as progress
    WATER_GOAL_RATIO = 0.80  # Weekly water average below this share of the goal is a concern
    SLEEP_GOAL_RATIO = 0.85  # Weekly sleep average below this share of the goal is a concern
    CONSISTENCY_STREAK_DAYS = 7  # Streak length worth praising
    MOOD_CONCERN_BELOW = 3.0  # Average mood score below this is a concern
    MOOD_POSITIVE_FROM = 4.0  # Average mood score at or above this is praised
    WEIGHT_CHANGE_KG = 2.0  # Weight change above this (absolute) is reported
    WEIGHT_CHANGE_SEVERE_KG = 5.0  # Weight change above this escalates the insight color


class AnalysisWindows:
    """Trailing windows (in days) used for entry evaluation."""

    WEEK_DAYS = 7
    MONTH_DAYS = 30
    QUARTER_DAYS = 90


class StreakConfig:
    """Configuration for consecutive-day streak counting."""

    MAX_LOOKBACK_DAYS = 30  # Streaks are never counted further back than this


class StatisticsConfig:
    """Configuration for summary statistics."""

    NEUTRAL_TREND_EPSILON = 0.1  # Absolute half-trend below this is reported as neutral
    GOALS_MET_THRESHOLD = 0.8  # Overall progress needed for a day to count as "goals met"


class MoodScores:
    """Numeric scores for mood levels (higher is better)."""

    VERY_HAPPY = 5.0
    HAPPY = 4.0
    NEUTRAL = 3.0
    SAD = 2.0
    VERY_SAD = 1.0


class GoalDefaults:
    """Default values for the goal configuration."""

    STEPS = 10000
    WATER_INTAKE = 2.5  # liters
    SLEEP_HOURS = 8.0
    HEART_RATE = 70  # bpm, upper bound
    CALORIES_BURNED = 2000


class StorageKeys:
    """Keys of the persisted records in the key-value store."""

    ENTRIES = "HealthEntries"
    GOALS = "HealthGoals"
    ACHIEVEMENTS = "Achievements"
    THEME = "AppTheme"
    ONBOARDING_COMPLETED = "HasCompletedOnboarding"


class Messages:
    """User-facing confirmation messages."""

    EMPTY_ENTRY = "Please enter at least one health metric."
    ENTRY_SAVED = "Your health entry has been saved successfully!"
