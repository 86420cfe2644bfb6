"""
Data models for the health analysis framework.

This module provides Pydantic models for:
- Daily health entries and the goal configuration
- Goal progress ratios
- Achievement definitions, requirements and unlock state
- Insights and summary statistics
"""

import datetime as dt
import uuid
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from health_tracker.service.health_analysis.common.constants import AnalysisWindows, GoalDefaults, MoodScores


class MoodLevel(str, Enum):
    """Self-reported mood, ordered from best to worst."""

    VERY_HAPPY = "Very Happy"
    HAPPY = "Happy"
    NEUTRAL = "Neutral"
    SAD = "Sad"
    VERY_SAD = "Very Sad"

    @property
    def score(self) -> float:
        """Numeric mood score, 5.0 for very happy down to 1.0 for very sad."""
        return _MOOD_SCORES[self]


_MOOD_SCORES = {
    MoodLevel.VERY_HAPPY: MoodScores.VERY_HAPPY,
    MoodLevel.HAPPY: MoodScores.HAPPY,
    MoodLevel.NEUTRAL: MoodScores.NEUTRAL,
    MoodLevel.SAD: MoodScores.SAD,
    MoodLevel.VERY_SAD: MoodScores.VERY_SAD,
}


class HealthMetric(str, Enum):
    """Metrics that can be charted and summarised."""

    STEPS = "steps"
    WATER = "water"
    SLEEP = "sleep"
    HEART_RATE = "heart_rate"
    CALORIES = "calories"
    WEIGHT = "weight"
    MOOD = "mood"


class TimeRange(int, Enum):
    """Selectable history windows, valued in days."""

    WEEK = AnalysisWindows.WEEK_DAYS
    MONTH = AnalysisWindows.MONTH_DAYS
    QUARTER = AnalysisWindows.QUARTER_DAYS


class AppTheme(str, Enum):
    """Theme preference."""

    LIGHT = "Light"
    DARK = "Dark"
    SYSTEM = "System"


# Entries and goals


class HealthEntry(BaseModel):
    """One day of logged health metrics. Zero means "not recorded" for heart rate and weight."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    date: dt.datetime = Field(default_factory=dt.datetime.now)
    steps: int = Field(default=0, ge=0)
    water_intake: float = Field(default=0.0, ge=0)  # liters
    sleep_hours: float = Field(default=0.0, ge=0)
    heart_rate: int = Field(default=0, ge=0)  # bpm
    calories_burned: int = Field(default=0, ge=0)
    mood: MoodLevel = MoodLevel.NEUTRAL
    weight: float = Field(default=0.0, ge=0)  # kg

    @property
    def day(self) -> dt.date:
        """Calendar day this entry belongs to (local time)."""
        return self.date.date()

    def is_same_day(self, moment: dt.datetime) -> bool:
        return self.day == moment.date()

    @property
    def day_of_week(self) -> str:
        return self.date.strftime("%a")


class HealthGoal(BaseModel):
    """Goal configuration. Heart rate is an upper bound, lower is better."""

    steps: int = GoalDefaults.STEPS
    water_intake: float = GoalDefaults.WATER_INTAKE
    sleep_hours: float = GoalDefaults.SLEEP_HOURS
    heart_rate: int = GoalDefaults.HEART_RATE
    calories_burned: int = GoalDefaults.CALORIES_BURNED


class GoalProgress(BaseModel):
    """Per-metric progress ratios, each in [0, 1]."""

    steps: float = 0.0
    water: float = 0.0
    sleep: float = 0.0
    heart_rate: float = 0.0
    calories: float = 0.0

    @property
    def overall(self) -> float:
        """Unweighted mean of the five components."""
        return (self.steps + self.water + self.sleep + self.heart_rate + self.calories) / 5.0


# Achievement models


class StepsRequirement(BaseModel):
    kind: Literal["steps"] = "steps"
    target: int


class WaterRequirement(BaseModel):
    kind: Literal["water"] = "water"
    target: float


class SleepRequirement(BaseModel):
    kind: Literal["sleep"] = "sleep"
    target: float


class ConsecutiveDaysRequirement(BaseModel):
    kind: Literal["consecutive_days"] = "consecutive_days"
    target: int


class HeartRateRequirement(BaseModel):
    kind: Literal["heart_rate"] = "heart_rate"
    target: int  # maximum bpm


class CaloriesRequirement(BaseModel):
    kind: Literal["calories"] = "calories"
    target: int


class PerfectDayRequirement(BaseModel):
    kind: Literal["perfect_day"] = "perfect_day"


AchievementRequirement = Annotated[
    Union[
        StepsRequirement,
        WaterRequirement,
        SleepRequirement,
        ConsecutiveDaysRequirement,
        HeartRateRequirement,
        CaloriesRequirement,
        PerfectDayRequirement,
    ],
    Field(discriminator="kind"),
]


class Achievement(BaseModel):
    """An achievement definition together with its unlock state."""

    title: str
    description: str
    icon: str
    color: str
    requirement: AchievementRequirement
    is_unlocked: bool = False
    date_unlocked: Optional[dt.datetime] = None


# Insight models


class InsightPriority(int, Enum):
    """Priority levels for insights (higher sorts first)."""

    HIGH = 3
    MEDIUM = 2
    LOW = 1


class HealthInsight(BaseModel):
    """A human-readable observation about recent entries."""

    title: str
    description: str
    icon: str
    color: str
    priority: InsightPriority = InsightPriority.MEDIUM
    action_title: Optional[str] = None
    value: Optional[str] = None


# Statistics models


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


class ChartPoint(BaseModel):
    date: dt.datetime
    value: float


class MetricStatistics(BaseModel):
    """Average, maximum and half-over-half trend of a charted metric."""

    metric: HealthMetric
    average: float
    maximum: float
    trend: float
    trend_direction: TrendDirection = TrendDirection.NEUTRAL


class SummaryStats(BaseModel):
    """Average daily values over a set of entries."""

    avg_steps: float = 0.0
    avg_water: float = 0.0
    avg_sleep: float = 0.0
    avg_calories: float = 0.0


class SaveResult(BaseModel):
    """Outcome of saving an entry from the input form."""

    entry: HealthEntry
    newly_unlocked: List[Achievement] = Field(default_factory=list)
    message: str
