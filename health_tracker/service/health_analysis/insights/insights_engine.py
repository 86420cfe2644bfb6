"""
Health insights engine.

This module generates human-readable observations from trailing windows of health entries:
- Step goal challenges and step progress trends
- Hydration and sleep concerns relative to goals
- Logging consistency
- Mood and weight changes

Every generation pass recomputes the full insight list from scratch.
"""

import datetime as dt
from typing import Callable, List, Optional, Sequence

from loguru import logger

from health_tracker.service.health_analysis.common.constants import AnalysisWindows, InsightThresholds
from health_tracker.service.health_analysis.common.data_models import (
    HealthEntry,
    HealthGoal,
    HealthInsight,
    HealthMetric,
    InsightPriority,
)
from health_tracker.service.health_analysis.core_metrics.trend_metrics import (
    average_mood_score,
    current_streak,
    entries_since,
    metric_values,
    safe_mean,
)


class InsightsEngine:
    """Generates prioritized insights from the entry history and goals."""

    def __init__(self, clock: Callable[[], dt.datetime] = dt.datetime.now) -> None:
        self._clock = clock
        self._insights: List[HealthInsight] = []

    @property
    def insights(self) -> List[HealthInsight]:
        """Insights from the latest generation pass, highest priority first."""
        return list(self._insights)

    def generate_insights(self, entries: Sequence[HealthEntry], goal: HealthGoal) -> List[HealthInsight]:
        """
        Recompute all insights, replacing the previous list.

        Args:
            entries: Full entry history in any order.
            goal: Current goal configuration.

        Returns:
            New insight list sorted by descending priority.
        """
        now = self._clock()
        weekly_entries = entries_since(entries, now, AnalysisWindows.WEEK_DAYS)
        monthly_entries = entries_since(entries, now, AnalysisWindows.MONTH_DAYS)

        candidates = [
            self._step_goal_insight(weekly_entries, goal),
            self._step_trend_insight(weekly_entries, monthly_entries),
            self._water_insight(weekly_entries, goal),
            self._sleep_insight(weekly_entries, goal),
            self._consistency_insight(entries, now.date()),
            self._mood_insight(weekly_entries),
            self._weight_insight(monthly_entries),
        ]
        insights = [insight for insight in candidates if insight is not None]

        self._insights = sorted(insights, key=lambda insight: insight.priority, reverse=True)
        logger.info(f"Generated {len(self._insights)} insights from {len(entries)} entries")
        return self.insights

    def _step_goal_insight(self, weekly_entries: List[HealthEntry], goal: HealthGoal) -> Optional[HealthInsight]:
        days_met = sum(1 for entry in weekly_entries if entry.steps >= goal.steps)
        if days_met >= InsightThresholds.MIN_STEP_GOAL_DAYS:
            return None

        weekly_avg = safe_mean(metric_values(weekly_entries, HealthMetric.STEPS))
        return HealthInsight(
            title="Step Goal Challenge",
            description=(
                f"You've only achieved your step goal {days_met} times this week. "
                "Try taking short walks throughout the day."
            ),
            icon="figure.walk",
            color="orange",
            priority=InsightPriority.MEDIUM,
            action_title="Set Walk Reminders",
            value=f"{int(weekly_avg)} avg steps",
        )

    def _step_trend_insight(
        self, weekly_entries: List[HealthEntry], monthly_entries: List[HealthEntry]
    ) -> Optional[HealthInsight]:
        weekly_avg = safe_mean(metric_values(weekly_entries, HealthMetric.STEPS))
        monthly_avg = safe_mean(metric_values(monthly_entries, HealthMetric.STEPS))
        if monthly_avg <= 0 or weekly_avg <= monthly_avg * InsightThresholds.STEP_TREND_RATIO:
            return None

        percentage_increase = int((weekly_avg / monthly_avg - 1) * 100)
        return HealthInsight(
            title="Great Step Progress!",
            description=(
                f"Your weekly average is {percentage_increase}% higher than your monthly average. Keep it up!"
            ),
            icon="chart.line.uptrend.xyaxis",
            color="green",
            priority=InsightPriority.LOW,
            value=f"+{int(weekly_avg - monthly_avg)} steps",
        )

    def _water_insight(self, weekly_entries: List[HealthEntry], goal: HealthGoal) -> Optional[HealthInsight]:
        avg_water = safe_mean(metric_values(weekly_entries, HealthMetric.WATER))
        if not avg_water < goal.water_intake * InsightThresholds.WATER_GOAL_RATIO:
            return None

        return HealthInsight(
            title="Hydration Needs Attention",
            description=(
                "Your average water intake is below your goal. Proper hydration improves energy and focus."
            ),
            icon="drop.fill",
            color="blue",
            priority=InsightPriority.HIGH,
            action_title="Set Water Reminders",
            value=f"{avg_water:.1f}L avg",
        )

    def _sleep_insight(self, weekly_entries: List[HealthEntry], goal: HealthGoal) -> Optional[HealthInsight]:
        avg_sleep = safe_mean(metric_values(weekly_entries, HealthMetric.SLEEP))
        if not avg_sleep < goal.sleep_hours * InsightThresholds.SLEEP_GOAL_RATIO:
            return None

        return HealthInsight(
            title="Sleep Quality Concern",
            description=(
                "You're averaging less sleep than recommended. Quality sleep is crucial for recovery and health."
            ),
            icon="bed.double.fill",
            color="purple",
            priority=InsightPriority.HIGH,
            action_title="Sleep Tips",
            value=f"{avg_sleep:.1f}h avg",
        )

    def _consistency_insight(self, entries: Sequence[HealthEntry], today: dt.date) -> Optional[HealthInsight]:
        streak = current_streak(entries, today)

        if streak >= InsightThresholds.CONSISTENCY_STREAK_DAYS:
            return HealthInsight(
                title="Amazing Consistency!",
                description=(
                    f"You've logged entries for {streak} consecutive days. "
                    "Consistency is the key to lasting health improvements."
                ),
                icon="flame.fill",
                color="orange",
                priority=InsightPriority.LOW,
                value=f"{streak} days",
            )
        if streak == 0:
            return HealthInsight(
                title="Get Back on Track",
                description=(
                    "Regular logging helps you stay aware of your health patterns. Start your streak today!"
                ),
                icon="calendar",
                color="red",
                priority=InsightPriority.MEDIUM,
                action_title="Log Today",
                value="0 day streak",
            )
        return None

    def _mood_insight(self, weekly_entries: List[HealthEntry]) -> Optional[HealthInsight]:
        if not weekly_entries:
            return None

        avg_mood = average_mood_score(weekly_entries)
        if avg_mood < InsightThresholds.MOOD_CONCERN_BELOW:
            return HealthInsight(
                title="Mood Support Needed",
                description="Your mood has been lower than usual. Consider activities that boost your wellbeing.",
                icon="heart.fill",
                color="pink",
                priority=InsightPriority.HIGH,
                action_title="Wellness Tips",
                value=f"{avg_mood:.1f}/5.0",
            )
        if avg_mood >= InsightThresholds.MOOD_POSITIVE_FROM:
            return HealthInsight(
                title="Positive Mood Trend",
                description=(
                    "Your mood has been consistently positive this week. Keep doing what makes you happy!"
                ),
                icon="face.smiling",
                color="yellow",
                priority=InsightPriority.LOW,
                value=f"{avg_mood:.1f}/5.0",
            )
        return None

    def _weight_insight(self, monthly_entries: List[HealthEntry]) -> Optional[HealthInsight]:
        weighed = sorted((entry for entry in monthly_entries if entry.weight > 0), key=lambda entry: entry.date)
        if len(weighed) < 2:
            return None

        weight_change = weighed[-1].weight - weighed[0].weight
        if abs(weight_change) <= InsightThresholds.WEIGHT_CHANGE_KG:
            return None

        direction = "gained" if weight_change > 0 else "lost"
        # Large changes escalate the color, never the priority
        color = "orange" if abs(weight_change) > InsightThresholds.WEIGHT_CHANGE_SEVERE_KG else "blue"
        return HealthInsight(
            title="Weight Change Detected",
            description=f"You've {direction} {abs(weight_change):.1f}kg this month. Monitor your trends.",
            icon="scalemass.fill",
            color=color,
            priority=InsightPriority.MEDIUM,
            action_title="View Trends",
            value=f"{weight_change:+.1f}kg",
        )
