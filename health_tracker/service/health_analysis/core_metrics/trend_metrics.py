"""
Statistics and trend utilities.

Shared helpers used by the insights engine, the achievement engine and the summary screens:
- Averages and trailing moving averages
- First-half / second-half trend comparison
- Consecutive-day streak counting
- Summary statistics over a window of entries
"""

import datetime as dt
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence

from health_tracker.service.health_analysis.common.constants import StatisticsConfig, StreakConfig
from health_tracker.service.health_analysis.common.data_models import (
    ChartPoint,
    HealthEntry,
    HealthGoal,
    HealthMetric,
    MetricStatistics,
    SummaryStats,
    TrendDirection,
)
from health_tracker.service.health_analysis.core_metrics.progress_metrics import calculate_progress, ratio


def safe_mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0.0 for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def moving_average(values: Sequence[float], window: int) -> List[float]:
    """
    Calculate a trailing moving average.

    Args:
        values: Values in chronological order.
        window: Number of trailing values averaged at each position.

    Returns:
        One average per input value. Early positions average over the values available so far.
    """
    if window < 1:
        raise ValueError(f"window must be positive, got {window}")

    averages = []
    for i in range(len(values)):
        averages.append(safe_mean(values[max(0, i - window + 1) : i + 1]))
    return averages


def half_trend(values: Sequence[float]) -> float:
    """
    Compare the mean of the second half of a series against the first half.

    For an odd number of values the middle value is ignored.

    Returns:
        second-half mean minus first-half mean, or 0.0 with fewer than two values.
    """
    if len(values) < 2:
        return 0.0

    mid = len(values) // 2
    return safe_mean(values[-mid:]) - safe_mean(values[:mid])


def trend_direction(trend: float) -> TrendDirection:
    if abs(trend) < StatisticsConfig.NEUTRAL_TREND_EPSILON:
        return TrendDirection.NEUTRAL
    return TrendDirection.UP if trend > 0 else TrendDirection.DOWN


def entries_within(entries: Iterable[HealthEntry], now: dt.datetime, window_days: int) -> List[HealthEntry]:
    """Entries dated within [now - window_days, now], oldest first."""
    cutoff = now - dt.timedelta(days=window_days)
    return sorted((entry for entry in entries if cutoff <= entry.date <= now), key=lambda entry: entry.date)


def entries_since(entries: Iterable[HealthEntry], now: dt.datetime, window_days: int) -> List[HealthEntry]:
    """Entries dated at or after now - window_days, oldest first. Later timestamps today are kept."""
    cutoff = now - dt.timedelta(days=window_days)
    return sorted((entry for entry in entries if entry.date >= cutoff), key=lambda entry: entry.date)


def current_streak(entries: Iterable[HealthEntry], today: dt.date) -> int:
    """
    Count consecutive logged days ending today.

    Walks backward one calendar day at a time from today and stops at the first day
    without an entry, looking back at most StreakConfig.MAX_LOOKBACK_DAYS days.

    Args:
        entries: Entry history in any order.
        today: The current calendar day.

    Returns:
        Streak length; 0 when nothing is logged today.
    """
    logged_days = {entry.day for entry in entries}

    streak = 0
    day = today
    for _ in range(StreakConfig.MAX_LOOKBACK_DAYS):
        if day not in logged_days:
            break
        streak += 1
        day -= dt.timedelta(days=1)
    return streak


def metric_value(entry: HealthEntry, metric: HealthMetric) -> float:
    if metric == HealthMetric.STEPS:
        return float(entry.steps)
    if metric == HealthMetric.WATER:
        return entry.water_intake
    if metric == HealthMetric.SLEEP:
        return entry.sleep_hours
    if metric == HealthMetric.HEART_RATE:
        return float(entry.heart_rate)
    if metric == HealthMetric.CALORIES:
        return float(entry.calories_burned)
    if metric == HealthMetric.WEIGHT:
        return entry.weight
    if metric == HealthMetric.MOOD:
        return entry.mood.score
    raise ValueError(f"Unknown metric: {metric}")


def metric_values(entries: Iterable[HealthEntry], metric: HealthMetric) -> List[float]:
    return [metric_value(entry, metric) for entry in entries]


def chart_points(entries: Iterable[HealthEntry], metric: HealthMetric) -> List[ChartPoint]:
    """Chart points for a metric, skipping entries where the metric was not recorded (value <= 0)."""
    points = []
    for entry in entries:
        value = metric_value(entry, metric)
        if value > 0:
            points.append(ChartPoint(date=entry.date, value=value))
    return points


def metric_statistics(entries: Sequence[HealthEntry], metric: HealthMetric) -> Optional[MetricStatistics]:
    """
    Calculate average, maximum and trend for a charted metric.

    Args:
        entries: Entries in chronological order.
        metric: Metric to summarise.

    Returns:
        MetricStatistics, or None when the metric has no recorded values.
    """
    values = [point.value for point in chart_points(entries, metric)]
    if not values:
        return None

    trend = half_trend(values)
    return MetricStatistics(
        metric=metric,
        average=safe_mean(values),
        maximum=max(values),
        trend=trend,
        trend_direction=trend_direction(trend),
    )


def summary_stats(entries: Sequence[HealthEntry]) -> SummaryStats:
    if not entries:
        return SummaryStats()

    return SummaryStats(
        avg_steps=safe_mean(metric_values(entries, HealthMetric.STEPS)),
        avg_water=safe_mean(metric_values(entries, HealthMetric.WATER)),
        avg_sleep=safe_mean(metric_values(entries, HealthMetric.SLEEP)),
        avg_calories=safe_mean(metric_values(entries, HealthMetric.CALORIES)),
    )


def average_mood_score(entries: Sequence[HealthEntry]) -> float:
    return safe_mean(metric_values(entries, HealthMetric.MOOD))


def day_score(entry: HealthEntry, goal: HealthGoal) -> float:
    """Mean of the steps, water, sleep and calories ratios for a single day."""
    return (
        ratio(entry.steps, goal.steps)
        + ratio(entry.water_intake, goal.water_intake)
        + ratio(entry.sleep_hours, goal.sleep_hours)
        + ratio(entry.calories_burned, goal.calories_burned)
    ) / 4.0


def best_day(entries: Sequence[HealthEntry], goal: HealthGoal) -> str:
    """Weekday abbreviation of the highest scoring entry, or "N/A"."""
    if not entries:
        return "N/A"
    best = max(entries, key=lambda entry: day_score(entry, goal))
    return best.day_of_week


def most_active_weekday(entries: Sequence[HealthEntry]) -> str:
    """Weekday abbreviation with the highest mean step count, or "N/A"."""
    steps_by_weekday: Dict[str, List[float]] = defaultdict(list)
    for entry in entries:
        steps_by_weekday[entry.day_of_week].append(float(entry.steps))

    if not steps_by_weekday:
        return "N/A"
    return max(steps_by_weekday, key=lambda weekday: safe_mean(steps_by_weekday[weekday]))


def goals_met_count(entries: Iterable[HealthEntry], goal: HealthGoal) -> int:
    return sum(
        1 for entry in entries if calculate_progress(entry, goal).overall >= StatisticsConfig.GOALS_MET_THRESHOLD
    )


def consistency_percentage(entries: Sequence[HealthEntry], days: int) -> int:
    """Share of days in the window with an entry, as a whole percentage."""
    if days <= 0:
        return 0
    return int(len(entries) / days * 100)
