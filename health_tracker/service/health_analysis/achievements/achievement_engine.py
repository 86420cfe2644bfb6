"""
Achievement evaluation engine.

This module evaluates the fixed achievement rule set against the entry history and the
current goals, and tracks one-way Locked -> Unlocked transitions.
"""

import datetime as dt
from typing import Callable, Dict, List, Optional, Sequence

from loguru import logger

from health_tracker.service.health_analysis.common.data_models import (
    Achievement,
    AchievementRequirement,
    CaloriesRequirement,
    ConsecutiveDaysRequirement,
    HealthEntry,
    HealthGoal,
    HeartRateRequirement,
    PerfectDayRequirement,
    SleepRequirement,
    StepsRequirement,
    WaterRequirement,
)
from health_tracker.service.health_analysis.core_metrics.progress_metrics import meets_perfect_day
from health_tracker.service.health_analysis.core_metrics.trend_metrics import current_streak
from health_tracker.service.kv_store import JsonRecordStore


def default_achievements() -> List[Achievement]:
    """The full achievement set, all locked."""
    return [
        Achievement(
            title="First Steps",
            description="Log your first health entry",
            icon="star.fill",
            color="bronze",
            requirement=StepsRequirement(target=1),
        ),
        Achievement(
            title="Step Master",
            description="Walk 10,000 steps in a day",
            icon="figure.walk",
            color="gold",
            requirement=StepsRequirement(target=10000),
        ),
        Achievement(
            title="Hydration Hero",
            description="Drink 3L of water in a day",
            icon="drop.fill",
            color="blue",
            requirement=WaterRequirement(target=3.0),
        ),
        Achievement(
            title="Sleep Champion",
            description="Get 8+ hours of sleep",
            icon="bed.double.fill",
            color="purple",
            requirement=SleepRequirement(target=8.0),
        ),
        Achievement(
            title="Perfect Day",
            description="Meet all your daily goals",
            icon="checkmark.circle.fill",
            color="gold",
            requirement=PerfectDayRequirement(),
        ),
        Achievement(
            title="Consistency King",
            description="Log entries for 7 consecutive days",
            icon="calendar",
            color="green",
            requirement=ConsecutiveDaysRequirement(target=7),
        ),
        Achievement(
            title="Calorie Crusher",
            description="Burn 2500+ calories in a day",
            icon="flame.fill",
            color="gold",
            requirement=CaloriesRequirement(target=2500),
        ),
    ]


def merge_saved_achievements(defaults: Sequence[Achievement], saved: Sequence[Achievement]) -> List[Achievement]:
    """
    Merge persisted unlock state onto the default achievement set by title.

    Saved achievements whose title is not in the default set are dropped. Default
    achievements without saved state stay locked. When saved state contains a title
    more than once, the first occurrence wins.

    Args:
        defaults: Current achievement definitions, in display order.
        saved: Achievements loaded from storage.

    Returns:
        The default set, in default order, carrying saved unlock state.
    """
    saved_by_title: Dict[str, Achievement] = {}
    for achievement in saved:
        saved_by_title.setdefault(achievement.title, achievement)

    default_titles = {achievement.title for achievement in defaults}
    dropped = [title for title in saved_by_title if title not in default_titles]
    if dropped:
        logger.info(f"Dropping saved achievements no longer defined: {dropped}")

    merged = []
    for default in defaults:
        previous = saved_by_title.get(default.title)
        if previous is None:
            merged.append(default.model_copy())
        else:
            merged.append(
                default.model_copy(
                    update={"is_unlocked": previous.is_unlocked, "date_unlocked": previous.date_unlocked}
                )
            )
    return merged


def is_requirement_met(
    requirement: AchievementRequirement,
    todays_entry: HealthEntry,
    entries: Sequence[HealthEntry],
    goal: HealthGoal,
) -> bool:
    """
    Evaluate a single requirement against today's entry.

    Only the consecutive-days requirement looks at the entry history.
    """
    if isinstance(requirement, StepsRequirement):
        return todays_entry.steps >= requirement.target
    if isinstance(requirement, WaterRequirement):
        return todays_entry.water_intake >= requirement.target
    if isinstance(requirement, SleepRequirement):
        return todays_entry.sleep_hours >= requirement.target
    if isinstance(requirement, HeartRateRequirement):
        return 0 < todays_entry.heart_rate <= requirement.target
    if isinstance(requirement, CaloriesRequirement):
        return todays_entry.calories_burned >= requirement.target
    if isinstance(requirement, PerfectDayRequirement):
        return meets_perfect_day(todays_entry, goal)
    if isinstance(requirement, ConsecutiveDaysRequirement):
        return current_streak(entries, todays_entry.day) >= requirement.target
    raise ValueError(f"Unknown achievement requirement: {requirement!r}")


class AchievementEngine:
    """
    Tracks achievement unlock state.

    Unlocking is one-way. Newly unlocked achievements are also queued in
    `recently_unlocked` until the caller clears them.
    """

    def __init__(
        self,
        store: JsonRecordStore[List[Achievement]],
        clock: Callable[[], dt.datetime] = dt.datetime.now,
    ) -> None:
        self._store = store
        self._clock = clock
        self._achievements = merge_saved_achievements(default_achievements(), store.get())
        self._recently_unlocked: List[Achievement] = []
        logger.info(f"Loaded achievements: {self.unlocked_count}/{len(self._achievements)} unlocked")

    @property
    def achievements(self) -> List[Achievement]:
        return list(self._achievements)

    @property
    def recently_unlocked(self) -> List[Achievement]:
        return list(self._recently_unlocked)

    @property
    def unlocked_count(self) -> int:
        return sum(1 for achievement in self._achievements if achievement.is_unlocked)

    def get(self, title: str) -> Optional[Achievement]:
        return next((achievement for achievement in self._achievements if achievement.title == title), None)

    def check_achievements(self, entries: Sequence[HealthEntry], goal: HealthGoal) -> List[Achievement]:
        """
        Unlock every locked achievement whose requirement holds today.

        Args:
            entries: Full entry history.
            goal: Current goal configuration.

        Returns:
            Achievements unlocked by this pass. Empty when nothing is logged today.
        """
        now = self._clock()
        todays_entry = next((entry for entry in entries if entry.is_same_day(now)), None)
        if todays_entry is None:
            logger.debug("No entry for today, skipping achievement evaluation")
            return []

        newly_unlocked = []
        for i, achievement in enumerate(self._achievements):
            if achievement.is_unlocked:
                continue
            if is_requirement_met(achievement.requirement, todays_entry, entries, goal):
                unlocked = achievement.model_copy(update={"is_unlocked": True, "date_unlocked": now})
                self._achievements[i] = unlocked
                newly_unlocked.append(unlocked)
                logger.info(f"Achievement unlocked: {unlocked.title}")

        if newly_unlocked:
            self._recently_unlocked.extend(newly_unlocked)
            self._store.set(self._achievements)

        return newly_unlocked

    def clear_recently_unlocked(self) -> None:
        if self._recently_unlocked:
            logger.debug(f"Clearing {len(self._recently_unlocked)} recently unlocked achievement(s)")
        self._recently_unlocked.clear()
