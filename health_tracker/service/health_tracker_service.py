import datetime as dt
from typing import Callable, List, Optional

from loguru import logger

from health_tracker.service.celebration_timer import CelebrationTimer
from health_tracker.service.entry_input import EntryForm, entry_to_form, parse_entry_form
from health_tracker.service.entry_repository import EntryRepository
from health_tracker.service.goal_store import GoalStore
from health_tracker.service.health_analysis.achievements.achievement_engine import AchievementEngine
from health_tracker.service.health_analysis.common.constants import Messages
from health_tracker.service.health_analysis.common.data_models import (
    Achievement,
    GoalProgress,
    HealthEntry,
    HealthGoal,
    HealthInsight,
    HealthMetric,
    MetricStatistics,
    SaveResult,
    SummaryStats,
    TimeRange,
)
from health_tracker.service.health_analysis.core_metrics.progress_metrics import calculate_progress
from health_tracker.service.health_analysis.core_metrics.trend_metrics import metric_statistics, summary_stats
from health_tracker.service.health_analysis.insights.insights_engine import InsightsEngine


class HealthTrackerService:
    """
    Command surface for the presentation layer.

    Every command runs synchronously: the entry repository and goal store are the
    sources of truth, and the achievement and insights engines consume them after
    each change.
    """

    def __init__(
        self,
        entry_repository: EntryRepository,
        goal_store: GoalStore,
        achievement_engine: AchievementEngine,
        insights_engine: InsightsEngine,
        celebration_timer: CelebrationTimer,
        celebration_timeout_s: float = 3.0,
        clock: Callable[[], dt.datetime] = dt.datetime.now,
    ) -> None:
        self.entry_repository = entry_repository
        self.goal_store = goal_store
        self.achievement_engine = achievement_engine
        self.insights_engine = insights_engine
        self.celebration_timer = celebration_timer
        self.celebration_timeout_s = celebration_timeout_s
        self._clock = clock

    def save_entry(self, form: EntryForm) -> SaveResult:
        """
        Save today's entry from the input form.

        Args:
            form: Raw form values.

        Returns:
            SaveResult with the stored entry and any achievements it unlocked.

        Raises:
            EmptyEntryError: If every numeric field is blank.
        """
        entry = parse_entry_form(form, now=self._clock())
        return self.save(entry)

    def save(self, entry: HealthEntry) -> SaveResult:
        self.entry_repository.add_or_replace(entry)
        newly_unlocked = self.achievement_engine.check_achievements(
            self.entry_repository.entries, self.goal_store.get()
        )
        self.refresh_insights()

        if self.achievement_engine.recently_unlocked:
            self.celebration_timer.schedule(self.celebration_timeout_s, self.dismiss_celebration)

        logger.info(f"Saved entry for {entry.day}, {len(newly_unlocked)} achievement(s) unlocked")
        return SaveResult(entry=entry, newly_unlocked=newly_unlocked, message=Messages.ENTRY_SAVED)

    def delete_entry(self, entry: HealthEntry) -> None:
        self.entry_repository.delete(entry)
        self.refresh_insights()

    def update_goals(self, goal: HealthGoal) -> None:
        self.goal_store.set(goal)
        self.refresh_insights()

    def refresh_insights(self) -> List[HealthInsight]:
        return self.insights_engine.generate_insights(self.entry_repository.entries, self.goal_store.get())

    def today_form(self) -> EntryForm:
        """Input form prefilled from today's entry, blank when nothing is logged yet."""
        todays_entry = self.entry_repository.today()
        if todays_entry is None:
            return EntryForm()
        return entry_to_form(todays_entry)

    def today_progress(self) -> GoalProgress:
        return calculate_progress(self.entry_repository.today(), self.goal_store.get())

    def summary(self, time_range: TimeRange = TimeRange.WEEK) -> SummaryStats:
        """Average daily steps, water, sleep and calories over the selected range."""
        return summary_stats(self.entry_repository.recent(time_range.value))

    def statistics(self, metric: HealthMetric, time_range: TimeRange = TimeRange.WEEK) -> Optional[MetricStatistics]:
        return metric_statistics(self.entry_repository.recent(time_range.value), metric)

    @property
    def recently_unlocked(self) -> List[Achievement]:
        return self.achievement_engine.recently_unlocked

    def dismiss_celebration(self) -> None:
        self.celebration_timer.cancel()
        self.achievement_engine.clear_recently_unlocked()

    def close(self) -> None:
        self.celebration_timer.close()
