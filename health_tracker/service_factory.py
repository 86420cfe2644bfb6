import datetime as dt
from functools import cached_property
from typing import Callable, List

from health_tracker.config import TrackerSettings
from health_tracker.service.celebration_timer import CelebrationTimer
from health_tracker.service.entry_repository import EntryRepository
from health_tracker.service.goal_store import GoalStore
from health_tracker.service.health_analysis.achievements.achievement_engine import AchievementEngine
from health_tracker.service.health_analysis.common.constants import StorageKeys
from health_tracker.service.health_analysis.common.data_models import Achievement, HealthEntry, HealthGoal
from health_tracker.service.health_analysis.insights.insights_engine import InsightsEngine
from health_tracker.service.health_tracker_service import HealthTrackerService
from health_tracker.service.kv_store import JsonRecordStore, KeyValueStore
from health_tracker.service.preferences_service import PreferencesService


class ServiceFactory:
    def __init__(self, settings: TrackerSettings, clock: Callable[[], dt.datetime] = dt.datetime.now):
        self.settings = settings
        self.clock = clock

    @cached_property
    def kv_store(self) -> KeyValueStore:
        return KeyValueStore(self.settings.db_path)

    @cached_property
    def entry_repository(self) -> EntryRepository:
        store = JsonRecordStore(self.kv_store, StorageKeys.ENTRIES, List[HealthEntry], list)
        return EntryRepository(store, clock=self.clock)

    @cached_property
    def goal_store(self) -> GoalStore:
        return GoalStore(JsonRecordStore(self.kv_store, StorageKeys.GOALS, HealthGoal, HealthGoal))

    @cached_property
    def achievement_engine(self) -> AchievementEngine:
        store = JsonRecordStore(self.kv_store, StorageKeys.ACHIEVEMENTS, List[Achievement], list)
        return AchievementEngine(store, clock=self.clock)

    @cached_property
    def insights_engine(self) -> InsightsEngine:
        return InsightsEngine(clock=self.clock)

    @cached_property
    def preferences_service(self) -> PreferencesService:
        return PreferencesService(self.kv_store)

    @cached_property
    def health_tracker_service(self) -> HealthTrackerService:
        return HealthTrackerService(
            entry_repository=self.entry_repository,
            goal_store=self.goal_store,
            achievement_engine=self.achievement_engine,
            insights_engine=self.insights_engine,
            celebration_timer=CelebrationTimer(),
            celebration_timeout_s=self.settings.celebration_timeout_s,
            clock=self.clock,
        )
