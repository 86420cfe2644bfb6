from loguru import logger

from health_tracker.service.health_analysis.common.data_models import HealthGoal
from health_tracker.service.kv_store import JsonRecordStore


class GoalStore:
    """Owns the single goal configuration record. Updates replace it wholesale."""

    def __init__(self, store: JsonRecordStore[HealthGoal]) -> None:
        self._store = store
        self._goal = store.get()

    def get(self) -> HealthGoal:
        return self._goal.model_copy()

    def set(self, goal: HealthGoal) -> None:
        logger.info(f"Updating goals: {goal}")
        self._goal = goal.model_copy()
        self._store.set(self._goal)
