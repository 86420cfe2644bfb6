import datetime as dt
from typing import Callable, List, Optional

from loguru import logger

from health_tracker.service.health_analysis.common.data_models import HealthEntry
from health_tracker.service.health_analysis.core_metrics.trend_metrics import entries_within
from health_tracker.service.kv_store import JsonRecordStore


class EntryRepository:
    """
    Owns the collection of daily health entries, newest first.

    At most one entry exists per calendar day. Every mutation re-encodes and persists
    the whole collection.
    """

    def __init__(
        self,
        store: JsonRecordStore[List[HealthEntry]],
        clock: Callable[[], dt.datetime] = dt.datetime.now,
    ) -> None:
        self._store = store
        self._clock = clock
        self._entries: List[HealthEntry] = sorted(store.get(), key=lambda entry: entry.date, reverse=True)
        logger.info(f"Loaded {len(self._entries)} health entries")

    @property
    def entries(self) -> List[HealthEntry]:
        """All entries, newest first."""
        return list(self._entries)

    def add_or_replace(self, entry: HealthEntry) -> None:
        """
        Store an entry, replacing any existing entry for the same calendar day in place.

        Args:
            entry: Entry to store.
        """
        existing_index = next(
            (i for i, existing in enumerate(self._entries) if existing.day == entry.day),
            None,
        )
        if existing_index is not None:
            logger.info(f"Replacing health entry for {entry.day}")
            self._entries[existing_index] = entry
        else:
            logger.info(f"Adding health entry for {entry.day}")
            self._entries.append(entry)

        self._entries.sort(key=lambda e: e.date, reverse=True)
        self._save()

    def delete(self, entry: HealthEntry) -> None:
        logger.info(f"Deleting health entry {entry.id} ({entry.day})")
        self._entries = [existing for existing in self._entries if existing.id != entry.id]
        self._save()

    def today(self) -> Optional[HealthEntry]:
        """The entry logged for the current calendar day, or None."""
        now = self._clock()
        return next((entry for entry in self._entries if entry.is_same_day(now)), None)

    def recent(self, window_days: int) -> List[HealthEntry]:
        """
        Entries dated within [now - window_days, now], oldest first.

        Args:
            window_days: Size of the trailing window in days.

        Returns:
            Entries in ascending date order.
        """
        return entries_within(self._entries, self._clock(), window_days)

    def _save(self) -> None:
        self._store.set(self._entries)
        logger.debug(f"Persisted {len(self._entries)} health entries")
