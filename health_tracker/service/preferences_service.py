from loguru import logger

from health_tracker.service.health_analysis.common.constants import StorageKeys
from health_tracker.service.health_analysis.common.data_models import AppTheme
from health_tracker.service.kv_store import JsonRecordStore, KeyValueStore


class PreferencesService:
    """Theme preference and onboarding-completed flag."""

    def __init__(self, kv_store: KeyValueStore) -> None:
        self._theme_store = JsonRecordStore(kv_store, StorageKeys.THEME, AppTheme, lambda: AppTheme.SYSTEM)
        self._onboarding_store = JsonRecordStore(kv_store, StorageKeys.ONBOARDING_COMPLETED, bool, lambda: False)

    @property
    def theme(self) -> AppTheme:
        return self._theme_store.get()

    def set_theme(self, theme: AppTheme) -> None:
        logger.info(f"Setting theme to {theme.value}")
        self._theme_store.set(theme)

    @property
    def has_completed_onboarding(self) -> bool:
        return self._onboarding_store.get()

    def complete_onboarding(self) -> None:
        logger.info("Onboarding completed")
        self._onboarding_store.set(True)
