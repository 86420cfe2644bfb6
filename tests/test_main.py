"""
Smoke tests for building the service graph.
"""

import pytest

from health_tracker.config import TrackerSettings
from health_tracker.main import create_service_factory


class TestCreateServiceFactory:
    @pytest.fixture
    def factory(self, tmp_path):
        factory = create_service_factory(TrackerSettings(out_dir=tmp_path, db_file_name=":memory:"))
        yield factory
        factory.health_tracker_service.close()
        factory.kv_store.close()

    def test_log_files_are_created(self, factory, tmp_path):
        assert (tmp_path / "log" / "debug.log").exists()
        assert (tmp_path / "log" / "error.log").exists()

    def test_initial_insights_are_generated(self, factory):
        titles = [insight.title for insight in factory.insights_engine.insights]

        assert "Get Back on Track" in titles
        assert factory.entry_repository.entries == []
