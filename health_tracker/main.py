from pathlib import Path
from typing import Optional

from loguru import logger

from health_tracker.config import TrackerSettings
from health_tracker.service_factory import ServiceFactory


def setup_logger(out_dir: Path) -> None:
    log_dir = out_dir / "log"
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.add(log_dir / "debug.log", rotation="100 MB", retention="7 days", level="DEBUG")
    logger.add(log_dir / "error.log", rotation="100 MB", retention="7 days", level="ERROR")
    logger.info("logger initialised")


def create_service_factory(settings: Optional[TrackerSettings] = None) -> ServiceFactory:
    """
    Build the service graph for the presentation layer.

    Loads persisted entries, goals and achievements, and generates the initial insights.
    """
    settings = settings or TrackerSettings()
    setup_logger(settings.out_dir)

    factory = ServiceFactory(settings)
    factory.health_tracker_service.refresh_insights()
    logger.info(f"Health tracker ready with {len(factory.entry_repository.entries)} entries")
    return factory
