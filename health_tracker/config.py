from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class TrackerSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="HEALTH_TRACKER_", env_nested_delimiter="__")

    out_dir: Path = Path("./out")
    db_file_name: str = "health_tracker.duckdb"
    celebration_timeout_s: float = 3.0

    @property
    def db_path(self) -> str:
        if self.db_file_name == ":memory:":
            return self.db_file_name
        return (self.out_dir / self.db_file_name).as_posix()
