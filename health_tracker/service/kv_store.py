from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Generic, List, Optional, TypeVar, Union

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from health_tracker.service.db_utils import connect, execute_query

T = TypeVar("T")


class KeyValueStore:
    """Local key-value blob store backed by a single DuckDB table."""

    _TABLE_NAME = "kv_store"

    def __init__(self, db_path: Union[str, Path]) -> None:
        self.db_path = db_path
        self._conn = connect(db_path)
        self._initialize_table()

    def _initialize_table(self) -> None:
        logger.info("Initializing key-value table")
        execute_query(
            self._conn,
            f"""
            CREATE TABLE IF NOT EXISTS {self._TABLE_NAME} (
                record_key VARCHAR PRIMARY KEY,
                record_value VARCHAR,
                updated_at TIMESTAMP
            )
            """,
            fetch=False,
        )

    def get(self, key: str) -> Optional[str]:
        rows = execute_query(self._conn, f"SELECT record_value FROM {self._TABLE_NAME} WHERE record_key = ?", (key,))
        if not rows:
            return None
        return rows[0]["record_value"]

    def put(self, key: str, value: str) -> None:
        logger.debug(f"Writing {len(value)} characters under key {key}")
        execute_query(
            self._conn,
            f"INSERT OR REPLACE INTO {self._TABLE_NAME} (record_key, record_value, updated_at) VALUES (?, ?, ?)",
            (key, value, datetime.now()),
            fetch=False,
        )

    def delete(self, key: str) -> None:
        logger.debug(f"Deleting key {key}")
        execute_query(self._conn, f"DELETE FROM {self._TABLE_NAME} WHERE record_key = ?", (key,), fetch=False)

    def keys(self) -> List[str]:
        rows = execute_query(self._conn, f"SELECT record_key FROM {self._TABLE_NAME} ORDER BY record_key")
        return [row["record_key"] for row in rows]

    def close(self) -> None:
        logger.info(f"Closing key-value store at {self.db_path}")
        self._conn.close()


class JsonRecordStore(Generic[T]):
    """
    A single typed record persisted as JSON under a fixed key.

    Reads never fail: an absent or malformed record yields the default value.
    """

    def __init__(
        self,
        kv_store: KeyValueStore,
        key: str,
        record_type: Any,
        default_factory: Callable[[], T],
    ) -> None:
        self.kv_store = kv_store
        self.key = key
        self._adapter = TypeAdapter(record_type)
        self._default_factory = default_factory

    def get(self) -> T:
        raw = self.kv_store.get(self.key)
        if raw is None:
            logger.debug(f"No record stored under {self.key}, using default")
            return self._default_factory()

        try:
            return self._adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Malformed record under {self.key}, using default: {e.error_count()} validation error(s)")
            return self._default_factory()

    def set(self, value: T) -> None:
        self.kv_store.put(self.key, self._adapter.dump_json(value).decode("utf-8"))
