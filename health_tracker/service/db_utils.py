"""
Database utilities for the health tracker.

This module provides utilities for working with DuckDB, including:
- Connection management
- Query execution with parameter binding
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import duckdb
from loguru import logger

IN_MEMORY = ":memory:"


def connect(db_path: Union[str, Path]) -> duckdb.DuckDBPyConnection:
    """
    Open a DuckDB connection, creating the parent directory of a file database if needed.

    Args:
        db_path: Database file path, or ":memory:" for an in-memory database.

    Returns:
        Open DuckDB connection.
    """
    if str(db_path) != IN_MEMORY:
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"Opening DuckDB database at {db_path}")
    return duckdb.connect(str(db_path))


def execute_query(
    conn: duckdb.DuckDBPyConnection,
    query: str,
    params: Optional[Union[Tuple[Any, ...], List[Any]]] = None,
    fetch: bool = True,
) -> List[Dict[str, Any]]:
    """
    Execute a SQL query with parameters and return the results.

    Args:
        conn: DuckDB connection.
        query: SQL query string.
        params: Query parameters.
        fetch: Whether to fetch and return results. Set to False for INSERT, DELETE, etc.

    Returns:
        List of dictionaries with query results.
    """
    cursor = conn.cursor()
    try:
        if params:
            cursor.execute(query, params)
        else:
            cursor.execute(query)

        if fetch:
            column_names = [desc[0] for desc in cursor.description]
            return [dict(zip(column_names, row)) for row in cursor.fetchall()]
        return []
    except Exception as e:
        logger.error(f"Error executing query: {str(e)}")
        logger.debug(f"Query: {query}")
        logger.debug(f"Params: {params}")
        raise
    finally:
        cursor.close()
