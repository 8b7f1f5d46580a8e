"""
Read-only SQL executor.

All translated queries run through `execute_query`, which:
  1. Opens a ``query_only`` connection on the embedded engine
  2. Wraps the query in text()
  3. Converts Decimal/date/datetime to JSON-safe Python types
  4. Serialises access to the single shared SQLite connection
"""
from __future__ import annotations

import decimal
import datetime
import threading
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import text

from src.db.connection import readonly_connection
from src.core.logging import get_logger

logger = get_logger(__name__)

_lock = threading.Lock()


@dataclass
class QueryResult:
    columns: list[str] = field(default_factory=list)
    rows: list[dict[str, Any]] = field(default_factory=list)


def _serialise_value(val: Any) -> Any:
    """Convert DB types to JSON-serialisable Python types."""
    if isinstance(val, decimal.Decimal):
        return float(val)
    if isinstance(val, (datetime.date, datetime.datetime)):
        return val.isoformat()
    return val


def execute_query(sql: str) -> QueryResult:
    """Execute a read-only SQL query and return its column names and rows.

    Raises
    ------
    sqlalchemy.exc.SQLAlchemyError
        If the engine rejects or fails the statement.
    """
    logger.info("Executing SQL (%d chars)", len(sql))

    with _lock, readonly_connection() as conn:
        result = conn.execute(text(sql))
        columns = list(result.keys())
        rows = [
            {col: _serialise_value(val) for col, val in zip(columns, row)}
            for row in result.fetchall()
        ]

    logger.info("Returned %d rows", len(rows))
    return QueryResult(columns=columns, rows=rows)
