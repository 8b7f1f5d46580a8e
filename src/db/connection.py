"""SQLAlchemy engine over the embedded SQLite dataset.

Single shared in-memory engine (``StaticPool`` keeps the one connection
alive), created lazily and populated with the sample orders on first use.
All translated queries run through `readonly_connection`, which switches
the connection to ``query_only`` before handing it out.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.pool import StaticPool

from src.db.dataset import generate_orders, with_derived_columns
from src.core.config import get_settings
from src.core.logging import get_logger

logger = get_logger(__name__)

_engine: Engine | None = None

_CREATE_ORDERS = """
CREATE TABLE orders (
  id INTEGER PRIMARY KEY,
  customer TEXT,
  region TEXT,
  category TEXT,
  amount REAL,
  quantity INTEGER,
  order_date TEXT,
  order_month TEXT,
  order_year INTEGER
)"""

_INSERT_ORDER = """
INSERT INTO orders (id, customer, region, category, amount, quantity, order_date, order_month, order_year)
VALUES (:id, :customer, :region, :category, :amount, :quantity, :order_date, :order_month, :order_year)"""


def _bootstrap(engine: Engine, size: int, seed: int) -> None:
    rows = [with_derived_columns(o) for o in generate_orders(size, seed)]
    with engine.begin() as conn:
        conn.execute(text(_CREATE_ORDERS))
        conn.execute(text(_INSERT_ORDER), rows)
    logger.info("Embedded dataset ready  rows=%d  seed=%d", len(rows), seed)


def get_engine() -> Engine:
    """Return the shared SQLAlchemy engine (lazy-created, bootstrapped once)."""
    global _engine
    if _engine is None:
        settings = get_settings()
        engine = create_engine(
            settings.database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False,
        )
        _bootstrap(engine, settings.dataset_size, settings.dataset_seed)
        _engine = engine
    return _engine


@contextmanager
def readonly_connection() -> Generator[Connection, None, None]:
    """Yield a connection that rejects any write.

    The connection is returned to the pool on exit.
    """
    engine = get_engine()
    conn = engine.connect()
    try:
        conn.execute(text("PRAGMA query_only = ON"))
        yield conn
    finally:
        conn.close()
