"""
db/connection.py
----------------
Manages the PostgreSQL connection pool behind the key-value store.
Uses psycopg2's SimpleConnectionPool; the bot is single-threaded,
so a small pool is plenty.
"""

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.SimpleConnectionPool | None = None


def init_pool(dsn: str = DATABASE_URL, min_conn: int = 1, max_conn: int = 3) -> None:
    """
    Open the connection pool. Calling it again is a no-op.

    Args:
        dsn: libpq connection string (defaults to DATABASE_URL).
        min_conn: Connections opened up front.
        max_conn: Upper bound on open connections.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.SimpleConnectionPool(min_conn, max_conn, dsn)
        logger.info("Database connection pool initialized.")
    except psycopg2.OperationalError as e:
        logger.error(f"Could not reach the database: {e}")
        raise


def get_connection():
    """
    Borrow a connection; pair every call with release_connection().

    Raises:
        RuntimeError: If init_pool() has not been called.
    """
    if _pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    return _pool.getconn()


def release_connection(conn) -> None:
    """Hand a borrowed connection back to the pool."""
    if _pool is not None:
        _pool.putconn(conn)


def close_pool() -> None:
    """Close every pooled connection. Safe to call when no pool is open."""
    global _pool
    if _pool is None:
        return
    _pool.closeall()
    _pool = None
    logger.info("Database connection pool closed.")
