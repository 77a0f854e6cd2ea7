"""
repositories/kv_repo.py
-----------------------
Durable key-value storage for serialized application state.
All SQL queries related to the `kv_store` table live here.
"""

from typing import Optional, Protocol

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)


class KeyValueStore(Protocol):
    """Minimal blob store: one text value per key."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class PostgresKeyValueStore:
    """KeyValueStore backed by the kv_store table."""

    def get(self, key: str) -> Optional[str]:
        """
        Fetch the value stored under a key.

        Returns:
            The stored text, or None if the key was never written.
        """
        sql = "SELECT value FROM kv_store WHERE key = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (key,))
                row = cur.fetchone()
                return row[0] if row else None
        finally:
            release_connection(conn)

    def set(self, key: str, value: str) -> None:
        """
        Insert or overwrite the value under a key.

        Raises:
            psycopg2.Error: If the write fails (after rollback).
        """
        sql = """
            INSERT INTO kv_store (key, value, updated_at)
            VALUES (%s, %s, NOW())
            ON CONFLICT (key) DO UPDATE
                SET value = EXCLUDED.value, updated_at = EXCLUDED.updated_at;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql, (key, value))
            conn.commit()
            logger.debug(f"Stored {len(value)} chars under '{key}'")
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to write key '{key}': {e}")
            raise
        finally:
            release_connection(conn)
