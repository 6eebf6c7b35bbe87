from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .kv import KeyValueStore


class MySQLKeyValueStore(KeyValueStore):
    """Key-value substrate on the ``kv_store`` table (see database/schema.sql)."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT v FROM kv_store WHERE k=%s", (key,))
            row = fetchone(cur)
            if not row:
                return None
            return row["v"]

    def set(self, key: str, value: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO kv_store(k, v) VALUES(%s, %s)
                ON DUPLICATE KEY UPDATE v=VALUES(v)
                """,
                (key, value),
            )
