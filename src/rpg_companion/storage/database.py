"""SQLite persistence layer for the RPG companion.

Implements the TableStore collaborator on a local SQLite file. Each table
holds one JSON document per record, keyed by id, with creation and update
timestamps kept in their own columns. Filters and ordering are evaluated
on document fields with ``json_extract``.

Storage location: ``settings.storage.database_path``.
"""

from __future__ import annotations

import json
import re
import sqlite3
from collections.abc import Generator, Sequence
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

from rpg_companion.core.exceptions import InvalidArgumentError, RecordNotFoundError, StoreError
from rpg_companion.core.logging import get_logger
from rpg_companion.storage.base import TABLES, Record, check_table


logger = get_logger(__name__)

FIELD_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _json_path(field_name: str) -> str:
    if not FIELD_NAME.match(field_name):
        raise InvalidArgumentError(
            f"Invalid field name: {field_name!r}",
            argument="field",
            invalid_value=field_name,
        )
    return f"$.{field_name}"


class SQLiteTableStore:
    """SQLite-backed table store.

    Tables: ``characters``, ``compendium``, ``compendium_templates``.
    """

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str | Path) -> None:
        """Initialize the store and create the schema if needed.

        Args:
            db_path: Path to the database file.
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()
        logger.info("Table store initialized", path=str(self.db_path))

    @contextmanager
    def _get_connection(
        self,
        *,
        table: str | None = None,
        record_id: str | None = None,
    ) -> Generator[sqlite3.Connection, None, None]:
        """Open a connection; commit on success, roll back on any error.

        Driver errors are re-raised as StoreError.
        """
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as exc:
            raise StoreError(f"Could not open database: {exc}", table=table) from exc
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            logger.error("Store operation failed", table=table, record_id=record_id, error=str(exc))
            raise StoreError(str(exc), table=table, record_id=record_id) from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                )
            """)
            # Table names come from the fixed TABLES set, never from callers
            for table in sorted(TABLES):
                cursor.execute(f"""
                    CREATE TABLE IF NOT EXISTS {table} (
                        id TEXT PRIMARY KEY,
                        data TEXT NOT NULL,
                        created_at TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    )
                """)
            cursor.execute(
                "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
                (self.SCHEMA_VERSION,),
            )

    # =========================================================================
    # Reads
    # =========================================================================

    def get(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: Sequence[str] = (),
    ) -> list[Record]:
        """Records matching every filter, in the requested field order.

        Args:
            table: Table name.
            filters: Field -> value equality filters on the JSON document.
            order_by: Document fields to sort by, ascending. Records fall
                back to creation order.
        """
        check_table(table)
        clauses: list[str] = []
        params: list[Any] = []
        for field_name, value in (filters or {}).items():
            clauses.append("json_extract(data, ?) IS ?")
            params.extend([_json_path(field_name), value])

        order_params = [_json_path(field_name) for field_name in order_by]
        order_sql = ", ".join(["json_extract(data, ?)"] * len(order_params) + ["created_at", "rowid"])
        where_sql = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with self._get_connection(table=table) as conn:
            cursor = conn.execute(
                f"SELECT data FROM {table} {where_sql} ORDER BY {order_sql}",
                (*params, *order_params),
            )
            return [json.loads(row["data"]) for row in cursor.fetchall()]

    def get_one(self, table: str, record_id: str) -> Record | None:
        check_table(table)
        with self._get_connection(table=table, record_id=record_id) as conn:
            row = conn.execute(f"SELECT data FROM {table} WHERE id = ?", (record_id,)).fetchone()
        return json.loads(row["data"]) if row else None

    def count(self, table: str) -> int:
        check_table(table)
        with self._get_connection(table=table) as conn:
            return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]

    # =========================================================================
    # Writes
    # =========================================================================

    def insert(self, table: str, record: Record) -> Record:
        """Create a record, assigning an id if it has none.

        Raises:
            StoreError: If a record with the same id already exists.
        """
        check_table(table)
        record = {**record, "id": record.get("id") or str(uuid4())}
        now = datetime.now().isoformat()
        with self._get_connection(table=table, record_id=record["id"]) as conn:
            conn.execute(
                f"INSERT INTO {table} (id, data, created_at, updated_at) VALUES (?, ?, ?, ?)",
                (record["id"], json.dumps(record, default=str), now, now),
            )
        logger.info("Record inserted", table=table, record_id=record["id"])
        return record

    def upsert(self, table: str, record: Record) -> Record:
        check_table(table)
        record = {**record, "id": record.get("id") or str(uuid4())}
        now = datetime.now().isoformat()
        with self._get_connection(table=table, record_id=record["id"]) as conn:
            conn.execute(
                f"""
                INSERT INTO {table} (id, data, created_at, updated_at) VALUES (?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET data = excluded.data, updated_at = excluded.updated_at
                """,
                (record["id"], json.dumps(record, default=str), now, now),
            )
        logger.info("Record upserted", table=table, record_id=record["id"])
        return record

    def update(self, table: str, record_id: str, changes: Record) -> Record:
        """Merge ``changes`` into the stored document.

        Raises:
            RecordNotFoundError: If ``record_id`` does not exist.
        """
        check_table(table)
        changes = {key: value for key, value in changes.items() if key != "id"}
        with self._get_connection(table=table, record_id=record_id) as conn:
            row = conn.execute(f"SELECT data FROM {table} WHERE id = ?", (record_id,)).fetchone()
            if row is None:
                raise RecordNotFoundError(
                    "Record not found",
                    table=table,
                    record_id=record_id,
                )
            merged = {**json.loads(row["data"]), **changes}
            conn.execute(
                f"UPDATE {table} SET data = ?, updated_at = ? WHERE id = ?",
                (json.dumps(merged, default=str), datetime.now().isoformat(), record_id),
            )
        logger.info("Record updated", table=table, record_id=record_id, fields=sorted(changes))
        return merged

    def delete(self, table: str, record_id: str) -> bool:
        check_table(table)
        with self._get_connection(table=table, record_id=record_id) as conn:
            deleted = conn.execute(f"DELETE FROM {table} WHERE id = ?", (record_id,)).rowcount > 0
        if deleted:
            logger.info("Record deleted", table=table, record_id=record_id)
        return deleted


# =============================================================================
# Singleton Instance
# =============================================================================


_store_instance: SQLiteTableStore | None = None


def get_store() -> SQLiteTableStore:
    """Get the global store, created from settings on first use."""
    global _store_instance  # noqa: PLW0603

    if _store_instance is None:
        from rpg_companion.core.config import get_settings

        _store_instance = SQLiteTableStore(get_settings().storage.database_path)

    return _store_instance


def reset_store() -> None:
    """Drop the global store so the next ``get_store()`` reads settings again."""
    global _store_instance  # noqa: PLW0603
    _store_instance = None


__all__ = [
    "SQLiteTableStore",
    "get_store",
    "reset_store",
]
