"""The table store collaborator.

Records are plain JSON-compatible dicts keyed by an ``id`` field. Any
backend that implements TableStore can stand in for the SQLite store
(a hosted table service, or a fake in tests).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from rpg_companion.core.exceptions import InvalidArgumentError


CHARACTERS_TABLE = "characters"
COMPENDIUM_TABLE = "compendium"
TEMPLATES_TABLE = "compendium_templates"

TABLES: frozenset[str] = frozenset({CHARACTERS_TABLE, COMPENDIUM_TABLE, TEMPLATES_TABLE})

Record = dict[str, Any]


class TableStore(Protocol):
    """Basic create/read/update/delete calls keyed by record id.

    Every method may raise StoreError (transport or constraint failure).
    Callers surface that error and do not retry.
    """

    def get(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: Sequence[str] = (),
    ) -> list[Record]:
        """Records whose fields equal every value in ``filters``."""
        ...

    def get_one(self, table: str, record_id: str) -> Record | None: ...

    def insert(self, table: str, record: Record) -> Record:
        """Create a record; fails if its id already exists."""
        ...

    def upsert(self, table: str, record: Record) -> Record:
        """Create or fully replace a record."""
        ...

    def update(self, table: str, record_id: str, changes: Record) -> Record:
        """Merge ``changes`` into an existing record.

        Raises:
            RecordNotFoundError: If the id does not exist.
        """
        ...

    def delete(self, table: str, record_id: str) -> bool:
        """Delete a record. Returns False if it did not exist."""
        ...


def check_table(table: str) -> str:
    """Reject table names outside the known schema.

    Raises:
        InvalidArgumentError: For unknown tables.
    """
    if table not in TABLES:
        raise InvalidArgumentError(
            f"Unknown table: {table!r}",
            argument="table",
            invalid_value=table,
        )
    return table


__all__ = [
    "CHARACTERS_TABLE",
    "COMPENDIUM_TABLE",
    "TEMPLATES_TABLE",
    "TABLES",
    "Record",
    "TableStore",
    "check_table",
]
