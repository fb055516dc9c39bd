"""Storage module: the table store collaborator and its SQLite implementation."""

from rpg_companion.storage.base import (
    CHARACTERS_TABLE,
    COMPENDIUM_TABLE,
    TABLES,
    TEMPLATES_TABLE,
    Record,
    TableStore,
)
from rpg_companion.storage.database import SQLiteTableStore, get_store, reset_store

__all__ = [
    "CHARACTERS_TABLE",
    "COMPENDIUM_TABLE",
    "TEMPLATES_TABLE",
    "TABLES",
    "Record",
    "TableStore",
    "SQLiteTableStore",
    "get_store",
    "reset_store",
]
