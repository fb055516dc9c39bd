"""Tests for the SQLite table store."""

from __future__ import annotations

from pathlib import Path

import pytest

from rpg_companion.core.exceptions import (
    InvalidArgumentError,
    RecordNotFoundError,
    StoreError,
)
from rpg_companion.storage.base import CHARACTERS_TABLE, COMPENDIUM_TABLE, TEMPLATES_TABLE
from rpg_companion.storage.database import SQLiteTableStore, get_store, reset_store


class TestSchema:
    def test_creates_database(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "companion.db"

        SQLiteTableStore(path)

        assert path.exists()

    def test_reopen_keeps_data(self, tmp_path: Path) -> None:
        path = tmp_path / "companion.db"
        SQLiteTableStore(path).insert(COMPENDIUM_TABLE, {"id": "e-1", "title": "Troll"})

        assert SQLiteTableStore(path).get_one(COMPENDIUM_TABLE, "e-1") == {"id": "e-1", "title": "Troll"}

    def test_unknown_table(self, store: SQLiteTableStore) -> None:
        with pytest.raises(InvalidArgumentError):
            store.get("users")


class TestWrites:
    """Tests for insert, upsert, update and delete."""

    def test_insert_assigns_id(self, store: SQLiteTableStore) -> None:
        record = store.insert(COMPENDIUM_TABLE, {"title": "Troll"})

        assert record["id"]
        assert store.get_one(COMPENDIUM_TABLE, record["id"]) == record

    def test_insert_duplicate_id(self, store: SQLiteTableStore) -> None:
        store.insert(COMPENDIUM_TABLE, {"id": "e-1", "title": "Troll"})

        with pytest.raises(StoreError) as exc_info:
            store.insert(COMPENDIUM_TABLE, {"id": "e-1", "title": "Ghoul"})

        assert exc_info.value.details["record_id"] == "e-1"
        assert store.get_one(COMPENDIUM_TABLE, "e-1")["title"] == "Troll"

    def test_upsert_replaces(self, store: SQLiteTableStore) -> None:
        store.upsert(COMPENDIUM_TABLE, {"id": "e-1", "title": "Troll", "content": "old"})
        store.upsert(COMPENDIUM_TABLE, {"id": "e-1", "title": "Troll"})

        assert store.get_one(COMPENDIUM_TABLE, "e-1") == {"id": "e-1", "title": "Troll"}
        assert store.count(COMPENDIUM_TABLE) == 1

    def test_update_merges(self, store: SQLiteTableStore) -> None:
        store.insert(CHARACTERS_TABLE, {"id": "c-1", "name": "Ylva", "current_hp": 9})

        merged = store.update(CHARACTERS_TABLE, "c-1", {"current_hp": 4, "id": "ignored"})

        assert merged == {"id": "c-1", "name": "Ylva", "current_hp": 4}
        assert store.get_one(CHARACTERS_TABLE, "c-1") == merged

    def test_update_missing(self, store: SQLiteTableStore) -> None:
        with pytest.raises(RecordNotFoundError):
            store.update(CHARACTERS_TABLE, "missing", {"current_hp": 1})

    def test_delete(self, store: SQLiteTableStore) -> None:
        store.insert(TEMPLATES_TABLE, {"id": "t-1", "name": "Rumor"})

        assert store.delete(TEMPLATES_TABLE, "t-1") is True
        assert store.delete(TEMPLATES_TABLE, "t-1") is False
        assert store.get_one(TEMPLATES_TABLE, "t-1") is None


class TestReads:
    """Tests for filtered, ordered reads."""

    @pytest.fixture
    def entries(self, store: SQLiteTableStore) -> SQLiteTableStore:
        for title, category in [("Troll", "monster"), ("Fireball", "spell"), ("Goblin", "monster")]:
            store.insert(COMPENDIUM_TABLE, {"title": title, "category": category})
        return store

    def test_insertion_order_by_default(self, entries: SQLiteTableStore) -> None:
        assert [r["title"] for r in entries.get(COMPENDIUM_TABLE)] == ["Troll", "Fireball", "Goblin"]

    def test_order_by_fields(self, entries: SQLiteTableStore) -> None:
        records = entries.get(COMPENDIUM_TABLE, order_by=("category", "title"))
        assert [r["title"] for r in records] == ["Goblin", "Troll", "Fireball"]

    def test_filter(self, entries: SQLiteTableStore) -> None:
        records = entries.get(COMPENDIUM_TABLE, {"category": "monster"}, order_by=("title",))
        assert [r["title"] for r in records] == ["Goblin", "Troll"]

    def test_filter_no_match(self, entries: SQLiteTableStore) -> None:
        assert entries.get(COMPENDIUM_TABLE, {"category": "item"}) == []

    def test_invalid_field_name(self, entries: SQLiteTableStore) -> None:
        with pytest.raises(InvalidArgumentError):
            entries.get(COMPENDIUM_TABLE, {"title') OR 1=1 --": "x"})


class TestSingleton:
    def test_get_store_uses_settings(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RPG_COMPANION_DATABASE_PATH", str(tmp_path / "global.db"))

        store = get_store()

        assert store is get_store()
        assert store.db_path == tmp_path / "global.db"
        reset_store()
        assert get_store() is not store
