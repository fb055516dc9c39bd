"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the RPG companion test suite.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator

    from rpg_companion.auth.identity import Identity
    from rpg_companion.engine.dice import DiceRoller
    from rpg_companion.models.character import Character
    from rpg_companion.storage.database import SQLiteTableStore


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache and store singleton around each test."""
    from rpg_companion.core.config import clear_settings_cache
    from rpg_companion.storage.database import reset_store

    clear_settings_cache()
    reset_store()
    yield
    clear_settings_cache()
    reset_store()


@pytest.fixture(autouse=True)
def isolated_cwd(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Run each test in its own directory so default paths and .env stay local."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "RPG_COMPANION_DEBUG": "true",
        "RPG_COMPANION_LOG_LEVEL": "DEBUG",
        "RPG_COMPANION_DATABASE_PATH": str(tmp_path / "db" / "companion.db"),
        "RPG_COMPANION_DICE_MAX_COUNT": "12",
        "RPG_COMPANION_DICE_SEED": "42",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Dice Fixtures
# =============================================================================


class ScriptedRandom:
    """Random source that returns queued values in order.

    Every value must lie within the requested ``[a, b]``; running out of
    values fails the test.
    """

    def __init__(self, values: Iterable[int] = ()) -> None:
        self.values: deque[int] = deque(values)
        self.calls: list[tuple[int, int]] = []

    def queue(self, *values: int) -> None:
        self.values.extend(values)

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        if not self.values:
            raise AssertionError(f"No scripted value left for randint({a}, {b})")
        value = self.values.popleft()
        if not a <= value <= b:
            raise AssertionError(f"Scripted value {value} outside [{a}, {b}]")
        return value


@pytest.fixture
def scripted_random() -> ScriptedRandom:
    """An empty scripted random source; queue values in the test."""
    return ScriptedRandom()


@pytest.fixture
def scripted_roller(scripted_random: ScriptedRandom) -> DiceRoller:
    """A DiceRoller drawing from ``scripted_random``."""
    from rpg_companion.engine.dice import DiceRoller

    return DiceRoller(scripted_random)


@pytest.fixture
def dice_roller() -> DiceRoller:
    """A seeded DiceRoller for range checks."""
    from rpg_companion.engine.dice import DiceRoller

    return DiceRoller(seed=1234)


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def sample_attributes() -> dict[str, int]:
    """Provide sample attribute values.

    Returns:
        Dictionary of attribute values keyed by code.
    """
    return {"STR": 16, "CON": 14, "AGL": 13, "INT": 10, "WIL": 10, "CHA": 8}


@pytest.fixture
def sample_character_data(sample_attributes: dict[str, int]) -> dict[str, Any]:
    """Provide sample character data for testing.

    Args:
        sample_attributes: Attribute values.

    Returns:
        Dictionary of character data in record shape.
    """
    return {
        "user_id": "user-1",
        "name": "Ylva Stormborn",
        "kin": "Human",
        "profession": "Fighter",
        "attributes": sample_attributes,
        "trained_skills": ["Swords", "Evade"],
        "current_hp": 9,
        "current_wp": 8,
    }


@pytest.fixture
def sample_character(sample_character_data: dict[str, Any]) -> Character:
    """Create a sample Character snapshot."""
    from rpg_companion.models.character import Character

    return Character.model_validate(sample_character_data)


@pytest.fixture
def sample_mage() -> Character:
    """A Mage at full HP/WP."""
    from rpg_companion.models.character import Character

    return Character(
        user_id="user-2",
        name="Vela the Grey",
        profession="Mage",
        attributes={"STR": 8, "CON": 11, "AGL": 10, "INT": 16, "WIL": 15, "CHA": 12},
    )


# =============================================================================
# Storage and Identity Fixtures
# =============================================================================


@pytest.fixture
def store(tmp_path: Path) -> SQLiteTableStore:
    """A fresh SQLite table store in a temporary directory."""
    from rpg_companion.storage.database import SQLiteTableStore

    return SQLiteTableStore(tmp_path / "companion.db")


@pytest.fixture
def admin() -> Identity:
    from rpg_companion.auth.identity import Identity

    return Identity(user_id="admin-1", email="gm@example.com", username="gm", is_admin=True)


@pytest.fixture
def player() -> Identity:
    from rpg_companion.auth.identity import Identity

    return Identity(user_id="user-1", email="player@example.com", username="player")
