"""RPG Companion - character sheets and rules compendium.

Rules engine and services for a Dragonbane-style tabletop companion.

STATE OWNERSHIP:
- The table store owns the authoritative character record
- The rules engine is pure: it computes changes, it never persists them
- A character snapshot is replaced only after the store confirms a write

Example:
    >>> from rpg_companion import Character, CharacterService, SQLiteTableStore
    >>>
    >>> service = CharacterService(SQLiteTableStore("data/campaign.db"))
    >>> hero = service.create_character(Character(user_id="u1", name="Vela", profession="Mage"))
    >>> update = service.rest(hero.id, "stretch", healer_present=True)
    >>> print(update.detail.recovered, update.character.current_hp)

Modules:
    core: Configuration, logging, constants and exceptions.
    models: Pydantic V2 character and compendium schemas.
    engine: Skill chances, rest recovery, advancement and dice.
    storage: Table store protocol and its SQLite implementation.
    auth: Identity collaborator and credential validation.
    services: Serialized character updates and compendium management.
"""

from __future__ import annotations

# Core
from rpg_companion.core.config import Settings, get_settings
from rpg_companion.core.exceptions import (
    CollaboratorError,
    CompanionError,
    InvalidArgumentError,
)
from rpg_companion.core.logging import configure_logging, configure_logging_from_settings, get_logger

# Models
from rpg_companion.models.character import Attributes, Character, Conditions
from rpg_companion.models.compendium import CompendiumEntry, CompendiumTemplate
from rpg_companion.models.enums import (
    AdvancementType,
    Attribute,
    Condition,
    Profession,
    RestType,
)

# Engine
from rpg_companion.engine.advancement import eligible_advancements, milestone_progress
from rpg_companion.engine.dice import DiceRoller, DiceSession
from rpg_companion.engine.rest import resolve_rest
from rpg_companion.engine.rules import base_chance, skill_chance

# Storage and services
from rpg_companion.services.characters import CharacterService, CharacterSheetState
from rpg_companion.services.compendium import CompendiumService
from rpg_companion.storage.database import SQLiteTableStore


__version__ = "0.1.0"
__all__ = [
    "__version__",
    # Core
    "CompanionError",
    "InvalidArgumentError",
    "CollaboratorError",
    "Settings",
    "get_settings",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    # Models
    "Attributes",
    "Character",
    "Conditions",
    "CompendiumEntry",
    "CompendiumTemplate",
    "AdvancementType",
    "Attribute",
    "Condition",
    "Profession",
    "RestType",
    # Engine
    "base_chance",
    "skill_chance",
    "resolve_rest",
    "eligible_advancements",
    "milestone_progress",
    "DiceRoller",
    "DiceSession",
    # Services
    "CharacterService",
    "CharacterSheetState",
    "CompendiumService",
    "SQLiteTableStore",
]
