"""Application services that pair the rules engine with the store."""

from rpg_companion.services.characters import (
    CharacterService,
    CharacterSheetState,
    CharacterUpdate,
)
from rpg_companion.services.compendium import CompendiumService


__all__ = [
    "CharacterService",
    "CharacterSheetState",
    "CharacterUpdate",
    "CompendiumService",
]
