"""Pydantic models for characters and the compendium."""

from __future__ import annotations

from rpg_companion.models.base import SnapshotModel
from rpg_companion.models.character import (
    Attributes,
    Character,
    Conditions,
    Experience,
    InventoryItem,
)
from rpg_companion.models.compendium import (
    DEFAULT_TEMPLATES,
    CompendiumEntry,
    CompendiumTemplate,
    template_placeholders,
)
from rpg_companion.models.enums import (
    ATTRIBUTE_CONDITIONS,
    CONDITION_ATTRIBUTES,
    AdvancementType,
    Attribute,
    Condition,
    DieType,
    Profession,
    RestType,
    SkillCategory,
)


__all__ = [
    "SnapshotModel",
    # Enums
    "Attribute",
    "Condition",
    "ATTRIBUTE_CONDITIONS",
    "CONDITION_ATTRIBUTES",
    "Profession",
    "AdvancementType",
    "RestType",
    "SkillCategory",
    "DieType",
    # Character
    "Attributes",
    "Conditions",
    "Experience",
    "InventoryItem",
    "Character",
    # Compendium
    "CompendiumEntry",
    "CompendiumTemplate",
    "DEFAULT_TEMPLATES",
    "template_placeholders",
]
