"""Enumeration types for the RPG companion.

Attributes, conditions, professions and the other closed vocabularies of
the ruleset. Each enum has a ``parse`` classmethod that turns loose input
(store records, form values) into a member or raises InvalidArgumentError.
"""

from __future__ import annotations

from enum import IntEnum, StrEnum
from typing import Any, Self

from rpg_companion.core.exceptions import InvalidArgumentError


class _ParseMixin:
    """Shared lookup for string enums by value or name, case-insensitively."""

    @classmethod
    def parse(cls, value: Any) -> Self:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            needle = value.strip().lower()
            for member in cls:  # type: ignore[attr-defined]
                if member.value.lower() == needle or member.name.lower() == needle:
                    return member
        raise InvalidArgumentError(
            f"Unknown {cls.__name__.lower()}: {value!r}",
            argument=cls.__name__.lower(),
            invalid_value=value,
        )


class Attribute(_ParseMixin, StrEnum):
    """The six core character attributes."""

    STR = "STR"
    CON = "CON"
    AGL = "AGL"
    INT = "INT"
    WIL = "WIL"
    CHA = "CHA"

    @property
    def full_name(self) -> str:
        """Get the full attribute name (e.g., 'Strength' for STR)."""
        names = {
            Attribute.STR: "Strength",
            Attribute.CON: "Constitution",
            Attribute.AGL: "Agility",
            Attribute.INT: "Intelligence",
            Attribute.WIL: "Willpower",
            Attribute.CHA: "Charisma",
        }
        return names[self]

    @property
    def condition(self) -> Condition:
        """The condition permanently linked to this attribute."""
        return ATTRIBUTE_CONDITIONS[self]


class Condition(_ParseMixin, StrEnum):
    """Boolean status effects, each tied to exactly one attribute."""

    EXHAUSTED = "exhausted"
    SICKLY = "sickly"
    DAZED = "dazed"
    ANGRY = "angry"
    SCARED = "scared"
    DISHEARTENED = "disheartened"

    @property
    def attribute(self) -> Attribute:
        """The attribute this condition is linked to."""
        return CONDITION_ATTRIBUTES[self]


ATTRIBUTE_CONDITIONS: dict[Attribute, Condition] = {
    Attribute.STR: Condition.EXHAUSTED,
    Attribute.CON: Condition.SICKLY,
    Attribute.AGL: Condition.DAZED,
    Attribute.INT: Condition.ANGRY,
    Attribute.WIL: Condition.SCARED,
    Attribute.CHA: Condition.DISHEARTENED,
}
"""Fixed, total bijection between attributes and conditions."""

CONDITION_ATTRIBUTES: dict[Condition, Attribute] = {
    condition: attribute for attribute, condition in ATTRIBUTE_CONDITIONS.items()
}


class Profession(_ParseMixin, StrEnum):
    """Character professions."""

    ARTISAN = "Artisan"
    BARD = "Bard"
    FIGHTER = "Fighter"
    HUNTER = "Hunter"
    KNIGHT = "Knight"
    MAGE = "Mage"
    MARINER = "Mariner"
    MERCHANT = "Merchant"
    SCHOLAR = "Scholar"
    THIEF = "Thief"

    @property
    def is_spellcaster(self) -> bool:
        """Mages learn spells where everyone else learns heroic abilities."""
        return self is Profession.MAGE


class AdvancementType(StrEnum):
    """Kinds of advancement a level milestone can grant."""

    ATTRIBUTE = "attribute"
    SKILL = "skill"
    SPELL = "spell"
    HEROIC = "heroic"

    @property
    def description(self) -> str:
        descriptions = {
            AdvancementType.ATTRIBUTE: "Increase an attribute by 1",
            AdvancementType.SKILL: "Learn a new skill",
            AdvancementType.SPELL: "Learn a new spell",
            AdvancementType.HEROIC: "Learn a new heroic ability",
        }
        return descriptions[self]


class RestType(_ParseMixin, StrEnum):
    """The three mutually exclusive recovery modes."""

    ROUND = "round"
    """Recover 1D6 willpower points."""

    STRETCH = "stretch"
    """Recover 1D6 hit points, 2D6 with a healer present."""

    SHIFT = "shift"
    """Recover everything and clear all conditions."""


class SkillCategory(StrEnum):
    """Skill groupings shown on the character sheet."""

    GENERAL = "general"
    WEAPON = "weapon"


class DieType(IntEnum):
    """Dice offered by the dice roller, valued by number of sides."""

    D4 = 4
    D6 = 6
    D8 = 8
    D10 = 10
    D12 = 12
    D20 = 20

    @property
    def label(self) -> str:
        return f"d{self.value}"


__all__ = [
    "Attribute",
    "Condition",
    "ATTRIBUTE_CONDITIONS",
    "CONDITION_ATTRIBUTES",
    "Profession",
    "AdvancementType",
    "RestType",
    "SkillCategory",
    "DieType",
]
