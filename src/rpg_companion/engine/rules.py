"""Resolution-chance rules.

Pure functions from attribute values, trained skills and conditions to the
numbers printed on a character sheet. Nothing here reads or writes state.

Condition linkage is informational: an active condition marks the skills
of its attribute as ``affected`` but does not change their chance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rpg_companion.core.constants import (
    BASE_CHANCE_STEPS,
    DAMAGE_BONUS_THRESHOLD,
    MAX_BASE_CHANCE,
    SMALL_DAMAGE_BONUS_LIMIT,
    TRAINED_SKILL_MULTIPLIER,
)
from rpg_companion.core.exceptions import InvalidArgumentError
from rpg_companion.models.enums import Attribute, Condition, SkillCategory


if TYPE_CHECKING:
    from rpg_companion.models.character import Character


DAMAGE_BONUS_ATTRIBUTES = frozenset({Attribute.STR, Attribute.AGL})


@dataclass(frozen=True)
class Skill:
    """A skill and the attribute it is rolled against."""

    name: str
    attribute: Attribute
    category: SkillCategory


def _skills(category: SkillCategory, *pairs: tuple[str, Attribute]) -> dict[str, Skill]:
    return {name: Skill(name, attribute, category) for name, attribute in pairs}


GENERAL_SKILLS = _skills(
    SkillCategory.GENERAL,
    ("Acrobatics", Attribute.AGL),
    ("Awareness", Attribute.INT),
    ("Bartering", Attribute.CHA),
    ("Beast Lore", Attribute.INT),
    ("Bluffing", Attribute.CHA),
    ("Bushcraft", Attribute.INT),
    ("Crafting", Attribute.STR),
    ("Evade", Attribute.AGL),
    ("Healing", Attribute.INT),
    ("Hunting & Fishing", Attribute.AGL),
    ("Languages", Attribute.INT),
    ("Myths & Legends", Attribute.INT),
    ("Performance", Attribute.CHA),
    ("Persuasion", Attribute.CHA),
    ("Riding", Attribute.AGL),
    ("Seamanship", Attribute.INT),
    ("Sleight of Hand", Attribute.AGL),
    ("Sneaking", Attribute.AGL),
    ("Spot Hidden", Attribute.INT),
    ("Swimming", Attribute.AGL),
)

WEAPON_SKILLS = _skills(
    SkillCategory.WEAPON,
    ("Axes", Attribute.STR),
    ("Bows", Attribute.AGL),
    ("Brawling", Attribute.STR),
    ("Crossbows", Attribute.AGL),
    ("Hammers", Attribute.STR),
    ("Knives", Attribute.AGL),
    ("Slings", Attribute.AGL),
    ("Spears", Attribute.STR),
    ("Staves", Attribute.AGL),
    ("Swords", Attribute.STR),
)

SKILLS: dict[str, Skill] = {**GENERAL_SKILLS, **WEAPON_SKILLS}


# =============================================================================
# Chances
# =============================================================================


def base_chance(attribute_value: int) -> int:
    """Base chance tier for an attribute value.

    ==============  ===========
    value           base chance
    ==============  ===========
    <= 5            3
    6-8             4
    9-12            5
    13-15           6
    > 15            7
    ==============  ===========
    """
    for upper_bound, chance in BASE_CHANCE_STEPS:
        if attribute_value <= upper_bound:
            return chance
    return MAX_BASE_CHANCE


def skill_chance(attribute_value: int, is_trained: bool) -> int:
    """Skill chance: base chance, doubled when trained.

    No cap is applied.
    """
    chance = base_chance(attribute_value)
    return chance * TRAINED_SKILL_MULTIPLIER if is_trained else chance


def damage_bonus(attribute: Attribute | str, attribute_value: int) -> str | None:
    """Extra damage die granted by a high STR or AGL.

    Returns:
        ``"+D4"`` for 13-15, ``"+D6"`` above 15, otherwise None. Always None
        for attributes other than STR and AGL.

    Raises:
        InvalidArgumentError: If ``attribute`` is not an attribute code.
    """
    if Attribute.parse(attribute) not in DAMAGE_BONUS_ATTRIBUTES:
        return None
    if attribute_value <= DAMAGE_BONUS_THRESHOLD:
        return None
    if attribute_value <= SMALL_DAMAGE_BONUS_LIMIT:
        return "+D4"
    return "+D6"


# =============================================================================
# Condition Linkage
# =============================================================================


def condition_for(attribute: Attribute | str) -> Condition:
    """The condition permanently linked to an attribute.

    Raises:
        InvalidArgumentError: If ``attribute`` is not an attribute code.
    """
    return Attribute.parse(attribute).condition


def attribute_for(condition: Condition | str) -> Attribute:
    """The attribute a condition is linked to.

    Raises:
        InvalidArgumentError: If ``condition`` is not a condition name.
    """
    return Condition.parse(condition).attribute


# =============================================================================
# Character Sheet Values
# =============================================================================


@dataclass(frozen=True)
class SkillValue:
    """A skill as printed on a character sheet."""

    name: str
    attribute: Attribute
    category: SkillCategory
    chance: int
    trained: bool
    affected: bool


@dataclass(frozen=True)
class AttributeSummary:
    """An attribute as printed on a character sheet."""

    attribute: Attribute
    value: int
    base_chance: int
    damage_bonus: str | None
    condition: Condition
    condition_active: bool


def skill_attribute(skill: str) -> Attribute:
    """The attribute a skill is rolled against.

    Raises:
        InvalidArgumentError: If the skill is not in the skill table.
    """
    try:
        return SKILLS[skill].attribute
    except KeyError:
        raise InvalidArgumentError(
            f"Unknown skill: {skill!r}",
            argument="skill",
            invalid_value=skill,
        ) from None


def evaluate_skill(character: Character, skill: str) -> SkillValue:
    """Chance for one skill of a character."""
    attribute = skill_attribute(skill)
    trained = character.is_trained(skill)
    return SkillValue(
        name=skill,
        attribute=attribute,
        category=SKILLS[skill].category,
        chance=skill_chance(character.attributes.get(attribute), trained),
        trained=trained,
        affected=character.conditions.is_active(attribute.condition),
    )


def skill_sheet(character: Character) -> list[SkillValue]:
    """Every skill of the character, general skills first."""
    return [evaluate_skill(character, name) for name in SKILLS]


def attribute_summary(character: Character, attribute: Attribute | str) -> AttributeSummary:
    attribute = Attribute.parse(attribute)
    value = character.attributes.get(attribute)
    return AttributeSummary(
        attribute=attribute,
        value=value,
        base_chance=base_chance(value),
        damage_bonus=damage_bonus(attribute, value),
        condition=attribute.condition,
        condition_active=character.conditions.is_active(attribute.condition),
    )


__all__ = [
    "Skill",
    "GENERAL_SKILLS",
    "WEAPON_SKILLS",
    "SKILLS",
    "base_chance",
    "skill_chance",
    "damage_bonus",
    "condition_for",
    "attribute_for",
    "SkillValue",
    "AttributeSummary",
    "skill_attribute",
    "evaluate_skill",
    "skill_sheet",
    "attribute_summary",
]
