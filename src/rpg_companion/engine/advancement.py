"""Advancement eligibility.

Level milestones, each evaluated independently so a single level can open
several advancements at once:

- attribute: every 4th level
- skill: every 3rd level
- spell (Mage) or heroic ability (everyone else): every 5th level
"""

from __future__ import annotations

from dataclasses import dataclass

from rpg_companion.core.constants import (
    ABILITY_ADVANCEMENT_INTERVAL,
    ATTRIBUTE_ADVANCEMENT_INTERVAL,
    SKILL_ADVANCEMENT_INTERVAL,
)
from rpg_companion.core.exceptions import InvalidArgumentError
from rpg_companion.models.enums import AdvancementType, Profession


@dataclass(frozen=True)
class MilestoneProgress:
    """Progress towards the next milestone of one advancement type.

    Attributes:
        advancement: The advancement this milestone grants.
        interval: Levels between milestones.
        levels_remaining: Levels until the next milestone.
        fill: Fraction of the current interval completed, in ``[0, 1)``.
    """

    advancement: AdvancementType
    interval: int
    levels_remaining: int
    fill: float


def ability_advancement(profession: Profession | str) -> AdvancementType:
    """Spell for a Mage, heroic ability for anyone else.

    Raises:
        InvalidArgumentError: If ``profession`` is unknown.
    """
    if Profession.parse(profession).is_spellcaster:
        return AdvancementType.SPELL
    return AdvancementType.HEROIC


def _milestones(profession: Profession | str) -> list[tuple[AdvancementType, int]]:
    return [
        (AdvancementType.ATTRIBUTE, ATTRIBUTE_ADVANCEMENT_INTERVAL),
        (AdvancementType.SKILL, SKILL_ADVANCEMENT_INTERVAL),
        (ability_advancement(profession), ABILITY_ADVANCEMENT_INTERVAL),
    ]


def _check_level(level: int) -> None:
    if level < 0:
        raise InvalidArgumentError(
            f"Level cannot be negative, got {level}",
            argument="level",
            invalid_value=level,
        )


def eligible_advancements(level: int, profession: Profession | str) -> frozenset[AdvancementType]:
    """Advancements unlocked at exactly ``level``.

    Example:
        >>> sorted(eligible_advancements(12, "Mage"))
        [<AdvancementType.ATTRIBUTE: 'attribute'>, <AdvancementType.SKILL: 'skill'>]
    """
    _check_level(level)
    return frozenset(
        advancement
        for advancement, interval in _milestones(profession)
        if level >= interval and level % interval == 0
    )


def milestone_progress(level: int, profession: Profession | str) -> list[MilestoneProgress]:
    """Progress bars for the next attribute, skill and spell/heroic milestones."""
    _check_level(level)
    return [
        MilestoneProgress(
            advancement=advancement,
            interval=interval,
            levels_remaining=interval - (level % interval),
            fill=(level % interval) / interval,
        )
        for advancement, interval in _milestones(profession)
    ]


__all__ = [
    "MilestoneProgress",
    "ability_advancement",
    "eligible_advancements",
    "milestone_progress",
]
