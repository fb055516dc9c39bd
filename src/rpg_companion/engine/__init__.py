"""Rules engine for the RPG companion.

Pure functions over character snapshots. Nothing here touches the store;
callers persist the results.

Submodules:
    rules: Base chance, skill chance, damage bonus, condition linkage
    rest: Round, stretch and shift rests
    advancement: Level milestone eligibility and progress
    dice: Dice roller, roll history with push, dice expressions (d20 library)

Example:
    >>> from rpg_companion.engine import base_chance, skill_chance
    >>> base_chance(14), skill_chance(14, True)
    (6, 12)
"""

from __future__ import annotations

from rpg_companion.engine.advancement import (
    MilestoneProgress,
    ability_advancement,
    eligible_advancements,
    milestone_progress,
)
from rpg_companion.engine.dice import (
    DiceRoll,
    DiceRoller,
    DiceSession,
    ExpressionRoll,
    RandomSource,
    dice_sum,
)
from rpg_companion.engine.rest import (
    RestOutcome,
    resolve_rest,
    round_rest,
    shift_rest,
    stretch_rest,
)
from rpg_companion.engine.rules import (
    SKILLS,
    AttributeSummary,
    SkillValue,
    attribute_for,
    attribute_summary,
    base_chance,
    condition_for,
    damage_bonus,
    evaluate_skill,
    skill_attribute,
    skill_chance,
    skill_sheet,
)


__all__ = [
    # Rules
    "SKILLS",
    "base_chance",
    "skill_chance",
    "damage_bonus",
    "condition_for",
    "attribute_for",
    "skill_attribute",
    "evaluate_skill",
    "skill_sheet",
    "attribute_summary",
    "SkillValue",
    "AttributeSummary",
    # Rest
    "RestOutcome",
    "round_rest",
    "stretch_rest",
    "shift_rest",
    "resolve_rest",
    # Advancement
    "MilestoneProgress",
    "ability_advancement",
    "eligible_advancements",
    "milestone_progress",
    # Dice
    "RandomSource",
    "DiceRoll",
    "ExpressionRoll",
    "DiceRoller",
    "DiceSession",
    "dice_sum",
]
