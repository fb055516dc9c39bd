"""Rules constants for the RPG companion.

These are the fixed numbers of the ruleset: attribute bounds, the
base-chance step table, damage bonus thresholds, advancement intervals
and dice limits.
"""

from __future__ import annotations

# =============================================================================
# Attributes
# =============================================================================

MIN_ATTRIBUTE = 1
"""Lowest attribute value a character can have."""

MAX_ATTRIBUTE = 18
"""Highest attribute value a character can have."""

BASE_CHANCE_STEPS: tuple[tuple[int, int], ...] = (
    (5, 3),
    (8, 4),
    (12, 5),
    (15, 6),
)
"""(upper bound inclusive, base chance) pairs; anything above the last bound is 7."""

MAX_BASE_CHANCE = 7
"""Base chance for attribute values above the last step."""

TRAINED_SKILL_MULTIPLIER = 2
"""Trained skills double the base chance."""

# =============================================================================
# Damage Bonus
# =============================================================================

DAMAGE_BONUS_THRESHOLD = 12
"""STR/AGL values at or below this grant no damage bonus."""

SMALL_DAMAGE_BONUS_LIMIT = 15
"""STR/AGL values up to this grant +D4, above it +D6."""

# =============================================================================
# Rest & Recovery
# =============================================================================

RECOVERY_DIE_SIDES = 6
"""Round and stretch rests recover with six-sided dice."""

HEALER_RECOVERY_DICE = 2
"""Stretch rest recovery dice when a healer is present."""

UNAIDED_RECOVERY_DICE = 1
"""Stretch rest recovery dice without a healer."""

# =============================================================================
# Advancement
# =============================================================================

ATTRIBUTE_ADVANCEMENT_INTERVAL = 4
"""An attribute increase is available every 4 levels."""

SKILL_ADVANCEMENT_INTERVAL = 3
"""A new skill is available every 3 levels."""

ABILITY_ADVANCEMENT_INTERVAL = 5
"""A spell (Mage) or heroic ability (others) is available every 5 levels."""

# =============================================================================
# Dice
# =============================================================================

MIN_DICE_COUNT = 1
"""Fewest dice a single roll request may ask for."""

MAX_DICE_COUNT = 10
"""Most dice a single roll request may ask for."""

PUSHABLE_DIE_SIDES = 20
"""Only d20 results may be pushed."""


__all__ = [
    "MIN_ATTRIBUTE",
    "MAX_ATTRIBUTE",
    "BASE_CHANCE_STEPS",
    "MAX_BASE_CHANCE",
    "TRAINED_SKILL_MULTIPLIER",
    "DAMAGE_BONUS_THRESHOLD",
    "SMALL_DAMAGE_BONUS_LIMIT",
    "RECOVERY_DIE_SIDES",
    "HEALER_RECOVERY_DICE",
    "UNAIDED_RECOVERY_DICE",
    "ATTRIBUTE_ADVANCEMENT_INTERVAL",
    "SKILL_ADVANCEMENT_INTERVAL",
    "ABILITY_ADVANCEMENT_INTERVAL",
    "MIN_DICE_COUNT",
    "MAX_DICE_COUNT",
    "PUSHABLE_DIE_SIDES",
]
