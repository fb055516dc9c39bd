"""Rest and recovery.

Three mutually exclusive modes:

- round rest: recover 1D6 WP, capped at WIL.
- stretch rest: recover 1D6 HP (2D6 with a healer present), capped at CON.
- shift rest: HP to CON, WP to WIL, all conditions cleared.

Each resolver returns a RestOutcome carrying only the fields it changes.
The caller persists those fields and only then applies them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from rpg_companion.core.constants import (
    HEALER_RECOVERY_DICE,
    RECOVERY_DIE_SIDES,
    UNAIDED_RECOVERY_DICE,
)
from rpg_companion.core.logging import get_logger
from rpg_companion.engine.dice import dice_sum
from rpg_companion.models.character import Conditions
from rpg_companion.models.enums import RestType


if TYPE_CHECKING:
    from rpg_companion.engine.dice import DiceRoller
    from rpg_companion.models.character import Character


logger = get_logger(__name__)


@dataclass(frozen=True)
class RestOutcome:
    """Partial character state produced by a rest.

    Attributes:
        mode: Which rest was taken.
        changes: Only the character fields the rest changes.
        rolls: Individual recovery dice, empty for a shift rest.
        recovered: Sum of the recovery dice (WP for round, HP for stretch),
            None for a shift rest.
    """

    mode: RestType
    changes: dict[str, Any] = field(default_factory=dict)
    rolls: tuple[int, ...] = ()
    recovered: int | None = None

    def apply(self, character: Character) -> Character:
        """New snapshot of ``character`` with this outcome applied."""
        return character.with_changes(**self.changes)


def round_rest(character: Character, roller: DiceRoller) -> RestOutcome:
    """Recover 1D6 willpower points."""
    rolls = tuple(roller.roll(RECOVERY_DIE_SIDES, 1))
    recovered = dice_sum(rolls)
    new_wp = min(character.attributes.WIL, character.current_wp + recovered)
    logger.info("Round rest", character_id=character.id, recovered=recovered, current_wp=new_wp)
    return RestOutcome(
        mode=RestType.ROUND,
        changes={"current_wp": new_wp},
        rolls=rolls,
        recovered=recovered,
    )


def stretch_rest(
    character: Character,
    roller: DiceRoller,
    *,
    healer_present: bool = False,
) -> RestOutcome:
    """Recover hit points: 1D6, or 2D6 when a healer is present."""
    dice = HEALER_RECOVERY_DICE if healer_present else UNAIDED_RECOVERY_DICE
    rolls = tuple(roller.roll(RECOVERY_DIE_SIDES, dice))
    recovered = dice_sum(rolls)
    new_hp = min(character.attributes.CON, character.current_hp + recovered)
    logger.info(
        "Stretch rest",
        character_id=character.id,
        healer_present=healer_present,
        recovered=recovered,
        current_hp=new_hp,
    )
    return RestOutcome(
        mode=RestType.STRETCH,
        changes={"current_hp": new_hp},
        rolls=rolls,
        recovered=recovered,
    )


def shift_rest(character: Character) -> RestOutcome:
    """Full recovery: HP and WP to maximum, every condition cleared."""
    logger.info("Shift rest", character_id=character.id)
    return RestOutcome(
        mode=RestType.SHIFT,
        changes={
            "current_hp": character.attributes.CON,
            "current_wp": character.attributes.WIL,
            "conditions": Conditions.cleared(),
        },
    )


def resolve_rest(
    character: Character,
    mode: RestType | str,
    roller: DiceRoller,
    *,
    healer_present: bool = False,
) -> RestOutcome:
    """Dispatch to the resolver for ``mode``.

    ``healer_present`` only matters for a stretch rest.

    Raises:
        InvalidArgumentError: If ``mode`` is not a rest type.
    """
    mode = RestType.parse(mode)
    if mode is RestType.ROUND:
        return round_rest(character, roller)
    if mode is RestType.STRETCH:
        return stretch_rest(character, roller, healer_present=healer_present)
    return shift_rest(character)


__all__ = [
    "RestOutcome",
    "round_rest",
    "stretch_rest",
    "shift_rest",
    "resolve_rest",
]
