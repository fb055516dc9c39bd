"""Dice rolling for the RPG companion.

Three layers:

- ``DiceRoller.roll(sides, count)``: independent uniform draws in
  ``[1, sides]`` from a swappable random source. Scripted sources make
  rests and pushes deterministic in tests.
- ``DiceSession``: the in-memory roll history of one user session, with
  the push rule (one reroll of a fresh d20 result, never a second one).
- ``DiceRoller.roll_expression``: standard dice notation (``2d6+1d4``)
  evaluated with the d20 library, used for damage rolls.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Protocol

import d20

from rpg_companion.core.constants import MAX_DICE_COUNT, MIN_DICE_COUNT, PUSHABLE_DIE_SIDES
from rpg_companion.core.exceptions import DiceRollError, PushNotAllowedError
from rpg_companion.core.logging import get_logger
from rpg_companion.engine.rules import damage_bonus


if TYPE_CHECKING:
    from rpg_companion.core.config import DiceSettings
    from rpg_companion.models.enums import Attribute


logger = get_logger(__name__)


class RandomSource(Protocol):
    """Anything that yields uniform integers in ``[low, high]``.

    ``random.Random`` satisfies this protocol.
    """

    def randint(self, a: int, b: int) -> int: ...


@dataclass(frozen=True)
class DiceRoll:
    """One roll request and its results.

    Attributes:
        sides: Number of sides of the die rolled.
        results: Face values in the order they were rolled.
        pushed: Whether this roll is a push of an earlier d20 roll.
        timestamp: When the roll was made.
    """

    sides: int
    results: tuple[int, ...]
    pushed: bool = False
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def quantity(self) -> int:
        return len(self.results)

    @property
    def total(self) -> int:
        return dice_sum(self.results)

    @property
    def label(self) -> str:
        """Dice label such as ``d20`` or ``3d6``."""
        if self.quantity > 1:
            return f"{self.quantity}d{self.sides}"
        return f"d{self.sides}"


@dataclass(frozen=True)
class ExpressionRoll:
    """Result of rolling a dice notation expression.

    Attributes:
        expression: The expression that was rolled (normalized).
        total: The total result.
        breakdown: Human-readable breakdown from the d20 library.
    """

    expression: str
    total: int
    breakdown: str


def dice_sum(results: Iterable[int]) -> int:
    """Sum of a sequence of face values."""
    return sum(results)


class DiceRoller:
    """Uniform dice with a swappable random source.

    Example:
        >>> roller = DiceRoller(seed=7)
        >>> results = roller.roll(6, 3)
        >>> len(results)
        3
    """

    def __init__(
        self,
        random_source: RandomSource | None = None,
        *,
        seed: int | None = None,
        min_count: int = MIN_DICE_COUNT,
        max_count: int = MAX_DICE_COUNT,
    ) -> None:
        """Initialize the dice roller.

        Args:
            random_source: Source of uniform integers. Defaults to a private
                ``random.Random`` seeded with ``seed``.
            seed: Seed for the default random source.
            min_count: Fewest dice a single roll may request.
            max_count: Most dice a single roll may request.
        """
        self._random: RandomSource = random_source if random_source is not None else random.Random(seed)
        self.min_count = min_count
        self.max_count = max_count
        logger.debug(
            "DiceRoller initialized",
            seed=seed,
            scripted=random_source is not None,
            max_count=max_count,
        )

    @classmethod
    def from_settings(
        cls,
        settings: DiceSettings,
        random_source: RandomSource | None = None,
    ) -> DiceRoller:
        return cls(
            random_source,
            seed=settings.seed,
            min_count=settings.min_count,
            max_count=settings.max_count,
        )

    def roll(self, sides: int, count: int = 1) -> list[int]:
        """Roll ``count`` dice with ``sides`` sides each.

        Args:
            sides: Number of sides per die (at least 2).
            count: Number of dice, within ``[min_count, max_count]``.

        Returns:
            The face values in roll order.

        Raises:
            DiceRollError: If ``sides`` or ``count`` is out of range. The
                count is never silently clamped.
        """
        if sides < 2:
            raise DiceRollError(
                f"A die needs at least 2 sides, got {sides}",
                argument="sides",
                invalid_value=sides,
            )
        if not self.min_count <= count <= self.max_count:
            raise DiceRollError(
                f"Dice count must be between {self.min_count} and {self.max_count}, got {count}",
                argument="count",
                invalid_value=count,
            )

        results = [self._random.randint(1, sides) for _ in range(count)]
        logger.debug("Dice rolled", sides=sides, count=count, results=results)
        return results

    def roll_die(self, sides: int) -> int:
        """Roll a single die."""
        return self.roll(sides, 1)[0]

    def roll_expression(self, expression: str) -> ExpressionRoll:
        """Roll a dice notation expression such as ``2d6+1d4``.

        Raises:
            DiceRollError: If the expression is empty or cannot be parsed.
        """
        if not expression or not expression.strip():
            raise DiceRollError("Empty dice expression", expression=expression)

        normalized = expression.replace(" ", "").lower()
        try:
            result = d20.roll(normalized)
        except d20.RollError as exc:
            raise DiceRollError(
                f"Invalid dice expression: {exc}",
                expression=expression,
            ) from exc

        logger.info("Expression rolled", expression=normalized, total=result.total)
        return ExpressionRoll(
            expression=normalized,
            total=result.total,
            breakdown=str(result),
        )

    def roll_damage(
        self,
        weapon_dice: str,
        attribute: Attribute | str,
        value: int,
    ) -> ExpressionRoll:
        """Roll weapon damage plus the attribute's damage bonus die.

        Args:
            weapon_dice: Weapon damage in dice notation, e.g. ``2D6``.
            attribute: The attribute the attack used (only STR and AGL grant
                a bonus).
            value: That attribute's value.
        """
        bonus = damage_bonus(attribute, value)
        expression = weapon_dice.strip()
        if bonus:
            # "+D4" -> "+1d4"
            expression = f"{expression}+1{bonus.lstrip('+')}"
        return self.roll_expression(expression)


class DiceSession:
    """Roll history and push state for one user session.

    Push policy: ``push()`` is only allowed immediately after a fresh,
    unpushed roll of the pushable die (a d20 unless the dice settings say
    otherwise). Anything else raises PushNotAllowedError; a second push in
    a row is always rejected.
    """

    def __init__(
        self,
        roller: DiceRoller | None = None,
        *,
        pushable_sides: int = PUSHABLE_DIE_SIDES,
    ) -> None:
        self.roller = roller or DiceRoller()
        self.pushable_sides = pushable_sides
        self._history: list[DiceRoll] = []
        self._can_push = False

    @classmethod
    def from_settings(
        cls,
        settings: DiceSettings,
        roller: DiceRoller | None = None,
    ) -> DiceSession:
        """Build a session whose pushable die and roller follow the dice settings."""
        return cls(
            roller if roller is not None else DiceRoller.from_settings(settings),
            pushable_sides=settings.pushable_sides,
        )

    @property
    def history(self) -> Sequence[DiceRoll]:
        """All rolls of this session, newest first."""
        return tuple(self._history)

    @property
    def last_roll(self) -> DiceRoll | None:
        return self._history[0] if self._history else None

    @property
    def can_push(self) -> bool:
        return self._can_push

    def roll(self, sides: int, quantity: int = 1) -> DiceRoll:
        """Roll fresh dice and record them."""
        results = self.roller.roll(sides, quantity)
        return self._record(DiceRoll(sides=sides, results=tuple(results)))

    def push(self) -> DiceRoll:
        """Reroll the last roll of the pushable die once.

        Returns:
            A new single-die roll of the same die, marked ``pushed``.

        Raises:
            PushNotAllowedError: If there is no fresh roll of the pushable die.
        """
        last = self.last_roll
        if last is None or not self._can_push:
            raise PushNotAllowedError(
                "No roll available to push",
                details={"last_roll": last.label if last else None},
            )

        result = self.roller.roll_die(last.sides)
        pushed = self._record(DiceRoll(sides=last.sides, results=(result,), pushed=True))
        logger.info("Roll pushed", sides=last.sides, original=list(last.results), result=result)
        return pushed

    def clear_history(self) -> None:
        self._history.clear()
        self._can_push = False

    def _record(self, roll: DiceRoll) -> DiceRoll:
        self._history.insert(0, roll)
        self._can_push = not roll.pushed and roll.sides == self.pushable_sides
        return roll


__all__ = [
    "RandomSource",
    "DiceRoll",
    "ExpressionRoll",
    "DiceRoller",
    "DiceSession",
    "dice_sum",
]
