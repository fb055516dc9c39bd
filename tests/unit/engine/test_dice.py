"""Tests for dice rolling mechanics."""

from __future__ import annotations

import pytest

from rpg_companion.core.config import DiceSettings
from rpg_companion.core.exceptions import DiceRollError, InvalidArgumentError, PushNotAllowedError
from rpg_companion.engine.dice import DiceRoll, DiceRoller, DiceSession, dice_sum


class TestDiceRoller:
    """Tests for the DiceRoller class."""

    def test_ten_d20(self, dice_roller: DiceRoller) -> None:
        """Test rolling the maximum number of d20s."""
        results = dice_roller.roll(20, 10)

        assert len(results) == 10
        assert all(1 <= value <= 20 for value in results)

    @pytest.mark.parametrize("sides", [4, 6, 8, 10, 12, 20])
    def test_results_in_range(self, dice_roller: DiceRoller, sides: int) -> None:
        for value in dice_roller.roll(sides, 10):
            assert 1 <= value <= sides

    @pytest.mark.parametrize("count", [0, -1, 11])
    def test_count_out_of_range_rejected(self, dice_roller: DiceRoller, count: int) -> None:
        """Test counts outside 1..10 are rejected, never clamped."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            dice_roller.roll(6, count)

        assert exc_info.value.details["argument"] == "count"

    def test_too_few_sides_rejected(self, dice_roller: DiceRoller) -> None:
        with pytest.raises(DiceRollError):
            dice_roller.roll(1, 1)

    def test_scripted_source(self, scripted_random, scripted_roller: DiceRoller) -> None:
        """Test results come from the random source in order."""
        scripted_random.queue(3, 6, 1)

        assert scripted_roller.roll(6, 3) == [3, 6, 1]
        assert scripted_random.calls == [(1, 6)] * 3

    def test_seed_is_reproducible(self) -> None:
        assert DiceRoller(seed=99).roll(20, 10) == DiceRoller(seed=99).roll(20, 10)

    def test_from_settings(self) -> None:
        roller = DiceRoller.from_settings(DiceSettings(max_count=3, seed=5))

        assert roller.max_count == 3
        with pytest.raises(DiceRollError):
            roller.roll(6, 4)

    def test_dice_sum(self) -> None:
        assert dice_sum([3, 4]) == 7
        assert dice_sum([]) == 0


class TestExpressionRolls:
    """Tests for dice notation rolls through d20."""

    def test_simple_expression(self, dice_roller: DiceRoller) -> None:
        result = dice_roller.roll_expression("2d6")

        assert 2 <= result.total <= 12
        assert result.expression == "2d6"
        assert result.breakdown

    def test_expression_is_normalized(self, dice_roller: DiceRoller) -> None:
        result = dice_roller.roll_expression("1D8 + 2")

        assert result.expression == "1d8+2"
        assert 3 <= result.total <= 10

    @pytest.mark.parametrize("expression", ["", "   ", "2x6", "1d6+"])
    def test_invalid_expression(self, dice_roller: DiceRoller, expression: str) -> None:
        with pytest.raises(DiceRollError):
            dice_roller.roll_expression(expression)

    def test_damage_with_bonus(self, dice_roller: DiceRoller) -> None:
        """Test STR 16 adds a D6 to weapon damage."""
        result = dice_roller.roll_damage("2D6", "STR", 16)

        assert result.expression == "2d6+1d6"
        assert 3 <= result.total <= 18

    def test_damage_without_bonus(self, dice_roller: DiceRoller) -> None:
        result = dice_roller.roll_damage("1D8", "INT", 18)

        assert result.expression == "1d8"


class TestDiceSession:
    """Tests for roll history and pushing."""

    def test_history_newest_first(self, scripted_random, scripted_roller: DiceRoller) -> None:
        scripted_random.queue(2, 5, 17)
        session = DiceSession(scripted_roller)

        first = session.roll(6, 2)
        second = session.roll(20)

        assert session.history == (second, first)
        assert first.total == 7
        assert second.label == "d20"
        assert first.label == "2d6"

    def test_push_fresh_d20(self, scripted_random, scripted_roller: DiceRoller) -> None:
        scripted_random.queue(4, 15)
        session = DiceSession(scripted_roller)
        session.roll(20)

        pushed = session.push()

        assert pushed.pushed is True
        assert pushed.results == (15,)
        assert pushed.sides == 20
        assert session.last_roll is pushed
        assert len(session.history) == 2

    def test_second_push_rejected(self, scripted_random, scripted_roller: DiceRoller) -> None:
        """Test a pushed roll can never be pushed again."""
        scripted_random.queue(4, 15)
        session = DiceSession(scripted_roller)
        session.roll(20)
        session.push()

        assert session.can_push is False
        with pytest.raises(PushNotAllowedError):
            session.push()
        assert len(session.history) == 2

    def test_push_without_roll_rejected(self) -> None:
        with pytest.raises(PushNotAllowedError):
            DiceSession(DiceRoller(seed=1)).push()

    def test_push_other_die_rejected(self, scripted_random, scripted_roller: DiceRoller) -> None:
        scripted_random.queue(3)
        session = DiceSession(scripted_roller)
        session.roll(6)

        with pytest.raises(PushNotAllowedError):
            session.push()

    def test_new_roll_allows_push_again(self, scripted_random, scripted_roller: DiceRoller) -> None:
        scripted_random.queue(4, 15, 9)
        session = DiceSession(scripted_roller)
        session.roll(20)
        session.push()

        session.roll(20)

        assert session.can_push is True

    def test_clear_history(self, dice_roller: DiceRoller) -> None:
        session = DiceSession(dice_roller)
        session.roll(20)

        session.clear_history()

        assert session.history == ()
        assert session.last_roll is None
        assert session.can_push is False

    def test_invalid_roll_not_recorded(self, dice_roller: DiceRoller) -> None:
        session = DiceSession(dice_roller)

        with pytest.raises(InvalidArgumentError):
            session.roll(6, 0)
        assert session.history == ()

    def test_from_settings_pushable_die(self, scripted_random, scripted_roller: DiceRoller) -> None:
        """Test the configured pushable die replaces the d20."""
        scripted_random.queue(2, 5)
        session = DiceSession.from_settings(DiceSettings(pushable_sides=6), scripted_roller)
        session.roll(6)

        assert session.can_push is True
        assert session.push().results == (5,)

    def test_from_settings_d20_not_pushable_when_reconfigured(
        self, scripted_random, scripted_roller: DiceRoller
    ) -> None:
        scripted_random.queue(12)
        session = DiceSession.from_settings(DiceSettings(pushable_sides=6), scripted_roller)
        session.roll(20)

        assert session.can_push is False

    def test_from_settings_builds_roller(self) -> None:
        settings = DiceSettings(seed=9, max_count=4)

        session = DiceSession.from_settings(settings)

        assert session.pushable_sides == 20
        assert session.roller.max_count == 4
        assert session.roll(20).results == tuple(DiceRoller(seed=9).roll(20))


def test_dice_roll_total() -> None:
    assert DiceRoll(sides=6, results=(1, 2, 3)).total == 6
