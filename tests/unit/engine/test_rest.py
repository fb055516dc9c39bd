"""Tests for rest and recovery resolution."""

from __future__ import annotations

import pytest

from rpg_companion.core.exceptions import InvalidArgumentError
from rpg_companion.engine.dice import DiceRoller
from rpg_companion.engine.rest import resolve_rest, round_rest, shift_rest, stretch_rest
from rpg_companion.models.character import Character, Conditions
from rpg_companion.models.enums import RestType


@pytest.fixture
def wounded() -> Character:
    """WIL 10 at 8 WP, CON 12 at 3 HP, two conditions active."""
    return Character(
        name="Brann",
        profession="Hunter",
        attributes={"CON": 12, "WIL": 10},
        current_hp=3,
        current_wp=8,
        conditions={"exhausted": True, "scared": True},
    )


class TestRoundRest:
    """Tests for the round rest (WP recovery)."""

    def test_capped_at_willpower(self, wounded: Character, scripted_random, scripted_roller: DiceRoller) -> None:
        """Test 8 WP + 5 with WIL 10 lands on 10."""
        scripted_random.queue(5)

        outcome = round_rest(wounded, scripted_roller)

        assert outcome.changes == {"current_wp": 10}
        assert outcome.rolls == (5,)
        assert outcome.recovered == 5
        assert outcome.mode is RestType.ROUND

    def test_below_cap(self, wounded: Character, scripted_random, scripted_roller: DiceRoller) -> None:
        scripted_random.queue(1)

        assert round_rest(wounded, scripted_roller).changes == {"current_wp": 9}

    def test_does_not_touch_hp(self, wounded: Character, scripted_random, scripted_roller: DiceRoller) -> None:
        scripted_random.queue(6)

        rested = round_rest(wounded, scripted_roller).apply(wounded)

        assert rested.current_hp == wounded.current_hp
        assert rested.conditions == wounded.conditions


class TestStretchRest:
    """Tests for the stretch rest (HP recovery)."""

    def test_healer_rolls_two_dice(self, wounded: Character, scripted_random, scripted_roller: DiceRoller) -> None:
        """Test a healer adds a second die: [3, 4] recovers 7."""
        scripted_random.queue(3, 4)

        outcome = stretch_rest(wounded, scripted_roller, healer_present=True)

        assert outcome.rolls == (3, 4)
        assert outcome.recovered == 7
        assert outcome.changes == {"current_hp": 10}

    def test_unaided_rolls_one_die(self, wounded: Character, scripted_random, scripted_roller: DiceRoller) -> None:
        scripted_random.queue(4)

        outcome = stretch_rest(wounded, scripted_roller)

        assert outcome.rolls == (4,)
        assert outcome.changes == {"current_hp": 7}

    def test_capped_at_constitution(self, scripted_random, scripted_roller: DiceRoller) -> None:
        nearly_full = Character(name="Tove", profession="Knight", attributes={"CON": 12}, current_hp=11)
        scripted_random.queue(6, 6)

        outcome = stretch_rest(nearly_full, scripted_roller, healer_present=True)

        assert outcome.changes == {"current_hp": 12}
        assert outcome.recovered == 12


class TestShiftRest:
    """Tests for the shift rest (full recovery)."""

    def test_full_recovery(self, wounded: Character) -> None:
        outcome = shift_rest(wounded)
        rested = outcome.apply(wounded)

        assert rested.current_hp == 12
        assert rested.current_wp == 10
        assert rested.conditions == Conditions.cleared()
        assert rested.has_active_conditions is False
        assert outcome.rolls == ()
        assert outcome.recovered is None

    def test_no_dice_rolled(self, wounded: Character, scripted_random, scripted_roller: DiceRoller) -> None:
        resolve_rest(wounded, "shift", scripted_roller)

        assert scripted_random.calls == []

    def test_snapshot_untouched(self, wounded: Character) -> None:
        shift_rest(wounded).apply(wounded)

        assert wounded.current_hp == 3
        assert wounded.conditions.exhausted is True


class TestResolveRest:
    def test_dispatch_by_name(self, wounded: Character, scripted_random, scripted_roller: DiceRoller) -> None:
        scripted_random.queue(2, 2)

        outcome = resolve_rest(wounded, "STRETCH", scripted_roller, healer_present=True)

        assert outcome.mode is RestType.STRETCH
        assert outcome.recovered == 4

    def test_unknown_mode(self, wounded: Character, dice_roller: DiceRoller) -> None:
        with pytest.raises(InvalidArgumentError):
            resolve_rest(wounded, "nap", dice_roller)
