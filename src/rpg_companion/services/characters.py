"""Character service.

Every mutation of a character goes through one pipeline, serialized per
character id:

1. load the authoritative record from the store
2. compute the partial change with the rules engine
3. validate the resulting snapshot
4. persist the partial change
5. only after the store confirms, return the new snapshot

A store failure propagates unchanged and no new snapshot is produced, so
a caller that only swaps its reference on success never shows state the
store has not accepted. Conflicting writers are resolved last-writer-wins.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from rpg_companion.core.config import get_settings
from rpg_companion.core.constants import MAX_ATTRIBUTE
from rpg_companion.core.exceptions import (
    CollaboratorError,
    GameRuleError,
    InvalidArgumentError,
    RecordNotFoundError,
)
from rpg_companion.core.logging import get_logger, log_context
from rpg_companion.engine.dice import DiceRoller
from rpg_companion.engine.rest import RestOutcome, resolve_rest
from rpg_companion.engine.rules import skill_attribute
from rpg_companion.models.character import Character, Experience, InventoryItem
from rpg_companion.models.enums import Attribute, Condition, RestType
from rpg_companion.storage.base import CHARACTERS_TABLE, TableStore


logger = get_logger(__name__)

Compute = Callable[[Character], tuple[dict[str, Any], Any]]


@dataclass(frozen=True)
class CharacterUpdate:
    """A confirmed change to a character.

    Attributes:
        character: The new snapshot, already persisted.
        changes: The partial record that was written.
        detail: Extra result of the operation (e.g. the RestOutcome).
    """

    character: Character
    changes: dict[str, Any] = field(default_factory=dict)
    detail: Any = None


def _check_amount(amount: int) -> int:
    if amount < 0:
        raise InvalidArgumentError(
            f"Amount cannot be negative, got {amount}",
            argument="amount",
            invalid_value=amount,
        )
    return amount


def _check_item_name(name: str) -> str:
    name = name.strip()
    if not name:
        raise InvalidArgumentError("An item needs a name", argument="name", invalid_value=name)
    return name


class CharacterService:
    """Reads and serialized writes of characters in the table store."""

    def __init__(self, store: TableStore, roller: DiceRoller | None = None) -> None:
        self._store = store
        self._roller = roller if roller is not None else DiceRoller.from_settings(get_settings().dice)
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    # =========================================================================
    # Pipeline
    # =========================================================================

    def _lock_for(self, character_id: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(character_id, threading.Lock())

    def _commit(self, character_id: str, action: str, compute: Compute) -> CharacterUpdate:
        with self._lock_for(character_id), log_context(character_id=character_id, action=action):
            current = self.get_character(character_id)
            changes, detail = compute(current)
            updated = current.with_changes(**changes)

            record = updated.to_record()
            partial = {key: record[key] for key in changes}
            try:
                self._store.update(CHARACTERS_TABLE, character_id, partial)
            except CollaboratorError as exc:
                logger.error("Character update not persisted", error=str(exc))
                raise

            logger.info("Character updated", fields=sorted(partial))
        return CharacterUpdate(character=updated, changes=partial, detail=detail)

    # =========================================================================
    # CRUD
    # =========================================================================

    def create_character(self, character: Character) -> Character:
        record = self._store.insert(CHARACTERS_TABLE, character.to_record())
        logger.info("Character created", character_id=record["id"], name=character.name)
        return Character.from_record(record)

    def get_character(self, character_id: str) -> Character:
        """Load the authoritative snapshot.

        Raises:
            RecordNotFoundError: If there is no such character.
        """
        record = self._store.get_one(CHARACTERS_TABLE, character_id)
        if record is None:
            raise RecordNotFoundError(
                "Character not found",
                table=CHARACTERS_TABLE,
                record_id=character_id,
            )
        return Character.from_record(record)

    def list_characters(self, user_id: str | None = None) -> list[Character]:
        """Characters ordered by name, optionally only those of one user."""
        filters = {"user_id": user_id} if user_id is not None else None
        records = self._store.get(CHARACTERS_TABLE, filters, order_by=("name",))
        return [Character.from_record(record) for record in records]

    def delete_character(self, character_id: str) -> bool:
        with self._lock_for(character_id):
            deleted = self._store.delete(CHARACTERS_TABLE, character_id)
        with self._locks_guard:
            self._locks.pop(character_id, None)
        logger.info("Character deleted", character_id=character_id, deleted=deleted)
        return deleted

    # =========================================================================
    # Conditions, HP and WP
    # =========================================================================

    def toggle_condition(self, character_id: str, condition: Condition | str) -> CharacterUpdate:
        condition = Condition.parse(condition)
        return self._commit(
            character_id,
            "toggle_condition",
            lambda c: ({"conditions": c.conditions.toggled(condition)}, condition),
        )

    def damage(self, character_id: str, amount: int = 1) -> CharacterUpdate:
        _check_amount(amount)
        return self._commit(
            character_id,
            "damage",
            lambda c: ({"current_hp": max(0, c.current_hp - amount)}, None),
        )

    def heal(self, character_id: str, amount: int = 1) -> CharacterUpdate:
        _check_amount(amount)
        return self._commit(
            character_id,
            "heal",
            lambda c: ({"current_hp": min(c.max_hp, c.current_hp + amount)}, None),
        )

    def strain(self, character_id: str, amount: int = 1) -> CharacterUpdate:
        """Spend willpower points."""
        _check_amount(amount)
        return self._commit(
            character_id,
            "strain",
            lambda c: ({"current_wp": max(0, c.current_wp - amount)}, None),
        )

    def recover(self, character_id: str, amount: int = 1) -> CharacterUpdate:
        """Regain willpower points."""
        _check_amount(amount)
        return self._commit(
            character_id,
            "recover",
            lambda c: ({"current_wp": min(c.max_wp, c.current_wp + amount)}, None),
        )

    def rest(
        self,
        character_id: str,
        mode: RestType | str,
        *,
        healer_present: bool = False,
    ) -> CharacterUpdate:
        """Take a rest. ``detail`` is the RestOutcome (with the recovery rolls)."""
        mode = RestType.parse(mode)

        def compute(character: Character) -> tuple[dict[str, Any], RestOutcome]:
            outcome = resolve_rest(character, mode, self._roller, healer_present=healer_present)
            return outcome.changes, outcome

        return self._commit(character_id, f"{mode.value}_rest", compute)

    # =========================================================================
    # Experience and Advancement
    # =========================================================================

    def mark_skill(self, character_id: str, skill: str) -> CharacterUpdate:
        """Record an experience mark for a skill. Each mark is one level."""
        skill_attribute(skill)

        def compute(character: Character) -> tuple[dict[str, Any], int]:
            marks = (*character.experience.marked_skills, skill)
            return {"experience": Experience(marked_skills=marks)}, len(marks)

        return self._commit(character_id, "mark_skill", compute)

    def train_skill(self, character_id: str, skill: str) -> CharacterUpdate:
        skill_attribute(skill)

        def compute(character: Character) -> tuple[dict[str, Any], None]:
            if character.is_trained(skill):
                raise GameRuleError(
                    f"{skill} is already trained",
                    details={"character_id": character.id, "skill": skill},
                )
            return {"trained_skills": character.trained_skills | {skill}}, None

        return self._commit(character_id, "train_skill", compute)

    def increase_attribute(self, character_id: str, attribute: Attribute | str) -> CharacterUpdate:
        attribute = Attribute.parse(attribute)

        def compute(character: Character) -> tuple[dict[str, Any], int]:
            value = character.attributes.get(attribute)
            if value >= MAX_ATTRIBUTE:
                raise GameRuleError(
                    f"{attribute.value} is already at its maximum of {MAX_ATTRIBUTE}",
                    details={"character_id": character.id, "attribute": attribute.value},
                )
            attributes = character.attributes.model_copy(update={attribute.value: value + 1})
            return {"attributes": attributes}, value + 1

        return self._commit(character_id, "increase_attribute", compute)

    def learn_spell(self, character_id: str, spell: str) -> CharacterUpdate:
        def compute(character: Character) -> tuple[dict[str, Any], None]:
            if not character.profession.is_spellcaster:
                raise GameRuleError(
                    "Only a Mage can learn spells",
                    details={"character_id": character.id, "profession": character.profession.value},
                )
            return {"spells": _append_unique(character.spells, spell, "spell")}, None

        return self._commit(character_id, "learn_spell", compute)

    def learn_heroic_ability(self, character_id: str, ability: str) -> CharacterUpdate:
        def compute(character: Character) -> tuple[dict[str, Any], None]:
            if character.profession.is_spellcaster:
                raise GameRuleError(
                    "A Mage advances with spells, not heroic abilities",
                    details={"character_id": character.id},
                )
            return {
                "heroic_abilities": _append_unique(character.heroic_abilities, ability, "heroic ability")
            }, None

        return self._commit(character_id, "learn_heroic_ability", compute)

    # =========================================================================
    # Inventory
    # =========================================================================

    def add_item(self, character_id: str, name: str, quantity: int = 1) -> CharacterUpdate:
        name = _check_item_name(name)
        if quantity < 1:
            raise InvalidArgumentError("Quantity must be at least 1", argument="quantity", invalid_value=quantity)

        def compute(character: Character) -> tuple[dict[str, Any], None]:
            items = list(character.inventory)
            for index, item in enumerate(items):
                if item.name == name:
                    items[index] = InventoryItem(name=name, quantity=item.quantity + quantity)
                    break
            else:
                items.append(InventoryItem(name=name, quantity=quantity))
            return {"inventory": tuple(items)}, None

        return self._commit(character_id, "add_item", compute)

    def remove_item(self, character_id: str, name: str, quantity: int = 1) -> CharacterUpdate:
        name = _check_item_name(name)
        if quantity < 1:
            raise InvalidArgumentError("Quantity must be at least 1", argument="quantity", invalid_value=quantity)

        def compute(character: Character) -> tuple[dict[str, Any], None]:
            items: list[InventoryItem] = []
            found = False
            for item in character.inventory:
                if item.name != name:
                    items.append(item)
                    continue
                found = True
                if item.quantity > quantity:
                    items.append(InventoryItem(name=name, quantity=item.quantity - quantity))
            if not found:
                raise GameRuleError(
                    f"{name} is not in the inventory",
                    details={"character_id": character.id, "item": name},
                )
            return {"inventory": tuple(items)}, None

        return self._commit(character_id, "remove_item", compute)


def _append_unique(names: tuple[str, ...], name: str, kind: str) -> tuple[str, ...]:
    name = name.strip()
    if not name:
        raise InvalidArgumentError(f"A {kind} needs a name", argument="name", invalid_value=name)
    if name in names:
        raise GameRuleError(f"{name} is already known", details={"kind": kind})
    return (*names, name)


class CharacterSheetState:
    """Holds the character snapshot a view renders.

    The held snapshot is replaced only by a confirmed CharacterUpdate; a
    failed operation leaves it untouched.

    Example:
        >>> sheet = CharacterSheetState(service, character)
        >>> sheet.run(service.rest, "stretch", healer_present=True)
        >>> sheet.character.current_hp
    """

    def __init__(self, service: CharacterService, character: Character) -> None:
        self.service = service
        self.character = character

    def run(self, operation: Callable[..., CharacterUpdate], *args: Any, **kwargs: Any) -> CharacterUpdate:
        """Call ``operation(character_id, *args, **kwargs)`` and apply its result."""
        update = operation(self.character.id, *args, **kwargs)
        self.apply(update)
        return update

    def apply(self, update: CharacterUpdate) -> None:
        if update.character.id != self.character.id:
            raise InvalidArgumentError(
                "Update belongs to a different character",
                argument="update",
                invalid_value=update.character.id,
            )
        self.character = update.character

    def refresh(self) -> Character:
        self.character = self.service.get_character(self.character.id)
        return self.character


__all__ = [
    "CharacterUpdate",
    "CharacterService",
    "CharacterSheetState",
]
