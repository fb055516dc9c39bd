"""Character sheet models.

A Character is an immutable snapshot. Nothing in the rules engine mutates
one; every change produces a new validated snapshot through
``Character.with_changes``. The owning layer swaps its held reference only
after the store has confirmed the write.

Level is never stored: it is always ``len(experience.marked_skills)``.
"""

from __future__ import annotations

from typing import Annotated, Any
from uuid import uuid4

from pydantic import (
    Field,
    computed_field,
    field_serializer,
    field_validator,
    model_validator,
)

from rpg_companion.core.constants import MAX_ATTRIBUTE, MIN_ATTRIBUTE
from rpg_companion.models.base import SnapshotModel
from rpg_companion.models.enums import Attribute, Condition, Profession


AttributeValue = Annotated[
    int,
    Field(ge=MIN_ATTRIBUTE, le=MAX_ATTRIBUTE, description="Attribute value (1-18)"),
]


class Attributes(SnapshotModel):
    """The six attribute values of a character."""

    STR: AttributeValue = 10
    CON: AttributeValue = 10
    AGL: AttributeValue = 10
    INT: AttributeValue = 10
    WIL: AttributeValue = 10
    CHA: AttributeValue = 10

    def get(self, attribute: Attribute | str) -> int:
        """Value of an attribute by code.

        Raises:
            InvalidArgumentError: If the code is not one of the six attributes.
        """
        return getattr(self, Attribute.parse(attribute).value)


class Conditions(SnapshotModel):
    """Active/inactive flag for each of the six conditions."""

    exhausted: bool = False
    sickly: bool = False
    dazed: bool = False
    angry: bool = False
    scared: bool = False
    disheartened: bool = False

    def is_active(self, condition: Condition | str) -> bool:
        return getattr(self, Condition.parse(condition).value)

    def active(self) -> list[Condition]:
        """Active conditions in attribute order."""
        return [condition for condition in Condition if getattr(self, condition.value)]

    def toggled(self, condition: Condition | str) -> Conditions:
        """Copy with one condition flipped."""
        key = Condition.parse(condition).value
        return self.model_copy(update={key: not getattr(self, key)})

    @classmethod
    def cleared(cls) -> Conditions:
        return cls()


class Experience(SnapshotModel):
    """Experience marks earned by the character.

    Each mark is the name of a skill marked during play.
    """

    marked_skills: tuple[str, ...] = ()


class InventoryItem(SnapshotModel):
    """A carried item and how many of it."""

    name: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)


class Character(SnapshotModel):
    """An immutable character sheet snapshot.

    Invariants:
        0 <= current_hp <= attributes.CON
        0 <= current_wp <= attributes.WIL
        level == len(experience.marked_skills)

    Example:
        >>> hero = Character(name="Ylva", profession="Fighter", attributes={"CON": 14})
        >>> hero.current_hp
        14
        >>> hurt = hero.with_changes(current_hp=9)
        >>> hero.current_hp, hurt.current_hp
        (14, 9)
    """

    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str | None = Field(default=None, description="Owning user")
    name: str = Field(min_length=1)
    kin: str = Field(default="Human")
    profession: Profession

    attributes: Attributes = Field(default_factory=Attributes)
    trained_skills: frozenset[str] = Field(default_factory=frozenset)
    conditions: Conditions = Field(default_factory=Conditions)

    current_hp: int = Field(ge=0, description="Current hit points")
    current_wp: int = Field(ge=0, description="Current willpower points")

    experience: Experience = Field(default_factory=Experience)
    inventory: tuple[InventoryItem, ...] = ()
    spells: tuple[str, ...] = ()
    heroic_abilities: tuple[str, ...] = ()

    @field_validator("profession", mode="before")
    @classmethod
    def parse_profession(cls, value: Any) -> Profession:
        return Profession.parse(value)

    @model_validator(mode="before")
    @classmethod
    def default_points_to_maximum(cls, data: Any) -> Any:
        """Missing HP/WP means the character is at full HP/WP."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        attributes = data.get("attributes")
        if isinstance(attributes, Attributes):
            attributes = attributes.model_dump()
        attributes = attributes or {}
        if data.get("current_hp") is None:
            data["current_hp"] = attributes.get("CON", Attributes().CON)
        if data.get("current_wp") is None:
            data["current_wp"] = attributes.get("WIL", Attributes().WIL)
        return data

    @model_validator(mode="after")
    def points_within_attributes(self) -> Character:
        if self.current_hp > self.attributes.CON:
            raise ValueError(
                f"current_hp ({self.current_hp}) exceeds CON ({self.attributes.CON})"
            )
        if self.current_wp > self.attributes.WIL:
            raise ValueError(
                f"current_wp ({self.current_wp}) exceeds WIL ({self.attributes.WIL})"
            )
        return self

    @field_serializer("trained_skills")
    def serialize_trained_skills(self, value: frozenset[str]) -> list[str]:
        return sorted(value)

    @computed_field(description="Derived from the number of experience marks")
    @property
    def level(self) -> int:
        return len(self.experience.marked_skills)

    @computed_field(description="Whether any condition is active")
    @property
    def has_active_conditions(self) -> bool:
        return bool(self.conditions.active())

    @property
    def max_hp(self) -> int:
        return self.attributes.CON

    @property
    def max_wp(self) -> int:
        return self.attributes.WIL

    def is_trained(self, skill: str) -> bool:
        return skill in self.trained_skills

    def with_changes(self, **changes: Any) -> Character:
        """Return a new validated snapshot with ``changes`` applied.

        Raises:
            InvalidArgumentError: If the result breaks an invariant, naming the field.
        """
        data = self.model_dump(exclude={"level", "has_active_conditions"})
        data.update(changes)
        return Character.model_validate(data)

    def to_record(self) -> dict[str, Any]:
        """JSON-compatible record shape stored in the ``characters`` table."""
        return self.model_dump(mode="json", exclude={"level", "has_active_conditions"})

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Character:
        return cls.model_validate(record)


__all__ = [
    "AttributeValue",
    "Attributes",
    "Conditions",
    "Experience",
    "InventoryItem",
    "Character",
]
