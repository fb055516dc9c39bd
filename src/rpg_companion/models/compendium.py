"""Compendium models: reference entries and authoring templates."""

from __future__ import annotations

import re
from typing import Any
from uuid import uuid4

from pydantic import Field

from rpg_companion.models.base import SnapshotModel


PLACEHOLDER_PATTERN = re.compile(r"\[([^\[\]\n]+)\]")
"""Square-bracket placeholders such as ``[Monster Name]`` in template content."""


class CompendiumEntry(SnapshotModel):
    """A searchable rules reference entry."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str = Field(min_length=1)
    category: str = Field(min_length=1)
    content: str = ""
    template: str | None = Field(default=None, description="Name of the template it was authored from")

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> CompendiumEntry:
        return cls.model_validate(record)


class CompendiumTemplate(SnapshotModel):
    """Reusable starting content for new compendium entries."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str = Field(min_length=1)
    category: str = Field(default="general", min_length=1)
    description: str = ""
    content: str = ""

    @property
    def placeholders(self) -> list[str]:
        return template_placeholders(self.content)

    def to_record(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> CompendiumTemplate:
        return cls.model_validate(record)


def template_placeholders(content: str) -> list[str]:
    """List the distinct ``[Placeholder]`` names in order of first appearance.

    Markdown links (``[text](url)``) are not placeholders.

    Example:
        >>> template_placeholders("# [Spell Name]\\n**Rank:** [Spell Rank]")
        ['Spell Name', 'Spell Rank']
    """
    seen: list[str] = []
    for match in PLACEHOLDER_PATTERN.finditer(content):
        if content[match.end():match.end() + 1] == "(":
            continue
        name = match.group(1).strip()
        if name and name not in seen:
            seen.append(name)
    return seen


# =============================================================================
# Built-in Templates
# =============================================================================


MONSTER_TEMPLATE = CompendiumTemplate(
    name="Monster Stat Block",
    category="monster",
    description="Template for monster statistics and abilities",
    content=(
        "# [Monster Name]\n\n"
        "## Statistics\n"
        "- **Armor Class:** [AC]\n"
        "- **Hit Points:** [HP]\n"
        "- **Speed:** [Speed]\n\n"
        "## Attributes\n"
        "- **STR:** [Strength]\n"
        "- **CON:** [Constitution]\n"
        "- **AGL:** [Agility]\n"
        "- **INT:** [Intelligence]\n"
        "- **WIL:** [Willpower]\n"
        "- **CHA:** [Charisma]\n\n"
        "## Skills\n[List of skills]\n\n"
        "## Special Abilities\n[List of special abilities]\n\n"
        "## Actions\n[List of actions]\n\n"
        "## Description\n[Monster description]"
    ),
)

SPELL_TEMPLATE = CompendiumTemplate(
    name="Spell Description",
    category="spell",
    description="Template for magical spells and effects",
    content=(
        "# [Spell Name]\n\n"
        "**School:** [School of Magic]\n"
        "**Rank:** [Spell Rank]\n"
        "**Casting Time:** [Time]\n"
        "**Range:** [Range]\n"
        "**Duration:** [Duration]\n"
        "**WP Cost:** [Cost]\n\n"
        "## Description\n[Spell description]\n\n"
        "## Effects\n[Spell effects]\n\n"
        "## Requirements\n[Special requirements if any]"
    ),
)

ITEM_TEMPLATE = CompendiumTemplate(
    name="Magic Item",
    category="item",
    description="Template for magical items and artifacts",
    content=(
        "# [Item Name]\n\n"
        "**Type:** [Type of item]\n"
        "**Rarity:** [Common/Uncommon/Rare/Unique]\n"
        "**Value:** [Cost]\n\n"
        "## Description\n[Item description]\n\n"
        "## Properties\n[Magical properties]\n\n"
        "## Requirements\n[Usage requirements if any]"
    ),
)

DEFAULT_TEMPLATES: tuple[CompendiumTemplate, ...] = (
    MONSTER_TEMPLATE,
    SPELL_TEMPLATE,
    ITEM_TEMPLATE,
)


__all__ = [
    "CompendiumEntry",
    "CompendiumTemplate",
    "template_placeholders",
    "MONSTER_TEMPLATE",
    "SPELL_TEMPLATE",
    "ITEM_TEMPLATE",
    "DEFAULT_TEMPLATES",
]
