"""Tests for compendium entries and templates."""

from __future__ import annotations

import pytest

from rpg_companion.core.exceptions import InvalidArgumentError
from rpg_companion.models.compendium import (
    DEFAULT_TEMPLATES,
    MONSTER_TEMPLATE,
    SPELL_TEMPLATE,
    CompendiumEntry,
    CompendiumTemplate,
    template_placeholders,
)


class TestTemplatePlaceholders:
    """Tests for placeholder extraction."""

    def test_order_of_first_appearance(self) -> None:
        content = "# [Name]\n**Rank:** [Rank]\n[Name] again"
        assert template_placeholders(content) == ["Name", "Rank"]

    def test_links_are_not_placeholders(self) -> None:
        content = "See [the rules](https://example.com) for [Spell Name]"
        assert template_placeholders(content) == ["Spell Name"]

    def test_no_placeholders(self) -> None:
        assert template_placeholders("plain text") == []

    def test_spell_template(self) -> None:
        placeholders = SPELL_TEMPLATE.placeholders
        assert placeholders[0] == "Spell Name"
        assert "WP Cost" not in placeholders
        assert "Cost" in placeholders


class TestDefaultTemplates:
    def test_three_builtins(self) -> None:
        assert [t.name for t in DEFAULT_TEMPLATES] == ["Monster Stat Block", "Spell Description", "Magic Item"]
        assert [t.category for t in DEFAULT_TEMPLATES] == ["monster", "spell", "item"]

    def test_monster_template_lists_attributes(self) -> None:
        for placeholder in ("Strength", "Willpower", "Charisma"):
            assert placeholder in MONSTER_TEMPLATE.placeholders


class TestCompendiumEntry:
    def test_requires_title_and_category(self) -> None:
        with pytest.raises(InvalidArgumentError):
            CompendiumEntry(title="", category="monster")
        with pytest.raises(InvalidArgumentError):
            CompendiumEntry(title="Troll", category="")

    def test_record_round_trip(self) -> None:
        entry = CompendiumEntry(title="Troll", category="monster", content="Big.", template="Monster Stat Block")
        assert CompendiumEntry.from_record(entry.to_record()) == entry

    def test_template_defaults(self) -> None:
        template = CompendiumTemplate(name="Rumor")
        assert template.category == "general"
        assert template.content == ""
        assert template.placeholders == []
