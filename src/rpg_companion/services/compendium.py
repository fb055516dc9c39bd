"""Compendium service: reference entries, search and authoring templates.

Anyone may read the compendium. Writing entries and managing templates is
admin-only and is gated with ``require_admin`` before the store is touched.
"""

from __future__ import annotations

from uuid import uuid4

from rpg_companion.auth.identity import Identity, require_admin
from rpg_companion.core.exceptions import RecordNotFoundError
from rpg_companion.core.logging import get_logger
from rpg_companion.models.compendium import (
    DEFAULT_TEMPLATES,
    CompendiumEntry,
    CompendiumTemplate,
)
from rpg_companion.storage.base import COMPENDIUM_TABLE, TEMPLATES_TABLE, TableStore


logger = get_logger(__name__)


class CompendiumService:
    """Entry and template operations against the table store."""

    def __init__(self, store: TableStore) -> None:
        self._store = store

    # =========================================================================
    # Entries
    # =========================================================================

    def list_entries(self, category: str | None = None) -> list[CompendiumEntry]:
        """All entries ordered by category then title."""
        filters = {"category": category} if category else None
        records = self._store.get(COMPENDIUM_TABLE, filters, order_by=("category", "title"))
        return [CompendiumEntry.from_record(record) for record in records]

    def search(self, term: str = "", category: str | None = None) -> list[CompendiumEntry]:
        """Entries whose title or content contains ``term`` (case-insensitive).

        An empty term matches every entry; ``category`` narrows the result.
        """
        needle = term.strip().lower()
        entries = self.list_entries(category)
        if not needle:
            return entries
        return [
            entry
            for entry in entries
            if needle in entry.title.lower() or needle in entry.content.lower()
        ]

    def categories(self) -> list[str]:
        return sorted({entry.category for entry in self.list_entries()})

    def get_entry(self, entry_id: str) -> CompendiumEntry:
        record = self._store.get_one(COMPENDIUM_TABLE, entry_id)
        if record is None:
            raise RecordNotFoundError(
                "Compendium entry not found",
                table=COMPENDIUM_TABLE,
                record_id=entry_id,
            )
        return CompendiumEntry.from_record(record)

    def save_entry(self, identity: Identity | None, entry: CompendiumEntry) -> CompendiumEntry:
        """Create or replace an entry."""
        require_admin(identity, "save_entry")
        record = self._store.upsert(COMPENDIUM_TABLE, entry.to_record())
        logger.info("Compendium entry saved", entry_id=entry.id, title=entry.title)
        return CompendiumEntry.from_record(record)

    def delete_entry(self, identity: Identity | None, entry_id: str) -> bool:
        require_admin(identity, "delete_entry")
        deleted = self._store.delete(COMPENDIUM_TABLE, entry_id)
        logger.info("Compendium entry deleted", entry_id=entry_id, deleted=deleted)
        return deleted

    # =========================================================================
    # Templates
    # =========================================================================

    def list_templates(self) -> list[CompendiumTemplate]:
        records = self._store.get(TEMPLATES_TABLE, order_by=("category", "name"))
        return [CompendiumTemplate.from_record(record) for record in records]

    def get_template(self, template_id: str) -> CompendiumTemplate:
        record = self._store.get_one(TEMPLATES_TABLE, template_id)
        if record is None:
            raise RecordNotFoundError(
                "Template not found",
                table=TEMPLATES_TABLE,
                record_id=template_id,
            )
        return CompendiumTemplate.from_record(record)

    def create_template(self, identity: Identity | None, template: CompendiumTemplate) -> CompendiumTemplate:
        require_admin(identity, "create_template")
        record = self._store.insert(TEMPLATES_TABLE, template.to_record())
        logger.info("Template created", template_id=template.id, name=template.name)
        return CompendiumTemplate.from_record(record)

    def update_template(self, identity: Identity | None, template: CompendiumTemplate) -> CompendiumTemplate:
        """Replace the fields of an existing template.

        Raises:
            RecordNotFoundError: If the template does not exist.
        """
        require_admin(identity, "update_template")
        changes = template.to_record()
        changes.pop("id")
        record = self._store.update(TEMPLATES_TABLE, template.id, changes)
        return CompendiumTemplate.from_record(record)

    def delete_template(self, identity: Identity | None, template_id: str) -> bool:
        require_admin(identity, "delete_template")
        return self._store.delete(TEMPLATES_TABLE, template_id)

    def save_entry_as_template(
        self,
        identity: Identity | None,
        entry: CompendiumEntry,
        name: str,
        description: str = "",
    ) -> CompendiumTemplate:
        """Turn an existing entry's content into a new template."""
        template = CompendiumTemplate(
            name=name,
            category=entry.category,
            description=description,
            content=entry.content,
        )
        return self.create_template(identity, template)

    def install_default_templates(self, identity: Identity | None) -> list[CompendiumTemplate]:
        """Seed the built-in templates that are missing (matched by name).

        Returns:
            The templates that were created; empty if all were present.
        """
        require_admin(identity, "install_default_templates")
        existing = {template.name for template in self.list_templates()}
        created = []
        for default in DEFAULT_TEMPLATES:
            if default.name in existing:
                continue
            template = default.model_copy(update={"id": str(uuid4())})
            record = self._store.insert(TEMPLATES_TABLE, template.to_record())
            created.append(CompendiumTemplate.from_record(record))
        if created:
            logger.info("Default templates installed", names=[t.name for t in created])
        return created

    @staticmethod
    def apply_template(entry: CompendiumEntry, template: CompendiumTemplate) -> CompendiumEntry:
        """Start an entry from a template.

        Content is replaced by the template content; title and category are
        kept, and the category falls back to the template's.
        """
        return entry.model_copy(
            update={
                "content": template.content,
                "template": template.name,
                "category": entry.category or template.category,
            }
        )


__all__ = ["CompendiumService"]
