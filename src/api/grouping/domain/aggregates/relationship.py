"""Relationship entity: one entity attached to one group."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Relationship:
    """One attachment of a target entity to a group under a relation type.

    The target entity is referenced by ID only; callers re-resolve it
    through the store on every read. Uniqueness is not structural: how
    often an entity may be attached is a cardinality rule checked before
    saving.

    Attributes:
        content_type_id: Derived content type ID (row column ``type``)
        group_id: The group the entity is attached to (row column ``gid``)
        entity_id: The target entity ID, or its config wrapper surrogate
        relation_type_id: The relation type (row column ``plugin_id``)
        group_type_id: The group type of the group
        values: Relation type defined extra fields
        id: Assigned on first save
    """

    content_type_id: str
    group_id: int
    entity_id: int
    relation_type_id: str
    group_type_id: str
    values: dict[str, Any] = field(default_factory=dict)
    id: int | None = None

    @property
    def is_new(self) -> bool:
        return self.id is None

    @property
    def group_roles(self) -> list[str]:
        """Explicit role IDs granted through a membership relationship."""
        return list(self.values.get("group_roles", []))
