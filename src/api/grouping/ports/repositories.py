"""Repository protocols (ports) for the grouping bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. Implementations map them onto the relational row store.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable

from grouping.domain.aggregates import (
    Group,
    GroupContentType,
    GroupType,
    Relationship,
)
from grouping.domain.relation_types import RelationTypeInstance
from grouping.ports.collaborators import ContentEntity


@runtime_checkable
class IGroupTypeRepository(Protocol):
    """Repository for GroupType aggregate persistence.

    Returns fully hydrated group types: relation type instances are rebuilt
    from the registry and the stored configuration.
    """

    def save(self, group_type: GroupType) -> None:
        """Persist a group type, its relation configuration and its roles."""
        ...

    def get_by_id(self, group_type_id: str) -> GroupType | None:
        """Retrieve a group type, or None if not found."""
        ...

    def list_all(self) -> list[GroupType]:
        """List all group types ordered by ID."""
        ...

    def delete(self, group_type: GroupType) -> bool:
        """Delete a group type and its roles.

        Returns:
            True if deleted, False if not found
        """
        ...


@runtime_checkable
class IGroupRepository(Protocol):
    """Repository for Group aggregate persistence."""

    def save(self, group: Group) -> None:
        """Persist a group, assigning its ID when new."""
        ...

    def get_by_id(self, group_id: int) -> Group | None:
        """Retrieve a group, or None if not found."""
        ...

    def list_by_type(self, group_type_id: str) -> list[Group]:
        """List all groups of a group type."""
        ...

    def delete(self, group: Group) -> bool:
        """Delete a group.

        Returns:
            True if deleted, False if not found
        """
        ...


@runtime_checkable
class IContentTypeCatalog(Protocol):
    """Maps (group type, relation type) pairs to content types."""

    def resolve(self, group_type_id: str, relation_type_id: str) -> str:
        """Return the content type ID for the pair. Pure."""
        ...

    def install(
        self, group_type: GroupType, instance: RelationTypeInstance
    ) -> GroupContentType:
        """Create the content type record; returns the existing one on repeat."""
        ...

    def uninstall(self, content_type_id: str) -> None:
        """Delete the content type record.

        Raises:
            ContentTypeNotFoundError: If no such record exists
        """
        ...

    def load(self, content_type_id: str) -> GroupContentType | None:
        """Retrieve a content type, or None if not found."""
        ...

    def load_by_group_type(self, group_type_id: str) -> list[GroupContentType]:
        """Content types installed on a group type."""
        ...


@runtime_checkable
class IRelationshipStore(Protocol):
    """Persistence and cached lookups for relationship records."""

    def create_for_entity_in_group(
        self,
        entity: ContentEntity,
        group: Group,
        relation_type_id: str,
        values: dict[str, Any] | None = None,
    ) -> Relationship:
        """Build a new, unsaved relationship after checking preconditions."""
        ...

    def save(self, relationship: Relationship) -> None:
        """Persist a relationship and invalidate the lookup caches."""
        ...

    def delete(self, relationship: Relationship) -> bool:
        """Delete a relationship and invalidate the lookup caches."""
        ...

    def load_by_group(
        self, group: Group, relation_type_id: str | None = None
    ) -> list[Relationship]:
        """Relationships of a group, optionally for one relation type."""
        ...

    def load_by_entity(
        self, entity: ContentEntity, relation_type_id: str | None = None
    ) -> list[Relationship]:
        """Relationships targeting an entity, optionally for one relation type."""
        ...

    def load_by_relation_type_id(self, relation_type_id: str) -> list[Relationship]:
        """All relationships of a relation type."""
        ...

    def load_by_properties(self, **properties: Any) -> list[Relationship]:
        """Uncached lookup by row columns (type, gid, entity_id, plugin_id)."""
        ...

    def reset_cache(self, ids: Iterable[int] | None = None) -> None:
        """Clear the lookup caches."""
        ...

    def resolve_entity(self, relationship: Relationship) -> ContentEntity | None:
        """Re-resolve the target entity of a relationship."""
        ...
