"""Group type application service.

Orchestrates group type lifecycle: creation with built-in roles and
enforced relation types, enabling and configuring relation types, role
management and cascading deletion.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from grouping.application.observability import (
    DefaultGroupTypeServiceProbe,
    GroupTypeServiceProbe,
)
from grouping.application.relation_type_registry import RelationTypeRegistry
from grouping.domain.aggregates import GroupType
from grouping.domain.relation_types import RelationTypeInstance
from grouping.domain.value_objects import GroupRole
from grouping.ports.exceptions import (
    DuplicateGroupTypeError,
    EnforcedRelationTypeError,
    GroupTypeNotFoundError,
    RelationTypeInUseError,
    RelationTypeNotInstalledError,
)
from grouping.ports.repositories import (
    IContentTypeCatalog,
    IGroupRepository,
    IGroupTypeRepository,
    IRelationshipStore,
)


class GroupTypeService:
    """Application service for group type management.

    Does not manage transactions: every method runs inside the caller's
    unit of work (see infrastructure.database.session_scope).
    """

    def __init__(
        self,
        group_types: IGroupTypeRepository,
        groups: IGroupRepository,
        catalog: IContentTypeCatalog,
        store: IRelationshipStore,
        registry: RelationTypeRegistry,
        probe: GroupTypeServiceProbe | None = None,
    ):
        """Initialize GroupTypeService with dependencies.

        Args:
            group_types: Repository for group type persistence
            groups: Repository for group persistence, used when cascading
            catalog: Content type records per enabled relation type
            store: Relationship store, used when cascading
            registry: Relation type definitions
            probe: Optional domain probe for observability
        """
        self._group_types = group_types
        self._groups = groups
        self._catalog = catalog
        self._store = store
        self._registry = registry
        self._probe = probe or DefaultGroupTypeServiceProbe()

    def get_group_type(self, group_type_id: str) -> GroupType:
        """Load a group type.

        Raises:
            GroupTypeNotFoundError: If it does not exist
        """
        group_type = self._group_types.get_by_id(group_type_id)
        if group_type is None:
            raise GroupTypeNotFoundError(f"Group type {group_type_id!r} does not exist")
        return group_type

    def create_group_type(
        self, group_type_id: str, label: str, description: str = ""
    ) -> GroupType:
        """Create a group type with its built-in roles.

        Every enforced relation type is enabled with its default
        configuration and gets its content type installed.

        Raises:
            DuplicateGroupTypeError: If the ID is already taken
            ValueError: If the ID is not a valid machine name
        """
        if self._group_types.get_by_id(group_type_id) is not None:
            raise DuplicateGroupTypeError(
                f"Group type {group_type_id!r} already exists"
            )

        group_type = GroupType.create(group_type_id, label, description)
        for definition in self._registry:
            if definition.enforced:
                group_type.enable_relation(definition)

        self._group_types.save(group_type)
        for instance in group_type.enabled_relations():
            self._catalog.install(group_type, instance)

        self._probe.group_type_created(group_type.id, sorted(group_type.relations))
        return group_type

    def enable_relation(
        self,
        group_type_id: str,
        relation_type_id: str,
        configuration: Mapping[str, Any] | None = None,
    ) -> RelationTypeInstance:
        """Enable a relation type on a group type and install its content type.

        Raises:
            GroupTypeNotFoundError: If the group type does not exist
            RelationTypeNotFoundError: If the relation type is not registered
            ValueError: If it is already enabled or the configuration is invalid
        """
        group_type = self.get_group_type(group_type_id)
        definition = self._registry.get(relation_type_id)

        instance = group_type.enable_relation(definition, configuration)
        self._group_types.save(group_type)
        self._catalog.install(group_type, instance)

        self._probe.relation_enabled(group_type_id, relation_type_id)
        return instance

    def disable_relation(self, group_type_id: str, relation_type_id: str) -> None:
        """Disable a relation type and uninstall its content type.

        Raises:
            GroupTypeNotFoundError: If the group type does not exist
            RelationTypeNotInstalledError: If the relation type is not enabled
            EnforcedRelationTypeError: If the relation type is enforced
            RelationTypeInUseError: If relationships of this content type exist
        """
        group_type = self.get_group_type(group_type_id)
        instance = self._require_relation(group_type, relation_type_id)

        if instance.relation_type.enforced:
            raise EnforcedRelationTypeError(
                f"Relation type {relation_type_id!r} is enforced and cannot be disabled"
            )

        content_type_id = instance.content_type_id()
        if self._store.load_by_properties(type=content_type_id):
            raise RelationTypeInUseError(
                f"Relation type {relation_type_id!r} still has content in "
                f"group type {group_type_id!r}"
            )

        group_type.disable_relation(relation_type_id)
        self._group_types.save(group_type)
        self._catalog.uninstall(content_type_id)

        self._probe.relation_disabled(group_type_id, relation_type_id)

    def update_relation(
        self,
        group_type_id: str,
        relation_type_id: str,
        configuration: Mapping[str, Any],
    ) -> RelationTypeInstance:
        """Reconfigure an enabled relation type.

        Keys left out of ``configuration`` go back to their defaults.
        Existing relationships are not re-validated against new limits.

        Raises:
            GroupTypeNotFoundError: If the group type does not exist
            RelationTypeNotInstalledError: If the relation type is not enabled
            ValueError: If the configuration is invalid
        """
        group_type = self.get_group_type(group_type_id)
        self._require_relation(group_type, relation_type_id)

        instance = group_type.update_relation(relation_type_id, configuration)
        self._group_types.save(group_type)

        self._probe.relation_updated(
            group_type_id, relation_type_id, instance.get_configuration()
        )
        return instance

    def add_role(
        self,
        group_type_id: str,
        name: str,
        label: str,
        permissions: Iterable[str] = (),
        weight: int = 0,
    ) -> GroupRole:
        """Add a custom role to a group type."""
        group_type = self.get_group_type(group_type_id)
        role = group_type.add_role(name, label, permissions, weight)
        self._group_types.save(group_type)
        return role

    def grant_permissions(
        self, group_type_id: str, role_id: str, *permissions: str
    ) -> GroupRole:
        group_type = self.get_group_type(group_type_id)
        role = group_type.grant_permissions(role_id, *permissions)
        self._group_types.save(group_type)
        return role

    def revoke_permissions(
        self, group_type_id: str, role_id: str, *permissions: str
    ) -> GroupRole:
        group_type = self.get_group_type(group_type_id)
        role = group_type.revoke_permissions(role_id, *permissions)
        self._group_types.save(group_type)
        return role

    def delete_group_type(self, group_type_id: str) -> None:
        """Delete a group type with everything that depends on it.

        Removes, in order: the relationships of each group, the groups,
        the content types, then the group type and its roles.

        Raises:
            GroupTypeNotFoundError: If the group type does not exist
        """
        group_type = self.get_group_type(group_type_id)

        groups = self._groups.list_by_type(group_type_id)
        relationship_count = 0
        for group in groups:
            for relationship in self._store.load_by_properties(gid=group.id):
                self._store.delete(relationship)
                relationship_count += 1
            self._groups.delete(group)

        for content_type in self._catalog.load_by_group_type(group_type_id):
            self._catalog.uninstall(content_type.id)

        self._group_types.delete(group_type)
        self._probe.group_type_deleted(group_type_id, len(groups), relationship_count)

    @staticmethod
    def _require_relation(
        group_type: GroupType, relation_type_id: str
    ) -> RelationTypeInstance:
        instance = group_type.get_relation(relation_type_id)
        if instance is None:
            raise RelationTypeNotInstalledError(
                f"Relation type {relation_type_id!r} is not enabled on "
                f"group type {group_type.id!r}"
            )
        return instance
