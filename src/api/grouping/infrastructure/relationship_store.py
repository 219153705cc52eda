"""SQLAlchemy implementation of IRelationshipStore.

The store keeps three lookup caches (by group, by entity, by relation type)
holding relationship IDs, plus a per-ID cache of loaded relationships. Any
write through the store clears all of them: the lookup caches are not
indexed by relationship ID, so clearing only the written IDs would leave
stale lists behind.

A store is scoped to one unit of work. Use ``unit_of_work()`` when a store
instance has to be reused across requests.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from grouping.application.relation_type_registry import RelationTypeRegistry
from grouping.domain.aggregates import Group, Relationship
from grouping.infrastructure.models import RelationshipModel
from grouping.infrastructure.observability import (
    DefaultRelationshipStoreProbe,
    RelationshipStoreProbe,
)
from grouping.ports.collaborators import (
    ConfigWrapperProvider,
    ContentEntity,
    EntityResolver,
)
from grouping.ports.exceptions import (
    BundleMismatchError,
    EntityTypeMismatchError,
    GroupTypeNotFoundError,
    InvalidEntityIdentityError,
    InvalidOperationError,
    RelationTypeNotInstalledError,
    UnsavedEntityError,
    UnsavedGroupError,
)
from grouping.ports.repositories import (
    IContentTypeCatalog,
    IGroupTypeRepository,
    IRelationshipStore,
)

# Cache key used when a lookup is not limited to one relation type.
ALL_RELATION_TYPES = "---ALL---"

_PROPERTY_COLUMNS = {
    "id": RelationshipModel.id,
    "type": RelationshipModel.type,
    "gid": RelationshipModel.gid,
    "entity_id": RelationshipModel.entity_id,
    "plugin_id": RelationshipModel.plugin_id,
    "group_type": RelationshipModel.group_type,
}


class RelationshipStore(IRelationshipStore):
    """Persistence and cached lookups for relationships."""

    def __init__(
        self,
        session: Session,
        registry: RelationTypeRegistry,
        group_types: IGroupTypeRepository,
        catalog: IContentTypeCatalog,
        entity_resolver: EntityResolver | None = None,
        config_wrappers: ConfigWrapperProvider | None = None,
        probe: RelationshipStoreProbe | None = None,
    ) -> None:
        """Initialize the store with its collaborators.

        Args:
            session: Session of the current unit of work
            registry: Relation type definitions
            group_types: Source of the relation types enabled per group type
            catalog: Derives content type IDs
            entity_resolver: Re-resolves target entities on read
            config_wrappers: Surrogate identities for configuration entities
            probe: Optional domain probe for observability
        """
        self._session = session
        self._registry = registry
        self._group_types = group_types
        self._catalog = catalog
        self._entity_resolver = entity_resolver
        self._config_wrappers = config_wrappers
        self._probe = probe or DefaultRelationshipStoreProbe()

        self._by_group: dict[tuple[int, str], list[int]] = {}
        self._by_entity: dict[tuple[str, str, str], list[int]] = {}
        self._by_relation_type: dict[str, list[int]] = {}
        self._entities: dict[int, Relationship] = {}

    def create_for_entity_in_group(
        self,
        entity: ContentEntity,
        group: Group,
        relation_type_id: str,
        values: dict[str, Any] | None = None,
    ) -> Relationship:
        """Build a new, unsaved relationship attaching an entity to a group.

        Preconditions are checked in order and the first failure is raised.
        Relation types over configuration entities store the entity's
        wrapper ID instead of the entity's own.

        Raises:
            UnsavedEntityError: The entity has no persisted identity
            UnsavedGroupError: The group has no persisted identity
            GroupTypeNotFoundError: The group's type does not exist
            RelationTypeNotInstalledError: The relation type is not enabled
                on the group's type
            EntityTypeMismatchError: The relation type serves another entity type
            BundleMismatchError: The relation type is limited to another bundle
            InvalidEntityIdentityError: The entity ID cannot be stored
        """
        if entity.id is None:
            self._probe.precondition_failed("unsaved_entity", relation_type_id)
            raise UnsavedEntityError(
                "Cannot add an unsaved entity to a group"
            )

        if group.id is None:
            self._probe.precondition_failed("unsaved_group", relation_type_id)
            raise UnsavedGroupError("Cannot add an entity to an unsaved group")

        group_type = self._group_types.get_by_id(group.group_type_id)
        if group_type is None:
            raise GroupTypeNotFoundError(
                f"Group type {group.group_type_id!r} does not exist"
            )
        instance = group_type.get_relation(relation_type_id)
        if instance is None:
            raise RelationTypeNotInstalledError(
                f"Relation type {relation_type_id!r} is not enabled on "
                f"group type {group.group_type_id!r}"
            )

        definition = instance.relation_type
        if entity.entity_type_id != definition.entity_type_id:
            self._probe.precondition_failed("entity_type_mismatch", relation_type_id)
            raise EntityTypeMismatchError(
                f"Invalid value supplied for entity type: expected "
                f"{definition.entity_type_id!r}, got {entity.entity_type_id!r}"
            )

        if definition.entity_bundle and entity.bundle != definition.entity_bundle:
            self._probe.precondition_failed("bundle_mismatch", relation_type_id)
            raise BundleMismatchError(
                f"Invalid value supplied for bundle: expected "
                f"{definition.entity_bundle!r}, got {entity.bundle!r}"
            )

        if definition.handles_config_entities:
            if self._config_wrappers is None:
                raise InvalidOperationError(
                    f"Relation type {relation_type_id!r} handles configuration "
                    f"entities but no config wrapper provider is available"
                )
            entity = self._config_wrappers.wrap_entity(entity)

        entity_id = entity.id
        if isinstance(entity_id, bool) or not isinstance(entity_id, int):
            self._probe.precondition_failed("invalid_entity_identity", relation_type_id)
            raise InvalidEntityIdentityError(
                f"Entity {entity_id!r} does not have an integer identity"
            )

        relationship = Relationship(
            content_type_id=self._catalog.resolve(
                group.group_type_id, relation_type_id
            ),
            group_id=group.id,
            entity_id=entity_id,
            relation_type_id=relation_type_id,
            group_type_id=group.group_type_id,
            values=dict(values or {}),
        )
        self._probe.relationship_created(
            relationship.content_type_id, group.id, entity_id
        )
        return relationship

    def save(self, relationship: Relationship) -> None:
        """Insert or update a relationship, then clear the caches."""
        model = (
            None
            if relationship.id is None
            else self._session.get(RelationshipModel, relationship.id)
        )
        if model is None:
            model = RelationshipModel(id=relationship.id)
            self._session.add(model)

        model.type = relationship.content_type_id
        model.gid = relationship.group_id
        model.entity_id = relationship.entity_id
        model.plugin_id = relationship.relation_type_id
        model.group_type = relationship.group_type_id
        model.extra = dict(relationship.values)

        self._session.flush()
        relationship.id = model.id

        self.reset_cache([model.id])
        self._probe.relationship_saved(model.id, model.gid)

    def delete(self, relationship: Relationship) -> bool:
        """Delete a relationship, then clear the caches.

        Returns:
            True if deleted, False if it was never saved or is already gone
        """
        if relationship.id is None:
            return False
        model = self._session.get(RelationshipModel, relationship.id)
        if model is None:
            return False

        self._session.delete(model)
        self._session.flush()

        self.reset_cache([relationship.id])
        self._probe.relationship_deleted(relationship.id, relationship.group_id)
        return True

    def load(self, relationship_id: int) -> Relationship | None:
        loaded = self.load_multiple([relationship_id])
        return loaded[0] if loaded else None

    def load_multiple(self, ids: Iterable[int]) -> list[Relationship]:
        """Load relationships by ID, in the given order, skipping missing ones."""
        ids = list(ids)
        missing = [i for i in ids if i not in self._entities]
        if missing:
            stmt = select(RelationshipModel).where(RelationshipModel.id.in_(missing))
            for model in self._session.scalars(stmt):
                self._entities[model.id] = self._to_domain(model)

        return [self._entities[i] for i in ids if i in self._entities]

    def load_by_group(
        self, group: Group, relation_type_id: str | None = None
    ) -> list[Relationship]:
        """Relationships of a group; empty for an unsaved group."""
        if group.id is None:
            return []

        key = (group.id, relation_type_id or ALL_RELATION_TYPES)
        if key in self._by_group:
            self._probe.cache_hit("group", f"{key[0]}:{key[1]}")
        else:
            stmt = select(RelationshipModel.id).where(RelationshipModel.gid == group.id)
            if relation_type_id is not None:
                stmt = stmt.where(RelationshipModel.plugin_id == relation_type_id)
            self._by_group[key] = list(
                self._session.scalars(stmt.order_by(RelationshipModel.id))
            )

        return self.load_multiple(self._by_group[key])

    def load_by_entity(
        self, entity: ContentEntity, relation_type_id: str | None = None
    ) -> list[Relationship]:
        """Relationships targeting an entity.

        Without a relation type, the candidates are the relation types the
        registry lists for the entity's type. Configuration entities are
        looked up through their wrapper ID; an entity that was never
        wrapped has no relationships.
        """
        if entity.id is None:
            return []

        key = (
            entity.entity_type_id,
            str(entity.id),
            relation_type_id or ALL_RELATION_TYPES,
        )
        if key in self._by_entity:
            self._probe.cache_hit("entity", ":".join(key))
            return self.load_multiple(self._by_entity[key])

        if relation_type_id is not None:
            relation_type_ids = [relation_type_id]
        else:
            relation_type_ids = self._registry.ids_by_entity_type_id(
                entity.entity_type_id
            )

        target_id = self._storage_id(entity)
        if target_id is None or not relation_type_ids:
            self._by_entity[key] = []
            return []

        stmt = (
            select(RelationshipModel.id)
            .where(
                RelationshipModel.entity_id == target_id,
                RelationshipModel.plugin_id.in_(relation_type_ids),
            )
            .order_by(RelationshipModel.id)
        )
        self._by_entity[key] = list(self._session.scalars(stmt))
        return self.load_multiple(self._by_entity[key])

    def load_by_relation_type_id(self, relation_type_id: str) -> list[Relationship]:
        if relation_type_id in self._by_relation_type:
            self._probe.cache_hit("relation_type", relation_type_id)
        else:
            stmt = (
                select(RelationshipModel.id)
                .where(RelationshipModel.plugin_id == relation_type_id)
                .order_by(RelationshipModel.id)
            )
            self._by_relation_type[relation_type_id] = list(self._session.scalars(stmt))

        return self.load_multiple(self._by_relation_type[relation_type_id])

    def load_by_properties(self, **properties: Any) -> list[Relationship]:
        """Uncached lookup by row column values.

        Raises:
            ValueError: If a property is not a relationship column
        """
        unknown = set(properties) - set(_PROPERTY_COLUMNS)
        if unknown:
            raise ValueError(f"Unknown relationship properties: {sorted(unknown)}")

        stmt = select(RelationshipModel)
        for name, value in properties.items():
            stmt = stmt.where(_PROPERTY_COLUMNS[name] == value)

        relationships = []
        for model in self._session.scalars(stmt.order_by(RelationshipModel.id)):
            relationship = self._to_domain(model)
            self._entities[model.id] = relationship
            relationships.append(relationship)
        return relationships

    def reset_cache(self, ids: Iterable[int] | None = None) -> None:
        """Clear all lookup caches, plus the given IDs (or all) of the ID cache."""
        self._by_group.clear()
        self._by_entity.clear()
        self._by_relation_type.clear()

        id_list = None if ids is None else list(ids)
        if id_list is None:
            self._entities.clear()
        else:
            for relationship_id in id_list:
                self._entities.pop(relationship_id, None)

        self._probe.cache_reset(id_list)

    @contextmanager
    def unit_of_work(self) -> Iterator[RelationshipStore]:
        """Scope the caches to a block; they are cleared on entry and exit."""
        self.reset_cache()
        try:
            yield self
        finally:
            self.reset_cache()

    def resolve_entity(self, relationship: Relationship) -> ContentEntity | None:
        """Re-resolve the target entity of a relationship.

        Returns:
            The entity, or None if it no longer exists

        Raises:
            InvalidOperationError: If no resolver is configured
        """
        definition = self._registry.get(relationship.relation_type_id)

        if definition.handles_config_entities:
            if self._config_wrappers is None:
                raise InvalidOperationError("No config wrapper provider is available")
            wrapped = self._config_wrappers.unwrap(relationship.entity_id)
            if wrapped is None:
                return None
            entity_type_id, entity_id = wrapped
        else:
            entity_type_id = definition.entity_type_id
            entity_id = relationship.entity_id

        if self._entity_resolver is None:
            raise InvalidOperationError("No entity resolver is available")
        return self._entity_resolver.resolve(entity_type_id, entity_id)

    def _storage_id(self, entity: ContentEntity) -> int | None:
        """The integer stored in entity_id for this entity, if it has one."""
        if entity.is_config:
            if self._config_wrappers is None:
                return None
            return self._config_wrappers.find_wrapper_id(entity)

        if isinstance(entity.id, bool) or not isinstance(entity.id, int):
            return None
        return entity.id

    @staticmethod
    def _to_domain(model: RelationshipModel) -> Relationship:
        return Relationship(
            content_type_id=model.type,
            group_id=model.gid,
            entity_id=model.entity_id,
            relation_type_id=model.plugin_id,
            group_type_id=model.group_type,
            values=dict(model.extra or {}),
            id=model.id,
        )
