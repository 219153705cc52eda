"""Composition of the grouping context.

The registry is process-wide and built once. Everything else is scoped to
one unit of work and assembled around its Session by build_context().

Example:
    >>> factory = create_sessionmaker(create_engine_from_settings(get_database_settings()))
    >>> with session_scope(factory) as session:
    ...     ctx = build_context(session, get_relation_type_registry())
    ...     ctx.group_type_service.create_group_type("team", "Team")
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy.orm import Session

from grouping.application.access import GroupAccessEngine
from grouping.application.access.handlers import DecoratorFactory
from grouping.application.cardinality_validator import CardinalityValidator
from grouping.application.relation_type_registry import RelationTypeRegistry
from grouping.application.services import GroupTypeService, RelationshipService
from grouping.infrastructure.config_wrapper_store import ConfigWrapperStore
from grouping.infrastructure.content_type_catalog import ContentTypeCatalog
from grouping.infrastructure.group_repository import GroupRepository
from grouping.infrastructure.group_type_repository import GroupTypeRepository
from grouping.infrastructure.relation_type_loader import load_relation_types
from grouping.infrastructure.relationship_store import RelationshipStore
from grouping.ports.collaborators import ConfigWrapperProvider, EntityResolver
from infrastructure.settings import get_settings


@lru_cache
def get_relation_type_registry() -> RelationTypeRegistry:
    """Get the process-wide relation type registry.

    Built from the built-in relation types plus GROUPING_RELATION_TYPES_FILE
    when set.
    """
    settings = get_settings()
    return RelationTypeRegistry(load_relation_types(settings.relation_types_file))


@dataclass(frozen=True)
class GroupingContext:
    """The grouping components of one unit of work, sharing one Session."""

    registry: RelationTypeRegistry
    group_types: GroupTypeRepository
    groups: GroupRepository
    catalog: ContentTypeCatalog
    store: RelationshipStore
    validator: CardinalityValidator
    access: GroupAccessEngine
    group_type_service: GroupTypeService
    relationship_service: RelationshipService


def build_context(
    session: Session,
    registry: RelationTypeRegistry,
    entity_resolver: EntityResolver | None = None,
    config_wrappers: ConfigWrapperProvider | None = None,
    access_decorators: Mapping[str, Sequence[DecoratorFactory]] | None = None,
) -> GroupingContext:
    """Assemble the grouping components around a session.

    Args:
        session: Session of the unit of work
        registry: Relation type definitions
        entity_resolver: Resolves target entities when reading content
        config_wrappers: Surrogate identities for configuration entities;
            defaults to the SQL-backed ConfigWrapperStore
        access_decorators: Extra access decorators per relation type ID

    Returns:
        GroupingContext with fresh, empty store caches
    """
    group_types = GroupTypeRepository(session=session, registry=registry)
    groups = GroupRepository(session=session)
    catalog = ContentTypeCatalog(session=session, registry=registry)
    store = RelationshipStore(
        session=session,
        registry=registry,
        group_types=group_types,
        catalog=catalog,
        entity_resolver=entity_resolver,
        config_wrappers=config_wrappers or ConfigWrapperStore(session),
    )
    validator = CardinalityValidator(store=store, catalog=catalog)

    return GroupingContext(
        registry=registry,
        group_types=group_types,
        groups=groups,
        catalog=catalog,
        store=store,
        validator=validator,
        access=GroupAccessEngine(
            store=store,
            group_types=group_types,
            registry=registry,
            decorators=access_decorators,
            groups=groups,
        ),
        group_type_service=GroupTypeService(
            group_types=group_types,
            groups=groups,
            catalog=catalog,
            store=store,
            registry=registry,
        ),
        relationship_service=RelationshipService(
            store=store,
            group_types=group_types,
            validator=validator,
        ),
    )
