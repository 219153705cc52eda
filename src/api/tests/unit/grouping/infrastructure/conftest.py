"""Fixtures wiring the SQL-backed grouping components to in-memory SQLite."""

import pytest

from grouping.domain.aggregates import Group, GroupType
from grouping.infrastructure.config_wrapper_store import ConfigWrapperStore
from grouping.infrastructure.content_type_catalog import ContentTypeCatalog
from grouping.infrastructure.group_repository import GroupRepository
from grouping.infrastructure.group_type_repository import GroupTypeRepository
from grouping.infrastructure.relationship_store import RelationshipStore


@pytest.fixture
def group_types(session, registry) -> GroupTypeRepository:
    return GroupTypeRepository(session=session, registry=registry)


@pytest.fixture
def groups(session) -> GroupRepository:
    return GroupRepository(session=session)


@pytest.fixture
def catalog(session, registry) -> ContentTypeCatalog:
    return ContentTypeCatalog(session=session, registry=registry)


@pytest.fixture
def config_wrappers(session) -> ConfigWrapperStore:
    return ConfigWrapperStore(session)


@pytest.fixture
def store(
    session, registry, group_types, catalog, entity_resolver, config_wrappers
) -> RelationshipStore:
    return RelationshipStore(
        session=session,
        registry=registry,
        group_types=group_types,
        catalog=catalog,
        entity_resolver=entity_resolver,
        config_wrappers=config_wrappers,
    )


@pytest.fixture
def team(registry, group_types, catalog) -> GroupType:
    """A persisted group type with every test relation type enabled."""
    group_type = GroupType.create("team", "Team")
    for definition in registry:
        instance = group_type.enable_relation(definition)
        catalog.install(group_type, instance)
    group_types.save(group_type)
    return group_type


@pytest.fixture
def red(team, groups) -> Group:
    group = Group.create(team, "Red")
    groups.save(group)
    return group


@pytest.fixture
def blue(team, groups) -> Group:
    group = Group.create(team, "Blue")
    groups.save(group)
    return group
