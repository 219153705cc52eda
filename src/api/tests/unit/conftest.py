"""Unit test fixtures: in-memory SQLite row store, registry and entities."""

from collections.abc import Iterator

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

import grouping.infrastructure.models  # noqa: F401  (registers the tables)
from grouping.application.relation_type_registry import RelationTypeRegistry
from grouping.domain.relation_types import (
    RelationTypeDefinition,
    default_relation_types,
)
from grouping.domain.value_objects import EntityRef
from infrastructure.database import Base


class InMemoryEntityResolver:
    """EntityResolver backed by a dict, keyed by (entity_type_id, id)."""

    def __init__(self) -> None:
        self.entities: dict[tuple[str, str], EntityRef] = {}

    def add(self, entity: EntityRef) -> EntityRef:
        self.entities[(entity.entity_type_id, str(entity.id))] = entity
        return entity

    def resolve(self, entity_type_id, entity_id):
        return self.entities.get((entity_type_id, str(entity_id)))


@pytest.fixture
def relation_types() -> list[RelationTypeDefinition]:
    """Membership plus a few node and configuration relation types."""
    return [
        *default_relation_types(),
        RelationTypeDefinition(
            id="group_node:article",
            entity_type_id="node",
            entity_bundle="article",
            label="Group node (Article)",
            reference_label="Title",
        ),
        RelationTypeDefinition(
            id="group_node:page",
            entity_type_id="node",
            entity_bundle="page",
            label="Group node (Page)",
        ),
        RelationTypeDefinition(
            id="group_vocabulary",
            entity_type_id="taxonomy_vocabulary",
            label="Group vocabulary",
            handles_config_entities=True,
        ),
    ]


@pytest.fixture
def registry(relation_types) -> RelationTypeRegistry:
    return RelationTypeRegistry(relation_types)


@pytest.fixture
def engine() -> Iterator[Engine]:
    """In-memory SQLite engine with every grouping table created."""
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine) -> Iterator[Session]:
    with Session(engine, expire_on_commit=False) as session:
        yield session
        session.rollback()


@pytest.fixture
def entity_resolver() -> InMemoryEntityResolver:
    return InMemoryEntityResolver()
