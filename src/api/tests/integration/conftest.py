"""Integration test fixtures for the grouping context.

By default these run against an in-memory SQLite database. Point
GROUPING_TEST_DB_URL at a PostgreSQL database to run them against the
production driver, e.g. postgresql+psycopg://grouping:pw@localhost/grouping_test
"""

import os
from collections.abc import Generator, Iterator

import pytest
from sqlalchemy import Engine
from sqlalchemy.orm import Session

import grouping.infrastructure.models  # noqa: F401  (registers the tables)
from grouping.application.relation_type_registry import RelationTypeRegistry
from grouping.dependencies import GroupingContext, build_context
from grouping.domain.relation_types import (
    RelationTypeDefinition,
    default_relation_types,
)
from infrastructure.database import (
    Base,
    create_engine_from_settings,
    create_sessionmaker,
)
from infrastructure.settings import DatabaseSettings
from shared_kernel.authorization.types import AccessStatus


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires database)",
    )


@pytest.fixture(scope="session")
def integration_db_settings() -> DatabaseSettings:
    """Database settings for integration tests.

    Override with GROUPING_TEST_DB_URL.
    """
    return DatabaseSettings(
        url=os.getenv("GROUPING_TEST_DB_URL", "sqlite+pysqlite:///:memory:")
    )


@pytest.fixture
def engine(integration_db_settings: DatabaseSettings) -> Iterator[Engine]:
    """Engine with a fresh schema for every test."""
    engine = create_engine_from_settings(integration_db_settings)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session, None, None]:
    factory = create_sessionmaker(engine)
    with factory() as session:
        yield session
        session.rollback()


@pytest.fixture
def registry() -> RelationTypeRegistry:
    return RelationTypeRegistry(
        [
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
                access_overrides={"delete": AccessStatus.FORBIDDEN},
            ),
            RelationTypeDefinition(
                id="group_vocabulary",
                entity_type_id="taxonomy_vocabulary",
                label="Group vocabulary",
                handles_config_entities=True,
            ),
        ]
    )


@pytest.fixture
def grouping(session: Session, registry: RelationTypeRegistry) -> GroupingContext:
    """All grouping components wired around the test session."""
    return build_context(session, registry)
