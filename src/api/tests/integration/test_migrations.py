"""Integration tests for the Alembic migrations."""

from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

import grouping.infrastructure.models  # noqa: F401  (registers the tables)
from infrastructure.database import Base

pytestmark = pytest.mark.integration

MIGRATIONS = Path(__file__).resolve().parents[2] / "infrastructure" / "migrations"


@pytest.fixture
def alembic_config(tmp_path) -> tuple[Config, str]:
    url = f"sqlite+pysqlite:///{tmp_path / 'migrations.db'}"
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS))
    config.set_main_option("sqlalchemy.url", url)
    return config, url


class TestMigrations:
    def test_upgrade_creates_every_mapped_table(self, alembic_config):
        """The migrated schema has the same tables and columns as the models."""
        config, url = alembic_config

        command.upgrade(config, "head")

        engine = create_engine(url)
        try:
            inspector = inspect(engine)
            assert set(Base.metadata.tables) <= set(inspector.get_table_names())
            for name, table in Base.metadata.tables.items():
                columns = {c["name"] for c in inspector.get_columns(name)}
                assert columns == set(table.columns.keys()), name
        finally:
            engine.dispose()

    def test_downgrade_removes_tables(self, alembic_config):
        config, url = alembic_config
        command.upgrade(config, "head")

        command.downgrade(config, "base")

        engine = create_engine(url)
        try:
            assert set(inspect(engine).get_table_names()) <= {"alembic_version"}
        finally:
            engine.dispose()
