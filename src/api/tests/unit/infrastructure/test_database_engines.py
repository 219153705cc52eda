"""Unit tests for engine and session creation."""

import pytest
from sqlalchemy import text
from sqlalchemy.pool import StaticPool

from infrastructure.database import (
    build_url,
    create_engine_from_settings,
    create_sessionmaker,
    session_scope,
)
from infrastructure.settings import DatabaseSettings


class TestBuildUrl:
    """Tests for URL assembly."""

    def test_explicit_url_is_used_verbatim(self):
        settings = DatabaseSettings(url="sqlite+pysqlite:///grouping.db")
        assert build_url(settings) == "sqlite+pysqlite:///grouping.db"

    def test_special_characters_are_encoded(self):
        """Credentials with reserved characters must be percent-encoded."""
        settings = DatabaseSettings(url=None, username="user@x", password="p@ss/w:rd")

        url = build_url(settings)

        assert "user%40x" in url
        assert "p%40ss%2Fw%3Ard" in url
        assert url.startswith("postgresql+psycopg://")


class TestCreateEngine:
    """Tests for engine creation."""

    def test_in_memory_sqlite_shares_one_connection(self):
        engine = create_engine_from_settings(
            DatabaseSettings(url="sqlite+pysqlite:///:memory:")
        )
        try:
            assert isinstance(engine.pool, StaticPool)
        finally:
            engine.dispose()

    def test_file_sqlite_uses_default_pool(self, tmp_path):
        engine = create_engine_from_settings(
            DatabaseSettings(url=f"sqlite+pysqlite:///{tmp_path / 'g.db'}")
        )
        try:
            assert not isinstance(engine.pool, StaticPool)
        finally:
            engine.dispose()


class TestSessionScope:
    """Tests for the unit-of-work session scope."""

    @pytest.fixture
    def factory(self):
        engine = create_engine_from_settings(
            DatabaseSettings(url="sqlite+pysqlite:///:memory:")
        )
        with engine.begin() as conn:
            conn.execute(text("CREATE TABLE t (x INTEGER)"))
        yield create_sessionmaker(engine)
        engine.dispose()

    def count(self, factory) -> int:
        with factory() as session:
            return session.execute(text("SELECT COUNT(*) FROM t")).scalar_one()

    def test_commits_on_success(self, factory):
        with session_scope(factory) as session:
            session.execute(text("INSERT INTO t VALUES (1)"))

        assert self.count(factory) == 1

    def test_rolls_back_on_error(self, factory):
        with pytest.raises(RuntimeError):
            with session_scope(factory) as session:
                session.execute(text("INSERT INTO t VALUES (1)"))
                raise RuntimeError("boom")

        assert self.count(factory) == 0
