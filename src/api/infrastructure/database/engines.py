"""Database engine creation for SQLAlchemy.

Row store access in this library is synchronous and request-scoped, so a
single blocking engine is shared and each unit of work opens its own
session from it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import URL
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from infrastructure.settings import DatabaseSettings

__all__ = [
    "create_engine_from_settings",
    "build_url",
]


def create_engine_from_settings(settings: DatabaseSettings) -> Engine:
    """Create the engine for the relational row store.

    SQLite URLs (used for tests and local tooling) do not accept pool
    sizing arguments. An in-memory SQLite database lives in a single
    shared connection, otherwise every session would see an empty one.

    Args:
        settings: Database connection settings

    Returns:
        Configured engine
    """
    url = build_url(settings)

    if url.startswith("sqlite"):
        if ":memory:" in url or url.endswith("://"):
            return create_engine(
                url,
                echo=settings.echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        return create_engine(url, echo=settings.echo)

    return create_engine(
        url,
        pool_size=settings.pool_max_connections,
        max_overflow=0,  # No overflow - strict pool limit
        pool_pre_ping=True,
        echo=settings.echo,
    )


def build_url(settings: DatabaseSettings) -> str:
    """Build the database URL.

    Properly percent-encodes username and password to handle special characters
    per RFC 3986 using SQLAlchemy's URL builder.

    Args:
        settings: Database connection settings

    Returns:
        The explicit URL when configured, otherwise one assembled from the
        discrete settings with credentials percent-encoded
    """
    if settings.url:
        return settings.url

    url = URL.create(
        drivername=settings.drivername,
        username=settings.username,
        password=settings.password.get_secret_value(),
        host=settings.host,
        port=settings.port,
        database=settings.database,
    )
    return url.render_as_string(hide_password=False)
