"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database connection settings for the relational row store.

    Environment variables:
        GROUPING_DB_URL: Full SQLAlchemy URL; overrides the discrete fields
        GROUPING_DB_DRIVERNAME: SQLAlchemy driver (default: postgresql+psycopg)
        GROUPING_DB_HOST: Database host (default: localhost)
        GROUPING_DB_PORT: Database port (default: 5432)
        GROUPING_DB_DATABASE: Database name (default: grouping)
        GROUPING_DB_USERNAME: Database user (default: grouping)
        GROUPING_DB_PASSWORD: Database password (required in production)
        GROUPING_DB_POOL_MIN_CONNECTIONS: Minimum connections in pool (default: 2)
        GROUPING_DB_POOL_MAX_CONNECTIONS: Maximum connections in pool (default: 10)
        GROUPING_DB_ECHO: Log emitted SQL (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="GROUPING_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str | None = Field(
        default=None,
        description="Full SQLAlchemy URL, e.g. sqlite+pysqlite:///:memory:",
    )
    drivername: str = Field(
        default="postgresql+psycopg", description="SQLAlchemy driver name"
    )
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    database: str = Field(default="grouping", description="Database name")
    username: str = Field(default="grouping", description="Database username")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Database password",
    )
    pool_min_connections: int = Field(
        default=2,
        description="Minimum connections in pool",
        ge=1,
        le=100,
    )
    pool_max_connections: int = Field(
        default=10,
        description="Maximum connections in pool",
        ge=1,
        le=100,
    )
    echo: bool = Field(default=False, description="Log emitted SQL")

    @model_validator(mode="after")
    def validate_pool_settings(self) -> "DatabaseSettings":
        """Validate pool max >= min."""
        if self.pool_max_connections < self.pool_min_connections:
            raise ValueError(
                f"pool_max_connections ({self.pool_max_connections}) must be >= "
                f"pool_min_connections ({self.pool_min_connections})"
            )
        return self

    @property
    def connection_string(self) -> str:
        """Generate a connection string (without password for logging)."""
        if self.url:
            return self.url
        return f"{self.drivername}://{self.username}@{self.host}:{self.port}/{self.database}"


class GroupingSettings(BaseSettings):
    """Settings for the group relations subsystem.

    Environment variables:
        GROUPING_RELATION_TYPES_FILE: JSON file with relation type definitions
        GROUPING_DEBUG: Debug mode (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="GROUPING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Group Relations", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")
    relation_types_file: Path | None = Field(
        default=None,
        description="JSON file holding the static relation type definitions",
    )

    @property
    def database(self) -> DatabaseSettings:
        """Get database settings."""
        return get_database_settings()


@lru_cache
def get_settings() -> GroupingSettings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return GroupingSettings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()
