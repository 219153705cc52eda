"""Database infrastructure - shared SQLAlchemy primitives."""

from infrastructure.database.engines import build_url, create_engine_from_settings
from infrastructure.database.models import Base, TimestampMixin
from infrastructure.database.session import create_sessionmaker, session_scope

__all__ = [
    "Base",
    "TimestampMixin",
    "build_url",
    "create_engine_from_settings",
    "create_sessionmaker",
    "session_scope",
]
