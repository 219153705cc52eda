"""SQLAlchemy ORM model for relationship rows."""

from __future__ import annotations

from typing import Any

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class RelationshipModel(Base, TimestampMixin):
    """ORM model for the group_relationships table.

    No uniqueness constraint covers (type, gid, entity_id): how often an
    entity may be attached is a cardinality rule validated before insert.
    """

    __tablename__ = "group_relationships"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    gid: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("groups.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    entity_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    plugin_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    group_type: Mapped[str] = mapped_column(String(32), nullable=False)
    extra: Mapped[dict[str, Any]] = mapped_column(nullable=False, default=dict)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<RelationshipModel(id={self.id}, type={self.type}, gid={self.gid}, "
            f"entity_id={self.entity_id})>"
        )
