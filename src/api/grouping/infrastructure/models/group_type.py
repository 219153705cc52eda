"""SQLAlchemy ORM models for group types and their roles."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class GroupTypeModel(Base, TimestampMixin):
    """ORM model for the group_types table.

    Enabled relation types are stored as a JSON mapping of relation type
    ID to configuration; instances are rebuilt from the registry on load.
    """

    __tablename__ = "group_types"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    relations: Mapped[dict[str, Any]] = mapped_column(nullable=False, default=dict)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<GroupTypeModel(id={self.id}, label={self.label})>"


class GroupRoleModel(Base, TimestampMixin):
    """ORM model for the group_roles table."""

    __tablename__ = "group_roles"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    group_type: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("group_types.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    weight: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    internal: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # Stored as {"granted": [...]} to keep the JSON column an object.
    permissions: Mapped[dict[str, Any]] = mapped_column(nullable=False, default=dict)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<GroupRoleModel(id={self.id}, group_type={self.group_type})>"
