"""SQLAlchemy ORM model for the group_content_types table."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class GroupContentTypeModel(Base, TimestampMixin):
    """ORM model for content type records.

    One row per relation type enabled on a group type.
    """

    __tablename__ = "group_content_types"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    group_type: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    content_plugin: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<GroupContentTypeModel(id={self.id}, group_type={self.group_type}, "
            f"content_plugin={self.content_plugin})>"
        )
