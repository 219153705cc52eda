"""SQLAlchemy ORM model for the groups table."""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class GroupModel(Base, TimestampMixin):
    """ORM model for groups.

    Foreign Key Constraint:
    - type references group_types.id with RESTRICT delete
    - Deleting a group type must delete its groups first, so no group is
      ever left referencing a missing type
    """

    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("group_types.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    label: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<GroupModel(id={self.id}, type={self.type}, label={self.label})>"
