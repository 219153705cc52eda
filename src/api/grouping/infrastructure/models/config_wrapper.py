"""SQLAlchemy ORM model for configuration entity wrappers."""

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class ConfigWrapperModel(Base, TimestampMixin):
    """Gives a configuration entity (string ID) an integer surrogate ID.

    The unique constraint keeps the mapping 1:1.
    """

    __tablename__ = "group_config_wrappers"
    __table_args__ = (
        UniqueConstraint("entity_type_id", "entity_id", name="uq_config_wrapper_entity"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    entity_type_id: Mapped[str] = mapped_column(String(64), nullable=False)
    entity_id: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<ConfigWrapperModel(id={self.id}, entity_type_id={self.entity_type_id}, "
            f"entity_id={self.entity_id})>"
        )
