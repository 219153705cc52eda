"""Group aggregate for the grouping context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from grouping.domain.aggregates.group_type import GroupType


@dataclass
class Group:
    """A group instance of some group type.

    The integer ID is assigned by the repository on first save; until then
    the group is "new" and cannot hold any content.

    A group is itself an entity (type "group", bundle = its group type), so
    relation types may attach groups to other groups.
    """

    group_type_id: str
    label: str
    id: int | None = None

    entity_type_id: ClassVar[str] = "group"
    is_config: ClassVar[bool] = False

    @classmethod
    def create(cls, group_type: GroupType, label: str) -> Group:
        """Factory method for creating a new, unsaved group.

        Raises:
            ValueError: If the label is empty or longer than 255 characters
        """
        if not label or len(label) > 255:
            raise ValueError("Group label must be between 1 and 255 characters")
        return cls(group_type_id=group_type.id, label=label)

    @property
    def bundle(self) -> str:
        return self.group_type_id

    @property
    def is_new(self) -> bool:
        return self.id is None
