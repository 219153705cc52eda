"""GroupContentType: the record binding a group type to a relation type."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GroupContentType:
    """Exists exactly while a relation type is enabled on a group type.

    Relationship rows reference it through their ``type`` column.
    """

    id: str
    group_type_id: str
    relation_type_id: str
    label: str
    description: str = ""
