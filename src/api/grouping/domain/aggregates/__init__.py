"""Domain aggregates for the grouping context.

Aggregates are the core business objects containing state and business logic.
They enforce invariants and business rules without depending on infrastructure.
"""

from grouping.domain.aggregates.content_type import GroupContentType
from grouping.domain.aggregates.group import Group
from grouping.domain.aggregates.group_type import GroupType
from grouping.domain.aggregates.relationship import Relationship

__all__ = [
    "Group",
    "GroupContentType",
    "GroupType",
    "Relationship",
]
