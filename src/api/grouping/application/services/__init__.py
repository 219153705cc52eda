"""Application services for the grouping bounded context.

Application services orchestrate domain aggregates, repositories and
validators to fulfil use cases. They are the "front door" to the context.
"""

from grouping.application.services.group_type_service import GroupTypeService
from grouping.application.services.relationship_service import (
    AddContentResult,
    RelationshipService,
)

__all__ = [
    "AddContentResult",
    "GroupTypeService",
    "RelationshipService",
]
