"""SQLAlchemy ORM models for the grouping bounded context.

These models map to database tables and are used by repository implementations.
"""

from grouping.infrastructure.models.config_wrapper import ConfigWrapperModel
from grouping.infrastructure.models.content_type import GroupContentTypeModel
from grouping.infrastructure.models.group import GroupModel
from grouping.infrastructure.models.group_type import GroupRoleModel, GroupTypeModel
from grouping.infrastructure.models.relationship import RelationshipModel

__all__ = [
    "ConfigWrapperModel",
    "GroupContentTypeModel",
    "GroupModel",
    "GroupRoleModel",
    "GroupTypeModel",
    "RelationshipModel",
]
