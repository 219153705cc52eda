"""Access decisions for groups and their content."""

from grouping.application.access.engine import GroupAccessEngine
from grouping.application.access.handlers import (
    AccessControlDecorator,
    AccessControlHandler,
    AccessRequest,
    EmptyAccessControl,
    OwnMembershipAccessControl,
    RolePermissionAccessControl,
    StaticAccessOverride,
    compose,
)
from grouping.application.access.permissions import (
    ADMINISTER_GROUP,
    BYPASS_GROUP_ACCESS,
    ContentOperation,
    GroupOperation,
    content_permission,
    group_permission,
)

__all__ = [
    "ADMINISTER_GROUP",
    "BYPASS_GROUP_ACCESS",
    "AccessControlDecorator",
    "AccessControlHandler",
    "AccessRequest",
    "ContentOperation",
    "EmptyAccessControl",
    "GroupAccessEngine",
    "GroupOperation",
    "OwnMembershipAccessControl",
    "RolePermissionAccessControl",
    "StaticAccessOverride",
    "compose",
    "content_permission",
    "group_permission",
]
