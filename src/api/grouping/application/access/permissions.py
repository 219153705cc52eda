"""Group permission names and the operation to permission mapping."""

from __future__ import annotations

from enum import StrEnum

ADMINISTER_GROUP = "administer group"
BYPASS_GROUP_ACCESS = "bypass group access"
LEAVE_GROUP = "leave group"
JOIN_GROUP = "join group"


class GroupOperation(StrEnum):
    """Operations against a group itself."""

    VIEW = "view"
    UPDATE = "update"
    DELETE = "delete"
    JOIN = "join"
    LEAVE = "leave"


class ContentOperation(StrEnum):
    """Operations against a group's content of one relation type."""

    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


_GROUP_PERMISSIONS = {
    GroupOperation.VIEW: "view group",
    GroupOperation.UPDATE: "edit group",
    GroupOperation.DELETE: "delete group",
    GroupOperation.JOIN: JOIN_GROUP,
    GroupOperation.LEAVE: LEAVE_GROUP,
}

_CONTENT_PERMISSIONS = {
    ContentOperation.VIEW: "view {} entity",
    ContentOperation.CREATE: "create {} entity",
    ContentOperation.UPDATE: "update any {} entity",
    ContentOperation.DELETE: "delete any {} entity",
}


def group_permission(operation: str) -> str:
    """Map a group operation to the permission it requires.

    Raises:
        ValueError: If the operation is unknown
    """
    return _GROUP_PERMISSIONS[GroupOperation(operation)]


def content_permission(relation_type_id: str, operation: str) -> str:
    """Map a content operation to the permission it requires.

    Example:
        >>> content_permission("group_node:article", "update")
        'update any group_node:article entity'

    Raises:
        ValueError: If the operation is unknown
    """
    return _CONTENT_PERMISSIONS[ContentOperation(operation)].format(relation_type_id)
