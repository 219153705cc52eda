"""Access control handlers and the decorators relation types wrap them in.

Every relation type gets a chain: the role permission check at the core,
wrapped by zero or more decorators. A decorator may answer on its own
(allow or forbid) or defer to the handler it wraps. Chains are composed
once, when the engine is built.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Protocol

from grouping.application.access.permissions import ADMINISTER_GROUP, LEAVE_GROUP
from grouping.domain.aggregates import Group, Relationship
from grouping.domain.relation_types import RelationTypeDefinition
from grouping.domain.value_objects import Actor, GroupRole
from shared_kernel.authorization.types import AccessResult, AccessStatus


@dataclass(frozen=True)
class AccessRequest:
    """One access question, with the actor's roles already resolved.

    Attributes:
        actor: Who is asking
        group: The group the question is about
        operation: The operation name (e.g., "view", "delete")
        permission: The group permission the operation maps to
        roles: The actor's roles in the group
        relation_type_id: Set for content operations
        relationship: The relationship being acted on, if any
    """

    actor: Actor
    group: Group
    operation: str
    permission: str
    roles: tuple[GroupRole, ...]
    relation_type_id: str | None = None
    relationship: Relationship | None = None

    def has_permission(self, permission: str) -> bool:
        return any(role.has_permission(permission) for role in self.roles)


class AccessControlHandler(Protocol):
    """Answers access requests."""

    def check_access(self, request: AccessRequest) -> AccessResult:
        ...


DecoratorFactory = Callable[
    [AccessControlHandler, RelationTypeDefinition], AccessControlHandler
]


class RolePermissionAccessControl:
    """Allows when any of the actor's roles holds the required permission.

    ``administer group`` counts as every permission. Decorators wrapping
    this handler can still forbid what it allows. Never forbids; a missing
    permission is a neutral result.
    """

    def check_access(self, request: AccessRequest) -> AccessResult:
        if request.has_permission(ADMINISTER_GROUP):
            return AccessResult.allowed("administer group")
        return AccessResult.allowed_if(
            request.has_permission(request.permission),
            reason=f"permission {request.permission!r}",
        )


class AccessControlDecorator:
    """Base decorator: defers every request to the wrapped handler."""

    def __init__(
        self,
        inner: AccessControlHandler,
        definition: RelationTypeDefinition | None = None,
    ) -> None:
        self._inner = inner
        self._definition = definition

    def check_access(self, request: AccessRequest) -> AccessResult:
        return self._inner.check_access(request)


class EmptyAccessControl(AccessControlDecorator):
    """Pass-through used when a relation type brings no handler of its own.

    Keeps every chain at least one decorator deep so that further
    decorators always have something to wrap.
    """


class StaticAccessOverride(AccessControlDecorator):
    """Applies a relation type's fixed allow/deny answers per operation."""

    def check_access(self, request: AccessRequest) -> AccessResult:
        overrides = self._definition.access_overrides if self._definition else {}
        status = overrides.get(request.operation)

        if status == AccessStatus.ALLOWED:
            return AccessResult.allowed(f"{request.operation} allowed by relation type")
        if status == AccessStatus.FORBIDDEN:
            return AccessResult.forbidden(
                f"{request.operation} forbidden by relation type"
            )
        return super().check_access(request)


class OwnMembershipAccessControl(AccessControlDecorator):
    """Lets a member delete their own membership with ``leave group``.

    The membership must belong to the group the request is about and be of
    the relation type this decorator wraps.
    """

    def check_access(self, request: AccessRequest) -> AccessResult:
        relationship = request.relationship
        if (
            request.operation == "delete"
            and relationship is not None
            and not request.actor.is_anonymous
            and relationship.group_id == request.group.id
            and relationship.relation_type_id == request.relation_type_id
            and relationship.entity_id == request.actor.id
            and request.has_permission(LEAVE_GROUP)
        ):
            return AccessResult.allowed("own membership")
        return super().check_access(request)


def compose(
    base: AccessControlHandler,
    definition: RelationTypeDefinition,
    decorators: Iterable[DecoratorFactory],
) -> AccessControlHandler:
    """Wrap base in each decorator in turn; the last one ends up outermost."""
    handler = base
    for factory in decorators:
        handler = factory(handler, definition)
    return handler
