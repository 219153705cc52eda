"""Value objects for the grouping domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for roles, actors and entity references.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum


class BuiltinRole(StrEnum):
    """The three internal roles every group type is provisioned with.

    ANONYMOUS applies to actors without an identity, OUTSIDER to known
    actors without a membership and MEMBER to every member of the group.
    """

    ANONYMOUS = "anonymous"
    OUTSIDER = "outsider"
    MEMBER = "member"

    def role_id(self, group_type_id: str) -> str:
        """Return the role ID scoped to a group type (e.g., "team.member")."""
        return f"{group_type_id}.{self.value}"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def weight(self) -> int:
        return {
            BuiltinRole.ANONYMOUS: -102,
            BuiltinRole.OUTSIDER: -101,
            BuiltinRole.MEMBER: -100,
        }[self]


class CardinalityKind(StrEnum):
    """The two cardinality axes of a relation type."""

    GROUP = "group"
    ENTITY = "entity"


@dataclass(frozen=True)
class GroupRole:
    """A role scoped to one group type, carrying a set of group permissions.

    Internal roles are the built-in anonymous/outsider/member triad; they are
    derived from membership state and are never granted explicitly.
    """

    id: str
    group_type_id: str
    label: str
    weight: int = 0
    internal: bool = False
    permissions: frozenset[str] = field(default_factory=frozenset)

    @property
    def name(self) -> str:
        """The role name without its group type prefix."""
        return self.id.split(".", 1)[-1]

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions

    def grant(self, *permissions: str) -> GroupRole:
        """Return a copy with the given permissions added."""
        return replace(self, permissions=self.permissions | frozenset(permissions))

    def revoke(self, *permissions: str) -> GroupRole:
        """Return a copy with the given permissions removed."""
        return replace(self, permissions=self.permissions - frozenset(permissions))


@dataclass(frozen=True)
class EntityRef:
    """A reference to an entity living outside this context.

    Satisfies the ContentEntity protocol, so anything that can be attached
    to a group can be described with an EntityRef when the caller has no
    richer object at hand.

    Attributes:
        entity_type_id: The entity type (e.g., "user", "node")
        id: The persisted identity, None while unsaved
        bundle: The entity bundle; defaults to the entity type
        label: Human readable label used in violation messages
        is_config: Whether this is a configuration entity
    """

    entity_type_id: str
    id: int | str | None = None
    bundle: str = ""
    label: str = ""
    is_config: bool = False

    def __post_init__(self) -> None:
        if not self.bundle:
            object.__setattr__(self, "bundle", self.entity_type_id)


@dataclass(frozen=True)
class Actor:
    """The account on whose behalf an access question is asked.

    Attributes:
        id: The user ID, None for anonymous actors
        permissions: Site-wide permissions held outside of any group
        label: Display name
    """

    id: int | None = None
    permissions: frozenset[str] = field(default_factory=frozenset)
    label: str = ""

    @property
    def is_anonymous(self) -> bool:
        return self.id is None

    def as_entity(self) -> EntityRef:
        """Return the actor as a user entity reference."""
        return EntityRef(entity_type_id="user", id=self.id, label=self.label)
