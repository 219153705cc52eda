"""GroupType aggregate for the grouping context."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from grouping.domain.relation_types import (
    BUNDLE_MAX_LENGTH,
    RelationTypeDefinition,
    RelationTypeInstance,
)
from grouping.domain.value_objects import BuiltinRole, GroupRole

_MACHINE_NAME = re.compile(r"^[a-z0-9_]+$")


@dataclass
class GroupType:
    """GroupType aggregate: the template every group of this type follows.

    Owns the relation type instances enabled on it and the roles its groups
    hand out.

    Business rules:
    - The ID is a machine name of at most 32 characters and never changes
    - Every group type has the anonymous, outsider and member roles
    - A relation type can be enabled only once per group type
    - Internal roles cannot be removed
    """

    id: str
    label: str
    description: str = ""
    relations: dict[str, RelationTypeInstance] = field(default_factory=dict)
    roles: dict[str, GroupRole] = field(default_factory=dict)

    @classmethod
    def create(cls, id: str, label: str, description: str = "") -> GroupType:
        """Factory method for creating a new group type.

        Provisions the three built-in roles. Installing enforced relation
        types needs the registry and is left to the application service.

        Raises:
            ValueError: If the ID is not a valid machine name
        """
        if not _MACHINE_NAME.match(id) or len(id) > BUNDLE_MAX_LENGTH:
            raise ValueError(
                f"Group type ID must match [a-z0-9_]+ and be at most "
                f"{BUNDLE_MAX_LENGTH} characters, got {id!r}"
            )

        group_type = cls(id=id, label=label, description=description)
        for builtin in BuiltinRole:
            role = GroupRole(
                id=builtin.role_id(id),
                group_type_id=id,
                label=builtin.label,
                weight=builtin.weight,
                internal=True,
            )
            group_type.roles[role.id] = role
        return group_type

    def enable_relation(
        self,
        definition: RelationTypeDefinition,
        configuration: Mapping[str, Any] | None = None,
    ) -> RelationTypeInstance:
        """Enable a relation type on this group type.

        Raises:
            ValueError: If the relation type is already enabled
        """
        if definition.id in self.relations:
            raise ValueError(
                f"Relation type {definition.id} is already enabled on {self.id}"
            )
        instance = RelationTypeInstance(definition, self.id, configuration)
        self.relations[definition.id] = instance
        return instance

    def disable_relation(self, relation_type_id: str) -> RelationTypeInstance:
        """Disable a relation type, returning the removed instance.

        Raises:
            ValueError: If the relation type is not enabled
        """
        instance = self.relations.pop(relation_type_id, None)
        if instance is None:
            raise ValueError(
                f"Relation type {relation_type_id} is not enabled on {self.id}"
            )
        return instance

    def update_relation(
        self, relation_type_id: str, configuration: Mapping[str, Any]
    ) -> RelationTypeInstance:
        """Reconfigure an enabled relation type; omitted keys reset to defaults.

        Raises:
            ValueError: If the relation type is not enabled or the
                configuration is invalid
        """
        instance = self.get_relation(relation_type_id)
        if instance is None:
            raise ValueError(
                f"Relation type {relation_type_id} is not enabled on {self.id}"
            )
        return instance.set_configuration(configuration)

    def has_relation(self, relation_type_id: str) -> bool:
        return relation_type_id in self.relations

    def get_relation(self, relation_type_id: str) -> RelationTypeInstance | None:
        return self.relations.get(relation_type_id)

    def enabled_relations(self) -> list[RelationTypeInstance]:
        """Enabled relation types, sorted by relation type ID."""
        return [self.relations[key] for key in sorted(self.relations)]

    def add_role(
        self,
        name: str,
        label: str,
        permissions: Iterable[str] = (),
        weight: int = 0,
    ) -> GroupRole:
        """Add a custom role to the group type.

        Raises:
            ValueError: If a role with that name already exists
        """
        role_id = f"{self.id}.{name}"
        if role_id in self.roles:
            raise ValueError(f"Role {role_id} already exists")

        role = GroupRole(
            id=role_id,
            group_type_id=self.id,
            label=label,
            weight=weight,
            permissions=frozenset(permissions),
        )
        self.roles[role_id] = role
        return role

    def remove_role(self, role_id: str) -> None:
        """Remove a custom role.

        Raises:
            ValueError: If the role does not exist or is internal
        """
        role = self.get_role(role_id)
        if role is None:
            raise ValueError(f"Role {role_id} does not exist")
        if role.internal:
            raise ValueError(f"Cannot remove internal role {role_id}")
        del self.roles[role_id]

    def grant_permissions(self, role_id: str, *permissions: str) -> GroupRole:
        """Grant permissions to a role.

        Raises:
            ValueError: If the role does not exist
        """
        role = self.get_role(role_id)
        if role is None:
            raise ValueError(f"Role {role_id} does not exist")
        self.roles[role_id] = role.grant(*permissions)
        return self.roles[role_id]

    def revoke_permissions(self, role_id: str, *permissions: str) -> GroupRole:
        """Revoke permissions from a role.

        Raises:
            ValueError: If the role does not exist
        """
        role = self.get_role(role_id)
        if role is None:
            raise ValueError(f"Role {role_id} does not exist")
        self.roles[role_id] = role.revoke(*permissions)
        return self.roles[role_id]

    def get_role(self, role_id: str) -> GroupRole | None:
        return self.roles.get(role_id)

    def builtin_role(self, builtin: BuiltinRole) -> GroupRole:
        return self.roles[builtin.role_id(self.id)]

    def role_ids(self) -> list[str]:
        """Role IDs ordered by weight, then ID."""
        return [
            role.id
            for role in sorted(self.roles.values(), key=lambda r: (r.weight, r.id))
        ]
