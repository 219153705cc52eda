"""Relationship application service.

Attaches entities to groups (build, validate cardinality, then save),
detaches them, and offers membership shortcuts on top.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any

from grouping.application.cardinality_validator import CardinalityValidator
from grouping.application.observability import (
    DefaultRelationshipServiceProbe,
    RelationshipServiceProbe,
)
from grouping.domain.aggregates import Group, Relationship
from grouping.domain.relation_types import GROUP_MEMBERSHIP, RelationTypeInstance
from grouping.domain.violations import CardinalityViolation
from grouping.ports.collaborators import ContentEntity
from grouping.ports.exceptions import (
    GroupTypeNotFoundError,
    RelationTypeNotInstalledError,
)
from grouping.ports.repositories import IGroupTypeRepository, IRelationshipStore


@dataclass
class AddContentResult:
    """Outcome of attaching an entity to a group.

    The relationship is saved only when there are no violations.
    """

    relationship: Relationship
    violations: list[CardinalityViolation] = field(default_factory=list)

    @property
    def saved(self) -> bool:
        return not self.violations

    def messages(self) -> list[str]:
        return [violation.render() for violation in self.violations]


class RelationshipService:
    """Application service for group content.

    Does not manage transactions: every method runs inside the caller's
    unit of work.
    """

    def __init__(
        self,
        store: IRelationshipStore,
        group_types: IGroupTypeRepository,
        validator: CardinalityValidator,
        membership_relation_type_id: str = GROUP_MEMBERSHIP,
        probe: RelationshipServiceProbe | None = None,
    ):
        self._store = store
        self._group_types = group_types
        self._validator = validator
        self._membership_relation_type_id = membership_relation_type_id
        self._probe = probe or DefaultRelationshipServiceProbe()

    def add_content(
        self,
        group: Group,
        entity: ContentEntity,
        relation_type_id: str,
        values: dict[str, Any] | None = None,
    ) -> AddContentResult:
        """Attach an entity to a group.

        Cardinality failures are returned in the result, never raised.

        Raises:
            InvalidOperationError: If a precondition of the store fails
            NotFoundError: If the group type or relation type is missing
        """
        relationship = self._store.create_for_entity_in_group(
            entity, group, relation_type_id, values
        )
        violations = self.validate(relationship, group, entity)
        if violations:
            self._probe.content_rejected(
                group.id, relation_type_id, [v.render() for v in violations]
            )
            return AddContentResult(relationship=relationship, violations=violations)

        self._store.save(relationship)
        self._probe.content_added(relationship.id, group.id, relation_type_id)
        return AddContentResult(relationship=relationship)

    def validate(
        self, relationship: Relationship, group: Group, entity: ContentEntity
    ) -> list[CardinalityViolation]:
        """Run cardinality validation for a relationship, saved or not."""
        instance = self._get_instance(group, relationship.relation_type_id)
        return self._validator.validate(relationship, instance, group, entity)

    def update_content(
        self,
        relationship: Relationship,
        group: Group,
        entity: ContentEntity,
        values: dict[str, Any],
    ) -> list[CardinalityViolation]:
        """Replace a relationship's values and save it if it still validates.

        The relationship is left untouched when violations are returned.
        """
        candidate = replace(relationship, values=dict(values))
        violations = self.validate(candidate, group, entity)
        if not violations:
            relationship.values = candidate.values
            self._store.save(relationship)
        return violations

    def remove_content(self, relationship: Relationship) -> bool:
        removed = self._store.delete(relationship)
        if removed:
            self._probe.content_removed(relationship.id, relationship.group_id)
        return removed

    def add_member(
        self,
        group: Group,
        user: ContentEntity,
        roles: Iterable[str] = (),
    ) -> AddContentResult:
        """Make a user a member of a group, optionally with extra roles.

        Raises:
            ValueError: If a role does not belong to the group's type or is
                one of the built-in roles
        """
        group_type = self._group_types.get_by_id(group.group_type_id)
        if group_type is None:
            raise GroupTypeNotFoundError(
                f"Group type {group.group_type_id!r} does not exist"
            )

        role_ids = list(roles)
        for role_id in role_ids:
            role = group_type.get_role(role_id)
            if role is None or role.internal:
                raise ValueError(
                    f"Role {role_id!r} cannot be granted in group type {group_type.id!r}"
                )

        return self.add_content(
            group,
            user,
            self._membership_relation_type_id,
            {"group_roles": role_ids},
        )

    def get_membership(self, group: Group, user: ContentEntity) -> Relationship | None:
        for membership in self._store.load_by_entity(
            user, self._membership_relation_type_id
        ):
            if membership.group_id == group.id:
                return membership
        return None

    def leave(self, group: Group, user: ContentEntity) -> bool:
        """Remove a user's membership; False if they were not a member."""
        membership = self.get_membership(group, user)
        if membership is None:
            return False
        return self.remove_content(membership)

    def get_content(
        self, group: Group, relation_type_id: str | None = None
    ) -> list[Relationship]:
        return self._store.load_by_group(group, relation_type_id)

    def get_content_entities(
        self, group: Group, relation_type_id: str | None = None
    ) -> list[ContentEntity]:
        """Target entities of a group's relationships; vanished ones are skipped."""
        entities = []
        for relationship in self._store.load_by_group(group, relation_type_id):
            entity = self._store.resolve_entity(relationship)
            if entity is not None:
                entities.append(entity)
        return entities

    def _get_instance(self, group: Group, relation_type_id: str) -> RelationTypeInstance:
        group_type = self._group_types.get_by_id(group.group_type_id)
        if group_type is None:
            raise GroupTypeNotFoundError(
                f"Group type {group.group_type_id!r} does not exist"
            )
        instance = group_type.get_relation(relation_type_id)
        if instance is None:
            raise RelationTypeNotInstalledError(
                f"Relation type {relation_type_id!r} is not enabled on "
                f"group type {group.group_type_id!r}"
            )
        return instance
