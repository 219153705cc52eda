"""Group access engine.

Answers "may this actor perform this operation on this group (or on its
content of this relation type)?" from the actor's group roles, the
permissions those roles hold and the relation type's decorator chain.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from grouping.application.access.handlers import (
    AccessControlHandler,
    AccessRequest,
    DecoratorFactory,
    EmptyAccessControl,
    OwnMembershipAccessControl,
    RolePermissionAccessControl,
    StaticAccessOverride,
    compose,
)
from grouping.application.access.permissions import (
    BYPASS_GROUP_ACCESS,
    content_permission,
    group_permission,
)
from grouping.application.relation_type_registry import RelationTypeRegistry
from grouping.domain.aggregates import Group, GroupType, Relationship
from grouping.domain.relation_types import GROUP_MEMBERSHIP
from grouping.domain.value_objects import Actor, BuiltinRole, EntityRef, GroupRole
from grouping.ports.exceptions import (
    GroupTypeNotFoundError,
    InvalidOperationError,
    RelationTypeNotInstalledError,
)
from grouping.ports.repositories import (
    IGroupRepository,
    IGroupTypeRepository,
    IRelationshipStore,
)
from shared_kernel.authorization.observability import (
    AuthorizationProbe,
    DefaultAuthorizationProbe,
)
from shared_kernel.authorization.types import AccessResult, CacheDependencies

GROUP_PERMISSIONS_CONTEXT = "user.group_permissions"
SITE_PERMISSIONS_CONTEXT = "user.permissions"


class GroupAccessEngine:
    """Role and permission based access decisions for groups.

    A neutral result from a chain is a denial here: callers only ever see
    allowed or not, plus the cache dependencies of that answer.
    """

    def __init__(
        self,
        store: IRelationshipStore,
        group_types: IGroupTypeRepository,
        registry: RelationTypeRegistry,
        decorators: Mapping[str, Sequence[DecoratorFactory]] | None = None,
        membership_relation_type_id: str = GROUP_MEMBERSHIP,
        groups: IGroupRepository | None = None,
        probe: AuthorizationProbe | None = None,
    ) -> None:
        """Build one handler chain per registered relation type.

        Args:
            store: Relationship lookups used to find memberships
            group_types: Source of roles and enabled relation types
            registry: Relation type definitions
            decorators: Extra decorators per relation type ID, applied
                outside the built-in ones in the given order
            membership_relation_type_id: The relation type granting roles
            groups: Loads the groups holding an entity when filtering
                entity listings
            probe: Optional domain probe for observability
        """
        self._store = store
        self._group_types = group_types
        self._registry = registry
        self._groups = groups
        self._membership_relation_type_id = membership_relation_type_id
        self._probe = probe or DefaultAuthorizationProbe()

        self._base: AccessControlHandler = RolePermissionAccessControl()
        self._chains: dict[str, AccessControlHandler] = {}
        extra = decorators or {}
        for definition in registry:
            factories: list[DecoratorFactory] = [EmptyAccessControl]
            if definition.id == membership_relation_type_id:
                factories.append(OwnMembershipAccessControl)
            if definition.access_overrides:
                factories.append(StaticAccessOverride)
            factories.extend(extra.get(definition.id, ()))
            self._chains[definition.id] = compose(self._base, definition, factories)

    def get_membership(self, actor: Actor, group: Group) -> Relationship | None:
        """The actor's membership relationship in the group, if any."""
        if actor.is_anonymous or group.id is None:
            return None
        memberships = self._store.load_by_entity(
            actor.as_entity(), self._membership_relation_type_id
        )
        for membership in memberships:
            if membership.group_id == group.id:
                return membership
        return None

    def get_group_roles(self, actor: Actor, group: Group) -> list[GroupRole]:
        """The actor's roles in a group.

        Members get the member role plus any roles granted on their
        membership; everyone else is either anonymous or an outsider.

        Raises:
            GroupTypeNotFoundError: If the group's type does not exist
        """
        group_type = self._load_group_type(group)
        roles, _ = self._resolve_roles(actor, group, group_type)
        return roles

    def check(
        self,
        actor: Actor,
        group: Group,
        operation: str,
        relation_type_id: str | None = None,
        relationship: Relationship | None = None,
    ) -> AccessResult:
        """Decide whether an actor may perform an operation.

        Args:
            actor: Who is asking
            group: The group concerned
            operation: A group operation, or a content operation when
                relation_type_id is given
            relation_type_id: The relation type of the content concerned
            relationship: The specific relationship acted on, if any

        Returns:
            The decision with its cache dependencies

        Raises:
            GroupTypeNotFoundError: If the group's type does not exist
            RelationTypeNotInstalledError: If the relation type is not
                enabled on the group's type
            ValueError: If the operation is unknown
        """
        tags = {f"group_type:{group.group_type_id}"}
        if group.id is not None:
            tags.add(f"group:{group.id}")

        if BYPASS_GROUP_ACCESS in actor.permissions:
            self._probe.access_bypassed(group.id, operation, actor.id)
            return AccessResult.allowed("bypass group access").with_cache(
                CacheDependencies(
                    tags=frozenset(tags),
                    contexts=frozenset({SITE_PERMISSIONS_CONTEXT}),
                )
            )

        group_type = self._load_group_type(group)
        if relation_type_id is not None:
            if not group_type.has_relation(relation_type_id):
                raise RelationTypeNotInstalledError(
                    f"Relation type {relation_type_id!r} is not enabled on "
                    f"group type {group_type.id!r}"
                )
            permission = content_permission(relation_type_id, operation)
            handler = self._chains.get(relation_type_id, self._base)
        else:
            permission = group_permission(operation)
            handler = self._base

        roles, membership = self._resolve_roles(actor, group, group_type)
        tags.update(f"group_role:{role.id}" for role in roles)
        if membership is not None:
            tags.add(f"group_relationship:{membership.id}")
        if relationship is not None and relationship.id is not None:
            tags.add(f"group_relationship:{relationship.id}")

        request = AccessRequest(
            actor=actor,
            group=group,
            operation=operation,
            permission=permission,
            roles=tuple(roles),
            relation_type_id=relation_type_id,
            relationship=relationship,
        )
        result = handler.check_access(request)

        self._probe.access_checked(
            group_id=group.id,
            operation=operation,
            actor_id=actor.id,
            roles=[role.id for role in roles],
            status=result.status,
            relation_type_id=relation_type_id,
        )
        return result.with_cache(
            CacheDependencies(
                tags=frozenset(tags),
                contexts=frozenset({GROUP_PERMISSIONS_CONTEXT}),
            )
        )

    def is_allowed(
        self,
        actor: Actor,
        group: Group,
        operation: str,
        relation_type_id: str | None = None,
        relationship: Relationship | None = None,
    ) -> bool:
        """Boolean form of check(); neutral counts as denied."""
        return self.check(
            actor, group, operation, relation_type_id, relationship
        ).is_allowed()

    def filter_accessible_entity_ids(
        self,
        actor: Actor,
        entity_type_id: str,
        entity_ids: Iterable[int | str],
        operation: str = "view",
    ) -> list[int | str]:
        """Narrow an entity listing to what the actor may see through groups.

        Entities that belong to no group are kept; group access has no say
        over them. A grouped entity is kept when, in at least one group
        holding it, the actor passes the content check for the relation type
        it was attached under. Input order is preserved.

        Args:
            actor: Who is listing
            entity_type_id: The entity type of every ID in the listing
            entity_ids: The candidate entity IDs
            operation: The content operation to check

        Returns:
            The accessible subset of entity_ids

        Raises:
            InvalidOperationError: If the engine has no group repository
        """
        ids = list(entity_ids)
        if BYPASS_GROUP_ACCESS in actor.permissions:
            return ids
        if not self._registry.ids_by_entity_type_id(entity_type_id):
            return ids
        if self._groups is None:
            raise InvalidOperationError("No group repository is available")

        decisions: dict[tuple[int, str], bool] = {}
        accessible: list[int | str] = []
        for entity_id in ids:
            relationships = self._store.load_by_entity(
                EntityRef(entity_type_id=entity_type_id, id=entity_id)
            )
            if not relationships:
                accessible.append(entity_id)
                continue
            for relationship in relationships:
                key = (relationship.group_id, relationship.relation_type_id)
                if key not in decisions:
                    decisions[key] = self._may_access_grouped(
                        actor, relationship, operation
                    )
                if decisions[key]:
                    accessible.append(entity_id)
                    break

        self._probe.listing_filtered(
            entity_type_id=entity_type_id,
            operation=operation,
            actor_id=actor.id,
            requested=len(ids),
            accessible=len(accessible),
        )
        return accessible

    def _may_access_grouped(
        self, actor: Actor, relationship: Relationship, operation: str
    ) -> bool:
        group = self._groups.get_by_id(relationship.group_id)
        if group is None:
            return False
        return self.is_allowed(
            actor, group, operation, relationship.relation_type_id, relationship
        )

    def _load_group_type(self, group: Group) -> GroupType:
        group_type = self._group_types.get_by_id(group.group_type_id)
        if group_type is None:
            raise GroupTypeNotFoundError(
                f"Group type {group.group_type_id!r} does not exist"
            )
        return group_type

    def _resolve_roles(
        self, actor: Actor, group: Group, group_type: GroupType
    ) -> tuple[list[GroupRole], Relationship | None]:
        if actor.is_anonymous:
            return [group_type.builtin_role(BuiltinRole.ANONYMOUS)], None

        membership = self.get_membership(actor, group)
        if membership is None:
            return [group_type.builtin_role(BuiltinRole.OUTSIDER)], None

        roles = [group_type.builtin_role(BuiltinRole.MEMBER)]
        for role_id in membership.group_roles:
            role = group_type.get_role(role_id)
            if role is not None and not role.internal:
                roles.append(role)
        return roles, membership
