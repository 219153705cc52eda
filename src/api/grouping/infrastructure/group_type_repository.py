"""SQLAlchemy implementation of IGroupTypeRepository.

Group types are stored in two tables: the group type row (with its enabled
relation types as a JSON mapping of relation type ID to configuration) and
one row per role. Relation type instances are rebuilt from the registry on
every load, so definitions are never persisted.
"""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from grouping.application.relation_type_registry import RelationTypeRegistry
from grouping.domain.aggregates import GroupType
from grouping.domain.relation_types import RelationTypeInstance
from grouping.domain.value_objects import GroupRole
from grouping.infrastructure.models import GroupRoleModel, GroupTypeModel
from grouping.infrastructure.observability import (
    DefaultGroupTypeRepositoryProbe,
    GroupTypeRepositoryProbe,
)
from grouping.ports.repositories import IGroupTypeRepository


class GroupTypeRepository(IGroupTypeRepository):
    """Repository for GroupType aggregates."""

    def __init__(
        self,
        session: Session,
        registry: RelationTypeRegistry,
        probe: GroupTypeRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session and registry.

        Args:
            session: Session of the current unit of work
            registry: Registry used to rebuild relation type instances
            probe: Optional domain probe for observability
        """
        self._session = session
        self._registry = registry
        self._probe = probe or DefaultGroupTypeRepositoryProbe()

    def save(self, group_type: GroupType) -> None:
        """Upsert the group type row and synchronise its role rows."""
        relations = {
            instance.relation_type_id: instance.get_configuration()
            for instance in group_type.enabled_relations()
        }

        model = self._session.get(GroupTypeModel, group_type.id)
        if model is None:
            model = GroupTypeModel(id=group_type.id)
            self._session.add(model)
        model.label = group_type.label
        model.description = group_type.description
        model.relations = relations

        existing = {
            role.id: role
            for role in self._session.scalars(
                select(GroupRoleModel).where(GroupRoleModel.group_type == group_type.id)
            )
        }
        for role_id, role_model in existing.items():
            if role_id not in group_type.roles:
                self._session.delete(role_model)

        for role in group_type.roles.values():
            role_model = existing.get(role.id)
            if role_model is None:
                role_model = GroupRoleModel(id=role.id, group_type=group_type.id)
                self._session.add(role_model)
            role_model.label = role.label
            role_model.weight = role.weight
            role_model.internal = role.internal
            role_model.permissions = {"granted": sorted(role.permissions)}

        self._session.flush()
        self._probe.group_type_saved(group_type.id, len(relations))

    def get_by_id(self, group_type_id: str) -> GroupType | None:
        model = self._session.get(GroupTypeModel, group_type_id)
        if model is None:
            self._probe.group_type_not_found(group_type_id)
            return None
        return self._to_domain(model)

    def list_all(self) -> list[GroupType]:
        stmt = select(GroupTypeModel).order_by(GroupTypeModel.id)
        return [self._to_domain(model) for model in self._session.scalars(stmt)]

    def delete(self, group_type: GroupType) -> bool:
        """Delete the group type row and its roles.

        Groups and content types must already be gone; see
        GroupTypeService.delete_group_type for the cascade.
        """
        model = self._session.get(GroupTypeModel, group_type.id)
        if model is None:
            return False

        self._session.execute(
            delete(GroupRoleModel).where(GroupRoleModel.group_type == group_type.id)
        )
        self._session.delete(model)
        self._session.flush()

        self._probe.group_type_deleted(group_type.id)
        return True

    def _to_domain(self, model: GroupTypeModel) -> GroupType:
        relations: dict[str, RelationTypeInstance] = {}
        for relation_type_id, configuration in (model.relations or {}).items():
            if not self._registry.has(relation_type_id):
                self._probe.unknown_relation_type_skipped(model.id, relation_type_id)
                continue
            relations[relation_type_id] = RelationTypeInstance(
                self._registry.get(relation_type_id), model.id, configuration
            )

        stmt = select(GroupRoleModel).where(GroupRoleModel.group_type == model.id)
        roles = {
            role.id: GroupRole(
                id=role.id,
                group_type_id=role.group_type,
                label=role.label,
                weight=role.weight,
                internal=role.internal,
                permissions=frozenset((role.permissions or {}).get("granted", [])),
            )
            for role in self._session.scalars(stmt)
        }

        return GroupType(
            id=model.id,
            label=model.label,
            description=model.description,
            relations=relations,
            roles=roles,
        )
