"""SQLAlchemy implementation of IGroupRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from grouping.domain.aggregates import Group
from grouping.infrastructure.models import GroupModel
from grouping.infrastructure.observability import (
    DefaultGroupRepositoryProbe,
    GroupRepositoryProbe,
)
from grouping.ports.repositories import IGroupRepository


class GroupRepository(IGroupRepository):
    """Repository for Group aggregates.

    Group IDs are assigned by the database; save() flushes so a new group
    has its ID as soon as the call returns.
    """

    def __init__(
        self,
        session: Session,
        probe: GroupRepositoryProbe | None = None,
    ) -> None:
        self._session = session
        self._probe = probe or DefaultGroupRepositoryProbe()

    def save(self, group: Group) -> None:
        model = None if group.id is None else self._session.get(GroupModel, group.id)
        if model is None:
            model = GroupModel(id=group.id, type=group.group_type_id, label=group.label)
            self._session.add(model)
        else:
            model.label = group.label

        self._session.flush()
        group.id = model.id
        self._probe.group_saved(model.id, model.type)

    def get_by_id(self, group_id: int) -> Group | None:
        model = self._session.get(GroupModel, group_id)
        if model is None:
            self._probe.group_not_found(group_id)
            return None
        return self._to_domain(model)

    def list_by_type(self, group_type_id: str) -> list[Group]:
        stmt = (
            select(GroupModel)
            .where(GroupModel.type == group_type_id)
            .order_by(GroupModel.id)
        )
        return [self._to_domain(model) for model in self._session.scalars(stmt)]

    def delete(self, group: Group) -> bool:
        if group.id is None:
            return False
        model = self._session.get(GroupModel, group.id)
        if model is None:
            return False

        self._session.delete(model)
        self._session.flush()
        self._probe.group_deleted(group.id)
        return True

    @staticmethod
    def _to_domain(model: GroupModel) -> Group:
        return Group(group_type_id=model.type, label=model.label, id=model.id)
