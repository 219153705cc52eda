"""SQLAlchemy implementation of IContentTypeCatalog."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from grouping.application.relation_type_registry import RelationTypeRegistry
from grouping.domain.aggregates import GroupContentType, GroupType
from grouping.domain.relation_types import RelationTypeInstance, derive_content_type_id
from grouping.infrastructure.models import GroupContentTypeModel
from grouping.infrastructure.observability import (
    ContentTypeCatalogProbe,
    DefaultContentTypeCatalogProbe,
)
from grouping.ports.exceptions import ContentTypeNotFoundError
from grouping.ports.repositories import IContentTypeCatalog


class ContentTypeCatalog(IContentTypeCatalog):
    """Persists the content type records binding group types to relation types.

    Content type IDs are never stored anywhere but derived on demand; the
    record only exists so that relationship rows have something to point at
    and so that enabled pairs can be listed.
    """

    def __init__(
        self,
        session: Session,
        registry: RelationTypeRegistry,
        probe: ContentTypeCatalogProbe | None = None,
    ) -> None:
        self._session = session
        self._registry = registry
        self._probe = probe or DefaultContentTypeCatalogProbe()

    def resolve(self, group_type_id: str, relation_type_id: str) -> str:
        return derive_content_type_id(group_type_id, relation_type_id)

    def install(
        self, group_type: GroupType, instance: RelationTypeInstance
    ) -> GroupContentType:
        """Create the content type record for an enabled relation type.

        Installing the same pair again returns the existing record.
        """
        content_type_id = instance.content_type_id()
        model = self._session.get(GroupContentTypeModel, content_type_id)
        if model is not None:
            self._probe.content_type_installed(content_type_id, created=False)
            return self._to_domain(model)

        model = GroupContentTypeModel(
            id=content_type_id,
            group_type=group_type.id,
            content_plugin=instance.relation_type_id,
            label=instance.content_type_label(group_type.label),
            description=instance.content_type_description(),
        )
        self._session.add(model)
        self._session.flush()

        self._probe.content_type_installed(content_type_id, created=True)
        return self._to_domain(model)

    def uninstall(self, content_type_id: str) -> None:
        """Delete a content type record.

        Raises:
            ContentTypeNotFoundError: If no such record exists
        """
        model = self._session.get(GroupContentTypeModel, content_type_id)
        if model is None:
            self._probe.content_type_not_found(content_type_id)
            raise ContentTypeNotFoundError(
                f"Content type {content_type_id!r} does not exist"
            )

        self._session.delete(model)
        self._session.flush()
        self._probe.content_type_uninstalled(content_type_id)

    def load(self, content_type_id: str) -> GroupContentType | None:
        model = self._session.get(GroupContentTypeModel, content_type_id)
        if model is None:
            self._probe.content_type_not_found(content_type_id)
            return None
        return self._to_domain(model)

    def load_by_group_type(self, group_type_id: str) -> list[GroupContentType]:
        stmt = (
            select(GroupContentTypeModel)
            .where(GroupContentTypeModel.group_type == group_type_id)
            .order_by(GroupContentTypeModel.id)
        )
        return [self._to_domain(m) for m in self._session.scalars(stmt)]

    def load_by_relation_type_id(self, relation_type_id: str) -> list[GroupContentType]:
        stmt = (
            select(GroupContentTypeModel)
            .where(GroupContentTypeModel.content_plugin == relation_type_id)
            .order_by(GroupContentTypeModel.id)
        )
        return [self._to_domain(m) for m in self._session.scalars(stmt)]

    def load_by_entity_type_id(self, entity_type_id: str) -> list[GroupContentType]:
        """Content types of every relation type serving an entity type."""
        relation_type_ids = self._registry.ids_by_entity_type_id(entity_type_id)
        if not relation_type_ids:
            return []

        stmt = (
            select(GroupContentTypeModel)
            .where(GroupContentTypeModel.content_plugin.in_(relation_type_ids))
            .order_by(GroupContentTypeModel.id)
        )
        return [self._to_domain(m) for m in self._session.scalars(stmt)]

    @staticmethod
    def _to_domain(model: GroupContentTypeModel) -> GroupContentType:
        return GroupContentType(
            id=model.id,
            group_type_id=model.group_type,
            relation_type_id=model.content_plugin,
            label=model.label,
            description=model.description,
        )
