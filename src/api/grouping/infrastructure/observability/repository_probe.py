"""Domain probes for grouping persistence operations.

Following Domain-Oriented Observability patterns, these probes capture
domain-significant events in the relationship store, the content type
catalog and the group/group type repositories.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class _ContextualProbe:
    """Shared plumbing for the structlog-backed probes in this module."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> Any:
        """Create a new probe of the same kind with observation context bound."""
        return type(self)(logger=self._logger, context=context)


class RelationshipStoreProbe(Protocol):
    """Domain probe for relationship store operations."""

    def relationship_created(
        self, content_type_id: str, group_id: int, entity_id: int
    ) -> None:
        """Record that an unsaved relationship was built."""
        ...

    def relationship_saved(self, relationship_id: int, group_id: int) -> None:
        """Record that a relationship was persisted."""
        ...

    def relationship_deleted(self, relationship_id: int, group_id: int) -> None:
        """Record that a relationship was deleted."""
        ...

    def precondition_failed(self, reason: str, relation_type_id: str) -> None:
        """Record that building a relationship was refused."""
        ...

    def cache_hit(self, table: str, key: str) -> None:
        """Record that a lookup was served from a store cache."""
        ...

    def cache_reset(self, ids: list[int] | None) -> None:
        """Record that the store caches were cleared."""
        ...

    def with_context(self, context: ObservationContext) -> RelationshipStoreProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultRelationshipStoreProbe(_ContextualProbe):
    """Default implementation of RelationshipStoreProbe using structlog."""

    def relationship_created(
        self, content_type_id: str, group_id: int, entity_id: int
    ) -> None:
        """Record that an unsaved relationship was built."""
        self._logger.debug(
            "relationship_created",
            content_type_id=content_type_id,
            group_id=group_id,
            entity_id=entity_id,
            **self._get_context_kwargs(),
        )

    def relationship_saved(self, relationship_id: int, group_id: int) -> None:
        """Record that a relationship was persisted."""
        self._logger.info(
            "relationship_saved",
            relationship_id=relationship_id,
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def relationship_deleted(self, relationship_id: int, group_id: int) -> None:
        """Record that a relationship was deleted."""
        self._logger.info(
            "relationship_deleted",
            relationship_id=relationship_id,
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def precondition_failed(self, reason: str, relation_type_id: str) -> None:
        """Record that building a relationship was refused."""
        self._logger.warning(
            "relationship_precondition_failed",
            reason=reason,
            relation_type_id=relation_type_id,
            **self._get_context_kwargs(),
        )

    def cache_hit(self, table: str, key: str) -> None:
        """Record that a lookup was served from a store cache."""
        self._logger.debug(
            "relationship_cache_hit",
            table=table,
            key=key,
            **self._get_context_kwargs(),
        )

    def cache_reset(self, ids: list[int] | None) -> None:
        """Record that the store caches were cleared."""
        self._logger.debug(
            "relationship_cache_reset",
            ids=ids,
            **self._get_context_kwargs(),
        )


class ContentTypeCatalogProbe(Protocol):
    """Domain probe for content type catalog operations."""

    def content_type_installed(self, content_type_id: str, created: bool) -> None:
        """Record that a content type was installed (created is False on repeat)."""
        ...

    def content_type_uninstalled(self, content_type_id: str) -> None:
        """Record that a content type was removed."""
        ...

    def content_type_not_found(self, content_type_id: str) -> None:
        """Record that a content type lookup failed."""
        ...

    def with_context(self, context: ObservationContext) -> ContentTypeCatalogProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultContentTypeCatalogProbe(_ContextualProbe):
    """Default implementation of ContentTypeCatalogProbe using structlog."""

    def content_type_installed(self, content_type_id: str, created: bool) -> None:
        """Record that a content type was installed (created is False on repeat)."""
        self._logger.info(
            "content_type_installed",
            content_type_id=content_type_id,
            created=created,
            **self._get_context_kwargs(),
        )

    def content_type_uninstalled(self, content_type_id: str) -> None:
        """Record that a content type was removed."""
        self._logger.info(
            "content_type_uninstalled",
            content_type_id=content_type_id,
            **self._get_context_kwargs(),
        )

    def content_type_not_found(self, content_type_id: str) -> None:
        """Record that a content type lookup failed."""
        self._logger.debug(
            "content_type_not_found",
            content_type_id=content_type_id,
            **self._get_context_kwargs(),
        )


class GroupTypeRepositoryProbe(Protocol):
    """Domain probe for group type repository operations."""

    def group_type_saved(self, group_type_id: str, relation_count: int) -> None:
        """Record that a group type was persisted."""
        ...

    def group_type_not_found(self, group_type_id: str) -> None:
        """Record that a group type was not found."""
        ...

    def unknown_relation_type_skipped(
        self, group_type_id: str, relation_type_id: str
    ) -> None:
        """Record that stored configuration named a relation type not registered."""
        ...

    def group_type_deleted(self, group_type_id: str) -> None:
        """Record that a group type was deleted."""
        ...

    def with_context(self, context: ObservationContext) -> GroupTypeRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultGroupTypeRepositoryProbe(_ContextualProbe):
    """Default implementation of GroupTypeRepositoryProbe using structlog."""

    def group_type_saved(self, group_type_id: str, relation_count: int) -> None:
        """Record that a group type was persisted."""
        self._logger.info(
            "group_type_saved",
            group_type_id=group_type_id,
            relation_count=relation_count,
            **self._get_context_kwargs(),
        )

    def group_type_not_found(self, group_type_id: str) -> None:
        """Record that a group type was not found."""
        self._logger.debug(
            "group_type_not_found",
            group_type_id=group_type_id,
            **self._get_context_kwargs(),
        )

    def unknown_relation_type_skipped(
        self, group_type_id: str, relation_type_id: str
    ) -> None:
        """Record that stored configuration named a relation type not registered."""
        self._logger.warning(
            "unknown_relation_type_skipped",
            group_type_id=group_type_id,
            relation_type_id=relation_type_id,
            **self._get_context_kwargs(),
        )

    def group_type_deleted(self, group_type_id: str) -> None:
        """Record that a group type was deleted."""
        self._logger.info(
            "group_type_deleted",
            group_type_id=group_type_id,
            **self._get_context_kwargs(),
        )


class GroupRepositoryProbe(Protocol):
    """Domain probe for group repository operations."""

    def group_saved(self, group_id: int, group_type_id: str) -> None:
        """Record that a group was persisted."""
        ...

    def group_not_found(self, group_id: int) -> None:
        """Record that a group was not found."""
        ...

    def group_deleted(self, group_id: int) -> None:
        """Record that a group was deleted."""
        ...

    def with_context(self, context: ObservationContext) -> GroupRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultGroupRepositoryProbe(_ContextualProbe):
    """Default implementation of GroupRepositoryProbe using structlog."""

    def group_saved(self, group_id: int, group_type_id: str) -> None:
        """Record that a group was persisted."""
        self._logger.info(
            "group_saved",
            group_id=group_id,
            group_type_id=group_type_id,
            **self._get_context_kwargs(),
        )

    def group_not_found(self, group_id: int) -> None:
        """Record that a group was not found."""
        self._logger.debug(
            "group_not_found",
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def group_deleted(self, group_id: int) -> None:
        """Record that a group was deleted."""
        self._logger.info(
            "group_deleted",
            group_id=group_id,
            **self._get_context_kwargs(),
        )
