"""Protocol for relationship application service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class RelationshipServiceProbe(Protocol):
    """Domain probe for relationship application service operations."""

    def content_added(
        self, relationship_id: int, group_id: int, relation_type_id: str
    ) -> None:
        """Record that an entity was attached to a group."""
        ...

    def content_rejected(
        self, group_id: int | None, relation_type_id: str, violations: list[str]
    ) -> None:
        """Record that attaching an entity failed cardinality validation."""
        ...

    def content_removed(self, relationship_id: int, group_id: int) -> None:
        """Record that a relationship was removed."""
        ...

    def with_context(self, context: ObservationContext) -> RelationshipServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultRelationshipServiceProbe:
    """Default implementation of RelationshipServiceProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultRelationshipServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultRelationshipServiceProbe(logger=self._logger, context=context)

    def content_added(
        self, relationship_id: int, group_id: int, relation_type_id: str
    ) -> None:
        """Record that an entity was attached to a group."""
        self._logger.info(
            "group_content_added",
            relationship_id=relationship_id,
            group_id=group_id,
            relation_type_id=relation_type_id,
            **self._get_context_kwargs(),
        )

    def content_rejected(
        self, group_id: int | None, relation_type_id: str, violations: list[str]
    ) -> None:
        """Record that attaching an entity failed cardinality validation."""
        self._logger.info(
            "group_content_rejected",
            group_id=group_id,
            relation_type_id=relation_type_id,
            violations=violations,
            **self._get_context_kwargs(),
        )

    def content_removed(self, relationship_id: int, group_id: int) -> None:
        """Record that a relationship was removed."""
        self._logger.info(
            "group_content_removed",
            relationship_id=relationship_id,
            group_id=group_id,
            **self._get_context_kwargs(),
        )
