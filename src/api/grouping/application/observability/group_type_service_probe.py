"""Protocol for group type application service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class GroupTypeServiceProbe(Protocol):
    """Domain probe for group type application service operations."""

    def group_type_created(self, group_type_id: str, enforced: list[str]) -> None:
        """Record that a group type was created with its enforced relation types."""
        ...

    def relation_enabled(self, group_type_id: str, relation_type_id: str) -> None:
        """Record that a relation type was enabled on a group type."""
        ...

    def relation_disabled(self, group_type_id: str, relation_type_id: str) -> None:
        """Record that a relation type was disabled on a group type."""
        ...

    def relation_updated(
        self, group_type_id: str, relation_type_id: str, configuration: dict[str, Any]
    ) -> None:
        """Record that a relation type's configuration changed."""
        ...

    def group_type_deleted(
        self, group_type_id: str, group_count: int, relationship_count: int
    ) -> None:
        """Record that a group type was deleted along with its content."""
        ...

    def with_context(self, context: ObservationContext) -> GroupTypeServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultGroupTypeServiceProbe:
    """Default implementation of GroupTypeServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultGroupTypeServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultGroupTypeServiceProbe(logger=self._logger, context=context)

    def group_type_created(self, group_type_id: str, enforced: list[str]) -> None:
        """Record that a group type was created with its enforced relation types."""
        self._logger.info(
            "group_type_created",
            group_type_id=group_type_id,
            enforced=enforced,
            **self._get_context_kwargs(),
        )

    def relation_enabled(self, group_type_id: str, relation_type_id: str) -> None:
        """Record that a relation type was enabled on a group type."""
        self._logger.info(
            "relation_type_enabled",
            group_type_id=group_type_id,
            relation_type_id=relation_type_id,
            **self._get_context_kwargs(),
        )

    def relation_disabled(self, group_type_id: str, relation_type_id: str) -> None:
        """Record that a relation type was disabled on a group type."""
        self._logger.info(
            "relation_type_disabled",
            group_type_id=group_type_id,
            relation_type_id=relation_type_id,
            **self._get_context_kwargs(),
        )

    def relation_updated(
        self, group_type_id: str, relation_type_id: str, configuration: dict[str, Any]
    ) -> None:
        """Record that a relation type's configuration changed."""
        self._logger.info(
            "relation_type_updated",
            group_type_id=group_type_id,
            relation_type_id=relation_type_id,
            configuration=configuration,
            **self._get_context_kwargs(),
        )

    def group_type_deleted(
        self, group_type_id: str, group_count: int, relationship_count: int
    ) -> None:
        """Record that a group type was deleted along with its content."""
        self._logger.info(
            "group_type_deleted",
            group_type_id=group_type_id,
            group_count=group_count,
            relationship_count=relationship_count,
            **self._get_context_kwargs(),
        )
