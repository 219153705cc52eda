"""Domain probe for cardinality validation.

Following Domain-Oriented Observability patterns, this probe captures
cardinality checks run before relationships are saved.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class CardinalityProbe(Protocol):
    """Domain probe for cardinality validation."""

    def validation_skipped(self, relation_type_id: str, group_type_id: str) -> None:
        """Record that both limits are unlimited so no lookup was made."""
        ...

    def limit_reached(
        self,
        kind: str,
        relation_type_id: str,
        group_id: int | None,
        entity_id: int,
        count: int,
        limit: int,
    ) -> None:
        """Record that a cardinality limit was reached."""
        ...

    def with_context(self, context: ObservationContext) -> CardinalityProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultCardinalityProbe:
    """Default implementation of CardinalityProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultCardinalityProbe:
        """Create a new probe with observation context bound."""
        return DefaultCardinalityProbe(logger=self._logger, context=context)

    def validation_skipped(self, relation_type_id: str, group_type_id: str) -> None:
        """Record that both limits are unlimited so no lookup was made."""
        self._logger.debug(
            "cardinality_validation_skipped",
            relation_type_id=relation_type_id,
            group_type_id=group_type_id,
            **self._get_context_kwargs(),
        )

    def limit_reached(
        self,
        kind: str,
        relation_type_id: str,
        group_id: int | None,
        entity_id: int,
        count: int,
        limit: int,
    ) -> None:
        """Record that a cardinality limit was reached."""
        self._logger.info(
            "cardinality_limit_reached",
            kind=kind,
            relation_type_id=relation_type_id,
            group_id=group_id,
            entity_id=entity_id,
            count=count,
            limit=limit,
            **self._get_context_kwargs(),
        )
