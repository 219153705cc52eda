"""Domain probe for access checks.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to access decisions made against groups
and their content.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthorizationProbe(Protocol):
    """Domain probe for access decisions."""

    def access_checked(
        self,
        group_id: int | None,
        operation: str,
        actor_id: int | None,
        roles: list[str],
        status: str,
        relation_type_id: str | None = None,
    ) -> None:
        """Record that an access decision was made."""
        ...

    def access_bypassed(
        self,
        group_id: int | None,
        operation: str,
        actor_id: int | None,
    ) -> None:
        """Record that access was granted through the admin bypass."""
        ...

    def listing_filtered(
        self,
        entity_type_id: str,
        operation: str,
        actor_id: int | None,
        requested: int,
        accessible: int,
    ) -> None:
        """Record that an entity listing was narrowed by group access."""
        ...

    def with_context(self, context: ObservationContext) -> AuthorizationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuthorizationProbe:
    """Default implementation of AuthorizationProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAuthorizationProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthorizationProbe(logger=self._logger, context=context)

    def access_checked(
        self,
        group_id: int | None,
        operation: str,
        actor_id: int | None,
        roles: list[str],
        status: str,
        relation_type_id: str | None = None,
    ) -> None:
        """Record that an access decision was made."""
        self._logger.debug(
            "group_access_checked",
            group_id=group_id,
            operation=operation,
            actor_id=actor_id,
            roles=roles,
            status=status,
            relation_type_id=relation_type_id,
            **self._get_context_kwargs(),
        )

    def access_bypassed(
        self,
        group_id: int | None,
        operation: str,
        actor_id: int | None,
    ) -> None:
        """Record that access was granted through the admin bypass."""
        self._logger.info(
            "group_access_bypassed",
            group_id=group_id,
            operation=operation,
            actor_id=actor_id,
            **self._get_context_kwargs(),
        )

    def listing_filtered(
        self,
        entity_type_id: str,
        operation: str,
        actor_id: int | None,
        requested: int,
        accessible: int,
    ) -> None:
        """Record that an entity listing was narrowed by group access."""
        self._logger.debug(
            "group_listing_filtered",
            entity_type_id=entity_type_id,
            operation=operation,
            actor_id=actor_id,
            requested=requested,
            accessible=accessible,
            **self._get_context_kwargs(),
        )
