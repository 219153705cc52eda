"""Observation context shared by domain probes.

Carries request-scoped metadata that probes attach to every structured
log line they emit, so that a single unit of work can be traced across
the store, the validators and the access engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Request-scoped metadata bound to probes via ``with_context``.

    Attributes:
        request_id: Correlation identifier for the unit of work
        actor_id: The acting user, if known
        extra: Additional key/value pairs to include in log lines
    """

    request_id: str | None = None
    actor_id: int | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Return the populated fields as logging kwargs."""
        data: dict[str, Any] = {}
        if self.request_id is not None:
            data["request_id"] = self.request_id
        if self.actor_id is not None:
            data["actor_id"] = self.actor_id
        data.update(self.extra)
        return data

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        return ObservationContext(
            request_id=self.request_id,
            actor_id=self.actor_id,
            extra={**self.extra, **kwargs},
        )
