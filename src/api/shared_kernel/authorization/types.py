"""Access decision types.

Access handlers return an AccessResult rather than a bare boolean so that
a decision can be neutral (no opinion) and can carry the cache dependencies
an upstream result cache needs to invalidate it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class AccessStatus(StrEnum):
    """Outcome of an access check.

    NEUTRAL means the handler has no opinion; at the outer boundary a
    neutral result is treated as a denial.
    """

    ALLOWED = "allowed"
    NEUTRAL = "neutral"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class CacheDependencies:
    """What an access decision depends on.

    Attributes:
        tags: Invalidation tags (e.g., "group:12", "group_role:team.member")
        contexts: Variation contexts (e.g., "user.group_permissions")
    """

    tags: frozenset[str] = field(default_factory=frozenset)
    contexts: frozenset[str] = field(default_factory=frozenset)

    def merge(self, other: CacheDependencies) -> CacheDependencies:
        """Return the union of both dependency sets."""
        return CacheDependencies(
            tags=self.tags | other.tags,
            contexts=self.contexts | other.contexts,
        )


@dataclass(frozen=True)
class AccessResult:
    """An access decision with its cache dependencies.

    Example:
        >>> AccessResult.allowed("member").is_allowed()
        True
        >>> AccessResult.neutral().is_allowed()
        False
    """

    status: AccessStatus
    reason: str = ""
    cache: CacheDependencies = field(default_factory=CacheDependencies)

    @classmethod
    def allowed(cls, reason: str = "") -> AccessResult:
        """Create an explicit allow."""
        return cls(status=AccessStatus.ALLOWED, reason=reason)

    @classmethod
    def forbidden(cls, reason: str = "") -> AccessResult:
        """Create an explicit deny."""
        return cls(status=AccessStatus.FORBIDDEN, reason=reason)

    @classmethod
    def neutral(cls, reason: str = "") -> AccessResult:
        """Create a result that expresses no opinion."""
        return cls(status=AccessStatus.NEUTRAL, reason=reason)

    @classmethod
    def allowed_if(cls, condition: bool, reason: str = "") -> AccessResult:
        """Allow when condition holds, otherwise stay neutral."""
        return cls.allowed(reason) if condition else cls.neutral(reason)

    def is_allowed(self) -> bool:
        return self.status == AccessStatus.ALLOWED

    def is_forbidden(self) -> bool:
        return self.status == AccessStatus.FORBIDDEN

    def is_neutral(self) -> bool:
        return self.status == AccessStatus.NEUTRAL

    def with_cache(self, cache: CacheDependencies) -> AccessResult:
        """Return a copy with the given dependencies merged in."""
        return AccessResult(
            status=self.status,
            reason=self.reason,
            cache=self.cache.merge(cache),
        )
