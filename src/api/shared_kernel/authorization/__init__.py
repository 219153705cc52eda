"""Authorization primitives shared across bounded contexts.

Provides the access result and cache dependency types that access
handlers return, independent of how a decision was reached.
"""

from shared_kernel.authorization.types import (
    AccessResult,
    AccessStatus,
    CacheDependencies,
)

__all__ = [
    "AccessResult",
    "AccessStatus",
    "CacheDependencies",
]
