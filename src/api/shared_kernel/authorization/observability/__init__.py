"""Observability for access decisions."""

from shared_kernel.authorization.observability.authorization_probe import (
    AuthorizationProbe,
    DefaultAuthorizationProbe,
)

__all__ = [
    "AuthorizationProbe",
    "DefaultAuthorizationProbe",
]
