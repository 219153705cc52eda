"""Domain-Oriented Observability for grouping infrastructure.

Probes for persistence operations following Domain-Oriented Observability patterns.
"""

from grouping.infrastructure.observability.repository_probe import (
    ContentTypeCatalogProbe,
    DefaultContentTypeCatalogProbe,
    DefaultGroupRepositoryProbe,
    DefaultGroupTypeRepositoryProbe,
    DefaultRelationshipStoreProbe,
    GroupRepositoryProbe,
    GroupTypeRepositoryProbe,
    RelationshipStoreProbe,
)

__all__ = [
    "ContentTypeCatalogProbe",
    "DefaultContentTypeCatalogProbe",
    "GroupRepositoryProbe",
    "DefaultGroupRepositoryProbe",
    "GroupTypeRepositoryProbe",
    "DefaultGroupTypeRepositoryProbe",
    "RelationshipStoreProbe",
    "DefaultRelationshipStoreProbe",
]
