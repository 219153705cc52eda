"""Domain-Oriented Observability for the grouping application layer.

Probes for application service operations following Domain-Oriented Observability patterns.
"""

from grouping.application.observability.cardinality_probe import (
    CardinalityProbe,
    DefaultCardinalityProbe,
)
from grouping.application.observability.group_type_service_probe import (
    DefaultGroupTypeServiceProbe,
    GroupTypeServiceProbe,
)
from grouping.application.observability.relationship_service_probe import (
    DefaultRelationshipServiceProbe,
    RelationshipServiceProbe,
)

__all__ = [
    "CardinalityProbe",
    "DefaultCardinalityProbe",
    "GroupTypeServiceProbe",
    "DefaultGroupTypeServiceProbe",
    "RelationshipServiceProbe",
    "DefaultRelationshipServiceProbe",
]
