"""Structured cardinality violations.

Violations are returned, never raised: a single validation pass collects
every violated axis so a caller can present all of them at once, attached
to the entity reference field.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from grouping.domain.value_objects import CardinalityKind

GROUP_CARDINALITY_MESSAGE = (
    "@field: %content has reached the maximum amount of groups it can be added to"
)
ENTITY_CARDINALITY_MESSAGE = (
    "@field: %content has reached the maximum amount of times it can be added "
    "to %group"
)
ENTITY_REFERENCE_PATH = "entity_id.0"


@dataclass(frozen=True)
class CardinalityViolation:
    """A violated cardinality limit.

    Attributes:
        kind: Which axis was violated
        message: Untranslated message template with placeholders
        path: Property path of the offending field
        parameters: Placeholder substitutions (@field, %content, %group)
    """

    kind: CardinalityKind
    message: str
    path: str = ENTITY_REFERENCE_PATH
    parameters: Mapping[str, str] = field(default_factory=dict, hash=False)

    @classmethod
    def group_limit_reached(cls, field_label: str, content_label: str) -> CardinalityViolation:
        return cls(
            kind=CardinalityKind.GROUP,
            message=GROUP_CARDINALITY_MESSAGE,
            parameters={"@field": field_label, "%content": content_label},
        )

    @classmethod
    def entity_limit_reached(
        cls, field_label: str, content_label: str, group_label: str
    ) -> CardinalityViolation:
        return cls(
            kind=CardinalityKind.ENTITY,
            message=ENTITY_CARDINALITY_MESSAGE,
            parameters={
                "@field": field_label,
                "%content": content_label,
                "%group": group_label,
            },
        )

    def render(self) -> str:
        """Substitute the parameters into the message template."""
        text = self.message
        for key, value in self.parameters.items():
            text = text.replace(key, value)
        return text
