"""Relation type definitions and their per-group-type instances.

A relation type describes how an external entity may attach to a group.
Definitions are static and loaded once; an instance is a definition
configured for one group type, carrying that group type's cardinalities.
"""

from __future__ import annotations

import hashlib
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from shared_kernel.authorization.types import AccessStatus

# Content type IDs are stored in a 32 character column.
BUNDLE_MAX_LENGTH = 32
HASHED_ID_PREFIX = "group_content_type_"

GROUP_MEMBERSHIP = "group_membership"


def derive_content_type_id(group_type_id: str, relation_type_id: str) -> str:
    """Derive the content type ID binding a group type to a relation type.

    The readable form is ``{group_type_id}-{relation_type_id}`` with any
    derivative separator (``:``) replaced by ``-``. IDs that would exceed
    BUNDLE_MAX_LENGTH are replaced by a prefixed MD5 digest of the readable
    form, truncated to the bound.

    Example:
        >>> derive_content_type_id("team", "group_node:article")
        'team-group_node-article'
    """
    preferred_id = f"{group_type_id}-{relation_type_id.replace(':', '-')}"

    if len(preferred_id) > BUNDLE_MAX_LENGTH:
        digest = hashlib.md5(preferred_id.encode(), usedforsecurity=False).hexdigest()
        preferred_id = (HASHED_ID_PREFIX + digest)[:BUNDLE_MAX_LENGTH]

    return preferred_id


@dataclass(frozen=True)
class RelationTypeDefinition:
    """Immutable descriptor of a relation type.

    Attributes:
        id: Relation type ID, optionally with a derivative (e.g., "group_node:article")
        entity_type_id: The entity type this relation type serves
        label: Human readable label
        description: Human readable description
        entity_bundle: Restricts targets to one bundle when set
        handles_config_entities: Targets are configuration entities and are
            stored through their integer surrogate
        enforced: Installed automatically on every new group type
        reference_label: Label of the entity reference, used in violation messages
        group_cardinality: Default group cardinality (0 = unlimited)
        entity_cardinality: Default entity cardinality (0 = unlimited)
        use_creation_wizard: Default for the creation wizard flag
        access_overrides: Operation to ALLOWED/FORBIDDEN, applied ahead of
            role permissions for this relation type's content
    """

    id: str
    entity_type_id: str
    label: str
    description: str = ""
    entity_bundle: str | None = None
    handles_config_entities: bool = False
    enforced: bool = False
    reference_label: str = "Entity"
    group_cardinality: int = 0
    entity_cardinality: int = 0
    use_creation_wizard: bool = False
    access_overrides: Mapping[str, AccessStatus] = field(
        default_factory=dict, hash=False, compare=False
    )

    def default_configuration(self) -> dict[str, Any]:
        return {
            "group_cardinality": self.group_cardinality,
            "entity_cardinality": self.entity_cardinality,
            "use_creation_wizard": self.use_creation_wizard,
        }


def default_relation_types() -> list[RelationTypeDefinition]:
    """Relation types available without any configuration file.

    Group membership is enforced on every group type, and a user can hold
    at most one membership per group.
    """
    return [
        RelationTypeDefinition(
            id=GROUP_MEMBERSHIP,
            entity_type_id="user",
            label="Group membership",
            description="Adds users to groups as members.",
            enforced=True,
            reference_label="Group member",
            entity_cardinality=1,
        ),
    ]


class RelationTypeInstance:
    """A relation type configured for one group type.

    The owning group type ID is fixed at construction; configuration
    updates can never move an instance to another group type.
    """

    def __init__(
        self,
        definition: RelationTypeDefinition,
        group_type_id: str,
        configuration: Mapping[str, Any] | None = None,
    ) -> None:
        self._definition = definition
        self._group_type_id = group_type_id
        self._configuration: dict[str, Any] = {}
        self.set_configuration(configuration or {})

    def __repr__(self) -> str:
        return (
            f"<RelationTypeInstance({self.relation_type_id} on {self._group_type_id})>"
        )

    @property
    def relation_type_id(self) -> str:
        return self._definition.id

    @property
    def relation_type(self) -> RelationTypeDefinition:
        return self._definition

    @property
    def group_type_id(self) -> str:
        return self._group_type_id

    @property
    def group_cardinality(self) -> int:
        """How many distinct groups the same entity may join (0 = unlimited)."""
        return int(self._configuration["group_cardinality"])

    @property
    def entity_cardinality(self) -> int:
        """How many times the same entity may join one group (0 = unlimited)."""
        return int(self._configuration["entity_cardinality"])

    @property
    def use_creation_wizard(self) -> bool:
        return bool(self._configuration["use_creation_wizard"])

    def default_configuration(self) -> dict[str, Any]:
        return self._definition.default_configuration()

    def get_configuration(self) -> dict[str, Any]:
        return dict(self._configuration)

    def set_configuration(self, configuration: Mapping[str, Any]) -> RelationTypeInstance:
        """Replace the configuration, resetting omitted keys to their defaults.

        The ``group_type_id`` key is ignored.

        Raises:
            ValueError: If a cardinality is negative or not an integer
        """
        supplied = {k: v for k, v in configuration.items() if k != "group_type_id"}
        merged = {**self.default_configuration(), **supplied}

        for key in ("group_cardinality", "entity_cardinality"):
            value = merged[key]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"{key} must be a non-negative integer, got {value!r}")

        self._configuration = merged
        return self

    def content_type_id(self) -> str:
        return derive_content_type_id(self._group_type_id, self.relation_type_id)

    def content_type_label(self, group_type_label: str) -> str:
        return f"{group_type_label}: {self._definition.label}"

    def content_type_description(self) -> str:
        return self._definition.description
