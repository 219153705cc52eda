"""Loads relation type definitions from a JSON file.

The file holds a single object with a ``relation_types`` list:

    {
      "relation_types": [
        {
          "id": "group_node:article",
          "entity_type_id": "node",
          "entity_bundle": "article",
          "label": "Group node (Article)",
          "group_cardinality": 1,
          "access_overrides": {"delete": "deny"}
        }
      ]
    }

Entries are validated with pydantic and turned into immutable
RelationTypeDefinition objects. The built-in defaults are prepended unless
the file redefines them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from grouping.domain.relation_types import (
    RelationTypeDefinition,
    default_relation_types,
)
from shared_kernel.authorization.types import AccessStatus

_OVERRIDE_STATUS = {
    "allow": AccessStatus.ALLOWED,
    "deny": AccessStatus.FORBIDDEN,
}


class RelationTypeEntry(BaseModel):
    """One relation type as written in the configuration file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1, pattern=r"^[a-z0-9_]+(:[a-z0-9_]+)?$")
    entity_type_id: str = Field(min_length=1)
    label: str = Field(min_length=1)
    description: str = ""
    entity_bundle: str | None = None
    handles_config_entities: bool = False
    enforced: bool = False
    reference_label: str = "Entity"
    group_cardinality: int = Field(default=0, ge=0)
    entity_cardinality: int = Field(default=0, ge=0)
    use_creation_wizard: bool = False
    access_overrides: dict[str, Literal["allow", "deny"]] = Field(default_factory=dict)

    def to_definition(self) -> RelationTypeDefinition:
        return RelationTypeDefinition(
            id=self.id,
            entity_type_id=self.entity_type_id,
            label=self.label,
            description=self.description,
            entity_bundle=self.entity_bundle,
            handles_config_entities=self.handles_config_entities,
            enforced=self.enforced,
            reference_label=self.reference_label,
            group_cardinality=self.group_cardinality,
            entity_cardinality=self.entity_cardinality,
            use_creation_wizard=self.use_creation_wizard,
            access_overrides={
                operation: _OVERRIDE_STATUS[value]
                for operation, value in self.access_overrides.items()
            },
        )


class RelationTypeFile(BaseModel):
    """Top-level shape of the relation types file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    relation_types: list[RelationTypeEntry] = Field(default_factory=list)


def load_relation_types(
    path: Path | None = None, include_defaults: bool = True
) -> list[RelationTypeDefinition]:
    """Read relation type definitions, in file order after the defaults.

    Args:
        path: JSON file to read; None yields only the defaults
        include_defaults: Prepend the built-in relation types

    Returns:
        Definitions ready to feed into a RelationTypeRegistry

    Raises:
        pydantic.ValidationError: If the file content is malformed
        OSError: If the file cannot be read
    """
    loaded: list[RelationTypeDefinition] = []
    if path is not None:
        parsed = RelationTypeFile.model_validate_json(path.read_text(encoding="utf-8"))
        loaded = [entry.to_definition() for entry in parsed.relation_types]

    if not include_defaults:
        return loaded

    redefined = {definition.id for definition in loaded}
    defaults = [d for d in default_relation_types() if d.id not in redefined]
    return defaults + loaded
