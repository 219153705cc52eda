"""Static registry of relation type definitions.

Built once at startup from an explicit list (or a JSON file, see
grouping.infrastructure.relation_type_loader) and read-only afterwards.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from grouping.domain.relation_types import RelationTypeDefinition
from grouping.ports.exceptions import RelationTypeNotFoundError


class RelationTypeRegistry:
    """Read-only lookup of relation type definitions.

    Iteration and list_all() follow registration order.
    """

    def __init__(self, definitions: Iterable[RelationTypeDefinition]) -> None:
        self._definitions: dict[str, RelationTypeDefinition] = {}
        for definition in definitions:
            if definition.id in self._definitions:
                raise ValueError(f"Duplicate relation type ID: {definition.id}")
            self._definitions[definition.id] = definition

        self._by_entity_type: dict[str, list[str]] = {}
        for definition in self._definitions.values():
            self._by_entity_type.setdefault(definition.entity_type_id, []).append(
                definition.id
            )

    def __contains__(self, relation_type_id: object) -> bool:
        return relation_type_id in self._definitions

    def __iter__(self) -> Iterator[RelationTypeDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)

    def get(self, relation_type_id: str) -> RelationTypeDefinition:
        """Look up a definition.

        Raises:
            RelationTypeNotFoundError: If the ID is unknown
        """
        try:
            return self._definitions[relation_type_id]
        except KeyError:
            raise RelationTypeNotFoundError(
                f"Relation type {relation_type_id!r} does not exist"
            ) from None

    def has(self, relation_type_id: str) -> bool:
        return relation_type_id in self._definitions

    def list_all(self) -> list[RelationTypeDefinition]:
        return list(self._definitions.values())

    def ids_by_entity_type_id(self, entity_type_id: str) -> list[str]:
        """IDs of the relation types that serve an entity type."""
        return list(self._by_entity_type.get(entity_type_id, []))
