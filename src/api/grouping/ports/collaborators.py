"""Protocols for collaborators owned by the surrounding system.

Entities that can be attached to groups live outside this context. The
store only needs to read a few attributes from them and to resolve them
again by ID.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ContentEntity(Protocol):
    """An entity that can be attached to a group.

    ``id`` is None until the entity has been persisted by its owner.
    """

    @property
    def entity_type_id(self) -> str: ...

    @property
    def id(self) -> int | str | None: ...

    @property
    def bundle(self) -> str: ...

    @property
    def label(self) -> str: ...

    @property
    def is_config(self) -> bool: ...


class EntityResolver(Protocol):
    """Resolves entities by type and ID."""

    def resolve(self, entity_type_id: str, entity_id: int | str) -> ContentEntity | None:
        """Load an entity.

        Args:
            entity_type_id: The entity type (e.g., "user")
            entity_id: The entity ID

        Returns:
            The entity, or None if it does not exist
        """
        ...


class ConfigWrapperProvider(Protocol):
    """Gives configuration entities a stable integer surrogate identity.

    Relationship rows store integer entity IDs; configuration entities are
    identified by strings, so they are stored through a 1:1 wrapper.
    """

    def wrap_entity(self, entity: ContentEntity) -> ContentEntity:
        """Return the wrapper for a configuration entity, minting it if needed.

        The returned wrapper has an integer ``id`` that stays the same for
        the lifetime of the wrapped entity.
        """
        ...

    def find_wrapper_id(self, entity: ContentEntity) -> int | None:
        """Return the surrogate ID of an already wrapped entity, or None."""
        ...

    def unwrap(self, wrapper_id: int) -> tuple[str, str] | None:
        """Return (entity_type_id, entity_id) of the wrapped entity, or None."""
        ...
