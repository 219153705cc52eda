"""SQL-backed surrogate identities for configuration entities."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from grouping.domain.value_objects import EntityRef
from grouping.infrastructure.models import ConfigWrapperModel
from grouping.ports.collaborators import ConfigWrapperProvider, ContentEntity

WRAPPER_ENTITY_TYPE_ID = "group_config_wrapper"


class ConfigWrapperStore(ConfigWrapperProvider):
    """Mints one integer wrapper ID per configuration entity.

    The wrapper's bundle is the wrapped entity's type, and its label is the
    wrapped entity's label, so violation messages read naturally.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def wrap_entity(self, entity: ContentEntity) -> ContentEntity:
        wrapper_id = self.find_wrapper_id(entity)
        if wrapper_id is None:
            model = ConfigWrapperModel(
                entity_type_id=entity.entity_type_id,
                entity_id=str(entity.id),
            )
            self._session.add(model)
            self._session.flush()
            wrapper_id = model.id

        return EntityRef(
            entity_type_id=WRAPPER_ENTITY_TYPE_ID,
            id=wrapper_id,
            bundle=entity.entity_type_id,
            label=entity.label,
        )

    def find_wrapper_id(self, entity: ContentEntity) -> int | None:
        if entity.id is None:
            return None
        stmt = select(ConfigWrapperModel.id).where(
            ConfigWrapperModel.entity_type_id == entity.entity_type_id,
            ConfigWrapperModel.entity_id == str(entity.id),
        )
        return self._session.scalars(stmt).first()

    def unwrap(self, wrapper_id: int) -> tuple[str, str] | None:
        model = self._session.get(ConfigWrapperModel, wrapper_id)
        if model is None:
            return None
        return model.entity_type_id, model.entity_id
