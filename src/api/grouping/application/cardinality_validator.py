"""Two-axis cardinality validation run before a relationship is saved.

Group cardinality limits how many distinct groups one entity may join
under a relation type; entity cardinality limits how many times one entity
may join the same group. A limit of 0 means unlimited, and reaching the
limit exactly is already a violation.
"""

from __future__ import annotations

from grouping.application.observability import (
    CardinalityProbe,
    DefaultCardinalityProbe,
)
from grouping.domain.aggregates import Group, Relationship
from grouping.domain.relation_types import RelationTypeInstance
from grouping.domain.value_objects import CardinalityKind
from grouping.domain.violations import CardinalityViolation
from grouping.ports.collaborators import ContentEntity
from grouping.ports.repositories import IContentTypeCatalog, IRelationshipStore


class CardinalityValidator:
    """Checks a candidate relationship against its relation type's limits.

    Both axes are checked in one pass and every violated axis is reported.
    Lookups bypass the store caches so that the check always sees the
    current rows of the unit of work.
    """

    def __init__(
        self,
        store: IRelationshipStore,
        catalog: IContentTypeCatalog,
        probe: CardinalityProbe | None = None,
    ) -> None:
        self._store = store
        self._catalog = catalog
        self._probe = probe or DefaultCardinalityProbe()

    def validate(
        self,
        relationship: Relationship,
        instance: RelationTypeInstance,
        group: Group,
        entity: ContentEntity,
    ) -> list[CardinalityViolation]:
        """Validate a candidate relationship.

        Args:
            relationship: The candidate, saved or not
            instance: The relation type instance of the group's type
            group: The group the entity is being attached to
            entity: The target entity, used for labels only

        Returns:
            Every violation found; empty when the relationship may be saved
        """
        group_limit = instance.group_cardinality
        entity_limit = instance.entity_cardinality

        if group_limit <= 0 and entity_limit <= 0:
            self._probe.validation_skipped(
                instance.relation_type_id, instance.group_type_id
            )
            return []

        field_label = instance.relation_type.reference_label
        violations: list[CardinalityViolation] = []

        if group_limit > 0:
            count = self._count_other_groups(relationship, instance, group)
            if count >= group_limit:
                self._probe.limit_reached(
                    CardinalityKind.GROUP,
                    instance.relation_type_id,
                    group.id,
                    relationship.entity_id,
                    count,
                    group_limit,
                )
                violations.append(
                    CardinalityViolation.group_limit_reached(field_label, entity.label)
                )

        if entity_limit > 0:
            count = self._count_in_group(relationship, instance, group)
            if count >= entity_limit:
                self._probe.limit_reached(
                    CardinalityKind.ENTITY,
                    instance.relation_type_id,
                    group.id,
                    relationship.entity_id,
                    count,
                    entity_limit,
                )
                violations.append(
                    CardinalityViolation.entity_limit_reached(
                        field_label, entity.label, group.label
                    )
                )

        return violations

    def _count_other_groups(
        self,
        relationship: Relationship,
        instance: RelationTypeInstance,
        group: Group,
    ) -> int:
        """Distinct groups, other than this one, the entity already belongs to."""
        content_type_id = self._catalog.resolve(
            group.group_type_id, instance.relation_type_id
        )
        existing = self._store.load_by_properties(
            type=content_type_id, entity_id=relationship.entity_id
        )
        return len({r.group_id for r in existing if r.group_id != group.id})

    def _count_in_group(
        self,
        relationship: Relationship,
        instance: RelationTypeInstance,
        group: Group,
    ) -> int:
        """Times the entity is already attached to this group, excluding itself."""
        existing = self._store.load_by_properties(
            gid=group.id,
            entity_id=relationship.entity_id,
            plugin_id=instance.relation_type_id,
        )
        count = len(existing)
        if relationship.id is not None and any(
            r.id == relationship.id for r in existing
        ):
            count -= 1
        return count
