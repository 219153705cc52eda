"""Unit tests for CardinalityValidator.

The store and catalog are mocked; load_by_properties is answered from an
in-test list of rows so that each test can lay out exactly the existing
relationships it needs.
"""

from unittest.mock import create_autospec

import pytest

from grouping.application.cardinality_validator import CardinalityValidator
from grouping.application.observability import CardinalityProbe
from grouping.domain.aggregates import Group, Relationship
from grouping.domain.relation_types import (
    RelationTypeDefinition,
    RelationTypeInstance,
    derive_content_type_id,
)
from grouping.domain.value_objects import CardinalityKind, EntityRef
from grouping.ports.repositories import IContentTypeCatalog, IRelationshipStore

RELATION_TYPE = "group_node:article"
CONTENT_TYPE = derive_content_type_id("team", RELATION_TYPE)


def make_relationship(group_id: int, entity_id: int = 10, id: int | None = None):
    return Relationship(
        content_type_id=CONTENT_TYPE,
        group_id=group_id,
        entity_id=entity_id,
        relation_type_id=RELATION_TYPE,
        group_type_id="team",
        id=id,
    )


@pytest.fixture
def rows() -> list[Relationship]:
    """Existing relationships visible to the mocked store."""
    return []


@pytest.fixture
def mock_store(rows):
    store = create_autospec(IRelationshipStore, instance=True)

    def load_by_properties(**properties):
        columns = {
            "type": "content_type_id",
            "gid": "group_id",
            "entity_id": "entity_id",
            "plugin_id": "relation_type_id",
        }
        return [
            row
            for row in rows
            if all(getattr(row, columns[k]) == v for k, v in properties.items())
        ]

    store.load_by_properties.side_effect = load_by_properties
    return store


@pytest.fixture
def mock_catalog():
    catalog = create_autospec(IContentTypeCatalog, instance=True)
    catalog.resolve.side_effect = derive_content_type_id
    return catalog


@pytest.fixture
def mock_probe():
    return create_autospec(CardinalityProbe, instance=True)


@pytest.fixture
def validator(mock_store, mock_catalog, mock_probe):
    return CardinalityValidator(mock_store, mock_catalog, probe=mock_probe)


@pytest.fixture
def entity() -> EntityRef:
    return EntityRef(entity_type_id="node", id=10, bundle="article", label="Hello")


def make_instance(group_cardinality: int = 0, entity_cardinality: int = 0):
    definition = RelationTypeDefinition(
        id=RELATION_TYPE,
        entity_type_id="node",
        label="Article",
        reference_label="Title",
    )
    return RelationTypeInstance(
        definition,
        "team",
        {
            "group_cardinality": group_cardinality,
            "entity_cardinality": entity_cardinality,
        },
    )


def group(id: int) -> Group:
    return Group(group_type_id="team", label=f"Group {id}", id=id)


class TestUnlimitedShortCircuit:
    """Tests for the no-lookup path."""

    def test_no_lookups_when_both_limits_unlimited(
        self, validator, mock_store, mock_catalog, mock_probe, entity
    ):
        violations = validator.validate(
            make_relationship(1), make_instance(), group(1), entity
        )

        assert violations == []
        mock_store.load_by_properties.assert_not_called()
        mock_store.load_by_entity.assert_not_called()
        mock_store.load_by_group.assert_not_called()
        mock_catalog.resolve.assert_not_called()
        mock_probe.validation_skipped.assert_called_once_with(RELATION_TYPE, "team")

    def test_unlimited_even_with_many_existing_rows(
        self, validator, rows, mock_store, entity
    ):
        rows.extend(make_relationship(gid) for gid in range(1, 50))

        assert validator.validate(
            make_relationship(1), make_instance(), group(1), entity
        ) == []
        mock_store.load_by_properties.assert_not_called()


class TestGroupCardinality:
    """Tests for the distinct-groups axis."""

    def test_limit_reached_in_other_groups(self, validator, rows, entity):
        rows.extend([make_relationship(1, id=1), make_relationship(2, id=2)])

        violations = validator.validate(
            make_relationship(3), make_instance(group_cardinality=2), group(3), entity
        )

        assert [v.kind for v in violations] == [CardinalityKind.GROUP]
        assert violations[0].parameters == {"@field": "Title", "%content": "Hello"}
        assert violations[0].path == "entity_id.0"

    def test_same_group_does_not_count_twice(self, validator, rows, entity):
        rows.extend([make_relationship(1, id=1), make_relationship(2, id=2)])

        violations = validator.validate(
            make_relationship(1), make_instance(group_cardinality=2), group(1), entity
        )

        assert violations == []

    def test_duplicate_rows_in_one_group_count_once(self, validator, rows, entity):
        rows.extend([make_relationship(1, id=1), make_relationship(1, id=2)])

        violations = validator.validate(
            make_relationship(3), make_instance(group_cardinality=2), group(3), entity
        )

        assert violations == []

    def test_other_entities_are_ignored(self, validator, rows, entity):
        rows.append(make_relationship(1, entity_id=99, id=1))

        violations = validator.validate(
            make_relationship(2), make_instance(group_cardinality=1), group(2), entity
        )

        assert violations == []

    def test_looks_up_by_content_type_and_entity(
        self, validator, mock_store, mock_catalog, entity
    ):
        validator.validate(
            make_relationship(1), make_instance(group_cardinality=1), group(1), entity
        )

        mock_catalog.resolve.assert_called_once_with("team", RELATION_TYPE)
        mock_store.load_by_properties.assert_called_once_with(
            type=CONTENT_TYPE, entity_id=10
        )


class TestEntityCardinality:
    """Tests for the same-group axis."""

    def test_new_second_relationship_is_rejected(self, validator, rows, entity):
        rows.append(make_relationship(1, id=1))

        violations = validator.validate(
            make_relationship(1), make_instance(entity_cardinality=1), group(1), entity
        )

        assert [v.kind for v in violations] == [CardinalityKind.ENTITY]
        assert violations[0].parameters["%group"] == "Group 1"

    def test_revalidating_saved_relationship_excludes_itself(
        self, validator, rows, entity
    ):
        existing = make_relationship(1, id=1)
        rows.append(existing)

        violations = validator.validate(
            existing, make_instance(entity_cardinality=1), group(1), entity
        )

        assert violations == []

    def test_count_equal_to_limit_is_a_violation(self, validator, rows, entity):
        rows.extend([make_relationship(1, id=1), make_relationship(1, id=2)])

        violations = validator.validate(
            make_relationship(1), make_instance(entity_cardinality=2), group(1), entity
        )

        assert len(violations) == 1

    def test_below_limit_passes(self, validator, rows, entity):
        rows.append(make_relationship(1, id=1))

        violations = validator.validate(
            make_relationship(1), make_instance(entity_cardinality=2), group(1), entity
        )

        assert violations == []


class TestBothAxes:
    """Tests for reporting every violated axis in one pass."""

    def test_reports_both_violations(self, validator, rows, mock_probe, entity):
        rows.extend([make_relationship(1, id=1), make_relationship(2, id=2)])

        violations = validator.validate(
            make_relationship(1),
            make_instance(group_cardinality=1, entity_cardinality=1),
            group(1),
            entity,
        )

        assert [v.kind for v in violations] == [
            CardinalityKind.GROUP,
            CardinalityKind.ENTITY,
        ]
        assert mock_probe.limit_reached.call_count == 2
