"""Unit tests for relation type definitions, instances and content type IDs."""

import pytest

from grouping.domain.relation_types import (
    BUNDLE_MAX_LENGTH,
    GROUP_MEMBERSHIP,
    HASHED_ID_PREFIX,
    RelationTypeDefinition,
    RelationTypeInstance,
    default_relation_types,
    derive_content_type_id,
)


@pytest.fixture
def article() -> RelationTypeDefinition:
    return RelationTypeDefinition(
        id="group_node:article",
        entity_type_id="node",
        label="Group node (Article)",
        description="Adds articles to groups.",
        entity_bundle="article",
        group_cardinality=2,
    )


class TestDeriveContentTypeId:
    """Tests for content type ID derivation."""

    def test_joins_group_type_and_relation_type(self):
        assert derive_content_type_id("team", "group_membership") == (
            "team-group_membership"
        )

    def test_replaces_derivative_separator(self):
        assert derive_content_type_id("team", "group_node:article") == (
            "team-group_node-article"
        )

    def test_is_stable_across_calls(self):
        first = derive_content_type_id("project", "group_node:article")
        second = derive_content_type_id("project", "group_node:article")
        assert first == second

    def test_id_at_the_bound_is_kept_readable(self):
        group_type_id = "a" * (BUNDLE_MAX_LENGTH - len("-rel"))
        result = derive_content_type_id(group_type_id, "rel")
        assert result == f"{group_type_id}-rel"
        assert len(result) == BUNDLE_MAX_LENGTH

    def test_long_id_is_hashed_to_exactly_the_bound(self):
        result = derive_content_type_id("department", "group_node:very_long_bundle")
        assert len(result) == BUNDLE_MAX_LENGTH
        assert result.startswith(HASHED_ID_PREFIX)

    def test_long_id_hash_is_stable(self):
        first = derive_content_type_id("department", "group_node:very_long_bundle")
        second = derive_content_type_id("department", "group_node:very_long_bundle")
        assert first == second

    def test_different_long_inputs_hash_differently(self):
        first = derive_content_type_id("department", "group_node:very_long_bundle")
        second = derive_content_type_id("department", "group_node:other_long_bundle")
        assert first != second


class TestDefaultRelationTypes:
    """Tests for the built-in relation types."""

    def test_membership_is_enforced_with_single_entity_cardinality(self):
        (membership,) = default_relation_types()
        assert membership.id == GROUP_MEMBERSHIP
        assert membership.entity_type_id == "user"
        assert membership.enforced is True
        assert membership.entity_cardinality == 1
        assert membership.group_cardinality == 0


class TestRelationTypeInstanceConfiguration:
    """Tests for RelationTypeInstance configuration handling."""

    def test_defaults_come_from_definition(self, article):
        instance = RelationTypeInstance(article, "team")
        assert instance.group_cardinality == 2
        assert instance.entity_cardinality == 0
        assert instance.use_creation_wizard is False

    def test_configuration_overrides_defaults(self, article):
        instance = RelationTypeInstance(article, "team", {"entity_cardinality": 1})
        assert instance.group_cardinality == 2
        assert instance.entity_cardinality == 1

    def test_omitted_keys_reset_to_defaults(self, article):
        instance = RelationTypeInstance(
            article, "team", {"group_cardinality": 5, "entity_cardinality": 3}
        )

        instance.set_configuration({"entity_cardinality": 1})

        assert instance.group_cardinality == 2
        assert instance.entity_cardinality == 1

    def test_group_type_id_cannot_be_overridden(self, article):
        instance = RelationTypeInstance(article, "team")

        instance.set_configuration({"group_type_id": "other"})

        assert instance.group_type_id == "team"
        assert "group_type_id" not in instance.get_configuration()

    def test_set_configuration_returns_self(self, article):
        instance = RelationTypeInstance(article, "team")
        assert instance.set_configuration({}) is instance

    @pytest.mark.parametrize("value", [-1, "2", 1.5, True])
    def test_rejects_invalid_cardinality(self, article, value):
        with pytest.raises(ValueError, match="group_cardinality"):
            RelationTypeInstance(article, "team", {"group_cardinality": value})

    def test_get_configuration_returns_a_copy(self, article):
        instance = RelationTypeInstance(article, "team")
        instance.get_configuration()["group_cardinality"] = 99
        assert instance.group_cardinality == 2


class TestRelationTypeInstanceContentType:
    """Tests for the content type values an instance derives."""

    def test_content_type_id(self, article):
        instance = RelationTypeInstance(article, "team")
        assert instance.content_type_id() == "team-group_node-article"

    def test_content_type_label(self, article):
        instance = RelationTypeInstance(article, "team")
        assert instance.content_type_label("Team") == "Team: Group node (Article)"

    def test_content_type_description(self, article):
        instance = RelationTypeInstance(article, "team")
        assert instance.content_type_description() == "Adds articles to groups."
