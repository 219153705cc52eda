"""Unit tests for RelationshipService."""

from unittest.mock import create_autospec

import pytest

from grouping.application.cardinality_validator import CardinalityValidator
from grouping.application.observability import RelationshipServiceProbe
from grouping.application.services import RelationshipService
from grouping.domain.aggregates import Group, GroupType, Relationship
from grouping.domain.value_objects import EntityRef
from grouping.domain.violations import CardinalityViolation
from grouping.ports.exceptions import RelationTypeNotInstalledError, UnsavedGroupError
from grouping.ports.repositories import IGroupTypeRepository, IRelationshipStore


@pytest.fixture
def team(registry) -> GroupType:
    group_type = GroupType.create("team", "Team")
    group_type.enable_relation(registry.get("group_membership"))
    group_type.enable_relation(registry.get("group_node:article"))
    group_type.add_role("editor", "Editor")
    return group_type


@pytest.fixture
def mock_group_types(team):
    repository = create_autospec(IGroupTypeRepository, instance=True)
    repository.get_by_id.return_value = team
    return repository


@pytest.fixture
def mock_store():
    store = create_autospec(IRelationshipStore, instance=True)

    def create(entity, group, relation_type_id, values=None):
        return Relationship(
            content_type_id=f"team-{relation_type_id}",
            group_id=group.id,
            entity_id=entity.id,
            relation_type_id=relation_type_id,
            group_type_id="team",
            values=dict(values or {}),
        )

    def save(relationship):
        relationship.id = 42

    store.create_for_entity_in_group.side_effect = create
    store.save.side_effect = save
    return store


@pytest.fixture
def mock_validator():
    validator = create_autospec(CardinalityValidator, instance=True)
    validator.validate.return_value = []
    return validator


@pytest.fixture
def mock_probe():
    return create_autospec(RelationshipServiceProbe, instance=True)


@pytest.fixture
def service(mock_store, mock_group_types, mock_validator, mock_probe):
    return RelationshipService(
        store=mock_store,
        group_types=mock_group_types,
        validator=mock_validator,
        probe=mock_probe,
    )


@pytest.fixture
def group() -> Group:
    return Group(group_type_id="team", label="Red", id=1)


@pytest.fixture
def user() -> EntityRef:
    return EntityRef(entity_type_id="user", id=7, label="alice")


class TestAddContent:
    """Tests for RelationshipService.add_content."""

    def test_saves_when_valid(self, service, group, mock_store, mock_probe):
        node = EntityRef(entity_type_id="node", id=3, bundle="article")

        result = service.add_content(group, node, "group_node:article")

        assert result.saved
        assert result.relationship.id == 42
        mock_store.save.assert_called_once_with(result.relationship)
        mock_probe.content_added.assert_called_once_with(42, 1, "group_node:article")

    def test_returns_violations_without_saving(
        self, service, group, mock_store, mock_validator, mock_probe
    ):
        node = EntityRef(entity_type_id="node", id=3, bundle="article", label="Hi")
        violation = CardinalityViolation.group_limit_reached("Title", "Hi")
        mock_validator.validate.return_value = [violation]

        result = service.add_content(group, node, "group_node:article")

        assert not result.saved
        assert result.violations == [violation]
        assert result.relationship.is_new
        assert result.messages() == [violation.render()]
        mock_store.save.assert_not_called()
        mock_probe.content_rejected.assert_called_once()

    def test_validator_receives_instance_of_group_type(
        self, service, group, team, mock_validator
    ):
        node = EntityRef(entity_type_id="node", id=3, bundle="article")

        result = service.add_content(group, node, "group_node:article")

        mock_validator.validate.assert_called_once_with(
            result.relationship, team.relations["group_node:article"], group, node
        )

    def test_store_preconditions_propagate(self, service, mock_store, user):
        mock_store.create_for_entity_in_group.side_effect = UnsavedGroupError("new")

        with pytest.raises(UnsavedGroupError):
            service.add_content(Group("team", "New"), user, "group_membership")

    def test_not_installed_relation_type_raises(self, service, group, team):
        team.disable_relation("group_node:article")
        node = EntityRef(entity_type_id="node", id=3, bundle="article")

        with pytest.raises(RelationTypeNotInstalledError):
            service.add_content(group, node, "group_node:article")


class TestMembership:
    """Tests for the membership shortcuts."""

    def test_add_member_with_roles(self, service, group, user):
        result = service.add_member(group, user, ["team.editor"])

        assert result.relationship.relation_type_id == "group_membership"
        assert result.relationship.group_roles == ["team.editor"]

    @pytest.mark.parametrize("role", ["team.member", "team.nope", "other.editor"])
    def test_add_member_rejects_invalid_roles(self, service, group, user, role):
        with pytest.raises(ValueError, match="cannot be granted"):
            service.add_member(group, user, [role])

    def test_get_membership(self, service, group, user, mock_store):
        own = Relationship("team-group_membership", 1, 7, "group_membership", "team", id=9)
        other = Relationship(
            "team-group_membership", 2, 7, "group_membership", "team", id=10
        )
        mock_store.load_by_entity.return_value = [other, own]

        assert service.get_membership(group, user) is own
        mock_store.load_by_entity.assert_called_once_with(user, "group_membership")

    def test_leave_removes_membership(self, service, group, user, mock_store):
        own = Relationship("team-group_membership", 1, 7, "group_membership", "team", id=9)
        mock_store.load_by_entity.return_value = [own]
        mock_store.delete.return_value = True

        assert service.leave(group, user) is True
        mock_store.delete.assert_called_once_with(own)

    def test_leave_without_membership(self, service, group, user, mock_store):
        mock_store.load_by_entity.return_value = []

        assert service.leave(group, user) is False
        mock_store.delete.assert_not_called()


class TestUpdateAndRemove:
    """Tests for updating and removing content."""

    def test_update_content_saves_when_valid(self, service, group, user, mock_store):
        relationship = Relationship(
            "team-group_membership", 1, 7, "group_membership", "team", id=9
        )

        violations = service.update_content(
            relationship, group, user, {"group_roles": ["team.editor"]}
        )

        assert violations == []
        assert relationship.group_roles == ["team.editor"]
        mock_store.save.assert_called_once_with(relationship)

    def test_update_content_with_violations_is_not_saved(
        self, service, group, user, mock_store, mock_validator
    ):
        mock_validator.validate.return_value = [
            CardinalityViolation.entity_limit_reached("Group member", "alice", "Red")
        ]
        relationship = Relationship(
            "team-group_membership", 1, 7, "group_membership", "team", id=9
        )

        violations = service.update_content(relationship, group, user, {})

        assert len(violations) == 1
        mock_store.save.assert_not_called()

    def test_rejected_update_keeps_previous_values(
        self, service, group, user, mock_validator
    ):
        mock_validator.validate.return_value = [
            CardinalityViolation.entity_limit_reached("Group member", "alice", "Red")
        ]
        relationship = Relationship(
            "team-group_membership",
            1,
            7,
            "group_membership",
            "team",
            values={"group_roles": []},
            id=9,
        )

        service.update_content(
            relationship, group, user, {"group_roles": ["team.editor"]}
        )

        assert relationship.values == {"group_roles": []}
        validated = mock_validator.validate.call_args.args[0]
        assert validated.id == 9
        assert validated.values == {"group_roles": ["team.editor"]}

    def test_remove_missing_content(self, service, mock_store, mock_probe):
        mock_store.delete.return_value = False
        relationship = Relationship(
            "team-group_membership", 1, 7, "group_membership", "team"
        )

        assert service.remove_content(relationship) is False
        mock_probe.content_removed.assert_not_called()


class TestReadContent:
    """Tests for reading a group's content."""

    def test_get_content_entities_skips_vanished(self, service, group, mock_store):
        first = Relationship("team-group_node-article", 1, 3, "group_node:article", "team", id=1)
        second = Relationship("team-group_node-article", 1, 4, "group_node:article", "team", id=2)
        node = EntityRef(entity_type_id="node", id=3, bundle="article")
        mock_store.load_by_group.return_value = [first, second]
        mock_store.resolve_entity.side_effect = [node, None]

        assert service.get_content_entities(group, "group_node:article") == [node]
        mock_store.load_by_group.assert_called_once_with(group, "group_node:article")
