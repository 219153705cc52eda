"""Unit tests for grouping repository domain probes."""

from unittest.mock import Mock

from grouping.infrastructure.observability import (
    DefaultContentTypeCatalogProbe,
    DefaultGroupRepositoryProbe,
    DefaultGroupTypeRepositoryProbe,
    DefaultRelationshipStoreProbe,
)
from shared_kernel.observability_context import ObservationContext


class TestDefaultRelationshipStoreProbe:
    """Tests for DefaultRelationshipStoreProbe."""

    def test_creates_with_default_logger(self):
        """Test that probe can be created without providing a logger."""
        probe = DefaultRelationshipStoreProbe()
        assert probe._logger is not None

    def test_relationship_saved(self):
        """Test that saving a relationship is logged at info level."""
        mock_logger = Mock()
        probe = DefaultRelationshipStoreProbe(logger=mock_logger)

        probe.relationship_saved(relationship_id=5, group_id=1)

        mock_logger.info.assert_called_once_with(
            "relationship_saved", relationship_id=5, group_id=1
        )

    def test_precondition_failed_is_a_warning(self):
        mock_logger = Mock()
        probe = DefaultRelationshipStoreProbe(logger=mock_logger)

        probe.precondition_failed(reason="unsaved_group", relation_type_id="x")

        mock_logger.warning.assert_called_once()
        call_args = mock_logger.warning.call_args
        assert call_args[0][0] == "relationship_precondition_failed"
        assert call_args[1]["reason"] == "unsaved_group"

    def test_cache_hit_is_debug(self):
        mock_logger = Mock()
        probe = DefaultRelationshipStoreProbe(logger=mock_logger)

        probe.cache_hit(table="group", key="1:---ALL---")

        mock_logger.debug.assert_called_once_with(
            "relationship_cache_hit", table="group", key="1:---ALL---"
        )


class TestWithContext:
    """Tests for binding observation context to repository probes."""

    def test_returns_probe_of_same_kind(self):
        probe = DefaultGroupTypeRepositoryProbe(logger=Mock())

        bound = probe.with_context(ObservationContext(request_id="req-1"))

        assert isinstance(bound, DefaultGroupTypeRepositoryProbe)
        assert bound is not probe

    def test_context_is_included_in_log_lines(self):
        """Test that bound context is merged into every log call."""
        mock_logger = Mock()
        probe = DefaultGroupRepositoryProbe(logger=mock_logger).with_context(
            ObservationContext(request_id="req-1", actor_id=7)
        )

        probe.group_saved(group_id=3, group_type_id="team")

        mock_logger.info.assert_called_once_with(
            "group_saved",
            group_id=3,
            group_type_id="team",
            request_id="req-1",
            actor_id=7,
        )


class TestDefaultContentTypeCatalogProbe:
    """Tests for DefaultContentTypeCatalogProbe."""

    def test_installed(self):
        mock_logger = Mock()
        probe = DefaultContentTypeCatalogProbe(logger=mock_logger)

        probe.content_type_installed(content_type_id="team-group_membership", created=True)

        mock_logger.info.assert_called_once_with(
            "content_type_installed",
            content_type_id="team-group_membership",
            created=True,
        )

    def test_not_found_is_debug(self):
        mock_logger = Mock()
        probe = DefaultContentTypeCatalogProbe(logger=mock_logger)

        probe.content_type_not_found(content_type_id="missing")

        mock_logger.debug.assert_called_once()
        mock_logger.info.assert_not_called()


class TestDefaultGroupTypeRepositoryProbe:
    """Tests for DefaultGroupTypeRepositoryProbe."""

    def test_unknown_relation_type_skipped_is_a_warning(self):
        mock_logger = Mock()
        probe = DefaultGroupTypeRepositoryProbe(logger=mock_logger)

        probe.unknown_relation_type_skipped(
            group_type_id="team", relation_type_id="group_node:gone"
        )

        mock_logger.warning.assert_called_once_with(
            "unknown_relation_type_skipped",
            group_type_id="team",
            relation_type_id="group_node:gone",
        )
