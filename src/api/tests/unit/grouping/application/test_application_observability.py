"""Unit tests for grouping application probes.

Tests that the application probes emit the expected structured events
following the Domain Oriented Observability pattern.
"""

from unittest.mock import MagicMock

import structlog

from grouping.application.observability import (
    DefaultCardinalityProbe,
    DefaultGroupTypeServiceProbe,
    DefaultRelationshipServiceProbe,
)
from shared_kernel.observability_context import ObservationContext


def mock_logger() -> MagicMock:
    return MagicMock(spec=structlog.stdlib.BoundLogger)


class TestCardinalityProbe:
    """Tests for DefaultCardinalityProbe."""

    def test_default_probe_creates_with_default_logger(self):
        probe = DefaultCardinalityProbe()
        assert probe._logger is not None

    def test_validation_skipped_logs_debug(self):
        logger = mock_logger()
        probe = DefaultCardinalityProbe(logger=logger)

        probe.validation_skipped("group_node:article", "team")

        logger.debug.assert_called_once_with(
            "cardinality_validation_skipped",
            relation_type_id="group_node:article",
            group_type_id="team",
        )

    def test_limit_reached_logs_counts(self):
        logger = mock_logger()
        probe = DefaultCardinalityProbe(logger=logger)

        probe.limit_reached("group", "group_node:article", 1, 10, 1, 1)

        logger.info.assert_called_once_with(
            "cardinality_limit_reached",
            kind="group",
            relation_type_id="group_node:article",
            group_id=1,
            entity_id=10,
            count=1,
            limit=1,
        )

    def test_with_context_binds_request_id(self):
        logger = mock_logger()
        probe = DefaultCardinalityProbe(logger=logger).with_context(
            ObservationContext(request_id="req-9")
        )

        probe.validation_skipped("group_membership", "team")

        assert logger.debug.call_args.kwargs["request_id"] == "req-9"


class TestGroupTypeServiceProbe:
    """Tests for DefaultGroupTypeServiceProbe."""

    def test_group_type_created(self):
        logger = mock_logger()
        probe = DefaultGroupTypeServiceProbe(logger=logger)

        probe.group_type_created("team", ["group_membership"])

        logger.info.assert_called_once_with(
            "group_type_created", group_type_id="team", enforced=["group_membership"]
        )

    def test_group_type_deleted_reports_cascade(self):
        logger = mock_logger()
        probe = DefaultGroupTypeServiceProbe(logger=logger)

        probe.group_type_deleted("team", group_count=2, relationship_count=5)

        logger.info.assert_called_once_with(
            "group_type_deleted",
            group_type_id="team",
            group_count=2,
            relationship_count=5,
        )


class TestRelationshipServiceProbe:
    """Tests for DefaultRelationshipServiceProbe."""

    def test_content_rejected_lists_violations(self):
        logger = mock_logger()
        probe = DefaultRelationshipServiceProbe(logger=logger)

        probe.content_rejected(1, "group_node:article", ["limit reached"])

        logger.info.assert_called_once_with(
            "group_content_rejected",
            group_id=1,
            relation_type_id="group_node:article",
            violations=["limit reached"],
        )

    def test_content_removed(self):
        logger = mock_logger()
        probe = DefaultRelationshipServiceProbe(logger=logger)

        probe.content_removed(relationship_id=4, group_id=1)

        logger.info.assert_called_once_with(
            "group_content_removed", relationship_id=4, group_id=1
        )
