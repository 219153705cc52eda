"""Structlog configuration for the group relations library.

Colored console output in a terminal, JSON lines otherwise. Probes log
through structlog.get_logger(), so whatever is configured here applies to
every probe event.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

from infrastructure.settings import GroupingSettings, get_settings
from shared_kernel.observability_context import ObservationContext


def configure_logging(settings: GroupingSettings | None = None) -> None:
    """Configure structlog processors and the level filter.

    Debug-level probe events (cache hits, access checks, skipped
    validations) are only emitted when GROUPING_DEBUG is set.

    Args:
        settings: Settings to read the debug flag from; defaults to the
            cached process settings
    """
    settings = settings or get_settings()

    # FORCE_COLOR=1 enables colors even in non-TTY environments (like Docker)
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    use_colors = force_color or sys.stdout.isatty()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if use_colors:
        renderer: list[structlog.types.Processor] = [
            structlog.dev.ConsoleRenderer(colors=True)
        ]
    else:
        renderer = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    level = logging.DEBUG if settings.debug else logging.INFO
    structlog.configure(
        processors=[*shared_processors, *renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


@contextmanager
def bound_observation_context(context: ObservationContext) -> Iterator[None]:
    """Attach an observation context to every log line in the block.

    An alternative to probe.with_context() when a whole unit of work runs
    on one thread; merged in by the merge_contextvars processor.

    Example:
        >>> with bound_observation_context(ObservationContext(request_id="r1")):
        ...     ctx.relationship_service.add_content(group, entity, "group_node:article")
    """
    with structlog.contextvars.bound_contextvars(**context.as_dict()):
        yield
