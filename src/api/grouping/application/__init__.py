"""Application layer for the grouping context: registry, validation, access and services."""
