"""Ports for the grouping bounded context: repositories, collaborators, errors."""
