"""Grouping bounded context.

Attaches external entities to groups under configurable relation types,
enforces cardinality limits on those attachments and decides what an
actor may do against a group or its content.
"""
