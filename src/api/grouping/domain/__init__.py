"""Domain layer for the grouping context.

Pure business objects: no persistence, no logging backends.
"""
