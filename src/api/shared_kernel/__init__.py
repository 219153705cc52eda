"""Shared Kernel module.

Holds the access decision types, the access probe and the observation
context that bounded contexts agree to share. Nothing in here may import
from a bounded context.
"""
