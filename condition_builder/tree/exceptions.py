"""
Condition Builder Tree: Exceptions
=====================================
Structured errors for condition tree operations.

These are programmer errors, NOT gesture rejections.
A rejected gesture (stale id, wrong node type, cycle) is a silent
no-op: the mutation returns the original root unchanged.
"""

from __future__ import annotations


class ConditionTreeError(Exception):
    """Base error for condition tree operations."""
    pass


class TreeInvariantError(ConditionTreeError):
    """
    A structural invariant of the tree does not hold.

    Raised by invariant checks and by a leaf factory that mints
    an id already present in the tree.
    """

    def __init__(self, invariant: str, detail: str):
        self.invariant = invariant
        self.detail = detail
        super().__init__(f"Tree invariant violated: {invariant}: {detail}")


class MalformedNodeError(ConditionTreeError):
    """A plain value could not be converted into a tree node."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Malformed condition node: {detail}")


class RendererNotConfiguredError(ConditionTreeError):
    """A leaf render was requested but no renderer was supplied."""

    def __init__(self):
        super().__init__(
            "No render_condition function configured for this builder."
        )
