"""
Condition Builder DnD: Public API
====================================
Drop metadata, drop resolution and the drag state machine.
"""

from condition_builder.dnd.controller import DragInteractionController, DragState
from condition_builder.dnd.metadata import (
    DragCancelled,
    DragEnded,
    DragStarted,
    DropTarget,
)
from condition_builder.dnd.resolution import resolve_drop

__all__ = [
    "DragInteractionController",
    "DragState",
    "DropTarget",
    "DragStarted",
    "DragEnded",
    "DragCancelled",
    "resolve_drop",
]
