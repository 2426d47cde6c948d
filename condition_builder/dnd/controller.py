"""
Condition Builder DnD: Drag Interaction Controller
=====================================================
Turns drag gestures into tree mutations.

States:
    IDLE       no active drag
    DRAGGING   active_id is tracked so the renderer can highlight it
    RESOLVING  transient, while a drop is mapped to a mutation

Transitions:
    IDLE      -- drag start --> DRAGGING
    DRAGGING  -- drag start --> DRAGGING   (stale gesture replaced)
    DRAGGING  -- drag end   --> RESOLVING --> IDLE
    IDLE      -- drag end   --> RESOLVING --> IDLE   (missed start)
    *         -- cancel     --> IDLE

A drop always ends in IDLE, whether or not it changed the tree.
The controller owns no tree: it reads the current root from
root_provider at drop time and hands changed roots to on_change.

This module does NOT depend on any gesture library. An adapter
feeds it DragStarted / DragEnded / DragCancelled messages.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from condition_builder.config.settings import DEFAULT_SETTINGS, BuilderSettings
from condition_builder.dnd.metadata import (
    DragCancelled,
    DragEnded,
    DragStarted,
    DropTarget,
)
from condition_builder.dnd.resolution import resolve_drop
from condition_builder.tree.models import ConditionGroup

logger = logging.getLogger("condition_builder.dnd")


class DragState:
    """Controller states."""
    IDLE = "IDLE"
    DRAGGING = "DRAGGING"
    RESOLVING = "RESOLVING"

    ALL = frozenset({"IDLE", "DRAGGING", "RESOLVING"})


class DragInteractionController:
    """
    Usage:
        controller = DragInteractionController(
            root_provider=lambda: builder.value,
            on_change=builder_commit,
        )
        controller.on_drag_start("c-1")
        controller.on_drag_end("c-1", DropTarget("c-3", "after", "condition"))
    """

    def __init__(
        self,
        root_provider: Callable[[], ConditionGroup],
        on_change: Callable[[ConditionGroup], Any],
        settings: Optional[BuilderSettings] = None,
    ):
        self._root_provider = root_provider
        self._on_change = on_change
        self._settings = settings or DEFAULT_SETTINGS
        self._state = DragState.IDLE
        self._active_id: Optional[str] = None

    # ══════════════════════════════════════════════════════════
    # STATE
    # ══════════════════════════════════════════════════════════

    @property
    def state(self) -> str:
        return self._state

    @property
    def active_id(self) -> Optional[str]:
        return self._active_id

    def is_dragging_id(self, node_id: str) -> bool:
        return self._state == DragState.DRAGGING and self._active_id == node_id

    # ══════════════════════════════════════════════════════════
    # GESTURES
    # ══════════════════════════════════════════════════════════

    def on_drag_start(self, active_id: str) -> None:
        if self._state == DragState.DRAGGING:
            logger.warning(
                f"Drag start for '{active_id}' while '{self._active_id}' "
                f"is still dragging; replacing the stale gesture"
            )
        self._active_id = active_id
        self._state = DragState.DRAGGING
        logger.debug(f"Drag started: '{active_id}'")

    def on_drag_end(
        self,
        active_id: Optional[str] = None,
        over: Optional[DropTarget] = None,
    ) -> ConditionGroup:
        """
        Resolve a drop and return the resulting root.

        active_id defaults to the id recorded at drag start. The new
        root goes to on_change only if it differs by identity.
        """
        source_id = active_id if active_id is not None else self._active_id
        if self._state != DragState.DRAGGING:
            logger.debug(f"Drag end for '{source_id}' without a drag start")

        self._state = DragState.RESOLVING
        self._active_id = None
        try:
            root = self._root_provider()
            if source_id is None:
                return root

            result = resolve_drop(
                root,
                source_id,
                over,
                operator=self._settings.leaf_drop_operator,
                id_factory=self._settings.new_group_id,
            )
            if result is root:
                return root

            logger.info(
                f"Drop applied: '{source_id}' {over.position} "
                f"'{over.target_id}' ({over.target_type})"
            )
            self._on_change(result)
            return result
        finally:
            self._state = DragState.IDLE

    def on_drag_cancel(self) -> None:
        if self._state == DragState.DRAGGING:
            logger.debug(f"Drag cancelled: '{self._active_id}'")
        self._active_id = None
        self._state = DragState.IDLE

    # ══════════════════════════════════════════════════════════
    # MESSAGE DISPATCH
    # ══════════════════════════════════════════════════════════

    def handle(self, message: Any) -> Optional[ConditionGroup]:
        """
        Route a gesture message. Returns the root for DragEnded,
        None otherwise.
        """
        if isinstance(message, DragStarted):
            self.on_drag_start(message.active_id)
            return None
        if isinstance(message, DragEnded):
            return self.on_drag_end(message.active_id, message.over)
        if isinstance(message, DragCancelled):
            self.on_drag_cancel()
            return None
        raise TypeError(
            f"Unknown drag message type: {type(message).__name__}."
        )
