"""
Condition Builder Context: Builder Wiring
============================================
Bundles the current root, the caller's on_change, the leaf factory
and the renderer into the callbacks a rendering layer consumes.

Not a state machine. Every callback:
1. Calls one pure mutation against the current root
2. Skips everything if the root came back unchanged (identity)
3. Checks tree invariants (when enabled in settings)
4. Stores the new root as `value`
5. Calls the caller's on_change(new_root)

Callbacks return True when a change was committed.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Optional

from condition_builder.config.settings import DEFAULT_SETTINGS, BuilderSettings
from condition_builder.dnd.controller import DragInteractionController
from condition_builder.dnd.metadata import DropTarget
from condition_builder.dnd.resolution import resolve_drop
from condition_builder.tree.exceptions import RendererNotConfiguredError
from condition_builder.tree.invariants import check_tree
from condition_builder.tree.models import (
    ConditionGroup,
    ConditionLeaf,
    Operator,
    TData,
    create_root,
)
from condition_builder.tree.mutations import (
    delete_node,
    insert_new_condition,
    toggle_group_operator,
    update_condition_data,
)
from condition_builder.tree.queries import find_node

logger = logging.getLogger("condition_builder.context")


class BuilderContext(Generic[TData]):
    """
    One condition builder instance.

    Args:
        value:            Current root. Anything that is not a
                          ConditionGroup (e.g. None from an empty form)
                          is replaced by a root holding one new leaf.
        on_change:        Called with every committed root.
        leaf_factory:     () -> ConditionLeaf with a fresh unique id.
        render_condition: (leaf) -> anything; presents leaf content.
        settings:         BuilderSettings; DEFAULT_SETTINGS if omitted.
    """

    def __init__(
        self,
        value: Any,
        on_change: Callable[[ConditionGroup], Any],
        leaf_factory: Callable[[], ConditionLeaf],
        render_condition: Optional[Callable[[ConditionLeaf], Any]] = None,
        settings: Optional[BuilderSettings] = None,
    ):
        self._on_change = on_change
        self._leaf_factory = leaf_factory
        self._render_condition = render_condition
        self._settings = settings or DEFAULT_SETTINGS
        self._value = self._coerce_root(value)
        self._controller = DragInteractionController(
            root_provider=lambda: self._value,
            on_change=self._commit,
            settings=self._settings,
        )

    # ══════════════════════════════════════════════════════════
    # VALUE
    # ══════════════════════════════════════════════════════════

    @property
    def value(self) -> ConditionGroup:
        return self._value

    @value.setter
    def value(self, value: Any) -> None:
        """Accept a root passed back in by the caller (re-render)."""
        self._value = self._coerce_root(value)

    @property
    def settings(self) -> BuilderSettings:
        return self._settings

    @property
    def controller(self) -> DragInteractionController:
        return self._controller

    def _coerce_root(self, value: Any) -> ConditionGroup:
        if isinstance(value, ConditionGroup):
            return value
        root = create_root(
            children=(self._leaf_factory(),),
            operator=Operator.AND,
            node_id=self._settings.new_group_id(),
        )
        logger.info(
            f"Value {type(value).__name__} is not a condition group; "
            f"seeded root '{root.id}'"
        )
        return root

    def _commit(self, new_root: ConditionGroup) -> None:
        if self._settings.check_invariants:
            check_tree(new_root)
        self._value = new_root
        self._on_change(new_root)

    def _apply(self, mutation: Callable[[ConditionGroup], ConditionGroup]) -> bool:
        root = self._value
        result = mutation(root)
        if result is root:
            return False
        self._commit(result)
        return True

    # ══════════════════════════════════════════════════════════
    # CALLBACKS
    # ══════════════════════════════════════════════════════════

    def on_delete_node(self, node_id: str) -> bool:
        return self._apply(lambda root: delete_node(root, node_id))

    def on_toggle_group_operator(self, group_id: str) -> bool:
        return self._apply(lambda root: toggle_group_operator(root, group_id))

    def on_add_condition_to_group(self, group_id: str) -> bool:
        return self._apply(
            lambda root: insert_new_condition(root, group_id, self._leaf_factory)
        )

    def on_update_condition(self, leaf_id: str, data: TData) -> bool:
        return self._apply(lambda root: update_condition_data(root, leaf_id, data))

    def on_move_node(self, source_id: str, target_id: str, position: str) -> bool:
        """
        Programmatic move (keyboard, menu). Same rules as a drop: a
        condition moved `into` a condition groups the two.
        """
        target = find_node(self._value, target_id)
        if target is None:
            logger.debug(f"on_move_node: unknown target '{target_id}', no-op")
            return False

        over = DropTarget(
            target_id=target_id,
            position=position,
            target_type=target.kind,
        )
        return self._apply(
            lambda root: resolve_drop(
                root,
                source_id,
                over,
                operator=self._settings.leaf_drop_operator,
                id_factory=self._settings.new_group_id,
            )
        )

    # ══════════════════════════════════════════════════════════
    # RENDERING SUPPORT
    # ══════════════════════════════════════════════════════════

    def is_dragging_id(self, node_id: str) -> bool:
        return self._controller.is_dragging_id(node_id)

    def render_condition(self, leaf: ConditionLeaf) -> Any:
        if self._render_condition is None:
            raise RendererNotConfiguredError()
        return self._render_condition(leaf)
