"""
Condition Builder: Boolean Condition Tree Editor Engine
==========================================================
Renderer-agnostic engine behind the policy and authorization rule
builders: an immutable tree of AND/OR groups over opaque condition
leaves, plus the drag-and-drop layer that turns gestures into edits.

Subsystems:
    tree     - node models, queries, pure mutations, invariant checks
    dnd      - drop metadata, drop resolution, drag state machine
    context  - builder wiring for a rendering layer
    config   - builder settings

Callers own the root value. Every edit returns a new root (or the
same root when nothing changed) and is reported through on_change.
"""

from condition_builder.config import BuilderSettings, DEFAULT_SETTINGS
from condition_builder.context import BuilderContext
from condition_builder.dnd import (
    DragCancelled,
    DragEnded,
    DragInteractionController,
    DragStarted,
    DragState,
    DropTarget,
    resolve_drop,
)
from condition_builder.tree import (
    ConditionGroup,
    ConditionLeaf,
    ConditionTreeError,
    DropPosition,
    MalformedNodeError,
    Node,
    NodeType,
    Operator,
    RendererNotConfiguredError,
    TreeInvariantError,
    check_tree,
    create_empty_group,
    create_root,
    delete_node,
    find_node,
    group_from_dict,
    group_two_conditions,
    insert_new_condition,
    is_tree_valid,
    move_node,
    node_from_dict,
    toggle_group_operator,
    update_condition_data,
)

__version__ = "1.0.0"

__all__ = [
    # ── Tree ──────────────────────────────────────────────────
    "ConditionLeaf",
    "ConditionGroup",
    "Node",
    "Operator",
    "NodeType",
    "DropPosition",
    "create_empty_group",
    "create_root",
    "node_from_dict",
    "group_from_dict",
    "find_node",
    "insert_new_condition",
    "delete_node",
    "move_node",
    "group_two_conditions",
    "toggle_group_operator",
    "update_condition_data",
    "check_tree",
    "is_tree_valid",
    # ── Drag and drop ─────────────────────────────────────────
    "DragInteractionController",
    "DragState",
    "DropTarget",
    "DragStarted",
    "DragEnded",
    "DragCancelled",
    "resolve_drop",
    # ── Context ───────────────────────────────────────────────
    "BuilderContext",
    # ── Config ────────────────────────────────────────────────
    "BuilderSettings",
    "DEFAULT_SETTINGS",
    # ── Exceptions ────────────────────────────────────────────
    "ConditionTreeError",
    "TreeInvariantError",
    "MalformedNodeError",
    "RendererNotConfiguredError",
]
