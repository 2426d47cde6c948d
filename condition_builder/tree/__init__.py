"""
Condition Builder Tree: Public API
=====================================
Immutable AND/OR condition trees and the pure functions that edit them.
"""

from condition_builder.tree.exceptions import (
    ConditionTreeError,
    MalformedNodeError,
    RendererNotConfiguredError,
    TreeInvariantError,
)
from condition_builder.tree.ids import new_node_id
from condition_builder.tree.invariants import (
    check_group_sizes,
    check_root_is_group,
    check_tree,
    check_unique_ids,
    is_tree_valid,
)
from condition_builder.tree.models import (
    ConditionGroup,
    ConditionLeaf,
    DropPosition,
    Node,
    NodeType,
    Operator,
    create_empty_group,
    create_root,
    group_from_dict,
    node_from_dict,
)
from condition_builder.tree.mutations import (
    collapse_groups,
    delete_node,
    group_two_conditions,
    insert_new_condition,
    move_node,
    toggle_group_operator,
    update_condition_data,
)
from condition_builder.tree.queries import (
    collect_ids,
    count_nodes,
    find_node,
    find_parent,
    is_descendant,
    iter_nodes,
)

__all__ = [
    # ── Models ────────────────────────────────────────────────
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
    "new_node_id",
    # ── Queries ───────────────────────────────────────────────
    "find_node",
    "find_parent",
    "is_descendant",
    "iter_nodes",
    "collect_ids",
    "count_nodes",
    # ── Mutations ─────────────────────────────────────────────
    "insert_new_condition",
    "delete_node",
    "move_node",
    "group_two_conditions",
    "toggle_group_operator",
    "update_condition_data",
    "collapse_groups",
    # ── Invariants ────────────────────────────────────────────
    "check_tree",
    "check_unique_ids",
    "check_group_sizes",
    "check_root_is_group",
    "is_tree_valid",
    # ── Exceptions ────────────────────────────────────────────
    "ConditionTreeError",
    "TreeInvariantError",
    "MalformedNodeError",
    "RendererNotConfiguredError",
]
