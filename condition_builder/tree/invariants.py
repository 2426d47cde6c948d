"""
Condition Builder Tree: Invariant Checks
===========================================
Each function verifies one tree law.
If a check fails, TreeInvariantError is raised.

Laws:
1. UNIQUE_IDS      every id appears at most once
2. MIN_GROUP_SIZE  every non-root group has at least two children
3. ROOT_IS_GROUP   the root is a ConditionGroup

Acyclicity needs no check: frozen nodes cannot reference an
ancestor, and move_node refuses moves into the source's subtree.

These checks do NOT repair anything. They are meant for tests and
debug builds; a violation is a caller contract breach (usually a
leaf factory reusing ids), not a runtime condition.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Callable, Optional

from condition_builder.tree.exceptions import TreeInvariantError
from condition_builder.tree.models import ConditionGroup, ConditionLeaf
from condition_builder.tree.queries import collect_ids, iter_paths


def check_root_is_group(root: Any) -> None:
    if not isinstance(root, ConditionGroup):
        raise TreeInvariantError(
            invariant="ROOT_IS_GROUP",
            detail=f"root must be ConditionGroup, got {type(root).__name__}.",
        )


def check_unique_ids(root: ConditionGroup) -> None:
    duplicates = sorted(
        node_id for node_id, seen in Counter(collect_ids(root)).items()
        if seen > 1
    )
    if duplicates:
        raise TreeInvariantError(
            invariant="UNIQUE_IDS",
            detail=f"duplicate node ids: {duplicates}.",
        )


def check_group_sizes(root: ConditionGroup) -> None:
    for path, node in iter_paths(root):
        if not path or not isinstance(node, ConditionGroup):
            continue
        if len(node.children) < 2:
            raise TreeInvariantError(
                invariant="MIN_GROUP_SIZE",
                detail=(
                    f"group '{node.id}' has {len(node.children)} "
                    f"child(ren); at least 2 required."
                ),
            )


ALL_CHECKS = (
    check_root_is_group,
    check_unique_ids,
    check_group_sizes,
)


def check_tree(root: Any) -> None:
    """Run every check in order. Raises on the first failure."""
    for check in ALL_CHECKS:
        check(root)


def is_tree_valid(
    root: Any,
    leaf_validator: Optional[Callable[[ConditionLeaf], bool]] = None,
) -> bool:
    """
    True if the tree satisfies every law and, when a validator is
    given, every leaf payload passes it.
    """
    try:
        check_tree(root)
    except TreeInvariantError:
        return False

    if leaf_validator is None:
        return True

    return all(
        leaf_validator(node)
        for _, node in iter_paths(root)
        if isinstance(node, ConditionLeaf)
    )
