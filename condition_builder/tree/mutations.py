"""
Condition Builder Tree: Mutation Engine
==========================================
Pure structural edits: (root, ...) -> root'.

Every function returns either the SAME root object (no structural
change) or a freshly built root. Callers compare with `is` to skip
a redundant on_change.

Rules:
- Nodes are never mutated; the path from the root to every touched
  node is rebuilt, untouched subtrees are shared
- Unknown ids, wrong node types and cycles are silent no-ops
- Interior groups never keep fewer than two children (collapse rule)
- The root is never removed and is always a group

Collapse rule (applied after delete, move and group):
    interior group with one child  -> replaced by that child
    interior group with no child   -> removed
    root with a single leaf        -> stays a group around that leaf
    root with a single group child -> after delete only, absorbs that
                                      child's operator and children,
                                      keeps its own id
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

from condition_builder.tree.exceptions import TreeInvariantError
from condition_builder.tree.ids import new_node_id
from condition_builder.tree.models import (
    ConditionGroup,
    ConditionLeaf,
    DropPosition,
    Node,
    Operator,
    TData,
)
from condition_builder.tree.queries import (
    Path,
    find_node,
    find_path,
    iter_paths,
    node_at,
)

logger = logging.getLogger("condition_builder.tree")


# ══════════════════════════════════════════════════════════════
# PATH REBUILD
# ══════════════════════════════════════════════════════════════

def _locate(root: Node, node_id: str) -> Optional[Tuple[Path, Node]]:
    for path, node in iter_paths(root):
        if node.id == node_id:
            return path, node
    return None


def _replace_at(node: Node, path: Path, new_node: Node) -> Node:
    if not path:
        return new_node
    index = path[0]
    children = list(node.children)
    children[index] = _replace_at(children[index], path[1:], new_node)
    return node.with_children(children)


def _remove_at(root: ConditionGroup, path: Path) -> ConditionGroup:
    parent_path, index = path[:-1], path[-1]
    parent = node_at(root, parent_path)
    children = parent.children[:index] + parent.children[index + 1:]
    return _replace_at(root, parent_path, parent.with_children(children))


def _insert_at(
    root: ConditionGroup, parent_path: Path, index: int, node: Node
) -> ConditionGroup:
    parent = node_at(root, parent_path)
    children = parent.children[:index] + (node,) + parent.children[index:]
    return _replace_at(root, parent_path, parent.with_children(children))


def _is_within(path: Path, ancestor_path: Path) -> bool:
    return path[:len(ancestor_path)] == ancestor_path


# ══════════════════════════════════════════════════════════════
# COLLAPSE
# ══════════════════════════════════════════════════════════════

def _collapse_group(group: ConditionGroup) -> ConditionGroup:
    changed = False
    children = []

    for child in group.children:
        if not isinstance(child, ConditionGroup):
            children.append(child)
            continue

        collapsed = _collapse_group(child)
        if not collapsed.children:
            changed = True
            continue
        if len(collapsed.children) == 1:
            children.append(collapsed.children[0])
            changed = True
            continue
        if collapsed is not child:
            changed = True
        children.append(collapsed)

    return group.with_children(children) if changed else group


def collapse_groups(root: ConditionGroup, absorb_root: bool = False) -> ConditionGroup:
    """
    Apply the collapse rule to every interior group.

    With absorb_root, a root left holding a single group child also
    takes over that child's operator and children. Only delete_node
    asks for this; move and group keep the nesting the user built.

    Returns root itself when nothing needed collapsing.
    """
    collapsed = _collapse_group(root)

    if (
        absorb_root
        and len(collapsed.children) == 1
        and isinstance(collapsed.children[0], ConditionGroup)
    ):
        only = collapsed.children[0]
        logger.debug(
            f"Root '{root.id}' absorbs single child group '{only.id}' "
            f"({only.operator}, {len(only.children)} children)"
        )
        collapsed = ConditionGroup(
            id=root.id,
            operator=only.operator,
            children=only.children,
        )

    return collapsed


# ══════════════════════════════════════════════════════════════
# INSERT
# ══════════════════════════════════════════════════════════════

def insert_new_condition(
    root: ConditionGroup,
    target_group_id: str,
    leaf_factory: Callable[[], ConditionLeaf],
) -> ConditionGroup:
    """
    Append a fresh leaf from leaf_factory() to the end of a group.

    No-op (factory not called) if target_group_id is not a group.
    Raises TypeError if the factory does not return a ConditionLeaf
    and, in debug builds, TreeInvariantError if its id is taken.
    """
    found = _locate(root, target_group_id)
    if found is None or not isinstance(found[1], ConditionGroup):
        logger.debug(
            f"insert_new_condition: '{target_group_id}' is not a group, no-op"
        )
        return root

    path, group = found
    leaf = leaf_factory()

    if not isinstance(leaf, ConditionLeaf):
        raise TypeError(
            f"leaf_factory must return ConditionLeaf, "
            f"got {type(leaf).__name__}."
        )
    if __debug__ and find_node(root, leaf.id) is not None:
        raise TreeInvariantError(
            invariant="UNIQUE_IDS",
            detail=f"leaf_factory returned id '{leaf.id}' already in the tree.",
        )

    return _replace_at(root, path, group.with_children(group.children + (leaf,)))


# ══════════════════════════════════════════════════════════════
# DELETE
# ══════════════════════════════════════════════════════════════

def delete_node(root: ConditionGroup, node_id: str) -> ConditionGroup:
    """Remove a node (and its subtree), then apply the collapse rule."""
    path = find_path(root, node_id)
    if path is None:
        logger.debug(f"delete_node: unknown id '{node_id}', no-op")
        return root
    if not path:
        logger.debug(f"delete_node: '{node_id}' is the root, no-op")
        return root

    return collapse_groups(_remove_at(root, path), absorb_root=True)


# ══════════════════════════════════════════════════════════════
# MOVE
# ══════════════════════════════════════════════════════════════

def move_node(
    root: ConditionGroup,
    source_id: str,
    target_id: str,
    position: str,
) -> ConditionGroup:
    """
    Move source next to (before/after) or into a target.

    into:         target must be a group; source is appended to its
                  children.
    before/after: source becomes the sibling immediately before/after
                  target, in target's parent.

    The source is detached first; the collapse rule runs last.
    Self-moves, moves into the source's own subtree, unknown ids and
    moves that would not change the tree return root unchanged.
    """
    if position not in DropPosition.ALL:
        logger.debug(f"move_node: unknown position '{position}', no-op")
        return root
    if source_id == target_id:
        return root

    source = _locate(root, source_id)
    target = _locate(root, target_id)
    if source is None or target is None:
        logger.debug(
            f"move_node: unresolved ids source='{source_id}' "
            f"target='{target_id}', no-op"
        )
        return root

    source_path, source_node = source
    target_path, target_node = target

    if not source_path:
        logger.debug("move_node: the root cannot be moved, no-op")
        return root
    if _is_within(target_path, source_path):
        logger.debug(
            f"move_node: '{target_id}' is inside '{source_id}', "
            f"rejected (cycle)"
        )
        return root

    if position == DropPosition.INTO:
        if not isinstance(target_node, ConditionGroup):
            logger.debug(f"move_node: '{target_id}' is not a group, no-op")
            return root
        if (
            source_path[:-1] == target_path
            and source_path[-1] == len(target_node.children) - 1
        ):
            return root

        detached = _remove_at(root, source_path)
        new_target_path = find_path(detached, target_id)
        end = len(node_at(detached, new_target_path).children)
        moved = _insert_at(detached, new_target_path, end, source_node)
    else:
        if not target_path:
            logger.debug("move_node: the root has no siblings, no-op")
            return root
        if source_path[:-1] == target_path[:-1]:
            offset = source_path[-1] - target_path[-1]
            if (position == DropPosition.BEFORE and offset == -1) or (
                position == DropPosition.AFTER and offset == 1
            ):
                return root

        detached = _remove_at(root, source_path)
        new_target_path = find_path(detached, target_id)
        index = new_target_path[-1]
        if position == DropPosition.AFTER:
            index += 1
        moved = _insert_at(detached, new_target_path[:-1], index, source_node)

    return collapse_groups(moved)


# ══════════════════════════════════════════════════════════════
# GROUP
# ══════════════════════════════════════════════════════════════

def group_two_conditions(
    root: ConditionGroup,
    id_a: str,
    id_b: str,
    operator: str,
    id_factory: Optional[Callable[[], str]] = None,
) -> ConditionGroup:
    """
    Wrap node A and node B in a new group at A's position.

    B is detached from its current location first. The new group
    gets a fresh id, the given operator and children [A, B].
    No-op if either id is unknown or the root, if id_a == id_b, if
    one node contains the other, or if operator is not AND/OR.
    """
    if operator not in Operator.ALL:
        logger.debug(f"group_two_conditions: unknown operator '{operator}', no-op")
        return root
    if id_a == id_b:
        return root

    node_a = _locate(root, id_a)
    node_b = _locate(root, id_b)
    if node_a is None or node_b is None:
        logger.debug(
            f"group_two_conditions: unresolved ids a='{id_a}' b='{id_b}', no-op"
        )
        return root

    path_a = node_a[0]
    path_b, b = node_b
    if not path_a or not path_b:
        logger.debug("group_two_conditions: the root cannot be grouped, no-op")
        return root
    if _is_within(path_a, path_b) or _is_within(path_b, path_a):
        logger.debug(
            f"group_two_conditions: '{id_a}' and '{id_b}' are nested, no-op"
        )
        return root

    detached = _remove_at(root, path_b)
    path_a = find_path(detached, id_a)
    a = node_at(detached, path_a)

    group_id = id_factory() if id_factory is not None else new_node_id()
    if __debug__ and find_node(detached, group_id) is not None:
        raise TreeInvariantError(
            invariant="UNIQUE_IDS",
            detail=f"group id '{group_id}' already in the tree.",
        )

    new_group = ConditionGroup(id=group_id, operator=operator, children=(a, b))
    return collapse_groups(_replace_at(detached, path_a, new_group))


# ══════════════════════════════════════════════════════════════
# TOGGLE / UPDATE
# ══════════════════════════════════════════════════════════════

def toggle_group_operator(root: ConditionGroup, group_id: str) -> ConditionGroup:
    """Flip AND <-> OR on a group. No-op for unknown ids and leaves."""
    found = _locate(root, group_id)
    if found is None or not isinstance(found[1], ConditionGroup):
        logger.debug(
            f"toggle_group_operator: '{group_id}' is not a group, no-op"
        )
        return root

    path, group = found
    return _replace_at(root, path, group.with_operator(Operator.flip(group.operator)))


def update_condition_data(
    root: ConditionGroup, leaf_id: str, data: TData
) -> ConditionGroup:
    """Replace a leaf's payload. No-op for unknown ids and groups."""
    found = _locate(root, leaf_id)
    if found is None or not isinstance(found[1], ConditionLeaf):
        logger.debug(
            f"update_condition_data: '{leaf_id}' is not a condition, no-op"
        )
        return root

    path, leaf = found
    if leaf.data is data:
        return root
    return _replace_at(root, path, leaf.with_data(data))
