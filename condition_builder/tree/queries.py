"""
Condition Builder Tree: Read-Only Queries
============================================
Lookups over a condition tree. Nothing here builds new nodes.

Search order is depth-first pre-order (a node before its children,
children left to right), so results are deterministic.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from condition_builder.tree.models import ConditionGroup, Node

Path = Tuple[int, ...]


def iter_nodes(root: Node) -> Iterator[Node]:
    """Yield every node of the tree in pre-order, root first."""
    for _, node in iter_paths(root):
        yield node


def iter_paths(root: Node) -> Iterator[Tuple[Path, Node]]:
    """
    Yield (path, node) pairs in pre-order.

    A path is the tuple of child indexes leading from the root to
    the node; the root's path is ().
    """
    stack: List[Tuple[Path, Node]] = [((), root)]
    while stack:
        path, node = stack.pop()
        yield path, node
        if isinstance(node, ConditionGroup):
            for index in range(len(node.children) - 1, -1, -1):
                stack.append((path + (index,), node.children[index]))


def find_path(root: Node, node_id: str) -> Optional[Path]:
    for path, node in iter_paths(root):
        if node.id == node_id:
            return path
    return None


def node_at(root: Node, path: Path) -> Node:
    node = root
    for index in path:
        node = node.children[index]
    return node


def find_node(root: Node, node_id: str) -> Optional[Node]:
    """Return the node with node_id, or None."""
    for node in iter_nodes(root):
        if node.id == node_id:
            return node
    return None


def find_parent(
    root: ConditionGroup, node_id: str
) -> Optional[Tuple[ConditionGroup, int]]:
    """
    Return (parent group, index in parent) for a non-root node.

    None when the id is unknown or names the root itself.
    """
    path = find_path(root, node_id)
    if not path:
        return None
    return node_at(root, path[:-1]), path[-1]


def is_descendant(node: Node, node_id: str) -> bool:
    """True if node_id names a node strictly inside node's subtree."""
    if not isinstance(node, ConditionGroup):
        return False
    return any(child.id == node_id or is_descendant(child, node_id)
               for child in node.children)


def collect_ids(root: Node) -> List[str]:
    """All node ids in pre-order. Duplicates are kept."""
    return [node.id for node in iter_nodes(root)]


def count_nodes(root: Node) -> int:
    return sum(1 for _ in iter_nodes(root))
