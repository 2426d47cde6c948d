"""
Condition Builder DnD: Drop Resolution
=========================================
Maps a (source, drop target) pair to exactly one tree mutation.

Resolution table:
    no target                          -> no-op
    into + tagged group, is a group    -> move_node(into)
    into + tagged condition, is a leaf -> group_two_conditions(source, target)
    before / after                     -> move_node(position)
    anything else                      -> no-op

Tags come from render-time metadata and may be stale, so the node
the target id resolves to must agree with its tag.

Pure: no state, no callbacks.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from condition_builder.tree.models import (
    ConditionGroup,
    ConditionLeaf,
    DropPosition,
    NodeType,
    Operator,
)
from condition_builder.tree.mutations import group_two_conditions, move_node
from condition_builder.tree.queries import find_node
from condition_builder.dnd.metadata import DropTarget

logger = logging.getLogger("condition_builder.dnd")


def resolve_drop(
    root: ConditionGroup,
    source_id: str,
    target: Optional[DropTarget],
    operator: str = Operator.AND,
    id_factory: Optional[Callable[[], str]] = None,
) -> ConditionGroup:
    """
    Apply the mutation a drop of source_id onto target asks for.

    operator is used only when a condition is dropped onto a
    condition. Returns root unchanged when the drop is rejected.
    """
    if target is None:
        logger.debug(f"Drop of '{source_id}' outside any target, no-op")
        return root

    if target.is_sibling:
        return move_node(root, source_id, target.target_id, target.position)

    if not target.is_into:
        logger.debug(f"Drop position '{target.position}' unknown, no-op")
        return root

    node = find_node(root, target.target_id)

    if target.target_type == NodeType.GROUP:
        if not isinstance(node, ConditionGroup):
            logger.debug(
                f"Stale drop metadata: '{target.target_id}' tagged group "
                f"but is not a group, no-op"
            )
            return root
        return move_node(root, source_id, target.target_id, DropPosition.INTO)

    if target.target_type == NodeType.CONDITION:
        if not isinstance(node, ConditionLeaf):
            logger.debug(
                f"Stale drop metadata: '{target.target_id}' tagged condition "
                f"but is not a condition, no-op"
            )
            return root
        return group_two_conditions(
            root, source_id, target.target_id, operator, id_factory=id_factory
        )

    logger.debug(f"Drop target type '{target.target_type}' unknown, no-op")
    return root
