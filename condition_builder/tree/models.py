"""
Condition Builder Tree: Node Models
======================================
The recursive condition tree: a node is either a ConditionLeaf
(id + opaque payload) or a ConditionGroup (id + AND/OR operator +
ordered children).

RULES:
- Nodes are immutable (frozen dataclasses)
- Leaf payloads are opaque: nothing here inspects TData
- Every consumer handles both variants (closed union)
- Group children are always stored as a tuple

This file contains NO tree algorithms. See mutations.py.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, ClassVar, Generic, Iterable, Optional, Tuple, TypeVar, Union

from condition_builder.tree.exceptions import MalformedNodeError
from condition_builder.tree.ids import new_node_id

TData = TypeVar("TData")


# ══════════════════════════════════════════════════════════════
# CONSTANTS
# ══════════════════════════════════════════════════════════════

class Operator:
    """Boolean operator of a group."""
    AND = "AND"
    OR = "OR"

    ALL = frozenset({"AND", "OR"})

    @staticmethod
    def flip(operator: str) -> str:
        if operator not in Operator.ALL:
            raise ValueError(
                f"operator '{operator}' not valid. "
                f"Must be one of: {sorted(Operator.ALL)}"
            )
        return Operator.OR if operator == Operator.AND else Operator.AND


class NodeType:
    """Discriminator of the two node variants."""
    GROUP = "group"
    CONDITION = "condition"

    ALL = frozenset({"group", "condition"})


class DropPosition:
    """Where a dragged node lands relative to its target."""
    BEFORE = "before"
    AFTER = "after"
    INTO = "into"

    ALL = frozenset({"before", "after", "into"})
    SIBLING = frozenset({"before", "after"})


def _require_id(node_id: Any) -> None:
    if not node_id or not isinstance(node_id, str):
        raise ValueError("Node id must be a non-empty string.")


# ══════════════════════════════════════════════════════════════
# LEAF
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ConditionLeaf(Generic[TData]):
    """
    A single condition. Holds a caller-defined payload, no children.

    Fields:
        id:   Tree-wide unique id, minted by the caller's leaf factory.
        data: Opaque payload (field picker values, policy type, ...).
    """
    id: str
    data: TData

    kind: ClassVar[str] = NodeType.CONDITION

    def __post_init__(self):
        _require_id(self.id)

    def with_data(self, data: TData) -> ConditionLeaf[TData]:
        return replace(self, data=data)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.kind,
            "data": self.data,
        }


# ══════════════════════════════════════════════════════════════
# GROUP
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ConditionGroup(Generic[TData]):
    """
    An AND/OR group over an ordered sequence of child nodes.

    Fields:
        id:       Tree-wide unique id.
        operator: AND | OR.
        children: Ordered child nodes (a list is accepted and
                  normalised to a tuple).

    A non-root group holds at least two children in any tree the
    engine produces. The constructor does not enforce this so that
    roots and caller-built seeds can start smaller.
    """
    id: str
    operator: str = Operator.AND
    children: Tuple[Node, ...] = ()

    kind: ClassVar[str] = NodeType.GROUP

    def __post_init__(self):
        _require_id(self.id)

        if self.operator not in Operator.ALL:
            raise ValueError(
                f"operator '{self.operator}' not valid. "
                f"Must be one of: {sorted(Operator.ALL)}"
            )

        children = self.children
        if isinstance(children, list):
            children = tuple(children)
            object.__setattr__(self, "children", children)
        elif not isinstance(children, tuple):
            raise TypeError("children must be a tuple or list of nodes.")

        for child in children:
            if not isinstance(child, (ConditionLeaf, ConditionGroup)):
                raise TypeError(
                    f"Group child must be ConditionLeaf or ConditionGroup, "
                    f"got {type(child).__name__}."
                )

    def with_children(self, children: Iterable[Node]) -> ConditionGroup[TData]:
        return replace(self, children=tuple(children))

    def with_operator(self, operator: str) -> ConditionGroup[TData]:
        return replace(self, operator=operator)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.kind,
            "operator": self.operator,
            "children": [child.to_dict() for child in self.children],
        }


Node = Union[ConditionLeaf, ConditionGroup]


# ══════════════════════════════════════════════════════════════
# CONSTRUCTORS
# ══════════════════════════════════════════════════════════════

def create_empty_group(operator: str, node_id: str) -> ConditionGroup:
    """A group with no children. Used to seed a fresh root."""
    return ConditionGroup(id=node_id, operator=operator, children=())


def create_root(
    children: Iterable[Node] = (),
    operator: str = Operator.AND,
    node_id: Optional[str] = None,
) -> ConditionGroup:
    """Build a root group, minting an id when none is given."""
    return ConditionGroup(
        id=node_id if node_id is not None else new_node_id("root"),
        operator=operator,
        children=tuple(children),
    )


# ══════════════════════════════════════════════════════════════
# DICT CONVERSION
# ══════════════════════════════════════════════════════════════

def node_from_dict(value: Any) -> Node:
    """
    Rebuild a node from its plain value shape.

    Leaf:  {"id": str, "type": "condition", "data": Any}
    Group: {"id": str, "type": "group", "operator": "AND"|"OR",
            "children": [ ... ]}

    Raises MalformedNodeError on anything else.
    """
    if not isinstance(value, dict):
        raise MalformedNodeError(
            f"expected a mapping, got {type(value).__name__}."
        )

    node_type = value.get("type")
    node_id = value.get("id")

    try:
        if node_type == NodeType.CONDITION:
            if "data" not in value:
                raise MalformedNodeError(f"condition '{node_id}' has no data.")
            return ConditionLeaf(id=node_id, data=value["data"])

        if node_type == NodeType.GROUP:
            children = value.get("children")
            if not isinstance(children, (list, tuple)):
                raise MalformedNodeError(
                    f"group '{node_id}' children must be a list."
                )
            return ConditionGroup(
                id=node_id,
                operator=value.get("operator"),
                children=tuple(node_from_dict(child) for child in children),
            )
    except (TypeError, ValueError) as exc:
        raise MalformedNodeError(str(exc)) from exc

    raise MalformedNodeError(
        f"unknown node type '{node_type}'. "
        f"Must be one of: {sorted(NodeType.ALL)}"
    )


def group_from_dict(value: Any) -> ConditionGroup:
    """Like node_from_dict, but the value must describe a group."""
    node = node_from_dict(value)
    if not isinstance(node, ConditionGroup):
        raise MalformedNodeError(f"node '{node.id}' is not a group.")
    return node
