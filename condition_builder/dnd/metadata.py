"""
Condition Builder DnD: Drop Metadata and Messages
====================================================
What the rendering layer attaches to every drop target, and the
messages a gesture adapter sends to the controller.

The renderer tags each drop zone with (target_id, position,
target_type). Metadata may be stale by the time a drop lands, so
nothing here validates it against the tree; resolution does that.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from condition_builder.tree.models import DropPosition, NodeType

_ID_KEYS = ("target_id", "targetId", "id")
_TYPE_KEYS = ("target_type", "targetType", "type")


def _first(meta: Mapping[str, Any], keys) -> Any:
    for key in keys:
        value = meta.get(key)
        if value is not None:
            return value
    return None


@dataclass(frozen=True)
class DropTarget:
    """
    Fields:
        target_id:   Id of the node under the pointer.
        position:    before | after | into.
        target_type: group | condition, as tagged at render time.
    """
    target_id: str
    position: str
    target_type: str

    @property
    def is_into(self) -> bool:
        return self.position == DropPosition.INTO

    @property
    def is_sibling(self) -> bool:
        return self.position in DropPosition.SIBLING

    @property
    def is_tagged_group(self) -> bool:
        return self.target_type == NodeType.GROUP

    @classmethod
    def from_mapping(cls, meta: Optional[Mapping[str, Any]]) -> Optional[DropTarget]:
        """
        Read the triple from renderer metadata.

        Accepts snake_case or camelCase keys. Returns None when any
        part is missing.
        """
        if not meta:
            return None
        target_id = _first(meta, _ID_KEYS)
        position = meta.get("position")
        target_type = _first(meta, _TYPE_KEYS)
        if not target_id or not position or not target_type:
            return None
        return cls(
            target_id=str(target_id),
            position=str(position),
            target_type=str(target_type),
        )

    def to_dict(self) -> dict:
        return {
            "target_id": self.target_id,
            "position": self.position,
            "target_type": self.target_type,
        }


# ══════════════════════════════════════════════════════════════
# GESTURE MESSAGES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DragStarted:
    active_id: str


@dataclass(frozen=True)
class DragEnded:
    """A drop. `over` is None when the pointer left every drop zone."""
    active_id: str
    over: Optional[DropTarget] = None


@dataclass(frozen=True)
class DragCancelled:
    pass
