"""
Condition Builder Tree: Node Ids
===================================
Fresh id minting for nodes the engine creates itself (new groups).

Leaf ids are always minted by the caller's leaf factory.
Engine ids are never derived from existing ids.
"""

from __future__ import annotations

import uuid

DEFAULT_GROUP_PREFIX = "group"


def new_node_id(prefix: str = DEFAULT_GROUP_PREFIX) -> str:
    """Return a fresh, globally unique node id such as 'group-3f2a...'."""
    if not prefix or not isinstance(prefix, str):
        raise ValueError("Node id prefix must be a non-empty string.")
    return f"{prefix}-{uuid.uuid4().hex}"
