"""
Condition Builder Config: Builder Settings
=============================================
Tunables for the drag layer and the builder context.

Settings are a frozen value. Defaults suit an interactive editor;
deployments may override them through the environment:

    CONDITION_BUILDER_LEAF_DROP_OPERATOR   AND | OR
    CONDITION_BUILDER_GROUP_ID_PREFIX      prefix for minted group ids
    CONDITION_BUILDER_CHECK_INVARIANTS     1/true/yes | 0/false/no
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from condition_builder.tree.ids import DEFAULT_GROUP_PREFIX, new_node_id
from condition_builder.tree.models import Operator

ENV_PREFIX = "CONDITION_BUILDER_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(
        f"{name}='{raw}' is not a boolean. "
        f"Use one of: {sorted(_TRUE_VALUES | _FALSE_VALUES)}"
    )


@dataclass(frozen=True)
class BuilderSettings:
    """
    Fields:
        leaf_drop_operator: Operator of the group created when a
                            condition is dropped onto a condition.
        group_id_prefix:    Prefix of engine-minted group ids.
        check_invariants:   Run the tree invariant checks before every
                            committed change (on in debug builds).
    """

    leaf_drop_operator: str = Operator.AND
    group_id_prefix: str = DEFAULT_GROUP_PREFIX
    check_invariants: bool = __debug__

    def __post_init__(self) -> None:
        if self.leaf_drop_operator not in Operator.ALL:
            raise ValueError(
                f"leaf_drop_operator '{self.leaf_drop_operator}' not valid. "
                f"Must be one of: {sorted(Operator.ALL)}"
            )
        if not self.group_id_prefix or not isinstance(self.group_id_prefix, str):
            raise ValueError("group_id_prefix must be a non-empty string.")
        if not isinstance(self.check_invariants, bool):
            raise TypeError("check_invariants must be bool.")

    def new_group_id(self) -> str:
        return new_node_id(self.group_id_prefix)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> BuilderSettings:
        """Build settings from CONDITION_BUILDER_* variables; unset keeps defaults."""
        env = os.environ if environ is None else environ
        overrides = {}

        operator = env.get(f"{ENV_PREFIX}LEAF_DROP_OPERATOR")
        if operator is not None:
            overrides["leaf_drop_operator"] = operator.strip().upper()

        prefix = env.get(f"{ENV_PREFIX}GROUP_ID_PREFIX")
        if prefix is not None:
            overrides["group_id_prefix"] = prefix.strip()

        check = env.get(f"{ENV_PREFIX}CHECK_INVARIANTS")
        if check is not None:
            overrides["check_invariants"] = _parse_bool(
                f"{ENV_PREFIX}CHECK_INVARIANTS", check
            )

        return cls(**overrides)


DEFAULT_SETTINGS = BuilderSettings()
