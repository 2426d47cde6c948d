"""
Condition Builder Config: Public API
=======================================
"""

from condition_builder.config.settings import (
    DEFAULT_SETTINGS,
    ENV_PREFIX,
    BuilderSettings,
)

__all__ = [
    "BuilderSettings",
    "DEFAULT_SETTINGS",
    "ENV_PREFIX",
]
