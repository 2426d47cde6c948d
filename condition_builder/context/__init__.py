"""
Condition Builder Context: Public API
========================================
"""

from condition_builder.context.builder import BuilderContext

__all__ = [
    "BuilderContext",
]
