"""Plain-data helpers: structural tests, deep copy and deep freeze."""
from __future__ import annotations

from modelkit.utils.plain_data import (
    FrozenDict,
    FrozenList,
    deep_clone,
    deep_freeze,
    is_frozen,
    is_plain_data,
)

__all__ = [
    "FrozenDict",
    "FrozenList",
    "deep_clone",
    "deep_freeze",
    "is_frozen",
    "is_plain_data",
]
