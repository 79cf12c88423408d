"""modelkit models module.

Exports the abstract ``Model`` base, both model flavors and the value
shape classification used by the coercion policy.
"""
from __future__ import annotations

from modelkit.models.base import Model
from modelkit.models.coercion import ValueShape, classify
from modelkit.models.immutable import ImmutableModel
from modelkit.models.mutable import MutableModel

__all__ = [
    "Model",
    "ImmutableModel",
    "MutableModel",
    "ValueShape",
    "classify",
]
