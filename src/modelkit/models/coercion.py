"""Property coercion policy shared by both model flavors.

Every value a model stores passes through one of the functions below.
They decide, from the property kind and the runtime shape of the value,
whether to alias it, copy it, freeze it, build a nested model from it,
or merge it into the model already stored.

The runtime shape is classified once into a ``ValueShape`` tag and the
policy dispatches on that tag:

==========================  ============================================
shape                       meaning
==========================  ============================================
``ABSENT``                  ``None``: the property was not supplied
``RAW_DATA``                anything that is not a model instance
``IMMUTABLE_INSTANCE``      an ``ImmutableModel`` (or subclass) instance
``MUTABLE_INSTANCE``        a ``MutableModel`` (or subclass) instance
==========================  ============================================

Immutability is one-way: no path stores a live ``MutableModel`` inside
an immutable or frozen tree.
"""
from __future__ import annotations

from enum import Enum, auto
from typing import Any

from modelkit.models.base import Model
from modelkit.schema.declarations import PropertyDeclaration
from modelkit.utils.plain_data import deep_clone, deep_freeze


class ValueShape(Enum):
    """Runtime shape of a value supplied for a property."""

    ABSENT = auto()
    RAW_DATA = auto()
    IMMUTABLE_INSTANCE = auto()
    MUTABLE_INSTANCE = auto()


def classify(value: object) -> ValueShape:
    """Return the ``ValueShape`` tag of *value*."""
    if value is None:
        return ValueShape.ABSENT
    if isinstance(value, Model):
        return flavor_of(type(value))
    return ValueShape.RAW_DATA


def flavor_of(model: type[Model]) -> ValueShape:
    """Return the instance shape produced by the model type *model*.

    Raises
    ------
    TypeError
        If *model* derives from ``Model`` but from neither flavor.
    """
    shape = getattr(model, "_shape", None)
    if not isinstance(shape, ValueShape):
        raise TypeError(
            f"{model.__qualname__} must derive from ImmutableModel or MutableModel."
        )
    return shape


# ---------------------------------------------------------------------------
# Immutable flavor
# ---------------------------------------------------------------------------


def coerce_for_immutable(declaration: PropertyDeclaration, value: Any) -> Any:
    """Return the value an immutable model stores for *declaration*."""
    if not declaration.is_model_ref:
        return deep_freeze(deep_clone(value))

    shape = classify(value)
    if shape is ValueShape.ABSENT:
        return None
    if shape is ValueShape.IMMUTABLE_INSTANCE:
        return value
    if shape is ValueShape.MUTABLE_INSTANCE:
        return value.clone(deep=True).freeze()

    nested = declaration.model(value)  # type: ignore[misc]
    if flavor_of(type(nested)) is ValueShape.MUTABLE_INSTANCE:
        nested.freeze()
    return nested


# ---------------------------------------------------------------------------
# Mutable flavor
# ---------------------------------------------------------------------------


def coerce_for_construction(declaration: PropertyDeclaration, value: Any) -> Any:
    """Return the value a mutable model stores for *declaration* when built."""
    if not declaration.is_model_ref:
        return value
    if classify(value) is ValueShape.RAW_DATA:
        return declaration.model(value)  # type: ignore[misc]
    return value


def coerce_for_merge(
    declaration: PropertyDeclaration, current: Any, value: Any
) -> Any:
    """Return the value a mutable model stores after merging *value* in.

    A plain-data update to a nested model is delegated to that model's own
    ``set``: a nested mutable model is updated in place and keeps its
    identity; a nested immutable model is replaced by the new instance its
    ``set`` returns.
    """
    if not declaration.is_model_ref:
        return value

    shape = classify(value)
    if shape is ValueShape.ABSENT:
        return current
    if shape is not ValueShape.RAW_DATA:
        return value

    current_shape = classify(current)
    if current_shape is ValueShape.MUTABLE_INSTANCE:
        current.set(value)
        return current
    if current_shape is ValueShape.IMMUTABLE_INSTANCE:
        return current.set(value)
    return declaration.model(value)  # type: ignore[misc]


def clone_owned(declaration: PropertyDeclaration, value: Any) -> Any:
    """Return an independently owned copy of a stored property value.

    Used by deep cloning and freezing: plain data is deep-copied, nested
    mutable models are deep-cloned and nested immutable models are cloned.
    """
    if not declaration.is_model_ref:
        return deep_clone(value)

    shape = classify(value)
    if shape is ValueShape.MUTABLE_INSTANCE:
        return value.clone(deep=True)
    if shape is ValueShape.IMMUTABLE_INSTANCE:
        return value.clone()
    return value
