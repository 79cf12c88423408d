"""Mutable model flavor.

A ``MutableModel`` is updated in place with merge semantics: ``set``
only touches the keys present in the update, and plain-data updates to a
nested mutable model are merged into that model rather than replacing
it.  Consumers holding a reference to a nested model keep seeing the
live object::

    class Point(MutableModel):
        x = Prop()
        y = Prop()

    class Line(MutableModel):
        start = ModelRef(Point)
        end = ModelRef(Point)

    line = Line({"start": {"x": 0, "y": 0}, "end": {"x": 1, "y": 1}})
    end = line.end
    line.set({"end": {"x": 5}})
    assert line.end is end and end.x == 5

Lifecycle
---------
An instance is *live* until ``freeze()`` is called and *frozen*
afterwards; the transition is one-way.  Freezing first replaces every
stored value with an independently owned copy, so the snapshot shares
nothing mutable with the rest of the object graph.  Once frozen, ``set``
is a silent no-op and direct attribute assignment raises
``ReadOnlyViolation``.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, ClassVar, TypeVar

from modelkit.models.base import Model, read_source
from modelkit.models.coercion import (
    ValueShape,
    classify,
    clone_owned,
    coerce_for_construction,
    coerce_for_merge,
)
from modelkit.schema.declarations import PropertyDeclaration
from modelkit.utils.plain_data import deep_freeze

logger = logging.getLogger(__name__)

MM = TypeVar("MM", bound="MutableModel")


class MutableModel(Model):
    """A model whose instances can be updated in place until frozen."""

    _shape: ClassVar[ValueShape] = ValueShape.MUTABLE_INSTANCE

    def _assign_property(self, declaration: PropertyDeclaration, value: Any) -> None:
        self._store(declaration.key, coerce_for_construction(declaration, value))

    def set(
        self: MM, data: Mapping[str, Any] | Model | None = None, /, **fields: Any
    ) -> MM:
        """Merge the given properties into this instance and return it.

        Keys that are not declared, or whose value is ``None``, are
        skipped.  On a frozen instance the call does nothing.
        """
        if self._frozen:
            return self

        update = read_source(data, fields)
        current = vars(self)
        for declaration in self._schema():
            value = update.get(declaration.key)
            if value is None:
                continue
            self._store(
                declaration.key,
                coerce_for_merge(declaration, current.get(declaration.key), value),
            )
        return self

    def clone(self: MM, deep: bool = False) -> MM:
        """Return a copy of this instance.

        Parameters
        ----------
        deep:
            When ``False`` the copy shares plain data and nested models
            with the original.  When ``True`` every stored value is
            copied recursively and the copy is fully independent.  A deep
            clone of a frozen instance is live.
        """
        if not deep:
            return type(self)(self)

        current = vars(self)
        data = {d.key: clone_owned(d, current.get(d.key)) for d in self._schema()}
        return type(self)(data)

    def freeze(self: MM) -> MM:
        """Turn this instance into a frozen snapshot and return it.

        Call ``clone()`` first to keep a live copy.
        """
        if self._frozen:
            return self

        current = vars(self)
        for declaration in self._schema():
            value = clone_owned(declaration, current.get(declaration.key))
            if not declaration.is_model_ref:
                value = deep_freeze(value)
            elif classify(value) is ValueShape.MUTABLE_INSTANCE:
                value.freeze()
            self._store(declaration.key, value)

        object.__setattr__(self, "_frozen", True)
        logger.debug("Froze %s instance at %#x", type(self).__qualname__, id(self))
        return self

    def is_frozen(self) -> bool:
        return self._frozen
