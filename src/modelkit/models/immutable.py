"""Immutable model flavor.

An ``ImmutableModel`` is sealed at the end of construction: plain data is
copied and deep-frozen, nested models are converted to frozen or
immutable instances, and every later attribute write raises
``ReadOnlyViolation``.  Updates are functional::

    class User(ImmutableModel):
        name = Prop()
        tags = Prop()

    alice = User(name="alice", tags=["admin"])
    renamed = alice.set(name="alice2")     # new instance
    alice.name                             # 'alice'
    renamed.tags.append("x")               # ReadOnlyViolation
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, TypeVar

from modelkit.models.base import Model, read_source
from modelkit.models.coercion import ValueShape, coerce_for_immutable
from modelkit.schema.declarations import PropertyDeclaration

IM = TypeVar("IM", bound="ImmutableModel")


class ImmutableModel(Model):
    """A model whose instances are deeply frozen once constructed."""

    _shape: ClassVar[ValueShape] = ValueShape.IMMUTABLE_INSTANCE

    def __init__(
        self, data: Mapping[str, Any] | Model | None = None, /, **fields: Any
    ) -> None:
        super().__init__(data, **fields)
        object.__setattr__(self, "_frozen", True)

    def _assign_property(self, declaration: PropertyDeclaration, value: Any) -> None:
        self._store(declaration.key, coerce_for_immutable(declaration, value))

    def set(
        self: IM, data: Mapping[str, Any] | Model | None = None, /, **fields: Any
    ) -> IM:
        """Return a new instance with the given properties replaced.

        ``self`` is never modified.  Keys missing from the update keep
        their current values.
        """
        update = read_source(data, fields)
        return type(self)({**self._field_values(), **update})

    def clone(self: IM) -> IM:
        """Return a distinct instance with equal field values.

        Nested immutable models are shared with the original.
        """
        return self.set()

    def is_frozen(self) -> bool:
        return True
