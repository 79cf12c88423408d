"""Base class shared by both model flavors.

``Model`` owns three things:

* collecting ``Prop``/``ModelRef`` markers from subclass bodies and
  registering them with the class's ``SchemaRegistry``;
* construction: reading every declared key from the supplied data and
  handing it to the flavor's ``_assign_property`` exactly once, in schema
  order;
* the read-only guard that rejects attribute writes once an instance is
  frozen.

Storage policy (copying, freezing, nesting) belongs to the flavors.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar

from modelkit.errors import ReadOnlyViolation
from modelkit.schema.declarations import Marker, PropertyDeclaration
from modelkit.schema.registry import DEFAULT_REGISTRY, SchemaRegistry


class Model(ABC):
    """Abstract base of ``ImmutableModel`` and ``MutableModel``.

    Parameters
    ----------
    data:
        A mapping of property values, or another model instance whose
        declared fields are read.  Keys that are not declared are ignored;
        declared keys that are missing are stored as ``None``.
    **fields:
        Property values given as keyword arguments.  They take precedence
        over the same keys in *data*.
    """

    __registry__: ClassVar[SchemaRegistry] = DEFAULT_REGISTRY

    # Instance-level override is written by the flavors when sealing.
    _frozen: bool = False

    def __init_subclass__(
        cls, registry: SchemaRegistry | None = None, **kwargs: Any
    ) -> None:
        super().__init_subclass__(**kwargs)
        if registry is not None:
            cls.__registry__ = registry

        declarations: list[PropertyDeclaration] = []
        for name, value in list(vars(cls).items()):
            if isinstance(value, Marker):
                declarations.append(value.declare(name))
                delattr(cls, name)
        if declarations:
            cls.__registry__.register(cls, declarations)

    def __init__(
        self, data: Mapping[str, Any] | Model | None = None, /, **fields: Any
    ) -> None:
        source = read_source(data, fields)
        for declaration in self._schema():
            self._assign_property(declaration, source.get(declaration.key))

    @classmethod
    def _schema(cls) -> tuple[PropertyDeclaration, ...]:
        return cls.__registry__.get_schema(cls)

    @abstractmethod
    def _assign_property(self, declaration: PropertyDeclaration, value: Any) -> None:
        """Store the constructor-supplied *value* for *declaration*."""

    def _store(self, key: str, value: Any) -> None:
        object.__setattr__(self, key, value)

    def _field_values(self) -> dict[str, Any]:
        """Return the declared fields as a fresh ``{key: value}`` dict."""
        values = vars(self)
        return {d.key: values.get(d.key) for d in self._schema()}

    # ------------------------------------------------------------------
    # Read-only guard
    # ------------------------------------------------------------------

    def __setattr__(self, name: str, value: Any) -> None:
        if self._frozen:
            raise ReadOnlyViolation(self, name)
        object.__setattr__(self, name, value)

    def __delattr__(self, name: str) -> None:
        if self._frozen:
            raise ReadOnlyViolation(self, name)
        object.__delattr__(self, name)

    # ------------------------------------------------------------------
    # Dunder helpers
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._field_values() == other._field_values()  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        body = ", ".join(f"{key}={value!r}" for key, value in self._field_values().items())
        return f"{type(self).__name__}({body})"


def read_source(data: object, fields: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return the property values supplied as *data* and keyword *fields*.

    *data* may be ``None``, a mapping or a model instance; keyword fields
    take precedence.

    Raises
    ------
    TypeError
        If *data* is of any other type.
    """
    if data is None:
        source: Mapping[str, Any] = {}
    elif isinstance(data, Model):
        source = data._field_values()
    elif isinstance(data, Mapping):
        source = data
    else:
        raise TypeError(
            f"Model data must be a mapping or a model instance, got {type(data).__name__}."
        )
    if fields:
        return {**source, **fields}
    return source
