"""Property declarations and the class-body declaration markers.

A model's schema is an ordered sequence of ``PropertyDeclaration``
values.  Application code usually produces them with the ``Prop`` and
``ModelRef`` markers inside a class body::

    class Point(MutableModel):
        x = Prop()
        y = Prop()

    class Line(MutableModel):
        start = ModelRef(Point)
        end = ModelRef(Point)

The markers are collected when the class is created and turned into
declarations via ``Marker.declare(key)``.
"""
from __future__ import annotations

import keyword
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from modelkit.models.base import Model

# Names a declared property may not use because the model API owns them.
RESERVED_KEYS: frozenset[str] = frozenset({"set", "clone", "freeze", "is_frozen"})


class PropertyKind(Enum):
    """What a declared property holds."""

    SCALAR = auto()
    MODEL_REF = auto()


@dataclass(frozen=True, slots=True)
class PropertyDeclaration:
    """A single declared property of a model type.

    Parameters
    ----------
    key:
        Attribute name under which the value is stored.
    kind:
        ``SCALAR`` for plain data, ``MODEL_REF`` for a nested model.
    model:
        The nested model type.  Required for ``MODEL_REF``, forbidden for
        ``SCALAR``.
    """

    key: str
    kind: PropertyKind = PropertyKind.SCALAR
    model: type[Model] | None = None

    def __post_init__(self) -> None:
        validate_key(self.key)
        if self.kind is PropertyKind.MODEL_REF:
            if not _is_model_type(self.model):
                raise TypeError(
                    f"Property {self.key!r} references {self.model!r}, "
                    "which is not a Model subclass."
                )
        elif self.model is not None:
            raise TypeError(
                f"Scalar property {self.key!r} must not name a nested model type."
            )

    @classmethod
    def scalar(cls, key: str) -> "PropertyDeclaration":
        """Return a SCALAR declaration for *key*."""
        return cls(key=key, kind=PropertyKind.SCALAR)

    @classmethod
    def model_ref(cls, key: str, model: type[Model]) -> "PropertyDeclaration":
        """Return a MODEL_REF declaration for *key* pointing at *model*."""
        return cls(key=key, kind=PropertyKind.MODEL_REF, model=model)

    @property
    def is_model_ref(self) -> bool:
        return self.kind is PropertyKind.MODEL_REF


def validate_key(key: object) -> None:
    """Raise if *key* cannot be used as a declared property name."""
    if not isinstance(key, str) or not key.isidentifier() or keyword.iskeyword(key):
        raise ValueError(f"Property key {key!r} is not a valid identifier.")
    if key.startswith("_"):
        raise ValueError(f"Property key {key!r} must not start with an underscore.")
    if key in RESERVED_KEYS:
        raise ValueError(
            f"Property key {key!r} would shadow the model method of the same name."
        )


def _is_model_type(value: object) -> bool:
    from modelkit.models.base import Model

    return isinstance(value, type) and issubclass(value, Model)


# ---------------------------------------------------------------------------
# Class-body markers
# ---------------------------------------------------------------------------


class Marker(ABC):
    """Base for objects placed in a model class body to declare a property."""

    __slots__ = ()

    @abstractmethod
    def declare(self, key: str) -> PropertyDeclaration:
        """Return the declaration for the class attribute named *key*."""


class Prop(Marker):
    """Declares a SCALAR property holding plain data."""

    __slots__ = ()

    def declare(self, key: str) -> PropertyDeclaration:
        return PropertyDeclaration.scalar(key)

    def __repr__(self) -> str:
        return "Prop()"


class ModelRef(Marker):
    """Declares a MODEL_REF property holding an instance of *model*."""

    __slots__ = ("model",)

    def __init__(self, model: type[Model]) -> None:
        self.model = model

    def declare(self, key: str) -> PropertyDeclaration:
        return PropertyDeclaration.model_ref(key, self.model)

    def __repr__(self) -> str:
        return f"ModelRef({getattr(self.model, '__qualname__', self.model)!r})"
