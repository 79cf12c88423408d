"""modelkit — declarative data models with immutable and mutable flavors.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    from modelkit import ImmutableModel, ModelRef, MutableModel, Prop

    class Point(MutableModel):
        x = Prop()
        y = Prop()

    class Line(MutableModel):
        start = ModelRef(Point)
        end = ModelRef(Point)

    line = Line({"start": {"x": 0, "y": 0}, "end": {"x": 1, "y": 1}})

    # Merge update: the nested Point keeps its identity
    end = line.end
    line.set({"end": {"x": 5, "y": 5}})
    assert line.end is end

    # Independent copies
    shallow = line.clone()           # shares nested points
    deep = line.clone(deep=True)     # owns its own points

    # Frozen snapshot
    snapshot = line.clone(deep=True).freeze()
    snapshot.set({"start": {"x": 9}})   # silently ignored

    class Label(ImmutableModel):
        text = Prop()

    label = Label(text="hello")
    renamed = label.set(text="bye")      # new instance

    modelkit.__version__
    '0.1.0'
"""
from __future__ import annotations

__version__: str = "0.1.0"

from modelkit.errors import (
    ModelkitError,
    ReadOnlyViolation,
    SchemaAlreadyRegisteredError,
    SchemaLoadError,
    SchemaNotFoundError,
)
from modelkit.models import ImmutableModel, Model, MutableModel, ValueShape, classify
from modelkit.schema import (
    DEFAULT_REGISTRY,
    ModelRef,
    Prop,
    PropertyDeclaration,
    PropertyKind,
    SchemaRegistry,
    load_schemas,
)
from modelkit.utils import (
    FrozenDict,
    FrozenList,
    deep_clone,
    deep_freeze,
    is_frozen,
    is_plain_data,
)

__all__ = [
    "__version__",
    # models
    "Model",
    "ImmutableModel",
    "MutableModel",
    "ValueShape",
    "classify",
    # schema
    "Prop",
    "ModelRef",
    "PropertyDeclaration",
    "PropertyKind",
    "SchemaRegistry",
    "DEFAULT_REGISTRY",
    "load_schemas",
    # plain data
    "FrozenDict",
    "FrozenList",
    "deep_clone",
    "deep_freeze",
    "is_frozen",
    "is_plain_data",
    # errors
    "ModelkitError",
    "ReadOnlyViolation",
    "SchemaAlreadyRegisteredError",
    "SchemaLoadError",
    "SchemaNotFoundError",
]
