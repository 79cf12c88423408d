"""modelkit schema module.

Exports the property declaration types, the class-body markers, the
``SchemaRegistry`` schema provider and the declarative YAML loader.
"""
from __future__ import annotations

from modelkit.schema.declarations import (
    RESERVED_KEYS,
    Marker,
    ModelRef,
    Prop,
    PropertyDeclaration,
    PropertyKind,
)
from modelkit.schema.loader import load_schemas, parse_schemas
from modelkit.schema.registry import DEFAULT_REGISTRY, SchemaRegistry

__all__ = [
    "PropertyDeclaration",
    "PropertyKind",
    "Marker",
    "Prop",
    "ModelRef",
    "RESERVED_KEYS",
    "SchemaRegistry",
    "DEFAULT_REGISTRY",
    "load_schemas",
    "parse_schemas",
]
