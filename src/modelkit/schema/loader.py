"""Declarative schema documents.

Schemas can be declared in YAML instead of class bodies.  The document
names each model and lists its properties; a bare string is a SCALAR
property and a one-key mapping ``{key: ModelName}`` is a MODEL_REF::

    models:
      Point:
        properties: [x, y]
      Line:
        properties:
          - start: Point
          - end: Point

The model classes themselves are ordinary (empty) flavor subclasses::

    class Point(MutableModel): ...
    class Line(MutableModel): ...

    load_schemas(document, [Point, Line])
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING

import yaml

from modelkit.errors import SchemaLoadError
from modelkit.schema.declarations import PropertyDeclaration

if TYPE_CHECKING:
    from modelkit.models.base import Model
    from modelkit.schema.registry import SchemaRegistry

logger = logging.getLogger(__name__)


def parse_schemas(
    text: str, models: Iterable[type[Model]] | Mapping[str, type[Model]]
) -> dict[type[Model], list[PropertyDeclaration]]:
    """Parse a schema document into declarations without registering them.

    Parameters
    ----------
    text:
        YAML document text.
    models:
        The model classes the document may name, either as an iterable
        (looked up by ``__name__``) or as an explicit name mapping.

    Returns
    -------
    dict[type[Model], list[PropertyDeclaration]]
        Own declarations per model class, in document order.

    Raises
    ------
    SchemaLoadError
        If the document is not valid YAML, does not have the expected
        shape, or names an unknown model.
    """
    by_name = _index_models(models)

    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SchemaLoadError(f"invalid YAML: {exc}") from exc

    if not isinstance(document, dict) or not isinstance(document.get("models"), dict):
        raise SchemaLoadError("document must be a mapping with a 'models' mapping")

    result: dict[type[Model], list[PropertyDeclaration]] = {}
    for name, body in document["models"].items():
        path = f"models.{name}"
        model = _resolve(by_name, name, path)
        if not isinstance(body, dict) or not isinstance(body.get("properties"), list):
            raise SchemaLoadError("expected a mapping with a 'properties' list", path)
        result[model] = [
            _parse_entry(entry, by_name, f"{path}.properties[{index}]")
            for index, entry in enumerate(body["properties"])
        ]
    return result


def load_schemas(
    text: str,
    models: Iterable[type[Model]] | Mapping[str, type[Model]],
    registry: SchemaRegistry | None = None,
) -> list[type[Model]]:
    """Parse a schema document and register its declarations.

    Each model is registered with *registry* when given, otherwise with
    the registry the model class itself uses.  Registration binds the
    model to that registry, so the loaded models construct normally.

    Returns
    -------
    list[type[Model]]
        The registered model classes, in document order.
    """
    parsed = parse_schemas(text, models)
    for model, declarations in parsed.items():
        target = registry if registry is not None else model.__registry__
        target.register(model, declarations)
    logger.debug("Loaded schema document declaring %d model(s)", len(parsed))
    return list(parsed)


def _index_models(
    models: Iterable[type[Model]] | Mapping[str, type[Model]],
) -> dict[str, type[Model]]:
    if isinstance(models, Mapping):
        return dict(models)
    return {model.__name__: model for model in models}


def _resolve(by_name: dict[str, type[Model]], name: object, path: str) -> type[Model]:
    try:
        return by_name[name]  # type: ignore[index]
    except (KeyError, TypeError):
        raise SchemaLoadError(f"unknown model {name!r}", path) from None


def _parse_entry(
    entry: object, by_name: dict[str, type[Model]], path: str
) -> PropertyDeclaration:
    model: type[Model] | None = None
    if isinstance(entry, str):
        key = entry
    elif isinstance(entry, dict) and len(entry) == 1:
        ((key, model_name),) = entry.items()
        model = _resolve(by_name, model_name, path)
    else:
        raise SchemaLoadError(
            "property must be a name or a one-key mapping of name to model", path
        )

    try:
        if model is None:
            return PropertyDeclaration.scalar(key)
        return PropertyDeclaration.model_ref(key, model)
    except (TypeError, ValueError) as exc:
        raise SchemaLoadError(str(exc), path) from exc
