"""Schema registry for modelkit.

The registry is the schema provider models consult at construction time.
It stores each model type's *own* property declarations and composes the
full schema of a type on demand by walking its MRO, so a subclass sees
its ancestors' declarations followed by its own.  Registering a model
binds it to the registry (``Model.__registry__``), and each ancestor is
looked up in the registry it is bound to, so a hierarchy may span
several registries.

Example
-------
Declarations are usually registered from the class body::

    class Point(MutableModel):
        x = Prop()
        y = Prop()

    DEFAULT_REGISTRY.get_schema(Point)
    # (PropertyDeclaration(key='x', ...), PropertyDeclaration(key='y', ...))

Use a dedicated registry to keep a group of models isolated::

    shapes = SchemaRegistry("shapes")

    class Circle(ImmutableModel, registry=shapes):
        radius = Prop()

Or register programmatically::

    @shapes.model(PropertyDeclaration.scalar("side"))
    class Square(ImmutableModel):
        pass
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, ClassVar, TypeVar

from modelkit.errors import SchemaAlreadyRegisteredError, SchemaNotFoundError
from modelkit.schema.declarations import PropertyDeclaration

if TYPE_CHECKING:
    from modelkit.models.base import Model

logger = logging.getLogger(__name__)

M = TypeVar("M", bound="Model")


class SchemaRegistry:
    """Registry mapping model types to their property declarations.

    Parameters
    ----------
    name:
        A human-readable name for this registry (used in error messages).
    """

    # Bumped on every registration change in any registry; a cached
    # schema may include declarations owned by another registry.
    _revision: ClassVar[int] = 0

    def __init__(self, name: str) -> None:
        self._name = name
        self._own: dict[type, tuple[PropertyDeclaration, ...]] = {}
        self._cache: dict[type, tuple[PropertyDeclaration, ...]] = {}
        self._cache_revision = SchemaRegistry._revision

    @property
    def name(self) -> str:
        return self._name

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self, model: type[Model], declarations: Iterable[PropertyDeclaration]
    ) -> None:
        """Register the own declarations of *model* and bind it to this registry.

        When the same key is declared more than once, the later
        declaration replaces the earlier one in place.  After the call
        ``model.__registry__`` is this registry, so instances of *model*
        read their schema from here.

        Parameters
        ----------
        model:
            The model class being declared.  Must subclass ``Model``.
        declarations:
            The properties declared directly on *model*, in order.

        Raises
        ------
        SchemaAlreadyRegisteredError
            If *model* is already registered here or in the registry it
            is currently bound to.
        TypeError
            If *model* is not a ``Model`` subclass or a declaration is not
            a ``PropertyDeclaration``.
        """
        from modelkit.models.base import Model

        if not (isinstance(model, type) and issubclass(model, Model)):
            raise TypeError(
                f"Cannot register {model!r}: it must be a subclass of Model."
            )
        if model in self._own:
            raise SchemaAlreadyRegisteredError(model, self._name)
        bound = vars(model).get("__registry__")
        if bound is not None and bound is not self and model in bound:
            raise SchemaAlreadyRegisteredError(model, bound.name)

        by_key: dict[str, PropertyDeclaration] = {}
        for declaration in declarations:
            if not isinstance(declaration, PropertyDeclaration):
                raise TypeError(
                    f"Expected a PropertyDeclaration for {model.__qualname__}, "
                    f"got {declaration!r}."
                )
            by_key[declaration.key] = declaration

        self._own[model] = tuple(by_key.values())
        type.__setattr__(model, "__registry__", self)
        SchemaRegistry._revision += 1
        logger.debug(
            "Registered model %s with %d own propert%s in registry %r",
            model.__qualname__,
            len(by_key),
            "y" if len(by_key) == 1 else "ies",
            self._name,
        )

    def model(
        self, *declarations: PropertyDeclaration
    ) -> Callable[[type[M]], type[M]]:
        """Return a class decorator registering *declarations* for the class.

        Example
        -------
        ::

            @registry.model(
                PropertyDeclaration.scalar("name"),
                PropertyDeclaration.model_ref("owner", User),
            )
            class Project(MutableModel):
                pass
        """

        def decorator(cls: type[M]) -> type[M]:
            self.register(cls, declarations)
            return cls

        return decorator

    def deregister(self, model: type) -> None:
        """Remove *model* and its own declarations from the registry.

        Raises
        ------
        SchemaNotFoundError
            If *model* is not registered.
        """
        if model not in self._own:
            raise SchemaNotFoundError(model, self._name)
        del self._own[model]
        SchemaRegistry._revision += 1
        logger.debug(
            "Deregistered model %s from registry %r", model.__qualname__, self._name
        )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def own_declarations(self, model: type) -> tuple[PropertyDeclaration, ...]:
        """Return the declarations registered directly on *model*.

        Inherited declarations are not included; an unregistered type
        yields an empty tuple.
        """
        return self._own.get(model, ())

    def get_schema(self, model: type) -> tuple[PropertyDeclaration, ...]:
        """Return the full schema of *model*, inherited declarations included.

        Ancestors come first.  When a subclass re-declares a key, its
        declaration replaces the ancestor's at the ancestor's position.
        Each class in the MRO contributes the declarations held by the
        registry it is bound to, which need not be this one.

        Raises
        ------
        SchemaNotFoundError
            If neither *model* nor any of its ancestors declares a property.
        """
        if self._cache_revision != SchemaRegistry._revision:
            self._cache.clear()
            self._cache_revision = SchemaRegistry._revision
        try:
            return self._cache[model]
        except KeyError:
            pass

        by_key: dict[str, PropertyDeclaration] = {}
        for klass in reversed(model.__mro__):
            owner = vars(klass).get("__registry__", self)
            for declaration in owner.own_declarations(klass):
                by_key[declaration.key] = declaration

        if not by_key:
            raise SchemaNotFoundError(model, self._name)

        schema = tuple(by_key.values())
        self._cache[model] = schema
        logger.debug(
            "Built schema for %s in registry %r: %s",
            model.__qualname__,
            self._name,
            ", ".join(by_key),
        )
        return schema

    def list_models(self) -> list[str]:
        """Return the qualified names of all registered models, sorted."""
        return sorted(model.__qualname__ for model in self._own)

    def __contains__(self, model: object) -> bool:
        """Support ``Point in registry`` membership test."""
        return model in self._own

    def __len__(self) -> int:
        """Return the number of registered models."""
        return len(self._own)

    def __repr__(self) -> str:
        return f"SchemaRegistry(name={self._name!r}, models={self.list_models()})"


DEFAULT_REGISTRY = SchemaRegistry("default")
