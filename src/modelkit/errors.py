"""Exception types for modelkit.

Every error subclasses ``ModelkitError`` and the built-in exception that
best describes it, so callers may catch either the library-specific type
or the standard one (``TypeError``, ``KeyError``, ``ValueError``).
"""
from __future__ import annotations


class ModelkitError(Exception):
    """Base class for all modelkit errors."""


class ReadOnlyViolation(ModelkitError, TypeError):
    """Raised when writing to a frozen model or frozen plain-data container.

    Parameters
    ----------
    target:
        The object that rejected the write.
    name:
        The attribute or item that was being written, if known.
    """

    def __init__(self, target: object, name: object = None) -> None:
        self.target = target
        self.name = name
        kind = type(target).__name__
        if name is None:
            message = f"Cannot modify frozen {kind} instance."
        else:
            message = f"Cannot assign {name!r} on frozen {kind} instance."
        super().__init__(message)


class SchemaNotFoundError(ModelkitError, KeyError):
    """Raised when a model type has no registered property declarations."""

    def __init__(self, model: type, registry_name: str) -> None:
        self.model = model
        self.registry_name = registry_name
        super().__init__(
            f"No schema is registered for {model.__qualname__!r} in the "
            f"{registry_name!r} registry. Declare at least one property with "
            "Prop() or ModelRef(), or register the type explicitly."
        )

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message.
        return str(self.args[0])


class SchemaAlreadyRegisteredError(ModelkitError, ValueError):
    """Raised when attempting to register a model type twice."""

    def __init__(self, model: type, registry_name: str) -> None:
        self.model = model
        self.registry_name = registry_name
        super().__init__(
            f"Model {model.__qualname__!r} is already registered in the "
            f"{registry_name!r} registry. Deregister it first to replace "
            "its declarations."
        )


class SchemaLoadError(ModelkitError, ValueError):
    """Raised when a declarative schema document cannot be loaded.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    path:
        Dotted location inside the document, e.g. ``"models.Line.properties[0]"``.
    """

    def __init__(self, message: str, path: str = "") -> None:
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)
