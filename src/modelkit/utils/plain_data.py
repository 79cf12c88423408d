"""Structural helpers for plain data.

Plain data is the value space SCALAR properties hold: scalars plus
``dict`` literals and ``list``/``tuple`` sequences nested arbitrarily.
Class instances, functions and model instances are *not* plain data and
are never copied or frozen by these helpers.

Python containers cannot be frozen in place, so ``deep_freeze`` returns
the frozen form of its argument: ``FrozenDict`` for dicts and
``FrozenList`` for lists.  Both compare equal to their plain
counterparts, so frozen data can be checked against literals directly::

    >>> frozen = deep_freeze({"a": [1, 2]})
    >>> frozen == {"a": [1, 2]}
    True
    >>> frozen["a"].append(3)
    Traceback (most recent call last):
      ...
    modelkit.errors.ReadOnlyViolation: Cannot modify frozen FrozenList instance.

Cyclic plain-data graphs are not supported.
"""
from __future__ import annotations

from typing import Any, NoReturn

from modelkit.errors import ReadOnlyViolation

_IMMUTABLE_SCALARS = (type(None), bool, int, float, complex, str, bytes, frozenset)


# ---------------------------------------------------------------------------
# Frozen containers
# ---------------------------------------------------------------------------


class FrozenDict(dict):
    """A ``dict`` whose mutators raise ``ReadOnlyViolation``.

    The contents are fixed in ``__new__``; calling ``__init__`` again on
    an existing instance leaves it unchanged.
    """

    __slots__ = ()

    def __new__(cls, *args: Any, **kwargs: Any) -> FrozenDict:
        self = super().__new__(cls)
        dict.__init__(self, *args, **kwargs)
        return self

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        pass

    def _read_only(self, *args: Any, **kwargs: Any) -> NoReturn:
        raise ReadOnlyViolation(self)

    def __setitem__(self, key: Any, value: Any) -> NoReturn:
        raise ReadOnlyViolation(self, key)

    def __delitem__(self, key: Any) -> NoReturn:
        raise ReadOnlyViolation(self, key)

    clear = _read_only
    pop = _read_only
    popitem = _read_only
    setdefault = _read_only
    update = _read_only
    __ior__ = _read_only

    def __reduce__(self) -> tuple[type, tuple[dict[Any, Any]]]:
        return (type(self), (dict(self),))

    def __repr__(self) -> str:
        return f"FrozenDict({dict.__repr__(self)})"


class FrozenList(list):
    """A ``list`` whose mutators raise ``ReadOnlyViolation``.

    Like ``FrozenDict``, the contents are fixed in ``__new__``.
    """

    __slots__ = ()

    def __new__(cls, *args: Any) -> FrozenList:
        self = super().__new__(cls)
        list.__init__(self, *args)
        return self

    def __init__(self, *args: Any) -> None:
        pass

    def _read_only(self, *args: Any, **kwargs: Any) -> NoReturn:
        raise ReadOnlyViolation(self)

    def __setitem__(self, index: Any, value: Any) -> NoReturn:
        raise ReadOnlyViolation(self, index)

    def __delitem__(self, index: Any) -> NoReturn:
        raise ReadOnlyViolation(self, index)

    append = _read_only
    extend = _read_only
    insert = _read_only
    pop = _read_only
    remove = _read_only
    clear = _read_only
    sort = _read_only
    reverse = _read_only
    __iadd__ = _read_only
    __imul__ = _read_only

    def __reduce__(self) -> tuple[type, tuple[list[Any]]]:
        return (type(self), (list(self),))

    def __repr__(self) -> str:
        return f"FrozenList({list.__repr__(self)})"


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def is_plain_data(value: object) -> bool:
    """Return ``True`` if *value* is a plain ``dict`` record.

    Only exact ``dict`` instances (and their frozen form) qualify.
    Lists, tuples, functions, classes, class instances (dict subclasses
    such as ``OrderedDict`` included), scalars and ``None`` do not.
    """
    return type(value) is dict or type(value) is FrozenDict


def is_frozen(value: object) -> bool:
    """Return ``True`` if *value* can no longer be mutated.

    Frozen containers, immutable scalars and frozen models are frozen;
    live ``dict``/``list`` values and other objects are not.
    """
    from modelkit.models.base import Model

    if isinstance(value, (FrozenDict, FrozenList, _IMMUTABLE_SCALARS)):
        return True
    if isinstance(value, Model):
        return value.is_frozen()  # type: ignore[attr-defined]
    return False


# ---------------------------------------------------------------------------
# Copy / freeze
# ---------------------------------------------------------------------------


def deep_clone(value: Any) -> Any:
    """Return an independently owned, unfrozen copy of plain data.

    Dicts, lists, tuples and sets are copied recursively (frozen
    containers, ``frozenset`` included, come back as their plain, mutable
    counterparts).  All other values are returned by reference.
    """
    if is_plain_data(value):
        return {key: deep_clone(item) for key, item in value.items()}
    if type(value) in (list, FrozenList):
        return [deep_clone(item) for item in value]
    if type(value) is tuple:
        return tuple(deep_clone(item) for item in value)
    if type(value) in (set, frozenset):
        return set(value)
    return value


def deep_freeze(value: Any) -> Any:
    """Return the deeply frozen form of *value*.

    Plain dicts become ``FrozenDict``, lists become ``FrozenList``, sets
    become ``frozenset`` and tuples are rebuilt with frozen items,
    recursively.  Values that are
    already frozen containers are returned unchanged, which makes the
    operation idempotent::

        frozen = deep_freeze(data)
        assert deep_freeze(frozen) is frozen

    Any other shape is returned untouched.
    """
    if type(value) in (FrozenDict, FrozenList):
        return value
    if type(value) is dict:
        return FrozenDict((key, deep_freeze(item)) for key, item in value.items())
    if type(value) is list:
        return FrozenList(deep_freeze(item) for item in value)
    if type(value) is set:
        return frozenset(value)
    if type(value) is tuple:
        return tuple(deep_freeze(item) for item in value)
    return value
