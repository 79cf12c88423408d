"""Unit tests for modelkit.utils.plain_data — is_plain_data, deep_clone,
deep_freeze, is_frozen and the frozen container types.
"""
from __future__ import annotations

import copy
import datetime
import pickle
from collections import OrderedDict

import pytest

from modelkit.errors import ReadOnlyViolation
from modelkit.utils.plain_data import (
    FrozenDict,
    FrozenList,
    deep_clone,
    deep_freeze,
    is_frozen,
    is_plain_data,
)


class _Opaque:
    def __init__(self) -> None:
        self.value = 1


# ===========================================================================
# is_plain_data
# ===========================================================================


class TestIsPlainData:
    def test_dict_literal_is_plain(self) -> None:
        assert is_plain_data({}) is True
        assert is_plain_data(dict(a=1)) is True

    def test_frozen_dict_is_plain(self) -> None:
        assert is_plain_data(FrozenDict(a=1)) is True

    @pytest.mark.parametrize(
        "value",
        [
            [],
            (),
            lambda: None,
            _Opaque,
            _Opaque(),
            datetime.datetime,
            datetime.datetime(2020, 1, 1),
            OrderedDict(),
            True,
            "",
            21,
            None,
        ],
    )
    def test_non_plain_values(self, value: object) -> None:
        assert is_plain_data(value) is False


# ===========================================================================
# deep_freeze
# ===========================================================================


class TestDeepFreeze:
    def test_freezes_dict(self) -> None:
        frozen = deep_freeze({})
        assert isinstance(frozen, FrozenDict)
        assert is_frozen(frozen)

    def test_freezes_all_nested_dicts(self) -> None:
        frozen = deep_freeze({"a": {"b": {"c": {"d": {"e": {}}}}}})
        assert isinstance(frozen["a"], FrozenDict)
        assert isinstance(frozen["a"]["b"], FrozenDict)
        assert isinstance(frozen["a"]["b"]["c"], FrozenDict)
        assert isinstance(frozen["a"]["b"]["c"]["d"], FrozenDict)
        assert isinstance(frozen["a"]["b"]["c"]["d"]["e"], FrozenDict)

    def test_freezes_list(self) -> None:
        frozen = deep_freeze([])
        assert isinstance(frozen, FrozenList)

    def test_freezes_all_nested_lists(self) -> None:
        frozen = deep_freeze([[[[[]]]]])
        assert isinstance(frozen[0], FrozenList)
        assert isinstance(frozen[0][0], FrozenList)
        assert isinstance(frozen[0][0][0][0], FrozenList)

    def test_freezes_mixed_dicts_and_lists(self) -> None:
        frozen = deep_freeze({"a": {"arr": []}, "arr": [{}]})
        assert isinstance(frozen["a"], FrozenDict)
        assert isinstance(frozen["a"]["arr"], FrozenList)
        assert isinstance(frozen["arr"], FrozenList)
        assert isinstance(frozen["arr"][0], FrozenDict)

    def test_tuple_items_are_frozen(self) -> None:
        frozen = deep_freeze(({"a": 1}, [2]))
        assert type(frozen) is tuple
        assert isinstance(frozen[0], FrozenDict)
        assert isinstance(frozen[1], FrozenList)

    def test_frozen_equals_source(self) -> None:
        data = {"a": [1, {"b": 2}], "c": "x"}
        assert deep_freeze(data) == data

    def test_idempotent(self) -> None:
        frozen = deep_freeze({"a": [1, 2], "b": {"c": 3}})
        assert deep_freeze(frozen) is frozen
        assert deep_freeze(deep_freeze(frozen)) == frozen

    def test_leaves_non_plain_values_untouched(self) -> None:
        opaque = _Opaque()
        when = datetime.datetime(2020, 1, 1)
        func = lambda: None  # noqa: E731
        frozen = deep_freeze({"a": func, "b": _Opaque, "c": opaque, "d": when})
        assert frozen["a"] is func
        assert frozen["b"] is _Opaque
        assert frozen["c"] is opaque
        assert frozen["d"] is when
        opaque.value = 2
        assert opaque.value == 2

    def test_scalars_returned_unchanged(self) -> None:
        assert deep_freeze(5) == 5
        assert deep_freeze(None) is None
        assert deep_freeze("text") == "text"

    def test_sets_become_frozensets(self) -> None:
        frozen = deep_freeze({"tags": {"a", "b"}})
        assert type(frozen["tags"]) is frozenset
        assert frozen["tags"] == {"a", "b"}
        assert is_frozen(frozen["tags"])


# ===========================================================================
# Frozen containers
# ===========================================================================


class TestFrozenDict:
    def test_item_assignment_raises(self) -> None:
        frozen = FrozenDict(a=1)
        with pytest.raises(ReadOnlyViolation):
            frozen["a"] = 2
        assert frozen["a"] == 1

    def test_read_only_violation_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            FrozenDict(a=1)["b"] = 2

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda d: d.__delitem__("a"),
            lambda d: d.clear(),
            lambda d: d.pop("a"),
            lambda d: d.popitem(),
            lambda d: d.setdefault("b", 1),
            lambda d: d.update(b=1),
        ],
    )
    def test_mutators_raise(self, mutate: object) -> None:
        frozen = FrozenDict(a=1)
        with pytest.raises(ReadOnlyViolation):
            mutate(frozen)  # type: ignore[operator]
        assert frozen == {"a": 1}

    def test_in_place_union_raises(self) -> None:
        frozen = FrozenDict(a=1)
        with pytest.raises(ReadOnlyViolation):
            frozen |= {"b": 2}

    def test_copy_and_pickle_keep_type(self) -> None:
        frozen = FrozenDict(a=1)
        assert type(copy.copy(frozen)) is FrozenDict
        assert type(copy.deepcopy(frozen)) is FrozenDict
        assert pickle.loads(pickle.dumps(frozen)) == {"a": 1}

    def test_repr(self) -> None:
        assert repr(FrozenDict(a=1)) == "FrozenDict({'a': 1})"

    def test_reinitialisation_leaves_contents_unchanged(self) -> None:
        frozen = FrozenDict(a=1)
        frozen.__init__(b=2)  # type: ignore[misc]
        assert frozen == {"a": 1}


class TestFrozenList:
    @pytest.mark.parametrize(
        "mutate",
        [
            lambda lst: lst.__setitem__(0, 9),
            lambda lst: lst.__delitem__(0),
            lambda lst: lst.append(9),
            lambda lst: lst.extend([9]),
            lambda lst: lst.insert(0, 9),
            lambda lst: lst.pop(),
            lambda lst: lst.remove(1),
            lambda lst: lst.clear(),
            lambda lst: lst.sort(),
            lambda lst: lst.reverse(),
        ],
    )
    def test_mutators_raise(self, mutate: object) -> None:
        frozen = FrozenList([1, 2])
        with pytest.raises(ReadOnlyViolation):
            mutate(frozen)  # type: ignore[operator]
        assert frozen == [1, 2]

    def test_augmented_assignment_raises(self) -> None:
        frozen = FrozenList([1])
        with pytest.raises(ReadOnlyViolation):
            frozen += [2]
        with pytest.raises(ReadOnlyViolation):
            frozen *= 2

    def test_concatenation_returns_plain_list(self) -> None:
        combined = FrozenList([1]) + [2]
        assert combined == [1, 2]
        combined.append(3)

    def test_copy_keeps_type(self) -> None:
        frozen = FrozenList([1, [2]])
        assert type(copy.copy(frozen)) is FrozenList
        assert copy.deepcopy(frozen) == [1, [2]]

    def test_reinitialisation_leaves_contents_unchanged(self) -> None:
        frozen = FrozenList([1, 2])
        frozen.__init__([9])  # type: ignore[misc]
        assert frozen == [1, 2]


# ===========================================================================
# deep_clone
# ===========================================================================


class TestDeepClone:
    def test_clones_nested_dicts(self) -> None:
        data = {"a": "something", "b": {"c": 4}}
        cloned = deep_clone(data)
        assert cloned == data
        assert cloned is not data
        assert cloned["b"] is not data["b"]

    def test_clones_nested_lists(self) -> None:
        data = [["something"], ["something other"]]
        cloned = deep_clone(data)
        assert cloned == data
        assert cloned[0] is not data[0]
        assert cloned[1] is not data[1]

    def test_frozen_input_yields_mutable_copy(self) -> None:
        frozen = deep_freeze({"a": [1, {"b": 2}]})
        cloned = deep_clone(frozen)
        assert type(cloned) is dict
        assert type(cloned["a"]) is list
        assert type(cloned["a"][1]) is dict
        cloned["a"].append(3)
        assert frozen["a"] == [1, {"b": 2}]

    def test_opaque_objects_are_shared(self) -> None:
        opaque = _Opaque()
        cloned = deep_clone({"o": opaque})
        assert cloned["o"] is opaque

    def test_set_is_copied(self) -> None:
        data = {1, 2}
        cloned = deep_clone(data)
        assert cloned == data
        assert cloned is not data

    def test_frozenset_comes_back_as_set(self) -> None:
        cloned = deep_clone(frozenset({1, 2}))
        assert type(cloned) is set
        assert cloned == {1, 2}


# ===========================================================================
# is_frozen
# ===========================================================================


class TestIsFrozen:
    def test_scalars_are_frozen(self) -> None:
        for value in (None, True, 1, 1.5, "s", b"b"):
            assert is_frozen(value)

    def test_live_containers_are_not_frozen(self) -> None:
        assert not is_frozen({})
        assert not is_frozen([])

    def test_frozen_containers_are_frozen(self) -> None:
        assert is_frozen(FrozenDict())
        assert is_frozen(FrozenList())

    def test_opaque_object_is_not_frozen(self) -> None:
        assert not is_frozen(_Opaque())

    def test_models_report_their_own_state(self) -> None:
        from modelkit import ImmutableModel, MutableModel, Prop, SchemaRegistry

        registry = SchemaRegistry("plain-data")

        class Fixed(ImmutableModel, registry=registry):
            value = Prop()

        class Live(MutableModel, registry=registry):
            value = Prop()

        live = Live(value=1)
        assert is_frozen(Fixed(value=1))
        assert not is_frozen(live)
        assert is_frozen(live.freeze())
