"""Tests for the default state initializer and render scaffold."""

import pytest

from treewire import VNode
from treewire.runtime import resolve_slots


def test_props_from_parent_and_defaults(runtime):
    root = runtime.create()
    vm = runtime.create(
        {
            "parent": root,
            "props": {"title": str, "size": {"default": 3}, "items": {"default": lambda vm: []}},
            "props_data": {"title": "Hi"},
        }
    )

    assert vm["title"] == "Hi"
    assert vm["size"] == 3
    assert vm["items"] == []
    assert vm.bindings["title"].observed is False, "Props from a parent are not re-observed"


def test_root_props_are_observed(runtime):
    vm = runtime.create({"props": ["title"], "props_data": {"title": "root"}})
    assert vm.bindings["title"].observed is True


def test_methods_bound_to_instance(runtime):
    vm = runtime.create(
        {
            "data": lambda vm: {"name": "treewire"},
            "methods": {"greet": lambda self, greeting: f"{greeting}, {self['name']}"},
        }
    )

    assert vm["greet"]("hello") == "hello, treewire"


def test_non_callable_method_reported(runtime, sink):
    vm = runtime.create({"methods": {"broken": 5}})

    assert "broken" not in vm
    assert 'Method "broken"' in sink.messages[0]


def test_data_conflicting_with_prop_reported(runtime, sink):
    vm = runtime.create(
        {"props": ["title"], "props_data": {"title": "prop"}, "data": lambda vm: {"title": "data"}}
    )

    assert vm["title"] == "prop"
    assert "already declared as a prop" in sink.messages[0]


def test_data_must_be_a_mapping(runtime, sink):
    vm = runtime.create({"data": lambda vm: ["not", "a", "mapping"]})

    assert vm.data == {}
    assert sink.messages == ["data functions should return a mapping"]


def test_computed_reads_state_and_is_read_only(runtime):
    vm = runtime.create(
        {
            "data": lambda vm: {"count": 2},
            "computed": {"double": lambda self: self["count"] * 2},
        }
    )

    assert vm["double"] == 4
    vm["count"] = 5
    assert vm["double"] == 10

    with pytest.raises(AttributeError):
        vm["double"] = 1


def test_computed_without_getter_reported(runtime, sink):
    vm = runtime.create({"computed": {"broken": {"set": lambda self, value: None}}})

    assert "broken" not in vm
    assert 'Getter is missing for computed property "broken".' in sink.messages


def test_watch_declarations_recorded(runtime):
    on_count = lambda self, new, old: None  # noqa: E731
    mixin_watcher = lambda self, new, old: None  # noqa: E731
    vm = runtime.create(
        {"mixins": [{"watch": {"count": mixin_watcher}}], "watch": {"count": on_count}}
    )

    assert vm.watchers == [("count", mixin_watcher), ("count", on_count)]


def test_new_key_assignment_creates_binding(runtime):
    vm = runtime.create()
    vm["extra"] = 1
    assert vm["extra"] == 1


# Slots


def test_resolve_slots_groups_by_name():
    context = object()
    header = VNode(tag="h1", data={"slot": "header"}, context=context)
    foreign = VNode(tag="h2", data={"slot": "header"}, context=object())
    body = VNode(tag="p", context=context)

    slots = resolve_slots([header, foreign, body], context)

    assert slots == {"header": [header], "default": [foreign, body]}


def test_whitespace_only_slot_dropped():
    context = object()
    assert resolve_slots([VNode(text=" \n ", context=context)], context) == {}
    assert resolve_slots(None, context) == {}
