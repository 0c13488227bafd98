"""Tests for provide/inject.

Critical Invariants:
- The nearest provider wins
- Injected bindings are registered with tracking disabled
- Direct writes to injected bindings are reported, not blocked
"""

import pytest

from treewire import MemorySink, Runtime, RuntimeSettings, resolve_inject


@pytest.fixture
def family(runtime):
    """A (provides x=1) -> B (provides nothing) chain."""
    a = runtime.create({"provide": {"x": 1}})
    b = runtime.create({"parent": a})
    return a, b


def test_grandchild_resolves_from_grandparent(runtime, family):
    """CRITICAL: Lookup walks every ancestor, not just the parent."""
    _, b = family
    c = runtime.create({"parent": b, "inject": ["x"]})

    assert c["x"] == 1
    assert dict(c.injected) == {"x": 1}


def test_nearest_provider_wins(runtime, family):
    a, _ = family
    b = runtime.create({"parent": a, "provide": {"x": 2}})
    c = runtime.create({"parent": b, "inject": ["x"]})

    assert c["x"] == 2


def test_literal_default(runtime, family, sink):
    _, b = family
    c = runtime.create({"parent": b, "inject": {"y": {"default": 42}}})

    assert c["y"] == 42
    assert sink.warnings == []


def test_failing_default_reported_and_key_left_out(runtime, sink):
    """CRITICAL: A raising default never aborts creation or orphans the instance."""
    a = runtime.create({})

    def boom(vm):
        raise RuntimeError("no default")

    c = runtime.create({"parent": a, "inject": {"y": {"default": boom}}})

    assert a.children == [c.handle]
    assert c.parent is a
    assert "y" not in c
    assert [d.info for d in sink.errors] == ['default value for injection "y"']


def test_callable_default_receives_instance(runtime, family):
    _, b = family
    c = runtime.create({"parent": b, "inject": {"y": {"default": lambda vm: vm.uid}}})
    assert c["y"] == c.uid


def test_from_alias(runtime, family):
    _, b = family
    c = runtime.create({"parent": b, "inject": {"value": {"from": "x"}}})

    assert c["value"] == 1
    assert "x" not in c


def test_missing_injection_reported(runtime, family, sink):
    _, b = family
    c = runtime.create({"parent": b, "inject": ["missing"]})

    assert "missing" not in c
    assert sink.messages == ['Injection "missing" not found']


def test_injections_registered_without_tracking(runtime, family):
    """CRITICAL: Tracking is off while injections bind and back on afterwards."""
    _, b = family
    c = runtime.create({"parent": b, "inject": ["x"]})

    assert c.bindings["x"].observed is False
    assert runtime.reactive.observing is True


def test_direct_write_reported_but_applied(runtime, family, sink):
    _, b = family
    c = runtime.create({"parent": b, "inject": ["x"]})

    c["x"] = 5

    assert c["x"] == 5
    assert len(sink.warnings) == 1
    assert 'injection being mutated: "x"' in sink.warnings[0].message


def test_no_write_guard_in_optimized_build():
    sink = MemorySink()
    runtime = Runtime(RuntimeSettings(debug=False), sink=sink)
    a = runtime.create({"provide": {"x": 1}})
    c = runtime.create({"parent": a, "inject": ["x"]})

    c["x"] = 5

    assert c.bindings["x"].on_illegal_write is None
    assert sink.records == []


def test_provide_function_sees_state(runtime):
    a = runtime.create(
        {"data": lambda vm: {"count": 3}, "provide": lambda vm: {"count": vm["count"]}}
    )
    c = runtime.create({"parent": a, "inject": ["count"]})

    assert c["count"] == 3


def test_failing_provide_isolated(runtime, sink):
    def provide(vm):
        raise RuntimeError("provide failed")

    a = runtime.create({"provide": provide})
    c = runtime.create({"parent": a, "inject": {"x": {"default": 0}}})

    assert a.provided is None
    assert c["x"] == 0
    assert [d.info for d in sink.errors] == ["provide()"]


def test_provided_by_definition(runtime):
    theme_provider = runtime.extend({"name": "provider", "provide": {"theme": "dark"}})
    consumer = runtime.extend({"name": "consumer", "inject": ["theme"]})

    a = runtime.create(definition=theme_provider)
    c = runtime.create({"parent": a}, definition=consumer)

    assert c["theme"] == "dark"


def test_observer_marker_and_empty_declarations(runtime, family):
    _, b = family

    assert resolve_inject(None, b) is None
    assert resolve_inject({"__ob__": {"from": "__ob__"}, "x": {"from": "x"}}, b) == {"x": 1}
