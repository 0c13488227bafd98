"""Tests for instance initialization.

Critical Invariants:
- Phases run in a fixed order
- Options resolution errors are fatal and leave nothing attached
- Every other user callback is isolated
"""

from collections import ChainMap

import pytest

from treewire import (
    InstantiationError,
    OptionsError,
    Runtime,
    RuntimeSettings,
    VNode,
    VNodeComponentOptions,
    resolve_options,
)
from treewire.runtime import BindingLayer


class PhaseLog:
    """Collaborators recording the order they are driven in."""

    def __init__(self):
        self.log = []

    def init_render(self, vm):
        self.log.append(("render", "save" in vm.listeners, vm.root_handle is not None))

    def init_state(self, vm, options):
        self.log.append("state")

    def mount(self, vm, target):
        self.log.append(("mount", target))
        return vm


class RecordingReactive(BindingLayer):
    def __init__(self, log):
        super().__init__()
        self._log = log

    def define_reactive(self, target, key, value, on_illegal_write=None):
        self._log.append(("inject", key))
        super().define_reactive(target, key, value, on_illegal_write)


@pytest.fixture
def phases(sink):
    spy = PhaseLog()
    runtime = Runtime(
        RuntimeSettings(),
        sink=sink,
        state=spy,
        render=spy,
        reactive=RecordingReactive(spy.log),
        mounter=spy,
    )
    return runtime, spy.log


# Phase order


def test_phases_run_in_fixed_order(phases):
    """CRITICAL: before_create sees no injections; provide sees initialized state."""
    runtime, log = phases

    def provide(vm):
        log.append("provide")
        return {"x": 1}

    runtime.create(
        {
            "parent_listeners": {"save": lambda: None},
            "before_create": lambda vm: log.append("before_create"),
            "inject": {"theme": {"default": "light"}},
            "provide": provide,
            "created": lambda vm: log.append("created"),
            "el": "#app",
        }
    )

    assert log == [
        ("render", True, True),
        "before_create",
        ("inject", "theme"),
        "state",
        "provide",
        "created",
        ("mount", "#app"),
    ]


def test_no_mount_without_el(phases):
    runtime, log = phases
    runtime.create()
    assert not any(isinstance(entry, tuple) and entry[0] == "mount" for entry in log)


def test_default_mounter_runs_mount_hooks(runtime):
    calls = []
    vm = runtime.create(
        {
            "before_mount": lambda vm: calls.append(("before_mount", vm.is_mounted)),
            "mounted": lambda vm: calls.append(("mounted", vm.is_mounted)),
            "el": "#app",
        }
    )

    assert calls == [("before_mount", False), ("mounted", True)]
    assert vm.el == "#app"


def test_hooks_include_definition_chain(runtime):
    calls = []
    runtime.mixin({"created": lambda vm: calls.append("global")})
    card = runtime.extend({"created": lambda vm: calls.append("definition")})

    runtime.create({"created": lambda vm: calls.append("own")}, definition=card)

    assert calls == ["global", "definition", "own"]


def test_uids_are_unique(runtime):
    uids = [runtime.create().uid for _ in range(5)]
    assert len(set(uids)) == 5


# Failure semantics


def test_options_error_is_fatal_and_leaves_nothing_attached(runtime):
    """CRITICAL: A malformed configuration never produces a partial instance."""
    parent = runtime.create()

    with pytest.raises(InstantiationError) as exc_info:
        runtime.create({"parent": parent, "props": 5})

    assert isinstance(exc_info.value.__cause__, OptionsError)
    assert parent.children == []
    assert len(runtime.tree) == 1


def test_released_handle_is_recycled(runtime):
    with pytest.raises(InstantiationError):
        runtime.create({"inject": 5})

    vm = runtime.create()
    assert vm.handle.generation == 1


def test_failing_hook_is_isolated(runtime, sink):
    """CRITICAL: One failing hook does not stop the next or the instantiation."""
    calls = []

    def boom(vm):
        raise RuntimeError("boom")

    vm = runtime.create({"created": [boom, lambda vm: calls.append("after")]})

    assert calls == ["after"]
    assert vm.handle in runtime.tree
    assert [d.info for d in sink.errors] == ["created hook"]


def test_state_error_reported_not_raised(sink):
    class BrokenState:
        def init_state(self, vm, options):
            raise RuntimeError("state")

    runtime = Runtime(RuntimeSettings(), sink=sink, state=BrokenState())
    created = []
    runtime.create({"created": lambda vm: created.append(vm)})

    assert len(created) == 1
    assert [d.info for d in sink.errors] == ["init_state"]


def test_failing_data_factory_reported(runtime, sink):
    def data(vm):
        raise ValueError("bad data")

    vm = runtime.create({"data": data})

    assert vm.data == {}
    assert [d.info for d in sink.errors] == ["data()"]


# Tree attachment


def test_child_attaches_to_parent(runtime):
    root = runtime.create()
    child = runtime.create({"parent": root})

    assert child.parent is root
    assert child.root is root
    assert root.child_instances == [child]


def test_abstract_parent_is_skipped(runtime):
    root = runtime.create()
    wrapper = runtime.create({"parent": root, "abstract": True})
    child = runtime.create({"parent": wrapper})

    assert child.parent is root
    assert root.children == [child.handle]
    assert wrapper.children == []


# Fast path


@pytest.fixture
def placeholder(runtime):
    parent = runtime.create()
    saved = []
    child_definition = runtime.extend({"name": "child", "props": ["title"]})
    vnode = VNode(
        tag="child",
        data={"attrs": {"id": "c1"}},
        context=parent,
        component_options=VNodeComponentOptions(
            definition=child_definition,
            props_data={"title": "Hi"},
            listeners={"save": saved.append},
            children=[
                VNode(tag="h1", data={"slot": "header"}, context=parent),
                VNode(text="  ", context=parent),
                VNode(tag="p", context=parent),
            ],
            tag="child",
        ),
    )
    return parent, vnode, child_definition, saved


def test_internal_child_uses_fast_path(runtime, placeholder):
    """CRITICAL: Internally created children chain onto the cached resolution."""
    parent, vnode, child_definition, saved = placeholder

    child = runtime.create_child(vnode, parent)

    assert isinstance(child.options, ChainMap)
    assert child.options.maps[1] is resolve_options(child_definition)
    assert child.options["component_tag"] == "child"
    assert child["title"] == "Hi"
    assert child.parent is parent


def test_internal_child_render_context(runtime, placeholder):
    parent, vnode, _, saved = placeholder
    render = object()

    child = runtime.create_child(vnode, parent, render=render)

    assert child.options["render"] is render
    assert child.render_context is parent
    assert child.attrs == {"id": "c1"}
    assert [node.tag for node in child.slots["header"]] == ["h1"]
    assert [node.tag for node in child.slots["default"]] == [None, "p"]

    child.emit("save", 1)
    assert saved == [1]


def test_internal_child_without_component_options_is_fatal(runtime):
    parent = runtime.create()

    with pytest.raises(InstantiationError):
        runtime.create_child(VNode(tag="div"), parent)

    assert len(runtime.tree) == 1
