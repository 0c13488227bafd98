"""Tests for hook dispatch, listener updates and teardown.

Critical Invariants:
- Teardown is idempotent and releases every handle in the subtree
- Parent-declared listeners are removed on teardown
- Re-render listener updates keep the registered invoker
"""

from treewire import call_hook


def test_call_hook_emits_hook_event(runtime):
    vm = runtime.create()
    seen = []
    vm.on("hook:updated", lambda: seen.append("event"))

    call_hook(vm, "updated")

    assert vm.has_hook_event
    assert seen == ["event"]


def test_call_hook_without_handlers_is_noop(runtime, sink):
    vm = runtime.create()
    call_hook(vm, "activated")
    assert sink.records == []


def test_destroy_order(runtime):
    """CRITICAL: Children are torn down between the parent's two destroy hooks."""
    calls = []

    def tracker(label):
        return {
            "before_destroy": lambda vm: calls.append(f"{label}:before_destroy"),
            "destroyed": lambda vm: calls.append(f"{label}:destroyed"),
        }

    root = runtime.create(tracker("root"))
    runtime.create({"parent": root, **tracker("child")})

    runtime.destroy(root)

    assert calls == [
        "root:before_destroy",
        "child:before_destroy",
        "child:destroyed",
        "root:destroyed",
    ]


def test_destroy_releases_subtree(runtime):
    root = runtime.create()
    child = runtime.create({"parent": root})

    runtime.destroy(root)

    assert len(runtime.tree) == 0
    assert not runtime.tree.is_alive(child.handle)
    assert root.is_destroyed and child.is_destroyed
    assert root.children == []


def test_destroy_is_idempotent(runtime):
    calls = []
    vm = runtime.create({"destroyed": lambda vm: calls.append(vm)})

    runtime.destroy(vm)
    runtime.destroy(vm)

    assert len(calls) == 1


def test_destroying_child_detaches_it(runtime):
    root = runtime.create()
    child = runtime.create({"parent": root})
    sibling = runtime.create({"parent": root})

    runtime.destroy(child)

    assert root.children == [sibling.handle]
    assert root.child_instances == [sibling]


def test_destroy_removes_parent_listeners(runtime):
    """CRITICAL: Teardown unregisters every parent-declared listener."""
    saved = []
    vm = runtime.create({"parent_listeners": {"save": saved.append, "~close": saved.append}})
    assert vm.events["save"] and vm.events["close"]

    runtime.destroy(vm)

    assert vm.listeners == {}
    assert vm.events == {}


def test_destroyed_hook_event_fires_before_subscriptions_drop(runtime):
    seen = []
    vm = runtime.create()
    vm.on("hook:destroyed", lambda: seen.append("destroyed"))

    runtime.destroy(vm)

    assert seen == ["destroyed"]
    assert vm.events == {}


def test_update_listeners_keeps_invoker(runtime):
    """CRITICAL: A parent re-render swaps the handler, not the registration."""
    calls = []
    vm = runtime.create({"parent_listeners": {"save": lambda value: calls.append(("a", value))}})
    invoker = vm.listeners["save"]

    runtime.update_listeners(vm, {"save": lambda value: calls.append(("b", value))})
    vm.emit("save", 1)

    assert vm.listeners["save"] is invoker
    assert vm.events["save"] == [invoker]
    assert calls == [("b", 1)]
    assert vm.options["parent_listeners"]["save"] is invoker


def test_update_listeners_adds_and_removes(runtime):
    calls = []
    vm = runtime.create({"parent_listeners": {"save": calls.append}})

    runtime.update_listeners(vm, {"close": calls.append})
    vm.emit("save", "ignored")
    vm.emit("close", "closed")

    assert calls == ["closed"]
    assert set(vm.listeners) == {"close"}


def test_update_listeners_on_fast_path_child(runtime):
    from treewire import VNode, VNodeComponentOptions

    parent = runtime.create()
    calls = []
    vnode = VNode(
        tag="child",
        context=parent,
        component_options=VNodeComponentOptions(
            definition=runtime.extend({"name": "child"}),
            listeners={"save": lambda: calls.append("a")},
        ),
    )
    child = runtime.create_child(vnode, parent)

    runtime.update_listeners(child, {"save": lambda: calls.append("b")})
    child.emit("save")

    assert calls == ["b"]
    assert "parent_listeners" in child.options.maps[0]
