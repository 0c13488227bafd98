"""Tests for instance identity and the instance arena.

Critical Invariants:
- Generation increments on recycle
- Stale handles are detected
- Stale handles never resolve to the instance that reused the slot
"""

import pytest

from treewire.core.identity import InstanceId
from treewire.runtime import ComponentTree, InstanceAllocator


@pytest.fixture
def allocator():
    """Create an InstanceAllocator."""
    return InstanceAllocator()


@pytest.fixture
def tree():
    return ComponentTree()


# Handle generation tests - critical for safety


def test_generation_increments_on_recycle(allocator):
    """CRITICAL: Recycled handle must have generation+1.

    Why: Prevents a released child's handle from resolving to a new instance.
    """
    first = allocator.allocate()
    assert first.generation == 0

    allocator.deallocate(first)

    second = allocator.allocate()
    assert second.index == first.index, "Should reuse same index"
    assert second.generation == 1, "INVARIANT: generation must increment"


def test_stale_handle_detection(allocator):
    """CRITICAL: is_alive() returns False for stale handles."""
    old = allocator.allocate()
    allocator.deallocate(old)

    assert not allocator.is_alive(old), "Old generation should be stale"

    new = allocator.allocate()
    assert allocator.is_alive(new)
    assert new.generation == old.generation + 1


def test_double_release_rejected(allocator):
    handle = allocator.allocate()
    allocator.deallocate(handle)

    with pytest.raises(ValueError, match="stale"):
        allocator.deallocate(handle)


def test_handle_format():
    assert str(InstanceId(3, 1)) == "3v1"
    assert InstanceId(3, 1) == InstanceId(3, 1)
    assert len({InstanceId(3, 1), InstanceId(3, 1), InstanceId(3, 2)}) == 2


# Arena tests


def test_stale_handle_resolves_to_none(tree):
    """CRITICAL: A handle kept after release never reaches the slot's new occupant."""
    old = tree.allocate()
    tree.insert(old, "first")
    tree.release(old)

    new = tree.allocate()
    tree.insert(new, "second")

    assert tree.get(old) is None
    assert tree.get(new) == "second"
    assert old not in tree


def test_insert_rejects_stale_handle(tree):
    handle = tree.allocate()
    tree.release(handle)

    with pytest.raises(ValueError, match="stale"):
        tree.insert(handle, "late")


def test_insert_rejects_occupied_handle(tree):
    handle = tree.allocate()
    tree.insert(handle, "first")

    with pytest.raises(ValueError, match="occupied"):
        tree.insert(handle, "second")


def test_release_of_reserved_handle(tree):
    """A handle reserved for a failed construction can be released without insert."""
    handle = tree.allocate()
    tree.release(handle)

    assert len(tree) == 0
    assert not tree.is_alive(handle)


def test_ancestors_walk_parent_handles(runtime):
    root = runtime.create()
    child = runtime.create({"parent": root})
    grandchild = runtime.create({"parent": child})

    assert list(runtime.tree.ancestors(grandchild.handle)) == [grandchild, child, root]
    assert list(runtime.tree) == [root, child, grandchild]
