"""Arena storage for component instances.

Instances are addressed by InstanceId handles. A parent owns the list of its
children's handles; a child keeps only its parent's handle, so walking upward
is a handle lookup per step.

Usage:
    tree = ComponentTree()
    handle = tree.allocate()
    tree.insert(handle, instance)
    for node in tree.ancestors(handle):
        ...
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from treewire.core.identity import InstanceId
from treewire.runtime.allocator import InstanceAllocator

if TYPE_CHECKING:
    from treewire.runtime.instance import ComponentInstance


class ComponentTree:
    """Handle-addressed store of live instances."""

    def __init__(self) -> None:
        self._allocator = InstanceAllocator()
        self._instances: dict[InstanceId, ComponentInstance] = {}

    def allocate(self) -> InstanceId:
        """Reserve a handle for an instance under construction."""
        return self._allocator.allocate()

    def insert(self, handle: InstanceId, instance: ComponentInstance) -> None:
        """Store a constructed instance under its handle.

        Raises:
            ValueError: If the handle is stale or already occupied.
        """
        if not self._allocator.is_alive(handle):
            raise ValueError(f"Instance handle {handle} is stale")
        if handle in self._instances:
            raise ValueError(f"Instance handle {handle} is already occupied")
        self._instances[handle] = instance

    def release(self, handle: InstanceId) -> None:
        """Drop the instance (if stored) and recycle its handle."""
        self._instances.pop(handle, None)
        self._allocator.deallocate(handle)

    def get(self, handle: InstanceId | None) -> ComponentInstance | None:
        """Resolve a handle; stale or missing handles resolve to None."""
        if handle is None:
            return None
        return self._instances.get(handle)

    def ancestors(self, handle: InstanceId) -> Iterator[ComponentInstance]:
        """Yield the instance itself, then each ancestor up to the root."""
        current = self.get(handle)
        while current is not None:
            yield current
            current = self.get(current.parent_handle)

    def is_alive(self, handle: InstanceId) -> bool:
        return self._allocator.is_alive(handle)

    def __contains__(self, handle: object) -> bool:
        return handle in self._instances

    def __len__(self) -> int:
        return len(self._instances)

    def __iter__(self) -> Iterator[ComponentInstance]:
        return iter(list(self._instances.values()))
