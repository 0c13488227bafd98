"""Instance handle allocation.

InstanceAllocator is a stateful service that manages handle lifecycle.
"""

from __future__ import annotations

from treewire.core.identity import InstanceId


class InstanceAllocator:
    """Allocates instance handles with generation tracking for recycling.

    Maintains a free list of released indices with incremented generations so
    a stale handle never resolves to the instance that reused its slot.
    """

    def __init__(self) -> None:
        self._next_index = 0
        self._free_list: list[tuple[int, int]] = []  # (index, generation)
        self._generations: dict[int, int] = {}

    def allocate(self) -> InstanceId:
        """Allocate a handle, reusing released slots when available.

        Returns:
            Newly allocated InstanceId.
        """
        if self._free_list:
            index, gen = self._free_list.pop()
            return InstanceId(index=index, generation=gen)

        index = self._next_index
        self._next_index += 1
        self._generations[index] = 0
        return InstanceId(index=index, generation=0)

    def deallocate(self, handle: InstanceId) -> None:
        """Return a handle's slot for reuse with an incremented generation.

        Args:
            handle: Handle to release.

        Raises:
            ValueError: If the handle is already stale.
        """
        if not self.is_alive(handle):
            raise ValueError(f"Cannot release stale instance handle {handle}")

        new_gen = handle.generation + 1
        self._generations[handle.index] = new_gen
        self._free_list.append((handle.index, new_gen))

    def is_alive(self, handle: InstanceId) -> bool:
        """Check if a handle is still valid (not recycled).

        Args:
            handle: Handle to check.

        Returns:
            True if the handle's generation is current for its index.
        """
        return self._generations.get(handle.index, -1) == handle.generation
