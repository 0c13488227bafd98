"""Instance identity models.

Usage:
    handle = InstanceId(index=42, generation=1)
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class InstanceId:
    """Arena handle for a component instance, with generation for safe reuse.

    Parents hold the handles of their children and children hold the handle of
    their parent, so the tree never holds an ownership cycle.
    """

    index: int = 0
    generation: int = 0

    def __hash__(self) -> int:
        return hash((self.index, self.generation))

    def __str__(self) -> str:
        return f"{self.index}v{self.generation}"
