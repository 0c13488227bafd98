"""Option models: merge-strategy tags and the key table.

Every configuration key carries an explicit MergeKind tag. Keys missing from
OPTION_STRATEGIES merge with MergeKind.DEFAULT.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from treewire.runtime.instance import ComponentInstance

MergeStrategy: TypeAlias = Callable[[Any, Any, "ComponentInstance | None", str], Any]
"""``strategy(parent_value, child_value, instance, key) -> merged_value``."""

LIFECYCLE_HOOKS = (
    "before_create",
    "created",
    "before_mount",
    "mounted",
    "before_update",
    "updated",
    "before_destroy",
    "destroyed",
    "activated",
    "deactivated",
    "error_captured",
    "server_prefetch",
)

ASSET_TYPES = ("component", "directive", "filter")

OBSERVER_MARKER = "__ob__"
"""Key the reactive layer may attach to observed mappings; never an option entry."""


class MergeKind(Enum):
    """How a configuration key is merged along the definition chain."""

    HOOK = auto()  # Ancestor hooks then own hooks, all invoked
    EXTEND = auto()  # Own entries override same-named ancestor entries
    DATA = auto()  # Like EXTEND, deferred through factories when callable
    WATCH = auto()  # Per watched key, ancestor watchers then own watchers
    ASSET = auto()  # Registry chained onto the ancestor registry
    CREATION_ONLY = auto()  # Only meaningful when creating an instance
    DEFAULT = auto()  # Own value if present, else ancestor value

    def get_strategy(self) -> MergeStrategy:
        """Get the merge function for this tag.

        Returns:
            Pure function implementing the strategy.
        """
        # Late import to avoid circular dependency
        from treewire.core.options import strategies

        table: dict[MergeKind, MergeStrategy] = {
            MergeKind.HOOK: strategies.merge_hooks,
            MergeKind.EXTEND: strategies.merge_extend,
            MergeKind.DATA: strategies.merge_data_or_fn,
            MergeKind.WATCH: strategies.merge_watch,
            MergeKind.ASSET: strategies.merge_assets,
            MergeKind.CREATION_ONLY: strategies.merge_creation_only,
            MergeKind.DEFAULT: strategies.merge_default,
        }
        return table[self]


OPTION_STRATEGIES: dict[str, MergeKind] = {
    **{hook: MergeKind.HOOK for hook in LIFECYCLE_HOOKS},
    "props": MergeKind.EXTEND,
    "methods": MergeKind.EXTEND,
    "inject": MergeKind.EXTEND,
    "computed": MergeKind.EXTEND,
    "data": MergeKind.DATA,
    "provide": MergeKind.DATA,
    "watch": MergeKind.WATCH,
    **{f"{asset}s": MergeKind.ASSET for asset in ASSET_TYPES},
    "el": MergeKind.CREATION_ONLY,
    "props_data": MergeKind.CREATION_ONLY,
}


def merge_kind(key: str) -> MergeKind:
    """Look up the tag for a key, defaulting to MergeKind.DEFAULT."""
    return OPTION_STRATEGIES.get(key, MergeKind.DEFAULT)
