"""Options resolution: definitions, merge strategies, and cached resolution."""

from treewire.core.options.core import (
    merge_options,
    register_self,
    resolve_asset,
    resolve_modified_options,
    resolve_options,
)
from treewire.core.options.definition import ComponentDefinition
from treewire.core.options.models import (
    ASSET_TYPES,
    LIFECYCLE_HOOKS,
    OBSERVER_MARKER,
    OPTION_STRATEGIES,
    MergeKind,
    MergeStrategy,
    merge_kind,
)
from treewire.core.options.normalize import (
    camelize,
    normalize_directives,
    normalize_inject,
    normalize_props,
    validate_component_name,
)

__all__ = [
    # Models
    "ASSET_TYPES",
    "LIFECYCLE_HOOKS",
    "OBSERVER_MARKER",
    "OPTION_STRATEGIES",
    "MergeKind",
    "MergeStrategy",
    "merge_kind",
    # Definition
    "ComponentDefinition",
    # Core
    "merge_options",
    "register_self",
    "resolve_asset",
    "resolve_modified_options",
    "resolve_options",
    # Normalization
    "camelize",
    "normalize_props",
    "normalize_inject",
    "normalize_directives",
    "validate_component_name",
]
