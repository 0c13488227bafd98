"""Core functionalities: stateless protocols, models and pure functions.

Architecture Note:
    core/ contains the stateless building blocks: definitions and their merge
    strategies, listener reconciliation, and identity handles. The only state
    it touches is the per-definition options cache, which lives on the
    definitions themselves. For stateful services, see runtime/.
"""

from treewire.core.events import (
    Invoker,
    NormalizedEvent,
    OnceHandler,
    create_invoker,
    normalize_event,
    update_listeners,
)
from treewire.core.identity import InstanceId
from treewire.core.options import (
    ASSET_TYPES,
    LIFECYCLE_HOOKS,
    ComponentDefinition,
    MergeKind,
    merge_options,
    resolve_asset,
    resolve_modified_options,
    resolve_options,
)
from treewire.core.types import Handler, Options

__all__ = [
    # Types
    "Handler",
    "Options",
    # Identity
    "InstanceId",
    # Options
    "ASSET_TYPES",
    "LIFECYCLE_HOOKS",
    "ComponentDefinition",
    "MergeKind",
    "merge_options",
    "resolve_asset",
    "resolve_modified_options",
    "resolve_options",
    # Events
    "Invoker",
    "NormalizedEvent",
    "OnceHandler",
    "create_invoker",
    "normalize_event",
    "update_listeners",
]
