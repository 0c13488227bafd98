"""treewire: instantiation and wiring engine for component-tree runtimes.

Usage:
    from treewire import Runtime

    runtime = Runtime()
    runtime.mixin({"created": lambda vm: print("created", vm)})

    Parent = runtime.extend({"name": "parent", "provide": {"theme": "dark"}})
    Child = Parent.extend({"name": "child", "inject": ["theme"]})

    app = runtime.create(definition=Parent)
    child = runtime.create({"parent": app}, definition=Child)
    assert child["theme"] == "dark"

    child.on("save", lambda payload: print("saved", payload))
    child.emit("save", {"id": 1})
    runtime.destroy(app)
"""

__version__ = "0.1.0"

# Configuration
from treewire.config import RuntimeSettings

# Core primitives
from treewire.core import (
    ComponentDefinition,
    InstanceId,
    Invoker,
    MergeKind,
    NormalizedEvent,
    OnceHandler,
    create_invoker,
    merge_options,
    normalize_event,
    resolve_asset,
    resolve_modified_options,
    resolve_options,
    update_listeners,
)

# Diagnostics
from treewire.diagnostics import (
    Diagnostic,
    DiagnosticLevel,
    Diagnostics,
    DiagnosticsSink,
    InvocationResult,
    LoggingSink,
    MemorySink,
    NullSink,
    WarningsSink,
)

# Errors
from treewire.errors import InstantiationError, OptionsError, TreewireError

# Runtime
from treewire.runtime import (
    ComponentInstance,
    ComponentTree,
    InternalComponentOptions,
    Runtime,
    VNode,
    VNodeComponentOptions,
    call_hook,
    destroy,
    resolve_inject,
    update_child_listeners,
)

__all__ = [
    # Version
    "__version__",
    # Config
    "RuntimeSettings",
    # Core
    "ComponentDefinition",
    "InstanceId",
    "MergeKind",
    "merge_options",
    "resolve_asset",
    "resolve_modified_options",
    "resolve_options",
    "Invoker",
    "NormalizedEvent",
    "OnceHandler",
    "create_invoker",
    "normalize_event",
    "update_listeners",
    # Diagnostics
    "Diagnostic",
    "DiagnosticLevel",
    "Diagnostics",
    "DiagnosticsSink",
    "InvocationResult",
    "LoggingSink",
    "MemorySink",
    "NullSink",
    "WarningsSink",
    # Errors
    "TreewireError",
    "OptionsError",
    "InstantiationError",
    # Runtime
    "Runtime",
    "ComponentInstance",
    "ComponentTree",
    "InternalComponentOptions",
    "VNode",
    "VNodeComponentOptions",
    "call_hook",
    "destroy",
    "resolve_inject",
    "update_child_listeners",
]
