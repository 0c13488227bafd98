"""Runtime models: virtual-node placeholders and internal creation options.

The renderer is an external collaborator; these carry only what instance
creation reads from it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from treewire.core.options import ComponentDefinition
    from treewire.runtime.instance import ComponentInstance


@dataclass(slots=True)
class VNodeComponentOptions:
    """What a parent passes to a child component through its placeholder node."""

    definition: ComponentDefinition
    props_data: dict[str, Any] | None = None
    listeners: dict[str, Any] | None = None
    children: list[VNode] | None = None
    tag: str | None = None


@dataclass(slots=True)
class VNode:
    """Minimal virtual node.

    Attributes:
        tag: Element or component tag.
        data: Node data (``slot``, ``attrs``, ...).
        children: Child nodes.
        text: Text content for text nodes.
        context: Instance whose render produced this node.
        component_options: Set on component placeholder nodes.
    """

    tag: str | None = None
    data: dict[str, Any] | None = None
    children: list[VNode] | None = None
    text: str | None = None
    context: ComponentInstance | None = None
    component_options: VNodeComponentOptions | None = None


@dataclass(slots=True)
class InternalComponentOptions:
    """Creation options for a child created by the renderer (fast path)."""

    parent: ComponentInstance
    parent_vnode: VNode
    render: Any = None
    static_render_fns: list[Any] = field(default_factory=list)
