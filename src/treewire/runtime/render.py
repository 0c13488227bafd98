"""Default render scaffold: slots and render context.

Rendering itself is an external collaborator; this scaffold only exposes what
a render function reads.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from treewire.runtime.instance import ComponentInstance
    from treewire.runtime.models import VNode


def _is_whitespace(node: VNode) -> bool:
    return node.tag is None and not (node.text or "").strip()


def resolve_slots(
    children: list[VNode] | None, context: ComponentInstance | None
) -> dict[str, list[VNode]]:
    """Group a component's children into named slots.

    A child only lands in a named slot when it was rendered by the same
    context that renders the component; everything else goes to ``default``.
    Slots made solely of whitespace text are dropped.

    Args:
        children: Children passed by the parent.
        context: Instance that rendered the component's placeholder.

    Returns:
        Mapping of slot name to nodes.
    """
    slots: dict[str, list[VNode]] = {}
    for child in children or ():
        name = (child.data or {}).get("slot")
        if name is None or child.context is not context:
            name = "default"
        slots.setdefault(name, []).append(child)
    return {name: nodes for name, nodes in slots.items() if not all(map(_is_whitespace, nodes))}


class DefaultRenderScaffold:
    """RenderScaffold exposing slots, attrs and the parent's render context."""

    def init_render(self, instance: ComponentInstance) -> None:
        options = instance.options
        parent_vnode = options.get("parent_vnode")
        instance.vnode = None
        instance.static_trees = None
        instance.parent_vnode = parent_vnode
        instance.render_context = parent_vnode.context if parent_vnode is not None else None
        instance.slots = resolve_slots(options.get("render_children"), instance.render_context)
        instance.scoped_slots = {}
        data = (parent_vnode.data if parent_vnode is not None else None) or {}
        instance.attrs = dict(data.get("attrs") or {})
