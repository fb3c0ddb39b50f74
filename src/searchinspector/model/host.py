"""
Host Object Graph Interface
===========================
The inspector never owns entities or components. Everything it reads comes from
a host through the protocols below, fresh on every cycle.

Hosts report destroyed objects in any of three ways, all handled identically:
    - returning ``None`` in place of a component,
    - answering ``False`` from the optional ``is_alive(obj)`` method,
    - raising ``StaleReferenceError``.
"""
from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, Sequence

from searchinspector.errors import StaleReferenceError

logger = logging.getLogger(__name__)


class PropertyNode(Protocol):
    """A node of a component's editable property tree."""
    display_name: str
    depth: int
    is_composite: bool
    has_custom_drawer: bool

    def visible_children(self) -> Sequence[PropertyNode]: ...


class EditorHandle(Protocol):
    """Opaque multi-target edit session created by the host."""
    targets: Sequence[Any]
    supports_multi_edit: bool

    def display_value(self, node: PropertyNode) -> str: ...


class HostGraph(Protocol):
    def current_selection(self) -> Sequence[Any]: ...

    def components_of(self, entity: Any) -> Optional[Sequence[Any]]:
        """Ordered components of `entity`, or None if it is not an entity."""
        ...

    def property_tree_of(self, component: Any) -> PropertyNode: ...

    def create_combined_editor(self, components: list[Any]) -> EditorHandle: ...


def is_alive(host: HostGraph, obj: Any) -> bool:
    """True unless the host reports `obj` as destroyed."""
    if obj is None:
        return False
    check = getattr(host, "is_alive", None)
    if check is None:
        return True
    try:
        return bool(check(obj))
    except StaleReferenceError:
        return False


def raw_components(host: HostGraph, entity: Any) -> Optional[list[Any]]:
    """
    Components of `entity` exactly as the host lists them (dead entries included).
    A stale entity yields an empty list.
    """
    try:
        components = host.components_of(entity)
    except StaleReferenceError as e:
        logger.warning(f"Skipping stale entity: {e}")
        return []
    if components is None:
        return None
    return list(components)


def live_components(host: HostGraph, entity: Any) -> Optional[list[Any]]:
    """Components of `entity` with destroyed entries removed."""
    components = raw_components(host, entity)
    if components is None:
        return None
    return [c for c in components if is_alive(host, c)]
