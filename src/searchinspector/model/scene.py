"""
In-Memory Scene (Host Object Graph)
===================================
A small, self-contained host graph implementing `HostGraph`.

Why is this file needed?
------------------------
1. Demo: The PySide6 shell needs something to inspect without a real engine.
2. Tests: Scenarios can be built in a few lines and mutated between ticks.

Classes:
    PropertyNode: Editable property tree node (composite or leaf).
    Component: Base class for component types; subclass per type.
    Entity: Named node owning an ordered list of components.
    CombinedEditor: Multi-target edit session over same-type components.
    Scene: The host itself (entities, selection, destruction).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterator, Optional

from searchinspector.errors import StaleReferenceError, UnsupportedMultiEditError

logger = logging.getLogger(__name__)

MIXED_VALUE = "-"


@dataclass(eq=False)
class PropertyNode:
    """
    Property tree node. Depths are assigned top-down whenever a parent is
    constructed, so trees can be written bottom-up as nested constructors.
    """
    display_name: str
    children: list[PropertyNode] = field(default_factory=list)
    value: Any = None
    has_custom_drawer: bool = False
    hidden: bool = False
    depth: int = 0

    def __post_init__(self) -> None:
        self._assign_depth(self.depth)

    def _assign_depth(self, depth: int) -> None:
        self.depth = depth
        for child in self.children:
            child._assign_depth(depth + 1)

    @property
    def is_composite(self) -> bool:
        return bool(self.children)

    def visible_children(self) -> list[PropertyNode]:
        return [c for c in self.children if not c.hidden]

    def walk(self) -> Iterator[PropertyNode]:
        """Depth-first over this node's descendants (self excluded)."""
        for child in self.children:
            yield child
            yield from child.walk()

    def find(self, path: str) -> Optional[PropertyNode]:
        """Resolve a dotted path of display names below this node."""
        node: Optional[PropertyNode] = self
        for part in path.split("."):
            node = next((c for c in node.children if c.display_name == part), None)
            if node is None:
                return None
        return node

    def path_to(self, target: PropertyNode) -> Optional[str]:
        for child in self.children:
            if child is target:
                return child.display_name
            sub = child.path_to(target)
            if sub is not None:
                return f"{child.display_name}.{sub}"
        return None


def prop(name: str, *children: PropertyNode, value: Any = None,
         custom_drawer: bool = False, hidden: bool = False) -> PropertyNode:
    """Shorthand for building property trees."""
    return PropertyNode(
        display_name=name,
        children=list(children),
        value=value,
        has_custom_drawer=custom_drawer,
        hidden=hidden,
    )


class Component:
    """
    Base class for scene components. Each subclass is one exact component type.

    Subclasses override `build_properties()`; instances get their own copy of
    the tree so edits stay per-component.
    """
    multi_editable: ClassVar[bool] = True

    def __init__(self, label: str | None = None) -> None:
        self.label = label or type(self).__name__
        self.entity: Optional[Entity] = None
        self.destroyed = False
        self.properties = prop(self.label, *self.build_properties())

    def build_properties(self) -> list[PropertyNode]:
        return []

    def __repr__(self) -> str:
        owner = self.entity.name if self.entity else "?"
        return f"<{type(self).__name__} '{self.label}' on {owner}>"


class Entity:
    def __init__(self, name: str, components: list[Component] | None = None) -> None:
        self.name = name
        self.destroyed = False
        self.components: list[Component] = []
        for c in components or []:
            self.add(c)

    def add(self, component: Component, index: int | None = None) -> Component:
        component.entity = self
        if index is None:
            self.components.append(component)
        else:
            self.components.insert(index, component)
        return component

    def __repr__(self) -> str:
        return f"<Entity '{self.name}'>"


class CombinedEditor:
    """Edits the same property path on every target at once."""

    def __init__(self, targets: list[Component]) -> None:
        self.targets = list(targets)
        self.supports_multi_edit = type(self.targets[0]).multi_editable

    def _values(self, path: str) -> list[Any]:
        values = []
        for target in self.targets:
            node = target.properties.find(path)
            if node is not None:
                values.append(node.value)
        return values

    def value(self, path: str) -> Any:
        """Shared value at `path`, or MIXED_VALUE when targets disagree."""
        values = self._values(path)
        if not values:
            raise KeyError(path)
        first = values[0]
        return first if all(v == first for v in values[1:]) else MIXED_VALUE

    def set_value(self, path: str, value: Any) -> None:
        if len(self.targets) > 1 and not self.supports_multi_edit:
            raise UnsupportedMultiEditError(type(self.targets[0]).__name__, len(self.targets))
        for target in self.targets:
            node = target.properties.find(path)
            if node is None:
                raise KeyError(path)
            node.value = value

    def display_value(self, node: PropertyNode) -> str:
        if node.is_composite:
            return ""
        path = self.targets[0].properties.path_to(node)
        if path is None:
            return ""
        value = self.value(path)
        return "" if value is None else str(value)


class Scene:
    """
    Host graph over plain Python objects.

    Destruction mirrors an engine's deferred destroy: `destroy(obj)` marks the
    object dead but leaves it listed until `flush()`, unless `immediate=True`.
    """

    def __init__(self, entities: list[Entity] | None = None) -> None:
        self.entities: list[Entity] = list(entities or [])
        self._selection: list[Any] = []

    def select(self, *objects: Any) -> None:
        """Replace the selection; the first object is the primary."""
        self._selection = list(objects)
        logger.debug(f"Selection set to {self._selection}")

    def destroy(self, obj: Entity | Component, immediate: bool = False) -> None:
        obj.destroyed = True
        if immediate:
            self._remove(obj)

    def flush(self) -> None:
        """Drop every object destroyed since the last flush."""
        for obj in [e for e in self.entities if e.destroyed]:
            self._remove(obj)
        for entity in self.entities:
            entity.components = [c for c in entity.components if not c.destroyed]
        self._selection = [o for o in self._selection if not getattr(o, "destroyed", False)]

    def _remove(self, obj: Entity | Component) -> None:
        if isinstance(obj, Entity):
            if obj in self.entities:
                self.entities.remove(obj)
            self._selection = [o for o in self._selection if o is not obj]
        elif obj.entity is not None and obj in obj.entity.components:
            obj.entity.components.remove(obj)

    # ---- HostGraph ----

    def current_selection(self) -> list[Any]:
        return list(self._selection)

    def components_of(self, entity: Any) -> Optional[list[Component]]:
        if not isinstance(entity, Entity):
            return None
        if entity.destroyed:
            raise StaleReferenceError(entity)
        return list(entity.components)

    def property_tree_of(self, component: Component) -> PropertyNode:
        if component.destroyed:
            raise StaleReferenceError(component)
        return component.properties

    def create_combined_editor(self, components: list[Component]) -> CombinedEditor:
        dead = [c for c in components if c.destroyed]
        if dead:
            raise StaleReferenceError(dead[0])
        return CombinedEditor(components)

    def is_alive(self, obj: Any) -> bool:
        return not getattr(obj, "destroyed", False)

