"""
Component Grouping
==================
Decides which components on different selected entities are "the same thing"
and can be multi-edited together.

A component's slot index is its 0-based rank among components of the exact same
runtime type on its own entity. For every component on the primary entity, the
component at the same (type, slot) is taken from each other selected entity.
Only groups with one member per selected entity are kept; partial groups are
dropped silently.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from searchinspector.model.host import HostGraph, is_alive, live_components, raw_components

logger = logging.getLogger(__name__)

GroupKey = frozenset[int]


@dataclass(frozen=True, eq=False)
class ComponentGroup:
    """Same-type, same-slot components, primary entity's member first."""
    component_type: type
    slot_index: int
    members: tuple[Any, ...]

    @property
    def key(self) -> GroupKey:
        """Identity of the group: the exact set of member objects."""
        return frozenset(id(m) for m in self.members)

    @property
    def primary(self) -> Any:
        return self.members[0]

    @property
    def type_name(self) -> str:
        return self.component_type.__name__

    def __len__(self) -> int:
        return len(self.members)

    def __repr__(self) -> str:
        return f"<ComponentGroup {self.type_name}[{self.slot_index}] x{len(self.members)}>"


@dataclass
class GroupingResult:
    groups: list[ComponentGroup] = field(default_factory=list)
    dropped: list[ComponentGroup] = field(default_factory=list)
    selection_size: int = 0


def slot_index_of(component: Any, components: Sequence[Any]) -> int:
    """Rank of `component` among the exact-type components in `components`."""
    rank = 0
    for c in components:
        if type(c) is not type(component):
            continue
        if c is component:
            return rank
        rank += 1
    raise ValueError(f"{component!r} is not in the given component list")


def components_at_slot(components: Sequence[Any], component_type: type, slot: int) -> Optional[Any]:
    """The `slot`-th component whose exact type is `component_type`, if any."""
    rank = 0
    for c in components:
        if type(c) is not component_type:
            continue
        if rank == slot:
            return c
        rank += 1
    return None


def _by_type(components: Sequence[Any]) -> dict[type, list[Any]]:
    runs: dict[type, list[Any]] = {}
    for c in components:
        runs.setdefault(type(c), []).append(c)
    return runs


def unique_selection(selection: Sequence[Any]) -> list[Any]:
    """Selection with repeated references removed, order kept."""
    seen: set[int] = set()
    result = []
    for obj in selection:
        if id(obj) in seen:
            continue
        seen.add(id(obj))
        result.append(obj)
    return result


class ComponentGrouper:
    def __init__(self, host: HostGraph) -> None:
        self.host = host

    def entities_of(self, selection: Sequence[Any]) -> list[Any]:
        """
        Primary entry plus every later entry the host reports as an entity.

        Selected assets and other non-entities are not part of the multi-edit
        set, so they neither count toward the group size nor drop groups.
        A stale or `None` entry still counts: it was an entity, just no longer alive.
        """
        selection = unique_selection(selection)
        if not selection:
            return []
        rest = [
            obj for obj in selection[1:]
            if not is_alive(self.host, obj) or raw_components(self.host, obj) is not None
        ]
        return [selection[0], *rest]

    def build(self, selection: Sequence[Any]) -> GroupingResult:
        """
        Compute the multi-edit groups for `selection` (primary entity first).

        Emitted order follows the primary entity's own component order.
        """
        selection = self.entities_of(selection)
        result = GroupingResult(selection_size=len(selection))
        if not selection:
            return result

        primary_components = live_components(self.host, selection[0])
        if not primary_components:
            return result

        # Per-type runs for every other entity, computed once: O(N*M) overall
        others: list[dict[type, list[Any]]] = []
        for entity in selection[1:]:
            components = live_components(self.host, entity) or []
            others.append(_by_type(components))

        primary_runs: dict[type, int] = {}
        for component in primary_components:
            component_type = type(component)
            slot = primary_runs.get(component_type, 0)
            primary_runs[component_type] = slot + 1

            members = [component]
            for runs in others:
                run = runs.get(component_type, [])
                if slot < len(run):
                    members.append(run[slot])

            group = ComponentGroup(component_type, slot, tuple(members))
            if len(members) == len(selection):
                result.groups.append(group)
            else:
                result.dropped.append(group)

        logger.debug(
            f"Grouped {len(primary_components)} primary components over {len(selection)} "
            f"entities: {len(result.groups)} complete, {len(result.dropped)} partial."
        )
        return result
