"""
Selection Watcher
=================
Polling-based detection of structural changes in the selection.

The snapshot is the flattened sequence of (entity, component) references over
every selected entity. Two snapshots are equal only if they have the same length
and hold the same objects (by identity) at every position, so edits to a
component's properties never count as a change, while adding, removing or
reordering components, or changing the selection, always does.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from searchinspector.model.host import HostGraph, raw_components

logger = logging.getLogger(__name__)

Snapshot = tuple[tuple[Any, Any], ...]


def same_identities(a: Snapshot, b: Snapshot) -> bool:
    if len(a) != len(b):
        return False
    return all(x[0] is y[0] and x[1] is y[1] for x, y in zip(a, b))


class SelectionWatcher:
    def __init__(self, host: HostGraph) -> None:
        self.host = host
        self._snapshot: Optional[Snapshot] = None

    def take_snapshot(self) -> Snapshot:
        pairs: list[tuple[Any, Any]] = []
        for entity in self.host.current_selection():
            components = raw_components(self.host, entity)
            if not components:
                # Keeps swaps between component-less selections visible
                pairs.append((entity, None))
                continue
            pairs.extend((entity, c) for c in components)
        return tuple(pairs)

    def poll(self) -> bool:
        """True if the structure changed since the previous poll. Always re-snapshots."""
        current = self.take_snapshot()
        changed = self._snapshot is None or not same_identities(self._snapshot, current)
        if changed:
            logger.debug(f"Selection structure changed ({len(current)} entries).")
        self._snapshot = current
        return changed

    def reset(self) -> None:
        """Forget the snapshot; the next poll reports a change."""
        self._snapshot = None
