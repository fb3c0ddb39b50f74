"""
Editor Cache (View State)
=========================
Keeps per-group UI state alive across group rebuilds.

Why is this file needed?
------------------------
Groups are recomputed from scratch whenever the selection changes structurally.
Without reconciliation every rebuild would reset fold flags. Entries are keyed
by group identity (the exact member set): a surviving identity keeps its
ViewState and editor; new identities get defaults; vanished ones are dropped.

The new mapping is built completely and then swapped in, so readers never see
a half-reconciled cache.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

from searchinspector.config import DEFAULT_EXPANDED
from searchinspector.errors import Advisory
from searchinspector.model.grouping import ComponentGroup, GroupKey
from searchinspector.model.host import EditorHandle
from searchinspector.model.property_filter import FilterResult

logger = logging.getLogger(__name__)

EditorFactory = Callable[[ComponentGroup], tuple[Optional[EditorHandle], Optional[Advisory]]]


@dataclass
class ViewState:
    expanded: bool = DEFAULT_EXPANDED
    advisory: Optional[Advisory] = None
    filtered: Optional[FilterResult] = None

    def cached_filter(self, query: str) -> Optional[FilterResult]:
        if self.filtered is not None and self.filtered.query == query:
            return self.filtered
        return None

    def clear_filter(self) -> None:
        self.filtered = None


@dataclass
class CacheEntry:
    group: ComponentGroup
    editor: Optional[EditorHandle]
    view_state: ViewState = field(default_factory=ViewState)


@dataclass
class ReconcileStats:
    kept: int = 0
    created: int = 0
    dropped: int = 0


class EditorCache:
    def __init__(self, default_expanded: bool = DEFAULT_EXPANDED) -> None:
        self.default_expanded = default_expanded
        self._entries: dict[GroupKey, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, group: ComponentGroup) -> bool:
        return group.key in self._entries

    def __iter__(self) -> Iterator[CacheEntry]:
        return iter(list(self._entries.values()))

    def entry(self, group: ComponentGroup) -> CacheEntry:
        try:
            return self._entries[group.key]
        except KeyError:
            raise KeyError(f"{group!r} is not a live group") from None

    def view_state(self, group: ComponentGroup) -> ViewState:
        return self.entry(group).view_state

    def reconcile(self, groups: list[ComponentGroup], make_editor: EditorFactory) -> ReconcileStats:
        """Replace the cache with entries for `groups`, carrying over surviving state."""
        stats = ReconcileStats()
        entries: dict[GroupKey, CacheEntry] = {}
        for group in groups:
            key = group.key
            previous = self._entries.get(key)
            if previous is not None:
                entries[key] = CacheEntry(group, previous.editor, previous.view_state)
                stats.kept += 1
                continue

            editor, advisory = make_editor(group)
            entries[key] = CacheEntry(
                group,
                editor,
                ViewState(expanded=self.default_expanded, advisory=advisory),
            )
            stats.created += 1
            logger.debug(f"New view state for {group!r}")

        stats.dropped = sum(1 for key in self._entries if key not in entries)
        self._entries = entries
        return stats

    def invalidate_filters(self) -> None:
        for entry in self._entries.values():
            entry.view_state.clear_filter()
