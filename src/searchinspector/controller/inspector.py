"""
Inspector Controller
====================
Owns the watcher, grouper, editor cache and search state for one inspector
session, and exposes the API a render driver consumes.

Typical cycle (one host refresh):
    controller.tick()                       # rebuilds only on structural change
    for editor, state, group in controller.current_groups():
        if controller.is_searching:
            view = controller.filtered_view(group)
        ...

All work is synchronous. A rebuild constructs the new groups and cache mapping
completely before replacing the old ones.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, NamedTuple, Optional

from searchinspector.config import (
    InspectorConfig, MULTI_EDIT_UNSUPPORTED_MESSAGE, EDITOR_FAILED_MESSAGE
)
from searchinspector.controller.watcher import SelectionWatcher
from searchinspector.errors import (
    Advisory, AdvisoryLevel, StaleReferenceError, UnsupportedMultiEditError
)
from searchinspector.model.grouping import ComponentGroup, ComponentGrouper, unique_selection
from searchinspector.model.host import EditorHandle, HostGraph, PropertyNode, is_alive, raw_components
from searchinspector.model.property_filter import FilterResult, filter_property_tree, tokenize
from searchinspector.model.view_state import EditorCache, ViewState

logger = logging.getLogger(__name__)


class InspectorGroup(NamedTuple):
    editor: Optional[EditorHandle]
    view_state: ViewState
    group: ComponentGroup


@dataclass(frozen=True)
class SelectionHeader:
    """What the render driver shows above the groups."""
    primary_name: Optional[str] = None
    selection_size: int = 0
    has_components: bool = False


def _name_of(obj: Any) -> str:
    return getattr(obj, "name", None) or str(obj)


class InspectorController:
    def __init__(self, host: HostGraph, config: InspectorConfig | None = None) -> None:
        self.host = host
        self.config = config or InspectorConfig()
        self.watcher = SelectionWatcher(host)
        self.grouper = ComponentGrouper(host)
        self.cache = EditorCache(default_expanded=self.config.default_expanded)
        self._search_text = ""
        self._tokens: tuple[str, ...] = ()
        self._header = SelectionHeader()

    # ---- cycle ----

    def tick(self) -> bool:
        """
        Start a new cycle: drop last cycle's filtered views, then poll the
        watcher and rebuild if the structure changed.
        """
        # Property trees may change without a structural change
        self.cache.invalidate_filters()
        if self.watcher.poll():
            self.rebuild()
            return True
        return False

    def selection_changed(self) -> None:
        """Push notification from the host: rebuild now and resync the watcher."""
        self.cache.invalidate_filters()
        self.watcher.poll()
        self.rebuild()

    def rebuild(self) -> None:
        selection = unique_selection(self.host.current_selection())
        header = self._make_header(selection)
        result = self.grouper.build(selection)
        stats = self.cache.reconcile(result.groups, self._create_editor)
        self._header = header

        logger.info(
            f"Rebuilt inspector: {len(result.groups)} groups for {len(selection)} selected "
            f"({stats.kept} kept, {stats.created} new, {stats.dropped} dropped, "
            f"{len(result.dropped)} partial skipped)."
        )

    def _make_header(self, selection: list[Any]) -> SelectionHeader:
        if not selection:
            return SelectionHeader()
        primary = selection[0]
        components = raw_components(self.host, primary)
        return SelectionHeader(
            primary_name=_name_of(primary),
            selection_size=len(selection),
            has_components=components is not None,
        )

    def _create_editor(self, group: ComponentGroup) -> tuple[Optional[EditorHandle], Optional[Advisory]]:
        try:
            editor = self.host.create_combined_editor(list(group.members))
        except UnsupportedMultiEditError as e:
            logger.warning(f"{group!r}: {e}")
            return None, Advisory(AdvisoryLevel.INFO, MULTI_EDIT_UNSUPPORTED_MESSAGE)
        except Exception as e:
            logger.exception(f"Failed to create editor for {group!r}: {e}")
            return None, Advisory(AdvisoryLevel.WARNING, EDITOR_FAILED_MESSAGE)

        if len(group) > 1 and not getattr(editor, "supports_multi_edit", True):
            logger.warning(f"{group!r}: editor does not support multiple targets.")
            return editor, Advisory(AdvisoryLevel.INFO, MULTI_EDIT_UNSUPPORTED_MESSAGE)
        return editor, None

    # ---- render driver API ----

    def header(self) -> SelectionHeader:
        return self._header

    def groups(self) -> list[ComponentGroup]:
        return [entry.group for entry in self.cache]

    def current_groups(self) -> list[InspectorGroup]:
        """
        Live groups in display order. Groups with a member destroyed since the
        last rebuild are skipped here and removed by the next rebuild.
        """
        result = []
        for entry in self.cache:
            if not all(is_alive(self.host, m) for m in entry.group.members):
                logger.debug(f"Skipping {entry.group!r}: a member was destroyed.")
                continue
            result.append(InspectorGroup(entry.editor, entry.view_state, entry.group))
        return result

    def advisories(self) -> list[tuple[ComponentGroup, Advisory]]:
        return [
            (entry.group, entry.view_state.advisory)
            for entry in self.cache
            if entry.view_state.advisory is not None
        ]

    @property
    def search_text(self) -> str:
        return self._search_text

    @property
    def is_searching(self) -> bool:
        return bool(self._tokens)

    def set_search_text(self, text: str) -> None:
        text = text or ""
        if text == self._search_text:
            return
        self._search_text = text
        self._tokens = tokenize(text)
        self.cache.invalidate_filters()
        logger.info(f"Search text set to '{text}' (tokens: {list(self._tokens)}).")

    def filtered_view(self, group: ComponentGroup) -> FilterResult:
        """
        Pruned property tree of `group` for the current search text. Computed
        once per cycle; `tick()` and a new search text discard it.
        """
        if not self.is_searching:
            raise ValueError("filtered_view() is only valid while search text is non-empty.")

        state = self.cache.view_state(group)
        cached = state.cached_filter(self._search_text)
        if cached is not None:
            return cached

        root = self.property_tree(group)
        if root is None:
            return FilterResult(query=self._search_text)

        result = filter_property_tree(root, self._search_text)
        state.filtered = result
        return result

    def property_tree(self, group: ComponentGroup) -> Optional[PropertyNode]:
        """Property tree of the group's primary member, or None if it was destroyed."""
        try:
            return self.host.property_tree_of(group.primary)
        except StaleReferenceError as e:
            logger.warning(f"{group!r}: {e}")
            return None

    def set_expanded(self, group: ComponentGroup, expanded: bool) -> None:
        self.cache.view_state(group).expanded = bool(expanded)

    def toggle_expanded(self, group: ComponentGroup) -> bool:
        state = self.cache.view_state(group)
        state.expanded = not state.expanded
        return state.expanded
