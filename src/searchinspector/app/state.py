from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal

from searchinspector.config import InspectorConfig
from searchinspector.controller.inspector import InspectorController, InspectorGroup, SelectionHeader
from searchinspector.model.grouping import ComponentGroup
from searchinspector.model.host import HostGraph, PropertyNode
from searchinspector.model.property_filter import FilterResult

logger = logging.getLogger(__name__)


class InspectorStore(QObject):
    """Central inspector state with signals for panel sync. Polls the host on a QTimer."""
    groups_changed = Signal(object)
    search_changed = Signal(str)
    expanded_changed = Signal(object, bool)

    def __init__(self, host: HostGraph, config: InspectorConfig | None = None,
                 parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.config = config or InspectorConfig()
        self.controller = InspectorController(host, self.config)

        self._timer = QTimer(self)
        self._timer.setInterval(self.config.poll_interval_ms)
        self._timer.timeout.connect(self.tick)

    def start(self) -> None:
        logger.info(f"Polling selection every {self.config.poll_interval_ms} ms.")
        self.tick()
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def is_polling(self) -> bool:
        return self._timer.isActive()

    def tick(self) -> bool:
        changed = self.controller.tick()
        if changed:
            self.groups_changed.emit(self.controller.current_groups())
        return changed

    def on_selection_changed(self) -> None:
        self.controller.selection_changed()
        self.groups_changed.emit(self.controller.current_groups())

    def header(self) -> SelectionHeader:
        return self.controller.header()

    def current_groups(self) -> list[InspectorGroup]:
        return self.controller.current_groups()

    def search_text(self) -> str:
        return self.controller.search_text

    def is_searching(self) -> bool:
        return self.controller.is_searching

    def set_search_text(self, text: str) -> None:
        if text == self.controller.search_text:
            return
        self.controller.set_search_text(text)
        self.search_changed.emit(text)

    def filtered_view(self, group: ComponentGroup) -> FilterResult:
        return self.controller.filtered_view(group)

    def property_tree(self, group: ComponentGroup) -> Optional[PropertyNode]:
        return self.controller.property_tree(group)

    def set_expanded(self, group: ComponentGroup, expanded: bool) -> None:
        state = self.controller.cache.view_state(group)
        if state.expanded == expanded:
            return
        self.controller.set_expanded(group, expanded)
        self.expanded_changed.emit(group, expanded)

    def toggle_expanded(self, group: ComponentGroup) -> bool:
        expanded = self.controller.toggle_expanded(group)
        self.expanded_changed.emit(group, expanded)
        return expanded
