"""
Main Application Window
=======================
Hierarchy list on the left (multi-select), inspector panel on the right.

The list plays the host's selection UI: every change of list selection is
pushed to the scene and then to the store as a selection-changed notification.
Structural changes made elsewhere are still caught by the store's polling.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QMainWindow, QSplitter, QListWidget, QListWidgetItem, QAbstractItemView
)

from searchinspector.app.state import InspectorStore
from searchinspector.app.ui.panels.inspector import InspectorPanel
from searchinspector.config import VISIBLE_APP_NAME
from searchinspector.model.scene import Scene

logger = logging.getLogger(__name__)

ENTITY_ROLE = Qt.ItemDataRole.UserRole


class MainWindow(QMainWindow):
    def __init__(self, scene: Scene, store: InspectorStore) -> None:
        super().__init__()
        self.scene = scene
        self.store = store
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(900, 700)

        split = QSplitter(Qt.Orientation.Horizontal, self)
        split.setChildrenCollapsible(False)

        self.hierarchy = QListWidget(split)
        self.hierarchy.setSelectionMode(QAbstractItemView.SelectionMode.ExtendedSelection)
        self.inspector = InspectorPanel(store, split)

        split.addWidget(self.hierarchy)
        split.addWidget(self.inspector)
        split.setStretchFactor(0, 0)
        split.setStretchFactor(1, 1)
        self.setCentralWidget(split)

        self._fill_hierarchy()
        self.hierarchy.itemSelectionChanged.connect(self._on_hierarchy_selection)

    def _fill_hierarchy(self) -> None:
        self.hierarchy.blockSignals(True)
        try:
            self.hierarchy.clear()
            selected = self.scene.current_selection()
            for index, entity in enumerate(self.scene.entities):
                item = QListWidgetItem(entity.name)
                item.setData(ENTITY_ROLE, index)
                self.hierarchy.addItem(item)
                item.setSelected(any(entity is s for s in selected))
        finally:
            self.hierarchy.blockSignals(False)

    def _on_hierarchy_selection(self) -> None:
        rows = sorted(self.hierarchy.row(item) for item in self.hierarchy.selectedItems())
        current = self.hierarchy.currentRow()
        # The item the user clicked last is the primary entity
        if current in rows:
            rows.remove(current)
            rows.insert(0, current)
        entities = [self.scene.entities[self.hierarchy.item(r).data(ENTITY_ROLE)] for r in rows]
        self.scene.select(*entities)
        logger.debug(f"Hierarchy selection: {[e.name for e in entities]}")
        self.store.on_selection_changed()
