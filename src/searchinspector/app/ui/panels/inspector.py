from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QLabel, QLineEdit, QTreeWidget, QTreeWidgetItem, QHeaderView
)

from searchinspector.app.state import InspectorStore
from searchinspector.app.ui.panels.base import BasePanel
from searchinspector.config import SEARCH_PLACEHOLDER
from searchinspector.model.grouping import ComponentGroup
from searchinspector.model.host import EditorHandle, PropertyNode
from searchinspector.model.property_filter import FilterResult

GROUP_ROLE = Qt.ItemDataRole.UserRole


class InspectorPanel(BasePanel):
    """
    Reference render driver: a search field above one collapsible tree item per
    component group. While searching, each group shows its filtered view.
    """
    def __init__(self, store: InspectorStore, parent: QWidget | None = None) -> None:
        super().__init__(store, parent)
        self._groups: list[ComponentGroup] = []
        self._populating = False
        self._first_show = True

        root = QVBoxLayout(self)

        self.header_label = QLabel(self)
        root.addWidget(self.header_label)

        root.addWidget(QLabel(self.tr(SEARCH_PLACEHOLDER), self))
        self.search_edit = QLineEdit(self)
        self.search_edit.setPlaceholderText(self.tr(SEARCH_PLACEHOLDER))
        self.search_edit.setClearButtonEnabled(True)
        root.addWidget(self.search_edit)

        self.tree = QTreeWidget(self)
        self.tree.setColumnCount(2)
        self.tree.setHeaderLabels([self.tr("Property"), self.tr("Value")])
        self.tree.header().setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        root.addWidget(self.tree, 1)

        self.search_edit.textChanged.connect(self.store.set_search_text)
        self.tree.itemExpanded.connect(lambda item: self._on_fold(item, True))
        self.tree.itemCollapsed.connect(lambda item: self._on_fold(item, False))
        self.store.groups_changed.connect(self.refresh)
        self.store.search_changed.connect(self.refresh)

        self.refresh()

    def showEvent(self, event) -> None:
        super().showEvent(event)
        if self._first_show:
            self.search_edit.setFocus()
            self._first_show = False

    # ---- population ----

    def refresh(self, *_) -> None:
        self._populating = True
        try:
            self.tree.clear()
            self._groups = []
            self._update_header()

            for editor, state, group in self.store.current_groups():
                top = QTreeWidgetItem([f"{group.type_name} ({group.slot_index})", ""])
                top.setData(0, GROUP_ROLE, len(self._groups))
                self._groups.append(group)
                self.tree.addTopLevelItem(top)

                if state.advisory is not None:
                    QTreeWidgetItem(top, [state.advisory.message, ""])
                elif self.store.is_searching():
                    self._add_filtered(top, editor, self.store.filtered_view(group))
                else:
                    tree = self.store.property_tree(group)
                    if tree is not None:
                        self._add_subtree(top, editor, tree)

                top.setExpanded(state.expanded)
        finally:
            self._populating = False

    def _update_header(self) -> None:
        header = self.store.header()
        if header.primary_name is None:
            self.header_label.setText(self.tr("Nothing selected"))
        elif header.selection_size > 1:
            self.header_label.setText(
                self.tr("{name} (+{n} more)").format(name=header.primary_name, n=header.selection_size - 1)
            )
        else:
            self.header_label.setText(header.primary_name)

    def _make_item(self, parent: QTreeWidgetItem, editor: Optional[EditorHandle],
                   node: PropertyNode) -> QTreeWidgetItem:
        value = editor.display_value(node) if editor is not None else ""
        return QTreeWidgetItem(parent, [node.display_name, value])

    def _add_subtree(self, parent: QTreeWidgetItem, editor: Optional[EditorHandle],
                     node: PropertyNode) -> None:
        for child in node.visible_children():
            item = self._make_item(parent, editor, child)
            self._add_subtree(item, editor, child)

    def _add_filtered(self, top: QTreeWidgetItem, editor: Optional[EditorHandle],
                      result: FilterResult) -> None:
        # (depth, item) of the open ancestor chain
        stack: list[tuple[int, QTreeWidgetItem]] = []
        for entry in result:
            depth = entry.node.depth
            while stack and stack[-1][0] >= depth:
                stack.pop()
            parent = stack[-1][1] if stack else top
            item = self._make_item(parent, editor, entry.node)
            if entry.show_subtree_unfiltered:
                self._add_subtree(item, editor, entry.node)
            item.setExpanded(True)
            stack.append((depth, item))

    # ---- interaction ----

    def _on_fold(self, item: QTreeWidgetItem, expanded: bool) -> None:
        if self._populating or item.parent() is not None:
            return
        index = item.data(0, GROUP_ROLE)
        if index is None or index >= len(self._groups):
            return
        self.store.set_expanded(self._groups[index], expanded)

    def group_item(self, group: ComponentGroup) -> Optional[QTreeWidgetItem]:
        for i in range(self.tree.topLevelItemCount()):
            item = self.tree.topLevelItem(i)
            if self._groups[item.data(0, GROUP_ROLE)].key == group.key:
                return item
        return None
