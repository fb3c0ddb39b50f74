from __future__ import annotations

from PySide6.QtWidgets import QWidget

from searchinspector.app.state import InspectorStore


class BasePanel(QWidget):
    """Base class for inspector panels. Holds a reference to the inspector store."""
    def __init__(self, store: InspectorStore, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.store = store
