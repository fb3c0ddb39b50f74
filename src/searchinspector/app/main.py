"""
Run with: python -m searchinspector
"""
from __future__ import annotations

import logging
import sys

from searchinspector.app.application import create_app
from searchinspector.app.demo_scene import build_demo_scene
from searchinspector.app.state import InspectorStore
from searchinspector.app.ui.main_window import MainWindow
from searchinspector.config import InspectorConfig
from searchinspector.logging_config import setup_logging


def main() -> int:
    """Main entry point for the application."""
    config = InspectorConfig()
    setup_logging(level=config.log_level)

    app = create_app()
    scene = build_demo_scene()
    store = InspectorStore(scene, config)

    win = MainWindow(scene, store)
    win.show()
    store.start()
    logging.getLogger(__name__).info("Inspector started.")
    return app.exec()

if __name__ == "__main__":
    sys.exit(main())
