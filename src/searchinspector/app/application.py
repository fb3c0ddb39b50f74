from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QCoreApplication

import sys
import os

from searchinspector.config import ORG_ID, APP_ID, VISIBLE_APP_NAME


def create_app() -> QApplication:
    """Create and configure the QApplication instance."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setApplicationName(APP_ID)

    app = QApplication.instance() or QApplication(sys.argv)

    visible_name = QCoreApplication.translate("App", VISIBLE_APP_NAME)
    app.setApplicationDisplayName(visible_name)

    return app
