"""Allow running Overtimer as a module: python -m overtimer."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .config import configure_logging
from .database.db import close_db, init_db
from .app import OvertimerApp

logger = logging.getLogger(__name__)


def main() -> None:
    configure_logging()
    init_db()

    app = QApplication(sys.argv)
    app.setApplicationName("Overtimer")
    app.setOrganizationName("Overtimer")

    window = OvertimerApp()
    app.aboutToQuit.connect(window.shutdown)
    app.aboutToQuit.connect(close_db)
    window.show()
    logger.info("Overtimer ready")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
