"""
Application Initialization
==========================
This module constructs the MVC (Model-View-Controller) architecture and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Instantiates the Global Data Model (DiagramState).
2. Instantiates the Main Window (View).
3. Passes the Model into the View so they can communicate.
4. Prevents circular import errors by being the orchestrator.
"""
import logging
import sys

from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QApplication

from spacetimediagram.config import APP_NAME, LOGO_PATH
from spacetimediagram.logging_config import setup_logging
from spacetimediagram.model.state import DiagramState
from spacetimediagram.view.main_window import MainWindow


def main() -> None:
    # 1. Setup Logging (Console + Optional File)
    # Use logging.DEBUG to see every edit during development
    setup_logging(level=logging.INFO)

    # 2. Create the Qt Application
    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setWindowIcon(QIcon(LOGO_PATH))

    # 3. Initialize the Data Model
    diagram = DiagramState()

    # 4. Initialize the Main Window, passing the model
    window = MainWindow(diagram)
    window.show()

    # 5. Start Event Loop
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
