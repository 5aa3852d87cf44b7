"""About dialog."""
from PySide6.QtWidgets import QDialog, QDialogButtonBox, QFormLayout, QLabel, QVBoxLayout
from PySide6.QtCore import Qt

from spacetimediagram.config import APP_NAME
from spacetimediagram.model.io import APP_VERSION

SOURCE_URL = "https://github.com/JEElsner/Spacetime_Diagram"
LICENSE_URL = "https://www.gnu.org/licenses/gpl-3.0.html"


class AboutDialog(QDialog):
    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("About")
        self.setModal(True)
        self.resize(320, 200)

        layout = QVBoxLayout(self)

        title = QLabel(f"<h3>{APP_NAME}</h3>")
        title.setAlignment(Qt.AlignCenter)
        layout.addWidget(title)

        form = QFormLayout()
        form.addRow("Version:", QLabel(APP_VERSION))
        form.addRow("Source Code:", self._link("GitHub", SOURCE_URL))
        form.addRow("License:", self._link("GPL-3.0", LICENSE_URL))
        layout.addLayout(form)

        buttons = QDialogButtonBox(QDialogButtonBox.Close)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    @staticmethod
    def _link(text: str, url: str) -> QLabel:
        label = QLabel(f'<a href="{url}">{text}</a>')
        label.setOpenExternalLinks(True)
        return label
