"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, the side panels and the
Diagram.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects global actions (like File -> Save) and panel signals
   to the model and the diagram.
"""
import logging
import os

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QSplitter, QFileDialog, QMessageBox, QGroupBox
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QActionGroup

from spacetimediagram.config import APP_NAME, FILE_EXTENSION
from spacetimediagram.model.entities import SpacetimeEntity
from spacetimediagram.model.io import IOManager
from spacetimediagram.model.relativity import SpeedOfLight
from spacetimediagram.model.state import DiagramState
from spacetimediagram.view.dialogs.about_dialog import AboutDialog
from spacetimediagram.view.panels.frame_panel import ReferenceFramePanel
from spacetimediagram.view.panels.object_details_panel import ObjectDetailsPanel
from spacetimediagram.view.panels.object_list_panel import ObjectListPanel
from spacetimediagram.view.widgets.diagram_plot import DiagramPlotWidget

logger = logging.getLogger(__name__)

FILE_FILTER = f"Spacetime Diagram Files (*{FILE_EXTENSION})"
IMAGE_FILTER = "PNG Image (*.png);;JPEG Image (*.jpg *.jpeg);;SVG Image (*.svg)"

# Menu order of the speed of light options
SPEED_OF_LIGHT_OPTIONS = (SpeedOfLight.EXACT, SpeedOfLight.APPROXIMATE, SpeedOfLight.NORMALIZED)


class MainWindow(QMainWindow):
    def __init__(self, diagram: DiagramState) -> None:
        super().__init__()
        self.diagram: DiagramState = diagram
        self.is_modified: bool = False

        self.update_window_title()
        self.resize(1200, 700)

        # --- SPLITTER (CONTENT AREA) ---
        splitter = QSplitter(Qt.Horizontal)
        self.setCentralWidget(splitter)

        # --- LEFT SIDE: Control Panels ---
        sidebar = QWidget()
        side_layout = QVBoxLayout(sidebar)

        self.frame_panel = ReferenceFramePanel(self.diagram)
        self.list_panel = ObjectListPanel(self.diagram)
        self.details_panel = ObjectDetailsPanel(self.diagram)

        side_layout.addWidget(self.frame_panel)
        side_layout.addWidget(self.list_panel, 1)
        side_layout.addWidget(self.details_panel)
        splitter.addWidget(sidebar)

        # --- RIGHT SIDE: Diagram ---
        graph_box = QGroupBox("Diagram")
        graph_layout = QVBoxLayout(graph_box)
        self.plot = DiagramPlotWidget(self.diagram)
        graph_layout.addWidget(self.plot)
        splitter.addWidget(graph_box)

        # Set initial proportions (1 part sidebar : 3 parts diagram)
        splitter.setSizes([300, 900])

        # --- SIGNAL CONNECTIONS ---
        # 1. Observer frame changed -> every observed value changes
        self.frame_panel.beta_changed.connect(self.on_frame_changed)

        # 2. Selection -> details panel
        self.list_panel.selection_changed.connect(self.details_panel.set_current)

        # 3. Objects added/removed or edited -> redraw + set modified
        self.list_panel.objects_changed.connect(self.on_data_changed)
        self.details_panel.object_edited.connect(self.on_object_edited)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()

    def _create_actions(self) -> None:
        # File Actions
        self.act_new = QAction("New Diagram", self)
        self.act_new.setShortcut("Ctrl+N")
        self.act_new.triggered.connect(self.on_file_new)

        self.act_open = QAction("Open...", self)
        self.act_open.setShortcut("Ctrl+O")
        self.act_open.triggered.connect(self.on_file_open)

        self.act_save = QAction("Save", self)
        self.act_save.setShortcut("Ctrl+S")
        self.act_save.triggered.connect(self.on_file_save)

        self.act_save_as = QAction("Save As...", self)
        self.act_save_as.setShortcut("Ctrl+Shift+S")
        self.act_save_as.triggered.connect(self.on_file_save_as)

        self.act_export_image = QAction("Export Diagram as Image...", self)
        self.act_export_image.setShortcut("Ctrl+E")
        self.act_export_image.triggered.connect(self.on_export_image)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

        # Options
        self.c_group = QActionGroup(self)
        self.c_group.setExclusive(True)
        self.c_actions: dict[SpeedOfLight, QAction] = {}
        for choice in SPEED_OF_LIGHT_OPTIONS:
            act = QAction(choice.label, self, checkable=True)
            act.setChecked(choice is self.diagram.speed_of_light)
            act.triggered.connect(lambda _checked=False, c=choice: self.on_speed_of_light_selected(c))
            self.c_group.addAction(act)
            self.c_actions[choice] = act

        self.act_light_cone = QAction("Draw light cone from origin", self, checkable=True)
        self.act_light_cone.setChecked(self.diagram.draw_light_cone)
        self.act_light_cone.toggled.connect(self.on_light_cone_toggled)

        self.act_labels = QAction("Label elements on diagram", self, checkable=True)
        self.act_labels.setChecked(self.diagram.draw_labels)
        self.act_labels.toggled.connect(self.on_labels_toggled)

        self.act_about = QAction("About...", self)
        self.act_about.triggered.connect(self.on_about)

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_new)
        file_menu.addSeparator()
        file_menu.addAction(self.act_open)
        file_menu.addSeparator()
        file_menu.addAction(self.act_save)
        file_menu.addAction(self.act_save_as)
        file_menu.addSeparator()
        file_menu.addAction(self.act_export_image)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        options_menu = menu_bar.addMenu("&Options")
        for act in self.c_actions.values():
            options_menu.addAction(act)
        options_menu.addSeparator()
        options_menu.addAction(self.act_light_cone)
        options_menu.addAction(self.act_labels)
        options_menu.addSeparator()
        options_menu.addAction(self.act_about)

    # --- HELPER METHODS ---
    def update_window_title(self) -> None:
        """Updates the window title based on filename and dirty state."""
        filename = self.diagram.filepath if self.diagram.filepath else "Untitled"
        title = f"{APP_NAME} - [{os.path.basename(filename)}"
        if self.is_modified:
            title += "*"
        title += "]"
        self.setWindowTitle(title)

    def set_modified(self, modified: bool) -> None:
        """Sets the dirty flag and updates title if changed."""
        if self.is_modified != modified:
            self.is_modified = modified
            self.update_window_title()

    # --- MODEL SLOTS ---

    def on_frame_changed(self, _beta: float) -> None:
        self.details_panel.refresh()
        self.plot.redraw()

    def on_data_changed(self) -> None:
        self.set_modified(True)
        self.plot.redraw()

    def on_object_edited(self, obj: SpacetimeEntity, field_name: str) -> None:
        if field_name == "name":
            self.list_panel.update_item(obj)
        self.on_data_changed()

    def on_speed_of_light_selected(self, choice: SpeedOfLight) -> None:
        if choice is self.diagram.speed_of_light:
            return
        self.diagram.set_speed_of_light(choice)
        self.details_panel.update_units()
        self.details_panel.refresh()
        self.plot.update_units()
        self.on_data_changed()

    def on_light_cone_toggled(self, checked: bool) -> None:
        self.diagram.draw_light_cone = checked
        self.on_data_changed()

    def on_labels_toggled(self, checked: bool) -> None:
        self.diagram.draw_labels = checked
        self.on_data_changed()

    def on_about(self) -> None:
        AboutDialog(self).exec()

    # --- FILE SLOTS ---

    def on_file_new(self) -> None:
        if not self._confirm_discard():
            return

        self.diagram.reset()
        self.refresh_ui_from_state()

        # Reset dirty flag (updates title)
        self.set_modified(False)
        self.update_window_title()

    def on_file_open(self) -> None:
        if not self._confirm_discard():
            return

        fname, _ = QFileDialog.getOpenFileName(self, "Open Diagram", "", FILE_FILTER)
        if fname:
            try:
                IOManager.load_diagram(self.diagram, fname)
            except Exception as e:
                # The open diagram is left untouched
                QMessageBox.critical(self, "Error", f"Could not open file:\n{e}")
                return

            self.diagram.filepath = fname
            self.refresh_ui_from_state()

            # Reset dirty flag
            self.is_modified = False
            # Explicitly update title to show new filename
            self.update_window_title()

    def on_file_save(self) -> bool:
        if self.diagram.filepath:
            try:
                IOManager.save_diagram(self.diagram, self.diagram.filepath)
                # Removes asterisk
                self.set_modified(False)
                return True
            except Exception as e:
                QMessageBox.critical(self, "Error", f"Could not save file:\n{e}")
                return False
        return self.on_file_save_as()

    def on_file_save_as(self) -> bool:
        fname, _ = QFileDialog.getSaveFileName(self, "Save Diagram", "", FILE_FILTER)
        if not fname:
            return False

        # Ensure extension
        if not fname.endswith(FILE_EXTENSION):
            fname += FILE_EXTENSION

        try:
            IOManager.save_diagram(self.diagram, fname)
            self.diagram.filepath = fname

            # Reset dirty flag
            self.is_modified = False
            # Explicitly update title to show new filename
            self.update_window_title()
            return True
        except Exception as e:
            QMessageBox.critical(self, "Error", f"Could not save file:\n{e}")
            return False

    def on_export_image(self) -> None:
        fname, selected_filter = QFileDialog.getSaveFileName(
            self, "Export Diagram as Image", "spacetime_diagram.png", IMAGE_FILTER
        )
        if not fname:
            return

        # Ensure extension matches the chosen filter
        if not os.path.splitext(fname)[1]:
            fname += ".svg" if "svg" in selected_filter else ".jpg" if "JPEG" in selected_filter else ".png"

        try:
            self.plot.export_image(fname)
        except Exception as e:
            logger.exception("Failed to export diagram")
            QMessageBox.critical(self, "Export Error", f"Could not export diagram:\n{e}")

    def refresh_ui_from_state(self) -> None:
        """
        After loading a file, the State is updated, but the Widgets are old.
        We need to force the Widgets to read from the State again.
        """
        # 1. Object list (also clears the selection and the details panel)
        self.list_panel.refresh_list()

        # 2. Reference frame
        self.frame_panel.load_from_state()

        # 3. Options menu
        for choice, act in self.c_actions.items():
            act.setChecked(choice is self.diagram.speed_of_light)
        for act, value in ((self.act_light_cone, self.diagram.draw_light_cone),
                           (self.act_labels, self.diagram.draw_labels)):
            act.blockSignals(True)
            try:
                act.setChecked(value)
            finally:
                act.blockSignals(False)

        # 4. Units + Diagram
        self.details_panel.update_units()
        self.plot.update_units()
        self.plot.redraw()

    def _confirm_discard(self) -> bool:
        """Ask to save unsaved changes. False if the user cancelled."""
        if not self.is_modified:
            return True

        reply = QMessageBox.question(
            self,
            "Save changes?",
            "The diagram has been modified. Do you want to save your changes?",
            QMessageBox.Save | QMessageBox.Discard | QMessageBox.Cancel
        )
        if reply == QMessageBox.Save:
            return self.on_file_save()
        return reply == QMessageBox.Discard

    def closeEvent(self, event, /) -> None:
        """Handle window close event to prompt for saving if modified."""
        if not self._confirm_discard():
            event.ignore()  # Don't close window
            return

        event.accept()  # Actually close the window
