"""
Selected Object Panel
Edits the name, position, time and velocity of the selected object as seen
from the current reference frame.
"""
import logging
from typing import Optional

from PySide6.QtGui import QFontDatabase
from PySide6.QtWidgets import QGroupBox, QFormLayout, QLineEdit, QLabel
from PySide6.QtCore import Signal

from spacetimediagram.model.entities import SpacetimeEntity, SpacetimeTraveller
from spacetimediagram.model.state import DiagramState
from spacetimediagram.utils import format_value, parse_float

logger = logging.getLogger(__name__)


class ObjectDetailsPanel(QGroupBox):
    # Signal: (object, field name) where field is "name", "x", "t" or "beta"
    object_edited = Signal(object, str)

    def __init__(self, diagram: DiagramState) -> None:
        super().__init__("Selected Event/Traveller")
        self.diagram = diagram
        self.current: Optional[SpacetimeEntity] = None

        form = QFormLayout(self)
        mono = QFontDatabase.systemFont(QFontDatabase.FixedFont)

        self.edit_name = QLineEdit()
        self.edit_name.setToolTip("Rename the selected element")
        self.edit_name.editingFinished.connect(self.on_name_entered)
        form.addRow("Name", self.edit_name)

        self.lbl_x = QLabel()
        self.edit_x = QLineEdit()
        self.edit_x.setFont(mono)
        self.edit_x.setToolTip("Set the x-coordinate of the selected element")
        self.edit_x.editingFinished.connect(self.on_x_entered)
        form.addRow(self.lbl_x, self.edit_x)

        self.edit_t = QLineEdit()
        self.edit_t.setFont(mono)
        self.edit_t.setToolTip("Set the t-coordinate of the selected element")
        self.edit_t.editingFinished.connect(self.on_t_entered)
        form.addRow("Time [s]", self.edit_t)

        self.lbl_beta = QLabel("Beta [c]")
        self.edit_beta = QLineEdit()
        self.edit_beta.setFont(mono)
        self.edit_beta.setToolTip("Set the velocity of the selected worldline")
        self.edit_beta.editingFinished.connect(self.on_beta_entered)
        form.addRow(self.lbl_beta, self.edit_beta)

        self.update_units()
        self.set_current(None)

    # --- PUBLIC API ---

    def set_current(self, obj: Optional[SpacetimeEntity]) -> None:
        self.current = obj

        # Disable panel when no object is selected in the list
        enabled = obj is not None
        for w in (self.edit_name, self.edit_x, self.edit_t, self.edit_beta):
            w.setEnabled(enabled)
            if not enabled:
                w.clear()

        # Only show the beta field for objects that can move
        is_traveller = isinstance(obj, SpacetimeTraveller)
        self.lbl_beta.setVisible(is_traveller)
        self.edit_beta.setVisible(is_traveller)

        self.refresh()

    def refresh(self) -> None:
        """Re-read the selected object in the current reference frame."""
        obj = self.current
        if obj is None:
            return

        beta = self.diagram.observer_beta
        self.edit_name.setText(obj.name)
        self.edit_x.setText(format_value(obj.get_x(beta)))
        self.edit_t.setText(format_value(obj.get_t(beta)))
        if isinstance(obj, SpacetimeTraveller):
            self.edit_beta.setText(format_value(obj.get_beta(beta)))

    def update_units(self) -> None:
        self.lbl_x.setText(f"x-Position [{self.diagram.speed_of_light.distance_unit}]")

    # --- SLOTS ---

    def on_name_entered(self) -> None:
        obj = self.current
        if obj is None or self.edit_name.text() == obj.name:
            return
        obj.name = self.edit_name.text()
        self.object_edited.emit(obj, "name")

    def on_x_entered(self) -> None:
        obj = self.current
        if obj is None:
            return
        value = parse_float(self.edit_x.text())
        if value is None:
            self.refresh()
            return
        if format_value(value) != format_value(obj.get_x(self.diagram.observer_beta)):
            obj.set_x(self.diagram.observer_beta, value)
            self.object_edited.emit(obj, "x")
        self.refresh()

    def on_t_entered(self) -> None:
        obj = self.current
        if obj is None:
            return
        value = parse_float(self.edit_t.text())
        if value is None:
            self.refresh()
            return
        if format_value(value) != format_value(obj.get_t(self.diagram.observer_beta)):
            obj.set_t(self.diagram.observer_beta, value)
            self.object_edited.emit(obj, "t")
        self.refresh()

    def on_beta_entered(self) -> None:
        obj = self.current
        if not isinstance(obj, SpacetimeTraveller):
            return
        value = parse_float(self.edit_beta.text())
        if value is None:
            self.refresh()
            return

        observer_beta = self.diagram.observer_beta
        if format_value(value) == format_value(obj.get_beta(observer_beta)):
            return

        result = obj.set_beta(observer_beta, value)
        # Rejected edits show the unchanged velocity again
        self.edit_beta.setText(format_value(result.observed_beta))
        if result.accepted:
            self.object_edited.emit(obj, "beta")
