"""
Reference Frame Panel
Controls the velocity of the observer the diagram is drawn for.
"""
import logging

from PySide6.QtWidgets import QGroupBox, QHBoxLayout, QLineEdit, QSlider
from PySide6.QtCore import Qt, Signal

from spacetimediagram.model.relativity import is_valid_beta
from spacetimediagram.model.state import DiagramState
from spacetimediagram.utils import format_value, parse_float

logger = logging.getLogger(__name__)

# Slider works in hundredths of c; +-1.0 is not a valid frame
SLIDER_STEPS = 100
SLIDER_LIMIT = 99


class ReferenceFramePanel(QGroupBox):
    # Signal: new observer beta
    beta_changed = Signal(float)

    def __init__(self, diagram: DiagramState) -> None:
        super().__init__("Reference Frame Speed")
        self.diagram = diagram

        layout = QHBoxLayout(self)

        self.edit_beta = QLineEdit(format_value(self.diagram.observer_beta))
        self.edit_beta.setToolTip("Change the speed of the observer drawing the spacetime diagram")
        self.edit_beta.setMaximumWidth(80)
        self.edit_beta.editingFinished.connect(self.on_text_entered)
        layout.addWidget(self.edit_beta)

        self.slider = QSlider(Qt.Horizontal)
        self.slider.setToolTip("Change the speed of the observer drawing the spacetime diagram")
        self.slider.setRange(-SLIDER_LIMIT, SLIDER_LIMIT)
        self.slider.setTickInterval(20)
        self.slider.setTickPosition(QSlider.TicksBelow)
        self.slider.setValue(round(self.diagram.observer_beta * SLIDER_STEPS))
        self.slider.valueChanged.connect(self.on_slider_changed)
        layout.addWidget(self.slider, 1)

    def on_slider_changed(self, value: int) -> None:
        beta = value / SLIDER_STEPS
        self.edit_beta.setText(format_value(beta))
        self._apply(beta)

    def on_text_entered(self) -> None:
        beta = parse_float(self.edit_beta.text())
        if beta is None or not is_valid_beta(beta):
            # Revert to the current frame
            self.edit_beta.setText(format_value(self.diagram.observer_beta))
            return

        self.slider.blockSignals(True)
        try:
            self.slider.setValue(round(beta * SLIDER_STEPS))
        finally:
            self.slider.blockSignals(False)
        self._apply(beta)

    def _apply(self, beta: float) -> None:
        if beta == self.diagram.observer_beta:
            return
        self.diagram.set_observer_beta(beta)
        logger.debug(f"Observer beta set to {beta:g}")
        self.beta_changed.emit(beta)

    def load_from_state(self) -> None:
        self.slider.blockSignals(True)
        try:
            self.slider.setValue(round(self.diagram.observer_beta * SLIDER_STEPS))
        finally:
            self.slider.blockSignals(False)
        self.edit_beta.setText(format_value(self.diagram.observer_beta))
