"""
Spacetime Objects Panel
Lists events and travellers and lets the user add or remove them.
"""
from typing import Optional

from PySide6.QtWidgets import QGroupBox, QGridLayout, QListWidget, QListWidgetItem, QPushButton
from PySide6.QtCore import Signal

from spacetimediagram.model.entities import SpacetimeEntity, SpacetimeTraveller
from spacetimediagram.model.state import DiagramState


class ObjectListPanel(QGroupBox):
    # Signal: selected object, or None
    selection_changed = Signal(object)
    # Emitted after an add or remove
    objects_changed = Signal()

    def __init__(self, diagram: DiagramState) -> None:
        super().__init__("Spacetime Objects")
        self.diagram = diagram

        layout = QGridLayout(self)

        # Rows mirror diagram.objects one to one
        self.list_widget = QListWidget()
        self.list_widget.currentRowChanged.connect(self.on_selection)
        layout.addWidget(self.list_widget, 0, 0, 1, 3)

        self.btn_add_event = QPushButton("Add Event")
        self.btn_add_event.setToolTip("Add an event to the spacetime diagram")
        self.btn_add_event.clicked.connect(self.on_add_event)
        layout.addWidget(self.btn_add_event, 1, 0)

        self.btn_add_traveller = QPushButton("Add Traveller")
        self.btn_add_traveller.setToolTip("Add a worldline to the spacetime diagram")
        self.btn_add_traveller.clicked.connect(self.on_add_traveller)
        layout.addWidget(self.btn_add_traveller, 1, 1)

        self.btn_remove = QPushButton("Remove")
        self.btn_remove.setToolTip("Remove the selected element")
        self.btn_remove.setEnabled(False)
        self.btn_remove.clicked.connect(self.on_remove)
        layout.addWidget(self.btn_remove, 1, 2)

        self.refresh_list()

    @property
    def current_object(self) -> Optional[SpacetimeEntity]:
        row = self.list_widget.currentRow()
        return self.diagram.objects[row] if 0 <= row < len(self.diagram.objects) else None

    def refresh_list(self, select_row: int = -1) -> None:
        """Rebuild the list from the state and select ``select_row`` (-1 for none)."""
        # Block signals so clearing does not report a selection per removed row
        self.list_widget.blockSignals(True)
        self.list_widget.clear()
        for obj in self.diagram.objects:
            self.list_widget.addItem(self._make_item(obj))
        if 0 <= select_row < self.list_widget.count():
            self.list_widget.setCurrentRow(select_row)
        self.list_widget.blockSignals(False)

        self.on_selection(self.list_widget.currentRow())

    def update_item(self, obj: SpacetimeEntity) -> None:
        """Show the new name of an edited object."""
        row = self.diagram.index_of(obj.id)
        item = self.list_widget.item(row)
        if item is not None:
            item.setText(obj.name)

    # --- SLOTS ---

    def on_add_event(self) -> None:
        self.diagram.add_event()
        self.refresh_list(len(self.diagram.objects) - 1)
        self.objects_changed.emit()

    def on_add_traveller(self) -> None:
        self.diagram.add_traveller()
        self.refresh_list(len(self.diagram.objects) - 1)
        self.objects_changed.emit()

    def on_remove(self) -> None:
        row = self.list_widget.currentRow()
        if row < 0:
            return
        self.diagram.remove(row)
        self.refresh_list()
        self.objects_changed.emit()

    def on_selection(self, _row: int) -> None:
        obj = self.current_object
        self.btn_remove.setEnabled(obj is not None)
        self.selection_changed.emit(obj)

    @staticmethod
    def _make_item(obj: SpacetimeEntity) -> QListWidgetItem:
        item = QListWidgetItem(obj.name)
        item.setToolTip("Traveller" if isinstance(obj, SpacetimeTraveller) else "Event")
        return item
