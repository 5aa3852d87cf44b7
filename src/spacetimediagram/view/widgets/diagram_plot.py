"""
Spacetime Diagram Plot
Draws the scene built by ``controller.diagram_scene`` with pyqtgraph.
"""
from __future__ import annotations

import logging
import os

import numpy as np
import pyqtgraph as pg
from pyqtgraph.exporters import ImageExporter, SVGExporter

from spacetimediagram.controller.diagram_scene import DiagramExtent, DiagramScene, build_scene
from spacetimediagram.model.state import DiagramState

logger = logging.getLogger(__name__)


class DiagramPlotWidget(pg.PlotWidget):
    """Position (x) horizontally, time (t) vertically."""

    MARKER_SIZE = 10
    LINE_WIDTH = 3

    def __init__(self, diagram: DiagramState, extent: DiagramExtent = DiagramExtent(), parent=None) -> None:
        super().__init__(parent)
        self.diagram = diagram
        self.extent = extent

        self.setBackground('w')
        self.showGrid(x=True, y=True, alpha=0.2)
        self.getAxis('bottom').setPen('k')
        self.getAxis('left').setPen('k')
        self.getAxis('bottom').setTextPen('k')
        self.getAxis('left').setTextPen('k')
        self.setLabel('left', 'Time t', color='black')
        self.update_units()

        self.setMenuEnabled(False)
        self.setMouseEnabled(x=False, y=False)
        self.hideButtons()
        self.setXRange(extent.x_min, extent.x_max, padding=0.02)
        self.setYRange(extent.t_min, extent.t_max, padding=0.02)
        self.setAspectLocked(True)

        self.redraw()

    def update_units(self) -> None:
        unit = self.diagram.speed_of_light.distance_unit
        self.setLabel('bottom', f'Position x [{unit}]', color='black')

    def redraw(self) -> None:
        """Rebuild the scene for the current state and draw it."""
        scene = build_scene(self.diagram, self.extent)
        self.clear()
        self._draw_axes()
        self._draw_scene(scene)

    def _draw_axes(self) -> None:
        ext = self.extent
        axis_pen = pg.mkPen(color='k', width=self.LINE_WIDTH)
        self.plot([ext.x_min, ext.x_max], [0.0, 0.0], pen=axis_pen)
        self.plot([0.0, 0.0], [max(ext.t_min, 0.0), ext.t_max], pen=axis_pen)

    def _draw_scene(self, scene: DiagramScene) -> None:
        for line in scene.light_cone:
            self.plot(
                [line.start[0], line.end[0]], [line.start[1], line.end[1]],
                pen=pg.mkPen(color=line.color, width=self.LINE_WIDTH),
            )

        for line in scene.worldlines:
            self.plot(
                [line.start[0], line.end[0]], [line.start[1], line.end[1]],
                pen=pg.mkPen(color=line.color, width=self.LINE_WIDTH),
            )

        if scene.markers:
            self.plot(
                np.array([m.x for m in scene.markers]),
                np.array([m.t for m in scene.markers]),
                pen=None,
                symbol='o',
                symbolSize=self.MARKER_SIZE,
                symbolBrush=[pg.mkBrush(m.color) for m in scene.markers],
                symbolPen=None,
            )

        for label in scene.labels:
            text = pg.TextItem(label.text, color='k', anchor=(0, 1))
            text.setPos(label.x, label.t)
            self.addItem(text)

    def export_image(self, file_path: str) -> None:
        """
        Export the diagram as PNG/JPEG or SVG, chosen by the file extension.

        Raises:
            ValueError: for an unsupported extension.
        """
        ext = os.path.splitext(file_path)[1].lower()
        if ext == ".svg":
            exporter = SVGExporter(self.plotItem)
        elif ext in (".png", ".jpg", ".jpeg"):
            exporter = ImageExporter(self.plotItem)
            # High resolution, white background so the image is not transparent
            exporter.parameters()['width'] = 1920
            exporter.parameters()['background'] = pg.mkColor('w')
        else:
            raise ValueError(f"Unsupported image format: '{ext}'")

        exporter.export(file_path)
        logger.info(f"Diagram exported to {file_path}")

