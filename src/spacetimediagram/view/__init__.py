"""
The VIEW layer: PySide6 widgets and the pyqtgraph diagram.
"""
