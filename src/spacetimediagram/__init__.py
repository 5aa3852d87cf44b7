"""
spacetimediagram: Special-relativity spacetime diagrams

Place events and travellers (worldlines) in one rest frame, then view and
edit them from an observer moving at any speed below c. All frame-dependent
values are computed on demand by the Lorentz transforms in
``spacetimediagram.model.relativity``.
"""

__version__ = "1.0.0"
