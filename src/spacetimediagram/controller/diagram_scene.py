"""
Diagram Scene Builder
=====================
Turns the DiagramState into plain drawable primitives in diagram units.

The plot widget only draws what it gets from here, so everything that
depends on the observer frame (positions, worldline slopes, clipping) is
testable without Qt.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import List, Optional, Tuple

from spacetimediagram.model.entities import SpacetimeTraveller
from spacetimediagram.model.state import DiagramState

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

# Worldline colors, cycled over the object list
LINE_COLORS: tuple[str, ...] = ("#ff0000", "#0000ff", "#00ff00")
LIGHT_CONE_COLOR = "#ffff00"


@dataclass(frozen=True)
class DiagramExtent:
    """Visible region of the diagram, x horizontal and t vertical."""
    x_min: float = -15.0
    x_max: float = 15.0
    t_min: float = 0.0
    t_max: float = 20.0

    def contains(self, x: float, t: float, tol: float = 1e-9) -> bool:
        return (self.x_min - tol <= x <= self.x_max + tol
                and self.t_min - tol <= t <= self.t_max + tol)


@dataclass(frozen=True)
class Marker:
    x: float
    t: float
    color: str
    object_id: str


@dataclass(frozen=True)
class WorldLine:
    start: Point
    end: Point
    color: str
    object_id: Optional[str] = None


@dataclass(frozen=True)
class Label:
    text: str
    x: float
    t: float


@dataclass
class DiagramScene:
    markers: List[Marker] = field(default_factory=list)
    worldlines: List[WorldLine] = field(default_factory=list)
    labels: List[Label] = field(default_factory=list)
    light_cone: List[WorldLine] = field(default_factory=list)


def clip_worldline(
    intercept: float,
    beta: float,
    extent: DiagramExtent,
) -> Optional[Tuple[Point, Point]]:
    """
    Clip the line ``x = intercept + beta * t`` to the extent box.

    Returns:
        The (start, end) points ordered by increasing t, or None if the
        line does not pass through the box.
    """
    t_lo, t_hi = extent.t_min, extent.t_max

    if beta == 0:
        if not extent.x_min <= intercept <= extent.x_max:
            return None
    else:
        # t values where the line meets the left and right edges
        t_a = (extent.x_min - intercept) / beta
        t_b = (extent.x_max - intercept) / beta
        t_lo = max(t_lo, min(t_a, t_b))
        t_hi = min(t_hi, max(t_a, t_b))
        if t_lo > t_hi:
            return None

    start = (intercept + beta * t_lo, t_lo)
    end = (intercept + beta * t_hi, t_hi)
    return start, end


def build_scene(state: DiagramState, extent: DiagramExtent = DiagramExtent(),
                label_offset: float = 0.2) -> DiagramScene:
    """
    Build the drawable scene for the state's current observer velocity.

    Events become markers, travellers become worldlines through their
    observed x-intercept. Colors cycle over the object list in order.
    """
    beta_obs = state.observer_beta
    scene = DiagramScene()

    if state.draw_light_cone:
        for slope in (-1.0, 1.0):
            segment = clip_worldline(0.0, slope, extent)
            if segment is not None:
                scene.light_cone.append(WorldLine(*segment, color=LIGHT_CONE_COLOR))

    for i, obj in enumerate(state.objects):
        color = LINE_COLORS[i % len(LINE_COLORS)]
        x = obj.get_x(beta_obs)
        t = obj.get_t(beta_obs)

        if isinstance(obj, SpacetimeTraveller):
            segment = clip_worldline(obj.get_x_intercept(beta_obs), obj.get_beta(beta_obs), extent)
            if segment is not None:
                scene.worldlines.append(WorldLine(*segment, color=color, object_id=obj.id))
        else:
            scene.markers.append(Marker(x, t, color, obj.id))

        if state.draw_labels:
            scene.labels.append(Label(obj.name, x + label_offset, t + label_offset))

    return scene
