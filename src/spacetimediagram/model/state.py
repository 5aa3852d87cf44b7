"""
Diagram State (Data Model)
==========================
This module defines the central data structure for the running application.

Why is this file needed?
------------------------
1. State Management: It holds the spacetime objects, the velocity of the
   observing frame and the display options in one place.
2. Persistence: This object is what gets serialized when saving a diagram.
3. Decoupling: Views read from this object; panels write to this object.

Classes:
    DiagramState: The main container class.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Iterable, List, Optional

from spacetimediagram.model import relativity
from spacetimediagram.model.entities import SpacetimeEntity, SpacetimeEvent, SpacetimeTraveller
from spacetimediagram.model.relativity import SpeedOfLight, validate_observer_beta

logger = logging.getLogger(__name__)

DEFAULT_EVENT_NAME = "New Event"
DEFAULT_TRAVELLER_NAME = "New Traveller"


@dataclass
class DiagramState:
    """
    Singleton-like class that holds the entire state of the open diagram.
    Pass this instance to your panels and widgets.
    """
    project_name: str = "Untitled Diagram"
    filepath: Optional[str] = None

    # Ordered; the list exclusively owns its entities
    objects: List[SpacetimeEntity] = field(default_factory=list)

    observer_beta: float = 0.0
    speed_of_light: SpeedOfLight = SpeedOfLight.NORMALIZED

    draw_light_cone: bool = False
    draw_labels: bool = True

    def __post_init__(self) -> None:
        # The engine follows the state from construction on
        self.set_speed_of_light(self.speed_of_light)
        self.observer_beta = validate_observer_beta(self.observer_beta)

    def reset(self) -> None:
        """Clear all data for a new diagram"""
        self.project_name = "Untitled Diagram"
        self.filepath = None
        self.objects = []
        self.observer_beta = 0.0
        self.set_speed_of_light(SpeedOfLight.NORMALIZED)
        self.draw_light_cone = False
        self.draw_labels = True
        logger.info("Diagram state has been reset.")

    # --- OBSERVER ---

    def set_observer_beta(self, beta: float) -> None:
        """Change the velocity of the frame the diagram is drawn in."""
        self.observer_beta = validate_observer_beta(beta)

    def set_speed_of_light(self, choice: SpeedOfLight) -> None:
        """Store the choice and apply it to the transform engine."""
        self.speed_of_light = SpeedOfLight(choice)
        relativity.set_speed_of_light(self.speed_of_light)

    # --- OBJECTS ---

    def add_event(self, name: str = DEFAULT_EVENT_NAME, t: float = 0.0, x: float = 0.0) -> SpacetimeEvent:
        event = SpacetimeEvent(name, t, x)
        self.objects.append(event)
        logger.debug(f"Added event '{name}'")
        return event

    def add_traveller(
        self,
        name: str = DEFAULT_TRAVELLER_NAME,
        beta: float = 0.0,
        t: float = 0.0,
        x: float = 0.0,
    ) -> SpacetimeTraveller:
        traveller = SpacetimeTraveller(name, beta, t, x)
        self.objects.append(traveller)
        logger.debug(f"Added traveller '{name}'")
        return traveller

    def remove(self, index: int) -> SpacetimeEntity:
        obj = self.objects.pop(index)
        logger.debug(f"Removed '{obj.name}'")
        return obj

    def clear(self) -> None:
        self.objects.clear()

    def replace_objects(self, objects: Iterable[SpacetimeEntity]) -> None:
        self.objects = list(objects)

    def index_of(self, object_id: str) -> int:
        """Position of the object with the given id, or -1."""
        for i, obj in enumerate(self.objects):
            if obj.id == object_id:
                return i
        return -1
