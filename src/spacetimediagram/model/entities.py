"""
Spacetime Entities
==================
The objects a user places on a diagram.

Both entity types store their coordinates (and the traveller its velocity)
in ONE fixed rest frame. Nothing frame-dependent is cached: every getter
takes the observer velocity and computes the observed value through
``relativity``; every setter converts the observed value back to the rest
frame.

Classes:
    EntityKind: Tag used to tell events and travellers apart on disk.
    SpacetimeEvent: A point occurrence at (t, x).
    SpacetimeTraveller: A worldline through (t, x) with velocity beta.
    BetaUpdate: Outcome of ``SpacetimeTraveller.set_beta``.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Dict, Optional, Union

from spacetimediagram.model import relativity
from spacetimediagram.model.relativity import InvalidVelocityError, validate_observer_beta

logger = logging.getLogger(__name__)


class EntityKind(StrEnum):
    EVENT = "event"
    TRAVELLER = "traveller"


@dataclass(frozen=True)
class BetaUpdate:
    """
    Result of trying to change a traveller's velocity.

    ``observed_beta`` is always the velocity the caller should display:
    the requested value when accepted, the unchanged current value when
    rejected.
    """
    accepted: bool
    observed_beta: float
    reason: Optional[str] = None


@dataclass(eq=False)
class SpacetimeEvent:
    """
    An event in spacetime.

    Args:
        name: Display label, not necessarily unique.
        t: Rest-frame time.
        x: Rest-frame position.
    """
    name: str
    t: float
    x: float
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def __post_init__(self) -> None:
        self.t = float(self.t)
        self.x = float(self.x)

    @property
    def kind(self) -> EntityKind:
        return EntityKind.EVENT

    def get_x(self, observer_beta: float) -> float:
        """Position of this event for an observer moving at ``observer_beta``."""
        observer_beta = validate_observer_beta(observer_beta)
        return float(relativity.x_transform(observer_beta, self.x, self.t))

    def get_t(self, observer_beta: float) -> float:
        """Time of this event for an observer moving at ``observer_beta``."""
        observer_beta = validate_observer_beta(observer_beta)
        return float(relativity.t_transform(observer_beta, self.x, self.t))

    def set_x(self, observer_beta: float, observed_x: float) -> None:
        """
        Move the event so the observer sees it at ``observed_x``.

        The rest-frame time is kept, so this changes the event for every
        observer.
        """
        observer_beta = validate_observer_beta(observer_beta)
        self.x = float(relativity.rest_x(observer_beta, observed_x, self.t))
        logger.debug(f"'{self.name}' moved to rest x={self.x:g}")

    def set_t(self, observer_beta: float, observed_t: float) -> None:
        """
        Move the event so the observer sees it at time ``observed_t``.

        The rest-frame position is kept.
        """
        observer_beta = validate_observer_beta(observer_beta)
        self.t = float(relativity.rest_t(observer_beta, self.x, observed_t))
        logger.debug(f"'{self.name}' moved to rest t={self.t:g}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": str(self.kind),
            "id": self.id,
            "name": self.name,
            "t": self.t,
            "x": self.x,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> SpacetimeEvent:
        return SpacetimeEvent(
            name=str(data["name"]),
            t=data["t"],
            x=data["x"],
            id=data.get("id") or uuid.uuid4().hex,
        )

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False, init=False)
class SpacetimeTraveller(SpacetimeEvent):
    """
    An object moving at constant velocity.

    ``(t, x)`` is one point its worldline passes through, not an endpoint.

    Args:
        name: Display label.
        beta: Rest-frame velocity as a fraction of c.
        t: Time of a point on the worldline (rest frame).
        x: Position of that point (rest frame).

    Raises:
        InvalidVelocityError: if ``|beta| >= 1``.
    """
    beta: float = 0.0

    def __init__(
        self,
        name: str,
        beta: float,
        t: float,
        x: float,
        id: Optional[str] = None,
    ) -> None:
        self.beta = beta
        super().__init__(name=name, t=t, x=x, id=id or uuid.uuid4().hex)

    def __post_init__(self) -> None:
        super().__post_init__()
        self.beta = float(self.beta)
        if not relativity.is_valid_beta(self.beta):
            raise InvalidVelocityError(
                f"Traveller '{self.name}' must move slower than light, got beta={self.beta}"
            )

    @property
    def kind(self) -> EntityKind:
        return EntityKind.TRAVELLER

    def get_beta(self, observer_beta: float) -> float:
        """Velocity of this traveller seen by an observer moving at ``observer_beta``."""
        observer_beta = validate_observer_beta(observer_beta)
        return float(relativity.speed_transform(self.beta, observer_beta))

    def set_beta(self, observer_beta: float, observed_beta: float) -> BetaUpdate:
        """
        Change the velocity so the observer sees ``observed_beta``.

        A velocity that would make the traveller reach or exceed c in the
        rest frame is refused and the stored velocity is left untouched.
        """
        observer_beta = validate_observer_beta(observer_beta)
        new_beta = float(relativity.get_rest_beta(observer_beta, observed_beta))

        if relativity.is_valid_beta(new_beta):
            self.beta = new_beta
            logger.debug(f"'{self.name}' rest beta set to {new_beta:g}")
            return BetaUpdate(accepted=True, observed_beta=float(observed_beta))

        reason = (
            f"Observed beta {observed_beta:g} at observer beta {observer_beta:g} "
            f"gives a rest-frame speed of {new_beta:g}c"
        )
        logger.warning(f"Rejected velocity for '{self.name}': {reason}")
        return BetaUpdate(
            accepted=False,
            observed_beta=self.get_beta(observer_beta),
            reason=reason,
        )

    def get_x_intercept(self, observer_beta: float) -> float:
        """Where the worldline crosses t = 0 in the observer's frame."""
        return self.get_x(observer_beta) - self.get_beta(observer_beta) * self.get_t(observer_beta)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["beta"] = self.beta
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> SpacetimeTraveller:
        return SpacetimeTraveller(
            name=str(data["name"]),
            beta=data["beta"],
            t=data["t"],
            x=data["x"],
            id=data.get("id"),
        )


SpacetimeEntity = Union[SpacetimeEvent, SpacetimeTraveller]


def entity_from_dict(data: Dict[str, Any]) -> SpacetimeEntity:
    """Rebuild an event or traveller from ``to_dict`` output."""
    kind = EntityKind(data.get("kind", EntityKind.EVENT))
    if kind == EntityKind.TRAVELLER:
        return SpacetimeTraveller.from_dict(data)
    return SpacetimeEvent.from_dict(data)
