"""
Relativistic Transform Engine
=============================
Lorentz transformations between the rest frame and a frame moving at
``beta`` along the single spatial axis ``x``.

Why is this file needed?
------------------------
1. Single source of physics: every frame-dependent value the application
   shows (positions, times, velocities) is computed here.
2. Speed of light: holds the process-wide value of ``c`` used by all
   transforms.

Note on the Lorentz factor
--------------------------
The factor used throughout is ``1 / sqrt(1 + beta**2)``, NOT the textbook
``1 / sqrt(1 - beta**2)``. Existing diagrams and reference values depend
on this form, so it is kept. Forward and inverse transforms use the same
factor, so they still compose to the identity.

All functions accept floats or NumPy arrays. None of them raise for
``|beta| >= 1``; division by zero produces ``inf``/``nan``. Callers that
take a velocity from the user validate it first (see
``validate_observer_beta``).
"""
from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Union, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

ArrayLike = Union[float, "npt.NDArray[np.float64]"]


class SpeedOfLight(Enum):
    """Supported values of c."""
    NORMALIZED = 1.0
    APPROXIMATE = 3e8
    EXACT = 299_792_458.0

    @property
    def label(self) -> str:
        if self is SpeedOfLight.NORMALIZED:
            return "c = 1"
        return f"c = {self.value:,.0f} m/s"

    @property
    def distance_unit(self) -> str:
        # With c = 1 distances are measured in light-seconds
        return "ls" if self is SpeedOfLight.NORMALIZED else "m"


class InvalidObserverFrameError(ValueError):
    """Raised when an observer velocity is not strictly inside (-1, 1)."""


class InvalidVelocityError(ValueError):
    """Raised when a traveller is given a rest-frame speed of c or more."""


_speed_of_light: SpeedOfLight = SpeedOfLight.NORMALIZED


def set_speed_of_light(choice: SpeedOfLight) -> None:
    """Select the value of c used by all subsequent transforms."""
    global _speed_of_light
    choice = SpeedOfLight(choice)
    if choice is not _speed_of_light:
        logger.info(f"Speed of light set to {choice.label}")
    _speed_of_light = choice


def get_speed_of_light() -> SpeedOfLight:
    return _speed_of_light


def get_c() -> float:
    """The numeric value of c currently in use."""
    return _speed_of_light.value


def is_exact_c() -> bool:
    return _speed_of_light is SpeedOfLight.EXACT


def is_approximate_c() -> bool:
    return _speed_of_light is SpeedOfLight.APPROXIMATE


def is_c1() -> bool:
    return _speed_of_light is SpeedOfLight.NORMALIZED


# ------------------------------------------------------------------------------
# Validation
# ------------------------------------------------------------------------------

def is_valid_beta(beta: float) -> bool:
    """True if ``beta`` is a finite speed strictly below c."""
    return math.isfinite(beta) and abs(beta) < 1


def validate_observer_beta(beta: float) -> float:
    """
    Check that an observer velocity describes a real reference frame.

    Args:
        beta: Observer velocity as a fraction of c.

    Returns:
        ``beta`` as a float.

    Raises:
        InvalidObserverFrameError: if ``|beta| >= 1`` or beta is not finite.
    """
    beta = float(beta)
    if not is_valid_beta(beta):
        raise InvalidObserverFrameError(
            f"Observer velocity must satisfy |beta| < 1, got {beta}"
        )
    return beta


# ------------------------------------------------------------------------------
# Lorentz factor
# ------------------------------------------------------------------------------

def lorentz_factor(beta: ArrayLike) -> ArrayLike:
    """
    Lorentz factor (gamma) used by every transform in this module.

    Computed as ``1 / sqrt(1 + beta**2)``; see the module docstring.
    Always in (0, 1], and exactly 1 for ``beta == 0``.
    """
    return 1.0 / np.sqrt(1.0 + np.square(beta))


# ------------------------------------------------------------------------------
# Coordinates
# ------------------------------------------------------------------------------
#
#  Forward (rest -> moving at beta):
#      x' = g (x - beta c t)
#      t' = g (c t - beta x) / c
#
#  Inverse, given the OTHER coordinate in the rest frame:
#      x  = x' / g + beta c t
#      t  = (c t' / g + beta x) / c
# ------------------------------------------------------------------------------

def x_transform(beta: ArrayLike, x: ArrayLike, t: ArrayLike) -> ArrayLike:
    """
    Position in a frame moving at ``beta`` relative to the rest frame.

    Args:
        beta: Speed of the moving frame as a fraction of c.
        x: Position in the rest frame.
        t: Time in the rest frame.
    """
    return lorentz_factor(beta) * (x - beta * get_c() * t)


def t_transform(beta: ArrayLike, x: ArrayLike, t: ArrayLike) -> ArrayLike:
    """
    Time in a frame moving at ``beta`` relative to the rest frame.

    Args:
        beta: Speed of the moving frame as a fraction of c.
        x: Position in the rest frame.
        t: Time in the rest frame.
    """
    c = get_c()
    return lorentz_factor(beta) * (c * t - beta * x) / c


def rest_x(beta: ArrayLike, x: ArrayLike, t: ArrayLike) -> ArrayLike:
    """
    Rest-frame position from a position observed in the moving frame.

    Args:
        beta: Speed of the moving frame as a fraction of c.
        x: Position observed in the moving frame.
        t: Time in the REST frame (held fixed).
    """
    return x / lorentz_factor(beta) + beta * get_c() * t


def rest_t(beta: ArrayLike, x: ArrayLike, t: ArrayLike) -> ArrayLike:
    """
    Rest-frame time from a time observed in the moving frame.

    Args:
        beta: Speed of the moving frame as a fraction of c.
        x: Position in the REST frame (held fixed).
        t: Time observed in the moving frame.
    """
    c = get_c()
    return (c * t / lorentz_factor(beta) + beta * x) / c


# ------------------------------------------------------------------------------
# Velocities
# ------------------------------------------------------------------------------

def speed_transform(beta_rest: ArrayLike, beta_observer: ArrayLike) -> ArrayLike:
    """
    Velocity of an object as seen by a moving observer.

    Relativistic velocity subtraction:
    ``(beta_rest - beta_observer) / (1 - beta_observer * beta_rest)``.

    Args:
        beta_rest: Object velocity in the rest frame.
        beta_observer: Observer velocity in the rest frame.
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        return np.divide(
            np.subtract(beta_rest, beta_observer),
            1.0 - np.multiply(beta_observer, beta_rest),
        )


def get_rest_beta(beta_observer: ArrayLike, beta_observed: ArrayLike) -> ArrayLike:
    """
    Rest-frame velocity of an object from its velocity seen by an observer.

    Relativistic velocity addition, the inverse of ``speed_transform``:
    ``(beta_observer + beta_observed) / (1 + beta_observer * beta_observed)``.
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        return np.divide(
            np.add(beta_observer, beta_observed),
            1.0 + np.multiply(beta_observer, beta_observed),
        )
