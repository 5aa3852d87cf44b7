"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture(autouse=True)
def normalized_speed_of_light():
    """Every test starts (and ends) with c = 1."""
    from spacetimediagram.model import relativity
    relativity.set_speed_of_light(relativity.SpeedOfLight.NORMALIZED)
    yield
    relativity.set_speed_of_light(relativity.SpeedOfLight.NORMALIZED)


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)


@pytest.fixture
def sample_state():
    """Two travellers and an event, the classic demo diagram."""
    from spacetimediagram.model.state import DiagramState
    state = DiagramState()
    state.add_traveller("foo", 0.1, 0.0, 0.0)
    state.add_traveller("bar", -0.6, 0.0, 50.0)
    state.add_event("baz", 50.0, -50.0)
    return state
