"""Unit tests for DiagramState."""

import pytest

from spacetimediagram.model import relativity
from spacetimediagram.model.entities import SpacetimeEvent, SpacetimeTraveller
from spacetimediagram.model.relativity import InvalidObserverFrameError, SpeedOfLight
from spacetimediagram.model.state import DiagramState


class TestObjects:
    """Adding, removing and finding objects."""

    def test_defaults(self):
        state = DiagramState()
        assert state.objects == []
        assert state.observer_beta == 0.0
        assert state.speed_of_light is SpeedOfLight.NORMALIZED
        assert not state.draw_light_cone
        assert state.draw_labels

    def test_add_keeps_order(self, sample_state):
        assert [obj.name for obj in sample_state.objects] == ["foo", "bar", "baz"]
        assert isinstance(sample_state.objects[0], SpacetimeTraveller)
        assert type(sample_state.objects[2]) is SpacetimeEvent

    def test_add_defaults(self):
        state = DiagramState()
        event = state.add_event()
        traveller = state.add_traveller()
        assert event.name == "New Event"
        assert traveller.name == "New Traveller"
        assert (event.t, event.x) == (0.0, 0.0)
        assert traveller.beta == 0.0

    def test_duplicate_names_allowed(self):
        state = DiagramState()
        a = state.add_event("same")
        b = state.add_event("same")
        assert len(state.objects) == 2
        assert a.id != b.id

    def test_remove(self, sample_state):
        removed = sample_state.remove(1)
        assert removed.name == "bar"
        assert [obj.name for obj in sample_state.objects] == ["foo", "baz"]

    def test_remove_out_of_range(self, sample_state):
        with pytest.raises(IndexError):
            sample_state.remove(5)

    def test_index_of(self, sample_state):
        baz = sample_state.objects[2]
        assert sample_state.index_of(baz.id) == 2
        assert sample_state.index_of("missing") == -1

    def test_clear_and_replace(self, sample_state):
        objects = list(sample_state.objects)
        sample_state.clear()
        assert sample_state.objects == []
        sample_state.replace_objects(reversed(objects))
        assert [obj.name for obj in sample_state.objects] == ["baz", "bar", "foo"]


class TestObserverAndOptions:
    """Observer frame, speed of light and reset."""

    def test_set_observer_beta(self):
        state = DiagramState()
        state.set_observer_beta(0.25)
        assert state.observer_beta == 0.25

    @pytest.mark.parametrize("beta", [1.0, -1.0, 1.01])
    def test_invalid_observer_beta_keeps_previous(self, beta):
        state = DiagramState()
        state.set_observer_beta(0.5)
        with pytest.raises(InvalidObserverFrameError):
            state.set_observer_beta(beta)
        assert state.observer_beta == 0.5

    def test_speed_of_light_applies_to_engine(self):
        state = DiagramState()
        state.set_speed_of_light(SpeedOfLight.EXACT)
        assert state.speed_of_light is SpeedOfLight.EXACT
        assert relativity.get_c() == SpeedOfLight.EXACT.value

    def test_reset(self, sample_state):
        sample_state.project_name = "Twins"
        sample_state.filepath = "/tmp/twins.diagram"
        sample_state.set_observer_beta(0.3)
        sample_state.set_speed_of_light(SpeedOfLight.APPROXIMATE)
        sample_state.draw_light_cone = True
        sample_state.draw_labels = False

        sample_state.reset()

        assert sample_state.objects == []
        assert sample_state.project_name == "Untitled Diagram"
        assert sample_state.filepath is None
        assert sample_state.observer_beta == 0.0
        assert sample_state.speed_of_light is SpeedOfLight.NORMALIZED
        assert relativity.is_c1()
        assert not sample_state.draw_light_cone
        assert sample_state.draw_labels

    def test_constructor_applies_speed_of_light(self):
        state = DiagramState(speed_of_light=SpeedOfLight.EXACT)
        assert relativity.is_exact_c()
        assert relativity.get_speed_of_light() is state.speed_of_light

    def test_constructor_rejects_invalid_observer(self):
        with pytest.raises(InvalidObserverFrameError):
            DiagramState(observer_beta=1.0)
