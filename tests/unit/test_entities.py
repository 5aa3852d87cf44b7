"""Unit tests for events and travellers."""

import pytest

from spacetimediagram.model import relativity
from spacetimediagram.model.entities import (
    BetaUpdate,
    EntityKind,
    SpacetimeEvent,
    SpacetimeTraveller,
    entity_from_dict,
)
from spacetimediagram.model.relativity import InvalidObserverFrameError, InvalidVelocityError


class TestSpacetimeEvent:
    """Observed coordinates and edits of a single event."""

    def test_rest_frame_view(self):
        event = SpacetimeEvent("baz", 50, -50)
        assert event.get_x(0) == -50
        assert event.get_t(0) == 50
        assert event.kind is EntityKind.EVENT
        assert str(event) == "baz"

    def test_set_x_keeps_time(self):
        event = SpacetimeEvent("baz", 50, -50)
        event.set_x(0, -100)
        assert event.get_x(0) == -100
        assert event.get_t(0) == 50

    def test_coordinates_are_floats(self):
        event = SpacetimeEvent("e", 1, 2)
        assert isinstance(event.t, float)
        assert isinstance(event.x, float)

    @pytest.mark.parametrize("beta", [-0.8, -0.3, 0.4, 0.95])
    def test_set_x_in_moving_frame(self, beta):
        event = SpacetimeEvent("e", 3.0, 2.0)
        event.set_x(beta, 7.0)
        assert event.get_x(beta) == pytest.approx(7.0)
        assert event.t == 3.0

    @pytest.mark.parametrize("beta", [-0.8, -0.3, 0.4, 0.95])
    def test_set_t_in_moving_frame(self, beta):
        event = SpacetimeEvent("e", 3.0, 2.0)
        event.set_t(beta, 5.0)
        assert event.get_t(beta) == pytest.approx(5.0)
        assert event.x == 2.0

    def test_observed_values_follow_transform(self):
        event = SpacetimeEvent("e", 4.0, 10.0)
        assert event.get_x(0.5) == pytest.approx(relativity.x_transform(0.5, 10.0, 4.0))
        assert event.get_t(0.5) == pytest.approx(relativity.t_transform(0.5, 10.0, 4.0))

    @pytest.mark.parametrize("beta", [1.0, -1.0, 2.5])
    def test_invalid_observer(self, beta):
        event = SpacetimeEvent("e", 1.0, 1.0)
        with pytest.raises(InvalidObserverFrameError):
            event.get_x(beta)
        with pytest.raises(InvalidObserverFrameError):
            event.get_t(beta)
        with pytest.raises(InvalidObserverFrameError):
            event.set_x(beta, 0.0)
        assert event.x == 1.0

    def test_ids_are_unique(self):
        ids = {SpacetimeEvent("same", 0, 0).id for _ in range(50)}
        assert len(ids) == 50

    def test_equality_is_identity(self):
        a = SpacetimeEvent("e", 0, 0)
        b = SpacetimeEvent("e", 0, 0, id=a.id)
        assert a != b
        assert a == a


class TestSpacetimeTraveller:
    """Worldlines: velocity, intercept and velocity edits."""

    def test_rest_frame_view(self):
        traveller = SpacetimeTraveller("foo", 0.1, 0, 0)
        assert traveller.get_beta(0) == pytest.approx(0.1)
        assert traveller.get_x(0) == 0
        assert traveller.get_t(0) == 0
        assert traveller.get_x_intercept(0) == 0
        assert traveller.kind is EntityKind.TRAVELLER

    def test_positional_argument_order(self):
        traveller = SpacetimeTraveller("bar", -0.6, 1.0, 50.0)
        assert traveller.beta == -0.6
        assert traveller.t == 1.0
        assert traveller.x == 50.0

    def test_is_an_event(self):
        assert isinstance(SpacetimeTraveller("foo", 0.1, 0, 0), SpacetimeEvent)

    def test_x_intercept(self):
        traveller = SpacetimeTraveller("foo", 0.5, 2.0, 3.0)
        assert traveller.get_x_intercept(0) == pytest.approx(2.0)

    def test_co_moving_observer(self):
        traveller = SpacetimeTraveller("foo", 0.6, 0, 0)
        assert traveller.get_beta(0.6) == pytest.approx(0.0)

    @pytest.mark.parametrize("beta", [1.0, -1.0, 1.5])
    def test_construction_rejects_light_speed(self, beta):
        with pytest.raises(InvalidVelocityError):
            SpacetimeTraveller("fast", beta, 0, 0)

    def test_set_beta_accepted(self):
        traveller = SpacetimeTraveller("foo", 0.1, 0, 0)
        result = traveller.set_beta(0.5, 0.3)
        assert result == BetaUpdate(accepted=True, observed_beta=0.3)
        assert traveller.get_beta(0.5) == pytest.approx(0.3)
        assert traveller.beta == pytest.approx(0.8 / 1.15)

    @pytest.mark.parametrize("observer, observed", [(0.0, 1.0), (0.0, 1.5), (0.5, 1.2), (-0.5, -1.0)])
    def test_set_beta_rejected(self, observer, observed):
        traveller = SpacetimeTraveller("foo", 0.1, 0, 0)
        before = traveller.beta
        result = traveller.set_beta(observer, observed)
        assert not result.accepted
        assert result.reason
        assert traveller.beta == before
        assert result.observed_beta == pytest.approx(traveller.get_beta(observer))

    def test_set_beta_rejection_is_logged(self, caplog):
        traveller = SpacetimeTraveller("foo", 0.1, 0, 0)
        with caplog.at_level("WARNING", logger="spacetimediagram.model.entities"):
            traveller.set_beta(0.0, 2.0)
        assert "foo" in caplog.text

    def test_set_beta_invalid_observer(self):
        traveller = SpacetimeTraveller("foo", 0.1, 0, 0)
        with pytest.raises(InvalidObserverFrameError):
            traveller.set_beta(1.0, 0.2)


class TestSerialization:
    """Dictionary form used by the file format."""

    def test_event_dict(self):
        event = SpacetimeEvent("baz", 50, -50)
        data = event.to_dict()
        assert data == {"kind": "event", "id": event.id, "name": "baz", "t": 50.0, "x": -50.0}

    def test_traveller_dict(self):
        traveller = SpacetimeTraveller("bar", -0.6, 0, 50)
        data = traveller.to_dict()
        assert data["kind"] == "traveller"
        assert data["beta"] == -0.6

    def test_entity_from_dict_dispatches_on_kind(self):
        traveller = SpacetimeTraveller("bar", -0.6, 1, 50)
        restored = entity_from_dict(traveller.to_dict())
        assert isinstance(restored, SpacetimeTraveller)
        assert (restored.id, restored.name, restored.beta, restored.t, restored.x) == \
            (traveller.id, "bar", -0.6, 1.0, 50.0)

        event = entity_from_dict({"kind": "event", "name": "e", "t": 1, "x": 2})
        assert type(event) is SpacetimeEvent
        assert event.id

    def test_missing_kind_defaults_to_event(self):
        assert type(entity_from_dict({"name": "e", "t": 0, "x": 0})) is SpacetimeEvent

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            entity_from_dict({"kind": "photon", "name": "e", "t": 0, "x": 0})

    def test_invalid_traveller_beta(self):
        with pytest.raises(InvalidVelocityError):
            entity_from_dict({"kind": "traveller", "name": "t", "beta": 1.0, "t": 0, "x": 0})

    @pytest.mark.parametrize("missing", ["name", "t", "x"])
    def test_missing_field(self, missing):
        data = {"kind": "event", "name": "e", "t": 0, "x": 0}
        del data[missing]
        with pytest.raises(KeyError):
            entity_from_dict(data)
