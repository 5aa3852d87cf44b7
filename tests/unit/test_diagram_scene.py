"""Unit tests for the diagram scene builder."""

import pytest

from spacetimediagram.controller.diagram_scene import (
    LIGHT_CONE_COLOR,
    LINE_COLORS,
    DiagramExtent,
    build_scene,
    clip_worldline,
)
from spacetimediagram.model.state import DiagramState


class TestClipWorldline:
    """Clipping x = intercept + beta * t to the visible box."""

    def test_through_origin(self):
        start, end = clip_worldline(0.0, 0.5, DiagramExtent())
        assert start == pytest.approx((0.0, 0.0))
        assert end == pytest.approx((10.0, 20.0))

    def test_leaves_through_side(self):
        start, end = clip_worldline(0.0, 1.0, DiagramExtent())
        assert start == pytest.approx((0.0, 0.0))
        assert end == pytest.approx((15.0, 15.0))

    def test_enters_through_side(self):
        start, end = clip_worldline(20.0, -1.0, DiagramExtent())
        assert start == pytest.approx((15.0, 5.0))
        assert end == pytest.approx((0.0, 20.0))

    def test_stationary_inside(self):
        start, end = clip_worldline(3.0, 0.0, DiagramExtent())
        assert start == (3.0, 0.0)
        assert end == (3.0, 20.0)

    def test_stationary_outside(self):
        assert clip_worldline(50.0, 0.0, DiagramExtent()) is None

    def test_misses_box(self):
        assert clip_worldline(50.0, -0.6, DiagramExtent()) is None

    def test_endpoints_inside_extent(self, rng):
        extent = DiagramExtent()
        for intercept, beta in zip(rng.uniform(-40, 40, 200), rng.uniform(-3, 3, 200)):
            segment = clip_worldline(intercept, beta, extent)
            if segment is None:
                continue
            start, end = segment
            assert extent.contains(*start)
            assert extent.contains(*end)
            assert start[1] <= end[1]


class TestBuildScene:
    """Scene contents for a state and observer frame."""

    def test_demo_diagram(self, sample_state):
        scene = build_scene(sample_state)

        # bar starts at x = 50 and moves away from the visible region
        assert [line.object_id for line in scene.worldlines] == [sample_state.objects[0].id]
        assert scene.worldlines[0].color == LINE_COLORS[0]
        assert scene.worldlines[0].end == pytest.approx((2.0, 20.0))

        assert len(scene.markers) == 1
        marker = scene.markers[0]
        assert (marker.x, marker.t) == (-50.0, 50.0)
        assert marker.color == LINE_COLORS[2]

    def test_labels(self, sample_state):
        scene = build_scene(sample_state, label_offset=0.5)
        assert [label.text for label in scene.labels] == ["foo", "bar", "baz"]
        assert (scene.labels[2].x, scene.labels[2].t) == (-49.5, 50.5)

    def test_labels_disabled(self, sample_state):
        sample_state.draw_labels = False
        assert build_scene(sample_state).labels == []

    def test_light_cone(self):
        state = DiagramState()
        assert build_scene(state).light_cone == []

        state.draw_light_cone = True
        cone = build_scene(state).light_cone
        assert len(cone) == 2
        assert all(line.color == LIGHT_CONE_COLOR for line in cone)
        assert sorted(line.end for line in cone) == [(-15.0, 15.0), (15.0, 15.0)]

    def test_colors_cycle(self):
        state = DiagramState()
        for i in range(5):
            state.add_event(f"e{i}", t=1.0, x=float(i))
        colors = [m.color for m in build_scene(state).markers]
        assert colors == [LINE_COLORS[i % len(LINE_COLORS)] for i in range(5)]

    def test_observer_frame(self, sample_state):
        sample_state.set_observer_beta(0.1)
        foo_line = build_scene(sample_state).worldlines[0]
        # Seen from its own frame foo is at rest
        assert foo_line.start == pytest.approx((0.0, 0.0))
        assert foo_line.end == pytest.approx((0.0, 20.0))

    def test_event_follows_observer(self):
        state = DiagramState()
        event = state.add_event("e", t=4.0, x=10.0)
        state.set_observer_beta(0.5)
        marker = build_scene(state).markers[0]
        assert marker.x == pytest.approx(event.get_x(0.5))
        assert marker.t == pytest.approx(event.get_t(0.5))
