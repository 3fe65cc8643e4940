"""Tests for AlignedEntity gaze alignment and mouth breathing."""

import math

import numpy as np
import pytest

from hypergaze.figures import AlignedEntity, MouthOscillator, gaze_error, wire_peers
from hypergaze.geometry import HyperbolicError, HyperbolicPoint, UnwiredEntityError
from hypergaze.render import Color, RecordingRenderer

RED = Color(1.0, 0.0, 0.0)
GREEN = Color(0.0, 1.0, 0.0)


def make_pair(samples: int = 12):
    first = AlignedEntity(RED, name="first", samples=samples)
    second = AlignedEntity(GREEN, name="second", samples=samples)
    wire_peers(first, second)
    second.rotate_right(math.pi / 2)
    second.move_forward(1.0)
    return first, second


class TestWiring:
    """Test the two-phase peer setup."""

    def test_unwired_realign_raises(self):
        """Realigning before wiring raises UnwiredEntityError."""
        entity = AlignedEntity(RED, name="lonely", samples=8)
        with pytest.raises(UnwiredEntityError):
            entity.realign()
        with pytest.raises(RuntimeError):
            entity.realign()
        with pytest.raises(HyperbolicError):
            entity.draw(RecordingRenderer())

    def test_self_peer_rejected(self):
        """An entity cannot watch itself."""
        entity = AlignedEntity(RED, samples=8)
        with pytest.raises(ValueError):
            entity.set_peer(entity)

    def test_wire_peers_is_mutual(self):
        """wire_peers links both directions without ownership."""
        first, second = make_pair()
        assert first.peer is second
        assert second.peer is first


class TestRealign:
    """Test satellite placement."""

    def test_scenario_gaze_toward_peer(self):
        """After the opening move every eye looks straight at the peer."""
        first, second = make_pair()
        first.realign()
        second.realign()
        for entity in (first, second):
            for i in range(4):
                assert gaze_error(entity, i) < 1e-6

    def test_second_placement(self):
        """The second body ends at (tanh(0.5), 0)."""
        _, second = make_pair()
        x, y = second.position
        assert x == pytest.approx(math.tanh(0.5))
        assert y == pytest.approx(0.0, abs=1e-12)

    def test_eyes_and_mouth_on_rim(self):
        """Eyes and mouth sit one body radius from the body center."""
        first, _ = make_pair()
        first.realign()
        body = first.body.center
        for disk in (first.eyes[0], first.eyes[1], first.mouth):
            assert body.distance_to(disk.center) == pytest.approx(first.body.radius, abs=1e-9)

    def test_eye_sides(self):
        """Left eye is left of the heading, right eye right, mouth ahead."""
        first, _ = make_pair()
        first.realign()
        assert first.eyes[0].planar_center[0] < 0
        assert first.eyes[1].planar_center[0] > 0
        mx, my = first.mouth.planar_center
        assert mx == pytest.approx(0.0, abs=1e-12)
        assert my == pytest.approx(math.tanh(0.1))

    def test_eye_angle(self):
        """Each eye is eye_offset away from the heading, seen from the center."""
        first, _ = make_pair()
        first.realign()
        lx, ly = first.eyes[0].planar_center
        # Geodesics through the origin are straight lines in the disk
        assert math.atan2(-lx, ly) == pytest.approx(first.eye_offset)

    def test_pupil_on_sight_line(self):
        """Each pupil lies on the geodesic from its eye to the peer."""
        first, second = make_pair()
        first.realign()
        target = second.body.center
        inset = first.eyes[0].radius - first.eyes[2].radius / 2
        for eye, pupil in ((first.eyes[0], first.eyes[2]), (first.eyes[1], first.eyes[3])):
            e = eye.center
            p = pupil.center
            assert e.distance_to(p) == pytest.approx(inset, abs=1e-9)
            assert e.distance_to(target) == pytest.approx(
                e.distance_to(p) + p.distance_to(target), abs=1e-8)

    def test_realign_is_stateless(self):
        """Two realigns in a row give identical satellites."""
        first, _ = make_pair()
        first.realign()
        before = [d.vertices.copy() for d in first.satellites]
        first.realign()
        for old, disk in zip(before, first.satellites):
            np.testing.assert_array_equal(old, disk.vertices)

    def test_realign_does_not_touch_peer(self):
        """The peer's body is read, never written."""
        first, second = make_pair()
        before = second.body.center
        first.realign()
        after = second.body.center
        np.testing.assert_array_equal(before.position, after.position)
        np.testing.assert_array_equal(before.direction, after.direction)

    def test_gaze_follows_peer(self):
        """Moving the peer re-aims the eyes on the next realign."""
        first, second = make_pair()
        first.realign()
        second.rotate_left(math.pi)
        second.move_forward(2.0)
        first.realign()
        for i in range(4):
            assert gaze_error(first, i) < 1e-6

    def test_coincident_peer_falls_back(self):
        """A peer sitting exactly on an eye leaves finite, rim-facing pupils."""
        first, second = make_pair()
        first.realign()
        squatter = AlignedEntity(GREEN, name="squatter", samples=12,
                                 start=first.eyes[0].center)
        first.set_peer(squatter)
        first.realign()
        for disk in first.satellites:
            assert np.all(np.isfinite(disk.vertices))

    def test_realign_off_origin(self):
        """Gaze stays exact for bodies far from the disk center."""
        first, second = make_pair()
        first.rotate_left(2.0)
        first.move_forward(1.5)
        second.move_forward(0.7)
        first.realign()
        second.realign()
        for entity in (first, second):
            for i in range(4):
                assert gaze_error(entity, i) < 1e-6


class TestMotion:
    """Test motion delegation and trail growth."""

    def test_move_and_trail(self):
        """Forward motion moves the body and the trail records it."""
        first, _ = make_pair()
        first.move_forward(0.5)
        first.append_trail_point()
        assert first.position[1] == pytest.approx(math.tanh(0.25))
        assert len(first.trail) == 1
        assert first.trail.last == pytest.approx(first.position)

    def test_backward_and_rotation(self):
        """Backward motion after a left turn heads toward +x."""
        first, _ = make_pair()
        first.rotate_left(math.pi / 2)
        first.move_backward(1.0)
        assert first.position[0] == pytest.approx(math.tanh(0.5))


class TestMouthOscillator:
    """Test the breathing state machine."""

    def test_closes_then_opens(self):
        """From the maximum, 20 ticks close and 20 more reopen."""
        osc = MouthOscillator(0.1, 0.005)
        for _ in range(20):
            osc.tick()
        assert osc.radius == 0.0
        assert osc.closing is False
        for _ in range(20):
            osc.tick()
        assert osc.radius == 0.1
        assert osc.closing is True

    def test_stays_in_bounds(self):
        """The radius never leaves [0, maximum]."""
        osc = MouthOscillator(0.1, 0.007)
        for _ in range(1000):
            r = osc.tick()
            assert 0.0 <= r <= 0.1

    def test_breathe_updates_mouth(self):
        """breathe() feeds the oscillator radius to the mouth disk."""
        first, _ = make_pair()
        radius = first.breathe()
        assert radius == pytest.approx(0.095)
        assert first.mouth.radius == radius

    def test_invalid_oscillator(self):
        """Non-positive bounds or steps are rejected."""
        with pytest.raises(ValueError):
            MouthOscillator(0.0, 0.005)
        with pytest.raises(ValueError):
            MouthOscillator(0.1, -0.005)


class TestDraw:
    """Test draw order and contents."""

    def test_draw_order(self):
        """Trail, body, mouth, then the four eye disks."""
        first, _ = make_pair()
        first.move_forward(0.1)
        first.append_trail_point()
        target = RecordingRenderer()
        first.draw(target)
        kinds = [c.primitive for c in target.calls]
        assert kinds == ["line_strip"] + ["triangle_fan"] * 6
        assert target.fans[0].color == RED
        assert target.fans[1].color == Color(0.0, 0.0, 0.0)

    def test_draw_without_trail(self):
        """An entity that never moved draws six fans and no strip."""
        first, _ = make_pair()
        target = RecordingRenderer()
        first.draw(target)
        assert len(target.fans) == 6
        assert target.strips == []
