"""
tests/test_ripple.py - Tests for core/ripple.py

Radius and amplitude as pure functions of age, lifetime, damping and the
shape descriptors produced by each action style.
"""

import math
import random

import pytest

from core.catalog import ActionKind
from core.ripple import Ripple, MICRO_COUNT, MICRO_DIST_MIN, MICRO_DIST_MAX
from core.shapes import Ring, Polyline, Segment


def make(kind, pos=(500.0, 400.0), spawn=0.0, seed=7):
    return Ripple(pos, kind, spawn, rng=random.Random(seed))


class TestLifetime:
    """advance() updates age and reports whether the ripple is alive."""

    def test_alive_before_lifespan(self):
        r = make(ActionKind.POSITIVE)
        assert r.advance(2999) is True
        assert r.age_ms == 2999

    def test_dead_at_lifespan(self):
        """A ripple whose age reaches its lifespan is dead."""
        r = make(ActionKind.POSITIVE)
        assert r.advance(3000) is False

    def test_age_never_negative(self):
        """A clock reading before the spawn time clamps age to zero."""
        r = make(ActionKind.NEGATIVE, spawn=1000.0)
        assert r.advance(900) is True
        assert r.age_ms == 0.0

    def test_copies_profile_values(self):
        r = make(ActionKind.SILENCE_COMMENT)
        assert r.lifespan_ms == 3500
        assert r.max_radius == 250
        assert r.tint == (50, 50, 80, 120)


class TestRadius:
    """current_radius = min(progress * speed * 50, max_radius)."""

    def test_zero_at_spawn(self):
        r = make(ActionKind.POSITIVE)
        r.advance(0)
        assert r.current_radius() == 0.0

    def test_positive_midlife(self):
        r = make(ActionKind.POSITIVE)
        r.advance(1500)
        assert r.current_radius() == pytest.approx(87.5)

    def test_silence_radius(self):
        r = make(ActionKind.SILENCE_COMMENT)
        r.advance(2800)
        assert r.current_radius() == pytest.approx(100.0)

    def test_capped_by_max_radius(self):
        r = Ripple((0, 0), ActionKind.POSITIVE, 0, radius_scale=1000.0)
        r.advance(2000)
        assert r.current_radius() == 400

    def test_monotonic(self):
        r = make(ActionKind.NOISE_COMMENT)
        previous = -1.0
        for t in range(0, 2500, 100):
            r.advance(t)
            assert r.current_radius() >= previous
            previous = r.current_radius()


class TestAmplitude:
    """Exponential decay with radius plus a linear fade with age."""

    def test_base_amplitude_at_spawn(self):
        r = make(ActionKind.POSITIVE)
        r.advance(0)
        assert r.current_amplitude() == pytest.approx(1.0)

    def test_positive_formula(self):
        r = make(ActionKind.POSITIVE)
        r.advance(1500)
        expected = 1.0 * 0.95 ** (87.5 / 10) * (1 - 0.5 * 0.7)
        assert r.current_amplitude() == pytest.approx(expected)

    def test_negative_droop(self):
        """At a quarter of its life the NEGATIVE droop factor is 0.9."""
        r = make(ActionKind.NEGATIVE)
        r.advance(1000)
        radius = 0.25 * 2.0 * 50
        expected = 0.8 * 0.92 ** (radius / 10) * 0.9 * (1 - 0.25 * 0.7)
        assert r.current_amplitude() == pytest.approx(expected)

    def test_never_increases_with_age(self):
        """Only the NEGATIVE droop may lift amplitude; every other kind fades monotonically."""
        for kind in (ActionKind.POSITIVE, ActionKind.NOISE_COMMENT, ActionKind.SILENCE_COMMENT):
            r = make(kind)
            previous = None
            for t in range(0, r.lifespan_ms, 10):
                r.advance(t)
                amp = r.current_amplitude()
                if previous is not None:
                    assert amp <= previous + 1e-12, f"{kind.name} rose at {t} ms"
                previous = amp

    def test_negative_droop_within_ten_percent(self):
        """Over the whole lifespan the droop stays within 10% of the plain decay curve."""
        r = make(ActionKind.NEGATIVE)
        for t in range(0, r.lifespan_ms, 10):
            r.advance(t)
            p = r.progress()
            plain = r.base_amplitude * r.damping ** (r.current_radius() / 10) * (1 - p * 0.7)
            amp = r.current_amplitude()
            assert plain * 0.9 - 1e-12 <= amp <= plain * 1.1 + 1e-12, f"out of band at {t} ms"

    def test_repeat_calls_identical(self):
        """Radius and amplitude depend only on age: repeated reads agree."""
        for kind in ActionKind:
            r = make(kind)
            for t in range(0, r.lifespan_ms, 50):
                r.advance(t)
                assert r.current_radius() == r.current_radius()
                assert r.current_amplitude() == r.current_amplitude()
                r.advance(t)
                radius, amp = r.current_radius(), r.current_amplitude()
                assert (radius, amp) == (r.current_radius(), r.current_amplitude())

    def test_never_negative(self):
        for kind in ActionKind:
            r = make(kind)
            for t in range(0, 4000, 50):
                if not r.advance(t):
                    break
                assert r.current_amplitude() >= 0.0


class TestDamping:
    """Only SILENCE_COMMENT absorbs nearby ripples."""

    def test_silence_damps_within_one_and_a_half_radius(self):
        silence = make(ActionKind.SILENCE_COMMENT, pos=(500, 400))
        silence.advance(2800)
        near = make(ActionKind.POSITIVE, pos=(649, 400))
        far = make(ActionKind.POSITIVE, pos=(651, 400))
        assert silence.should_damp(near) is True
        assert silence.should_damp(far) is False

    def test_other_kinds_never_damp(self):
        other = make(ActionKind.POSITIVE, pos=(501, 400))
        for kind in (ActionKind.POSITIVE, ActionKind.NEGATIVE, ActionKind.NOISE_COMMENT):
            r = make(kind)
            r.advance(1000)
            assert r.should_damp(other) is False

    def test_does_not_damp_itself(self):
        silence = make(ActionKind.SILENCE_COMMENT)
        silence.advance(2000)
        assert silence.should_damp(silence) is False

    def test_zero_radius_damps_nothing(self):
        silence = make(ActionKind.SILENCE_COMMENT)
        silence.advance(0)
        assert silence.should_damp(make(ActionKind.POSITIVE)) is False


class TestMicroRipples:
    """NOISE_COMMENT carries 15 micro-ripples around its center."""

    def test_only_noise_has_micro_ripples(self):
        assert len(make(ActionKind.NOISE_COMMENT).micro_ripples) == MICRO_COUNT
        for kind in (ActionKind.POSITIVE, ActionKind.NEGATIVE, ActionKind.SILENCE_COMMENT):
            assert make(kind).micro_ripples == ()

    def test_micro_distance_range(self):
        r = make(ActionKind.NOISE_COMMENT, seed=3)
        for micro in r.micro_ripples:
            dist = math.hypot(micro.offset_x, micro.offset_y)
            assert MICRO_DIST_MIN - 1e-9 <= dist <= MICRO_DIST_MAX + 1e-9
            assert -100 <= micro.start_offset_ms <= 100
            assert 30 <= micro.radius <= 60

    def test_micro_position_is_relative(self):
        r = make(ActionKind.NOISE_COMMENT, pos=(100, 200))
        micro = r.micro_ripples[0]
        assert r.micro_position(micro) == (100 + micro.offset_x, 200 + micro.offset_y)

    def test_same_seed_same_micro_ripples(self):
        a = make(ActionKind.NOISE_COMMENT, seed=11)
        b = make(ActionKind.NOISE_COMMENT, seed=11)
        assert a.micro_ripples == b.micro_ripples


class TestRender:
    """Shape descriptors per action style."""

    def test_nothing_at_zero_radius(self):
        r = make(ActionKind.POSITIVE)
        r.advance(0)
        assert r.render() == []

    def test_nothing_at_zero_amplitude_scale(self):
        r = make(ActionKind.POSITIVE)
        r.advance(1500)
        assert r.render(0.0) == []

    def test_positive_five_rings_bright_outer(self):
        r = make(ActionKind.POSITIVE)
        r.advance(1500)
        shapes = r.render()
        assert len(shapes) == 5
        assert all(isinstance(s, Ring) for s in shapes)
        assert shapes[0].width == 3.0
        assert shapes[0].radius == pytest.approx(87.5)
        assert shapes[1].radius == pytest.approx(72.5)
        # Outer ring is brighter (+50 per channel)
        assert shapes[0].color[:3] == (150.0, 250.0, 255.0)

    def test_inner_rings_skip_when_radius_small(self):
        r = make(ActionKind.POSITIVE)
        r.advance(300)  # radius 17.5 -> only the rings at 17.5 and 2.5
        assert len(r.render()) == 2

    def test_negative_closed_polylines(self):
        r = make(ActionKind.NEGATIVE)
        r.advance(2000)  # radius 50 -> rings at 50, 30, 10
        shapes = r.render()
        assert len(shapes) == 3
        for s in shapes:
            assert isinstance(s, Polyline)
            assert s.closed is True
            assert len(s.points) == 63

    def test_noise_has_sparkles(self):
        r = make(ActionKind.NOISE_COMMENT)
        r.advance(500)
        segments = [s for s in r.render() if isinstance(s, Segment)]
        assert len(segments) == 8

    def test_noise_micro_ripples_fade_out(self):
        """After the micro lifetime plus the largest offset no micro ring remains."""
        r = make(ActionKind.NOISE_COMMENT)
        r.advance(1500)
        rings = [s for s in r.render() if isinstance(s, Ring)]
        assert len(rings) == 3

    def test_silence_two_faint_rings(self):
        r = make(ActionKind.SILENCE_COMMENT)
        r.advance(2800)
        shapes = r.render()
        assert len(shapes) == 2
        assert all(s.width == 1.0 for s in shapes)

    def test_amplitude_scale_dims_alpha(self):
        r = make(ActionKind.POSITIVE)
        r.advance(1500)
        full = r.render()
        dim = r.render(0.3)
        assert dim[1].color[3] == pytest.approx(full[1].color[3] * 0.3)

    def test_colors_stay_in_range(self):
        for kind in ActionKind:
            r = make(kind)
            r.advance(400)
            for s in r.render():
                assert all(0.0 <= c <= 255.0 for c in s.color)
