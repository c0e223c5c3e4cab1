"""Tests for the flow-field integrator."""

import math

import numpy as np
import pytest

VARIANTS = ["streamlines", "curl", "spiral", "converge", "turbulent",
            "radial", "magnetic"]


class ConstantField:
    """Every point flows in the same direction."""

    def __init__(self, theta, width=100, height=100):
        self.theta = theta
        self.width = width
        self.height = height

    def angle(self, x, y):
        return np.full_like(np.asarray(x, dtype=float), self.theta)


def test_settings_grow_with_complexity():
    from patternforge.flowfield import flow_settings
    previous = None
    for c in np.linspace(0.0, 1.0, 11):
        s = flow_settings(500, 400, 8, c)
        if previous is not None:
            assert s.particles >= previous.particles
            assert s.step >= previous.step
            assert s.max_steps >= previous.max_steps
        previous = s
    assert flow_settings(500, 400, 8, 0.0).max_steps == 40
    assert flow_settings(500, 400, 8, 1.0).max_steps == 200


def test_settings_scale_never_vanishes():
    from patternforge.flowfield import flow_settings
    assert flow_settings(400, 400, 1, 0.5).scale == pytest.approx(0.02 / 400)


def test_integrate_straight_line():
    from patternforge.flowfield import integrate
    xs, ys, lengths = integrate(ConstantField(0.0), np.array([10.0]),
                                np.array([50.0]), 2.0, 5)
    assert lengths.tolist() == [6]
    np.testing.assert_allclose(xs[:, 0], [10, 12, 14, 16, 18, 20])
    np.testing.assert_allclose(ys[:, 0], 50.0)


def test_integrate_stops_before_leaving():
    from patternforge.flowfield import integrate
    xs, ys, lengths = integrate(ConstantField(0.0), np.array([95.0, 10.0]),
                                np.array([50.0, 50.0]), 2.0, 10)
    # 95 -> 97 -> 99; the step to 101 leaves the canvas.
    assert lengths.tolist() == [3, 11]
    assert xs[:3, 0].tolist() == [95.0, 97.0, 99.0]
    assert xs[:, 0].max() <= 100


def test_integrate_particle_starting_at_edge():
    from patternforge.flowfield import integrate
    _, _, lengths = integrate(ConstantField(math.pi), np.array([0.0]),
                              np.array([5.0]), 1.0, 20)
    assert lengths.tolist() == [1]


@pytest.mark.parametrize("variant", VARIANTS)
def test_angles_are_finite(variant):
    from patternforge.flowfield import FlowField
    field = FlowField(variant, 200, 100, 0.4 / 200, 9,
                      attractors=[(0.2, 0.3), (0.8, 0.6), (0.5, 0.5)])
    ys, xs = np.mgrid[0:100:7, 0:200:7].astype(float)
    theta = field.angle(xs, ys)
    assert theta.shape == xs.shape
    assert np.isfinite(theta).all()


def test_converge_points_toward_lone_attractor():
    from patternforge.flowfield import FlowField
    field = FlowField("converge", 100, 100, 0.001, 1, attractors=[(0.5, 0.5)])
    theta = float(field.angle(np.array([10.0]), np.array([50.0]))[0])
    # Attractor is straight to the right; noise bends it by at most 0.3 rad.
    assert -0.01 <= theta <= 0.31


def test_particle_progress_count():
    from patternforge import generate
    from patternforge.flowfield import flow_settings
    events = []
    generate("flow", seed=6, width=96, height=80, grid_density=8,
             complexity=0.3, on_progress=events.append)
    expected = flow_settings(96, 80, 8, 0.3).particles
    assert len(events) == expected > 0
    assert all(e.stage == "particles" for e in events)


def test_trails_use_twice_the_particles():
    from patternforge import generate
    from patternforge.flowfield import flow_settings
    events = []
    generate("flow:particleTrails", seed=6, width=96, height=80,
             complexity=0.3, on_progress=events.append)
    assert len(events) == 2 * flow_settings(96, 80, 8, 0.3).particles


def test_tiny_canvas_is_background_only():
    from patternforge import generate
    img = np.array(generate("flow", seed=1, width=20, height=20,
                            palette={"colors": ["#000000"],
                                     "background": "#FFFFFF"}))
    assert (img[..., :3] == 255).all()
