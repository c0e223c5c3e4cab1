"""Tests for the layered terrain renderer."""

import numpy as np
import pytest

PALETTE = {"colors": ["#264653", "#2A9D8F", "#E9C46A", "#F4A261"],
           "background": "#FAF3E0"}


def test_skyline_shape_and_amplitude():
    from patternforge.terrain import skyline
    xs, ys = skyline(400, 100.0, 20.0, 2.0, seed=5)
    assert len(xs) == len(ys) == 301
    assert xs[0] == 0 and xs[-1] == 400
    assert np.all(np.abs(ys - 100.0) <= 20.0)


def test_stamped_peaks_only_rise():
    from patternforge.prng import Prng
    from patternforge.terrain import skyline, stamp_peaks
    xs, ys = skyline(400, 100.0, 20.0, 2.0, seed=5)
    peaked = stamp_peaks(xs, ys, 400, 20.0, Prng(1), 4)
    assert np.all(peaked <= ys)
    assert (peaked < ys - 10).any()


def test_vertical_gradient_endpoints():
    from patternforge.terrain import vertical_gradient
    grad = vertical_gradient(3, 5, (0, 0, 0), (100, 200, 40))
    assert grad.shape == (5, 3, 3)
    np.testing.assert_allclose(grad[0, 0], [0, 0, 0])
    np.testing.assert_allclose(grad[-1, 2], [100, 200, 40])


def test_nearest_layer_is_drawn_last():
    """The bottom rows belong to the last (front) layer color."""
    from patternforge import generate
    arr = np.array(generate("terrain:mountainsNoSun", seed=3, palette=PALETTE,
                            width=120, height=90, complexity=0.5))
    bottom = arr[-1, :, :3]
    assert (bottom == (244, 162, 97)).all()


def test_sky_starts_at_background():
    from patternforge import generate
    arr = np.array(generate("terrain:mountainsNoSun", seed=3, palette=PALETTE,
                            width=120, height=90, complexity=0.5))
    np.testing.assert_array_equal(arr[0, 0, :3], (250, 243, 224))


def test_aurora_sky_is_dark():
    from patternforge import generate
    arr = np.array(generate("terrain:aurora", seed=3, palette=PALETTE,
                            width=120, height=90, complexity=0.5))
    assert arr[:10, :, :3].mean() < 120


def test_reflection_mirrors_below_horizon():
    from patternforge import generate
    arr = np.array(generate("terrain:reflection", seed=9, palette=PALETTE,
                            width=160, height=100, complexity=0.5))
    above = arr[:60, :, :3]
    below = arr[60:, :, :3]
    assert not np.array_equal(above[::-1][:40], below)
    # Water is darker than the sky on average.
    assert below.mean() < above[:20].mean()


@pytest.mark.parametrize("variant", ["mountains", "dunes", "waves", "peaks",
                                     "aurora", "reflection"])
def test_progress_per_layer(variant):
    from patternforge import generate
    events = []
    generate(f"terrain:{variant}", seed=1, palette=PALETTE, width=48,
             height=48, on_progress=events.append)
    expected = 3 if variant == "aurora" else 4
    assert [e.done for e in events] == list(range(1, expected + 1))
