"""Tests for the lattice-hash noise field."""

import numpy as np
import pytest


def test_hash_range_and_determinism():
    from patternforge.noise import hash_2d
    ix, iy = np.meshgrid(np.arange(-50, 50), np.arange(-50, 50))
    h1 = hash_2d(ix, iy, 42)
    h2 = hash_2d(ix, iy, 42)
    np.testing.assert_array_equal(h1, h2)
    assert h1.min() >= 0.0
    assert h1.max() < 1.0
    assert abs(h1.mean() - 0.5) < 0.05


def test_hash_depends_on_seed():
    from patternforge.noise import hash_2d
    ix = np.arange(100)
    assert not np.array_equal(hash_2d(ix, 0, 1), hash_2d(ix, 0, 2))


def test_smooth_noise_matches_lattice_at_integers():
    from patternforge.noise import hash_2d, smooth_noise
    xs = np.arange(-5, 5, dtype=float)
    np.testing.assert_allclose(smooth_noise(xs, 3.0, 7),
                               hash_2d(xs.astype(int), 3, 7))


def test_scalar_input():
    from patternforge.noise import fractal_noise
    value = fractal_noise(0.3, 0.7, 5)
    assert 0.0 <= float(value) <= 1.0


@pytest.mark.parametrize("octaves", [1, 3, 5])
def test_fractal_noise_range(octaves):
    from patternforge.noise import fractal_noise_grid
    field = fractal_noise_grid(64, 80, 6.0, 123, octaves=octaves)
    assert field.shape == (64, 80)
    assert field.min() >= 0.0
    assert field.max() <= 1.0


@pytest.mark.parametrize("quintic", [False, True])
@pytest.mark.parametrize("octaves", [1, 4])
def test_continuity_across_lattice(quintic, octaves):
    """Neighbouring samples differ by at most a multiple of the step."""
    from patternforge.noise import fractal_noise
    eps = 1e-4
    # Sweep across several integer lattice lines in both axes.
    xs = np.linspace(-3.0, 3.0, 2001)
    for y in (-1.0, 0.0, 0.5, 2.0):
        a = fractal_noise(xs, y, 17, octaves, quintic=quintic)
        b = fractal_noise(xs + eps, y, 17, octaves, quintic=quintic)
        c = fractal_noise(y, xs + eps, 17, octaves, quintic=quintic)
        d = fractal_noise(y, xs, 17, octaves, quintic=quintic)
        bound = 4 * octaves * eps
        assert np.abs(a - b).max() < bound
        assert np.abs(c - d).max() < bound


def test_octave_seeds_are_offset_by_100():
    from patternforge.noise import fractal_noise, smooth_noise
    x, y = 1.37, 2.91
    expected = (smooth_noise(x, y, 10) + 0.5 * smooth_noise(2 * x, 2 * y, 110)
                ) / 1.5
    np.testing.assert_allclose(fractal_noise(x, y, 10, octaves=2), expected)
