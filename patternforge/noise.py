"""Procedural noise for terrain, contour, flow and gradient effects.

All functions take scalars or numpy arrays and broadcast. Lattice values come
from an integer hash with explicit 32-bit wraparound, so the field is
bit-identical across platforms (no reliance on libm ``sin``).
"""

import numpy as np

_MASK32 = np.uint64(0xFFFFFFFF)


def _fade(t):
    """Smoothstep: 3t^2 - 2t^3."""
    return t * t * (3.0 - 2.0 * t)


def _fade_quintic(t):
    """Perlin fade function: 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6 - 15) + 10)


def _to_u32(values):
    return (np.asarray(values, dtype=np.int64) & 0xFFFFFFFF).astype(np.uint64)


def hash_2d(ix, iy, seed):
    """Hash integer lattice coordinates to floats in [0, 1).

    Args:
        ix, iy: Integer lattice coordinates (scalars or arrays).
        seed: Integer seed selecting an independent lattice.

    Returns:
        Array of floats in [0, 1), broadcast from the inputs.
    """
    h = (_to_u32(ix) * np.uint64(374761393)
         + _to_u32(iy) * np.uint64(668265263)
         + _to_u32(seed) * np.uint64(362437)) & _MASK32
    # murmur3 finalizer
    h ^= h >> np.uint64(16)
    h = (h * np.uint64(0x85EBCA6B)) & _MASK32
    h ^= h >> np.uint64(13)
    h = (h * np.uint64(0xC2B2AE35)) & _MASK32
    h ^= h >> np.uint64(16)
    return h.astype(np.float64) / 4294967296.0


def smooth_noise(x, y, seed, quintic=False):
    """Value noise: lattice hashes blended with a smoothstep weight."""
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    x0 = np.floor(x)
    y0 = np.floor(y)
    fade = _fade_quintic if quintic else _fade
    sx = fade(x - x0)
    sy = fade(y - y0)

    xi = x0.astype(np.int64)
    yi = y0.astype(np.int64)
    n00 = hash_2d(xi, yi, seed)
    n10 = hash_2d(xi + 1, yi, seed)
    n01 = hash_2d(xi, yi + 1, seed)
    n11 = hash_2d(xi + 1, yi + 1, seed)

    nx0 = n00 + sx * (n10 - n00)
    nx1 = n01 + sx * (n11 - n01)
    return nx0 + sy * (nx1 - nx0)


def fractal_noise(x, y, seed, octaves=4, quintic=False):
    """Multi-octave value noise normalized to [0, 1].

    Octave ``i`` samples at frequency ``2**i`` with amplitude ``0.5**i``
    and seed ``seed + 100 * i``.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    value = np.zeros(np.broadcast(x, y).shape, dtype=np.float64)
    amplitude = 1.0
    frequency = 1.0
    total_amplitude = 0.0

    for i in range(max(1, int(octaves))):
        value += amplitude * smooth_noise(x * frequency, y * frequency,
                                          seed + i * 100, quintic=quintic)
        total_amplitude += amplitude
        amplitude *= 0.5
        frequency *= 2.0

    return value / total_amplitude


def fractal_noise_grid(height, width, scale, seed, octaves=4,
                       quintic=False):
    """Sample ``fractal_noise`` on a (height, width) grid.

    Grid position (row, col) maps to noise coordinates
    ``(col / width * scale, row / height * scale)``.

    Returns:
        Array of shape (height, width) with values in [0, 1].
    """
    xs = np.arange(width, dtype=np.float64) / max(width, 1) * scale
    ys = np.arange(height, dtype=np.float64) / max(height, 1) * scale
    return fractal_noise(xs[np.newaxis, :], ys[:, np.newaxis], seed,
                         octaves=octaves, quintic=quintic)
